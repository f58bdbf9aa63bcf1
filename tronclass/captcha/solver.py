#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: captcha/solver.py

import base64
import binascii
from ..exceptions import RecognizerError


def decode_data_url(data_url):
    """
    ``data:image/jpeg;base64,<payload>`` -> (mime_type, raw bytes)
    """
    if not data_url or not data_url.startswith("data:"):
        raise RecognizerError(msg="Not a data url")
    header, sep, payload = data_url[5:].partition(",")
    if not sep:
        raise RecognizerError(msg="Malformed data url")
    parts = header.split(";")
    if "base64" not in parts[1:]:
        raise RecognizerError(msg="Only base64 data urls are supported")
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise RecognizerError(msg="Invalid base64 payload in data url")
    return parts[0] or "application/octet-stream", raw


class RecognizerSolver(object):
    """
    Adapt a ``CaptchaRecognizer`` into the ``solver(data_url) -> str``
    callable taken by ``TronClassSession.login``.
    """

    def __init__(self, recognizer):
        self._recognizer = recognizer

    @property
    def recognizer(self):
        return self._recognizer

    def __call__(self, data_url):
        _, raw = decode_data_url(data_url)
        captcha = self._recognizer.recognize(raw)
        return "".join(ch for ch in (captcha.code or "") if not ch.isspace())
