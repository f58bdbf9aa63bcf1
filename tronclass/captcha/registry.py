#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: captcha/registry.py

from ..exceptions import RecognizerError
from .captcha import Captcha


class CaptchaRecognizer(object):
    name = None

    def recognize(self, raw):
        raise NotImplementedError


_REGISTRY = {}


def register_recognizer(cls):
    name = getattr(cls, "name", None)
    if not name:
        raise ValueError("Recognizer must define a non-empty 'name'")
    _REGISTRY[name] = cls
    return cls


def available_recognizers():
    return sorted(_REGISTRY)


def get_recognizer(name=None, **kwargs):
    name = (name or "").strip().lower()
    if not name:
        name = "baidu"
    cls = _REGISTRY.get(name)
    if cls is None:
        raise RecognizerError(msg="Unknown captcha provider: %s" % name)
    return cls(**kwargs)


@register_recognizer
class DummyRecognizer(CaptchaRecognizer):
    name = "dummy"

    def __init__(self, code="0000"):
        self._code = code

    def recognize(self, raw):
        return Captcha(self._code, self.name)
