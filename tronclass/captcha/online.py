#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: captcha/online.py

import os
import time
import base64
from io import BytesIO
from urllib.parse import quote_plus

import requests
from PIL import Image

from .captcha import Captcha
from .registry import CaptchaRecognizer, register_recognizer
from ..exceptions import OperationFailedError, OperationTimeoutError, RecognizerError

_TOKEN_URL = "https://aip.baidubce.com/oauth/2.0/token"
_OCR_URL = "https://aip.baidubce.com/rest/2.0/ocr/v1/numbers"


def get_access_token(api_key, secret_key, timeout, session=None):
    """
    使用 AK，SK 生成鉴权签名（Access Token）
    :return: (access_token, expires_in)
    """
    if not api_key or not secret_key:
        raise RecognizerError(
            msg="Baidu OCR keys not configured. Set [captcha] baidu_api_key/baidu_secret_key "
                "or environment variables BAIDU_OCR_API_KEY/BAIDU_OCR_SECRET_KEY."
        )
    params = {"grant_type": "client_credentials", "client_id": api_key, "client_secret": secret_key}
    sess = session or requests
    try:
        resp = sess.post(_TOKEN_URL, params=params, timeout=timeout)
    except requests.Timeout:
        raise OperationTimeoutError(msg="Recognizer connection time out")
    except requests.ConnectionError:
        raise OperationFailedError(msg="Unable to connect to the recognizer")
    except requests.RequestException as e:
        raise OperationFailedError(msg="Recognizer request failed: %s" % e)
    try:
        data = resp.json()
    except ValueError:
        raise RecognizerError(msg="Recognizer ERROR: Invalid JSON response")
    token = data.get("access_token")
    if not token:
        msg = data.get("error_msg") or data.get("error_description") or "Unable to obtain access token"
        raise RecognizerError(msg="Recognizer ERROR: %s" % msg)
    return token, data.get("expires_in")


def to_jpeg_b64(raw):
    # CAS serves a jpeg, but normalise anyway so the OCR api always sees one format
    try:
        im = Image.open(BytesIO(raw))
    except (OSError, ValueError):
        raise RecognizerError(msg="Recognizer ERROR: Unreadable captcha image")
    if getattr(im, "is_animated", False):
        im.seek(im.n_frames - 1)
    buffer = BytesIO()
    im.convert("RGB").save(buffer, format="JPEG")
    return base64.b64encode(buffer.getvalue()).decode("utf-8")


@register_recognizer
class BaiduOCRRecognizer(CaptchaRecognizer):
    name = "baidu"

    def __init__(self, api_key=None, secret_key=None, timeout=10.0, session=None):
        self._api_key = api_key or os.getenv("BAIDU_OCR_API_KEY")
        self._secret_key = secret_key or os.getenv("BAIDU_OCR_SECRET_KEY")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._access_token = None
        self._access_token_expire_at = 0

    def _refresh_token(self):
        token, expires_in = get_access_token(
            self._api_key,
            self._secret_key,
            self._timeout,
            session=self._session,
        )
        self._access_token = token
        try:
            expires_in = int(expires_in)
        except (TypeError, ValueError):
            expires_in = 0
        if expires_in > 60:
            self._access_token_expire_at = time.time() + expires_in - 60
        else:
            self._access_token_expire_at = time.time() + 3600

    def _ensure_token(self):
        if not self._access_token or time.time() >= self._access_token_expire_at:
            self._refresh_token()

    def recognize(self, raw):
        self._ensure_token()

        payload = "image=" + quote_plus(to_jpeg_b64(raw))
        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            "Accept": "application/json",
        }
        try:
            response = self._session.post(
                _OCR_URL,
                params={"access_token": self._access_token},
                headers=headers,
                data=payload.encode("utf-8"),
                timeout=self._timeout,
            )
        except requests.Timeout:
            raise OperationTimeoutError(msg="Recognizer connection time out")
        except requests.ConnectionError:
            raise OperationFailedError(msg="Unable to connect to the recognizer")
        except requests.RequestException as e:
            raise OperationFailedError(msg="Recognizer request failed: %s" % e)

        try:
            result = response.json()
        except ValueError:
            raise RecognizerError(msg="Recognizer ERROR: Invalid JSON response")

        if "error_code" in result:
            raise RecognizerError(msg="Recognizer ERROR: %s" % result.get("error_msg"))

        words = result.get("words_result") or []
        if len(words) == 0:
            raise RecognizerError(msg="Recognizer ERROR: Empty result")
        return Captcha(words[0].get("words", ""), self.name)
