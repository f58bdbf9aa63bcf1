#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: captcha/__init__.py

from .captcha import Captcha
from .registry import CaptchaRecognizer, DummyRecognizer, get_recognizer, available_recognizers
from .online import BaiduOCRRecognizer
from .solver import RecognizerSolver, decode_data_url

__all__ = [
    "Captcha",
    "CaptchaRecognizer",
    "DummyRecognizer",
    "BaiduOCRRecognizer",
    "RecognizerSolver",
    "get_recognizer",
    "available_recognizers",
    "decode_data_url",
]
