#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: captcha/captcha.py


class Captcha(object):

    __slots__ = ["_code", "_provider"]

    def __init__(self, code, provider=None):
        self._code = code
        self._provider = provider

    @property
    def code(self):
        return self._code

    @property
    def provider(self):
        return self._provider

    def __repr__(self):
        return "Captcha(%r, provider=%r)" % (self._code, self._provider)
