#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: cas.py

import re
import base64
from .client import BaseClient
from .hook import get_hooks, merge_hooks, hooks_check_html, hooks_check_captcha, check_status_code
from .parser import get_login_ticket, get_cas_base_url, is_login_page_response
from .const import TronClassURL, CASForm, CAPTCHA_DATA_URL_PREFIX, CAPTCHA_CODE_PATTERN
from .exceptions import (
    LoginTicketNotFoundError,
    InvalidCaptchaCodeError,
    CASIncorrectPasswordError,
    OperationFailedError,
)
from .logger import ConsoleLogger

_regexCaptchaCode = re.compile(CAPTCHA_CODE_PATTERN)

cout = ConsoleLogger("cas")


def _hooks_check_login_result(r, **kwargs):
    if r.is_redirect:
        return
    if is_login_page_response(r.text):
        raise CASIncorrectPasswordError(response=r)


class CASClient(BaseClient):

    default_headers = {
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Encoding": "gzip, deflate, br",
        "Accept-Language": "zh-TW,zh;q=0.9,en-US;q=0.8,en;q=0.7",
        "Connection": "keep-alive",
    }

    def get_login_page(self, base_url, **kwargs):
        r = self._get(
            url=base_url + TronClassURL.LoginPage,
            hooks=hooks_check_html,
            **kwargs
        )
        return r

    def get_captcha(self, cas_base_url, **kwargs):
        r = self._get(
            url=cas_base_url + TronClassURL.CASCaptcha,
            headers={
                "Accept": "image/avif,image/webp,image/apng,image/*,*/*;q=0.8",
                "Referer": cas_base_url + TronClassURL.CASLoginPath,
            },
            hooks=hooks_check_captcha,
            **kwargs
        )
        return r

    def post_login(self, cas_base_url, username, password, captcha, lt, **kwargs):
        r = self._post(
            url=cas_base_url + TronClassURL.CASLogin,
            data={
                "username": username,
                "password": password,
                "captcha": captcha,
                "lt": lt,
                "execution": CASForm.Execution,
                "_eventId": CASForm.EventId,
                "submit": CASForm.SubmitLabel,
            },
            headers={
                "Content-Type": "application/x-www-form-urlencoded",
                "Origin": cas_base_url,
                "Referer": cas_base_url + TronClassURL.CASLoginPath,
            },
            hooks=merge_hooks(
                get_hooks(check_status_code),
                _hooks_check_login_result,
            ),
            allow_redirects=True,
            **kwargs
        )
        return r

    def request(self, method, url, **kwargs):
        return self._request(method, url, **kwargs)


class LoginAttempt(object):
    """
    Scratch state of one pass through the login protocol. Nothing here
    outlives the pass that created it.
    """

    __slots__ = ["lt", "cas_base_url", "captcha"]

    def __init__(self):
        self.lt = None
        self.cas_base_url = None
        self.captcha = None

    def __repr__(self):
        return "LoginAttempt(cas_base_url=%r, has_lt=%s, captcha=%r)" % (
            self.cas_base_url, self.lt is not None, self.captcha,
        )


def to_data_url(raw):
    return CAPTCHA_DATA_URL_PREFIX + base64.b64encode(raw).decode("ascii")

def is_valid_captcha_code(code):
    return isinstance(code, str) and _regexCaptchaCode.fullmatch(code) is not None


def perform_login_attempt(client, base_url, username, password, captcha_solver):
    """
    Run the CAS challenge/response once:

    1. GET the portal login page, follow it to the CAS realm and read the
       ``lt`` login ticket from the form
    2. GET the captcha image and hand it to ``captcha_solver`` as a data url
    3. POST the credentials and inspect the landing page

    Raises ``InvalidCaptchaCodeError`` for a malformed solver answer before any
    POST is made, ``CASIncorrectPasswordError`` when the portal sends us back to
    the login form, and whatever the transport or hooks raise otherwise.
    """
    attempt = LoginAttempt()

    r = client.get_login_page(base_url)
    attempt.cas_base_url = get_cas_base_url(r.url)

    attempt.lt = get_login_ticket(getattr(r, "_tree", None))
    if attempt.lt is None:
        raise LoginTicketNotFoundError(response=r)

    r = client.get_captcha(attempt.cas_base_url)
    if not r.content:
        raise OperationFailedError(msg="Empty captcha image", response=r)
    data_url = to_data_url(r.content)

    code = captcha_solver(data_url)
    if not is_valid_captcha_code(code):
        raise InvalidCaptchaCodeError(msg="Invalid captcha code %r. Must be 4 digits." % (code,))
    attempt.captcha = code

    cout.debug("Submit CAS login form to %s" % attempt.cas_base_url)
    r = client.post_login(attempt.cas_base_url, username, password, attempt.captcha, attempt.lt)
    return attempt, r
