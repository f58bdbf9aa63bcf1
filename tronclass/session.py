#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: session.py

import time
import random
import threading
from collections import namedtuple

from .cas import CASClient, perform_login_attempt
from .state import (
    UNAUTHENTICATED,
    is_authenticated,
    begin_login,
    login_succeeded,
    login_failed,
    expire,
)
from .parser import is_redirected_to_cas
from .environ import Environ
from .logger import ConsoleLogger, FileLogger
from .utils import mask_secret
from .const import (
    DEFAULT_FETCHER_RPM,
    DEFAULT_LOGIN_MAX_ATTEMPTS,
    DEFAULT_LOGIN_BACKOFF_BASE,
    DEFAULT_LOGIN_BACKOFF_FACTOR,
    DEFAULT_LOGIN_BACKOFF_MAX,
    DEFAULT_LOGIN_BACKOFF_JITTER,
)
from .exceptions import (
    UserInputException,
    BaseUrlNotSetError,
    NotLoggedInError,
    ReauthenticationError,
    RateLimitError,
    InvalidCaptchaCodeError,
    CASIncorrectPasswordError,
)

environ = Environ()
cout = ConsoleLogger("session")
ferr = FileLogger("session.error")  # session 的子日志，同步输出到 console


class LoginResult(namedtuple("LoginResult", ["success", "message"])):
    __slots__ = ()


def _compute_backoff(attempt, base, factor, max_sleep, jitter):
    """ sleep before the ``attempt``-th retry (1-based) """
    if attempt <= 0 or base <= 0:
        return 0.0
    t = min(max_sleep, base * factor ** (attempt - 1))
    if jitter > 0:
        t *= 1.0 + (random.random() * 2 - 1) * jitter
    return max(0.0, t)


class TronClassSession(object):
    """
    One logical TronClass session: a cookie jar, a rate limiter and the
    authentication state that ``call`` relies on.

    ``login`` never raises for expected authentication outcomes, it returns a
    ``LoginResult``. ``call`` raises for configuration misuse
    (``BaseUrlNotSetError``, ``NotLoggedInError``), for a failed silent
    re-authentication (``ReauthenticationError``) and when the rate limiter
    rejects a request (``RateLimitError``).
    """

    def __init__(self, base_url=None, fetcher_rpm=DEFAULT_FETCHER_RPM,
                 max_attempts=DEFAULT_LOGIN_MAX_ATTEMPTS,
                 backoff_base=DEFAULT_LOGIN_BACKOFF_BASE,
                 backoff_factor=DEFAULT_LOGIN_BACKOFF_FACTOR,
                 backoff_max=DEFAULT_LOGIN_BACKOFF_MAX,
                 backoff_jitter=DEFAULT_LOGIN_BACKOFF_JITTER,
                 reauth_on_expiry=False, timeout=None, user_agent=None, client=None):

        if client is None:
            client = CASClient(timeout=timeout, user_agent=user_agent)
        self._client = client
        self.fetcher_rpm = fetcher_rpm

        max_attempts = int(max_attempts)
        if max_attempts < 1:
            raise UserInputException("max_attempts must be positive, not %r" % max_attempts)
        self._max_attempts = max_attempts
        self._backoff_base = max(0.0, float(backoff_base))
        self._backoff_factor = max(1.0, float(backoff_factor))
        self._backoff_max = max(0.0, float(backoff_max))
        self._backoff_jitter = min(0.99, max(0.0, float(backoff_jitter)))
        self._reauth_on_expiry = bool(reauth_on_expiry)

        self._base_url = None
        self._username = None
        self._password = None
        self._captcha_solver = None
        self._state = UNAUTHENTICATED
        self._login_lock = threading.RLock()

        if base_url is not None:
            self.set_base_url(base_url)

    @classmethod
    def from_config(cls, config, **kwargs):
        kwargs.setdefault("base_url", config.base_url)
        kwargs.setdefault("fetcher_rpm", config.fetcher_rpm)
        kwargs.setdefault("max_attempts", config.login_max_attempts)
        kwargs.setdefault("backoff_base", config.login_backoff_base)
        kwargs.setdefault("backoff_factor", config.login_backoff_factor)
        kwargs.setdefault("backoff_max", config.login_backoff_max)
        kwargs.setdefault("backoff_jitter", config.login_backoff_jitter)
        kwargs.setdefault("reauth_on_expiry", config.reauth_on_expiry)
        kwargs.setdefault("timeout", config.client_timeout)
        kwargs.setdefault("user_agent", config.user_agent)
        return cls(**kwargs)

    def __repr__(self):
        return "<%s base_url=%r username=%r password=%r state=%s>" % (
            self.__class__.__name__,
            self._base_url,
            self._username,
            mask_secret(self._password),
            self._state.name,
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    ## Properties

    @property
    def base_url(self):
        return self._base_url

    @property
    def client(self):
        return self._client

    @property
    def fetcher_rpm(self):
        return self._client.limiter.rpm

    @fetcher_rpm.setter
    def fetcher_rpm(self, value):
        self._client.limiter.rpm = value

    @property
    def max_attempts(self):
        return self._max_attempts

    @property
    def state(self):
        return self._state

    @property
    def authenticated(self):
        return is_authenticated(self._state)

    @property
    def has_credentials(self):
        return bool(self._username and self._password)

    ## Configuration

    def set_base_url(self, url):
        if not url or not isinstance(url, str):
            raise UserInputException("Invalid base url: %r" % (url,))
        url = url.strip().rstrip("/")
        with self._login_lock:
            if self._base_url is not None and url != self._base_url:
                cout.warning("Base URL changed to %s, dropping current session" % url)
                self._state = expire(self._state)
                self._client.clear_cookies()
            self._base_url = url

    def invalidate(self):
        """ Forget the server-side session; the next ``call`` logs in again. """
        with self._login_lock:
            self._state = expire(self._state)

    def close(self):
        self._client.close()

    ## Login

    def login(self, username, password, captcha_solver):
        if not username or not password:
            return LoginResult(False, "Username and password must be provided.")
        if not self._base_url:
            return LoginResult(False, "Base URL is not set. Please call set_base_url first.")
        if captcha_solver is None:
            return LoginResult(False, "Captcha solver must be provided to solve captcha.")

        with self._login_lock:
            self._username = username
            self._password = password
            self._captcha_solver = captcha_solver
            self._state = begin_login(self._state)

            try:
                result = self._run_login_flow(username, password, captcha_solver)
            except BaseException:
                self._state = login_failed(self._state)
                raise

            if result.success:
                self._state = login_succeeded(self._state, time.time())
            else:
                self._state = login_failed(self._state)
            return result

    def _run_login_flow(self, username, password, captcha_solver):
        max_attempts = self._max_attempts

        for attempt in range(max_attempts):

            if attempt > 0:
                t = _compute_backoff(
                    attempt,
                    self._backoff_base,
                    self._backoff_factor,
                    self._backoff_max,
                    self._backoff_jitter,
                )
                if t > 0:
                    cout.info("Login retry sleep %.2f s" % t)
                    time.sleep(t)

            environ.stat_inc("login_attempt")
            cout.info("Try to login CAS (user: %s, attempt: %d/%d)" % (username, attempt + 1, max_attempts))

            try:
                perform_login_attempt(self._client, self._base_url, username, password, captcha_solver)

            except RateLimitError as e:
                environ.stat_inc("rate_limit_reject")
                cout.warning("Login aborted by rate limiter: %s" % e)
                raise

            except InvalidCaptchaCodeError as e:
                ferr.error(e)
                environ.stat_inc("login_bad_captcha")
                return LoginResult(False, InvalidCaptchaCodeError.desc)

            except CASIncorrectPasswordError as e:
                environ.stat_inc("login_rejected")
                if attempt < max_attempts - 1:
                    cout.warning(
                        "Login attempt %d rejected for %s: %s. Retrying..."
                        % (attempt + 1, username, e)
                    )
                    continue
                ferr.error("Max retries reached! Login rejected for %s" % username)
                return LoginResult(False, CASIncorrectPasswordError.desc)

            except Exception as e:
                environ.stat_inc("login_error")
                if attempt < max_attempts - 1:
                    cout.warning(
                        "Login attempt %d encountered an error for %s: %s. Retrying..."
                        % (attempt + 1, username, e)
                    )
                    continue
                ferr.exception(
                    "Max retries reached! Login failed for %s: %s" % (username, e)
                )
                return LoginResult(False, "Login failed after multiple attempts: %s" % e)

            else:
                environ.stat_inc("login_success")
                cout.info("Login successful for user: %s" % username)
                return LoginResult(True, "Login successful.")

        return LoginResult(False, "Login process completed without success or clear failure message.")

    ## Authenticated calls

    def _ensure_authenticated(self):
        if is_authenticated(self._state):
            return
        with self._login_lock:
            if is_authenticated(self._state):
                return  # re-authenticated by a concurrent caller
            if not self.has_credentials or self._captcha_solver is None:
                raise NotLoggedInError()
            cout.warning("Session not active or expired. Attempting to re-authenticate automatically...")
            environ.stat_inc("reauth")
            result = self.login(self._username, self._password, self._captcha_solver)
            if not result.success:
                raise ReauthenticationError(result.message)
            cout.info("Automatic re-authentication successful.")

    def _absolute_url(self, endpoint):
        endpoint = endpoint or ""
        if not endpoint.startswith("/"):
            endpoint = "/" + endpoint
        return self._base_url + endpoint

    def _is_expired_response(self, r):
        return r.status_code == 401 or is_redirected_to_cas(r)

    def call(self, endpoint, method="GET", **kwargs):
        """
        Send a request to ``endpoint`` (relative to the base url) with the
        session cookies, logging in again first if the session is not
        authenticated and credentials were saved by a previous ``login``.

        Returns the raw ``requests.Response``.
        """
        if not self._base_url:
            raise BaseUrlNotSetError(
                "Base URL is not set. Please set it using set_base_url before making API calls."
            )

        self._ensure_authenticated()

        url = self._absolute_url(endpoint)
        r = self._client.request(method, url, **kwargs)

        if self._reauth_on_expiry and self._is_expired_response(r):
            cout.warning("Response of %s looks like an expired session, re-authenticating" % endpoint)
            environ.stat_inc("session_expired")
            self.invalidate()
            self._ensure_authenticated()
            r = self._client.request(method, url, **kwargs)

        return r
