#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: client.py

import requests

from .const import DEFAULT_USER_AGENT, DEFAULT_CLIENT_TIMEOUT
from .hook import merge_hooks
from .rate_limit import SlidingWindowRateLimiter


class BaseClient(object):
    """
    Transport shared by the login flow and the authenticated calls: one
    ``requests.Session`` (and therefore one cookie jar) per logical session,
    with every outbound request admitted by the rate limiter first.
    """

    default_headers = {}
    default_client_timeout = DEFAULT_CLIENT_TIMEOUT

    def __init__(self, timeout=None, limiter=None, user_agent=None):
        if self.__class__ is __class__:
            raise NotImplementedError
        self._timeout = timeout if timeout is not None else self.__class__.default_client_timeout
        self._limiter = limiter if limiter is not None else SlidingWindowRateLimiter()
        self._session = requests.Session()
        self._session.headers.update(self.__class__.default_headers)
        self.set_user_agent(user_agent or DEFAULT_USER_AGENT)

    @property
    def limiter(self):
        return self._limiter

    @property
    def timeout(self):
        return self._timeout

    @property
    def cookies(self):
        return self._session.cookies

    def set_user_agent(self, user_agent):
        self._session.headers["User-Agent"] = user_agent

    def persist_cookies(self, r):
        """
        Capture cookies of a response and of every redirect hop that led to it.
        """
        for resp in list(getattr(r, "history", None) or []) + [r]:
            jar = getattr(resp, "cookies", None)
            if jar:
                self._session.cookies.update(jar)

    def clear_cookies(self):
        self._session.cookies.clear()

    def get_cookie(self, name, domain=None):
        return self._session.cookies.get(name, domain=domain)

    def close(self):
        self._session.close()

    def _persist_cookies_hook(self, r, **kwargs):
        self.persist_cookies(r)

    def _request(self, method, url, params=None, data=None, headers=None, hooks=None, **kwargs):
        self._limiter.acquire()

        if hooks is not None:
            hooks = merge_hooks(self._persist_cookies_hook, hooks)
        else:
            hooks = merge_hooks(self._persist_cookies_hook)

        kwargs.setdefault("timeout", self.timeout)
        kwargs.setdefault("allow_redirects", True)

        return self._session.request(
            method.upper(),
            url,
            params=params,
            data=data,
            headers=headers,
            hooks=hooks,
            **kwargs
        )

    def _get(self, url, params=None, **kwargs):
        return self._request('GET', url, params=params, **kwargs)

    def _post(self, url, data=None, **kwargs):
        return self._request('POST', url, data=data, **kwargs)
