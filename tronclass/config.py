#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: config.py

import os
from configparser import RawConfigParser
from .environ import Environ
from .utils import Singleton
from .const import (
    DEFAULT_CONFIG_INI,
    CONFIG_INI_ENV,
    DEFAULT_FETCHER_RPM,
    DEFAULT_CLIENT_TIMEOUT,
    DEFAULT_LOGIN_MAX_ATTEMPTS,
    DEFAULT_LOGIN_BACKOFF_BASE,
    DEFAULT_LOGIN_BACKOFF_FACTOR,
    DEFAULT_LOGIN_BACKOFF_MAX,
    DEFAULT_LOGIN_BACKOFF_JITTER,
)
from .exceptions import UserInputException

environ = Environ()


class BaseConfig(object):

    def __init__(self, config_file=None):
        if self.__class__ is __class__:
            raise NotImplementedError
        file = os.path.normpath(os.path.abspath(config_file))
        if not os.path.exists(file):
            raise FileNotFoundError("Config file was not found: %s" % file)
        self._config = RawConfigParser()
        self._config.read(file, encoding="utf-8-sig")

    def get(self, section, key):
        return self._config.get(section, key)

    def get_optional(self, section, key, default=None):
        if self._config.has_option(section, key):
            return self._config.get(section, key)
        return default

    def get_optional_bool(self, section, key, default=False):
        if not self._config.has_option(section, key):
            return default
        try:
            return self._config.getboolean(section, key)
        except ValueError:
            raise UserInputException("Invalid boolean for %s.%s" % (section, key))

    def get_optional_float(self, section, key, default, minimum=None):
        v = self.get_optional(section, key)
        if v is None or v.strip() == "":
            return default
        try:
            v = float(v)
        except ValueError:
            raise UserInputException("Invalid %s.%s: %r" % (section, key, v))
        if minimum is not None and v < minimum:
            raise UserInputException("Invalid %s.%s: %r" % (section, key, v))
        return v

    def get_optional_int(self, section, key, default, minimum=None):
        v = self.get_optional(section, key)
        if v is None or v.strip() == "":
            return default
        try:
            v = int(v)
        except ValueError:
            raise UserInputException("Invalid %s.%s: %r" % (section, key, v))
        if minimum is not None and v < minimum:
            raise UserInputException("Invalid %s.%s: %r" % (section, key, v))
        return v


class TronClassConfig(BaseConfig, metaclass=Singleton):

    def __init__(self):
        super().__init__(
            environ.config_ini
            or os.getenv(CONFIG_INI_ENV)
            or DEFAULT_CONFIG_INI
        )

    ## Model

    # [user]

    @property
    def username(self):
        return self.get("user", "username")

    @property
    def password(self):
        return self.get("user", "password")

    # [client]

    @property
    def base_url(self):
        v = self.get_optional("client", "base_url")
        if v is None or v.strip() == "":
            return None
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise UserInputException("Invalid client.base_url: %r" % v)
        return v.rstrip("/")

    @property
    def client_timeout(self):
        return self.get_optional_float("client", "timeout", DEFAULT_CLIENT_TIMEOUT, minimum=0.001)

    @property
    def user_agent(self):
        return self.get_optional("client", "user_agent") or None

    # [rate_limit]

    @property
    def fetcher_rpm(self):
        return self.get_optional_int("rate_limit", "rpm", DEFAULT_FETCHER_RPM, minimum=1)

    # [login]

    @property
    def login_max_attempts(self):
        return self.get_optional_int("login", "max_attempts", DEFAULT_LOGIN_MAX_ATTEMPTS, minimum=1)

    @property
    def login_backoff_base(self):
        return self.get_optional_float("login", "backoff_base", DEFAULT_LOGIN_BACKOFF_BASE, minimum=0.0)

    @property
    def login_backoff_factor(self):
        v = self.get_optional_float("login", "backoff_factor", DEFAULT_LOGIN_BACKOFF_FACTOR)
        return max(1.0, v)

    @property
    def login_backoff_max(self):
        return self.get_optional_float("login", "backoff_max", DEFAULT_LOGIN_BACKOFF_MAX, minimum=0.0)

    @property
    def login_backoff_jitter(self):
        v = self.get_optional_float("login", "backoff_jitter", DEFAULT_LOGIN_BACKOFF_JITTER, minimum=0.0)
        if v >= 1.0:
            raise UserInputException("Invalid login.backoff_jitter: %r, must be < 1" % v)
        return v

    @property
    def reauth_on_expiry(self):
        return self.get_optional_bool("login", "reauth_on_expiry", False)

    # [captcha]

    @property
    def captcha_provider(self):
        return (self.get_optional("captcha", "provider", "baidu") or "baidu").strip().lower()

    @property
    def baidu_api_key(self):
        return self.get_optional("captcha", "baidu_api_key")

    @property
    def baidu_secret_key(self):
        return self.get_optional("captcha", "baidu_secret_key")

    @property
    def baidu_timeout(self):
        return self.get_optional_float("captcha", "baidu_timeout", 10.0, minimum=0.001)
