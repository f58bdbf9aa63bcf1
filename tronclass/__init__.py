#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: __init__.py

__version__ = "1.0.0"
__date__ = "2026.10.19"

from .session import TronClassSession, LoginResult
from .api import TronClassAPI
from .rate_limit import SlidingWindowRateLimiter, Admission
from .exceptions import (
    TronClassException,
    BaseUrlNotSetError,
    NotLoggedInError,
    ReauthenticationError,
    RateLimitError,
)

__all__ = [
    "TronClassSession",
    "TronClassAPI",
    "LoginResult",
    "SlidingWindowRateLimiter",
    "Admission",
    "TronClassException",
    "BaseUrlNotSetError",
    "NotLoggedInError",
    "ReauthenticationError",
    "RateLimitError",
]
