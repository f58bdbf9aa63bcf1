#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: rate_limit.py

import threading
import time
from collections import deque, namedtuple

from .const import RATE_LIMIT_WINDOW, DEFAULT_FETCHER_RPM
from .exceptions import RateLimitError, UserInputException

Admission = namedtuple("Admission", ["ok", "wait_time_ms"])


class SlidingWindowRateLimiter(object):
    """
    Admission gate over a trailing window of admitted-request timestamps.

    ``admit()`` never blocks: a denied caller gets the number of milliseconds
    until the oldest admitted request leaves the window.
    """

    def __init__(self, rpm=DEFAULT_FETCHER_RPM, window=RATE_LIMIT_WINDOW):
        self._lock = threading.Lock()
        self._window = float(window)
        self._history = deque()
        self.rpm = rpm

    @property
    def rpm(self):
        return self._rpm

    @rpm.setter
    def rpm(self, value):
        value = int(value)
        if value < 1:
            raise UserInputException("fetcher_rpm must be positive, not %r" % value)
        self._rpm = value

    @property
    def window(self):
        return self._window

    def _prune(self, now):
        history = self._history
        while history and now - history[0] >= self._window:
            history.popleft()

    def admit(self):
        with self._lock:
            now = time.monotonic()
            self._prune(now)
            if len(self._history) >= self._rpm:
                wait = self._window - (now - self._history[0])
                return Admission(False, max(1, int(round(wait * 1000))))
            self._history.append(now)
            return Admission(True, 0)

    def acquire(self):
        admission = self.admit()
        if not admission.ok:
            raise RateLimitError(admission.wait_time_ms)
        return admission

    def pending(self):
        with self._lock:
            self._prune(time.monotonic())
            return len(self._history)
