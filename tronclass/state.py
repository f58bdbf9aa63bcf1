#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: state.py

"""
Authentication state of a session, as immutable values.

    Unauthenticated --begin_login--> Authenticating
    Authenticating  --login_succeeded--> Authenticated(since)
    Authenticating  --login_failed--> Unauthenticated
    Authenticated   --expire--> Unauthenticated

Transitions are plain functions returning the next state, so the session
only ever swaps one reference while holding its login lock.
"""

from collections import namedtuple


class Unauthenticated(namedtuple("Unauthenticated", [])):
    __slots__ = ()
    name = "unauthenticated"


class Authenticating(namedtuple("Authenticating", ["previous"])):
    __slots__ = ()
    name = "authenticating"


class Authenticated(namedtuple("Authenticated", ["since"])):
    __slots__ = ()
    name = "authenticated"


UNAUTHENTICATED = Unauthenticated()


def is_authenticated(state):
    return isinstance(state, Authenticated)


def begin_login(state):
    if isinstance(state, Authenticating):
        raise ValueError("login already in progress")
    return Authenticating(previous=state)


def login_succeeded(state, now):
    if not isinstance(state, Authenticating):
        raise ValueError("unexpected login result in state %s" % state.name)
    return Authenticated(since=now)


def login_failed(state):
    if not isinstance(state, Authenticating):
        raise ValueError("unexpected login result in state %s" % state.name)
    return UNAUTHENTICATED


def expire(state):
    if isinstance(state, Authenticating):
        return state
    return UNAUTHENTICATED
