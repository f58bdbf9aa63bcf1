#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: hook.py

from .parser import get_tree_from_response
from .exceptions import StatusCodeError, ServerError, CaptchaContentTypeError


def get_hooks(*fn):
    return {"response": fn}

def merge_hooks(*hooklike):
    funcs = []
    for hook in hooklike:
        if isinstance(hook, dict):
            funcs.extend(hook["response"])
        elif callable(hook):
            funcs.append(hook)
        else:
            raise TypeError(hook)
    return get_hooks(*funcs)


def with_etree(r, **kwargs):
    if r.is_redirect:
        return
    r._tree = get_tree_from_response(r)

def check_status_code(r, **kwargs):
    if r.is_redirect:
        return
    if r.status_code != 200:
        if r.status_code in (500, 501, 502, 503, 504):
            raise ServerError(response=r)
        raise StatusCodeError(response=r)

def check_image_content_type(r, **kwargs):
    if r.is_redirect:
        return
    content_type = r.headers.get("Content-Type") or ""
    if not content_type.lower().startswith("image/"):
        raise CaptchaContentTypeError(response=r)


hooks_check_html = get_hooks(
    check_status_code,
    with_etree,
)

hooks_check_captcha = get_hooks(
    check_status_code,
    check_image_content_type,
)
