#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: parser.py

from urllib.parse import urlsplit
from lxml import etree
from .const import LOGIN_FAILURE_MARKER, TronClassURL


def get_tree_from_response(r):
    return etree.HTML(r.text) # r.text, not r.content, so the declared charset is honoured

def get_tree(content):
    return etree.HTML(content)

def get_login_ticket(tree):
    if tree is None:
        return None
    values = tree.xpath('.//input[@name="lt"]/@value')
    if not values:
        return None
    lt = values[0].strip()
    return lt or None

def get_cas_base_url(url):
    """
    Origin of the page the login request was redirected to, e.g.
    ``https://identity.example.edu.tw/cas/login?service=...`` ->
    ``https://identity.example.edu.tw``
    """
    parts = urlsplit(url or "")
    if not parts.scheme or not parts.netloc:
        raise ValueError("Unable to derive CAS base url from %r" % url)
    return "%s://%s" % (parts.scheme, parts.netloc)

def is_login_page_response(text):
    return LOGIN_FAILURE_MARKER in (text or "")

def is_redirected_to_cas(r):
    try:
        path = urlsplit(r.url or "").path
    except Exception:
        return False
    return path.rstrip("/") == TronClassURL.CASLoginPath
