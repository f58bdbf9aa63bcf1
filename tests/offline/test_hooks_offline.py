#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import unittest

from requests import Response

from tronclass.hook import (
    with_etree,
    check_status_code,
    check_image_content_type,
    merge_hooks,
    get_hooks,
)
from tronclass.exceptions import ServerError, StatusCodeError, CaptchaContentTypeError


def _make_response(status_code=200, content=b"", headers=None, url="https://example.com/"):
    resp = Response()
    resp.status_code = status_code
    resp.url = url
    resp._content = content
    resp.headers = headers or {}
    resp.encoding = "utf-8"
    return resp


class HookOfflineTest(unittest.TestCase):
    def test_status_code_server_error(self):
        with self.assertRaises(ServerError):
            check_status_code(_make_response(status_code=502))

    def test_status_code_error(self):
        with self.assertRaises(StatusCodeError):
            check_status_code(_make_response(status_code=403))

    def test_redirect_hop_passes(self):
        r = _make_response(status_code=302, headers={"location": "https://id.example.com/cas/login"})
        check_status_code(r)
        check_image_content_type(r)

    def test_with_etree(self):
        r = _make_response(content="<html><body><input name='lt' value='X'/></body></html>".encode("utf-8"))
        with_etree(r)
        self.assertEqual(r._tree.xpath('.//input/@value'), ["X"])

    def test_image_content_type(self):
        check_image_content_type(_make_response(headers={"Content-Type": "image/jpeg"}))
        with self.assertRaises(CaptchaContentTypeError):
            check_image_content_type(_make_response(headers={"Content-Type": "text/html; charset=utf-8"}))
        with self.assertRaises(CaptchaContentTypeError):
            check_image_content_type(_make_response())

    def test_merge_hooks(self):
        a = lambda r, **kw: None
        b = lambda r, **kw: None
        c = lambda r, **kw: None
        merged = merge_hooks(a, get_hooks(b, c))
        self.assertEqual(list(merged["response"]), [a, b, c])
        with self.assertRaises(TypeError):
            merge_hooks("not a hook")


if __name__ == "__main__":
    unittest.main()
