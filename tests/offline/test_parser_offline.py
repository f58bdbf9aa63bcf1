#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import unittest
from types import SimpleNamespace

from tronclass.parser import (
    get_tree,
    get_login_ticket,
    get_cas_base_url,
    is_login_page_response,
    is_redirected_to_cas,
)

_LOGIN_HTML = (
    "<html><head><title>登入</title></head><body>"
    "<form id='fm1' method='post'>"
    "<input type='text' name='username'/>"
    "<input type='password' name='password'/>"
    "<input type='hidden' name='lt' value='TOKEN123'/>"
    "<input type='hidden' name='execution' value='e1s1'/>"
    "<a class='forget-password' href='#'>忘記密碼</a>"
    "</form></body></html>"
)


class ParserOfflineTest(unittest.TestCase):
    def test_login_ticket(self):
        self.assertEqual(get_login_ticket(get_tree(_LOGIN_HTML)), "TOKEN123")

    def test_login_ticket_missing(self):
        html = "<html><body><form><input name='username'/></form></body></html>"
        self.assertIsNone(get_login_ticket(get_tree(html)))

    def test_login_ticket_empty_value(self):
        html = "<html><body><input name='lt' value='  '/></body></html>"
        self.assertIsNone(get_login_ticket(get_tree(html)))

    def test_login_ticket_no_tree(self):
        self.assertIsNone(get_login_ticket(None))

    def test_cas_base_url_on_subdomain(self):
        url = "https://identity.example.edu.tw/cas/login?service=https%3A%2F%2Ftc.example.edu.tw%2Flogin"
        self.assertEqual(get_cas_base_url(url), "https://identity.example.edu.tw")

    def test_cas_base_url_with_port(self):
        self.assertEqual(
            get_cas_base_url("http://127.0.0.1:8080/cas/login"),
            "http://127.0.0.1:8080",
        )

    def test_cas_base_url_invalid(self):
        with self.assertRaises(ValueError):
            get_cas_base_url("/cas/login")

    def test_is_login_page_response(self):
        self.assertTrue(is_login_page_response(_LOGIN_HTML))
        self.assertFalse(is_login_page_response("<html><body>歡迎</body></html>"))
        self.assertFalse(is_login_page_response(None))

    def test_is_redirected_to_cas(self):
        self.assertTrue(is_redirected_to_cas(SimpleNamespace(url="https://id.example.edu.tw/cas/login?next=/x")))
        self.assertFalse(is_redirected_to_cas(SimpleNamespace(url="https://tc.example.edu.tw/api/todos")))


if __name__ == "__main__":
    unittest.main()
