#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import base64
import json
import unittest
from io import BytesIO

from PIL import Image
from requests import Response

from tronclass.captcha import (
    Captcha,
    BaiduOCRRecognizer,
    DummyRecognizer,
    RecognizerSolver,
    decode_data_url,
    get_recognizer,
    available_recognizers,
)
from tronclass.exceptions import RecognizerError


def _png_bytes():
    buf = BytesIO()
    Image.new("RGB", (60, 20), (255, 255, 255)).save(buf, format="PNG")
    return buf.getvalue()


def _json_response(payload):
    resp = Response()
    resp.status_code = 200
    resp._content = json.dumps(payload).encode("utf-8")
    resp.encoding = "utf-8"
    return resp


class _FakeOCRSession(object):
    def __init__(self, result):
        self.result = result
        self.posts = []

    def post(self, url, **kwargs):
        self.posts.append((url, kwargs))
        if "oauth" in url:
            return _json_response({"access_token": "AT", "expires_in": 2592000})
        return _json_response(self.result)


class _RecordingRecognizer(object):
    name = "recording"

    def __init__(self, code):
        self.code = code
        self.raw = None

    def recognize(self, raw):
        self.raw = raw
        return Captcha(self.code, self.name)


class CaptchaOfflineTest(unittest.TestCase):
    def test_registry(self):
        self.assertIn("dummy", available_recognizers())
        self.assertIn("baidu", available_recognizers())
        self.assertIsInstance(get_recognizer("dummy"), DummyRecognizer)
        self.assertIsInstance(get_recognizer(" Baidu ", api_key="k", secret_key="s"), BaiduOCRRecognizer)
        with self.assertRaises(RecognizerError):
            get_recognizer("nope")

    def test_decode_data_url(self):
        raw = b"\xff\xd8\xffJPEG"
        mime, decoded = decode_data_url("data:image/jpeg;base64," + base64.b64encode(raw).decode())
        self.assertEqual(mime, "image/jpeg")
        self.assertEqual(decoded, raw)

    def test_decode_data_url_invalid(self):
        for bad in ("", "image/jpeg;base64,AAAA", "data:image/jpeg;base64", "data:image/jpeg,AAAA",
                    "data:image/jpeg;base64,@@@"):
            with self.assertRaises(RecognizerError, msg=bad):
                decode_data_url(bad)

    def test_solver_adapts_recognizer(self):
        rec = _RecordingRecognizer(" 12 34\n")
        solver = RecognizerSolver(rec)
        code = solver("data:image/jpeg;base64," + base64.b64encode(b"IMG").decode())
        self.assertEqual(code, "1234")
        self.assertEqual(rec.raw, b"IMG")

    def test_dummy_solver(self):
        solver = RecognizerSolver(DummyRecognizer("4321"))
        self.assertEqual(solver("data:image/jpeg;base64,SU1H"), "4321")

    def test_baidu_recognizer(self):
        sess = _FakeOCRSession({"words_result": [{"words": "5678"}]})
        rec = BaiduOCRRecognizer(api_key="k", secret_key="s", session=sess)
        captcha = rec.recognize(_png_bytes())
        self.assertEqual(captcha.code, "5678")
        self.assertEqual(captcha.provider, "baidu")
        self.assertEqual(len(sess.posts), 2)
        url, kwargs = sess.posts[1]
        self.assertEqual(kwargs["params"], {"access_token": "AT"})
        self.assertTrue(kwargs["data"].startswith(b"image="))
        # token is cached
        rec.recognize(_png_bytes())
        self.assertEqual(len(sess.posts), 3)

    def test_baidu_recognizer_error(self):
        sess = _FakeOCRSession({"error_code": 17, "error_msg": "Open api daily request limit reached"})
        rec = BaiduOCRRecognizer(api_key="k", secret_key="s", session=sess)
        with self.assertRaises(RecognizerError):
            rec.recognize(_png_bytes())

    def test_baidu_recognizer_empty(self):
        sess = _FakeOCRSession({"words_result": []})
        rec = BaiduOCRRecognizer(api_key="k", secret_key="s", session=sess)
        with self.assertRaises(RecognizerError):
            rec.recognize(_png_bytes())

    def test_baidu_recognizer_unreadable_image(self):
        sess = _FakeOCRSession({"words_result": [{"words": "1"}]})
        rec = BaiduOCRRecognizer(api_key="k", secret_key="s", session=sess)
        with self.assertRaises(RecognizerError):
            rec.recognize(b"not an image")

    def test_baidu_recognizer_without_keys(self):
        rec = BaiduOCRRecognizer(api_key=None, secret_key=None, session=_FakeOCRSession({}))
        rec._api_key = None
        rec._secret_key = None
        with self.assertRaises(RecognizerError):
            rec.recognize(_png_bytes())


if __name__ == "__main__":
    unittest.main()
