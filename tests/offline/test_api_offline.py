#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import json
import unittest

from requests import Response

from tronclass.api import TronClassAPI
from tronclass.exceptions import StatusCodeError, ServerError, OperationFailedError


def _json_response(payload, status_code=200, url="https://tronclass.example.edu.tw/api"):
    resp = Response()
    resp.status_code = status_code
    resp.url = url
    resp._content = payload if isinstance(payload, bytes) else json.dumps(payload).encode("utf-8")
    resp.headers = {"Content-Type": "application/json"}
    resp.encoding = "utf-8"
    return resp


class _StubSession(object):
    def __init__(self, response):
        self.response = response
        self.calls = []

    def call(self, endpoint, method="GET", **kwargs):
        self.calls.append((endpoint, kwargs))
        return self.response


class TronClassAPIOfflineTest(unittest.TestCase):
    def test_recently_visited_courses(self):
        sess = _StubSession(_json_response({"visited_courses": [{"id": 7}]}))
        data = TronClassAPI(sess).recently_visited_courses()
        self.assertEqual(data, {"visited_courses": [{"id": 7}]})
        self.assertEqual(sess.calls[0][0], "/api/user/recently-visited-courses")

    def test_todos(self):
        sess = _StubSession(_json_response({"todo_list": [{"id": 1, "title": "HW1"}]}))
        self.assertEqual(TronClassAPI(sess).todos(), [{"id": 1, "title": "HW1"}])
        self.assertEqual(sess.calls[0][0], "/api/todos")

    def test_recently_visited_courses_any_json(self):
        sess = _StubSession(_json_response([{"id": 7}]))
        self.assertEqual(TronClassAPI(sess).recently_visited_courses(), [{"id": 7}])

    def test_todos_missing_field(self):
        sess = _StubSession(_json_response({}))
        self.assertEqual(TronClassAPI(sess).todos(), [])

    def test_my_courses(self):
        sess = _StubSession(_json_response({"courses": [{"id": 3, "name": "微積分"}]}))
        courses = TronClassAPI(sess).my_courses(
            conditions={"status": ["ongoing"]},
            fields=["id", "name"],
            show_score_passed_status=True,
        )
        self.assertEqual(courses, [{"id": 3, "name": "微積分"}])
        endpoint, kwargs = sess.calls[0]
        self.assertEqual(endpoint, "/api/my-courses")
        self.assertEqual(kwargs["params"]["fields"], "id,name")
        self.assertEqual(kwargs["params"]["showScorePassedStatus"], "true")
        self.assertEqual(json.loads(kwargs["params"]["conditions"]), {"status": ["ongoing"]})

    def test_my_courses_without_filters(self):
        sess = _StubSession(_json_response({"courses": []}))
        self.assertEqual(TronClassAPI(sess).my_courses(), [])
        self.assertEqual(sess.calls[0], ("/api/my-courses", {}))

    def test_homework_activities(self):
        sess = _StubSession(_json_response({"homework_activities": [{"id": 9}]}))
        self.assertEqual(TronClassAPI(sess).homework_activities(42), [{"id": 9}])
        self.assertEqual(sess.calls[0][0], "/api/courses/42/homework-activities")

    def test_status_errors(self):
        with self.assertRaises(StatusCodeError):
            TronClassAPI(_StubSession(_json_response({}, status_code=403))).todos()
        with self.assertRaises(ServerError):
            TronClassAPI(_StubSession(_json_response({}, status_code=503))).todos()

    def test_invalid_json(self):
        with self.assertRaises(OperationFailedError):
            TronClassAPI(_StubSession(_json_response(b"<html>login</html>"))).todos()

    def test_non_object_json(self):
        for payload in ([{"id": 1}], "expired", 42, None):
            api = TronClassAPI(_StubSession(_json_response(payload)))
            with self.assertRaises(OperationFailedError):
                api.todos()
        with self.assertRaises(OperationFailedError):
            TronClassAPI(_StubSession(_json_response([]))).my_courses()
        with self.assertRaises(OperationFailedError):
            TronClassAPI(_StubSession(_json_response("x"))).homework_activities(1)


if __name__ == "__main__":
    unittest.main()
