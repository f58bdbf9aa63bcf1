#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: api.py

from requests.compat import json
from .const import TronClassURL
from .exceptions import StatusCodeError, ServerError, OperationFailedError


def _json(r):
    if r.status_code in (500, 501, 502, 503, 504):
        raise ServerError(response=r)
    if r.status_code != 200:
        raise StatusCodeError(response=r)
    try:
        return r.json()
    except json.JSONDecodeError:
        raise OperationFailedError(
            msg="Invalid JSON response from %s" % r.url,
            response=r,
        )


def _json_object(r):
    data = _json(r)
    if not isinstance(data, dict):
        raise OperationFailedError(
            msg="Unexpected JSON payload from %s: %s" % (r.url, type(data).__name__),
            response=r,
        )
    return data


class TronClassAPI(object):
    """ JSON endpoints of the portal, on top of ``TronClassSession.call`` """

    def __init__(self, session):
        self._session = session

    @property
    def session(self):
        return self._session

    def recently_visited_courses(self):
        r = self._session.call(TronClassURL.RecentlyVisitedCourses)
        return _json(r)

    def todos(self):
        r = self._session.call(TronClassURL.Todos)
        return _json_object(r).get("todo_list", [])

    def my_courses(self, conditions=None, fields=None, show_score_passed_status=None):
        """
        Without arguments this is a bare ``GET /api/my-courses``. Filters are
        only put on the query string when given.
        """
        params = {}
        if conditions:
            params["conditions"] = json.dumps(conditions)
        if fields:
            params["fields"] = fields if isinstance(fields, str) else ",".join(fields)
        if show_score_passed_status is not None:
            params["showScorePassedStatus"] = "true" if show_score_passed_status else "false"
        if params:
            r = self._session.call(TronClassURL.MyCourses, params=params)
        else:
            r = self._session.call(TronClassURL.MyCourses)
        return _json_object(r).get("courses", [])

    def homework_activities(self, course_id):
        r = self._session.call(TronClassURL.HomeworkActivities % int(course_id))
        return _json_object(r).get("homework_activities", [])
