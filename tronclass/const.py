#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: const.py

from ._internal import get_abs_path

DEFAULT_CONFIG_INI = get_abs_path("../config.ini")
CONFIG_INI_ENV = "TRONCLASS_CONFIG_INI"

LOG_DIR = get_abs_path("../log")

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

RATE_LIMIT_WINDOW = 60.0
DEFAULT_FETCHER_RPM = 60

DEFAULT_LOGIN_MAX_ATTEMPTS = 3
DEFAULT_LOGIN_BACKOFF_BASE = 1.0
DEFAULT_LOGIN_BACKOFF_FACTOR = 2.0
DEFAULT_LOGIN_BACKOFF_MAX = 8.0
DEFAULT_LOGIN_BACKOFF_JITTER = 0.2

DEFAULT_CLIENT_TIMEOUT = 15.0


class TronClassURL(object):

    LoginPage = "/login?next=/user/index"
    CASCaptcha = "/cas/captcha.jpg"
    CASLogin = "/cas/login?next=/user/index"
    CASLoginPath = "/cas/login"

    RecentlyVisitedCourses = "/api/user/recently-visited-courses"
    Todos = "/api/todos"
    MyCourses = "/api/my-courses"
    HomeworkActivities = "/api/courses/%s/homework-activities"


class CASForm(object):

    Execution = "e1s1"
    EventId = "submit"
    SubmitLabel = "登錄"  # label of the portal's submit button


LOGIN_FAILURE_MARKER = "forget-password"
CAPTCHA_DATA_URL_PREFIX = "data:image/jpeg;base64,"
CAPTCHA_CODE_PATTERN = r"^[0-9]{4}$"
