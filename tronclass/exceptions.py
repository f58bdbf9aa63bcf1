#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: exceptions.py

__all__ = [

    "TronClassException",
        "UserInputException",
        "BaseUrlNotSetError",
        "NotLoggedInError",
        "ReauthenticationError",
        "RateLimitError",
        "TronClassClientException",
            "StatusCodeError",
            "ServerError",
            "OperationFailedError",
            "OperationTimeoutError",
            "RecognizerError",
            "CASException",
                "LoginTicketNotFoundError",
                "CaptchaContentTypeError",
                "InvalidCaptchaCodeError",
                "CASIncorrectPasswordError",

]


class TronClassException(Exception):
    """ Abstract Exception for tronclass """


class UserInputException(TronClassException, ValueError):
    """ 由于用户的输入有误而产生的错误 """


class BaseUrlNotSetError(TronClassException):

    def __init__(self, msg=None):
        super().__init__(msg or "Base URL is not set. Please call set_base_url first.")


class NotLoggedInError(TronClassException):

    def __init__(self, msg=None):
        super().__init__(
            msg or "Not logged in and no credentials saved for re-authentication. "
                   "Please call the login method first."
        )


class ReauthenticationError(TronClassException):

    def __init__(self, reason):
        self.reason = reason
        super().__init__(
            "Automatic re-authentication failed: %s. Please log in manually." % reason
        )


class RateLimitError(TronClassException):
    """ Outbound request rejected by the sliding-window limiter """

    def __init__(self, wait_time_ms, msg=None):
        self.wait_time_ms = max(0, int(wait_time_ms))
        super().__init__(
            msg or "Rate limit exceeded. Please wait %d ms." % self.wait_time_ms
        )

    @property
    def wait_time(self):
        """ seconds, for use with time.sleep """
        return self.wait_time_ms / 1000.0


class TronClassClientException(TronClassException):

    code = -1
    desc = "TronClassClientException"

    def __init__(self, *args, **kwargs):
        self.response = kwargs.pop("response", None)
        msg = "[%d] %s" % (
            self.__class__.code,
            kwargs.pop("msg", self.__class__.desc),
        )
        super().__init__(msg, *args, **kwargs)


class StatusCodeError(TronClassClientException):
    code = 101
    desc = "StatusCodeError"

    def __init__(self, *args, **kwargs):
        response = kwargs.get("response")
        if response is not None and "msg" not in kwargs:
            kwargs["msg"] = "%s %s" % (response.status_code, response.url)
        super().__init__(*args, **kwargs)


class ServerError(TronClassClientException):
    code = 102
    desc = "ServerError"

    def __init__(self, *args, **kwargs):
        response = kwargs.get("response")
        if response is not None and "msg" not in kwargs:
            kwargs["msg"] = "%s %s" % (response.status_code, response.url)
        super().__init__(*args, **kwargs)


class OperationFailedError(TronClassClientException):
    code = 103
    desc = "OperationFailedError"


class OperationTimeoutError(TronClassClientException):
    code = 104
    desc = "OperationTimeoutError"


class RecognizerError(TronClassClientException):
    code = 105
    desc = "RecognizerError"


class CASException(TronClassClientException):
    code = 200
    desc = "CASException"


class LoginTicketNotFoundError(CASException):
    code = 201
    desc = ("CSRF token 'lt' not found on the login page. "
            "Login page structure might have changed or access denied.")


class CaptchaContentTypeError(CASException):
    code = 202
    desc = "Captcha image not found or invalid content type."


class InvalidCaptchaCodeError(CASException):
    code = 203
    desc = "Invalid captcha code. Must be 4 digits."


class CASIncorrectPasswordError(CASException):
    code = 204
    desc = "Invalid username or password."
