#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: logger.py

import os
import logging
from .const import LOG_DIR
from ._internal import mkdir

_USER_LOG_DIR = os.getenv("TRONCLASS_LOG_DIR") or LOG_DIR


class BaseLogger(object):

    default_level = logging.DEBUG

    def __init__(self, name, level=None):
        if self.__class__ is __class__:
            raise NotImplementedError
        self._name = name
        self._level = level if level is not None else self.__class__.default_level
        self._logger = logging.getLogger(self._name)
        self._logger.setLevel(self._level)
        if not self._logger.handlers:
            self._logger.addHandler(self._get_handler())
        self._logger.propagate = False

    @property
    def name(self):
        return self._name

    @property
    def handlers(self):
        return self._logger.handlers

    def _get_handler(self):
        raise NotImplementedError

    def log(self, level, msg, *args, **kwargs):
        return self._logger.log(level, msg, *args, **kwargs)

    def debug(self, msg, *args, **kwargs):
        return self._logger.debug(msg, *args, **kwargs)

    def info(self, msg, *args, **kwargs):
        return self._logger.info(msg, *args, **kwargs)

    def warning(self, msg, *args, **kwargs):
        return self._logger.warning(msg, *args, **kwargs)

    def error(self, msg, *args, **kwargs):
        return self._logger.error(msg, *args, **kwargs)

    def exception(self, msg, *args, exc_info=True, **kwargs):
        return self._logger.exception(msg, *args, exc_info=exc_info, **kwargs)

    def critical(self, msg, *args, **kwargs):
        return self._logger.critical(msg, *args, **kwargs)


class ConsoleLogger(BaseLogger):
    """ 控制台日志输出类 """

    default_level = logging.DEBUG

    def _get_handler(self):
        handler = logging.StreamHandler()
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(
            fmt="[%(levelname)s] %(name)s, %(asctime)s, %(message)s",
            datefmt="%H:%M:%S",
        ))
        return handler


class FileLogger(BaseLogger):
    """ 文件日志输出类，同步输出到 console """

    default_level = logging.WARNING

    def __init__(self, name, level=None):
        super().__init__(name, level)
        self._console = ConsoleLogger(name + ".console", self._level)

    def _get_handler(self):
        try:
            mkdir(_USER_LOG_DIR)
        except OSError:
            return logging.NullHandler()  # read-only install
        file = os.path.join(_USER_LOG_DIR, "%s.log" % self._name)
        handler = logging.FileHandler(file, encoding="utf-8-sig", delay=True)
        handler.setLevel(logging.WARNING)
        handler.setFormatter(logging.Formatter(
            fmt="[%(levelname)s] %(name)s, %(asctime)s, %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        return handler

    def log(self, level, msg, *args, **kwargs):
        self._console.log(level, msg, *args, **kwargs)
        return super().log(level, msg, *args, **kwargs)

    def warning(self, msg, *args, **kwargs):
        self._console.warning(msg, *args, **kwargs)
        return super().warning(msg, *args, **kwargs)

    def error(self, msg, *args, **kwargs):
        self._console.error(msg, *args, **kwargs)
        return super().error(msg, *args, **kwargs)

    def exception(self, msg, *args, exc_info=True, **kwargs):
        self._console.exception(msg, *args, exc_info=exc_info, **kwargs)
        return super().exception(msg, *args, exc_info=exc_info, **kwargs)

    def critical(self, msg, *args, **kwargs):
        self._console.critical(msg, *args, **kwargs)
        return super().critical(msg, *args, **kwargs)
