#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: cli.py

import sys
from optparse import OptionParser
from requests.compat import json
from . import __version__, __date__

COMMANDS = ("recent", "todos", "courses", "homework")


def create_default_parser():

    parser = OptionParser(
        usage="%prog [options] {" + ",".join(COMMANDS) + "} [COURSE_ID]",
        description='TronClass session client v%s (%s)' % (__version__, __date__),
        version=__version__,
    )

    ## custom input files

    parser.add_option(
        '-c',
        '--config',
        dest='config_ini',
        metavar="FILE",
        help='custom config file encoded with utf8',
    )

    ## overrides

    parser.add_option(
        '--captcha-provider',
        dest='captcha_provider',
        metavar="NAME",
        default=None,
        help='captcha recognizer to use instead of [captcha] provider',
    )

    return parser


def setup_default_environ(options, args, environ):

    environ.config_ini = options.config_ini


def create_solver(config, provider=None):
    from .captcha import get_recognizer, RecognizerSolver

    name = provider or config.captcha_provider
    kwargs = {}
    if name == "baidu":
        kwargs.update(
            api_key=config.baidu_api_key,
            secret_key=config.baidu_secret_key,
            timeout=config.baidu_timeout,
        )
    return RecognizerSolver(get_recognizer(name, **kwargs))


def run_command(api, command, args):
    if command == "recent":
        return api.recently_visited_courses()
    if command == "todos":
        return api.todos()
    if command == "courses":
        return api.my_courses()
    if command == "homework":
        if not args:
            raise ValueError("homework requires a COURSE_ID")
        return api.homework_activities(int(args[0]))
    raise ValueError("unknown command %r, must be one of %s" % (command, COMMANDS))


def run(argv=None):

    from .environ import Environ
    from .logger import ConsoleLogger

    environ = Environ()
    cout = ConsoleLogger("cli")

    parser = create_default_parser()
    options, args = parser.parse_args(argv)

    if not args or args[0] not in COMMANDS:
        parser.error("a command is required: %s" % ", ".join(COMMANDS))
    command, rest = args[0], args[1:]

    setup_default_environ(options, args, environ)

    # import here to ensure the singleton `config` will be init later than parse_args()
    from .config import TronClassConfig
    from .session import TronClassSession
    from .api import TronClassAPI

    config = TronClassConfig()

    with TronClassSession.from_config(config) as session:
        result = session.login(
            config.username,
            config.password,
            create_solver(config, options.captcha_provider),
        )
        if not result.success:
            cout.error("Login failed: %s" % result.message)
            return 1

        data = run_command(TronClassAPI(session), command, rest)
        cout.debug("Runtime stats: %s" % environ.stat_snapshot())

    print(json.dumps(data, ensure_ascii=False, indent=2))
    return 0


def main():
    sys.exit(run())
