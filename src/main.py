#!/usr/bin/env python3
""" Command-line entry point for pysh. """
import argparse
import logging
import os
import sys

from constants import DEFAULT_HOST, DEFAULT_PORT, SHELL_NAME, TRUTHY
from exceptions import ShellExit
from server import ShellServer
from shell import Shell
from shell_state import ShellState

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def env_flag(name, env=None):
    env = os.environ if env is None else env
    return env.get(name, "").strip().lower() in TRUTHY


def configure_logging(debug=False):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def build_arg_parser():
    parser = argparse.ArgumentParser(
        prog=SHELL_NAME,
        description="A small POSIX-style command interpreter"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=env_flag("DEBUG"),
        help="log lexer, parser and dispatch decisions to stderr (env: DEBUG)"
    )
    parser.add_argument(
        "--listen",
        metavar="PORT",
        nargs="?",
        type=int,
        const=-1,
        default=None,
        help="serve commands over TCP instead of the terminal "
             f"(port defaults to $PORT or {DEFAULT_PORT}; env TEST=true selects this mode)"
    )
    parser.add_argument(
        "--host",
        default=DEFAULT_HOST,
        help=f"address to listen on (default: {DEFAULT_HOST})"
    )
    parser.add_argument(
        "-c",
        dest="command",
        metavar="LINE",
        help="run a single command line and exit with its status"
    )
    return parser


def listen_port(args, env=None):
    """ Port for socket mode, or None for the terminal. """
    env = os.environ if env is None else env
    if args.listen is None and not env_flag("TEST", env):
        return None
    if args.listen is not None and args.listen >= 0:
        return args.listen
    return int(env.get("PORT") or DEFAULT_PORT)


def main(argv=None):
    args = build_arg_parser().parse_args(argv)
    configure_logging(args.debug)

    state = ShellState()

    if args.command is not None:
        try:
            return Shell(state).execute_line(args.command)
        except ShellExit as e:
            return e.status

    port = listen_port(args)
    if port is not None:
        return ShellServer(state, args.host, port).serve()

    return Shell(state).run()


if __name__ == "__main__":
    sys.exit(main())
