""" Registry of builtin commands. """
import os
import sys

from exceptions import BuiltinError, ShellExit
from constants import EXIT_SYNTAX_ERROR

BUILTINS = {}


def builtin(name):
    """Decorator to register builtins"""
    def wrapper(func):
        BUILTINS[name] = func
        return func
    return wrapper


def expand_home(path, state):
    home = state.get_var("HOME") or "/"
    if path == "~":
        return home
    if path.startswith("~/"):
        return os.path.join(home, path[2:])
    return path


@builtin("cd")
def builtin_cd(args, state):
    if len(args) > 1:
        raise BuiltinError("too many arguments")
    target = args[0] if args else "~"

    path = state.resolve_path(expand_home(target, state))
    if not os.path.exists(path):
        raise BuiltinError(f"{target}: No such file or directory")
    if not os.path.isdir(path):
        raise BuiltinError(f"{target}: Not a directory")
    if not os.access(path, os.X_OK):
        raise BuiltinError(f"{target}: Permission denied")

    state.set_cwd(path)
    return 0


@builtin("echo")
def builtin_echo(args, state) -> int:
    print(" ".join(args))
    return 0


@builtin("exit")
def builtin_exit(args, state):
    try:
        status = int(args[0]) if args else 0
    except ValueError:
        print(f"exit: {args[0]}: numeric argument required", file=sys.stderr)
        status = EXIT_SYNTAX_ERROR
    raise ShellExit(status)


@builtin("pwd")
def builtin_pwd(args, state):
    print(state.cwd)
    return 0


@builtin("type")
def builtin_type(args, state):
    rc = 0
    for name in args:
        if name in BUILTINS:
            print(f"{name} is a shell builtin")
            continue

        path = state.find_executable(name)
        if path is not None:
            print(f"{name} is {path}")
        else:
            print(f"{name}: not found", file=sys.stderr)
            rc = 1
    return rc
