""" Exceptions raised while reading, parsing and running commands. """
from constants import EXIT_NOT_FOUND, EXIT_SYNTAX_ERROR


class ShellExit(Exception):
    """ Raised by the exit builtin to end the session. """
    def __init__(self, status=0):
        super().__init__(status)
        self.status = status


class ShellError(Exception):
    """ Base class for errors that abort a single command line. """
    status = 1

    def __init__(self, message, status=None):
        super().__init__(message)
        if status is not None:
            self.status = status


class LexError(ShellError):
    status = EXIT_SYNTAX_ERROR


class ParseError(ShellError):
    status = EXIT_SYNTAX_ERROR


class RedirectionError(ShellError):
    pass


class DispatchError(ShellError):
    status = EXIT_NOT_FOUND


class BuiltinError(ShellError):
    pass
