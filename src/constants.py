""" Constants used throughout the shell. """

SHELL_NAME = "pysh"

PROMPT = "$ "
CONTINUATION_PROMPT = "> "

WHITESPACE = frozenset(" \t\n")
# characters a backslash still escapes inside double quotes
DOUBLE_QUOTE_ESCAPABLE = frozenset('"\\$`')

# operator -> (source descriptors, mode name)
REDIRECT_OPERATORS = {
    ">": ((1,), "truncate"),
    ">>": ((1,), "append"),
    "&>": ((1, 2), "truncate"),
    ">&": ((1, 2), "truncate"),
    "&>>": ((1, 2), "append"),
    "<": ((0,), "read"),
}
SUPPORTED_FDS = (0, 1, 2)

EXIT_SYNTAX_ERROR = 2
EXIT_CANNOT_EXECUTE = 126
EXIT_NOT_FOUND = 127

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 4000
TRUTHY = frozenset(("1", "true", "yes", "on"))
