""" Lexical analysis for shell commands.

The lexer is a small state machine over three quoting modes plus an escape
flag. Quote removal happens here: a Word never carries quote or backslash
markers, and a redirection operator is only recognized outside quotes.
"""
import logging
from dataclasses import dataclass
from enum import Enum

from constants import DOUBLE_QUOTE_ESCAPABLE, WHITESPACE
from exceptions import LexError

logger = logging.getLogger(__name__)

# longest spelling first so ">>" wins over ">"
OPERATOR_SPELLINGS = ("&>>", "&>", ">>", ">&", ">", "<")
DIGITS = "0123456789"


class Mode(Enum):
    UNQUOTED = "unquoted"
    SINGLE = "single"
    DOUBLE = "double"


@dataclass(frozen=True)
class Word:
    text: str


@dataclass(frozen=True)
class RedirectOperator:
    kind: str
    fd: int | None = None

    def __str__(self):
        prefix = "" if self.fd is None else str(self.fd)
        return f"{prefix}{self.kind}"


class Lexer:
    """
    Iterable token stream over one line of input.

    Each call to iter() starts over, so the same Lexer can be walked
    more than once. Tokens are produced lazily; a LexError for an
    unterminated quote surfaces once the end of the line is reached.
    """
    def __init__(self, line: str):
        self.line = line

    def __iter__(self):
        return self._tokens()

    def _operator_at(self, i: int, at_boundary: bool):
        """ Return (operator, length) if an operator starts at i, else None. """
        line = self.line
        fd = None
        j = i
        if at_boundary and line[j] in DIGITS and j + 1 < len(line) and line[j + 1] in "<>":
            fd = int(line[j])
            j += 1
        for kind in OPERATOR_SPELLINGS:
            if line.startswith(kind, j):
                return RedirectOperator(kind, fd), j - i + len(kind)
        return None

    def _tokens(self):
        line = self.line
        trace = logger.isEnabledFor(logging.DEBUG)
        mode = Mode.UNQUOTED
        escaped = False
        in_word = False
        buf = []
        i = 0

        while i < len(line):
            ch = line[i]

            if mode is Mode.SINGLE:
                if ch == "'":
                    mode = Mode.UNQUOTED
                else:
                    buf.append(ch)

            elif mode is Mode.DOUBLE:
                if escaped:
                    # backslash-newline is a line continuation: both go
                    if ch != "\n":
                        if ch not in DOUBLE_QUOTE_ESCAPABLE:
                            buf.append("\\")
                        buf.append(ch)
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    mode = Mode.UNQUOTED
                else:
                    buf.append(ch)

            elif escaped:
                if ch != "\n":
                    buf.append(ch)
                    in_word = True
                escaped = False

            elif ch == "\\":
                escaped = True

            elif ch in WHITESPACE:
                if in_word:
                    yield Word("".join(buf))
                    buf = []
                    in_word = False

            elif ch == "'":
                mode = Mode.SINGLE
                in_word = True

            elif ch == '"':
                mode = Mode.DOUBLE
                in_word = True

            else:
                found = self._operator_at(i, at_boundary=not in_word)
                if found is not None:
                    operator, length = found
                    if in_word:
                        yield Word("".join(buf))
                        buf = []
                        in_word = False
                    if trace:
                        logger.debug("%r -> operator %s", line[i:i + length], operator)
                    yield operator
                    i += length
                    continue
                buf.append(ch)
                in_word = True

            if trace:
                logger.debug("%r -> %s%s\t%s", ch, mode.value,
                             " (escape)" if escaped else "", "".join(buf))
            i += 1

        if mode is Mode.SINGLE:
            raise LexError("unmatched single quotes")
        if mode is Mode.DOUBLE:
            raise LexError("unmatched double quotes")
        if escaped:
            raise LexError("unmatched escape character")

        if in_word:
            yield Word("".join(buf))


def tokenize(line: str) -> list:
    """ Tokenize a whole line, raising LexError on bad quoting. """
    return list(Lexer(line))
