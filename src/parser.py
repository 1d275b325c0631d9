""" Parse shell commands. """
import logging

from command import Command, Redirection, RedirectMode
from constants import REDIRECT_OPERATORS, SUPPORTED_FDS
from exceptions import ParseError
from lexer import RedirectOperator, Word, tokenize

logger = logging.getLogger(__name__)


def redirection_for(op: RedirectOperator, target: str) -> Redirection:
    """ Map an operator and its target word onto a Redirection. """
    fds, mode = REDIRECT_OPERATORS[op.kind]
    mode = RedirectMode(mode)

    if op.fd is not None:
        if len(fds) > 1:
            raise ParseError(f"syntax error: unsupported redirection '{op}'")
        if op.fd not in SUPPORTED_FDS:
            raise ParseError(f"unsupported fd redirection: {op}")
        if (op.fd == 0) != (mode is RedirectMode.READ):
            raise ParseError(f"unsupported fd redirection: {op}")
        fds = (op.fd,)

    # >&N is descriptor duplication, not a file named N
    if op.kind == ">&" and target.isdigit():
        raise ParseError(f"unsupported descriptor duplication: {op}{target}")

    return Redirection(fds, mode, target)


def parse(tokens) -> Command | None:
    """
    Build a Command from a token sequence.

    Returns None when there is nothing to execute. Every redirection
    operator must be followed by exactly one word, its target.
    """
    args = []
    redirections = []

    it = iter(tokens)
    for tok in it:
        if isinstance(tok, Word):
            args.append(tok.text)
            continue

        target = next(it, None)
        if target is None:
            raise ParseError("syntax error near unexpected token `newline'")
        if not isinstance(target, Word):
            raise ParseError(f"syntax error near unexpected token `{target}'")
        redirections.append(redirection_for(tok, target.text))

    if not args and not redirections:
        return None

    program = args[0] if args else ""
    cmd = Command(program, args, redirections)
    logger.debug("parsed %r", cmd)
    return cmd


def parse_line(line: str) -> Command | None:
    """ Tokenize and parse one line of input. """
    return parse(tokenize(line))
