""" Implement the core of the shell. """
import logging

from constants import CONTINUATION_PROMPT, PROMPT, SHELL_NAME
from exceptions import LexError, ParseError, ShellExit
from parser import parse_line
from runner import execute_command, report
from shell_state import ShellState

logger = logging.getLogger(__name__)


def continues(line: str) -> bool:
    """ True if the line ends with an unescaped backslash. """
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def read_command(prompt=PROMPT):
    """ Read a command with support for line continuation. """
    lines = []
    while True:
        line = input(prompt)
        if continues(line):
            lines.append(line[:-1])
            prompt = CONTINUATION_PROMPT
        else:
            lines.append(line)
            break
    return "".join(lines)


class Shell:
    def __init__(self, state=None):
        self.state = state if state is not None else ShellState()

    def execute_line(self, line: str) -> int:
        """
        Tokenize, parse and run one line, returning its exit status.

        Syntax errors are reported and swallowed; ShellExit propagates.
        """
        try:
            cmd = parse_line(line)
        except (LexError, ParseError) as e:
            logger.debug("rejected %r: %s", line, e)
            report(f"{SHELL_NAME}: {e}", self.state.stderr)
            self.state.set_status(e.status)
            return e.status

        if cmd is None:
            return self.state.last_status

        result = execute_command(cmd, self.state)
        if result.error is not None:
            logger.debug("%s failed: %s", cmd.program, result.error)
        self.state.set_status(result.status)
        return result.status

    def run(self, read=None) -> int:
        read = read or read_command
        while True:
            try:
                line = read()
                self.execute_line(line)
            except ShellExit as e:
                return e.status

            except EOFError:
                print()
                return self.state.last_status

            except KeyboardInterrupt:
                print()
