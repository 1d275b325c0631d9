""" Command to be executed. """
from dataclasses import dataclass, field
from enum import Enum

from exceptions import ShellError


class RedirectMode(Enum):
    TRUNCATE = "truncate"
    APPEND = "append"
    READ = "read"

    @property
    def open_mode(self) -> str:
        return {"truncate": "w", "append": "a", "read": "r"}[self.value]


@dataclass(frozen=True)
class Redirection:
    source_fds: tuple
    mode: RedirectMode
    target: str


@dataclass
class ExecutionResult:
    status: int = 0
    error: ShellError | None = None


class Command:
    """ A parsed command: program, full argument vector and redirections. """
    def __init__(self, program, args=None, redirections=None):
        self.program = program
        # args[0] mirrors the program name
        self.args = list(args) if args is not None else ([program] if program else [])
        self.redirections = list(redirections or [])

    def __repr__(self):
        return (f"Command(program={self.program!r}, args={self.args!r}, "
                f"redirections={self.redirections!r})")

    def __eq__(self, other):
        if not isinstance(other, Command):
            return NotImplemented
        return (self.program, self.args, self.redirections) == \
            (other.program, other.args, other.redirections)


class Executable:
    """ Base class for executable types. """
    name = ""

    def execute(self, args, state, streams) -> ExecutionResult:
        raise NotImplementedError
