""" Resolve redirections into stream bindings and apply them around a command. """
import contextlib
import logging
from dataclasses import dataclass

from command import Command, Redirection
from exceptions import RedirectionError
from shell_state import ShellState

logger = logging.getLogger(__name__)

FD_NAMES = ("stdin", "stdout", "stderr")


@dataclass(frozen=True)
class RedirectStep:
    """ One target to open and the descriptors it ends up owning. """
    redirection: Redirection
    fds: tuple


@dataclass
class Streams:
    """ Streams a command runs with; None means inherit the interpreter's own. """
    stdin: object = None
    stdout: object = None
    stderr: object = None

    def bind(self, fd: int, handle):
        setattr(self, FD_NAMES[fd], handle)


def resolve(redirections) -> list[RedirectStep]:
    """
    Turn redirections into an ordered plan.

    The last redirection seen for a descriptor owns it. A redirection that
    ends up owning nothing is dropped, so its target is never opened:
    `echo hi > a > b` leaves `a` untouched.
    """
    owner = {}
    for index, redirection in enumerate(redirections):
        for fd in redirection.source_fds:
            owner[fd] = index

    steps = []
    for index, redirection in enumerate(redirections):
        fds = tuple(fd for fd in redirection.source_fds if owner[fd] == index)
        if fds:
            steps.append(RedirectStep(redirection, fds))
        else:
            logger.debug("redirection to %r superseded", redirection.target)
    return steps


def open_target(redirection: Redirection, state: ShellState):
    target = redirection.target
    path = state.resolve_path(target)
    try:
        return open(path, redirection.mode.open_mode)
    except FileNotFoundError:
        raise RedirectionError(f"{target}: No such file or directory") from None
    except IsADirectoryError:
        raise RedirectionError(f"{target}: Is a directory") from None
    except PermissionError:
        raise RedirectionError(f"{target}: Permission denied") from None
    except OSError as e:
        raise RedirectionError(f"{target}: {e.strerror}") from None
    except ValueError:
        # a NUL byte in the name
        raise RedirectionError(f"{target}: invalid file name") from None


def close_target(handle):
    """ Close a redirection target; a write that fails here was already reported. """
    try:
        handle.close()
    except OSError as e:
        logger.debug("closing %s failed: %s", getattr(handle, "name", handle), e)


@contextlib.contextmanager
def apply(steps, state: ShellState):
    """
    Open each step's target in order and bind it to its descriptors.

    Every handle is closed when the block exits, whichever way it exits.
    A failed open closes whatever this line had already opened.
    """
    streams = Streams(state.stdin, state.stdout, state.stderr)
    with contextlib.ExitStack() as stack:
        for step in steps:
            handle = open_target(step.redirection, state)
            stack.callback(close_target, handle)
            for fd in step.fds:
                streams.bind(fd, handle)
            logger.debug("fd %s -> %s (%s)", ",".join(map(str, step.fds)),
                         step.redirection.target, step.redirection.mode.value)
        yield streams


def redirected(cmd: Command, state: ShellState):
    return apply(resolve(cmd.redirections), state)
