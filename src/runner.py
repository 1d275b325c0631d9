""" Execute a shell command. """
import contextlib
import logging
import subprocess
import sys

from command import Command, Executable, ExecutionResult
from constants import EXIT_CANNOT_EXECUTE, SHELL_NAME
from exceptions import BuiltinError, DispatchError, RedirectionError, ShellError
from redirection import Streams, redirected
from shell_builtins import BUILTINS
from shell_state import ShellState

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def redirect_std(streams: Streams):
    """ Point sys.stdin/stdout/stderr at the command's streams for a builtin. """
    old = sys.stdin, sys.stdout, sys.stderr
    try:
        if streams.stdin is not None:
            sys.stdin = streams.stdin
        if streams.stdout is not None:
            sys.stdout = streams.stdout
        if streams.stderr is not None:
            sys.stderr = streams.stderr
        yield
        sys.stdout.flush()
        sys.stderr.flush()
    finally:
        sys.stdin, sys.stdout, sys.stderr = old


def report(message, stream=None):
    print(message, file=stream if stream is not None else sys.stderr)


class Builtin(Executable):
    """ A command implemented in-process. """
    def __init__(self, name, func):
        self.name = name
        self.func = func

    def execute(self, args, state, streams) -> ExecutionResult:
        try:
            with redirect_std(streams):
                try:
                    status = self.func(args[1:], state)
                except BuiltinError as e:
                    report(f"{self.name}: {e}")
                    return ExecutionResult(e.status, e)
        except OSError as e:
            # e.g. `echo hi > /dev/full`: the write fails once the output is flushed
            error = BuiltinError(f"{self.name}: {e.strerror}")
            report(error, streams.stderr)
            return ExecutionResult(error.status, error)
        return ExecutionResult(status or 0)


class ExternalProgram(Executable):
    """ A program found on PATH, run as a child process. """
    def __init__(self, name, path):
        self.name = name
        self.path = path

    def execute(self, args, state, streams) -> ExecutionResult:
        # anything we buffered must land before the child writes
        for stream, default in ((streams.stdout, sys.stdout), (streams.stderr, sys.stderr)):
            (stream if stream is not None else default).flush()

        try:
            completed = subprocess.run(
                args,
                executable=self.path,
                cwd=state.cwd,
                env=state.env,
                stdin=streams.stdin,
                stdout=streams.stdout,
                stderr=streams.stderr,
            )
        except (OSError, ValueError) as e:
            # ValueError: an argument holds a NUL byte
            reason = e.strerror if isinstance(e, OSError) else str(e)
            error = ShellError(f"{self.name}: {reason}", status=EXIT_CANNOT_EXECUTE)
            report(error, streams.stderr)
            return ExecutionResult(error.status, error)

        status = completed.returncode
        if status < 0:
            # killed by a signal
            status = 128 - status
        return ExecutionResult(status)


def lookup(name: str, state: ShellState) -> Executable:
    """ Builtins first, then the first match on PATH. """
    func = BUILTINS.get(name)
    if func is not None:
        return Builtin(name, func)

    path = state.find_executable(name)
    if path is None:
        raise DispatchError(f"{name}: command not found")
    return ExternalProgram(name, path)


def execute_command(cmd: Command, state: ShellState) -> ExecutionResult:
    try:
        with redirected(cmd, state) as streams:
            if not cmd.args:
                return ExecutionResult(0)

            try:
                executable = lookup(cmd.program, state)
            except DispatchError as e:
                report(e, streams.stderr)
                return ExecutionResult(e.status, e)

            logger.debug("running %s as %s", cmd.program, type(executable).__name__)
            return executable.execute(cmd.args, state, streams)
    except RedirectionError as e:
        logger.debug("redirection failed: %s", e)
        # the command never got a stderr of its own, so use the session's
        report(f"{SHELL_NAME}: {e}", state.stderr)
        return ExecutionResult(e.status, e)
