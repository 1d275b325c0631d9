""" Current state of the shell. """
import os


class ShellState:
    """
    Session state shared by the builtins and the dispatcher.

    The working directory is tracked here rather than with os.chdir; it is
    handed to child processes and used to resolve relative paths.
    stdin/stdout/stderr are the session's default streams; None means the
    interpreter's own standard stream.
    """
    def __init__(self, cwd=None, env=None, stdin=None, stdout=None, stderr=None):
        self.cwd = os.path.abspath(cwd if cwd is not None else os.getcwd())
        self.env = env if env is not None else os.environ
        self.stdin = stdin
        self.stdout = stdout
        self.stderr = stderr
        self.last_status = 0

    def set_status(self, status: int):
        # normalize like shells do
        self.last_status = int(status) if status is not None else 0

    def get_var(self, name):
        return self.env.get(name, "")

    def resolve_path(self, path: str) -> str:
        """ Make path absolute against the session working directory. """
        return os.path.normpath(os.path.join(self.cwd, path))

    def set_cwd(self, path: str):
        self.cwd = self.resolve_path(path)

    def path_dirs(self) -> list[str]:
        """ PATH entries in search order; an empty entry is the working directory. """
        raw = self.env.get("PATH", "")
        if not raw:
            return []
        return [d if d else self.cwd for d in raw.split(os.pathsep)]

    def find_executable(self, name: str) -> str | None:
        """ Return the first executable named `name` on PATH, or None. """
        if not name:
            return None
        if os.sep in name:
            path = self.resolve_path(name)
            return path if is_executable(path) else None

        for directory in self.path_dirs():
            candidate = os.path.join(self.resolve_path(directory), name)
            if is_executable(candidate):
                return candidate
        return None


def is_executable(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.X_OK)
