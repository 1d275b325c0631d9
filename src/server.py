""" Socket transport for driving the shell from test scripts.

Each connection sends command lines and reads back whatever they print,
e.g. `printf 'pwd\\n' | nc localhost 4000`. Connections are served one at
a time and share a single session, so `cd` carries over between them.
"""
import io
import logging
import socketserver

from constants import DEFAULT_HOST, DEFAULT_PORT
from exceptions import ShellExit
from shell import Shell
from shell_state import ShellState

logger = logging.getLogger(__name__)


class ShellRequestHandler(socketserver.StreamRequestHandler):
    def handle(self):
        shell = self.server.shell
        state = shell.state
        out = io.TextIOWrapper(self.wfile, encoding="utf-8", write_through=True)
        old = state.stdout, state.stderr
        state.stdout = state.stderr = out
        logger.debug("connection from %s:%s", *self.client_address[:2])
        try:
            for raw in self.rfile:
                line = raw.decode("utf-8", errors="replace").rstrip("\r\n")
                try:
                    shell.execute_line(line)
                except ShellExit as e:
                    self.server.exit_status = e.status
                    self.server.done = True
                    break
        finally:
            out.flush()
            out.detach()
            state.stdout, state.stderr = old


class ShellServer(socketserver.TCPServer):
    """ Serve one connection at a time until a client runs `exit`. """
    allow_reuse_address = True

    def __init__(self, state=None, host=DEFAULT_HOST, port=DEFAULT_PORT):
        super().__init__((host, port), ShellRequestHandler)
        self.shell = Shell(state if state is not None else ShellState())
        self.exit_status = 0
        self.done = False

    def serve(self) -> int:
        host, port = self.server_address[:2]
        logger.info("listening on %s:%s", host, port)
        with self:
            while not self.done:
                self.handle_request()
        return self.exit_status
