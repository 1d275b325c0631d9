import os
import socket
import stat
import tempfile
import threading
import unittest

import server
from shell_state import ShellState


class TestShellServer(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        self.root = os.path.realpath(self.tmpdir.name)
        self.bindir = os.path.join(self.root, "bin")
        os.mkdir(self.bindir)

        self.state = ShellState(cwd=self.root, env={"PATH": self.bindir, "HOME": self.root})
        self.server = server.ShellServer(self.state, port=0)
        self.status = None
        self.thread = threading.Thread(target=self.serve, daemon=True)
        self.thread.start()
        self.addCleanup(self.stop)

    def serve(self):
        self.status = self.server.serve()

    def stop(self):
        if self.thread.is_alive():
            self.send("exit\n")
            self.thread.join(timeout=5)

    def send(self, text: str) -> str:
        with socket.create_connection(self.server.server_address[:2], timeout=5) as sock:
            sock.sendall(text.encode("utf-8"))
            sock.shutdown(socket.SHUT_WR)
            chunks = []
            while True:
                data = sock.recv(4096)
                if not data:
                    break
                chunks.append(data)
        return b"".join(chunks).decode("utf-8")

    def test_builtin_output_sent_back(self):
        self.assertEqual("hi there\n", self.send("echo hi   there\n"))

    def test_multiple_lines_one_connection(self):
        self.assertEqual("a\nb\n", self.send("echo a\r\necho b\n"))

    def test_session_shared_between_connections(self):
        os.mkdir(os.path.join(self.root, "sub"))
        self.send("cd sub\n")
        self.assertEqual(os.path.join(self.root, "sub") + "\n", self.send("pwd\n"))

    def test_errors_sent_back(self):
        reply = self.send("echo 'abc\nzzzznotacommand\necho still here\n")
        self.assertEqual(
            "pysh: unmatched single quotes\n"
            "zzzznotacommand: command not found\n"
            "still here\n",
            reply)

    def test_external_output_sent_back(self):
        path = os.path.join(self.bindir, "greet")
        with open(path, "w", encoding="utf-8") as f:
            f.write("#!/bin/sh\necho \"hello $1\"\n")
        os.chmod(path, os.stat(path).st_mode | stat.S_IXUSR)
        self.assertEqual("before\nhello world\n", self.send("echo before\ngreet world\n"))

    def test_exit_stops_server(self):
        self.send("exit 3\n")
        self.thread.join(timeout=5)
        self.assertFalse(self.thread.is_alive())
        self.assertEqual(3, self.status)

    def test_session_streams_restored(self):
        self.send("echo x\n")
        self.assertIsNone(self.state.stdout)
        self.assertIsNone(self.state.stderr)


if __name__ == "__main__":
    unittest.main()
