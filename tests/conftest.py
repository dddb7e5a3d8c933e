"""
Stub HTTP server for the client tests. Accepts one connection at a time, records the request,
replies with canned chunks, then closes
"""

import io
import socket
import threading
from typing import List, Callable, Optional

import pytest


class StubServer:
    """Threaded stub server bound to 127.0.0.1 on an ephemeral port"""

    def __init__(self, chunks: List[bytes] = None,
                 between: Optional[Callable[[int], None]] = None):
        """
        Args:
            chunks:
                Byte chunks to send back, in order, before closing
            between:
                Called with the index of each chunk after it is sent
        """
        self.chunks = chunks if chunks is not None else [b"HTTP/1.1 200 OK\r\n\r\nhello"]
        self.between = between
        self.requests: List[bytes] = []
        """Raw request bytes, one entry per handled connection"""

        self.server = socket.socket(family=socket.AF_INET, type=socket.SOCK_STREAM)
        self.server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self.server.bind(('127.0.0.1', 0))
        self.server.listen(5)
        self.server.settimeout(0.1)
        self.host, self.port = self.server.getsockname()
        self.running = True

        self._thread = threading.Thread(target=self.server_loop, daemon=True)
        self._thread.start()

    def server_loop(self):
        while self.running:
            try:
                client_socket, addr = self.server.accept()
            except socket.timeout:
                continue
            except OSError:
                # Listening socket closed
                return
            client_socket.settimeout(5)
            try:
                self.handle_client(client_socket)
            except OSError:
                # Client went away mid reply
                pass

    def handle_client(self, client_socket: socket.socket):
        try:
            request = b''
            while b'\r\n\r\n' not in request:
                data = client_socket.recv(1024)
                if not data:
                    break
                request += data
            self.requests.append(request)

            for ndx, chunk in enumerate(self.chunks):
                client_socket.sendall(chunk)
                if self.between:
                    self.between(ndx)
        finally:
            client_socket.close()

    def close(self):
        self.running = False
        self._thread.join(timeout=5)
        self.server.close()


@pytest.fixture
def stub_server():
    """Factory fixture. Servers built through it are closed at teardown"""
    servers = []

    def _build(*args, **kwargs) -> StubServer:
        server = StubServer(*args, **kwargs)
        servers.append(server)
        return server

    yield _build
    for server in servers:
        server.close()


@pytest.fixture
def closed_port() -> int:
    """A loopback port with nothing listening on it"""
    probe = socket.socket(family=socket.AF_INET, type=socket.SOCK_STREAM)
    probe.bind(('127.0.0.1', 0))
    port = probe.getsockname()[1]
    probe.close()
    return port


@pytest.fixture
def streams():
    """Binary stdout and text stderr stand-ins"""
    return io.BytesIO(), io.StringIO()
