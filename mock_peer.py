"""
Loopback peers speaking the version handshake, for tests.
"""

import socket
import struct
import threading

PREFIX = struct.Struct('<Q')


def recv_exact(conn: socket.socket, size: int) -> bytes:
    data = b''
    while len(data) < size:
        chunk = conn.recv(size - len(data))
        if not chunk:
            raise ConnectionError("peer closed early")
        data += chunk
    return data


def unused_address() -> str:
    """An address on which nothing listens, so connects are refused"""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(('127.0.0.1', 0))
    host, port = sock.getsockname()
    sock.close()
    return f"{host}:{port}"


class MockPeer:
    """
    TCP server answering the handshake.

    Modes:
        version  reply with ``version`` correctly framed
        silent   accept the connection and never reply
        short    declare ``len(version) + 5`` bytes but send only ``version``
        trickle  send the length prefix one byte every ``interval`` seconds,
                 then the version in one piece
    """

    def __init__(self, version: str = "9.9.9", mode: str = "version", interval: float = 0.3):
        self.version = version
        self.mode = mode
        self.interval = interval
        self.received = []
        self._stop = threading.Event()
        self._server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._server.bind(('127.0.0.1', 0))
        self._server.listen()
        self._server.settimeout(0.05)
        self.host, self.port = self._server.getsockname()
        self._thread = threading.Thread(target=self._accept_loop, daemon=True)
        self._thread.start()

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def _accept_loop(self) -> None:
        while not self._stop.is_set():
            try:
                conn, _ = self._server.accept()
            except socket.timeout:
                continue
            except OSError:
                break
            threading.Thread(target=self._handle, args=(conn,), daemon=True).start()

    def _handle(self, conn: socket.socket) -> None:
        with conn:
            conn.settimeout(5)
            if self.mode == "silent":
                self._stop.wait()
                return
            try:
                header = recv_exact(conn, PREFIX.size)
                total = PREFIX.unpack(header)[0]
                self.received.append(header + recv_exact(conn, total))
            except OSError:
                return

            body = self.version.encode('ascii')
            if self.mode == "short":
                conn.sendall(PREFIX.pack(len(body) + 5) + body)
                self._stop.wait(1)
            elif self.mode == "trickle":
                prefix = PREFIX.pack(len(body))
                try:
                    for i in range(len(prefix)):
                        if self._stop.wait(self.interval):
                            return
                        conn.sendall(prefix[i:i + 1])
                    conn.sendall(body)
                except OSError:
                    return
            else:
                conn.sendall(PREFIX.pack(len(body)) + body)

    def close(self) -> None:
        self._stop.set()
        self._server.close()
        self._thread.join(timeout=1)
