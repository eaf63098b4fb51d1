"""
Version Probe - Length-prefixed version handshake with a single peer

Handshake (little-endian, 8-byte unsigned prefixes):

    client -> server   total size of what follows (8 + len(client version))
    client -> server   len(client version)
    client -> server   client version bytes
    server -> client   len(server version)
    server -> client   server version bytes

One TCP connection is opened per probe and closed before returning.
"""

import socket
import time
import struct
import logging
from typing import Optional, Tuple

from ..core.errors import ProbeError

logger = logging.getLogger(__name__)

PREFIX = struct.Struct('<Q')
PREFIX_SIZE = PREFIX.size

DEFAULT_CLIENT_VERSION = "1.2.0"
DEFAULT_MAX_VERSION_LENGTH = 1024


def split_address(address: str) -> Tuple[str, int]:
    """Split ``host:port`` (``[v6addr]:port`` for IPv6) into its parts"""
    host, sep, port = address.rpartition(':')
    if not sep or not host:
        raise ValueError(f"missing port in address {address!r}")
    if host.startswith('[') and host.endswith(']'):
        host = host[1:-1]
    elif ':' in host:
        raise ValueError(f"IPv6 host must be bracketed in address {address!r}")
    if not host or not (port.isascii() and port.isdigit()):
        raise ValueError(f"invalid port in address {address!r}")
    port_number = int(port)
    if not 0 < port_number < 65536:
        raise ValueError(f"port out of range in address {address!r}")
    return host, port_number


def encode_handshake(version: str) -> bytes:
    """Client side of the handshake: declared size, version length, version"""
    body = version.encode('ascii')
    return PREFIX.pack(PREFIX_SIZE + len(body)) + PREFIX.pack(len(body)) + body


def read_prefix(sock: socket.socket, deadline: Optional[float] = None) -> int:
    """
    Receive an 8-byte little-endian length prefix.

    With a ``deadline`` (a ``time.monotonic()`` value) the whole prefix must
    arrive before it, however many receives that takes.
    """
    data = b''
    while len(data) < PREFIX_SIZE:
        if deadline is not None:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise socket.timeout(f"timed out after {len(data)} of {PREFIX_SIZE} prefix bytes")
            sock.settimeout(remaining)
        chunk = sock.recv(PREFIX_SIZE - len(data))
        if not chunk:
            raise ConnectionError(f"connection closed after {len(data)} of {PREFIX_SIZE} prefix bytes")
        data += chunk
    return PREFIX.unpack(data)[0]


class VersionProbe:
    """Asks one peer for its self-reported version"""

    def __init__(self, timeout: float = 60.0,
                 client_version: str = DEFAULT_CLIENT_VERSION,
                 max_version_length: int = DEFAULT_MAX_VERSION_LENGTH):
        """
        Initialize the probe.

        Args:
            timeout: Seconds allowed for the connect and for each read
            client_version: Version string announced to the peer
            max_version_length: Largest server version accepted, in bytes
        """
        self.timeout = timeout
        self.client_version = client_version
        self.max_version_length = max_version_length
        self._handshake = encode_handshake(client_version)

    def probe_version(self, address: str) -> str:
        """
        Run the handshake against ``address`` and return the peer's version.

        Raises:
            ProbeError: Any connect, write or read failure, a timeout, or a
                response shorter than its declared length
        """
        try:
            host, port = split_address(address)
        except ValueError as e:
            raise ProbeError(e, address=address) from e

        try:
            with socket.create_connection((host, port), timeout=self.timeout) as sock:
                sock.sendall(self._handshake)
                version = self._receive_version(sock)
        except ProbeError as e:
            e.address = address
            raise
        except (OSError, ValueError) as e:
            # ValueError covers idna failures on malformed host names
            raise ProbeError(e, address=address) from e

        logger.debug(f"{address} reported version {version!r}")
        return version

    def _receive_version(self, sock: socket.socket) -> str:
        length = read_prefix(sock, deadline=time.monotonic() + self.timeout)
        if length > self.max_version_length:
            raise ProbeError(f"declared version length {length} exceeds {self.max_version_length}")
        if length == 0:
            return ""

        sock.settimeout(self.timeout)
        data = sock.recv(length)
        if len(data) < length:
            raise ProbeError(f"short version: got {len(data)} of {length} bytes")
        try:
            return data.decode('ascii')
        except UnicodeDecodeError as e:
            raise ProbeError(e) from e


def probe_version(address: str, timeout: float = 60.0,
                  client_version: str = DEFAULT_CLIENT_VERSION) -> str:
    """Convenience function for a single version probe."""
    return VersionProbe(timeout=timeout, client_version=client_version).probe_version(address)
