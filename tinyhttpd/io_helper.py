"""Low-level socket and line-reading helpers shared by the server and client."""

from __future__ import annotations

import socket
from typing import BinaryIO

LISTEN_BACKLOG = 1024


def read_line(stream: BinaryIO, maxlen: int) -> bytes:
    """Read one line of at most ``maxlen - 1`` bytes from a binary stream.

    Reading stops after a newline, at end of stream, or when the limit is
    reached. The newline, if read, is kept. An empty result means end of
    stream.
    """
    if maxlen < 1:
        raise ValueError("maxlen must be at least 1")
    line = bytearray()
    while len(line) < maxlen - 1:
        ch = stream.read(1)
        if not ch:
            break
        line += ch
        if ch == b"\n":
            break
    return bytes(line)


def open_client_socket(hostname: str, port: int) -> socket.socket:
    """Open a TCP connection to ``hostname:port`` and return the socket.

    Raises ``OSError`` (``socket.gaierror`` for lookup failures) when the
    host cannot be resolved or the connection cannot be made.
    """
    address = socket.gethostbyname(hostname)
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.connect((address, port))
    except OSError:
        sock.close()
        raise
    return sock


def open_listen_socket(port: int) -> socket.socket:
    """Create a socket listening on ``port`` on every IPv4 address of the host."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind(("", port))
        sock.listen(LISTEN_BACKLOG)
    except OSError:
        sock.close()
        raise
    return sock