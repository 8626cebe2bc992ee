"""A minimal HTTP client that fetches one path and prints the response."""

from __future__ import annotations

import codecs
import re
import socket
import sys
from typing import BinaryIO, Optional, Sequence, TextIO

from tinyhttpd.io_helper import open_client_socket, read_line

MAXBUF = 8192

_ATOI = re.compile(r"[ \t\n\r\f\v]*([+-]?[0-9]+)")


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def send_request(wfile: BinaryIO, filename: str, hostname: Optional[str] = None) -> None:
    """Send a GET request for ``filename``, naming this machine as the host."""
    if hostname is None:
        hostname = socket.gethostname()
    wfile.write(f"GET {filename} HTTP/1.1\nhost: {hostname}\n\r\n".encode("utf-8"))
    wfile.flush()


def print_response(rfile: BinaryIO, out: Optional[TextIO] = None) -> None:
    """Print each header line prefixed with ``Header:``, then the body."""
    if out is None:
        out = sys.stdout
    line = read_line(rfile, MAXBUF)
    while line and line != b"\r\n":
        out.write("Header: " + line.decode("utf-8", errors="replace"))
        line = read_line(rfile, MAXBUF)

    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    for chunk in iter(lambda: read_line(rfile, MAXBUF), b""):
        out.write(decoder.decode(chunk))
    out.write(decoder.decode(b"", final=True))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Fetch ``<filename>`` from ``<host>:<port>`` and print the response."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 3:
        print("Usage: wclient <host> <port> <filename>", file=sys.stderr)
        return 1
    host, port, filename = args
    try:
        sock = open_client_socket(host, _atoi(port))
    except OSError as exc:
        print(f"wclient: {exc}", file=sys.stderr)
        return 1
    with sock, sock.makefile("rb") as rfile, sock.makefile("wb") as wfile:
        send_request(wfile, filename)
        print_response(rfile)
    return 0


if __name__ == "__main__":
    sys.exit(main())