import io
import socket

import pytest

from tinyhttpd.io_helper import open_client_socket, open_listen_socket, read_line


def test_read_line_keeps_newline():
    stream = io.BytesIO(b"GET / HTTP/1.0\r\nHost: x\r\n")
    assert read_line(stream, 8192) == b"GET / HTTP/1.0\r\n"
    assert read_line(stream, 8192) == b"Host: x\r\n"


def test_read_line_returns_empty_at_eof():
    stream = io.BytesIO(b"")
    assert read_line(stream, 8192) == b""


def test_read_line_last_line_without_newline():
    stream = io.BytesIO(b"tail")
    assert read_line(stream, 8192) == b"tail"
    assert read_line(stream, 8192) == b""


def test_read_line_respects_limit():
    data = b"abcdefgh\n"
    stream = io.BytesIO(data)
    first = read_line(stream, 4)
    assert first == data[:3]
    rest = read_line(stream, 8192)
    assert first + rest == data


def test_read_line_rejects_bad_limit():
    with pytest.raises(ValueError):
        read_line(io.BytesIO(b"x\n"), 0)


def test_listen_and_connect_round_trip():
    listener = open_listen_socket(0)
    try:
        port = listener.getsockname()[1]
        client = open_client_socket("127.0.0.1", port)
        conn, _ = listener.accept()
        try:
            client.sendall(b"hello\r\nworld\r\n")
            with conn.makefile("rb") as rfile:
                assert read_line(rfile, 8192) == b"hello\r\n"
                assert read_line(rfile, 8192) == b"world\r\n"
        finally:
            conn.close()
            client.close()
    finally:
        listener.close()


def test_listen_socket_has_reuseaddr():
    listener = open_listen_socket(0)
    try:
        assert listener.getsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR) != 0
        assert listener.getsockname()[1] > 0
    finally:
        listener.close()


def test_listen_on_busy_port_raises():
    listener = open_listen_socket(0)
    try:
        port = listener.getsockname()[1]
        with pytest.raises(OSError):
            open_listen_socket(port)
    finally:
        listener.close()


def test_connect_to_closed_port_raises():
    probe = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    with pytest.raises(OSError):
        open_client_socket("127.0.0.1", port)