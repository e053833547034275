"""
pytest configuration and fixtures.
"""

import socket
from typing import Callable, Generator, List, Tuple

import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from httppeer.core.stream import Stream
from httppeer.http.uri import HttpUri


@pytest.fixture
def chunked_response() -> bytes:
    """Response with a chunked body spelling "foobar"."""
    return (
        b"HTTP/1.1 200 OK\r\n"
        b"Host: localhost\r\n"
        b"Transfer-Encoding: chunked\r\n"
        b"\r\n"
        b"3\r\nfoo\r\n"
        b"3;name=value\r\nbar\r\n"
        b"0\r\n"
        b"\r\n"
    )


@pytest.fixture
def continued_response() -> bytes:
    """Two 100 Continue blocks followed by the final 200 response."""
    return (
        b"HTTP/1.0 100 Continue\r\n"
        b"Host: localhost\r\n"
        b"\r\n"
        b"HTTP/1.0 100 Continue\r\n"
        b"\r\n"
        b"HTTP/1.1 200 OK\r\n"
        b"Content-Type: text/plain\r\n"
        b"Content-Length: 6\r\n"
        b"\r\n"
        b"foobar"
    )


@pytest.fixture
def stream_from() -> Generator[Callable[[bytes], Stream], None, None]:
    """Factory for streams that read the given bytes and then hit EOF."""
    streams: List[Stream] = []

    def factory(data: bytes) -> Stream:
        client, server = socket.socketpair()
        server.sendall(data)
        server.close()
        stream = Stream(client).set_timeout(2)
        streams.append(stream)
        return stream

    yield factory

    for stream in streams:
        stream.close()


@pytest.fixture
def peer() -> Generator[Tuple[Stream, socket.socket], None, None]:
    """Connected stream plus the socket on the other end."""
    client, server = socket.socketpair()
    server.settimeout(2)
    stream = Stream(client).set_timeout(2)

    yield stream, server

    stream.close()
    server.close()


@pytest.fixture
def serve(monkeypatch, peer):
    """
    Make every HttpUri connect to the peer fixture, which answers with
    the given response bytes. Returns a function reading what was sent.
    """
    stream, server = peer
    opened: List[float] = []

    def fake_open_socket(self, timeout=5, opener=None):
        opened.append(timeout)
        return stream

    monkeypatch.setattr(HttpUri, "open_socket", fake_open_socket)

    def respond(response: bytes) -> Callable[[], bytes]:
        server.sendall(response)

        def received() -> bytes:
            server.setblocking(False)
            data = b""
            try:
                while True:
                    piece = server.recv(65536)
                    if not piece:
                        break
                    data += piece
            except BlockingIOError:
                pass
            return data

        return received

    respond.opened = opened
    return respond


@pytest.fixture
def raw_response() -> Callable[..., bytes]:
    """Builder for minimal length delimited responses."""
    def build(body: bytes = b"ok", status: str = "200 OK") -> bytes:
        return (
            f"HTTP/1.1 {status}\r\n".encode()
            + f"Content-Length: {len(body)}\r\n\r\n".encode()
            + body
        )
    return build
