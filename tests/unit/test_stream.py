"""
Unit tests for Stream and the Socket connector.
"""

import socket

import pytest

from httppeer.core.socket_client import Socket
from httppeer.core.stream import Stream
from httppeer.errors import ConnectionFailure, InvalidArgument, Timeout


class TestStreamReading:
    """Tests for reading from a stream."""

    def test_read_keeps_line_terminator(self, stream_from):
        """Test read() returns the line with CRLF."""
        stream = stream_from(b"foo\r\nbar\n")

        assert stream.read() == "foo\r\n"
        assert stream.read() == "bar\n"
        assert stream.read() == ""

    def test_read_line_strips_terminator(self, stream_from):
        """Test read_line() removes CRLF and LF only."""
        stream = stream_from(b"foo \r\nbar\nbaz")

        assert stream.read_line() == "foo "
        assert stream.read_line() == "bar"
        assert stream.read_line() == "baz"
        assert stream.read_line() == ""

    def test_read_with_length(self, stream_from):
        """Test that at most length - 1 bytes are returned."""
        stream = stream_from(b"abcdef\r\n")

        assert stream.read(4) == "abc"
        assert stream.read() == "def\r\n"

    def test_read_binary(self, stream_from):
        """Test reading raw bytes."""
        stream = stream_from(b"\x00\x01\x02\x03")

        assert stream.read_binary(2) == b"\x00\x01"
        assert stream.read_binary() == b"\x02\x03"
        assert stream.read_binary() == b""

    def test_mixed_line_and_binary_reads(self, stream_from):
        """Test that lines and bytes share one buffer."""
        stream = stream_from(b"HTTP/1.1 200 OK\r\n\r\nbody")

        assert stream.read_line() == "HTTP/1.1 200 OK"
        assert stream.read_line() == ""
        assert stream.read_binary(10) == b"body"

    def test_lines_are_latin_1(self, stream_from):
        """Test that every byte maps to one character."""
        stream = stream_from(b"caf\xe9\r\n")

        assert stream.read_line() == "café"

    def test_eof(self, stream_from):
        """Test eof() only after the buffer is drained."""
        stream = stream_from(b"foo")

        assert not stream.eof()
        assert stream.read_line() == "foo"
        assert stream.eof()

    def test_read_timeout(self, peer):
        """Test that a silent peer raises Timeout."""
        stream, _ = peer
        stream.set_timeout(0, 10_000)

        with pytest.raises(Timeout) as exc_info:
            stream.read()

        assert exc_info.value.code == 2
        assert "timeout of 0.01 seconds exceeded" in str(exc_info.value)


class TestStreamWriting:
    """Tests for writing and closing."""

    def test_write_text_and_bytes(self, peer):
        """Test that text is UTF-8 encoded and byte counts are returned."""
        stream, server = peer

        assert stream.write("Jürgen") == 7
        assert stream.write(b"\r\n") == 2
        assert server.recv(100) == "Jürgen\r\n".encode("utf-8")

    def test_close_is_idempotent(self, peer):
        """Test closing twice."""
        stream, _ = peer

        stream.close()
        stream.close()

        assert stream.closed

    def test_use_after_close_fails(self, peer):
        """Test that a closed stream can not be used."""
        stream, _ = peer
        stream.close()

        with pytest.raises(ConnectionFailure):
            stream.write("foo")

        with pytest.raises(ConnectionFailure):
            stream.read()

    def test_context_manager_closes(self):
        """Test the with statement closes the stream."""
        client, server = socket.socketpair()

        with Stream(client) as stream:
            assert not stream.closed

        assert stream.closed
        server.close()

    def test_set_timeout(self, peer):
        """Test timeout from seconds and microseconds."""
        stream, _ = peer

        assert stream.set_timeout(1, 500_000) is stream
        assert stream.timeout == 1.5

    def test_non_socket_raises(self):
        """Test that only socket-like objects are accepted."""
        with pytest.raises(InvalidArgument):
            Stream("not a socket")


class TestSocket:
    """Tests for the Socket connector."""

    def test_empty_host_raises(self):
        """Test that a host is required."""
        with pytest.raises(InvalidArgument):
            Socket("")

    def test_negative_port_raises(self):
        """Test that negative ports are rejected."""
        with pytest.raises(InvalidArgument):
            Socket("localhost", -1)

    def test_prefix_and_address(self):
        """Test TLS detection and bracket stripping."""
        assert Socket("example.com", 443, "ssl://").uses_ssl
        assert Socket("example.com", 443, "tls://").uses_ssl
        assert not Socket("example.com").uses_ssl
        assert Socket("[::1]", 8080).address == ("::1", 8080)

    def test_connect_returns_stream(self):
        """Test connecting through a custom opener."""
        client, server = socket.socketpair()

        def opener(address, timeout):
            return client

        stream = Socket("localhost", 80, opener=opener).connect(2)

        try:
            assert isinstance(stream, Stream)
            stream.write("ping")
            assert server.recv(10) == b"ping"
        finally:
            stream.close()
            server.close()

    def test_connection_refused(self):
        """Test that OS errors become ConnectionFailure."""
        def opener(address, timeout):
            raise ConnectionRefusedError(111, "Connection refused")

        with pytest.raises(ConnectionFailure) as exc_info:
            Socket("localhost", 80, opener=opener).connect(2)

        assert exc_info.value.code == 1
        assert str(exc_info.value).startswith(
            "Connect to localhost:80 within 2 second(s) failed:"
        )

    def test_connect_timeout(self):
        """Test that a slow handshake becomes Timeout."""
        def opener(address, timeout):
            raise socket.timeout("timed out")

        with pytest.raises(Timeout) as exc_info:
            Socket("example.com", 443, "ssl://", opener=opener).connect(0.5)

        assert str(exc_info.value) == (
            "Connect to ssl://example.com:443 within 0.5 second(s) failed: timed out"
        )
