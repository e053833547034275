"""
=============================================================================
SOCKET STREAM
=============================================================================

Buffered line and byte reading on top of a connected socket.

TCP delivers bytes in arbitrary pieces. A status line may arrive split
over two recv() calls, or together with the headers and half the body.
The stream keeps what recv() returned in a buffer and hands it out line
by line or byte by byte:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   recv() ──► _buffer: b"HTTP/1.1 200 OK\\r\\nHost: x\\r\\n\\r\\nfoo"        │
    │                        └──── read() ─────┘                           │
    │                                           └ read() ┘                 │
    │                                                    └ read_binary() ┘ │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Lines are returned as text decoded with ISO-8859-1, which maps every byte
to exactly one character. Bodies are returned as bytes.

=============================================================================
FAILURES
=============================================================================

    socket.timeout     ──► Timeout            (code 2)
    any other OSError  ──► ConnectionFailure  (code 1)

The stream owns its socket. close() releases it exactly once; the stream
is also a context manager.
=============================================================================
"""

import logging
import socket
from typing import Optional, Union

from ..errors import ConnectionFailure, InvalidArgument, Timeout


logger = logging.getLogger(__name__)

LINE_ENCODING = "iso-8859-1"


class Stream:
    """
    Reads from and writes to one connected socket.

    Args:
        sock: Connected socket (plain or TLS wrapped).
        buffer_size: Bytes requested per recv() call.

    Raises:
        InvalidArgument: If sock is not a socket-like object.
    """

    def __init__(self, sock: socket.socket, buffer_size: int = 8192):
        if not (hasattr(sock, "recv") and hasattr(sock, "sendall")):
            raise InvalidArgument(
                f"Given resource must be a connected socket, but was {type(sock).__name__}"
            )

        self._socket = sock
        self.buffer_size = buffer_size
        self._buffer = b""
        self._eof = False
        self._closed = False
        self._timeout = 0.0
        if hasattr(sock, "gettimeout") and sock.gettimeout() is not None:
            self._timeout = sock.gettimeout()

    # =========================================================================
    # TIMEOUT
    # =========================================================================

    def set_timeout(self, seconds: float, microseconds: int = 0) -> "Stream":
        """
        Set the timeout for subsequent reads and writes.

        Args:
            seconds: Whole or fractional seconds.
            microseconds: Additional microseconds.

        Returns:
            self for chaining.
        """
        self._timeout = float(seconds) + microseconds / 1_000_000
        self._socket.settimeout(self._timeout)
        return self

    @property
    def timeout(self) -> float:
        return self._timeout

    # =========================================================================
    # READING
    # =========================================================================

    def read(self, length: Optional[int] = None) -> str:
        """
        Read one line including its line terminator.

        Args:
            length: If given, at most length - 1 bytes are returned even
                when no line terminator was found yet.

        Returns:
            The line, or "" at end of stream.
        """
        limit = None if length is None else max(length - 1, 0)
        while True:
            newline = self._buffer.find(b"\n")
            if newline != -1 and (limit is None or newline < limit):
                return self._take(newline + 1).decode(LINE_ENCODING)
            if limit is not None and len(self._buffer) >= limit:
                return self._take(limit).decode(LINE_ENCODING)
            if not self._fill(f"a line of up to {length} bytes" if length else "a line"):
                return self._take(len(self._buffer)).decode(LINE_ENCODING)

    def read_line(self) -> str:
        """Read one line without its CRLF or LF terminator."""
        line = self.read()
        if line.endswith("\r\n"):
            return line[:-2]
        if line.endswith("\n"):
            return line[:-1]
        return line

    def read_binary(self, length: int = 1024) -> bytes:
        """
        Read up to length bytes.

        Returns what is buffered or arrives with the next recv(), so the
        result may be shorter than length. b"" means end of stream.
        """
        if not self._buffer:
            self._fill(f"{length} bytes")
        return self._take(min(length, len(self._buffer)))

    def eof(self) -> bool:
        """Check whether the peer closed the connection and the buffer is drained."""
        return self._eof and not self._buffer

    def _take(self, size: int) -> bytes:
        data, self._buffer = self._buffer[:size], self._buffer[size:]
        return data

    def _fill(self, wanted: str) -> bool:
        """Receive more data into the buffer; False once the peer closed."""
        if self._eof:
            return False
        self._ensure_open()
        try:
            chunk = self._socket.recv(self.buffer_size)
        except socket.timeout as e:
            raise Timeout(
                f"Reading of {wanted} failed: timeout of {self._timeout} seconds exceeded"
            ) from e
        except OSError as e:
            raise ConnectionFailure(f"Reading of {wanted} failed: {e}") from e

        if not chunk:
            self._eof = True
            return False
        self._buffer += chunk
        return True

    # =========================================================================
    # WRITING
    # =========================================================================

    def write(self, data: Union[str, bytes]) -> int:
        """
        Write all of data to the socket.

        Args:
            data: Bytes, or text which is encoded as UTF-8.

        Returns:
            Number of bytes written.
        """
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._ensure_open()
        try:
            self._socket.sendall(data)
        except socket.timeout as e:
            raise Timeout(
                f"Writing of {len(data)} bytes failed: timeout of {self._timeout} seconds exceeded"
            ) from e
        except OSError as e:
            raise ConnectionFailure(f"Writing of {len(data)} bytes failed: {e}") from e
        return len(data)

    # =========================================================================
    # CLOSING
    # =========================================================================

    def _ensure_open(self) -> None:
        if self._closed:
            raise ConnectionFailure("Stream is already closed")

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Close the underlying socket; later calls do nothing."""
        if self._closed:
            return
        self._closed = True
        try:
            self._socket.close()
        except OSError as e:
            logger.debug(f"Closing socket failed: {e}")

    def __enter__(self) -> "Stream":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
