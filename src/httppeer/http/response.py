"""
=============================================================================
HTTP RESPONSE READING
=============================================================================

Reads a response from a stream, lazily: nothing is read before the first
accessor is used, and every part is read only once.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                  RESPONSE READING STATES                            │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   UNREAD                                                            │
    │     │  status_line, status_code, headers, ... accessed              │
    │     ▼                                                                │
    │   read status line ──► does not match? ──► ProtocolViolation        │
    │     │                                                                │
    │     ▼                                                                │
    │   read header lines until empty line                                │
    │     │                                                                │
    │     ├── status 100 or 102? ──► discard block, read next status line │
    │     ▼                                                                │
    │   HEADERS READY                                                     │
    │     │  body accessed                                                │
    │     ▼                                                                │
    │   Transfer-Encoding: chunked? ──► decode chunks                     │
    │     │ no                                                             │
    │     ▼                                                                │
    │   read Content-Length bytes (4096 if absent) or until EOF           │
    │     ▼                                                                │
    │   BODY READY                                                        │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
CHUNKED TRANSFER ENCODING
=============================================================================

    3;name=value\\r\\n     ◄── hex size, extension ignored
    foo\\r\\n              ◄── exactly size bytes plus CRLF
    3\\r\\n
    bar\\r\\n
    0\\r\\n                ◄── last chunk
    \\r\\n                 ◄── end of (ignored) trailer

After decoding, Content-Length holds the decoded size and the
Transfer-Encoding header is removed.
=============================================================================
"""

import logging
import re
from typing import Optional

from ..core.stream import Stream
from ..errors import ConnectionFailure, ProtocolViolation
from . import protocol
from .headers import HeaderList
from .status_codes import StatusClass, status_class_for
from .version import HttpVersion


logger = logging.getLogger(__name__)

DEFAULT_READ_LENGTH = 4096

CONTINUATION_CODES = (100, 102)

_C_ESCAPES = {
    "\a": "\\a", "\b": "\\b", "\t": "\\t", "\n": "\\n",
    "\v": "\\v", "\f": "\\f", "\r": "\\r", "!": "\\!",
}


def escape_control_characters(text: str) -> str:
    """
    Escape control and non-ASCII characters C-style, "\\036" for byte 0x1e.

    "!" is escaped as "\\!" as well.
    """
    escaped = []
    for char in text:
        code = ord(char)
        if char in _C_ESCAPES:
            escaped.append(_C_ESCAPES[char])
        elif code < 0x20 or 0x7F <= code <= 0xFF:
            escaped.append(f"\\{code:03o}")
        else:
            escaped.append(char)
    return "".join(escaped)


class HttpResponse:
    """
    Response to a request, read from the request's stream.

    Example:
        >>> response = HttpResponse(stream)
        >>> response.status_code
        200
        >>> response.headers.get("Content-Type")
        'text/html'
        >>> response.body
        b'<html>...'

    Raises (from any accessor):
        ProtocolViolation: If the response does not follow HTTP grammar.
        Timeout: If the peer is too slow.
        ConnectionFailure: If reading fails otherwise.

    After a failed read the stream is not touched again: every accessor
    raises the same exception.
    """

    STATUS_LINE_PATTERN = re.compile(r"^(HTTP/\d+\.\d+) (\d{3}) ([^\r]*)")
    CHUNK_SIZE_PATTERN = re.compile(r"^\s*([0-9a-fA-F]+)")

    def __init__(self, stream: Stream):
        self._stream = stream
        self._headers: Optional[HeaderList] = None
        self._status_line: Optional[str] = None
        self._http_version: Optional[HttpVersion] = None
        self._status_code: Optional[int] = None
        self._reason_phrase: Optional[str] = None
        self._body: Optional[bytes] = None
        # Set by the first failed read; every later access raises it again
        self._failure: Optional[ConnectionFailure] = None

    @classmethod
    def create(cls, stream: Stream) -> "HttpResponse":
        return cls(stream)

    # =========================================================================
    # ACCESSORS
    # =========================================================================

    @property
    def status_line(self) -> str:
        self._read_head()
        return self._status_line

    @property
    def http_version(self) -> HttpVersion:
        self._read_head()
        return self._http_version

    @property
    def status_code(self) -> int:
        self._read_head()
        return self._status_code

    @property
    def status_code_class(self) -> StatusClass:
        return status_class_for(self.status_code)

    @property
    def reason_phrase(self) -> str:
        self._read_head()
        return self._reason_phrase

    @property
    def headers(self) -> HeaderList:
        self._read_head()
        return self._headers

    @property
    def body(self) -> bytes:
        """The decoded body, read on first access."""
        self._read_head()
        if self._body is None:
            try:
                if self._headers.get("Transfer-Encoding") == "chunked":
                    body = self._read_chunked()
                else:
                    body = self._read_default()
            except ConnectionFailure as e:
                self._failure = e
                raise
            self._body = body
            logger.debug(f"Read body of {len(self._body)} bytes")
        return self._body

    @property
    def text(self) -> str:
        """The body decoded with the charset from Content-Type, UTF-8 by default."""
        charset = "utf-8"
        content_type = self.headers.get("Content-Type", "")
        match = re.search(r"charset=\"?([\w.:-]+)", content_type, re.IGNORECASE)
        if match:
            charset = match.group(1)
        try:
            return self.body.decode(charset, errors="replace")
        except LookupError:
            return self.body.decode("utf-8", errors="replace")

    # =========================================================================
    # HEAD
    # =========================================================================

    def _read_head(self) -> None:
        if self._failure is not None:
            raise self._failure
        if self._headers is not None:
            return

        try:
            while True:
                status_line = self._stream.read_line()
                version, code, phrase = self._parse_status_line(status_line)
                headers = HeaderList(self._read_header_block())
                if code not in CONTINUATION_CODES:
                    break
                logger.debug(f"Skipping informational response {status_line}")
        except ConnectionFailure as e:
            self._failure = e
            raise

        self._status_line = status_line
        self._http_version = version
        self._status_code = code
        self._reason_phrase = phrase
        # Set last: a filled header list marks the head as completely read
        self._headers = headers
        logger.debug(f"Received {status_line}")

    def _parse_status_line(self, status_line: str):
        match = self.STATUS_LINE_PATTERN.match(status_line)
        if match is None:
            raise ProtocolViolation(
                f'Received status line "{escape_control_characters(status_line)}" '
                f'does not match expected format "{self.STATUS_LINE_PATTERN.pattern}"'
            )
        version = HttpVersion.from_string(match.group(1))
        return version, int(match.group(2)), match.group(3)

    def _read_header_block(self) -> str:
        block = ""
        while not self._stream.eof():
            line = self._stream.read_line()
            if line == "":
                break
            block += protocol.line(line)
        return block

    # =========================================================================
    # BODY
    # =========================================================================

    def _read_chunked(self) -> bytes:
        body = b""
        size = self._read_chunk_size()
        while size > 0:
            chunk = self._read_exactly(size + 2)
            if not chunk.endswith(b"\r\n"):
                raise ProtocolViolation(
                    f"Chunk of {size} bytes is not terminated by CRLF"
                )
            body += chunk[:-2]
            size = self._read_chunk_size()

        # Trailer fields end with an empty line
        while not self._stream.eof() and self._stream.read_line() != "":
            pass

        self._headers.put("Content-Length", len(body))
        self._headers.remove("Transfer-Encoding")
        return body

    def _read_chunk_size(self) -> int:
        line = self._stream.read_line()
        match = self.CHUNK_SIZE_PATTERN.match(line)
        if match is None:
            raise ProtocolViolation(
                f'Invalid chunk size line "{escape_control_characters(line)}"'
            )
        return int(match.group(1), 16)

    def _read_exactly(self, length: int) -> bytes:
        data = b""
        while len(data) < length:
            piece = self._stream.read_binary(length - len(data))
            if not piece:
                raise ProtocolViolation(
                    f"Connection closed after {len(data)} of {length} chunk bytes"
                )
            data += piece
        return data

    def _read_default(self) -> bytes:
        content_length = self._headers.get("Content-Length")
        if content_length is None:
            length = DEFAULT_READ_LENGTH
        else:
            try:
                length = int(content_length)
            except ValueError as e:
                raise ProtocolViolation(f'Invalid Content-Length "{content_length}"') from e

        body = b""
        while len(body) < length and not self._stream.eof():
            piece = self._stream.read_binary(length - len(body))
            if not piece:
                break
            body += piece
        return body

    # =========================================================================
    # CLOSING
    # =========================================================================

    def close(self) -> None:
        self._stream.close()

    def __enter__(self) -> "HttpResponse":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
