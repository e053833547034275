"""
=============================================================================
HTTP REQUEST WRITING
=============================================================================

Writes one request to a freshly opened stream and hands the stream over
to an HttpResponse.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    REQUEST ON THE WIRE                              │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   POST /form HTTP/1.1\\r\\n                  ◄── request line         │
    │   Host: example.com\\r\\n                    ◄── always first header  │
    │   Content-Type: application/x-www-form-urlencoded\\r\\n               │
    │   Content-Length: 20\\r\\n                   ◄── header list, in order│
    │   \\r\\n                                     ◄── end of head          │
    │   foo=bar&ba+z=dum+my&                     ◄── body (POST/PUT only) │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Method rules:
    GET, HEAD   the URI's query string is appended to the request target
    HEAD        sends "Connection: close"
    POST        a mapping body is form-url-encoded, Content-Length is set
    PUT         body sent as given, Content-Length is set
    DELETE      no body; the query string is not sent

Only HTTP/1.0 and HTTP/1.1 are accepted. The version is checked before a
socket is opened, so an invalid version never causes network traffic.
=============================================================================
"""

import logging
from typing import Any, Mapping, Optional, Union
from urllib.parse import quote_plus

from ..core.stream import Stream
from ..errors import ConnectionFailure, InvalidArgument
from . import protocol
from .headers import HeaderList
from .response import HttpResponse
from .uri import HttpUri
from .version import HTTP_1_0, HTTP_1_1, HttpVersion


logger = logging.getLogger(__name__)

Body = Union[str, bytes, Mapping[str, Any]]
Version = Union[str, HttpVersion]


class HttpRequest:
    """
    A request to one HTTP URI.

    Example:
        >>> uri = HttpUri.from_string("http://example.com/")
        >>> response = HttpRequest(uri, HeaderList()).get(timeout=5)
        >>> response.status_code
        200

    Args:
        http_uri: Target of the request.
        headers: Headers sent after the Host header.
    """

    def __init__(self, http_uri: HttpUri, headers: Optional[HeaderList] = None):
        self._http_uri = http_uri
        self._headers = headers if headers is not None else HeaderList()

    @classmethod
    def create(cls, http_uri: HttpUri, headers: Optional[HeaderList] = None) -> "HttpRequest":
        return cls(http_uri, headers)

    @property
    def headers(self) -> HeaderList:
        return self._headers

    # =========================================================================
    # METHODS
    # =========================================================================

    def get(self, timeout: float = 30, version: Version = HTTP_1_1) -> HttpResponse:
        """Send a GET request and return the response."""
        return self._send(protocol.GET, timeout, version, HeaderList(self._headers))

    def head(self, timeout: float = 30, version: Version = HTTP_1_1) -> HttpResponse:
        """Send a HEAD request and return the response."""
        headers = HeaderList(self._headers).put("Connection", "close")
        return self._send(protocol.HEAD, timeout, version, headers)

    def post(self, body: Body, timeout: float = 30, version: Version = HTTP_1_1) -> HttpResponse:
        """
        Send a POST request and return the response.

        Args:
            body: Raw body, or a mapping which is sent form-url-encoded.
            timeout: Seconds for connecting and every read or write.
            version: HTTP/1.0 or HTTP/1.1.
        """
        headers = HeaderList(self._headers)
        if isinstance(body, Mapping):
            body = self._encode_form(body)
            headers.put("Content-Type", "application/x-www-form-urlencoded")
        return self._send(protocol.POST, timeout, version, headers, body)

    def put(self, body: Union[str, bytes], timeout: float = 30, version: Version = HTTP_1_1) -> HttpResponse:
        """Send a PUT request with body and return the response."""
        return self._send(protocol.PUT, timeout, version, HeaderList(self._headers), body)

    def delete(self, timeout: float = 30, version: Version = HTTP_1_1) -> HttpResponse:
        """Send a DELETE request and return the response."""
        return self._send(protocol.DELETE, timeout, version, HeaderList(self._headers))

    # =========================================================================
    # WRITING
    # =========================================================================

    @staticmethod
    def _encode_form(fields: Mapping[str, Any]) -> str:
        return "".join(
            f"{quote_plus(str(name), safe='')}={quote_plus(str(value), safe='')}&"
            for name, value in fields.items()
        )

    @staticmethod
    def _check_version(version: Version) -> HttpVersion:
        http_version = HttpVersion.cast_from(version)
        if http_version != HTTP_1_0 and http_version != HTTP_1_1:
            raise InvalidArgument(
                f"Invalid HTTP version {http_version}, please use either "
                f"{HTTP_1_0} or {HTTP_1_1}."
            )
        return http_version

    def _send(
        self,
        method: str,
        timeout: float,
        version: Version,
        headers: HeaderList,
        body: Optional[Union[str, bytes]] = None,
    ) -> HttpResponse:
        http_version = self._check_version(version)
        payload = None
        if body is not None:
            payload = body.encode("utf-8") if isinstance(body, str) else body
            headers.put("Content-Length", len(payload))

        stream = self._http_uri.open_socket(timeout)
        try:
            self.write(stream, method, http_version, headers, payload)
        except ConnectionFailure:
            stream.close()
            raise

        return HttpResponse(stream)

    def write(
        self,
        stream: Stream,
        method: str,
        version: HttpVersion,
        headers: HeaderList,
        body: Optional[bytes] = None,
    ) -> int:
        """
        Write the request to a stream.

        Returns:
            Number of bytes written.
        """
        target = self._http_uri.path
        if method in (protocol.GET, protocol.HEAD) and self._http_uri.has_query_string():
            target += f"?{self._http_uri.query_string}"

        logger.debug(f"{method} {self._http_uri.as_string_without_port()} {version}")

        written = stream.write(protocol.line(f"{method} {target} {version}"))
        written += stream.write(protocol.line(f"Host: {self._host()}"))
        for name, value in headers:
            written += stream.write(protocol.line(f"{name}: {value}"))
        written += stream.write(protocol.empty_line())
        if body:
            written += stream.write(body)
        return written

    def _host(self) -> str:
        if self._http_uri.has_default_port():
            return self._http_uri.hostname
        return f"{self._http_uri.hostname}:{self._http_uri.port()}"
