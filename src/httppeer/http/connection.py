"""
Fluent builder for a single request.

    >>> response = (
    ...     connect("http://example.com/")
    ...     .timeout(5)
    ...     .as_user_agent("httppeer")
    ...     .using_header("X-Binford", "6100")
    ...     .get()
    ... )
"""

from typing import Any, Mapping, Optional, Union

from ..errors import InvalidArgument
from . import protocol
from .headers import HeaderList
from .request import Body, HttpRequest, Version
from .response import HttpResponse
from .uri import HttpUri
from .version import HTTP_1_1


class HttpConnection:
    """
    Collects timeout and headers, then sends the request.

    Args:
        http_uri: Target of the request.
        headers: Initial headers, a new empty list if not given.
    """

    def __init__(self, http_uri: HttpUri, headers: Optional[HeaderList] = None):
        self._http_uri = http_uri
        self._headers = headers if headers is not None else HeaderList()
        self._timeout: float = 30

    @property
    def headers(self) -> HeaderList:
        return self._headers

    def timeout(self, seconds: float) -> "HttpConnection":
        self._timeout = seconds
        return self

    def as_user_agent(self, user_agent: str) -> "HttpConnection":
        self._headers.put_user_agent(user_agent)
        return self

    def refered_from(self, referer: str) -> "HttpConnection":
        self._headers.put_referer(referer)
        return self

    def with_cookie(self, cookies: Mapping[str, Any]) -> "HttpConnection":
        self._headers.put_cookie(cookies)
        return self

    def authorized_as(self, user: str, password: str) -> "HttpConnection":
        self._headers.put_authorization(user, password)
        return self

    def using_header(self, name: str, value: Union[str, int, float, bool]) -> "HttpConnection":
        self._headers.put(name, value)
        return self

    # =========================================================================
    # SENDING
    # =========================================================================

    def _request(self) -> HttpRequest:
        return HttpRequest(self._http_uri, self._headers)

    def get(self, version: Version = HTTP_1_1) -> HttpResponse:
        return self._request().get(self._timeout, version)

    def head(self, version: Version = HTTP_1_1) -> HttpResponse:
        return self._request().head(self._timeout, version)

    def post(self, body: Body, version: Version = HTTP_1_1) -> HttpResponse:
        return self._request().post(body, self._timeout, version)

    def put(self, body: Union[str, bytes], version: Version = HTTP_1_1) -> HttpResponse:
        return self._request().put(body, self._timeout, version)

    def delete(self, version: Version = HTTP_1_1) -> HttpResponse:
        return self._request().delete(self._timeout, version)

    def send(self, method: str, body: Optional[Body] = None, version: Version = HTTP_1_1) -> HttpResponse:
        """Send a request by method name."""
        method = method.upper()
        if method == protocol.GET:
            return self.get(version)
        if method == protocol.HEAD:
            return self.head(version)
        if method == protocol.POST:
            return self.post(body if body is not None else "", version)
        if method == protocol.PUT:
            return self.put(body if body is not None else "", version)
        if method == protocol.DELETE:
            return self.delete(version)
        raise InvalidArgument(f"Unsupported HTTP method {method}")


def connect(uri: Union[str, HttpUri], headers: Optional[HeaderList] = None) -> HttpConnection:
    """Start a request to uri, a string or an HttpUri."""
    return HttpUri.cast_from(uri).connect(headers)
