"""
=============================================================================
HTTP URI
=============================================================================

Uri restricted to the http and https schemes.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                 WHAT HttpUri ADDS TO Uri                            │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   validity     scheme is http or https, host is not empty           │
    │   user info    rejected under RFC 7230, allowed under RFC 2616      │
    │   path         "" becomes "/"                                       │
    │   port()       explicit port, else 80 (http) or 443 (https)         │
    │   DNS          A, AAAA or CNAME record                              │
    │   I/O          connect() / open_socket()                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

    >>> uri = HttpUri.from_string("http://example.net:8080/foo.php?bar=baz#top")
    >>> str(uri.to_https())
    'https://example.net/foo.php?bar=baz#top'
=============================================================================
"""

import copy
from typing import TYPE_CHECKING, Any, Optional, Union

from ..core.socket_client import Opener, Socket
from ..core.stream import Stream
from ..errors import InvalidArgument, MalformedUri
from ..uri.parsed import ParsedUri
from ..uri.records import RecordLookup, default_lookup
from ..uri.uri import SchemeRules, Uri
from . import protocol
from .headers import HeaderList

if TYPE_CHECKING:
    from .connection import HttpConnection


class HttpSchemeRules:
    """HTTP rules, layered over the generic rules they wrap."""

    dns_record_types = ("A", "AAAA", "CNAME")

    def __init__(self, generic: Optional[SchemeRules] = None):
        self._generic = generic or SchemeRules()

    def is_syntactically_valid(self, parsed: ParsedUri) -> bool:
        if not self._generic.is_syntactically_valid(parsed):
            return False
        if parsed.scheme not in protocol.DEFAULT_PORTS:
            return False
        return bool(parsed.hostname)

    def has_default_port(self, parsed: ParsedUri) -> bool:
        if self._generic.has_default_port(parsed):
            return True
        return protocol.DEFAULT_PORTS.get(parsed.scheme) == parsed.port

    def port(self, parsed: ParsedUri, default: Optional[int] = None) -> int:
        explicit = self._generic.port(parsed)
        if explicit is not None:
            return explicit
        return protocol.DEFAULT_PORTS.get(parsed.scheme, default)

    def hostname(self, parsed: ParsedUri) -> str:
        return self._generic.hostname(parsed) or ""


class HttpUri(Uri):
    """A valid http or https URI."""

    rules = HttpSchemeRules()

    # =========================================================================
    # FACTORIES
    # =========================================================================

    @classmethod
    def from_string(cls, uri_string: str, rfc: str = protocol.RFC_7230) -> "HttpUri":
        """
        Parse and validate an HTTP URI.

        Args:
            uri_string: The URI to parse.
            rfc: protocol.RFC_7230 rejects user info, protocol.RFC_2616 allows it.

        Returns:
            HttpUri instance; an empty path is replaced by "/".

        Raises:
            MalformedUri: If the string is not a valid HTTP URI.
            InvalidArgument: If rfc is not a known RFC identifier.
        """
        if not uri_string:
            raise MalformedUri("Empty string is not a valid HTTP URI")
        if not protocol.is_valid_rfc(rfc):
            raise InvalidArgument(f"Unknown RFC {rfc}")

        parsed = ParsedUri(uri_string)
        if parsed.has_user() and rfc == protocol.RFC_7230:
            raise MalformedUri(
                f"The URI {uri_string} is not a valid HTTP URI according to "
                f"{protocol.RFC_7230}: contains user info"
            )

        if not cls.rules.is_syntactically_valid(parsed):
            raise MalformedUri(f"The URI {uri_string} is not a valid HTTP URI")

        if parsed.path == "":
            parsed = parsed.transpose({"path": "/"})

        return cls(parsed)

    @classmethod
    def from_parts(
        cls,
        scheme: str,
        host: str,
        port: Optional[int] = None,
        path: str = "/",
        query_string: Optional[str] = None,
    ) -> "HttpUri":
        """
        Build an HTTP URI from its parts.

        Raises:
            MalformedUri: If the parts do not form a valid HTTP URI.
        """
        uri = f"{scheme}://{host}"
        if port is not None:
            uri += f":{port}"
        uri += path
        if query_string:
            uri += f"?{query_string}"
        return cls.from_string(uri)

    @classmethod
    def cast_from(cls, value: Any, rfc: str = protocol.RFC_7230) -> "HttpUri":
        """
        Return value if it is an HttpUri, or parse it if it is a string.

        Raises:
            InvalidArgument: For any other type.
        """
        if isinstance(value, HttpUri):
            return value
        if isinstance(value, str):
            return cls.from_string(value, rfc)
        raise InvalidArgument(
            "Uri must be a string containing a HTTP URI or an instance of "
            f"HttpUri, but was {type(value).__name__}"
        )

    @classmethod
    def is_valid(cls, value: Union[str, "HttpUri"]) -> bool:
        """Check whether value is, or parses to, a valid HTTP URI."""
        if isinstance(value, HttpUri):
            return True
        if not value:
            return False
        try:
            cls.from_string(value)
        except MalformedUri:
            return False
        return True

    @classmethod
    def exists(cls, value: Union[str, "HttpUri"], lookup: RecordLookup = default_lookup) -> bool:
        """Check whether value is a valid HTTP URI whose host has a DNS record."""
        if isinstance(value, HttpUri):
            return value.has_dns_record(lookup)
        if not value:
            return False
        try:
            uri = cls.from_string(value)
        except MalformedUri:
            return False
        return uri.has_dns_record(lookup)

    # =========================================================================
    # SCHEME
    # =========================================================================

    def is_http(self) -> bool:
        return self._parsed_uri.scheme_equals(protocol.SCHEME)

    def is_https(self) -> bool:
        return self._parsed_uri.scheme_equals(protocol.SCHEME_SSL)

    def to_http(self, port: Optional[int] = None) -> "HttpUri":
        """Return this URI on http; unchanged when it already is with the same port."""
        return self._switch_scheme(protocol.SCHEME, port)

    def to_https(self, port: Optional[int] = None) -> "HttpUri":
        """Return this URI on https; unchanged when it already is with the same port."""
        return self._switch_scheme(protocol.SCHEME_SSL, port)

    def _switch_scheme(self, scheme: str, port: Optional[int]) -> "HttpUri":
        parsed = self._parsed_uri
        if parsed.scheme_equals(scheme) and (port is None or parsed.port_equals(port)):
            return self

        if port is not None:
            return self._with_parsed(parsed.transpose({"scheme": scheme, "port": port}))

        if parsed.has_port():
            # The old scheme's port makes no sense on the new one
            fields = parsed.fields()
            fields.update(scheme=scheme, port=None)
            return self._with_parsed(ParsedUri(fields, copy.deepcopy(parsed.query_string)))

        return self._with_parsed(parsed.transpose({"scheme": scheme}))

    # =========================================================================
    # CONNECTING
    # =========================================================================

    def connect(self, headers: Optional[HeaderList] = None) -> "HttpConnection":
        """
        Start building a request to this URI.

        Args:
            headers: Headers to send along, a new empty list if not given.

        Returns:
            HttpConnection to configure and send the request with.
        """
        from .connection import HttpConnection

        return HttpConnection(self, headers)

    def create_socket(self, opener: Optional[Opener] = None) -> Socket:
        """Return an unconnected socket for the host and port of this URI."""
        prefix = "ssl://" if self.is_https() else None
        if opener is None:
            return Socket(self.hostname, self.port(), prefix)
        return Socket(self.hostname, self.port(), prefix, opener=opener)

    def open_socket(self, timeout: float = 5, opener: Optional[Opener] = None) -> Stream:
        """
        Connect to the host of this URI.

        Args:
            timeout: Seconds for connecting and for every later read or write.
            opener: Replacement for socket.create_connection.

        Returns:
            Connected Stream.
        """
        return self.create_socket(opener).connect(timeout).set_timeout(timeout)

