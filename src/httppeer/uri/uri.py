"""
=============================================================================
URI
=============================================================================

Validated URI built on top of ParsedUri.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                   Uri.from_string() FLOW                            │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   "ftp://user@example.org/file"                                     │
    │        │                                                             │
    │        ▼                                                             │
    │   ParsedUri(...)            split into components                   │
    │        │                    (MalformedUri without scheme)           │
    │        ▼                                                             │
    │   rules.is_syntactically_valid(parsed)                              │
    │        │  1. overall shape  scheme://[user@]authority[/path]rest    │
    │        │  2. user and password free of "@", ":" and "/"             │
    │        │  3. no host at all is fine (file:///home)                  │
    │        │  4. host token: name, IPv4 or [IPv6], optional :port       │
    │        ▼                                                             │
    │   Uri(parsed)                                                       │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
SCHEME RULES
=============================================================================

Scheme specific behaviour (what counts as valid, which port is the
default, which DNS records prove a host exists) lives in a rules object.
SchemeRules holds the generic behaviour; HttpSchemeRules in
httppeer.http.uri wraps it and adds what HTTP requires. Each URI class
names the rules object it works with.
=============================================================================
"""

import re
from typing import Any, Mapping, Optional, Tuple

from ..errors import MalformedUri
from .parsed import ParsedUri
from .records import RecordLookup, default_lookup


class SchemeRules:
    """Rules that apply to URIs of any scheme."""

    URI_PATTERN = re.compile(r"^([a-z][a-z0-9\+]*)://([^@]+@)?([^/?#]*)(/([^#?]*))?(.*)$")
    HOST_PATTERN = re.compile(r"^([a-zA-Z0-9\.-]+|\[[^\]]+\])(:([0-9]+))?$")
    CREDENTIAL_PATTERN = re.compile(r"[@:/]")

    dns_record_types: Tuple[str, ...] = ("ANY", "MX")

    def is_syntactically_valid(self, parsed: ParsedUri) -> bool:
        if self.URI_PATTERN.match(parsed.as_string()) is None:
            return False

        if parsed.has_user():
            if self.CREDENTIAL_PATTERN.search(parsed.user):
                return False
            if parsed.password and self.CREDENTIAL_PATTERN.search(parsed.password):
                return False

        if not parsed.hostname:
            return True

        return self.HOST_PATTERN.match(parsed.hostname) is not None

    def has_default_port(self, parsed: ParsedUri) -> bool:
        return not parsed.has_port()

    def port(self, parsed: ParsedUri, default: Optional[int] = None) -> Optional[int]:
        return parsed.port if parsed.has_port() else default

    def hostname(self, parsed: ParsedUri) -> Optional[str]:
        return parsed.hostname


class Uri:
    """
    A syntactically valid URI.

    Instances are created through from_string(); the constructor wraps an
    already parsed and validated value and does not check it again.

    Example:
        >>> uri = Uri.from_string("ftp://mikey@example.org/file?x=1")
        >>> uri.user(), uri.hostname, uri.param("x")
        ('mikey', 'example.org', '1')
    """

    rules: SchemeRules = SchemeRules()

    def __init__(self, parsed_uri: ParsedUri):
        self._parsed_uri = parsed_uri

    @classmethod
    def from_string(cls, uri_string: str) -> "Uri":
        """
        Parse and validate a URI.

        Args:
            uri_string: The URI to parse.

        Returns:
            Uri instance.

        Raises:
            MalformedUri: If the string is empty, can not be parsed or is
                not a valid URI.
        """
        if not uri_string:
            raise MalformedUri("Empty string is not a valid URI")

        parsed = ParsedUri(uri_string)
        if not cls.rules.is_syntactically_valid(parsed):
            raise MalformedUri(f"The URI {uri_string} is not a valid URI")

        return cls(parsed)

    def _with_parsed(self, parsed: ParsedUri) -> "Uri":
        return type(self)(parsed)

    # =========================================================================
    # RENDERING
    # =========================================================================

    def as_string(self) -> str:
        return self._parsed_uri.as_string()

    def as_string_without_port(self) -> str:
        return self._parsed_uri.as_string_without_port()

    def as_string_with_non_default_port(self) -> str:
        """Render the URI, writing the port only if it is not the default one."""
        return self._parsed_uri.render(lambda parsed: not self.rules.has_default_port(parsed))

    def __str__(self) -> str:
        return self.as_string()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.as_string()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Uri):
            return NotImplemented
        return self._parsed_uri == other._parsed_uri

    # =========================================================================
    # COMPONENTS
    # =========================================================================

    @property
    def scheme(self) -> str:
        return self._parsed_uri.scheme

    def user(self, default: Optional[str] = None) -> Optional[str]:
        """Return the user, or default if the URI names none."""
        if self._parsed_uri.has_user():
            return self._parsed_uri.user
        return default

    def password(self, default: Optional[str] = None) -> Optional[str]:
        """
        Return the password.

        Without a user there is no password, not even the default. With a
        user but no password the default is returned.
        """
        if not self._parsed_uri.has_user():
            return None
        if self._parsed_uri.has_password():
            return self._parsed_uri.password
        return default

    @property
    def hostname(self) -> Optional[str]:
        return self.rules.hostname(self._parsed_uri)

    def is_local_host(self) -> bool:
        return self._parsed_uri.is_local_host()

    def has_default_port(self) -> bool:
        return self.rules.has_default_port(self._parsed_uri)

    def port(self, default: Optional[int] = None) -> Optional[int]:
        return self.rules.port(self._parsed_uri, default)

    @property
    def path(self) -> str:
        return self._parsed_uri.path

    def with_path(self, path: str) -> "Uri":
        """Return a new URI with another path; this one stays unchanged."""
        return self._with_parsed(self._parsed_uri.transpose({"path": path}))

    @property
    def fragment(self) -> Optional[str]:
        return self._parsed_uri.fragment

    # =========================================================================
    # QUERY STRING
    # =========================================================================

    def has_query_string(self) -> bool:
        return self._parsed_uri.has_query_string()

    @property
    def query_string(self) -> str:
        """The query string without leading "?", empty if there are no parameters."""
        return self._parsed_uri.query_string.build()

    def add_params(self, params: Mapping[str, Any]) -> "Uri":
        """Add several parameters at once."""
        for name, value in params.items():
            self._parsed_uri.query_string.add_param(name, value)
        return self

    def add_param(self, name: str, value: Any) -> "Uri":
        self._parsed_uri.query_string.add_param(name, value)
        return self

    def remove_param(self, name: str) -> "Uri":
        self._parsed_uri.query_string.remove_param(name)
        return self

    def has_param(self, name: str) -> bool:
        return self._parsed_uri.query_string.contains_param(name)

    def param(self, name: str, default: Any = None) -> Any:
        return self._parsed_uri.query_string.param(name, default)

    # =========================================================================
    # DNS
    # =========================================================================

    def has_dns_record(self, lookup: RecordLookup = default_lookup) -> bool:
        """
        Check whether DNS knows the host of this URI.

        Local host names are accepted without asking DNS.

        Args:
            lookup: Callable (hostname, record_type) -> bool.

        Returns:
            True if any of the scheme's record types exists for the host.
        """
        if not self._parsed_uri.has_hostname():
            return False

        if self._parsed_uri.is_local_host():
            return True

        hostname = self._parsed_uri.hostname
        return any(lookup(hostname, record_type) for record_type in self.rules.dns_record_types)
