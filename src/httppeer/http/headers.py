"""
=============================================================================
HEADER LIST
=============================================================================

Ordered collection of HTTP headers.

    Binford: 6100\\r\\n                 ┌──────────┬──────────────┐
    X-Power: More power!\\r\\n   ◄───►  │ Binford  │ 6100         │
                                       │ X-Power  │ More power!  │
                                       └──────────┴──────────────┘

Names are case-sensitive keys as supplied. Putting an existing name
replaces its value in place; new names go to the end. str() renders the
headers joined by CRLF without a trailing CRLF.
=============================================================================
"""

import base64
import re
import time
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple, Union
from urllib.parse import quote_plus

from ..errors import InvalidArgument
from .protocol import END_OF_LINE


HeaderSource = Union[str, "HeaderList", Mapping[str, Any]]


class HeaderList:
    """
    Ordered header name to value mapping.

    Example:
        >>> headers = HeaderList({"Binford": 6100})
        >>> headers.put("X-Power", "More power!").get("Binford")
        '6100'
        >>> str(headers)
        'Binford: 6100\\r\\nX-Power: More power!'
    """

    # First colon separates name and value
    HEADER_PATTERN = re.compile(r"^([^:\s]+):[ \t]*([^\r\n]*?)[ \t]*\r?$", re.MULTILINE)

    def __init__(self, headers: Optional[HeaderSource] = None):
        self._headers: Dict[str, str] = {}
        if headers is not None:
            self.append(headers)

    @classmethod
    def from_string(cls, header_block: str) -> "HeaderList":
        """Parse a block of "Name: value" lines."""
        return cls(cls._parse(header_block))

    @classmethod
    def _parse(cls, header_block: str) -> Dict[str, str]:
        return {
            match.group(1): match.group(2)
            for match in cls.HEADER_PATTERN.finditer(header_block)
        }

    def append(self, headers: HeaderSource) -> "HeaderList":
        """
        Merge headers into this list.

        Args:
            headers: A raw header block, another HeaderList or a mapping.

        Returns:
            self for chaining.

        Raises:
            InvalidArgument: For any other type, or a non-scalar value.
        """
        if isinstance(headers, str):
            headers = self._parse(headers)
        elif isinstance(headers, HeaderList):
            headers = headers._headers
        elif not isinstance(headers, Mapping):
            raise InvalidArgument(
                "Given headers must be a string, a mapping or a HeaderList, "
                f"but was {type(headers).__name__}"
            )

        for name, value in headers.items():
            self.put(name, value)
        return self

    def put(self, name: str, value: Union[str, int, float, bool]) -> "HeaderList":
        """
        Set a header, replacing an existing value. True and False are
        stored as "1" and "0".

        Raises:
            InvalidArgument: If the value is not a scalar.
        """
        if not isinstance(value, (str, int, float, bool)):
            raise InvalidArgument(
                f"Value of header {name} must be a scalar, but was {type(value).__name__}"
            )
        if isinstance(value, bool):
            value = int(value)
        self._headers[name] = str(value)
        return self

    def remove(self, name: str) -> "HeaderList":
        self._headers.pop(name, None)
        return self

    def clear(self) -> "HeaderList":
        self._headers.clear()
        return self

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self._headers.get(name, default)

    def contains_key(self, name: str) -> bool:
        return name in self._headers

    # =========================================================================
    # CONVENIENCE SETTERS
    # =========================================================================

    def put_user_agent(self, user_agent: str) -> "HeaderList":
        return self.put("User-Agent", user_agent)

    def put_referer(self, referer: str) -> "HeaderList":
        return self.put("Referer", referer)

    def put_cookie(self, cookies: Mapping[str, Any]) -> "HeaderList":
        """Set the Cookie header, each value form-encoded and followed by ";"."""
        value = "".join(f"{name}={quote_plus(str(cookie))};" for name, cookie in cookies.items())
        return self.put("Cookie", value)

    def put_authorization(self, user: str, password: str) -> "HeaderList":
        """Set basic authorization credentials."""
        credentials = base64.b64encode(f"{user}:{password}".encode("utf-8")).decode("ascii")
        return self.put("Authorization", f"BASIC {credentials}")

    def put_date(self, timestamp: Optional[float] = None) -> "HeaderList":
        """Set the Date header in RFC 1123 format, now if no timestamp is given."""
        moment = time.gmtime(timestamp if timestamp is not None else time.time())
        return self.put("Date", time.strftime("%a, %d %b %Y %H:%M:%S GMT", moment))

    # =========================================================================
    # PROTOCOLS
    # =========================================================================

    def __contains__(self, name: object) -> bool:
        return name in self._headers

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(list(self._headers.items()))

    def __len__(self) -> int:
        return len(self._headers)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderList):
            return NotImplemented
        return list(self._headers.items()) == list(other._headers.items())

    def __str__(self) -> str:
        return END_OF_LINE.join(f"{name}: {value}" for name, value in self._headers.items())

    def __repr__(self) -> str:
        return f"HeaderList({self._headers!r})"
