"""
HTTP version numbers as written in request and status lines ("HTTP/1.1").
"""

import re
from typing import Union

from ..errors import InvalidArgument


class HttpVersion:
    """
    An HTTP protocol version.

    Example:
        >>> version = HttpVersion.from_string("HTTP/1.0")
        >>> version.major, version.minor
        (1, 0)
        >>> str(version)
        'HTTP/1.0'
    """

    VERSION_PATTERN = re.compile(r"^HTTP/(-?\d+)\.(-?\d+)")

    def __init__(self, major: Union[int, str], minor: Union[int, str]):
        """
        Args:
            major: Major version, an integer or a string of digits.
            minor: Minor version, an integer or a string of digits.

        Raises:
            InvalidArgument: If a part is not an integer or is negative.
        """
        self.major = self._to_int(major, "major")
        self.minor = self._to_int(minor, "minor")

    @staticmethod
    def _to_int(number: Union[int, str], name: str) -> int:
        if isinstance(number, bool) or not isinstance(number, (int, str)):
            raise InvalidArgument(f'Given {name} version "{number}" is not an integer.')
        if isinstance(number, str):
            if re.fullmatch(r"-?\d+", number) is None:
                raise InvalidArgument(f'Given {name} version "{number}" is not an integer.')
            number = int(number)
        if number < 0:
            raise InvalidArgument(f"{name.capitalize()} version can not be negative.")
        return number

    @classmethod
    def from_string(cls, version: str) -> "HttpVersion":
        """
        Parse a version token like "HTTP/1.1".

        Raises:
            InvalidArgument: If the string is empty or can not be parsed.
        """
        if not version:
            raise InvalidArgument("Given HTTP version is empty")

        match = cls.VERSION_PATTERN.match(version)
        if match is None:
            raise InvalidArgument(f'Given HTTP version "{version}" can not be parsed')

        return cls(match.group(1), match.group(2))

    @classmethod
    def cast_from(cls, version: Union[str, "HttpVersion"]) -> "HttpVersion":
        """Return version unchanged if it already is an HttpVersion, else parse it."""
        if isinstance(version, HttpVersion):
            return version
        return cls.from_string(version)

    def equals(self, version: Union[str, "HttpVersion"]) -> bool:
        """Compare with another version; unparsable input never matches."""
        if not version:
            return False
        try:
            other = HttpVersion.cast_from(version)
        except InvalidArgument:
            return False
        return (self.major, self.minor) == (other.major, other.minor)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (str, HttpVersion)):
            return self.equals(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.major, self.minor))

    def __str__(self) -> str:
        return f"HTTP/{self.major}.{self.minor}"

    def __repr__(self) -> str:
        return f"HttpVersion({self.major}, {self.minor})"


HTTP_1_0 = HttpVersion(1, 0)
HTTP_1_1 = HttpVersion(1, 1)
