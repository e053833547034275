"""
=============================================================================
EXCEPTIONS
=============================================================================

Every failure raised by httppeer is one of these types.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                       EXCEPTION HIERARCHY                           │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   ValueError                                                         │
    │   ├── MalformedUri        input can not be parsed into a URI        │
    │   └── InvalidArgument     wrong type or value passed by the caller  │
    │                                                                      │
    │   Exception                                                          │
    │   └── ConnectionFailure   socket could not be opened/read/written   │
    │       ├── Timeout            (code 2) deadline exceeded             │
    │       └── ProtocolViolation  (code 3) peer broke the HTTP grammar   │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Construction errors (MalformedUri, InvalidArgument) are raised before any
socket is opened. I/O errors are never retried.
=============================================================================
"""

from typing import Optional


class MalformedUri(ValueError):
    """Raised when a string or field map does not form a valid URI."""


class InvalidArgument(ValueError):
    """Raised when a caller passes a value of the wrong type or range."""


class ConnectionFailure(Exception):
    """
    Raised when opening, reading from or writing to a socket fails.

    Attributes:
        code: Numeric failure category (1 generic, 2 timeout, 3 protocol).
    """

    code = 1

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class Timeout(ConnectionFailure):
    """Raised when a connect, read or write exceeds the stream timeout."""

    code = 2


class ProtocolViolation(ConnectionFailure):
    """Raised when received bytes do not follow the HTTP message grammar."""

    code = 3
