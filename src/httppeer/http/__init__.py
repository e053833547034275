"""
=============================================================================
HTTP PROTOCOL
=============================================================================

One request, one response, one connection:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   HttpUri ──connect()──► HttpConnection ──get()──► HttpRequest      │
    │                                                        │             │
    │                                     open_socket() ──► Stream        │
    │                                                        │ write      │
    │                                                        ▼             │
    │                                                   HttpResponse      │
    │                                                     (reads lazily)  │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘
=============================================================================
"""

from . import protocol
from .connection import HttpConnection, connect
from .headers import HeaderList
from .request import HttpRequest
from .response import HttpResponse
from .status_codes import HTTPStatus, StatusClass, reason_phrase_for, status_class_for
from .uri import HttpSchemeRules, HttpUri
from .version import HTTP_1_0, HTTP_1_1, HttpVersion

__all__ = [
    # URIs
    "HttpUri",
    "HttpSchemeRules",

    # Messages
    "HeaderList",
    "HttpRequest",
    "HttpResponse",
    "HttpConnection",
    "connect",

    # Protocol values
    "protocol",
    "HttpVersion",
    "HTTP_1_0",
    "HTTP_1_1",
    "HTTPStatus",
    "StatusClass",
    "reason_phrase_for",
    "status_class_for",
]
