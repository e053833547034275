"""
=============================================================================
HTTPPEER - URIs and a Minimal HTTP/1.x Client on Raw Sockets
=============================================================================

This package parses, validates and manipulates URIs, and sends single
HTTP/1.0 or HTTP/1.1 requests over plain TCP or TLS sockets without any
HTTP library underneath.

=============================================================================
PROJECT OVERVIEW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                         HTTPPEER LAYERS                             │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   1. URIS                                                           │
    │      - Component split and canonical rendering                      │
    │      - Query strings with list[] and map[key] parameters            │
    │      - Immutable transposition (with_path, to_https, ...)           │
    │      - DNS existence checks                                         │
    │                                                                      │
    │   2. HTTP MESSAGES                                                  │
    │      - Request line, Host header, header list, body                 │
    │      - Status line, 1xx continuation, headers                       │
    │      - Chunked or length delimited bodies                           │
    │                                                                      │
    │   3. SOCKETS                                                        │
    │      - TCP and TLS connections                                      │
    │      - Buffered line/byte reading with timeouts                     │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    httppeer/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m httppeer)
    ├── config.py            # ClientConfig dataclass
    ├── errors.py            # Exception hierarchy
    ├── core/                # Socket level
    │   ├── socket_client.py # TCP/TLS connector
    │   └── stream.py        # Buffered socket stream
    ├── uri/                 # Generic URIs
    │   ├── query_string.py  # Query string parsing/building
    │   ├── parsed.py        # Component split and rendering
    │   ├── uri.py           # Validated URI and scheme rules
    │   └── records.py       # DNS record lookup
    └── http/                # HTTP protocol
        ├── protocol.py      # Constants and line helpers
        ├── status_codes.py  # Status codes, classes, reason phrases
        ├── version.py       # HttpVersion
        ├── uri.py           # HttpUri
        ├── headers.py       # HeaderList
        ├── request.py       # Request writing
        ├── response.py      # Response reading
        └── connection.py    # Fluent request builder

=============================================================================
QUICK START
=============================================================================

    from httppeer import HttpUri, connect

    uri = HttpUri.from_string("http://example.com/search?q=python")
    uri.add_param("page", 2)

    response = connect(uri).timeout(5).as_user_agent("demo").get()
    print(response.status_code, response.headers.get("Content-Type"))
    print(response.text)

=============================================================================
"""

__version__ = "1.0.0"
__author__ = "httppeer contributors"

from .errors import (
    ConnectionFailure,
    InvalidArgument,
    MalformedUri,
    ProtocolViolation,
    Timeout,
)
from .core import Socket, Stream
from .uri import ParsedUri, QueryString, ResolverLookup, Uri
from .http import (
    HTTP_1_0,
    HTTP_1_1,
    HeaderList,
    HttpConnection,
    HttpRequest,
    HttpResponse,
    HttpUri,
    HttpVersion,
    connect,
)
from .config import ClientConfig

__all__ = [
    # Version info
    "__version__",

    # Errors
    "MalformedUri",
    "InvalidArgument",
    "ConnectionFailure",
    "Timeout",
    "ProtocolViolation",

    # URIs
    "QueryString",
    "ParsedUri",
    "Uri",
    "HttpUri",
    "ResolverLookup",

    # HTTP
    "HeaderList",
    "HttpVersion",
    "HTTP_1_0",
    "HTTP_1_1",
    "HttpRequest",
    "HttpResponse",
    "HttpConnection",
    "connect",

    # Sockets
    "Socket",
    "Stream",

    # Configuration
    "ClientConfig",
]
