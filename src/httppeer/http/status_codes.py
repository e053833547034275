"""
=============================================================================
HTTP STATUS CODES
=============================================================================

Status codes and reason phrases a client may receive, grouped into the
five classes defined by RFC 7231 section 6:

    ┌──────────┬─────────────────┬──────────────────────────────────────┐
    │  Range   │  Class          │  Meaning for the client              │
    ├──────────┼─────────────────┼──────────────────────────────────────┤
    │  1xx     │  Informational  │  keep reading, final status follows  │
    │  2xx     │  Success        │  request worked                      │
    │  3xx     │  Redirection    │  look elsewhere (not followed here)  │
    │  4xx     │  Client Error   │  request was wrong                   │
    │  5xx     │  Server Error   │  server failed                       │
    └──────────┴─────────────────┴──────────────────────────────────────┘

Codes outside 100-599 belong to the "Unknown" class.
=============================================================================
"""

from enum import Enum, IntEnum

from ..errors import InvalidArgument


class StatusClass(str, Enum):
    """Status code class names."""

    INFORMATIONAL = "Informational"
    SUCCESS = "Success"
    REDIRECTION = "Redirection"
    CLIENT_ERROR = "Client Error"
    SERVER_ERROR = "Server Error"
    UNKNOWN = "Unknown"


class HTTPStatus(IntEnum):
    """
    Known status codes.

        >>> HTTPStatus(404).phrase
        'Not Found'
        >>> HTTPStatus.CONTINUE.status_class
        <StatusClass.INFORMATIONAL: 'Informational'>
    """

    # 1xx
    CONTINUE = 100
    SWITCHING_PROTOCOLS = 101
    PROCESSING = 102
    EARLY_HINTS = 103

    # 2xx
    OK = 200
    CREATED = 201
    ACCEPTED = 202
    NON_AUTHORITATIVE_INFORMATION = 203
    NO_CONTENT = 204
    RESET_CONTENT = 205
    PARTIAL_CONTENT = 206
    MULTI_STATUS = 207
    ALREADY_REPORTED = 208
    IM_USED = 226

    # 3xx
    MULTIPLE_CHOICES = 300
    MOVED_PERMANENTLY = 301
    FOUND = 302
    SEE_OTHER = 303
    NOT_MODIFIED = 304
    USE_PROXY = 305
    TEMPORARY_REDIRECT = 307
    PERMANENT_REDIRECT = 308

    # 4xx
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    PAYMENT_REQUIRED = 402
    FORBIDDEN = 403
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    NOT_ACCEPTABLE = 406
    PROXY_AUTHENTICATION_REQUIRED = 407
    REQUEST_TIMEOUT = 408
    CONFLICT = 409
    GONE = 410
    LENGTH_REQUIRED = 411
    PRECONDITION_FAILED = 412
    PAYLOAD_TOO_LARGE = 413
    URI_TOO_LONG = 414
    UNSUPPORTED_MEDIA_TYPE = 415
    RANGE_NOT_SATISFIABLE = 416
    EXPECTATION_FAILED = 417
    IM_A_TEAPOT = 418
    MISDIRECTED_REQUEST = 421
    UNPROCESSABLE_ENTITY = 422
    LOCKED = 423
    FAILED_DEPENDENCY = 424
    UPGRADE_REQUIRED = 426
    PRECONDITION_REQUIRED = 428
    TOO_MANY_REQUESTS = 429
    REQUEST_HEADER_FIELDS_TOO_LARGE = 431
    UNAVAILABLE_FOR_LEGAL_REASONS = 451

    # 5xx
    INTERNAL_SERVER_ERROR = 500
    NOT_IMPLEMENTED = 501
    BAD_GATEWAY = 502
    SERVICE_UNAVAILABLE = 503
    GATEWAY_TIMEOUT = 504
    HTTP_VERSION_NOT_SUPPORTED = 505
    VARIANT_ALSO_NEGOTIATES = 506
    INSUFFICIENT_STORAGE = 507
    LOOP_DETECTED = 508
    NOT_EXTENDED = 510
    NETWORK_AUTHENTICATION_REQUIRED = 511

    @property
    def phrase(self) -> str:
        """Reason phrase as sent in a status line."""
        return _PHRASES.get(self, self.name.replace("_", " ").title())

    @property
    def status_class(self) -> StatusClass:
        return status_class_for(int(self))


# Phrases that do not follow from the member name
_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.NON_AUTHORITATIVE_INFORMATION: "Non-Authoritative Information",
    HTTPStatus.MULTI_STATUS: "Multi-Status",
    HTTPStatus.IM_USED: "IM Used",
    HTTPStatus.URI_TOO_LONG: "URI Too Long",
    HTTPStatus.IM_A_TEAPOT: "I'm a teapot",
    HTTPStatus.HTTP_VERSION_NOT_SUPPORTED: "HTTP Version Not Supported",
}


def status_class_for(code: int) -> StatusClass:
    """
    Return the class a status code belongs to.

    Args:
        code: Numeric status code.

    Returns:
        StatusClass member, UNKNOWN for codes outside 100-599.
    """
    return {
        1: StatusClass.INFORMATIONAL,
        2: StatusClass.SUCCESS,
        3: StatusClass.REDIRECTION,
        4: StatusClass.CLIENT_ERROR,
        5: StatusClass.SERVER_ERROR,
    }.get(int(code) // 100, StatusClass.UNKNOWN)


def reason_phrase_for(code: int) -> str:
    """
    Return the reason phrase of a known status code.

    Raises:
        InvalidArgument: If the code is not a known status code.
    """
    try:
        return HTTPStatus(int(code)).phrase
    except ValueError as e:
        raise InvalidArgument(f"Invalid or unknown HTTP status code {code}") from e
