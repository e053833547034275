"""
Protocol constants and small helpers for writing HTTP messages.
"""

from typing import List

from .status_codes import reason_phrase_for, status_class_for


SCHEME = "http"
SCHEME_SSL = "https"
PORT = 80
PORT_SSL = 443

GET = "GET"
POST = "POST"
HEAD = "HEAD"
PUT = "PUT"
DELETE = "DELETE"

END_OF_LINE = "\r\n"

# RFC variants that differ in whether URIs may carry user info
RFC_2616 = "RFC 2616"
RFC_7230 = "RFC 7230"

DEFAULT_PORTS = {SCHEME: PORT, SCHEME_SSL: PORT_SSL}


def is_valid_rfc(rfc: str) -> bool:
    return rfc in (RFC_2616, RFC_7230)


def line(text: str) -> str:
    """Terminate one line of an HTTP message."""
    return text + END_OF_LINE


def lines(*texts: str) -> str:
    """
    Join lines of a message head, ending with the empty line.

    Lines after the first empty one belong to the body and are appended
    without terminator.
    """
    head: List[str] = []
    body = ""
    for index, text in enumerate(texts):
        if text == "":
            body = "".join(texts[index + 1:])
            break
        head.append(line(text))
    return "".join(head) + empty_line() + body


def empty_line() -> str:
    return END_OF_LINE


__all__ = [
    "SCHEME", "SCHEME_SSL", "PORT", "PORT_SSL",
    "GET", "POST", "HEAD", "PUT", "DELETE",
    "END_OF_LINE", "RFC_2616", "RFC_7230", "DEFAULT_PORTS",
    "is_valid_rfc", "line", "lines", "empty_line",
    "status_class_for", "reason_phrase_for",
]
