"""
=============================================================================
SOCKET CONNECTOR
=============================================================================

Opens client TCP connections, optionally wrapped in TLS, and hands them
out as Stream objects.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                   Socket.connect() FLOW                             │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   opener((host, port), timeout)     TCP three-way handshake         │
    │        │                            default: socket.create_connection│
    │        ▼                                                             │
    │   ssl:// or tls:// prefix?                                          │
    │        │ yes                                                         │
    │        ▼                                                             │
    │   ssl.create_default_context()      certificate + hostname checks   │
    │     .wrap_socket(sock, server_hostname=host)                        │
    │        │                                                             │
    │        ▼                                                             │
    │   Stream(sock)                                                      │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘
=============================================================================
"""

import logging
import socket
import ssl
from typing import Callable, Optional, Tuple

from ..errors import ConnectionFailure, InvalidArgument, Timeout
from .stream import Stream


logger = logging.getLogger(__name__)

Opener = Callable[..., socket.socket]

SECURE_PREFIXES = ("ssl://", "tls://")


class Socket:
    """
    Connection parameters for one client socket.

    Args:
        host: Host name or IP address; IPv6 literals may keep their brackets.
        port: TCP port.
        prefix: Transport prefix, "ssl://" or "tls://" for TLS, None for plain TCP.
        opener: Callable like socket.create_connection((host, port), timeout).
        ssl_context: TLS settings, the default context if not given.

    Raises:
        InvalidArgument: If the host is empty or the port negative.
    """

    def __init__(
        self,
        host: str,
        port: int = 80,
        prefix: Optional[str] = None,
        opener: Opener = socket.create_connection,
        ssl_context: Optional[ssl.SSLContext] = None,
    ):
        if not host:
            raise InvalidArgument("Host can not be empty")
        if port is None or port < 0:
            raise InvalidArgument("Port can not be negative")

        self.host = host
        self.port = port
        self.prefix = prefix
        self._opener = opener
        self._ssl_context = ssl_context

    @property
    def uses_ssl(self) -> bool:
        return self.prefix in SECURE_PREFIXES

    @property
    def address(self) -> Tuple[str, int]:
        return self.host.strip("[]"), self.port

    def connect(self, connect_timeout: float = 1.0) -> Stream:
        """
        Open the connection.

        Args:
            connect_timeout: Seconds the TCP and TLS handshakes may take.

        Returns:
            Connected Stream.

        Raises:
            Timeout: If connecting took longer than connect_timeout.
            ConnectionFailure: If the connection could not be established.
        """
        target = f"{self.prefix or ''}{self.host}:{self.port}"
        failure = f"Connect to {target} within {connect_timeout} second(s) failed"
        sock = None
        try:
            sock = self._opener(self.address, timeout=connect_timeout)
            if self.uses_ssl:
                context = self._ssl_context or ssl.create_default_context()
                sock = context.wrap_socket(sock, server_hostname=self.address[0])
        except socket.timeout as e:
            self._discard(sock)
            raise Timeout(f"{failure}: {e}") from e
        except OSError as e:
            self._discard(sock)
            raise ConnectionFailure(f"{failure}: {e}") from e

        logger.debug(f"Connected to {target}")
        return Stream(sock)

    @staticmethod
    def _discard(sock: Optional[socket.socket]) -> None:
        if sock is not None:
            sock.close()

    def __repr__(self) -> str:
        return f"Socket({self.prefix or ''}{self.host}:{self.port})"
