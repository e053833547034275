"""
=============================================================================
CLIENT CONFIGURATION
=============================================================================

Defaults for requests made through the command line client or by
applications that want one place for their HTTP settings.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION SOURCES                            │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m httppeer --timeout 5 http://example.com/         │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── HTTPPEER_TIMEOUT=5 python -m httppeer ...                  │
    │                                                                      │
    │   3. Default values (in this dataclass)                             │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘
=============================================================================
"""

import logging
import os
from dataclasses import dataclass

from . import __version__
from .http import protocol
from .http.version import HTTP_1_0, HTTP_1_1, HttpVersion
from .errors import InvalidArgument


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ClientConfig:
    """
    Settings for HTTP requests.

    Example:
        config = ClientConfig.from_env()
        config.validate()
        config.setup_logging()
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK
    # ─────────────────────────────────────────────────────────────────────

    timeout: float = 30.0
    """Seconds connecting and every later read or write may take."""

    dns_lifetime: float = 3.0
    """Seconds a DNS record lookup may take in total."""

    # ─────────────────────────────────────────────────────────────────────
    # PROTOCOL
    # ─────────────────────────────────────────────────────────────────────

    http_version: str = str(HTTP_1_1)
    """HTTP/1.0 or HTTP/1.1."""

    rfc: str = protocol.RFC_7230
    """RFC 7230 rejects user info in URIs, RFC 2616 allows it."""

    user_agent: str = f"httppeer/{__version__}"

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """
        Create configuration from environment variables.

            HTTPPEER_TIMEOUT          connect/read/write timeout (default: 30)
            HTTPPEER_DNS_LIFETIME     DNS lookup lifetime (default: 3)
            HTTPPEER_HTTP_VERSION     HTTP/1.0 or HTTP/1.1 (default: HTTP/1.1)
            HTTPPEER_RFC              "RFC 7230" or "RFC 2616" (default: RFC 7230)
            HTTPPEER_USER_AGENT       User-Agent header
            HTTPPEER_LOG_LEVEL        logging level (default: WARNING)
        """
        defaults = cls()
        return cls(
            timeout=float(os.getenv("HTTPPEER_TIMEOUT", defaults.timeout)),
            dns_lifetime=float(os.getenv("HTTPPEER_DNS_LIFETIME", defaults.dns_lifetime)),
            http_version=os.getenv("HTTPPEER_HTTP_VERSION", defaults.http_version),
            rfc=os.getenv("HTTPPEER_RFC", defaults.rfc),
            user_agent=os.getenv("HTTPPEER_USER_AGENT", defaults.user_agent),
            log_level=os.getenv("HTTPPEER_LOG_LEVEL", defaults.log_level),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ValueError: On the first invalid value.
        """
        if self.timeout <= 0:
            raise ValueError(f"timeout must be > 0, got {self.timeout}")

        if self.dns_lifetime <= 0:
            raise ValueError(f"dns_lifetime must be > 0, got {self.dns_lifetime}")

        try:
            version = HttpVersion.from_string(self.http_version)
        except InvalidArgument as e:
            raise ValueError(f"Invalid http_version: {e}") from e
        if version != HTTP_1_0 and version != HTTP_1_1:
            raise ValueError(f"http_version must be {HTTP_1_0} or {HTTP_1_1}, got {version}")

        if not protocol.is_valid_rfc(self.rfc):
            raise ValueError(f"rfc must be {protocol.RFC_7230!r} or {protocol.RFC_2616!r}")

        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {self.log_level}")

    def setup_logging(self) -> None:
        """Configure the root logger and the httppeer logger."""
        level = getattr(logging, self.log_level.upper(), logging.WARNING)
        logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
        logging.getLogger("httppeer").setLevel(level)
