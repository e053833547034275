"""
Command line client.

    python -m httppeer http://example.com/
    python -m httppeer --include --header "Accept: text/plain" http://example.com/
    python -m httppeer --post "name=value" http://example.com/form
"""

import argparse
import logging
import sys

from . import __version__
from .config import ClientConfig
from .errors import ConnectionFailure, InvalidArgument, MalformedUri
from .http.connection import connect
from .http import protocol
from .http.headers import HeaderList
from .http.uri import HttpUri
from .uri.records import ResolverLookup


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="httppeer",
        description="Send one HTTP/1.x request over a raw socket",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m httppeer http://example.com/
  python -m httppeer --head https://example.com/
  python -m httppeer --put "payload" http://localhost:8080/item
  HTTPPEER_LOG_LEVEL=DEBUG python -m httppeer http://example.com/
        """,
    )

    parser.add_argument("uri", help="http or https URI to request")

    # ─────────────────────────────────────────────────────────────────────
    # METHOD
    # ─────────────────────────────────────────────────────────────────────

    method = parser.add_mutually_exclusive_group()
    method.add_argument("--head", action="store_true", help="send a HEAD request")
    method.add_argument("--post", metavar="DATA", help="send DATA as POST body")
    method.add_argument("--put", metavar="DATA", help="send DATA as PUT body")
    method.add_argument("--delete", action="store_true", help="send a DELETE request")

    # ─────────────────────────────────────────────────────────────────────
    # REQUEST OPTIONS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--header", "-H",
        action="append",
        default=[],
        metavar="'NAME: VALUE'",
        help="additional request header, may be repeated",
    )
    parser.add_argument("--timeout", "-t", type=float, help="read/write timeout in seconds")
    parser.add_argument("--http-version", help="HTTP/1.0 or HTTP/1.1")
    parser.add_argument("--user-agent", "-A", help="User-Agent header")
    parser.add_argument(
        "--allow-userinfo",
        action="store_true",
        help="accept user:password@ in the URI (RFC 2616)",
    )
    parser.add_argument(
        "--check-dns",
        action="store_true",
        help="fail before connecting if the host has no A, AAAA or CNAME record",
    )

    # ─────────────────────────────────────────────────────────────────────
    # OUTPUT
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--include", "-i",
        action="store_true",
        help="print status line and headers before the body",
    )
    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level",
    )
    parser.add_argument("--version", "-v", action="version", version=f"httppeer {__version__}")
    return parser


def config_from_args(args: argparse.Namespace) -> ClientConfig:
    """Environment first, then command line arguments on top."""
    config = ClientConfig.from_env()
    if args.timeout is not None:
        config.timeout = args.timeout
    if args.http_version:
        config.http_version = args.http_version
    if args.user_agent:
        config.user_agent = args.user_agent
    if args.log_level:
        config.log_level = args.log_level
    if args.allow_userinfo:
        config.rfc = protocol.RFC_2616
    config.validate()
    return config


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = config_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    config.setup_logging()

    try:
        headers = HeaderList("\r\n".join(args.header))
        uri = HttpUri.from_string(args.uri, config.rfc)
        if args.check_dns and not uri.has_dns_record(ResolverLookup(config.dns_lifetime)):
            print(f"httppeer: no DNS record for {uri.hostname}", file=sys.stderr)
            return 1

        connection = connect(uri, headers).timeout(config.timeout).as_user_agent(config.user_agent)

        if args.head:
            response = connection.head(config.http_version)
        elif args.post is not None:
            response = connection.post(args.post, config.http_version)
        elif args.put is not None:
            response = connection.put(args.put, config.http_version)
        elif args.delete:
            response = connection.delete(config.http_version)
        else:
            response = connection.get(config.http_version)

        with response:
            if args.include:
                sys.stdout.write(f"{response.status_line}\r\n{response.headers}\r\n\r\n")
                sys.stdout.flush()
            if not args.head:
                sys.stdout.buffer.write(response.body)
                sys.stdout.flush()
    except (MalformedUri, InvalidArgument, ConnectionFailure) as e:
        logger.debug("Request failed", exc_info=True)
        print(f"httppeer: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
