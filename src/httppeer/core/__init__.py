"""
Socket level building blocks: the buffered Stream and the Socket connector.
"""

from .socket_client import Socket
from .stream import Stream

__all__ = [
    "Socket",   # Opens TCP/TLS connections
    "Stream",   # Line and byte reads on one connected socket
]
