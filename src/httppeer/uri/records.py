"""
DNS record lookups used by Uri.has_dns_record().

A lookup is any callable taking (hostname, record_type) and returning
whether such a record exists. ResolverLookup is the default and asks the
system resolver through dnspython; tests pass their own callable.
"""

import logging
from typing import Callable, Optional

import dns.exception
import dns.resolver


logger = logging.getLogger(__name__)

RecordLookup = Callable[[str, str], bool]


class ResolverLookup:
    """
    Record lookup backed by dns.resolver.

    The resolver reads the system configuration on first use, not at
    import time.

    Args:
        lifetime: Seconds a single lookup may take in total.
        resolver: Preconfigured resolver to use instead of the system one.
    """

    def __init__(self, lifetime: float = 3.0, resolver: Optional[dns.resolver.Resolver] = None):
        self.lifetime = lifetime
        self._resolver = resolver

    @property
    def resolver(self) -> dns.resolver.Resolver:
        if self._resolver is None:
            self._resolver = dns.resolver.Resolver()
            self._resolver.lifetime = self.lifetime
        return self._resolver

    def __call__(self, hostname: str, record_type: str) -> bool:
        # IPv6 literals are written with brackets inside URIs
        hostname = hostname.strip("[]")
        try:
            answer = self.resolver.resolve(hostname, record_type)
        except dns.exception.DNSException as e:
            logger.debug(f"No {record_type} record for {hostname}: {e}")
            return False
        return len(answer) > 0


default_lookup = ResolverLookup()
