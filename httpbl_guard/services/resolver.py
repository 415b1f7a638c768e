"""DNS resolver used for http:BL lookups."""

import ipaddress
import logging
from typing import List, Optional

import dns.exception
import dns.resolver


logger = logging.getLogger(__name__)


class ResolverError(Exception):
    """DNS resolution failed (timeout, SERVFAIL, no nameservers, ...)."""


class NameNotFound(ResolverError):
    """The queried name does not exist (NXDOMAIN)."""


class DnsResolver:
    """A record resolver backed by dnspython.

    The underlying ``dns.resolver.Resolver`` is configured once and only
    read afterwards, so one instance can be shared by all request threads.

    Args:
        timeout: Total lifetime of a single query in seconds.
        nameservers: Nameserver IPs to use instead of the system ones.
    """

    def __init__(
        self, timeout: float = 5, nameservers: Optional[List[str]] = None
    ) -> None:
        self.resolver = dns.resolver.Resolver()
        self.resolver.lifetime = timeout  # Total timeout for query
        if nameservers:
            self.resolver.nameservers = nameservers

    def lookup(self, hostname: str) -> List[ipaddress.IPv4Address]:
        """Resolve A records for hostname.

        Args:
            hostname: Fully qualified name to resolve.

        Returns:
            list[IPv4Address]: Addresses in answer order. Empty if the name
            exists but has no A records.

        Raises:
            NameNotFound: The name does not exist.
            ResolverError: Any other resolution failure.
        """
        try:
            answers = self.resolver.resolve(hostname, "A")
        except dns.resolver.NXDOMAIN as e:
            raise NameNotFound(str(e)) from e
        except dns.resolver.NoAnswer:
            logger.debug(f"No A records for {hostname}")
            return []
        except dns.exception.Timeout as e:
            raise ResolverError(f"Timeout: {e}") from e
        except dns.exception.DNSException as e:
            # NoNameservers, YXDOMAIN and other non-definitive failures
            raise ResolverError(f"{type(e).__name__}: {e}") from e

        return [ipaddress.IPv4Address(rdata.to_text()) for rdata in answers]
