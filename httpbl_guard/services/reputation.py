"""http:BL reputation lookup and blocking policy."""

import ipaddress
import logging
from typing import Optional, Union

from httpbl_guard.models.policy import Policy
from httpbl_guard.models.reputation import (
    Listed,
    LookupFailure,
    NotListed,
    ReputationRecord,
    SearchEngine,
)
from httpbl_guard.services.query_codec import build_query_name, decode_response
from httpbl_guard.services.resolver import DnsResolver, NameNotFound, ResolverError


logger = logging.getLogger(__name__)

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


class ReputationService:
    """Looks up client IPs on http:BL and decides whether to block them.

    Holds no per-request state: the resolver and the policy are shared
    read-only by every request thread.

    Args:
        access_key: Project Honey Pot access key.
        resolver: Resolver capability with a ``lookup(hostname)`` method.
        policy: Blocking policy.
    """

    def __init__(self, access_key: str, resolver: DnsResolver, policy: Policy) -> None:
        if not access_key:
            raise ValueError("http:BL access key cannot be empty")
        self.access_key = access_key
        self.resolver = resolver
        self.policy = policy

    def lookup(self, ip: IPAddress) -> ReputationRecord:
        """Look up ip on http:BL.

        IPv6 addresses are reported as not listed without a query since
        http:BL only covers IPv4. Resolver failures never propagate; they
        are returned as LookupFailure.

        Args:
            ip: Client address.

        Returns:
            ReputationRecord: Lookup outcome.
        """
        if ip.version == 6:
            logger.info(f"Received IPv6 address {ip}, treating as not listed")
            return NotListed()

        query = build_query_name(self.access_key, ip)
        # The query name embeds the access key, so only the target is logged
        logger.debug(f"Performing http:BL lookup for {ip}")

        try:
            addresses = self.resolver.lookup(query)
        except NameNotFound:
            logger.info(f"Lookup result for {ip} is NXDOMAIN (not listed)")
            return NotListed()
        except ResolverError as e:
            logger.error(f"DNS resolution error for {ip}: {e}")
            return LookupFailure(f"DNS resolution failed: {e}")

        return decode_response(addresses)

    def evaluate_policy(
        self, record: ReputationRecord, policy: Optional[Policy] = None
    ) -> bool:
        """Decide whether a lookup result should be blocked.

        Lookup failures are allowed so that a blocklist outage never locks
        out legitimate clients.

        Args:
            record: Lookup outcome.
            policy: Policy to apply. Defaults to the service policy.

        Returns:
            bool: True to block, False to allow.
        """
        if policy is None:
            policy = self.policy

        if isinstance(record, NotListed):
            logger.info("Policy: Not listed -> Allow")
            return False

        if isinstance(record, SearchEngine):
            if policy.allow_search_engines:
                logger.info(
                    f"Policy: Search engine ({record.name}) -> Allow (configured)"
                )
                return False
            logger.info(f"Policy: Search engine ({record.name}) -> Block (configured)")
            return True

        if isinstance(record, Listed):
            block_by_threat = record.threat_score >= policy.block_min_threat_score
            block_by_type = (record.type_mask & policy.block_type_mask) != 0
            decision = "Block" if block_by_threat or block_by_type else "Allow"
            logger.info(
                f"Policy: Listed (threat={record.threat_score}, "
                f"type_mask={record.type_mask}) -> {decision} "
                f"(min_threat={policy.block_min_threat_score}, "
                f"block_type_mask={policy.block_type_mask})"
            )
            return block_by_threat or block_by_type

        if isinstance(record, LookupFailure):
            logger.error(
                f"Policy: Error during lookup ({record.message}) -> Defaulting to Allow"
            )
            return False

        raise TypeError(f"Unknown reputation record: {record!r}")

    def check(self, ip: IPAddress) -> bool:
        """Look up ip and apply the service policy.

        Returns:
            bool: True to block, False to allow.
        """
        record = self.lookup(ip)
        logger.info(f"http:BL lookup result for {ip}: {record.status}")
        return self.evaluate_policy(record)
