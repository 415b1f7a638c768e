"""http:BL query name encoding and A record decoding."""

import ipaddress
import logging
from typing import Sequence, Union

from httpbl_guard.models.reputation import (
    Listed,
    LookupFailure,
    ReputationRecord,
    SearchEngine,
)
from httpbl_guard.utils.ip_utils import reverse_ip


HTTPBL_ZONE = "dnsbl.httpbl.org"

logger = logging.getLogger(__name__)


def build_query_name(
    access_key: str, ip: Union[str, ipaddress.IPv4Address]
) -> str:
    """Build the http:BL query hostname.

    Args:
        access_key: Project Honey Pot access key.
        ip: IPv4 address to check.

    Returns:
        str: Query hostname, e.g. "abc.4.3.2.1.dnsbl.httpbl.org" for 1.2.3.4.

    Raises:
        ValueError: If IP is not a valid IPv4 address.

    Examples:
        >>> build_query_name("abc", "1.2.3.4")
        'abc.4.3.2.1.dnsbl.httpbl.org'
    """
    return f"{access_key}.{reverse_ip(ip)}.{HTTPBL_ZONE}"


def decode_response(
    addresses: Sequence[Union[str, ipaddress.IPv4Address]],
) -> ReputationRecord:
    """Decode an http:BL A record answer.

    Responses are always 127.<days>.<threat>.<type>. Only the first address
    is considered; if it is not in 127.0.0.0/8 the answer is reported as a
    failure instead of trying the next one.

    A response with days == 0 and type == 0 is a search engine, and the
    third octet is then the crawler serial rather than a threat score.

    Args:
        addresses: A record addresses in answer order.

    Returns:
        ReputationRecord: SearchEngine, Listed or LookupFailure.
    """
    if not addresses:
        logger.warning("DNS lookup succeeded but no A records found")
        return LookupFailure("No A records found")

    address = ipaddress.IPv4Address(str(addresses[0]))
    first, days, threat, type_mask = address.packed

    if first != 127:
        logger.warning(f"Received unexpected IP format from http:BL: {address}")
        return LookupFailure(f"Unexpected IP format: {address}")

    logger.debug(f"Received http:BL response: {address}")

    if days == 0 and type_mask == 0:
        return SearchEngine(serial=threat)

    return Listed(
        days_since_last_activity=days,
        threat_score=threat,
        type_mask=type_mask,
    )
