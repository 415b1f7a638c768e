"""IP address utilities for http:BL queries and proxy headers."""

import ipaddress
from typing import Optional, Union


def is_valid_ipv4(ip: str) -> bool:
    """Validate if string is a valid IPv4 address.

    Args:
        ip: IP address string to validate.

    Returns:
        bool: True if valid IPv4, False otherwise.

    Examples:
        >>> is_valid_ipv4("203.0.113.45")
        True
        >>> is_valid_ipv4("256.0.0.1")
        False
        >>> is_valid_ipv4("::1")
        False
    """
    try:
        addr = ipaddress.ip_address(ip)
        return isinstance(addr, ipaddress.IPv4Address)
    except ValueError:
        return False


def reverse_ip(ip: Union[str, ipaddress.IPv4Address]) -> str:
    """Convert IPv4 address to reverse DNS format.

    DNSBL queries require reversed octets. For example:
    203.0.113.45 becomes 45.113.0.203

    Args:
        ip: IPv4 address, as a string or IPv4Address.

    Returns:
        str: Reversed IP address.

    Raises:
        ValueError: If IP is not a valid IPv4 address.

    Examples:
        >>> reverse_ip("203.0.113.45")
        '45.113.0.203'
        >>> reverse_ip("192.168.1.1")
        '1.1.168.192'
    """
    if not is_valid_ipv4(str(ip)):
        raise ValueError(f"Invalid IPv4 address: {ip}")

    octets = str(ip).split(".")
    return ".".join(reversed(octets))


def parse_client_ip(
    header_value: Optional[str],
) -> Optional[Union[ipaddress.IPv4Address, ipaddress.IPv6Address]]:
    """Extract the client address from a proxy header value.

    Headers like X-Forwarded-For may carry a comma-separated chain; only
    the first entry is used.

    Args:
        header_value: Raw header value, or None if the header was absent.

    Returns:
        IPv4Address or IPv6Address, or None if nothing usable was found.

    Examples:
        >>> parse_client_ip("203.0.113.45, 10.0.0.1")
        IPv4Address('203.0.113.45')
        >>> parse_client_ip("not an ip") is None
        True
    """
    if not header_value:
        return None

    first = header_value.split(",")[0].strip()
    try:
        return ipaddress.ip_address(first)
    except ValueError:
        return None
