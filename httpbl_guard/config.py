"""Configuration module for httpbl-guard.

Loads and validates HTTPBL_* environment variables.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from httpbl_guard.models.policy import Policy
from httpbl_guard.utils.ip_utils import parse_client_ip


ENV_PREFIX = "HTTPBL_"


@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # http:BL Configuration
    access_key: str = field(repr=False)

    # HTTP Configuration
    bind_address: str
    client_ip_header: str

    # Policy Configuration
    block_min_threat_score: int
    block_type_mask: int
    allow_search_engines: bool

    # DNS Configuration
    dns_timeout: int
    dns_nameservers: List[str]

    # Operational Configuration
    verbose: bool

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables.

        Raises:
            ValueError: If required variables are missing or invalid.

        Returns:
            Config: Validated configuration instance.
        """
        access_key = cls._get_required_env("ACCESS_KEY")

        bind_address = cls._get_env("BIND_ADDRESS", "0.0.0.0:8080")
        host, _, port = bind_address.rpartition(":")
        if not host.strip("[]") or not port.isdigit() or not 1 <= int(port) <= 65535:
            raise ValueError(
                f"{ENV_PREFIX}BIND_ADDRESS must be host:port, got {bind_address!r}"
            )

        client_ip_header = cls._get_env("CLIENT_IP_HEADER", "x-real-ip").strip()
        if not client_ip_header:
            raise ValueError(f"{ENV_PREFIX}CLIENT_IP_HEADER cannot be empty")

        block_min_threat_score = cls._get_int_env("BLOCK_MIN_THREAT_SCORE")
        if not 0 <= block_min_threat_score <= 255:
            raise ValueError(
                f"{ENV_PREFIX}BLOCK_MIN_THREAT_SCORE must be between 0 and 255"
            )

        block_type_mask = cls._get_int_env("BLOCK_TYPE_MASK")
        if not 0 <= block_type_mask <= 255:
            raise ValueError(f"{ENV_PREFIX}BLOCK_TYPE_MASK must be between 0 and 255")

        allow_search_engines = cls._parse_strict_bool("ALLOW_SEARCH_ENGINES")

        dns_timeout = cls._get_int_env("DNS_TIMEOUT", default="5")
        if not 1 <= dns_timeout <= 60:
            raise ValueError(f"{ENV_PREFIX}DNS_TIMEOUT must be between 1 and 60 seconds")

        dns_nameservers = [
            ns.strip()
            for ns in cls._get_env("DNS_NAMESERVERS", "").split(",")
            if ns.strip()
        ]
        for ns in dns_nameservers:
            if parse_client_ip(ns) is None:
                raise ValueError(
                    f"{ENV_PREFIX}DNS_NAMESERVERS contains an invalid IP: {ns}"
                )

        verbose = cls._parse_bool(cls._get_env("VERBOSE", "false"))

        return cls(
            access_key=access_key,
            bind_address=bind_address,
            client_ip_header=client_ip_header,
            block_min_threat_score=block_min_threat_score,
            block_type_mask=block_type_mask,
            allow_search_engines=allow_search_engines,
            dns_timeout=dns_timeout,
            dns_nameservers=dns_nameservers,
            verbose=verbose,
        )

    @staticmethod
    def _get_env(key: str, default: str) -> str:
        return os.getenv(ENV_PREFIX + key, default)

    @staticmethod
    def _get_required_env(key: str) -> str:
        """Get required environment variable or raise ValueError.

        Args:
            key: Environment variable name without the HTTPBL_ prefix.

        Returns:
            str: Environment variable value.

        Raises:
            ValueError: If environment variable is not set or empty.
        """
        value = os.getenv(ENV_PREFIX + key)
        if not value:
            raise ValueError(
                f"Required environment variable {ENV_PREFIX}{key} is not set"
            )
        return value

    @classmethod
    def _get_int_env(cls, key: str, default: Optional[str] = None) -> int:
        if default is None:
            value = cls._get_required_env(key)
        else:
            value = cls._get_env(key, default)
        try:
            return int(value)
        except ValueError:
            raise ValueError(
                f"{ENV_PREFIX}{key} must be an integer, got {value!r}"
            ) from None

    @staticmethod
    def _parse_bool(value: str) -> bool:
        return value.strip().lower() in ("true", "1", "yes")

    @classmethod
    def _parse_strict_bool(cls, key: str) -> bool:
        value = cls._get_required_env(key).strip().lower()
        if value in ("true", "1", "yes"):
            return True
        if value in ("false", "0", "no"):
            return False
        raise ValueError(
            f"{ENV_PREFIX}{key} must be one of true/false, 1/0, yes/no, got {value!r}"
        )

    @property
    def host(self) -> str:
        # "[::]:8080" binds to "::"
        return self.bind_address.rpartition(":")[0].strip("[]")

    @property
    def port(self) -> int:
        return int(self.bind_address.rpartition(":")[2])

    def policy(self) -> Policy:
        """Build the blocking policy.

        Returns:
            Policy: Immutable policy shared by all requests.
        """
        return Policy(
            block_min_threat_score=self.block_min_threat_score,
            block_type_mask=self.block_type_mask,
            allow_search_engines=self.allow_search_engines,
        )
