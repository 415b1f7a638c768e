"""Unit tests for ReputationService lookup and policy evaluation."""

import ipaddress

import pytest

from httpbl_guard.models.policy import Policy
from httpbl_guard.models.reputation import (
    Listed,
    LookupFailure,
    NotListed,
    SearchEngine,
)
from httpbl_guard.services.reputation import ReputationService
from httpbl_guard.services.resolver import NameNotFound, ResolverError


IPV4 = ipaddress.IPv4Address("1.2.3.4")


class TestLookup:
    """Test ReputationService.lookup() outcome mapping."""

    def test_lookup_queries_reversed_name(self, service, mock_resolver):
        """Test the resolver receives the http:BL query name."""
        service.lookup(IPV4)

        mock_resolver.lookup.assert_called_once_with(
            "abcdefghijkl.4.3.2.1.dnsbl.httpbl.org"
        )

    def test_lookup_nxdomain_is_not_listed(self, service):
        """Test NXDOMAIN maps to NotListed."""
        assert service.lookup(IPV4) == NotListed()

    def test_lookup_resolver_error(self, service, mock_resolver):
        """Test transport failures map to LookupFailure."""
        mock_resolver.lookup.side_effect = ResolverError("Timeout: 5.0s")

        record = service.lookup(IPV4)

        assert isinstance(record, LookupFailure)
        assert record.message == "DNS resolution failed: Timeout: 5.0s"

    def test_lookup_decodes_answer(self, service, mock_resolver):
        """Test answers are decoded."""
        mock_resolver.lookup.side_effect = None
        mock_resolver.lookup.return_value = [ipaddress.IPv4Address("127.5.50.4")]

        assert service.lookup(IPV4) == Listed(
            days_since_last_activity=5, threat_score=50, type_mask=4
        )

    def test_lookup_empty_answer(self, service, mock_resolver):
        """Test an empty successful answer is a failure."""
        mock_resolver.lookup.side_effect = None
        mock_resolver.lookup.return_value = []

        assert isinstance(service.lookup(IPV4), LookupFailure)

    @pytest.mark.parametrize("ip", ["::1", "2001:db8::1", "::ffff:1.2.3.4"])
    def test_lookup_ipv6_skips_resolver(self, service, mock_resolver, ip):
        """Test IPv6 addresses are not listed and never queried."""
        assert service.lookup(ipaddress.IPv6Address(ip)) == NotListed()
        assert mock_resolver.lookup.call_count == 0

    def test_empty_access_key_rejected(self, mock_resolver, policy):
        """Test the service requires an access key."""
        with pytest.raises(ValueError, match="access key"):
            ReputationService("", mock_resolver, policy)


class TestEvaluatePolicy:
    """Test ReputationService.evaluate_policy() decisions."""

    def test_not_listed_allowed(self, service):
        assert service.evaluate_policy(NotListed()) is False

    @pytest.mark.parametrize("allow", [True, False])
    def test_search_engine(self, service, allow):
        """Test crawlers are blocked iff search engines are not allowed."""
        policy = Policy(
            block_min_threat_score=0, block_type_mask=255, allow_search_engines=allow
        )

        for serial in (0, 5, 255):
            assert service.evaluate_policy(SearchEngine(serial), policy) is not allow

    @pytest.mark.parametrize(
        "threat,type_mask,min_threat,block_mask,expected",
        [
            (50, 4, 20, 0, True),  # Threat above threshold
            (20, 0, 20, 0, True),  # Threat equal to threshold
            (19, 1, 20, 0, False),  # Below threshold, no mask
            (5, 2, 200, 2, True),  # Type match only
            (5, 1, 200, 6, False),  # No shared bits
            (5, 7, 200, 4, True),  # Overlapping bits
            (0, 1, 0, 0, True),  # Zero threshold blocks every listing
            (255, 0, 255, 255, True),
        ],
    )
    def test_listed(self, service, threat, type_mask, min_threat, block_mask, expected):
        """Test listings block on threat threshold or shared type bits."""
        policy = Policy(
            block_min_threat_score=min_threat,
            block_type_mask=block_mask,
            allow_search_engines=True,
        )
        record = Listed(
            days_since_last_activity=3, threat_score=threat, type_mask=type_mask
        )

        assert service.evaluate_policy(record, policy) is expected

    def test_listed_exhaustive_small_grid(self, service):
        """Test the block rule across all type masks and a range of thresholds."""
        for min_threat in (0, 1, 50, 255):
            for block_mask in range(8):
                policy = Policy(min_threat, block_mask, True)
                for type_mask in range(8):
                    for threat in (0, 1, 49, 50, 254, 255):
                        record = Listed(1, threat, type_mask)
                        expected = threat >= min_threat or bool(type_mask & block_mask)
                        assert service.evaluate_policy(record, policy) is expected

    @pytest.mark.parametrize("allow", [True, False])
    def test_lookup_failure_always_allowed(self, service, allow):
        """Test lookup failures fail open regardless of policy."""
        policy = Policy(
            block_min_threat_score=0, block_type_mask=255, allow_search_engines=allow
        )

        assert service.evaluate_policy(LookupFailure("boom"), policy) is False

    def test_defaults_to_service_policy(self, service):
        """Test the service policy is used when none is given."""
        assert service.evaluate_policy(SearchEngine(5)) is True
        assert service.evaluate_policy(Listed(1, 25, 0)) is True
        assert service.evaluate_policy(Listed(1, 10, 7)) is False

    def test_unknown_record_type(self, service):
        with pytest.raises(TypeError):
            service.evaluate_policy("listed")


class TestCheck:
    """Test ReputationService.check() composition."""

    def test_check_blocks_listed(self, service, mock_resolver):
        mock_resolver.lookup.side_effect = None
        mock_resolver.lookup.return_value = [ipaddress.IPv4Address("127.5.50.4")]

        assert service.check(IPV4) is True

    def test_check_allows_not_listed(self, service):
        assert service.check(IPV4) is False

    def test_check_allows_on_resolver_failure(self, service, mock_resolver):
        mock_resolver.lookup.side_effect = ResolverError("NoNameservers")

        assert service.check(IPV4) is False

    def test_check_allows_on_malformed_answer(self, service, mock_resolver):
        mock_resolver.lookup.side_effect = None
        mock_resolver.lookup.return_value = [ipaddress.IPv4Address("10.0.0.1")]

        assert service.check(IPV4) is False

    def test_check_nxdomain_subclass_of_resolver_error(self):
        """Test NameNotFound can be caught as a ResolverError."""
        assert issubclass(NameNotFound, ResolverError)
