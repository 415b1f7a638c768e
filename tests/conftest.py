"""pytest fixtures for testing."""

import pytest
from unittest.mock import Mock


@pytest.fixture
def policy():
    """Policy blocking threat >= 20, ignoring type bits, blocking crawlers."""
    from httpbl_guard.models.policy import Policy

    return Policy(
        block_min_threat_score=20,
        block_type_mask=0,
        allow_search_engines=False,
    )


@pytest.fixture
def mock_resolver():
    """Resolver stub answering NXDOMAIN by default."""
    from httpbl_guard.services.resolver import NameNotFound

    mock = Mock()
    mock.lookup.side_effect = NameNotFound("NXDOMAIN")
    return mock


@pytest.fixture
def service(mock_resolver, policy):
    """ReputationService wired to the resolver stub."""
    from httpbl_guard.services.reputation import ReputationService

    return ReputationService("abcdefghijkl", mock_resolver, policy)


@pytest.fixture
def app_config(policy):
    """Application configuration matching the policy fixture."""
    from httpbl_guard.config import Config

    return Config(
        access_key="abcdefghijkl",
        bind_address="127.0.0.1:8080",
        client_ip_header="x-real-ip",
        block_min_threat_score=policy.block_min_threat_score,
        block_type_mask=policy.block_type_mask,
        allow_search_engines=policy.allow_search_engines,
        dns_timeout=5,
        dns_nameservers=[],
        verbose=False,
    )


@pytest.fixture
def client(app_config, service):
    """Flask test client."""
    from httpbl_guard.app import create_app

    app = create_app(app_config, service)
    app.testing = True
    return app.test_client()
