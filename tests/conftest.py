"""Pytest configuration and fixtures."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from client import AdministrationClient
from helpers import TOKEN_RESPONSE, make_response
from resources.billing_plan.models import LimitItem, Plan, PricingItem


@pytest.fixture
def mock_session():
    """Create a mock requests session that authenticates successfully."""
    session = MagicMock()
    session.post.return_value = make_response(200, TOKEN_RESPONSE)
    return session


@pytest.fixture
def client(mock_session):
    """An authenticated client on the mock session."""
    return AdministrationClient(
        "test-client",
        "test-secret",
        auth_server_url="https://auth.example.com",
        host_url="https://api.example.com",
        session=mock_session,
    )


@pytest.fixture
def sample_plan_data():
    """Wire payload of a billing plan as returned by the API."""
    return {
        "id": 42,
        "name": "Pro",
        "features": ["sso"],
        "limits": [{"name": "seats", "value": 10}],
        "pricing": [
            {
                "subscribe_for_year": 1,
                "monthly_price": 9.99,
                "monthly_price_currency": "USD",
            }
        ],
    }


@pytest.fixture
def sample_plan():
    """Unmanaged tracked billing plan."""
    return Plan(
        name="Pro",
        features=["sso"],
        limits=[LimitItem(name="seats", value=10)],
        pricing=[
            PricingItem(
                subscribe_for_year=1,
                monthly_price=Decimal("9.99"),
                monthly_price_currency="USD",
            )
        ],
    )


@pytest.fixture
def sample_config():
    """Declarative configuration of a billing plan."""
    return {
        "name": "Pro",
        "features": ["sso"],
        "limits": [{"name": "seats", "value": 10}],
        "pricing": [
            {
                "subscribe_for_year": 1,
                "monthly_price": 9.99,
                "monthly_price_currency": "USD",
            }
        ],
    }
