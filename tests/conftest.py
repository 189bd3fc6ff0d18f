"""Shared test fixtures for pytest.

Provides a seeded marketplace and an API client bound to it.
"""

import pytest
from fastapi.testclient import TestClient

from api.dependencies import reset_market
from api.main import app
from core.ledger import MarketSettings, SkillMarket

ADMIN = "admin"
ALICE = "alice"
BOB = "bob"


@pytest.fixture
def settings() -> MarketSettings:
    """Default settings with a fixed administrator."""
    return MarketSettings(administrator=ADMIN)


@pytest.fixture
def market(settings: MarketSettings) -> SkillMarket:
    """Market with alice holding 50 skill-hours and bob holding 1000 currency.

    Balances are seeded externally; the ledger itself never mints.
    """
    return SkillMarket.from_settings(
        settings,
        skill_balances={ALICE: 50},
        currency_balances={BOB: 1000},
    )


@pytest.fixture
def configured_market(market: SkillMarket) -> SkillMarket:
    """Seeded market with rate 20, 10% fee and a reserve limit of 1000."""
    assert market.set_skill_rate(caller=ADMIN, rate=20).ok
    assert market.set_service_fee(caller=ADMIN, fee_percent=10).ok
    assert market.set_reserve_limit(caller=ADMIN, limit=1000).ok
    return market


@pytest.fixture
def client(configured_market: SkillMarket):
    """Test client backed by the configured market."""
    reset_market(configured_market)
    yield TestClient(app)
    reset_market()
