"""Tests for environment-driven market settings."""

import pytest

from core.ledger import MarketSettings
from core.types import MarketParameters


class TestMarketSettings:
    """Tests for MarketSettings."""

    def test_defaults(self) -> None:
        settings = MarketSettings(administrator="admin")
        assert settings.parameters() == MarketParameters(
            skill_rate=1,
            service_fee_percent=0,
            max_skills_per_user=100,
            reserve_limit=1_000_000,
        )

    def test_administrator_required(self) -> None:
        with pytest.raises(ValueError, match="administrator"):
            MarketSettings(administrator="")

    @pytest.mark.parametrize(
        "overrides",
        [
            {"skill_rate": 0},
            {"service_fee_percent": 101},
            {"service_fee_percent": -1},
            {"max_skills_per_user": 0},
            {"reserve_limit": -5},
        ],
    )
    def test_invalid_values_rejected(self, overrides) -> None:
        with pytest.raises(ValueError):
            MarketSettings(administrator="admin", **overrides)


class TestFromEnv:
    """Tests for MarketSettings.from_env."""

    def test_reads_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("SKILLMARKET_ADMIN", "  root-admin ")
        monkeypatch.setenv("SKILLMARKET_SKILL_RATE", "20")
        monkeypatch.setenv("SKILLMARKET_SERVICE_FEE", "10")
        monkeypatch.setenv("SKILLMARKET_MAX_SKILLS_PER_USER", "5")
        monkeypatch.setenv("SKILLMARKET_RESERVE_LIMIT", "1000")

        settings = MarketSettings.from_env()

        assert settings.administrator == "root-admin"
        assert settings.skill_rate == 20
        assert settings.service_fee_percent == 10
        assert settings.max_skills_per_user == 5
        assert settings.reserve_limit == 1000

    def test_missing_values_use_defaults(self, monkeypatch) -> None:
        monkeypatch.setenv("SKILLMARKET_ADMIN", "admin")
        for name in (
            "SKILLMARKET_SKILL_RATE",
            "SKILLMARKET_SERVICE_FEE",
            "SKILLMARKET_MAX_SKILLS_PER_USER",
            "SKILLMARKET_RESERVE_LIMIT",
        ):
            monkeypatch.delenv(name, raising=False)

        assert MarketSettings.from_env() == MarketSettings(administrator="admin")

    def test_missing_admin_raises(self, monkeypatch) -> None:
        monkeypatch.delenv("SKILLMARKET_ADMIN", raising=False)
        with pytest.raises(ValueError, match="SKILLMARKET_ADMIN"):
            MarketSettings.from_env()

    def test_non_integer_raises(self, monkeypatch) -> None:
        monkeypatch.setenv("SKILLMARKET_ADMIN", "admin")
        monkeypatch.setenv("SKILLMARKET_SERVICE_FEE", "ten")
        with pytest.raises(ValueError, match="SKILLMARKET_SERVICE_FEE must be an integer"):
            MarketSettings.from_env()
