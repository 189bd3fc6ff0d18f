"""SQLAlchemy models for the skill marketplace database."""

from db.models.ledger import (
    CONFIG_ROW_ID,
    Base,
    CurrencyBalanceRow,
    MarketConfigRow,
    SkillBalanceRow,
    SkillOfferRow,
)

__all__ = [
    "CONFIG_ROW_ID",
    "Base",
    "CurrencyBalanceRow",
    "MarketConfigRow",
    "SkillBalanceRow",
    "SkillOfferRow",
]
