"""SQLAlchemy models for the marketplace ledger.

Persisted layout: one configuration row holding the scalar fields, plus one
table per participant-keyed map:
- market_config
- skill_balances
- currency_balances
- skill_offers
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Column, DateTime, Integer, Numeric, String, Text, func
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator

# The configuration table holds exactly one row
CONFIG_ROW_ID = 1


class UInt128(TypeDecorator):
    """Unsigned 128-bit integer column.

    NUMERIC(39, 0) where the backend has exact decimals. SQLite stores decimal
    text instead, since its NUMERIC path goes through float.
    """

    impl = Numeric(39, 0)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":
            return dialect.type_descriptor(String(39))
        return dialect.type_descriptor(Numeric(39, 0))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if dialect.name == "sqlite":
            return str(int(value))
        return Decimal(int(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return int(value)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class MarketConfigRow(Base):
    """Configuration scalars and the aggregate reserve.

    Table: market_config
    """

    __tablename__ = "market_config"

    id = Column(Integer, primary_key=True, default=CONFIG_ROW_ID)
    administrator = Column(Text, nullable=False)
    skill_rate = Column(UInt128, nullable=False)
    service_fee_percent = Column(Integer, nullable=False)
    max_skills_per_user = Column(UInt128, nullable=False)
    reserve_limit = Column(UInt128, nullable=False)
    total_skill_reserve = Column(UInt128, nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return (
            f"<MarketConfigRow(rate={self.skill_rate}, fee={self.service_fee_percent}%, "
            f"reserve={self.total_skill_reserve}/{self.reserve_limit})>"
        )


class SkillBalanceRow(Base):
    """Skill-hour balance per participant.

    Table: skill_balances
    """

    __tablename__ = "skill_balances"

    participant = Column(Text, primary_key=True)
    balance = Column(UInt128, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<SkillBalanceRow(participant={self.participant}, balance={self.balance})>"


class CurrencyBalanceRow(Base):
    """Currency balance per participant.

    Table: currency_balances
    """

    __tablename__ = "currency_balances"

    participant = Column(Text, primary_key=True)
    balance = Column(UInt128, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<CurrencyBalanceRow(participant={self.participant}, balance={self.balance})>"


class SkillOfferRow(Base):
    """Active offer per participant. A row with zero hours still counts as an entry.

    Table: skill_offers
    """

    __tablename__ = "skill_offers"

    participant = Column(Text, primary_key=True)
    hours_offered = Column(UInt128, nullable=False, default=0)
    price_per_hour = Column(UInt128, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<SkillOfferRow(participant={self.participant}, hours={self.hours_offered}, price={self.price_per_hour})>"
