from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

# Opaque, externally authenticated identity (wallet principal, user id, ...)
ParticipantId = str

# Balances and configuration values are unsigned 128-bit integers
UINT_MAX = 2**128 - 1


@dataclass(frozen=True)
class Offer:
    """A participant's listing; absence is equivalent to ``Offer()``."""

    hours_offered: int = 0
    price_per_hour: int = 0


@dataclass(frozen=True)
class MarketParameters:
    skill_rate: int
    service_fee_percent: int  # 0-100
    max_skills_per_user: int
    reserve_limit: int


@dataclass(frozen=True)
class ExchangeQuote:
    hours: int
    price_per_hour: int
    fee_percent: int
    cost: int
    fee: int
    total: int


@dataclass(frozen=True)
class ExchangeReceipt:
    buyer: ParticipantId
    provider: ParticipantId
    administrator: ParticipantId
    quote: ExchangeQuote
    provider_hours_remaining: int


@dataclass(frozen=True)
class LedgerSnapshot:
    """Point-in-time copy of the persisted state layout."""

    administrator: ParticipantId
    parameters: MarketParameters
    total_skill_reserve: int
    skill_balances: Mapping[ParticipantId, int] = field(default_factory=dict)
    currency_balances: Mapping[ParticipantId, int] = field(default_factory=dict)
    offers: Mapping[ParticipantId, Offer] = field(default_factory=dict)


@dataclass(frozen=True)
class LedgerChangeSet:
    """Writes produced by one committed call.

    Scalars are ``None`` when untouched; maps hold only the entries written.
    """

    parameters: Optional[MarketParameters] = None
    total_skill_reserve: Optional[int] = None
    skill_balances: Mapping[ParticipantId, int] = field(default_factory=dict)
    currency_balances: Mapping[ParticipantId, int] = field(default_factory=dict)
    offers: Mapping[ParticipantId, Offer] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return (
            self.parameters is None
            and self.total_skill_reserve is None
            and not self.skill_balances
            and not self.currency_balances
            and not self.offers
        )
