"""Skill-hour marketplace facade.

Every public operation is one atomic call: it takes the ledger lock, stages
its reads and writes in an overlay, and either commits all of them or none.
Business failures come back as ``LedgerResult`` values, not exceptions.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, TypeVar

from core.persistence.interfaces import LedgerStore
from core.types import ExchangeQuote, LedgerSnapshot, Offer, ParticipantId

from .arithmetic import require_uint
from .balances import BalanceLedger
from .config_store import ConfigurationStore
from .errors import LedgerError, LedgerErrorCode
from .exchange import ExchangeEngine
from .offers import OfferBook
from .reserve import ReserveAccountant
from .results import LedgerResult
from .settings import MarketSettings
from .state import LedgerState, StagedState

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class _Call:
    """Components bound to the staging overlay of a single call."""

    state: StagedState
    config: ConfigurationStore
    balances: BalanceLedger
    reserve: ReserveAccountant
    offers: OfferBook
    exchange: ExchangeEngine

    @classmethod
    def bind(cls, state: StagedState) -> _Call:
        balances = BalanceLedger(state)
        reserve = ReserveAccountant(state)
        offers = OfferBook(state, balances, reserve)
        return cls(
            state=state,
            config=ConfigurationStore(state, reserve),
            balances=balances,
            reserve=reserve,
            offers=offers,
            exchange=ExchangeEngine(state, balances, offers),
        )


class SkillMarket:
    """Marketplace ledger for skill-hours and currency.

    Coordinates:
    - Configuration store (administrator-only setters)
    - Balance ledger (skill-hours and currency)
    - Offer book and reserve accounting
    - Exchange engine (purchase with service fee, direct transfers)

    Thread-safety: one lock per instance serializes every call.
    """

    def __init__(self, state: LedgerState, *, store: Optional[LedgerStore] = None) -> None:
        """Initialize the market over an existing state.

        Args:
            state: Canonical ledger state (balances must be pre-seeded externally)
            store: Optional persistence; each committed call is written through
        """
        self._state = state
        self._store = store
        self._lock = threading.Lock()

    @classmethod
    def from_settings(
        cls,
        settings: MarketSettings,
        *,
        skill_balances: Optional[Mapping[ParticipantId, int]] = None,
        currency_balances: Optional[Mapping[ParticipantId, int]] = None,
        store: Optional[LedgerStore] = None,
    ) -> SkillMarket:
        """Create a fresh market: empty offers, zero reserve, seeded balances."""
        state = LedgerState(
            administrator=settings.administrator,
            parameters=settings.parameters(),
            skill_balances=skill_balances,
            currency_balances=currency_balances,
        )
        return cls(state, store=store)

    @classmethod
    def from_store(cls, store: LedgerStore, settings: MarketSettings) -> SkillMarket:
        """Load the market from a store, initializing it from settings if empty."""
        snapshot = store.load_state()
        if snapshot is None:
            logger.info("Ledger store is empty, initializing from settings")
            market = cls.from_settings(settings, store=store)
            store.initialize(market.snapshot())
            return market

        if snapshot.administrator != settings.administrator:
            logger.warning("Stored administrator differs from configured one; using stored value")
        return cls(LedgerState.from_snapshot(snapshot), store=store)

    @property
    def administrator(self) -> ParticipantId:
        return self._state.administrator

    # ========== Call machinery ==========

    def _run(self, operation: str, caller: ParticipantId, fn: Callable[[_Call], Any]) -> LedgerResult:
        with self._lock:
            staged = StagedState(self._state)
            try:
                value = fn(_Call.bind(staged))
            except LedgerError as exc:
                logger.warning(f"{operation} rejected for {caller}: {exc.code.name} - {exc.message}")
                return LedgerResult.failure(exc)

            changes = staged.changes()
            if not changes.is_empty:
                if self._store is not None:
                    self._store.apply_changes(changes)
                self._state.apply(changes)
            logger.info(f"{operation} committed for {caller}")
            return LedgerResult.success(value)

    def _read(self, fn: Callable[[_Call], T]) -> T:
        with self._lock:
            return fn(_Call.bind(StagedState(self._state)))

    # ========== Configuration ==========

    def set_skill_rate(self, *, caller: ParticipantId, rate: int) -> LedgerResult:
        require_uint("rate", rate)
        return self._run("set_skill_rate", caller, lambda c: c.config.set_skill_rate(caller, rate))

    def set_service_fee(self, *, caller: ParticipantId, fee_percent: int) -> LedgerResult:
        require_uint("fee_percent", fee_percent)
        return self._run("set_service_fee", caller, lambda c: c.config.set_service_fee(caller, fee_percent))

    def set_reserve_limit(self, *, caller: ParticipantId, limit: int) -> LedgerResult:
        require_uint("limit", limit)
        return self._run("set_reserve_limit", caller, lambda c: c.config.set_reserve_limit(caller, limit))

    def set_max_skills_per_user(self, *, caller: ParticipantId, limit: int) -> LedgerResult:
        require_uint("limit", limit)
        return self._run(
            "set_max_skills_per_user", caller, lambda c: c.config.set_max_skills_per_user(caller, limit)
        )

    def apply_service_fee_discount(
        self, *, caller: ParticipantId, participant: ParticipantId, discount: int
    ) -> LedgerResult:
        require_uint("discount", discount)
        return self._run(
            "apply_service_fee_discount",
            caller,
            lambda c: c.config.apply_service_fee_discount(caller, participant, discount),
        )

    def get_skill_rate(self) -> int:
        return self._read(lambda c: c.config.parameters.skill_rate)

    def get_service_fee(self) -> int:
        return self._read(lambda c: c.config.parameters.service_fee_percent)

    def get_max_skills_per_user(self) -> int:
        return self._read(lambda c: c.config.parameters.max_skills_per_user)

    def get_skill_reserve_limit(self) -> int:
        return self._read(lambda c: c.config.parameters.reserve_limit)

    def get_total_skill_reserve(self) -> int:
        return self._read(lambda c: c.reserve.total)

    # ========== Offers ==========

    def offer_skills(self, *, caller: ParticipantId, hours: int, rate: int) -> LedgerResult:
        require_uint("hours", hours)
        require_uint("rate", rate)
        return self._run("offer_skills", caller, lambda c: c.offers.list_hours(caller, hours, rate))

    def remove_skills(self, *, caller: ParticipantId, hours: int) -> LedgerResult:
        require_uint("hours", hours)
        return self._run("remove_skills", caller, lambda c: c.offers.remove_hours(caller, hours))

    def cancel_skill_offer(self, *, caller: ParticipantId) -> LedgerResult:
        return self._run("cancel_skill_offer", caller, lambda c: c.offers.cancel(caller))

    def get_skills_for_exchange(self, participant: ParticipantId) -> Offer:
        return self._read(lambda c: c.offers.get(participant))

    # ========== Exchange ==========

    def exchange_skills(self, *, caller: ParticipantId, provider: ParticipantId, hours: int) -> LedgerResult:
        require_uint("hours", hours)
        return self._run("exchange_skills", caller, lambda c: c.exchange.exchange(caller, provider, hours))

    def transfer_skills(self, *, caller: ParticipantId, provider: ParticipantId, hours: int) -> LedgerResult:
        require_uint("hours", hours)
        return self._run("transfer_skills", caller, lambda c: c.exchange.transfer(caller, provider, hours))

    def quote_exchange(self, provider: ParticipantId, hours: int) -> ExchangeQuote:
        """Price a purchase from ``provider`` at current offer and fee, without executing it."""
        require_uint("hours", hours)
        return self._read(lambda c: c.exchange.quote(provider, hours))

    def view_activity_page(self, *, caller: ParticipantId, participant: ParticipantId) -> LedgerResult:
        return self._run("view_activity_page", caller, lambda c: _require_self(caller, participant))

    # ========== Balances ==========

    def get_skill_balance(self, participant: ParticipantId) -> int:
        return self._read(lambda c: c.balances.get_skill(participant))

    def get_currency_balance(self, participant: ParticipantId) -> int:
        return self._read(lambda c: c.balances.get_currency(participant))

    # Wire-compatible name for the currency balance getter
    get_stx_balance = get_currency_balance

    def snapshot(self) -> LedgerSnapshot:
        with self._lock:
            return self._state.snapshot()


def _require_self(caller: ParticipantId, participant: ParticipantId) -> None:
    if caller != participant:
        raise LedgerError(LedgerErrorCode.UNAUTHORIZED_USER, f"{caller} cannot view activity of {participant}")
