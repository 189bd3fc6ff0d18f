"""Canonical ledger state and the per-call staging overlay.

Every public call reads and writes a ``StagedState``; the canonical
``LedgerState`` only changes when the overlay's change set is applied, so a
rejected call leaves nothing behind.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Mapping, Optional

from core.types import LedgerChangeSet, LedgerSnapshot, MarketParameters, Offer, ParticipantId

logger = logging.getLogger(__name__)


class LedgerState:
    """Process-wide canonical copy of all ledger data.

    Not thread-safe on its own; ``SkillMarket`` serializes access.
    """

    def __init__(
        self,
        *,
        administrator: ParticipantId,
        parameters: MarketParameters,
        total_skill_reserve: int = 0,
        skill_balances: Optional[Mapping[ParticipantId, int]] = None,
        currency_balances: Optional[Mapping[ParticipantId, int]] = None,
        offers: Optional[Mapping[ParticipantId, Offer]] = None,
    ) -> None:
        """Initialize the state.

        Args:
            administrator: The single identity allowed to change configuration
            parameters: Initial configuration record
            total_skill_reserve: Aggregate listed hours
            skill_balances: Pre-seeded skill-hour balances (minting is external)
            currency_balances: Pre-seeded currency balances
            offers: Existing offers, keyed by participant
        """
        self.administrator = administrator
        self.parameters = parameters
        self.total_skill_reserve = total_skill_reserve
        self.skill_balances: dict[ParticipantId, int] = dict(skill_balances or {})
        self.currency_balances: dict[ParticipantId, int] = dict(currency_balances or {})
        self.offers: dict[ParticipantId, Offer] = dict(offers or {})

    @classmethod
    def from_snapshot(cls, snapshot: LedgerSnapshot) -> LedgerState:
        return cls(
            administrator=snapshot.administrator,
            parameters=snapshot.parameters,
            total_skill_reserve=snapshot.total_skill_reserve,
            skill_balances=snapshot.skill_balances,
            currency_balances=snapshot.currency_balances,
            offers=snapshot.offers,
        )

    def snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(
            administrator=self.administrator,
            parameters=self.parameters,
            total_skill_reserve=self.total_skill_reserve,
            skill_balances=dict(self.skill_balances),
            currency_balances=dict(self.currency_balances),
            offers=dict(self.offers),
        )

    def apply(self, changes: LedgerChangeSet) -> None:
        """Merge a committed change set into the canonical maps."""
        if changes.parameters is not None:
            self.parameters = changes.parameters
        if changes.total_skill_reserve is not None:
            self.total_skill_reserve = changes.total_skill_reserve
        self.skill_balances.update(changes.skill_balances)
        self.currency_balances.update(changes.currency_balances)
        self.offers.update(changes.offers)
        logger.debug(
            f"Applied changes: {len(changes.skill_balances)} skill, "
            f"{len(changes.currency_balances)} currency, {len(changes.offers)} offer entries"
        )


class StagedState:
    """Write-ahead overlay over a ``LedgerState``.

    Reads fall through to the base state unless the key was written in this
    call. Nothing reaches the base until ``changes()`` is applied.
    """

    def __init__(self, base: LedgerState) -> None:
        self._base = base
        self._parameters: Optional[MarketParameters] = None
        self._total_skill_reserve: Optional[int] = None
        self._skill_balances: dict[ParticipantId, int] = {}
        self._currency_balances: dict[ParticipantId, int] = {}
        self._offers: dict[ParticipantId, Offer] = {}

    @property
    def administrator(self) -> ParticipantId:
        return self._base.administrator

    # ========== Scalars ==========

    @property
    def parameters(self) -> MarketParameters:
        return self._parameters if self._parameters is not None else self._base.parameters

    def update_parameters(self, **fields: int) -> MarketParameters:
        self._parameters = replace(self.parameters, **fields)
        return self._parameters

    @property
    def total_skill_reserve(self) -> int:
        if self._total_skill_reserve is not None:
            return self._total_skill_reserve
        return self._base.total_skill_reserve

    @total_skill_reserve.setter
    def total_skill_reserve(self, value: int) -> None:
        self._total_skill_reserve = value

    # ========== Maps ==========

    def skill_balance(self, participant: ParticipantId) -> int:
        if participant in self._skill_balances:
            return self._skill_balances[participant]
        return self._base.skill_balances.get(participant, 0)

    def set_skill_balance(self, participant: ParticipantId, value: int) -> None:
        self._skill_balances[participant] = value

    def currency_balance(self, participant: ParticipantId) -> int:
        if participant in self._currency_balances:
            return self._currency_balances[participant]
        return self._base.currency_balances.get(participant, 0)

    def set_currency_balance(self, participant: ParticipantId, value: int) -> None:
        self._currency_balances[participant] = value

    def has_offer(self, participant: ParticipantId) -> bool:
        return participant in self._offers or participant in self._base.offers

    def offer(self, participant: ParticipantId) -> Offer:
        if participant in self._offers:
            return self._offers[participant]
        return self._base.offers.get(participant, Offer())

    def set_offer(self, participant: ParticipantId, offer: Offer) -> None:
        self._offers[participant] = offer

    def changes(self) -> LedgerChangeSet:
        return LedgerChangeSet(
            parameters=self._parameters,
            total_skill_reserve=self._total_skill_reserve,
            skill_balances=dict(self._skill_balances),
            currency_balances=dict(self._currency_balances),
            offers=dict(self._offers),
        )
