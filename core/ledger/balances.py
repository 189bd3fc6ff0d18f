"""Participant balance ledger.

Tracks skill-hour and currency balances per participant.
"""

from __future__ import annotations

from typing import Literal

from core.types import ParticipantId

from .arithmetic import checked_add
from .errors import LedgerError, LedgerErrorCode
from .state import StagedState

BalanceKind = Literal["skill", "currency"]


class BalanceLedger:
    """Reads and writes the two balance maps of a staged call.

    Supports:
    - Credit/debit operations per balance kind
    - Direct participant-to-participant moves
    - Balance queries (absent entries read as zero)
    """

    def __init__(self, state: StagedState) -> None:
        self._state = state

    def get_skill(self, participant: ParticipantId) -> int:
        return self._state.skill_balance(participant)

    def get_currency(self, participant: ParticipantId) -> int:
        return self._state.currency_balance(participant)

    def get(self, kind: BalanceKind, participant: ParticipantId) -> int:
        """Get a balance by kind.

        Args:
            kind: 'skill' or 'currency'
            participant: Participant identity

        Returns:
            Current balance (zero if never written)
        """
        if kind == "skill":
            return self.get_skill(participant)
        return self.get_currency(participant)

    def credit(self, kind: BalanceKind, participant: ParticipantId, amount: int) -> int:
        """Add to a balance.

        Args:
            kind: 'skill' or 'currency'
            participant: Participant identity
            amount: Amount to add

        Returns:
            Updated balance

        Raises:
            LedgerError: ARITHMETIC_OVERFLOW if the result exceeds uint128
        """
        updated = checked_add(self.get(kind, participant), amount)
        self._write(kind, participant, updated)
        return updated

    def debit(self, kind: BalanceKind, participant: ParticipantId, amount: int) -> int:
        """Remove from a balance.

        Args:
            kind: 'skill' or 'currency'
            participant: Participant identity
            amount: Amount to remove

        Returns:
            Updated balance

        Raises:
            LedgerError: INSUFFICIENT_BALANCE if balance < amount
        """
        balance = self.get(kind, participant)
        self.require(kind, participant, amount)
        updated = balance - amount
        self._write(kind, participant, updated)
        return updated

    def require(self, kind: BalanceKind, participant: ParticipantId, amount: int) -> None:
        """Fail unless ``participant`` holds at least ``amount``."""
        balance = self.get(kind, participant)
        if balance < amount:
            raise LedgerError(
                LedgerErrorCode.INSUFFICIENT_BALANCE,
                f"Insufficient {kind} balance for {participant}: have {balance}, need {amount}",
            )

    def move(self, kind: BalanceKind, source: ParticipantId, target: ParticipantId, amount: int) -> None:
        """Debit ``source`` then credit ``target`` by the same amount."""
        self.debit(kind, source, amount)
        self.credit(kind, target, amount)

    def credit_skill(self, participant: ParticipantId, amount: int) -> int:
        return self.credit("skill", participant, amount)

    def debit_skill(self, participant: ParticipantId, amount: int) -> int:
        return self.debit("skill", participant, amount)

    def credit_currency(self, participant: ParticipantId, amount: int) -> int:
        return self.credit("currency", participant, amount)

    def debit_currency(self, participant: ParticipantId, amount: int) -> int:
        return self.debit("currency", participant, amount)

    def _write(self, kind: BalanceKind, participant: ParticipantId, value: int) -> None:
        if kind == "skill":
            self._state.set_skill_balance(participant, value)
        else:
            self._state.set_currency_balance(participant, value)
