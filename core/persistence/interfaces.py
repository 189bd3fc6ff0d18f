from __future__ import annotations

from typing import Optional, Protocol

from core.types import LedgerChangeSet, LedgerSnapshot


class LedgerStore(Protocol):
    def load_state(self) -> Optional[LedgerSnapshot]:
        """Load the full ledger state, or None if the store was never initialized."""

    def initialize(self, snapshot: LedgerSnapshot) -> None:
        """Write a complete initial state (configuration row plus any seeded balances)."""

    def apply_changes(self, changes: LedgerChangeSet) -> None:
        """Persist the writes of one committed call in a single transaction.

        Implementations must raise on failure so the in-memory commit is skipped.
        """
