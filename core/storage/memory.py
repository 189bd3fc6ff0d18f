from __future__ import annotations

import logging
from typing import Optional

from core.persistence.interfaces import LedgerStore
from core.ledger.state import LedgerState
from core.types import LedgerChangeSet, LedgerSnapshot

logger = logging.getLogger(__name__)


class InMemoryLedgerStore(LedgerStore):
    """Process-local store, mainly for tests and single-process deployments."""

    def __init__(self, snapshot: Optional[LedgerSnapshot] = None) -> None:
        self._state = LedgerState.from_snapshot(snapshot) if snapshot is not None else None
        self.commits = 0

    def load_state(self) -> Optional[LedgerSnapshot]:
        return self._state.snapshot() if self._state is not None else None

    def initialize(self, snapshot: LedgerSnapshot) -> None:
        self._state = LedgerState.from_snapshot(snapshot)

    def apply_changes(self, changes: LedgerChangeSet) -> None:
        if self._state is None:
            raise RuntimeError("Ledger store is not initialized")
        self._state.apply(changes)
        self.commits += 1
        logger.debug(f"In-memory store commit #{self.commits}")
