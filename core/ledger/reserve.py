"""Aggregate reserve of listed skill-hours, bounded by the reserve limit."""

from __future__ import annotations

import logging

from .arithmetic import checked_add
from .errors import LedgerError, LedgerErrorCode
from .state import StagedState

logger = logging.getLogger(__name__)


class ReserveAccountant:
    """Maintains ``total_skill_reserve`` alongside offer mutations.

    Only listing and removal move the counter. Exchanges and cancellations
    leave it as is, so it can overcount the hours actually on offer.
    """

    def __init__(self, state: StagedState) -> None:
        self._state = state

    @property
    def total(self) -> int:
        return self._state.total_skill_reserve

    @property
    def limit(self) -> int:
        return self._state.parameters.reserve_limit

    def increase(self, hours: int) -> int:
        """Add listed hours to the reserve.

        Raises:
            LedgerError: RESERVE_LIMIT_REACHED if the new total would exceed the limit
        """
        new_total = checked_add(self.total, hours)
        if new_total > self.limit:
            raise LedgerError(
                LedgerErrorCode.RESERVE_LIMIT_REACHED,
                f"Reserve {new_total} would exceed limit {self.limit}",
            )
        self._state.total_skill_reserve = new_total
        return new_total

    def decrease(self, hours: int) -> int:
        """Remove listed hours from the reserve, flooring at zero."""
        current = self.total
        if hours > current:
            logger.debug(f"Reserve decrease of {hours} floored at zero (was {current})")
            new_total = 0
        else:
            new_total = current - hours
        self._state.total_skill_reserve = new_total
        return new_total

    def check_limit(self, limit: int) -> None:
        """Fail if ``limit`` is below the hours already reserved."""
        if limit < self.total:
            raise LedgerError(
                LedgerErrorCode.RESERVE_LIMIT_REACHED,
                f"Limit {limit} is below current reserve {self.total}",
            )
