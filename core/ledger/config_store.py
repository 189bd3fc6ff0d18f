"""Administrator-tunable marketplace parameters."""

from __future__ import annotations

import logging

from core.types import MarketParameters, ParticipantId

from .arithmetic import checked_sub
from .errors import LedgerError, LedgerErrorCode
from .reserve import ReserveAccountant
from .state import StagedState

logger = logging.getLogger(__name__)

MAX_SERVICE_FEE_PERCENT = 100


class ConfigurationStore:
    """Setters for the global configuration record.

    Every setter is restricted to the administrator; getters are open.
    """

    def __init__(self, state: StagedState, reserve: ReserveAccountant) -> None:
        self._state = state
        self._reserve = reserve

    @property
    def administrator(self) -> ParticipantId:
        return self._state.administrator

    @property
    def parameters(self) -> MarketParameters:
        return self._state.parameters

    def require_owner(self, caller: ParticipantId) -> None:
        if caller != self.administrator:
            raise LedgerError(LedgerErrorCode.OWNER_ONLY, f"{caller} is not the administrator")

    def set_skill_rate(self, caller: ParticipantId, rate: int) -> MarketParameters:
        self.require_owner(caller)
        if rate <= 0:
            raise LedgerError(LedgerErrorCode.INVALID_RATE, "Skill rate must be positive")
        return self._state.update_parameters(skill_rate=rate)

    def set_service_fee(self, caller: ParticipantId, fee_percent: int) -> MarketParameters:
        self.require_owner(caller)
        if fee_percent > MAX_SERVICE_FEE_PERCENT:
            raise LedgerError(LedgerErrorCode.INVALID_RATE, f"Service fee {fee_percent}% is above 100%")
        return self._state.update_parameters(service_fee_percent=fee_percent)

    def set_reserve_limit(self, caller: ParticipantId, limit: int) -> MarketParameters:
        self.require_owner(caller)
        self._reserve.check_limit(limit)
        return self._state.update_parameters(reserve_limit=limit)

    def set_max_skills_per_user(self, caller: ParticipantId, limit: int) -> MarketParameters:
        self.require_owner(caller)
        if limit <= 0:
            raise LedgerError(LedgerErrorCode.INVALID_SKILL, "Per-user skill cap must be positive")
        return self._state.update_parameters(max_skills_per_user=limit)

    def apply_service_fee_discount(
        self, caller: ParticipantId, participant: ParticipantId, discount: int
    ) -> MarketParameters:
        """Lower the global service fee by ``discount`` percentage points.

        ``participant`` does not scope the discount; it only identifies who
        the discount was granted for.

        Raises:
            LedgerError: OWNER_ONLY, INVALID_RATE if discount > 100, or
                ARITHMETIC_UNDERFLOW if discount exceeds the current fee
        """
        self.require_owner(caller)
        if discount > MAX_SERVICE_FEE_PERCENT:
            raise LedgerError(LedgerErrorCode.INVALID_RATE, f"Discount {discount}% is above 100%")

        new_fee = checked_sub(self.parameters.service_fee_percent, discount)
        logger.debug(f"Staged service fee discount of {discount}% for {participant}: {new_fee}%")
        return self._state.update_parameters(service_fee_percent=new_fee)
