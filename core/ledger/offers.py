"""Offer book: at most one active skill-hour listing per participant."""

from __future__ import annotations

from core.types import Offer, ParticipantId

from .arithmetic import checked_add
from .balances import BalanceLedger
from .errors import LedgerError, LedgerErrorCode
from .reserve import ReserveAccountant
from .state import StagedState


class OfferBook:
    """Manages listings and keeps the reserve in step with them.

    Listing checks the skill balance but does not move it; hours change
    hands only when an exchange fills the offer.
    """

    def __init__(self, state: StagedState, balances: BalanceLedger, reserve: ReserveAccountant) -> None:
        self._state = state
        self._balances = balances
        self._reserve = reserve

    def get(self, participant: ParticipantId) -> Offer:
        return self._state.offer(participant)

    def exists(self, participant: ParticipantId) -> bool:
        return self._state.has_offer(participant)

    def list_hours(self, participant: ParticipantId, hours: int, rate: int) -> Offer:
        """Add hours to a participant's offer and set its price.

        Args:
            participant: Listing participant
            hours: Additional hours to list
            rate: Price per hour; replaces any previous price

        Returns:
            The updated offer

        Raises:
            LedgerError: INVALID_SKILL, INVALID_RATE, INSUFFICIENT_BALANCE or
                RESERVE_LIMIT_REACHED
        """
        if hours <= 0:
            raise LedgerError(LedgerErrorCode.INVALID_SKILL, "Offered hours must be positive")
        if rate <= 0:
            raise LedgerError(LedgerErrorCode.INVALID_RATE, "Price per hour must be positive")

        current = self.get(participant)
        listed = checked_add(current.hours_offered, hours)
        self._balances.require("skill", participant, listed)

        self._reserve.increase(hours)
        offer = Offer(hours_offered=listed, price_per_hour=rate)
        self._state.set_offer(participant, offer)
        return offer

    def remove_hours(self, participant: ParticipantId, hours: int) -> Offer:
        """Withdraw listed hours, keeping the price.

        Raises:
            LedgerError: INSUFFICIENT_BALANCE if fewer hours are listed
        """
        current = self.get(participant)
        if current.hours_offered < hours:
            raise LedgerError(
                LedgerErrorCode.INSUFFICIENT_BALANCE,
                f"Only {current.hours_offered} hours listed, cannot remove {hours}",
            )

        self._reserve.decrease(hours)
        offer = Offer(hours_offered=current.hours_offered - hours, price_per_hour=current.price_per_hour)
        self._state.set_offer(participant, offer)
        return offer

    def cancel(self, participant: ParticipantId) -> Offer:
        """Zero a participant's offer, discarding the price.

        The reserve is left as is.

        Raises:
            LedgerError: UNAUTHORIZED_USER if the participant never had an offer entry
        """
        if not self.exists(participant):
            raise LedgerError(LedgerErrorCode.UNAUTHORIZED_USER, f"No offer on record for {participant}")

        offer = Offer()
        self._state.set_offer(participant, offer)
        return offer

    def fill(self, provider: ParticipantId, hours: int) -> Offer:
        """Consume hours from a provider's offer during an exchange."""
        current = self.get(provider)
        if current.hours_offered < hours:
            raise LedgerError(
                LedgerErrorCode.INSUFFICIENT_BALANCE,
                f"Provider {provider} lists {current.hours_offered} hours, requested {hours}",
            )
        offer = Offer(hours_offered=current.hours_offered - hours, price_per_hour=current.price_per_hour)
        self._state.set_offer(provider, offer)
        return offer
