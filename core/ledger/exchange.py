"""Exchange engine: buying listed skill-hours and direct transfers."""

from __future__ import annotations

from core.types import ExchangeQuote, ExchangeReceipt, ParticipantId

from .balances import BalanceLedger
from .errors import LedgerError, LedgerErrorCode
from .fees import ServiceFeeModel
from .offers import OfferBook
from .state import StagedState


class ExchangeEngine:
    """Orchestrates the purchase protocol over one staged call.

    Features:
    - Purchase of listed hours at the offer price plus service fee
    - Fee routed to the administrator's currency balance
    - Direct skill transfers (no offer, reserve or currency involvement)
    """

    def __init__(self, state: StagedState, balances: BalanceLedger, offers: OfferBook) -> None:
        self._state = state
        self._balances = balances
        self._offers = offers

    def quote(self, provider: ParticipantId, hours: int) -> ExchangeQuote:
        """Price ``hours`` from ``provider``'s current offer."""
        offer = self._offers.get(provider)
        fee_model = ServiceFeeModel(fee_percent=self._state.parameters.service_fee_percent)
        return fee_model.quote(hours=hours, price_per_hour=offer.price_per_hour)

    def exchange(self, buyer: ParticipantId, provider: ParticipantId, hours: int) -> ExchangeReceipt:
        """Buy ``hours`` from ``provider``'s offer.

        Args:
            buyer: Calling participant
            provider: Participant whose offer is filled
            hours: Hours to buy

        Returns:
            ExchangeReceipt with the priced quote

        Raises:
            LedgerError: UNAUTHORIZED_USER on self-exchange, INVALID_SKILL for
                zero hours, INSUFFICIENT_BALANCE when the offer, the provider's
                skill balance or the buyer's currency falls short
        """
        if buyer == provider:
            raise LedgerError(LedgerErrorCode.UNAUTHORIZED_USER, "Cannot exchange with yourself")
        if hours <= 0:
            raise LedgerError(LedgerErrorCode.INVALID_SKILL, "Exchanged hours must be positive")

        offer = self._offers.get(provider)
        if offer.hours_offered < hours:
            raise LedgerError(
                LedgerErrorCode.INSUFFICIENT_BALANCE,
                f"Provider {provider} lists {offer.hours_offered} hours, requested {hours}",
            )
        # Independent of the offer: the balance may have moved via transfers
        self._balances.require("skill", provider, hours)

        quote = self.quote(provider, hours)
        self._balances.require("currency", buyer, quote.total)

        administrator = self._state.administrator
        self._balances.debit_skill(provider, hours)
        remaining = self._offers.fill(provider, hours)
        self._balances.debit_currency(buyer, quote.total)
        self._balances.credit_skill(buyer, hours)
        self._balances.credit_currency(provider, quote.cost)
        self._balances.credit_currency(administrator, quote.fee)

        return ExchangeReceipt(
            buyer=buyer,
            provider=provider,
            administrator=administrator,
            quote=quote,
            provider_hours_remaining=remaining.hours_offered,
        )

    def transfer(self, caller: ParticipantId, provider: ParticipantId, hours: int) -> int:
        """Move skill-hours from ``provider`` to ``caller``.

        No consent is taken from ``provider``.

        Returns:
            The caller's new skill balance
        """
        self._balances.move("skill", provider, caller, hours)
        return self._balances.get_skill(caller)
