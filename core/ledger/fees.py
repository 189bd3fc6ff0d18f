from __future__ import annotations

from dataclasses import dataclass

from core.types import ExchangeQuote

from .arithmetic import checked_add, checked_mul

PERCENT_DENOMINATOR = 100


@dataclass(frozen=True)
class ServiceFeeModel:
    """Percentage surcharge on exchange cost.

    The fee is rounded down; the buyer pays cost + fee and the fee goes to
    the administrator.
    """

    fee_percent: int

    def __post_init__(self) -> None:
        if not 0 <= self.fee_percent <= PERCENT_DENOMINATOR:
            raise ValueError("fee_percent must be between 0 and 100")

    def quote(self, *, hours: int, price_per_hour: int) -> ExchangeQuote:
        """Price ``hours`` at ``price_per_hour`` including the service fee."""
        cost = checked_mul(hours, price_per_hour)
        fee = self.fee_for(cost)
        total = checked_add(cost, fee)

        return ExchangeQuote(
            hours=hours,
            price_per_hour=price_per_hour,
            fee_percent=self.fee_percent,
            cost=cost,
            fee=fee,
            total=total,
        )

    def fee_for(self, cost: int) -> int:
        """Return the fee owed on a raw ``cost``."""
        return checked_mul(cost, self.fee_percent) // PERCENT_DENOMINATOR
