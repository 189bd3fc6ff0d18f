import pytest

from core.ledger import LedgerError, LedgerErrorCode, ServiceFeeModel
from core.types import UINT_MAX


def test_quote_computes_cost_fee_and_total() -> None:
    quote = ServiceFeeModel(fee_percent=10).quote(hours=10, price_per_hour=5)

    assert quote.cost == 50
    assert quote.fee == 5
    assert quote.total == 55
    assert quote.fee_percent == 10


@pytest.mark.parametrize(
    ("cost", "fee_percent", "expected_fee"),
    [
        (0, 50, 0),
        (9, 10, 0),
        (10, 10, 1),
        (199, 1, 1),
        (123, 100, 123),
        (1000, 0, 0),
    ],
)
def test_fee_is_rounded_down(cost: int, fee_percent: int, expected_fee: int) -> None:
    assert ServiceFeeModel(fee_percent=fee_percent).fee_for(cost) == expected_fee


def test_fee_percent_must_be_a_percentage() -> None:
    with pytest.raises(ValueError, match="between 0 and 100"):
        ServiceFeeModel(fee_percent=101)


def test_quote_overflow_is_reported() -> None:
    with pytest.raises(LedgerError) as excinfo:
        ServiceFeeModel(fee_percent=1).quote(hours=UINT_MAX, price_per_hour=2)

    assert excinfo.value.code is LedgerErrorCode.ARITHMETIC_OVERFLOW


def test_quote_fee_matches_fee_for() -> None:
    model = ServiceFeeModel(fee_percent=7)
    quote = model.quote(hours=13, price_per_hour=11)

    assert quote.fee == model.fee_for(quote.cost) == 10
