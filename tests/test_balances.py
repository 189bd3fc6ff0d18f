"""Tests for the balance ledger and checked arithmetic."""

import pytest

from core.ledger import BalanceLedger, LedgerError, LedgerErrorCode, LedgerState, StagedState
from core.ledger.arithmetic import checked_add, checked_mul, checked_sub, require_uint
from core.types import UINT_MAX, MarketParameters


def _staged(skill=None, currency=None) -> StagedState:
    state = LedgerState(
        administrator="admin",
        parameters=MarketParameters(skill_rate=1, service_fee_percent=0, max_skills_per_user=100, reserve_limit=100),
        skill_balances=skill,
        currency_balances=currency,
    )
    return StagedState(state)


class TestBalanceLedger:
    """Tests for BalanceLedger."""

    def test_unknown_participant_reads_zero(self) -> None:
        ledger = BalanceLedger(_staged())
        assert ledger.get_skill("nobody") == 0
        assert ledger.get_currency("nobody") == 0

    def test_credit_and_debit(self) -> None:
        ledger = BalanceLedger(_staged(currency={"bob": 100}))
        assert ledger.credit_currency("bob", 50) == 150
        assert ledger.debit_currency("bob", 120) == 30
        assert ledger.get("currency", "bob") == 30

    def test_debit_insufficient_raises(self) -> None:
        ledger = BalanceLedger(_staged(skill={"alice": 5}))
        with pytest.raises(LedgerError) as excinfo:
            ledger.debit_skill("alice", 6)
        assert excinfo.value.code is LedgerErrorCode.INSUFFICIENT_BALANCE
        assert "Insufficient skill balance" in excinfo.value.message
        assert ledger.get_skill("alice") == 5

    def test_credit_overflow_raises(self) -> None:
        ledger = BalanceLedger(_staged(currency={"bob": UINT_MAX}))
        with pytest.raises(LedgerError) as excinfo:
            ledger.credit_currency("bob", 1)
        assert excinfo.value.code is LedgerErrorCode.ARITHMETIC_OVERFLOW

    def test_move_between_participants(self) -> None:
        ledger = BalanceLedger(_staged(skill={"alice": 10}))
        ledger.move("skill", "alice", "carol", 4)
        assert ledger.get_skill("alice") == 6
        assert ledger.get_skill("carol") == 4

    def test_writes_stay_in_overlay(self) -> None:
        """Staged writes are not visible on the base state until applied."""
        base = LedgerState(
            administrator="admin",
            parameters=MarketParameters(
                skill_rate=1, service_fee_percent=0, max_skills_per_user=100, reserve_limit=100
            ),
            skill_balances={"alice": 10},
        )
        staged = StagedState(base)
        BalanceLedger(staged).debit_skill("alice", 3)

        assert base.skill_balances["alice"] == 10
        base.apply(staged.changes())
        assert base.skill_balances["alice"] == 7


class TestCheckedArithmetic:
    """Tests for uint128 helpers."""

    def test_add_at_limit(self) -> None:
        assert checked_add(UINT_MAX - 1, 1) == UINT_MAX
        with pytest.raises(LedgerError):
            checked_add(UINT_MAX, 1)

    def test_sub_underflow(self) -> None:
        assert checked_sub(5, 5) == 0
        with pytest.raises(LedgerError) as excinfo:
            checked_sub(5, 6)
        assert excinfo.value.code is LedgerErrorCode.ARITHMETIC_UNDERFLOW

    def test_mul_overflow(self) -> None:
        with pytest.raises(LedgerError) as excinfo:
            checked_mul(2**64, 2**64)
        assert excinfo.value.code is LedgerErrorCode.ARITHMETIC_OVERFLOW

    @pytest.mark.parametrize("value", [-1, UINT_MAX + 1, 1.5, "3", True])
    def test_require_uint_rejects(self, value) -> None:
        with pytest.raises(ValueError):
            require_uint("amount", value)

    def test_require_uint_accepts_bounds(self) -> None:
        assert require_uint("amount", 0) == 0
        assert require_uint("amount", UINT_MAX) == UINT_MAX


class TestErrorCodes:
    """Numeric codes are a stable contract."""

    def test_codes(self) -> None:
        assert {code.name: int(code) for code in LedgerErrorCode} == {
            "OWNER_ONLY": 200,
            "INVALID_SKILL": 201,
            "INSUFFICIENT_BALANCE": 202,
            "INVALID_RATE": 203,
            "RESERVE_LIMIT_REACHED": 204,
            "UNAUTHORIZED_USER": 205,
            "ARITHMETIC_UNDERFLOW": 206,
            "ARITHMETIC_OVERFLOW": 207,
        }

    def test_categories(self) -> None:
        assert LedgerErrorCode.OWNER_ONLY.category == "authorization"
        assert LedgerErrorCode.INVALID_RATE.category == "validation"
        assert LedgerErrorCode.RESERVE_LIMIT_REACHED.category == "resource"
        assert LedgerErrorCode.ARITHMETIC_OVERFLOW.category == "arithmetic"
        assert LedgerErrorCode.UNAUTHORIZED_USER.slug == "unauthorized_user"
