"""Unsigned 128-bit arithmetic that aborts instead of wrapping."""

from __future__ import annotations

from core.types import UINT_MAX

from .errors import LedgerError, LedgerErrorCode


def require_uint(name: str, value: int) -> int:
    """Validate a caller-supplied uint argument.

    Raises:
        ValueError: If value is not an int in [0, UINT_MAX]
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0 or value > UINT_MAX:
        raise ValueError(f"{name} must be an unsigned 128-bit integer, got {value}")
    return value


def checked_add(a: int, b: int) -> int:
    result = a + b
    if result > UINT_MAX:
        raise LedgerError(LedgerErrorCode.ARITHMETIC_OVERFLOW, f"{a} + {b} exceeds uint128")
    return result


def checked_sub(a: int, b: int) -> int:
    if b > a:
        raise LedgerError(LedgerErrorCode.ARITHMETIC_UNDERFLOW, f"{a} - {b} is negative")
    return a - b


def checked_mul(a: int, b: int) -> int:
    result = a * b
    if result > UINT_MAX:
        raise LedgerError(LedgerErrorCode.ARITHMETIC_OVERFLOW, f"{a} * {b} exceeds uint128")
    return result
