"""Ledger error codes.

Numeric codes are part of the wire contract and must not be renumbered.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Literal

ErrorCategory = Literal["authorization", "validation", "resource", "arithmetic"]


class LedgerErrorCode(IntEnum):
    OWNER_ONLY = 200
    INVALID_SKILL = 201
    INSUFFICIENT_BALANCE = 202
    INVALID_RATE = 203
    RESERVE_LIMIT_REACHED = 204
    UNAUTHORIZED_USER = 205
    # Runtime aborts (uint underflow/overflow), not contract-defined codes
    ARITHMETIC_UNDERFLOW = 206
    ARITHMETIC_OVERFLOW = 207

    @property
    def category(self) -> ErrorCategory:
        return _CATEGORIES[self]

    @property
    def slug(self) -> str:
        """Lower-case name used in API error bodies (e.g. ``owner_only``)."""
        return self.name.lower()


_CATEGORIES: dict[LedgerErrorCode, ErrorCategory] = {
    LedgerErrorCode.OWNER_ONLY: "authorization",
    LedgerErrorCode.UNAUTHORIZED_USER: "authorization",
    LedgerErrorCode.INVALID_SKILL: "validation",
    LedgerErrorCode.INVALID_RATE: "validation",
    LedgerErrorCode.INSUFFICIENT_BALANCE: "resource",
    LedgerErrorCode.RESERVE_LIMIT_REACHED: "resource",
    LedgerErrorCode.ARITHMETIC_UNDERFLOW: "arithmetic",
    LedgerErrorCode.ARITHMETIC_OVERFLOW: "arithmetic",
}


class LedgerError(Exception):
    """Raised inside a ledger call when a precondition fails.

    The market facade catches it, discards staged writes and returns a
    failure result. Only the read-only quote lets it propagate.
    """

    def __init__(self, code: LedgerErrorCode, message: str = "") -> None:
        self.code = code
        self.message = message or code.slug
        super().__init__(f"{code.name} ({int(code)}): {self.message}")

    @property
    def category(self) -> ErrorCategory:
        return self.code.category
