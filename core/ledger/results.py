from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .errors import LedgerError, LedgerErrorCode


@dataclass(frozen=True)
class LedgerResult:
    """Outcome of a public ledger operation.

    Failures carry the stable error code; the state is untouched when
    ``ok`` is False.
    """

    ok: bool
    value: Any = None
    error: Optional[LedgerErrorCode] = None
    message: str = ""

    @classmethod
    def success(cls, value: Any = True) -> LedgerResult:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, exc: LedgerError) -> LedgerResult:
        return cls(ok=False, error=exc.code, message=exc.message)

    @property
    def error_code(self) -> Optional[int]:
        return int(self.error) if self.error is not None else None
