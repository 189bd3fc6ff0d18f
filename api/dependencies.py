"""Shared FastAPI dependencies: the market singleton, caller identity and error mapping."""

from __future__ import annotations

import logging
import os
import threading
from typing import Any

from fastapi import Header, HTTPException

from core.ledger import LedgerResult, MarketSettings, SkillMarket
from core.ledger.errors import ErrorCategory, LedgerErrorCode
from core.storage.sql import SqlLedgerStore, SqlStoreConfig

logger = logging.getLogger(__name__)

# Global market instance (initialized on first request)
_market: SkillMarket | None = None
_market_lock = threading.Lock()

STATUS_BY_CATEGORY: dict[ErrorCategory, int] = {
    "authorization": 403,
    "validation": 400,
    "resource": 409,
    "arithmetic": 422,
}


def _build_market() -> SkillMarket:
    settings = MarketSettings.from_env()
    database_url = os.environ.get("DATABASE_URL")
    if not database_url:
        logger.info("DATABASE_URL not set, running the ledger in memory")
        return SkillMarket.from_settings(settings)

    store = SqlLedgerStore(config=SqlStoreConfig(database_url=database_url))
    store.create_schema()
    return SkillMarket.from_store(store, settings)


def get_market() -> SkillMarket:
    """Get or initialize the marketplace ledger."""
    global _market
    with _market_lock:
        if _market is None:
            _market = _build_market()
        return _market


def reset_market(market: SkillMarket | None = None) -> None:
    """Replace the global market (None forces a rebuild from environment)."""
    global _market
    with _market_lock:
        _market = market


def caller_identity(
    x_participant_id: str = Header(..., alias="X-Participant-Id", min_length=1),
) -> str:
    """Caller identity, already authenticated by the upstream gateway."""
    return x_participant_id


def ledger_http_error(code: LedgerErrorCode, message: str) -> HTTPException:
    """Build the HTTPException for a ledger error code."""
    return HTTPException(
        status_code=STATUS_BY_CATEGORY[code.category],
        detail={
            "error": code.slug,
            "code": int(code),
            "category": code.category,
            "message": message,
        },
    )


def unwrap(result: LedgerResult) -> Any:
    """Return the result value or raise an HTTPException carrying the stable error code."""
    if result.ok:
        return result.value

    assert result.error is not None
    raise ledger_http_error(result.error, result.message)
