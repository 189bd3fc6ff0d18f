"""FastAPI application for the skill-hour marketplace ledger.

This module provides the HTTP boundary over ``SkillMarket``:
- PUT /admin/* - Administrator configuration (see api/routes/admin.py)
- POST /offers, POST /offers/remove, DELETE /offers - Manage the caller's offer
- GET /offers/{provider}/quote - Price a purchase without executing it
- POST /exchanges - Buy listed hours
- POST /transfers - Move hours from a provider to the caller
- GET /participants/{participant} - Balances and offer of a participant
- GET /participants/{participant}/activity - Self-only activity gate
- GET /config - Current market parameters and reserve
- GET /health - Liveness and persistence mode

Requirements:
- SKILLMARKET_ADMIN must be set in environment
- DATABASE_URL is optional; without it the ledger lives in memory
- Callers are identified by the X-Participant-Id header set by the gateway
"""

from __future__ import annotations

import logging
import os
from typing import Any

from fastapi import Depends, FastAPI, Path
from fastapi.responses import JSONResponse

from api.dependencies import caller_identity, get_market, unwrap
from api.routes import admin as admin_routes
from api.routes import market as market_routes
from api.schemas import offer_to_response, parameters_to_response
from core.ledger import SkillMarket

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Skill Market API",
    description="API for skill-hour offers, exchanges and marketplace configuration",
    version="1.0.0",
)

app.include_router(admin_routes.router)
app.include_router(market_routes.router)


@app.get("/health")
def health(market: SkillMarket = Depends(get_market)) -> dict[str, Any]:
    """Health check endpoint.

    Returns:
        JSON with the administrator and the persistence mode.
    """
    return {
        "status": "ok",
        "administrator": market.administrator,
        "persistence": "sql" if os.environ.get("DATABASE_URL") else "memory",
    }


@app.get("/config")
def get_config(market: SkillMarket = Depends(get_market)) -> dict[str, Any]:
    """Current market parameters and the total skill reserve."""
    snapshot = market.snapshot()
    return {
        "administrator": snapshot.administrator,
        **parameters_to_response(snapshot.parameters),
        "total_skill_reserve": snapshot.total_skill_reserve,
    }


@app.get("/participants/{participant}")
def get_participant(
    participant: str = Path(..., min_length=1),
    market: SkillMarket = Depends(get_market),
) -> dict[str, Any]:
    """Balances and current offer of a participant (zero for unknown ones)."""
    return {
        "participant": participant,
        "skill_balance": market.get_skill_balance(participant),
        "currency_balance": market.get_currency_balance(participant),
        "offer": offer_to_response(market.get_skills_for_exchange(participant)),
    }


@app.get("/participants/{participant}/activity")
def view_activity_page(
    participant: str = Path(..., min_length=1),
    caller: str = Depends(caller_identity),
    market: SkillMarket = Depends(get_market),
) -> dict[str, Any]:
    """Self-only activity page; other callers get unauthorized_user."""
    unwrap(market.view_activity_page(caller=caller, participant=participant))
    return {"success": True, "participant": participant}


@app.exception_handler(Exception)
async def global_exception_handler(_request, exc):
    """Global exception handler to ensure consistent error responses."""
    logger.error(f"Unhandled error: {type(exc).__name__}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred",
        },
    )
