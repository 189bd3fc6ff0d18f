"""Administrator configuration endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from api.dependencies import caller_identity, get_market, unwrap
from api.schemas import (
    FeeDiscountRequest,
    LimitRequest,
    ServiceFeeRequest,
    SkillRateRequest,
    parameters_to_response,
)
from core.ledger import SkillMarket

router = APIRouter(prefix="/admin", tags=["admin"])


@router.put("/skill-rate")
def set_skill_rate(
    request: SkillRateRequest,
    caller: str = Depends(caller_identity),
    market: SkillMarket = Depends(get_market),
) -> dict[str, Any]:
    """Set the informational skill exchange rate."""
    parameters = unwrap(market.set_skill_rate(caller=caller, rate=request.rate))
    return {"success": True, "config": parameters_to_response(parameters)}


@router.put("/service-fee")
def set_service_fee(
    request: ServiceFeeRequest,
    caller: str = Depends(caller_identity),
    market: SkillMarket = Depends(get_market),
) -> dict[str, Any]:
    """Set the service fee percentage charged on exchanges."""
    parameters = unwrap(market.set_service_fee(caller=caller, fee_percent=request.fee))
    return {"success": True, "config": parameters_to_response(parameters)}


@router.put("/reserve-limit")
def set_reserve_limit(
    request: LimitRequest,
    caller: str = Depends(caller_identity),
    market: SkillMarket = Depends(get_market),
) -> dict[str, Any]:
    """Set the global cap on listed skill-hours."""
    parameters = unwrap(market.set_reserve_limit(caller=caller, limit=request.limit))
    return {"success": True, "config": parameters_to_response(parameters)}


@router.put("/max-skills-per-user")
def set_max_skills_per_user(
    request: LimitRequest,
    caller: str = Depends(caller_identity),
    market: SkillMarket = Depends(get_market),
) -> dict[str, Any]:
    parameters = unwrap(market.set_max_skills_per_user(caller=caller, limit=request.limit))
    return {"success": True, "config": parameters_to_response(parameters)}


@router.post("/service-fee/discount")
def apply_service_fee_discount(
    request: FeeDiscountRequest,
    caller: str = Depends(caller_identity),
    market: SkillMarket = Depends(get_market),
) -> dict[str, Any]:
    """Lower the global service fee by a number of percentage points."""
    parameters = unwrap(
        market.apply_service_fee_discount(caller=caller, participant=request.participant, discount=request.discount)
    )
    return {"success": True, "config": parameters_to_response(parameters)}
