"""Offer, exchange and transfer endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from api.dependencies import caller_identity, get_market, ledger_http_error, unwrap
from api.schemas import (
    ExchangeRequest,
    OfferRequest,
    RemoveSkillsRequest,
    TransferRequest,
    offer_to_response,
    receipt_to_response,
)
from core.ledger import LedgerError, SkillMarket
from core.types import UINT_MAX

router = APIRouter(tags=["market"])


@router.post("/offers")
def offer_skills(
    request: OfferRequest,
    caller: str = Depends(caller_identity),
    market: SkillMarket = Depends(get_market),
) -> dict[str, Any]:
    """List skill-hours for sale, adding to any existing offer.

    The new rate replaces the previous one.
    """
    offer = unwrap(market.offer_skills(caller=caller, hours=request.hours, rate=request.rate))
    return {"success": True, "offer": offer_to_response(offer)}


@router.post("/offers/remove")
def remove_skills(
    request: RemoveSkillsRequest,
    caller: str = Depends(caller_identity),
    market: SkillMarket = Depends(get_market),
) -> dict[str, Any]:
    """Withdraw hours from the caller's offer."""
    offer = unwrap(market.remove_skills(caller=caller, hours=request.hours))
    return {"success": True, "offer": offer_to_response(offer)}


@router.delete("/offers")
def cancel_skill_offer(
    caller: str = Depends(caller_identity),
    market: SkillMarket = Depends(get_market),
) -> dict[str, Any]:
    offer = unwrap(market.cancel_skill_offer(caller=caller))
    return {"success": True, "offer": offer_to_response(offer)}


@router.get("/offers/{provider}/quote")
def quote_exchange(
    provider: str,
    hours: int = Query(..., ge=0, le=UINT_MAX, description="Hours to price"),
    market: SkillMarket = Depends(get_market),
) -> dict[str, Any]:
    """Price a purchase at the provider's current offer and the current fee."""
    try:
        quote = market.quote_exchange(provider, hours)
    except LedgerError as exc:
        raise ledger_http_error(exc.code, exc.message) from exc
    return {
        "provider": provider,
        "hours": quote.hours,
        "price_per_hour": quote.price_per_hour,
        "fee_percent": quote.fee_percent,
        "cost": quote.cost,
        "fee": quote.fee,
        "total": quote.total,
    }


@router.post("/exchanges")
def exchange_skills(
    request: ExchangeRequest,
    caller: str = Depends(caller_identity),
    market: SkillMarket = Depends(get_market),
) -> dict[str, Any]:
    """Buy hours from a provider's offer, paying cost plus service fee."""
    receipt = unwrap(market.exchange_skills(caller=caller, provider=request.provider, hours=request.hours))
    return {"success": True, "exchange": receipt_to_response(receipt)}


@router.post("/transfers")
def transfer_skills(
    request: TransferRequest,
    caller: str = Depends(caller_identity),
    market: SkillMarket = Depends(get_market),
) -> dict[str, Any]:
    """Move skill-hours from the provider to the caller."""
    balance = unwrap(market.transfer_skills(caller=caller, provider=request.provider, hours=request.hours))
    return {"success": True, "skill_balance": balance}
