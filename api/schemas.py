"""Request models and response serializers for the marketplace API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from core.types import UINT_MAX, ExchangeReceipt, MarketParameters, Offer


class SkillRateRequest(BaseModel):
    rate: int = Field(..., ge=0, le=UINT_MAX)


class ServiceFeeRequest(BaseModel):
    fee: int = Field(..., ge=0, le=UINT_MAX, description="Service fee in percent (0-100)")


class LimitRequest(BaseModel):
    limit: int = Field(..., ge=0, le=UINT_MAX)


class FeeDiscountRequest(BaseModel):
    participant: str = Field(..., min_length=1)
    discount: int = Field(..., ge=0, le=UINT_MAX)


class OfferRequest(BaseModel):
    hours: int = Field(..., ge=0, le=UINT_MAX)
    rate: int = Field(..., ge=0, le=UINT_MAX, description="Price per hour")


class RemoveSkillsRequest(BaseModel):
    hours: int = Field(..., ge=0, le=UINT_MAX)


class ExchangeRequest(BaseModel):
    provider: str = Field(..., min_length=1)
    hours: int = Field(..., ge=0, le=UINT_MAX)


class TransferRequest(BaseModel):
    provider: str = Field(..., min_length=1)
    hours: int = Field(..., ge=0, le=UINT_MAX)


def parameters_to_response(parameters: MarketParameters) -> dict[str, Any]:
    return {
        "skill_rate": parameters.skill_rate,
        "service_fee": parameters.service_fee_percent,
        "max_skills_per_user": parameters.max_skills_per_user,
        "skill_reserve_limit": parameters.reserve_limit,
    }


def offer_to_response(offer: Offer) -> dict[str, Any]:
    return {
        "hours_offered": offer.hours_offered,
        "price_per_hour": offer.price_per_hour,
    }


def receipt_to_response(receipt: ExchangeReceipt) -> dict[str, Any]:
    quote = receipt.quote
    return {
        "buyer": receipt.buyer,
        "provider": receipt.provider,
        "fee_recipient": receipt.administrator,
        "hours": quote.hours,
        "price_per_hour": quote.price_per_hour,
        "fee_percent": quote.fee_percent,
        "cost": quote.cost,
        "fee": quote.fee,
        "total": quote.total,
        "provider_hours_remaining": receipt.provider_hours_remaining,
    }
