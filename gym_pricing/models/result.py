"""
Pricing request and result models
"""

from datetime import date
from typing import List, Optional, Dict, Any, Union, Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator

from gym_pricing.models.errors import PricingErrorKind, error_message
from gym_pricing.models.pricing import MemberStatus, PlanPricingOverride, PriceBreakdown


class PricingRequest(BaseModel):
    """Price calculation request"""

    model_config = ConfigDict(frozen=True)

    modality_ids: List[str] = Field(default_factory=list, description="Selected modality IDs, only the count affects price")
    commitment_months: int = Field(default=1, ge=1, description="Commitment length in months")
    promo_code: Optional[str] = Field(None, max_length=50, description="Promo code, case-insensitive")
    member_status: MemberStatus = Field(..., description="Requesting member status")
    # Malformed overrides are kept as raw mappings and rejected by the orchestrator
    plan_override: Optional[Union[PlanPricingOverride, Dict[str, Any]]] = Field(None, description="Plan price override")

    @field_validator("promo_code", mode="before")
    @classmethod
    def normalize_promo_code(cls, v):
        """Trim before the length check, blank codes count as no code"""
        if isinstance(v, str):
            return v.strip() or None
        return v


class MatchedDiscountIds(BaseModel):
    """Catalog IDs of the discounts applied to a calculation"""

    model_config = ConfigDict(frozen=True)

    commitment: Optional[str] = None
    promo: Optional[str] = None


class PricingSuccess(BaseModel):
    """Successful calculation"""

    model_config = ConfigDict(frozen=True)

    success: Literal[True] = True
    breakdown: PriceBreakdown
    matched_discount_ids: MatchedDiscountIds = Field(default_factory=MatchedDiscountIds)


class PricingFailure(BaseModel):
    """Rejected calculation"""

    model_config = ConfigDict(frozen=True)

    success: Literal[False] = False
    error: PricingErrorKind
    message: str

    @classmethod
    def of(cls, error: PricingErrorKind) -> "PricingFailure":
        return cls(error=error, message=error_message(error))


PricingResult = Union[PricingSuccess, PricingFailure]


class SubscriptionSnapshot(BaseModel):
    """Immutable price snapshot a caller stores with a new subscription"""

    model_config = ConfigDict(frozen=True)

    modality_ids: List[str]
    commitment_months: int = Field(..., ge=1)
    calculated_price_cents: int = Field(..., ge=0, description="Subtotal before discounts")
    commitment_discount_pct: int = Field(..., ge=0, le=100)
    promo_discount_pct: int = Field(..., ge=0, le=100)
    final_price_cents: int = Field(..., ge=0, description="Monthly price after discounts")
    enrollment_fee_cents: int = Field(..., ge=0)
    starts_at: date
    expires_at: date
    commitment_discount_id: Optional[str] = None
    promo_discount_id: Optional[str] = None
