"""
Pricing data models
All money values are integer cents.
"""

from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_validator
from enum import Enum


class MemberStatus(str, Enum):
    """Member status enum"""
    LEAD = "new-lead"  # never activated, pays the enrollment fee
    ACTIVE = "active"
    BLOCKED = "blocked"
    CANCELLED = "cancelled"


class CommitmentPeriod(BaseModel):
    """Selectable commitment length"""

    model_config = ConfigDict(frozen=True)

    months: int = Field(..., ge=1)
    label: str
    discount_code: str


COMMITMENT_PERIODS: List[CommitmentPeriod] = [
    CommitmentPeriod(months=1, label="Monthly", discount_code="MENSAL"),
    CommitmentPeriod(months=3, label="Quarterly", discount_code="TRIMESTRAL"),
    CommitmentPeriod(months=6, label="Semiannual", discount_code="SEMESTRAL"),
    CommitmentPeriod(months=12, label="Annual", discount_code="ANUAL"),
]


class PricingConfig(BaseModel):
    """Pricing configuration snapshot"""

    model_config = ConfigDict(frozen=True)

    base_price_cents: int = Field(..., ge=0, description="Price of the first modality")
    extra_modality_price_cents: int = Field(..., ge=0, description="Price of each additional modality")
    single_class_price_cents: int = Field(default=0, ge=0, description="Single class price")
    day_pass_price_cents: int = Field(default=0, ge=0, description="Day pass price")
    enrollment_fee_cents: int = Field(..., ge=0, description="One-time enrollment fee")
    currency: str = Field(default="EUR", description="ISO 4217 currency code")

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v):
        """Currency must be a three-letter ISO 4217 code"""
        if len(v) != 3 or not v.isalpha():
            raise ValueError("currency must be a three-letter ISO 4217 code")
        return v.upper()


class PlanPricingOverride(BaseModel):
    """Per-plan price override, any field left empty falls back to the config"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_price_cents: Optional[int] = Field(None, ge=0)
    extra_modality_price_cents: Optional[int] = Field(None, ge=0)
    enrollment_fee_cents: Optional[int] = Field(None, ge=0)


class ResolvedPrices(BaseModel):
    """Effective prices for one calculation"""

    model_config = ConfigDict(frozen=True)

    base_price_cents: int
    extra_modality_price_cents: int
    enrollment_fee_cents: int


class PriceBreakdown(BaseModel):
    """Itemised result of a price calculation"""

    model_config = ConfigDict(frozen=True)

    # Base calculation
    base_price_cents: int = Field(..., ge=0)
    extra_modalities_count: int = Field(..., ge=0)
    extra_modalities_cents: int = Field(..., ge=0)
    subtotal_cents: int = Field(..., ge=0)

    # Discounts
    commitment_discount_pct: int = Field(..., ge=0, le=100)
    commitment_discount_cents: int = Field(..., ge=0)
    promo_discount_pct: int = Field(..., ge=0, le=100)
    promo_discount_cents: int = Field(..., ge=0)

    # Totals
    monthly_price_cents: int = Field(..., ge=0)
    enrollment_fee_cents: int = Field(..., ge=0)
    total_first_payment_cents: int = Field(..., ge=0)

    currency: str = Field(default="EUR")
