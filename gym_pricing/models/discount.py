"""
Discount catalog models
A discount's value is a tagged union so a percentage can never be read as cents.
"""

from datetime import date, datetime
from typing import Annotated, Optional, Union, Literal
from pydantic import BaseModel, ConfigDict, Field, model_validator
from enum import Enum

from gym_pricing.models.errors import PricingErrorKind, error_message


class DiscountCategory(str, Enum):
    """Discount category enum"""
    COMMITMENT = "commitment"  # tier unlocked by commitment length
    PROMO = "promo"  # redeemable code


class DiscountType(str, Enum):
    """Stored discount type column values"""
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class PercentageDiscount(BaseModel):
    """Percentage off, 0-100"""

    model_config = ConfigDict(frozen=True)

    kind: Literal["percentage"] = "percentage"
    percent: int = Field(..., ge=0, le=100)


class FixedDiscount(BaseModel):
    """Fixed amount off, in cents"""

    model_config = ConfigDict(frozen=True)

    kind: Literal["fixed"] = "fixed"
    amount_cents: int = Field(..., ge=0)


DiscountValue = Annotated[Union[PercentageDiscount, FixedDiscount], Field(discriminator="kind")]


def discount_value_from_columns(discount_type: str, discount_value: int) -> Union[PercentageDiscount, FixedDiscount]:
    """Build the tagged value from the stored type/value pair"""
    if discount_type == DiscountType.PERCENTAGE.value:
        return PercentageDiscount(percent=discount_value)
    if discount_type == DiscountType.FIXED.value:
        return FixedDiscount(amount_cents=discount_value)
    raise ValueError(f"unknown discount type: {discount_type}")


class Discount(BaseModel):
    """Discount catalog entry"""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Discount ID")
    code: str = Field(..., min_length=1, max_length=50, description="Discount code")
    name: str = Field(default="", description="Display name")
    category: DiscountCategory = Field(..., description="Discount category")
    value: DiscountValue = Field(..., description="Percentage or fixed amount")

    # Commitment tiers only
    min_commitment_months: Optional[int] = Field(None, ge=0, description="Minimum qualifying commitment")

    # Promo codes only
    valid_from: Optional[date] = Field(None, description="First valid day")
    valid_until: Optional[date] = Field(None, description="Last valid day, inclusive")
    max_uses: Optional[int] = Field(None, ge=0, description="Total use cap")
    current_uses: int = Field(default=0, ge=0, description="Confirmed uses")
    new_members_only: bool = Field(default=False, description="Only for new leads")

    is_active: bool = Field(default=True)
    created_at: Optional[datetime] = None

    @model_validator(mode="after")
    def validate_validity_period(self):
        """valid_until cannot precede valid_from"""
        if self.valid_from and self.valid_until and self.valid_until < self.valid_from:
            raise ValueError("valid_until must not be earlier than valid_from")
        return self

    @property
    def is_percentage(self) -> bool:
        return isinstance(self.value, PercentageDiscount)

    @property
    def remaining_uses(self) -> Optional[int]:
        """Uses left before the cap, None when uncapped"""
        if self.max_uses is None:
            return None
        return max(self.max_uses - self.current_uses, 0)


class CommitmentDiscountResult(BaseModel):
    """Best commitment tier for a requested length"""

    model_config = ConfigDict(frozen=True)

    percentage: int = Field(default=0, ge=0, le=100)
    discount: Optional[Discount] = None


class PromoCodeValidation(BaseModel):
    """Promo code validation result"""

    model_config = ConfigDict(frozen=True)

    valid: bool
    discount: Optional[Discount] = None
    error: Optional[PricingErrorKind] = None
    message: Optional[str] = None

    @model_validator(mode="after")
    def validate_outcome(self):
        """A valid result carries the discount, an invalid one the error"""
        if self.valid and (self.discount is None or self.error is not None):
            raise ValueError("a valid result needs a discount and no error")
        if not self.valid and (self.error is None or self.discount is not None):
            raise ValueError("an invalid result needs an error and no discount")
        return self

    @classmethod
    def accepted(cls, discount: Discount) -> "PromoCodeValidation":
        return cls(valid=True, discount=discount)

    @classmethod
    def rejected(cls, error: PricingErrorKind) -> "PromoCodeValidation":
        return cls(valid=False, error=error, message=error_message(error))


class PromoUsageOutcome(str, Enum):
    """Result of confirming one promo code use"""
    CONFIRMED = "confirmed"
    EXHAUSTED = "exhausted"
    NOT_FOUND = "not_found"
