"""
Data models package
"""

from .pricing import (
    MemberStatus,
    CommitmentPeriod,
    COMMITMENT_PERIODS,
    PricingConfig,
    PlanPricingOverride,
    ResolvedPrices,
    PriceBreakdown
)
from .discount import (
    Discount,
    DiscountCategory,
    DiscountType,
    DiscountValue,
    PercentageDiscount,
    FixedDiscount,
    CommitmentDiscountResult,
    PromoCodeValidation,
    PromoUsageOutcome
)
from .errors import PricingErrorKind
from .result import (
    PricingRequest,
    MatchedDiscountIds,
    PricingSuccess,
    PricingFailure,
    PricingResult,
    SubscriptionSnapshot
)

__all__ = [
    "MemberStatus",
    "CommitmentPeriod",
    "COMMITMENT_PERIODS",
    "PricingConfig",
    "PlanPricingOverride",
    "ResolvedPrices",
    "PriceBreakdown",
    "Discount",
    "DiscountCategory",
    "DiscountType",
    "DiscountValue",
    "PercentageDiscount",
    "FixedDiscount",
    "CommitmentDiscountResult",
    "PromoCodeValidation",
    "PromoUsageOutcome",
    "PricingErrorKind",
    "PricingRequest",
    "MatchedDiscountIds",
    "PricingSuccess",
    "PricingFailure",
    "PricingResult",
    "SubscriptionSnapshot"
]
