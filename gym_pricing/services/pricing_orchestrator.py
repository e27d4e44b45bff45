"""
Pricing orchestrator - the single entry point for a price quote
"""

from datetime import date
from typing import Iterable, Mapping, Optional, Tuple

from pydantic import ValidationError

from gym_pricing.models.discount import Discount
from gym_pricing.models.errors import PricingErrorKind
from gym_pricing.models.pricing import MemberStatus, PlanPricingOverride, PricingConfig
from gym_pricing.models.result import (
    PricingRequest,
    PricingResult,
    PricingSuccess,
    PricingFailure,
    MatchedDiscountIds
)
from gym_pricing.services.commitment_resolver import find_commitment_discount
from gym_pricing.services.price_calculator import calculate_price
from gym_pricing.services.promo_code_validator import validate_promo_code


def _coerce_override(raw) -> Tuple[Optional[PlanPricingOverride], bool]:
    """(override, ok); ok is False for negative or malformed values"""
    if raw is None:
        return None, True

    # Instances are re-checked too, model_construct skips validation
    if isinstance(raw, PlanPricingOverride):
        raw = raw.model_dump()
    if not isinstance(raw, Mapping):
        return None, False

    try:
        return PlanPricingOverride.model_validate(dict(raw)), True
    except ValidationError:
        return None, False


def calculate_pricing(
    config: PricingConfig,
    discounts: Iterable[Discount],
    request: PricingRequest,
    today: Optional[date] = None
) -> PricingResult:
    """
    Quote a subscription.

    Pure: the config and catalog are snapshots, nothing is stored and no
    promo use is counted. Every rejection comes back as a PricingFailure;
    a rejected promo code fails the whole quote instead of falling back
    to an undiscounted price.
    """
    discounts = list(discounts)

    if not request.modality_ids:
        return PricingFailure.of(PricingErrorKind.NO_MODALITY_SELECTED)

    plan_override, override_ok = _coerce_override(request.plan_override)
    if not override_ok:
        return PricingFailure.of(PricingErrorKind.INVALID_OVERRIDE)

    commitment = find_commitment_discount(discounts, request.commitment_months)

    promo = None
    if request.promo_code:
        validation = validate_promo_code(request.promo_code, discounts, request.member_status, today=today)
        if not validation.valid:
            return PricingFailure.of(validation.error)
        promo = validation.discount

    breakdown = calculate_price(
        config=config,
        modality_count=len(request.modality_ids),
        commitment_months=request.commitment_months,
        commitment_discount_pct=commitment.percentage,
        promo_discount=promo.value if promo else None,
        is_first_time=request.member_status == MemberStatus.LEAD,
        plan_override=plan_override
    )

    return PricingSuccess(
        breakdown=breakdown,
        matched_discount_ids=MatchedDiscountIds(
            commitment=commitment.discount.id if commitment.discount else None,
            promo=promo.id if promo else None
        )
    )
