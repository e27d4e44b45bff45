"""
Subscription term helpers
"""

import calendar
from datetime import date
from typing import Optional

from gym_pricing.models.result import PricingRequest, PricingSuccess, SubscriptionSnapshot


def calculate_expires_at(start: date, commitment_months: int) -> date:
    """
    Add calendar months, keeping the day inside the target month
    (Jan 31 + 1 month -> Feb 28/29).
    """
    if commitment_months < 0:
        raise ValueError("commitment_months must not be negative")

    month_index = start.month - 1 + commitment_months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(start.day, last_day))


def build_subscription_snapshot(
    request: PricingRequest,
    result: PricingSuccess,
    starts_at: Optional[date] = None
) -> SubscriptionSnapshot:
    """Price snapshot to store with the subscription created from a quote"""
    if starts_at is None:
        starts_at = date.today()

    breakdown = result.breakdown
    return SubscriptionSnapshot(
        modality_ids=list(request.modality_ids),
        commitment_months=request.commitment_months,
        calculated_price_cents=breakdown.subtotal_cents,
        commitment_discount_pct=breakdown.commitment_discount_pct,
        promo_discount_pct=breakdown.promo_discount_pct,
        final_price_cents=breakdown.monthly_price_cents,
        enrollment_fee_cents=breakdown.enrollment_fee_cents,
        starts_at=starts_at,
        expires_at=calculate_expires_at(starts_at, request.commitment_months),
        commitment_discount_id=result.matched_discount_ids.commitment,
        promo_discount_id=result.matched_discount_ids.promo
    )
