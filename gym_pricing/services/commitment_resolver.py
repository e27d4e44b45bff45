"""
Commitment tier resolver
"""

from typing import Iterable, Optional

from gym_pricing.models.discount import (
    Discount,
    DiscountCategory,
    CommitmentDiscountResult
)


def _threshold(discount: Discount) -> int:
    return discount.min_commitment_months or 0


def find_commitment_discount(
    discounts: Iterable[Discount],
    commitment_months: int
) -> CommitmentDiscountResult:
    """
    Best commitment tier for the requested length.

    Picks the active percentage tier with the largest min_commitment_months
    not above the request: with tiers at 1/3/6 months, 4 months gets the
    3-month tier. Returns 0% and no discount when nothing qualifies.
    On duplicate thresholds the first in catalog order wins.
    """
    best: Optional[Discount] = None

    for discount in discounts:
        if not discount.is_active or discount.category != DiscountCategory.COMMITMENT:
            continue
        if not discount.is_percentage:
            continue
        if _threshold(discount) > commitment_months:
            continue
        if best is None or _threshold(discount) > _threshold(best):
            best = discount

    if best is None:
        return CommitmentDiscountResult(percentage=0, discount=None)

    return CommitmentDiscountResult(percentage=best.value.percent, discount=best)
