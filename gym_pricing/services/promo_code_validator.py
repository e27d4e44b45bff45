"""
Promo code validator
"""

from datetime import date
from typing import Iterable, Optional

from gym_pricing.models.discount import Discount, DiscountCategory, PromoCodeValidation
from gym_pricing.models.errors import PricingErrorKind
from gym_pricing.models.pricing import MemberStatus


def _find_active_promo(code: str, discounts: Iterable[Discount]) -> Optional[Discount]:
    wanted = code.strip().upper()
    for discount in discounts:
        if (
            discount.is_active
            and discount.category == DiscountCategory.PROMO
            and discount.code.upper() == wanted
        ):
            return discount
    return None


def validate_promo_code(
    code: str,
    discounts: Iterable[Discount],
    member_status: MemberStatus,
    today: Optional[date] = None
) -> PromoCodeValidation:
    """
    Check a promo code against the catalog.

    Checks run in order and stop at the first failure: unknown code, not
    yet valid, expired (valid_until is inclusive), use cap reached, new
    members only. Nothing is mutated; a use is only counted later through
    confirm_promo_usage.
    """
    if today is None:
        today = date.today()

    discount = _find_active_promo(code, discounts)
    if discount is None:
        return PromoCodeValidation.rejected(PricingErrorKind.INVALID_CODE)

    if discount.valid_from is not None and today < discount.valid_from:
        return PromoCodeValidation.rejected(PricingErrorKind.NOT_YET_VALID_CODE)

    if discount.valid_until is not None and today > discount.valid_until:
        return PromoCodeValidation.rejected(PricingErrorKind.EXPIRED_CODE)

    if discount.remaining_uses == 0:
        return PromoCodeValidation.rejected(PricingErrorKind.EXHAUSTED_CODE)

    if discount.new_members_only and member_status != MemberStatus.LEAD:
        return PromoCodeValidation.rejected(PricingErrorKind.RESTRICTED_TO_NEW_MEMBERS)

    return PromoCodeValidation.accepted(discount)
