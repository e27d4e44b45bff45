"""
Price calculator

    monthly = (B + (M - 1) * E) * (1 - Dc/100) * (1 - Dp/100)

B base price, E extra modality price, M modality count, Dc commitment
discount, Dp promo discount. The promo discount applies to the price left
after the commitment discount, so the two stack multiplicatively.

All amounts are integer cents. Percentage splits use Decimal with
ROUND_HALF_UP to whole cents, e.g. 5% of 1010 = 50.5 -> 51.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from gym_pricing.models.discount import PercentageDiscount, FixedDiscount
from gym_pricing.models.pricing import PricingConfig, PlanPricingOverride, ResolvedPrices, PriceBreakdown

HUNDRED = Decimal(100)


def percent_of(amount_cents: int, percent: int) -> int:
    """Percentage of an amount in whole cents, rounded half up"""
    if amount_cents < 0:
        raise ValueError("amount_cents must not be negative")
    if not 0 <= percent <= 100:
        raise ValueError("percent must be between 0 and 100")

    share = Decimal(amount_cents) * Decimal(percent) / HUNDRED
    return int(share.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def resolve_prices(
    config: PricingConfig,
    plan_override: Optional[PlanPricingOverride] = None
) -> ResolvedPrices:
    """Effective prices, override fields replacing config fields one by one"""
    if plan_override is None:
        return ResolvedPrices(
            base_price_cents=config.base_price_cents,
            extra_modality_price_cents=config.extra_modality_price_cents,
            enrollment_fee_cents=config.enrollment_fee_cents
        )

    def pick(override_value: Optional[int], config_value: int) -> int:
        return config_value if override_value is None else override_value

    return ResolvedPrices(
        base_price_cents=pick(plan_override.base_price_cents, config.base_price_cents),
        extra_modality_price_cents=pick(
            plan_override.extra_modality_price_cents, config.extra_modality_price_cents
        ),
        enrollment_fee_cents=pick(plan_override.enrollment_fee_cents, config.enrollment_fee_cents)
    )


def calculate_price(
    config: PricingConfig,
    modality_count: int,
    commitment_months: int,
    commitment_discount_pct: int,
    promo_discount: Optional[Union[PercentageDiscount, FixedDiscount]] = None,
    is_first_time: bool = False,
    plan_override: Optional[PlanPricingOverride] = None
) -> PriceBreakdown:
    """
    Itemised monthly price and first payment.

    The steps run in a fixed order: subtotal, commitment discount on the
    subtotal, promo discount on what is left, enrollment fee. A fixed promo
    is capped at the remaining price, so the monthly price never goes
    below zero. A modality count of 0 is priced as a single modality.

    commitment_months is not used in the arithmetic; the tier is resolved
    beforehand and passed in as commitment_discount_pct.
    """
    prices = resolve_prices(config, plan_override)

    extra_count = max(modality_count - 1, 0)
    extra_cents = extra_count * prices.extra_modality_price_cents
    subtotal = prices.base_price_cents + extra_cents

    commitment_cents = percent_of(subtotal, commitment_discount_pct)
    after_commitment = subtotal - commitment_cents

    promo_pct = 0
    promo_cents = 0
    if isinstance(promo_discount, PercentageDiscount):
        promo_pct = promo_discount.percent
        promo_cents = percent_of(after_commitment, promo_pct)
    elif isinstance(promo_discount, FixedDiscount):
        promo_cents = min(promo_discount.amount_cents, after_commitment)

    monthly = max(after_commitment - promo_cents, 0)
    enrollment_fee = prices.enrollment_fee_cents if is_first_time else 0

    return PriceBreakdown(
        base_price_cents=prices.base_price_cents,
        extra_modalities_count=extra_count,
        extra_modalities_cents=extra_cents,
        subtotal_cents=subtotal,
        commitment_discount_pct=commitment_discount_pct,
        commitment_discount_cents=commitment_cents,
        promo_discount_pct=promo_pct,
        promo_discount_cents=promo_cents,
        monthly_price_cents=monthly,
        enrollment_fee_cents=enrollment_fee,
        total_first_payment_cents=monthly + enrollment_fee,
        currency=config.currency
    )
