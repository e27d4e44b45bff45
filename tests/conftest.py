"""
Shared pytest fixtures
"""

import pytest
from datetime import date

from gym_pricing.models.discount import Discount, DiscountCategory, PercentageDiscount, FixedDiscount
from gym_pricing.models.pricing import PricingConfig


@pytest.fixture
def today():
    """Fixed 'today' for date-dependent checks"""
    return date(2026, 1, 15)


@pytest.fixture
def pricing_config():
    """Standard gym pricing: 60 EUR base, 30 EUR per extra modality, 50 EUR enrollment"""
    return PricingConfig(
        base_price_cents=6000,
        extra_modality_price_cents=3000,
        single_class_price_cents=1500,
        day_pass_price_cents=2500,
        enrollment_fee_cents=5000,
        currency="EUR"
    )


def make_commitment(discount_id, code, percent, months, is_active=True):
    return Discount(
        id=discount_id,
        code=code,
        name=code.title(),
        category=DiscountCategory.COMMITMENT,
        value=PercentageDiscount(percent=percent),
        min_commitment_months=months,
        is_active=is_active
    )


def make_promo(discount_id="promo_001", code="PROMO10", value=None, **overrides):
    data = dict(
        id=discount_id,
        code=code,
        name="Promo",
        category=DiscountCategory.PROMO,
        value=value or PercentageDiscount(percent=10),
        valid_from=date(2026, 1, 1),
        valid_until=date(2026, 12, 31),
        max_uses=100,
        current_uses=50,
        new_members_only=False,
        is_active=True
    )
    data.update(overrides)
    return Discount(**data)


@pytest.fixture
def commitment_tiers():
    """Quarterly 5%, semiannual 10%, annual 15%, plus an inactive 1-month 20%"""
    return [
        make_commitment("tier_12", "ANUAL", 15, 12),
        make_commitment("tier_6", "SEMESTRAL", 10, 6),
        make_commitment("tier_3", "TRIMESTRAL", 5, 3),
        make_commitment("tier_inactive", "INACTIVE", 20, 1, is_active=False),
    ]


@pytest.fixture
def promo_percentage():
    """Active 10% promo, 50 of 100 uses taken"""
    return make_promo()


@pytest.fixture
def promo_fixed():
    """Active 100 EUR fixed promo"""
    return make_promo(
        discount_id="promo_fixed",
        code="BIGFIXED",
        value=FixedDiscount(amount_cents=10000),
        max_uses=None,
        current_uses=0
    )


@pytest.fixture
def discount_catalog(commitment_tiers, promo_percentage, promo_fixed):
    """Full catalog snapshot"""
    return commitment_tiers + [promo_percentage, promo_fixed]


@pytest.fixture
def promo_factory():
    """Build promo discounts with field overrides"""
    return make_promo


@pytest.fixture
def commitment_factory():
    """Build commitment tiers"""
    return make_commitment
