"""
Services package
"""

from .price_calculator import calculate_price, resolve_prices, percent_of
from .commitment_resolver import find_commitment_discount
from .promo_code_validator import validate_promo_code
from .pricing_orchestrator import calculate_pricing
from .subscription_terms import calculate_expires_at, build_subscription_snapshot
from .pricing_service import PricingService

__all__ = [
    "calculate_price",
    "resolve_prices",
    "percent_of",
    "find_commitment_discount",
    "validate_promo_code",
    "calculate_pricing",
    "calculate_expires_at",
    "build_subscription_snapshot",
    "PricingService"
]
