"""
Repositories package - database access layer
"""

from .discount_repository import DiscountRepository
from .pricing_config_repository import PricingConfigRepository

__all__ = [
    "DiscountRepository",
    "PricingConfigRepository"
]
