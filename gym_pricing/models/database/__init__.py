"""
Database models package
"""

from .discount_db import DiscountDB
from .pricing_config_db import PricingConfigDB

__all__ = [
    "DiscountDB",
    "PricingConfigDB"
]
