"""
Pricing configuration data access
"""

from typing import Optional

from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession

from gym_pricing.models.pricing import PricingConfig
from gym_pricing.models.database.pricing_config_db import PricingConfigDB


class PricingConfigRepository:
    """Pricing configuration data access"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_current(self) -> Optional[PricingConfigDB]:
        """The configuration row, most recently updated first"""
        result = await self.db.execute(
            select(PricingConfigDB).order_by(desc(PricingConfigDB.updated_at)).limit(1)
        )
        return result.scalar_one_or_none()

    def to_model(self, db_config: PricingConfigDB) -> PricingConfig:
        """Convert a row to the domain model"""
        return PricingConfig(
            base_price_cents=db_config.base_price_cents,
            extra_modality_price_cents=db_config.extra_modality_price_cents,
            single_class_price_cents=db_config.single_class_price_cents or 0,
            day_pass_price_cents=db_config.day_pass_price_cents or 0,
            enrollment_fee_cents=db_config.enrollment_fee_cents,
            currency=db_config.currency or "EUR"
        )
