"""
Discount catalog data access
"""

import logging
from typing import List, Optional

from sqlalchemy import select, update, and_, or_, asc
from sqlalchemy.ext.asyncio import AsyncSession

from gym_pricing.models.discount import (
    Discount,
    DiscountCategory,
    PromoUsageOutcome,
    discount_value_from_columns
)
from gym_pricing.models.database.discount_db import DiscountDB

logger = logging.getLogger(__name__)


class DiscountRepository:
    """Discount catalog data access"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, discount_id: str) -> Optional[DiscountDB]:
        """Get a discount by ID"""
        result = await self.db.execute(
            select(DiscountDB).where(DiscountDB.id == discount_id)
        )
        return result.scalar_one_or_none()

    async def get_active_discounts(self) -> List[DiscountDB]:
        """Active discounts, commitment tiers ordered by threshold"""
        query = select(DiscountDB).where(DiscountDB.is_active.is_(True)).order_by(
            asc(DiscountDB.category),
            asc(DiscountDB.min_commitment_months),
            asc(DiscountDB.code)
        )

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def confirm_promo_usage(self, discount_id: str) -> PromoUsageOutcome:
        """
        Count one confirmed use of a promo code.

        The cap check and the increment run as a single conditional UPDATE,
        so two concurrent confirmations can never both pass the cap.
        A counted use is committed here, before callers invalidate caches.
        Call only after the payment has been confirmed.
        """
        result = await self.db.execute(
            update(DiscountDB)
            .where(
                and_(
                    DiscountDB.id == discount_id,
                    DiscountDB.is_active.is_(True),
                    DiscountDB.category == DiscountCategory.PROMO.value,
                    or_(
                        DiscountDB.max_uses.is_(None),
                        DiscountDB.current_uses < DiscountDB.max_uses
                    )
                )
            )
            .values(current_uses=DiscountDB.current_uses + 1)
            .execution_options(synchronize_session=False)
        )

        if result.rowcount == 1:
            await self.db.commit()
            logger.info(f"Promo usage confirmed: {discount_id}")
            return PromoUsageOutcome.CONFIRMED

        db_discount = await self.get_by_id(discount_id)
        if (
            db_discount is None
            or not db_discount.is_active
            or db_discount.category != DiscountCategory.PROMO.value
        ):
            logger.warning(f"Promo usage for unknown discount: {discount_id}")
            return PromoUsageOutcome.NOT_FOUND

        logger.warning(f"Promo usage rejected, cap reached: {discount_id}")
        return PromoUsageOutcome.EXHAUSTED

    def to_model(self, db_discount: DiscountDB) -> Discount:
        """Convert a row to the domain model"""
        return Discount(
            id=db_discount.id,
            code=db_discount.code,
            name=db_discount.name or "",
            category=DiscountCategory(db_discount.category),
            value=discount_value_from_columns(db_discount.discount_type, db_discount.discount_value),
            min_commitment_months=db_discount.min_commitment_months,
            valid_from=db_discount.valid_from,
            valid_until=db_discount.valid_until,
            max_uses=db_discount.max_uses,
            current_uses=db_discount.current_uses or 0,
            new_members_only=bool(db_discount.new_members_only),
            is_active=bool(db_discount.is_active),
            created_at=db_discount.created_at
        )
