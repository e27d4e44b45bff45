"""
Discount catalog table
"""

from sqlalchemy import Column, String, Integer, Boolean, Date, DateTime, CheckConstraint
from sqlalchemy.sql import func
from gym_pricing.core.database import Base


class DiscountDB(Base):
    """Discount catalog table"""

    __tablename__ = "discounts"

    # Identity
    id = Column(String(50), primary_key=True, comment="Discount ID")
    code = Column(String(50), nullable=False, index=True, comment="Discount code")
    name = Column(String(200), nullable=False, default="", comment="Display name")
    category = Column(String(20), nullable=False, index=True, comment="commitment or promo")

    # Value: percentage 0-100 or fixed amount in cents
    discount_type = Column(String(20), nullable=False, comment="percentage or fixed")
    discount_value = Column(Integer, nullable=False, comment="Percent or cents")

    # Commitment tiers
    min_commitment_months = Column(Integer, comment="Minimum qualifying commitment")

    # Promo codes
    valid_from = Column(Date, comment="First valid day")
    valid_until = Column(Date, comment="Last valid day, inclusive")
    max_uses = Column(Integer, comment="Total use cap")
    current_uses = Column(Integer, nullable=False, default=0, comment="Confirmed uses")
    new_members_only = Column(Boolean, nullable=False, default=False, comment="Only for new leads")

    is_active = Column(Boolean, nullable=False, default=True, index=True, comment="Soft-delete flag")

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), comment="Created at")
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), comment="Updated at")

    __table_args__ = (
        CheckConstraint("current_uses >= 0", name="ck_discounts_current_uses"),
        CheckConstraint("max_uses IS NULL OR current_uses <= max_uses", name="ck_discounts_use_cap"),
        CheckConstraint("discount_type IN ('percentage', 'fixed')", name="ck_discounts_type"),
        CheckConstraint("discount_value >= 0", name="ck_discounts_value_non_negative"),
        CheckConstraint("discount_type <> 'percentage' OR discount_value <= 100", name="ck_discounts_percentage_max"),
        CheckConstraint(
            "valid_from IS NULL OR valid_until IS NULL OR valid_until >= valid_from",
            name="ck_discounts_validity_period"
        ),
        {'comment': 'Commitment tiers and promo codes'}
    )
