"""
Pricing configuration table (single row)
"""

from sqlalchemy import Column, String, Integer, DateTime
from sqlalchemy.sql import func
from gym_pricing.core.database import Base


class PricingConfigDB(Base):
    """Pricing configuration table"""

    __tablename__ = "pricing_config"

    id = Column(String(50), primary_key=True, comment="Config ID")

    base_price_cents = Column(Integer, nullable=False, comment="First modality price")
    extra_modality_price_cents = Column(Integer, nullable=False, comment="Additional modality price")
    single_class_price_cents = Column(Integer, nullable=False, default=0, comment="Single class price")
    day_pass_price_cents = Column(Integer, nullable=False, default=0, comment="Day pass price")
    enrollment_fee_cents = Column(Integer, nullable=False, comment="Enrollment fee")
    currency = Column(String(3), nullable=False, default="EUR", comment="ISO 4217 code")

    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), comment="Updated at")
    updated_by = Column(String(50), comment="Last editor")

    __table_args__ = (
        {'comment': 'Gym pricing configuration'}
    )
