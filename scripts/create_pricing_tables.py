"""
Pricing database setup script
Creates the database, the pricing tables, and seeds the default config and commitment tiers.
"""

import asyncio
import sys
import traceback
from pathlib import Path

# Project root on the import path when run as a plain script
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy import text
from gym_pricing.core.config import settings
from gym_pricing.core.database import Base

# Register every table on Base.metadata
from gym_pricing.models.database import DiscountDB, PricingConfigDB  # noqa: F401


DEFAULT_COMMITMENT_TIERS = [
    {"id": "commit_trimestral", "code": "TRIMESTRAL", "name": "Quarterly commitment", "percent": 5, "months": 3},
    {"id": "commit_semestral", "code": "SEMESTRAL", "name": "Semiannual commitment", "percent": 10, "months": 6},
    {"id": "commit_anual", "code": "ANUAL", "name": "Annual commitment", "percent": 15, "months": 12},
]


async def create_database_if_not_exists():
    """Create the database when missing"""
    server_url = settings.database_url_computed.replace(f"/{settings.db_name}", "/postgres")

    engine = create_async_engine(server_url, isolation_level="AUTOCOMMIT")

    async with engine.connect() as conn:
        result = await conn.execute(
            text("SELECT 1 FROM pg_database WHERE datname = :db_name"),
            {"db_name": settings.db_name}
        )

        if not result.fetchone():
            await conn.execute(text(f"CREATE DATABASE {settings.db_name}"))
            print(f"Database '{settings.db_name}' created")
        else:
            print(f"Database '{settings.db_name}' already exists")

    await engine.dispose()


async def create_tables():
    """Create all pricing tables"""
    engine = create_async_engine(settings.database_url_computed)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        print("Pricing tables created")

    await engine.dispose()


async def create_indexes():
    """Indexes used by the catalog lookups"""
    engine = create_async_engine(settings.database_url_computed)

    indexes = [
        "CREATE INDEX IF NOT EXISTS idx_discounts_active_category ON discounts(is_active, category);",
        "CREATE INDEX IF NOT EXISTS idx_discounts_upper_code ON discounts(UPPER(code));",
        "CREATE INDEX IF NOT EXISTS idx_discounts_validity ON discounts(valid_from, valid_until);",
    ]

    async with engine.begin() as conn:
        for index_sql in indexes:
            await conn.execute(text(index_sql))
        print("Indexes created")

    await engine.dispose()


async def insert_default_config():
    """Seed the pricing_config row from the configured defaults"""
    engine = create_async_engine(settings.database_url_computed)

    async with engine.begin() as conn:
        result = await conn.execute(text("SELECT 1 FROM pricing_config LIMIT 1"))

        if not result.fetchone():
            await conn.execute(
                text("""
                    INSERT INTO pricing_config (
                        id, base_price_cents, extra_modality_price_cents, single_class_price_cents,
                        day_pass_price_cents, enrollment_fee_cents, currency
                    ) VALUES (
                        'default', :base, :extra, :single_class, :day_pass, :enrollment, :currency
                    )
                """),
                {
                    "base": settings.default_base_price_cents,
                    "extra": settings.default_extra_modality_price_cents,
                    "single_class": settings.default_single_class_price_cents,
                    "day_pass": settings.default_day_pass_price_cents,
                    "enrollment": settings.default_enrollment_fee_cents,
                    "currency": settings.default_currency,
                }
            )
            print("Default pricing config inserted")
        else:
            print("Pricing config already present")

    await engine.dispose()


async def insert_commitment_tiers():
    """Seed the standard commitment tiers"""
    engine = create_async_engine(settings.database_url_computed)

    async with engine.begin() as conn:
        for tier in DEFAULT_COMMITMENT_TIERS:
            result = await conn.execute(
                text("SELECT 1 FROM discounts WHERE id = :id"),
                {"id": tier["id"]}
            )

            if not result.fetchone():
                await conn.execute(
                    text("""
                        INSERT INTO discounts (
                            id, code, name, category, discount_type, discount_value,
                            min_commitment_months, current_uses, new_members_only, is_active
                        ) VALUES (
                            :id, :code, :name, 'commitment', 'percentage', :percent,
                            :months, 0, false, true
                        )
                    """),
                    tier
                )
                print(f"Inserted tier: {tier['code']}")
            else:
                print(f"Tier already present: {tier['code']}")

    await engine.dispose()


async def main():
    print("Setting up the pricing database...")

    try:
        await create_database_if_not_exists()
        await create_tables()
        await create_indexes()
        await insert_default_config()
        await insert_commitment_tiers()

        print("Pricing database ready")

    except Exception as e:
        print(f"Pricing database setup failed: {e}")
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
