"""
Pricing service
Loads config and catalog snapshots (cache, then database, then defaults)
and hands them to the pure pricing functions.
"""

from datetime import date
from typing import List, Optional

import structlog

from gym_pricing.core.config import settings
from gym_pricing.models.discount import (
    Discount,
    CommitmentDiscountResult,
    PromoCodeValidation,
    PromoUsageOutcome
)
from gym_pricing.models.pricing import MemberStatus, PricingConfig
from gym_pricing.models.result import PricingRequest, PricingResult, PricingSuccess, SubscriptionSnapshot
from gym_pricing.repositories.discount_repository import DiscountRepository
from gym_pricing.repositories.pricing_config_repository import PricingConfigRepository
from gym_pricing.services.common_cache import pricing_cache
from gym_pricing.services.commitment_resolver import find_commitment_discount
from gym_pricing.services.pricing_orchestrator import calculate_pricing
from gym_pricing.services.promo_code_validator import validate_promo_code
from gym_pricing.services.subscription_terms import build_subscription_snapshot

logger = structlog.get_logger()

CONFIG_CACHE_KEY = "config"
DISCOUNTS_CACHE_KEY = "discounts:active"


def default_pricing_config() -> PricingConfig:
    """Config used while no pricing_config row exists"""
    return PricingConfig(
        base_price_cents=settings.default_base_price_cents,
        extra_modality_price_cents=settings.default_extra_modality_price_cents,
        single_class_price_cents=settings.default_single_class_price_cents,
        day_pass_price_cents=settings.default_day_pass_price_cents,
        enrollment_fee_cents=settings.default_enrollment_fee_cents,
        currency=settings.default_currency
    )


class PricingService:
    """Pricing service"""

    def __init__(
        self,
        discount_repo: DiscountRepository,
        config_repo: PricingConfigRepository
    ):
        self.discount_repo = discount_repo
        self.config_repo = config_repo
        self.cache = pricing_cache
        self.cache_ttl = settings.pricing_cache_ttl

    async def get_pricing_config(self, use_cache: bool = True) -> PricingConfig:
        """Current pricing config snapshot"""
        if use_cache:
            cached = await self.cache.get(CONFIG_CACHE_KEY)
            if cached:
                return PricingConfig.model_validate(cached)

        db_config = await self.config_repo.get_current()
        if db_config is None:
            logger.warning("No pricing config stored, using defaults")
            return default_pricing_config()

        config = self.config_repo.to_model(db_config)

        if use_cache:
            await self.cache.set(CONFIG_CACHE_KEY, config.model_dump(mode="json"), ttl=self.cache_ttl)

        return config

    async def get_active_discounts(self, use_cache: bool = True) -> List[Discount]:
        """Active discount catalog snapshot"""
        if use_cache:
            cached = await self.cache.get(DISCOUNTS_CACHE_KEY)
            if cached is not None:
                return [Discount.model_validate(item) for item in cached]

        db_discounts = await self.discount_repo.get_active_discounts()
        discounts = []
        for db_discount in db_discounts:
            # pydantic ValidationError is a ValueError
            try:
                discounts.append(self.discount_repo.to_model(db_discount))
            except ValueError as e:
                logger.warning("Skipping invalid discount row", discount_id=db_discount.id, error=str(e))

        if use_cache:
            await self.cache.set(
                DISCOUNTS_CACHE_KEY,
                [discount.model_dump(mode="json") for discount in discounts],
                ttl=self.cache_ttl
            )

        return discounts

    async def calculate(self, request: PricingRequest, today: Optional[date] = None) -> PricingResult:
        """Quote a subscription against the current snapshots"""
        config = await self.get_pricing_config()
        discounts = await self.get_active_discounts()

        result = calculate_pricing(config, discounts, request, today=today)

        if result.success:
            logger.info(
                "Pricing calculated",
                modalities=len(request.modality_ids),
                commitment_months=request.commitment_months,
                monthly_price_cents=result.breakdown.monthly_price_cents,
                commitment_discount_id=result.matched_discount_ids.commitment,
                promo_discount_id=result.matched_discount_ids.promo
            )
        else:
            logger.info("Pricing rejected", error=result.error.value, member_status=request.member_status.value)

        return result

    async def validate_promo_code(
        self,
        code: str,
        member_status: MemberStatus,
        today: Optional[date] = None
    ) -> PromoCodeValidation:
        """Check a promo code without counting a use"""
        discounts = await self.get_active_discounts()
        return validate_promo_code(code, discounts, member_status, today=today)

    async def find_commitment_discount(self, commitment_months: int) -> CommitmentDiscountResult:
        """Best commitment tier for a length"""
        discounts = await self.get_active_discounts()
        return find_commitment_discount(discounts, commitment_months)

    async def confirm_promo_usage(self, discount_id: str) -> PromoUsageOutcome:
        """
        Count one use of a promo code.

        Call exactly once per confirmed payment, never from a quote.
        The repository commits a confirmed use before the cached catalog
        is dropped, so a concurrent quote cannot re-cache the old count.
        """
        outcome = await self.discount_repo.confirm_promo_usage(discount_id)

        if outcome == PromoUsageOutcome.CONFIRMED:
            await self.cache.delete(DISCOUNTS_CACHE_KEY)

        logger.info("Promo usage confirmation", discount_id=discount_id, outcome=outcome.value)
        return outcome

    def build_subscription_snapshot(
        self,
        request: PricingRequest,
        result: PricingSuccess,
        starts_at: Optional[date] = None
    ) -> SubscriptionSnapshot:
        """Price snapshot for the subscription created from a quote"""
        return build_subscription_snapshot(request, result, starts_at=starts_at)
