"""
PricingService tests
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from gym_pricing.models.database.discount_db import DiscountDB
from gym_pricing.models.database.pricing_config_db import PricingConfigDB
from gym_pricing.models.discount import PromoUsageOutcome
from gym_pricing.models.errors import PricingErrorKind
from gym_pricing.models.pricing import MemberStatus, PricingConfig
from gym_pricing.models.result import PricingRequest
from gym_pricing.repositories.discount_repository import DiscountRepository
from gym_pricing.repositories.pricing_config_repository import PricingConfigRepository
from gym_pricing.services.pricing_service import PricingService, default_pricing_config


@pytest.mark.asyncio
class TestPricingService:
    """PricingService tests"""

    @pytest.fixture
    def mock_discount_repo(self, discount_catalog):
        """Discount repository returning the catalog fixture"""
        repo = AsyncMock(spec=DiscountRepository)
        rows = [MagicMock(name=discount.id) for discount in discount_catalog]
        repo.get_active_discounts.return_value = rows
        repo.to_model = MagicMock(side_effect=list(discount_catalog) * 10)
        return repo

    @pytest.fixture
    def mock_config_repo(self, pricing_config):
        """Config repository returning the config fixture"""
        repo = AsyncMock(spec=PricingConfigRepository)
        repo.get_current.return_value = MagicMock(spec=PricingConfigDB)
        repo.to_model = MagicMock(return_value=pricing_config)
        return repo

    @pytest.fixture
    def mock_cache(self):
        """Cache that always misses"""
        cache = AsyncMock()
        cache.get = AsyncMock(return_value=None)
        cache.set = AsyncMock(return_value=True)
        cache.delete = AsyncMock(return_value=True)
        return cache

    @pytest.fixture
    def pricing_service(self, mock_discount_repo, mock_config_repo, mock_cache):
        """PricingService with mocked collaborators"""
        service = PricingService(mock_discount_repo, mock_config_repo)
        service.cache = mock_cache
        return service

    async def test_get_pricing_config_cache_miss(self, pricing_service, mock_config_repo, mock_cache, pricing_config):
        """Loads from the repository and caches the snapshot"""
        config = await pricing_service.get_pricing_config()

        assert config == pricing_config
        mock_config_repo.get_current.assert_called_once()
        mock_cache.set.assert_called_once_with("config", pricing_config.model_dump(mode="json"), ttl=pricing_service.cache_ttl)

    async def test_get_pricing_config_cache_hit(self, pricing_service, mock_config_repo, mock_cache, pricing_config):
        mock_cache.get.return_value = pricing_config.model_dump(mode="json")

        config = await pricing_service.get_pricing_config()

        assert config == pricing_config
        mock_config_repo.get_current.assert_not_called()

    async def test_get_pricing_config_defaults(self, pricing_service, mock_config_repo, mock_cache):
        """No stored row falls back to the configured defaults"""
        mock_config_repo.get_current.return_value = None

        config = await pricing_service.get_pricing_config()

        assert config == default_pricing_config()
        assert config.base_price_cents == 6000
        assert config.extra_modality_price_cents == 3000
        mock_cache.set.assert_not_called()

    async def test_get_active_discounts_cache_miss(self, pricing_service, mock_discount_repo, mock_cache, discount_catalog):
        discounts = await pricing_service.get_active_discounts()

        assert discounts == discount_catalog
        mock_discount_repo.get_active_discounts.assert_called_once()
        mock_cache.set.assert_called_once()

    async def test_get_active_discounts_cache_hit(self, pricing_service, mock_discount_repo, mock_cache, discount_catalog):
        """Cached JSON snapshots rebuild the tagged discount values"""
        mock_cache.get.return_value = [discount.model_dump(mode="json") for discount in discount_catalog]

        discounts = await pricing_service.get_active_discounts()

        assert discounts == discount_catalog
        mock_discount_repo.get_active_discounts.assert_not_called()

    async def test_empty_cached_catalog_is_a_hit(self, pricing_service, mock_discount_repo, mock_cache):
        mock_cache.get.return_value = []

        discounts = await pricing_service.get_active_discounts()

        assert discounts == []
        mock_discount_repo.get_active_discounts.assert_not_called()

    async def test_invalid_catalog_row_is_skipped(self, mock_config_repo, mock_cache):
        """A broken promo row cannot take down quotes that do not use it"""
        rows = [
            DiscountDB(
                id="tier_3", code="TRIMESTRAL", name="Quarterly", category="commitment",
                discount_type="percentage", discount_value=10, min_commitment_months=3,
                current_uses=0, new_members_only=False, is_active=True
            ),
            DiscountDB(
                id="promo_broken", code="BROKEN", name="Broken", category="promo",
                discount_type="percentage", discount_value=150,
                current_uses=0, new_members_only=False, is_active=True
            ),
        ]
        discount_repo = AsyncMock(spec=DiscountRepository)
        discount_repo.get_active_discounts.return_value = rows
        discount_repo.to_model = MagicMock(side_effect=DiscountRepository(AsyncMock()).to_model)
        service = PricingService(discount_repo, mock_config_repo)
        service.cache = mock_cache

        discounts = await service.get_active_discounts()
        result = await service.calculate(
            PricingRequest(modality_ids=["m1"], commitment_months=3, member_status=MemberStatus.ACTIVE)
        )

        assert [discount.id for discount in discounts] == ["tier_3"]
        assert result.success is True
        assert result.breakdown.monthly_price_cents == 5400
        assert result.matched_discount_ids.commitment == "tier_3"

    async def test_calculate(self, pricing_service, today):
        request = PricingRequest(
            modality_ids=["bjj"],
            commitment_months=12,
            promo_code="PROMO10",
            member_status=MemberStatus.LEAD
        )

        result = await pricing_service.calculate(request, today=today)

        # 6000 -15% = 5100, -10% = 4590
        assert result.success is True
        assert result.breakdown.monthly_price_cents == 4590
        assert result.breakdown.total_first_payment_cents == 9590
        assert result.matched_discount_ids.commitment == "tier_12"
        assert result.matched_discount_ids.promo == "promo_001"

    async def test_calculate_rejected(self, pricing_service, today):
        request = PricingRequest(modality_ids=["bjj"], promo_code="NOPE", member_status=MemberStatus.ACTIVE)

        result = await pricing_service.calculate(request, today=today)

        assert result.success is False
        assert result.error == PricingErrorKind.INVALID_CODE

    async def test_calculate_does_not_confirm_usage(self, pricing_service, mock_discount_repo, today):
        request = PricingRequest(modality_ids=["bjj"], promo_code="PROMO10", member_status=MemberStatus.ACTIVE)

        await pricing_service.calculate(request, today=today)

        mock_discount_repo.confirm_promo_usage.assert_not_called()

    async def test_validate_promo_code(self, pricing_service, today):
        result = await pricing_service.validate_promo_code("promo10", MemberStatus.ACTIVE, today=today)

        assert result.valid is True
        assert result.discount.id == "promo_001"

    async def test_find_commitment_discount(self, pricing_service):
        result = await pricing_service.find_commitment_discount(7)

        assert result.percentage == 10
        assert result.discount.id == "tier_6"

    async def test_confirm_promo_usage(self, pricing_service, mock_discount_repo, mock_cache):
        """A confirmed use invalidates the cached catalog"""
        mock_discount_repo.confirm_promo_usage.return_value = PromoUsageOutcome.CONFIRMED

        outcome = await pricing_service.confirm_promo_usage("promo_001")

        assert outcome == PromoUsageOutcome.CONFIRMED
        mock_discount_repo.confirm_promo_usage.assert_called_once_with("promo_001")
        mock_cache.delete.assert_called_once_with("discounts:active")

    async def test_cache_dropped_after_usage_is_stored(self, pricing_service, mock_discount_repo, mock_cache):
        calls = []
        mock_discount_repo.confirm_promo_usage.side_effect = (
            lambda discount_id: calls.append("confirm") or PromoUsageOutcome.CONFIRMED
        )
        mock_cache.delete.side_effect = lambda key: calls.append("invalidate") or True

        await pricing_service.confirm_promo_usage("promo_001")

        assert calls == ["confirm", "invalidate"]

    @pytest.mark.parametrize("outcome", [PromoUsageOutcome.EXHAUSTED, PromoUsageOutcome.NOT_FOUND])
    async def test_confirm_promo_usage_rejected(self, pricing_service, mock_discount_repo, mock_cache, outcome):
        mock_discount_repo.confirm_promo_usage.return_value = outcome

        result = await pricing_service.confirm_promo_usage("promo_001")

        assert result == outcome
        mock_cache.delete.assert_not_called()

    async def test_build_subscription_snapshot(self, pricing_service, today):
        request = PricingRequest(modality_ids=["bjj"], commitment_months=3, member_status=MemberStatus.ACTIVE)
        result = await pricing_service.calculate(request, today=today)

        snapshot = pricing_service.build_subscription_snapshot(request, result, starts_at=today)

        assert snapshot.final_price_cents == 5700
        assert snapshot.commitment_discount_id == "tier_3"


class TestDefaultPricingConfig:
    """default_pricing_config tests"""

    def test_defaults(self):
        config = default_pricing_config()

        assert isinstance(config, PricingConfig)
        assert config.enrollment_fee_cents == 1500
        assert config.day_pass_price_cents == 2500
        assert config.single_class_price_cents == 1500
        assert config.currency == "EUR"
