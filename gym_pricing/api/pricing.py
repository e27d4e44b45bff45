"""
Pricing API
"""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from gym_pricing.api.exceptions import BusinessException
from gym_pricing.core.database import get_db_session
from gym_pricing.models.discount import CommitmentDiscountResult, PromoCodeValidation, PromoUsageOutcome
from gym_pricing.models.pricing import COMMITMENT_PERIODS, MemberStatus
from gym_pricing.models.result import PricingRequest
from gym_pricing.repositories.discount_repository import DiscountRepository
from gym_pricing.repositories.pricing_config_repository import PricingConfigRepository
from gym_pricing.services.pricing_service import PricingService

router = APIRouter(prefix="/api/pricing", tags=["pricing"])


class PromoCodeCheck(BaseModel):
    """Promo code check request"""

    code: str = Field(..., min_length=1, max_length=50)
    member_status: MemberStatus


async def get_pricing_service(db: AsyncSession = Depends(get_db_session)) -> PricingService:
    """PricingService bound to the request session"""
    return PricingService(DiscountRepository(db), PricingConfigRepository(db))


@router.post("/quote")
async def quote(request: PricingRequest, service: PricingService = Depends(get_pricing_service)):
    """Quote a subscription; rejected quotes return 422 with the error kind"""
    result = await service.calculate(request)
    status_code = status.HTTP_200_OK if result.success else status.HTTP_422_UNPROCESSABLE_ENTITY
    return JSONResponse(status_code=status_code, content=result.model_dump(mode="json"))


@router.post("/promo-codes/validate", response_model=PromoCodeValidation)
async def validate_promo_code(body: PromoCodeCheck, service: PricingService = Depends(get_pricing_service)):
    """Check a promo code; does not count a use"""
    return await service.validate_promo_code(body.code, body.member_status)


@router.get("/commitment-discount", response_model=CommitmentDiscountResult)
async def commitment_discount(
    months: int = Query(..., ge=1),
    service: PricingService = Depends(get_pricing_service)
):
    """Best commitment tier for a length"""
    return await service.find_commitment_discount(months)


@router.get("/commitment-periods")
async def commitment_periods():
    """Selectable commitment lengths"""
    return [period.model_dump() for period in COMMITMENT_PERIODS]


@router.post("/discounts/{discount_id}/confirm-usage")
async def confirm_promo_usage(discount_id: str, service: PricingService = Depends(get_pricing_service)):
    """Count one promo use; call only after the payment is confirmed"""
    outcome = await service.confirm_promo_usage(discount_id)

    if outcome == PromoUsageOutcome.NOT_FOUND:
        raise BusinessException("DiscountNotFound", "Promo code not found", status.HTTP_404_NOT_FOUND)
    if outcome == PromoUsageOutcome.EXHAUSTED:
        raise BusinessException("ExhaustedCode", "Promo code has no uses left", status.HTTP_409_CONFLICT)

    return {"success": True, "discount_id": discount_id, "outcome": outcome.value}
