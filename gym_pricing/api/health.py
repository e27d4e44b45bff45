from fastapi import APIRouter
import logging

from gym_pricing.core.config import settings
from gym_pricing.core.database import database_service
from gym_pricing.services.common_cache import pricing_cache

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check():
    """Basic health check"""
    return {
        "status": "healthy",
        "app_name": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment
    }


@router.get("/database")
async def database_health():
    """Database and cache health check"""
    health_status = {
        "postgresql": False,
        "redis": False,
        "overall": False,
        "details": {}
    }

    pg_status = await database_service.health_check()
    health_status["postgresql"] = pg_status["status"] == "healthy"
    health_status["details"]["postgresql"] = pg_status["message"]

    if pricing_cache.redis_client:
        try:
            await pricing_cache.redis_client.ping()
            health_status["redis"] = True
            health_status["details"]["redis"] = "connection ok"
        except Exception as e:
            logger.warning(f"Redis health check failed: {e}")
            health_status["details"]["redis"] = f"connection failed: {str(e)}"
    else:
        health_status["details"]["redis"] = "client not initialised"

    # Redis is only a cache, quotes work without it
    health_status["overall"] = health_status["postgresql"]
    return health_status
