from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from enum import Enum


class Environment(str, Enum):

    """Runtime environment"""
    TESTING = "testing"
    PRODUCTION = "production"


class Settings(BaseSettings):

    # Application
    app_name: str = "Gym Pricing Engine"
    app_version: str = "1.0.0"
    environment: Environment = Environment.TESTING
    debug: bool = True

    # Database (discount catalog + pricing config)
    database_url: Optional[str] = None
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "gym_db"
    db_user: str = "gym_user"
    db_password: str = "gym_password"

    # Redis (snapshot cache)
    redis_url: Optional[str] = None
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: Optional[str] = None
    redis_db: int = 0

    # Fallback pricing used while no pricing_config row exists
    default_base_price_cents: int = 6000
    default_extra_modality_price_cents: int = 3000
    default_single_class_price_cents: int = 1500
    default_day_pass_price_cents: int = 2500
    default_enrollment_fee_cents: int = 1500
    default_currency: str = "EUR"

    # Snapshot cache TTL in seconds
    pricing_cache_ttl: int = 300

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    @property
    def is_testing(self) -> bool:
        return self.environment == Environment.TESTING

    @property
    def database_url_computed(self) -> str:
        """Database URL"""
        if self.database_url:
            return self.database_url
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    @property
    def redis_url_computed(self) -> str:
        """Redis URL"""
        if self.redis_url:
            return self.redis_url
        if self.redis_password:
            return f"redis://:{self.redis_password}@{self.redis_host}:{self.redis_port}/{self.redis_db}"
        return f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"


# Global settings instance
settings = Settings()
