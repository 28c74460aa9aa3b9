"""
Application settings
Read from environment variables (or a local .env file)
"""
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "Hotel Point"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./hotel_point.db"
    DB_TIMEOUT_SECONDS: float = 5.0

    # JWT
    SECRET_KEY: str = "hotel-point-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = 24

    # Calendar: all date-only values live in this timezone
    TIMEZONE: str = "Asia/Jakarta"

    # Booking policy
    ANNUAL_POINT_GRANT: int = 24
    CANCELLATION_WINDOW_HOURS: int = 24
    CHECK_IN_HOUR: int = 14
    CHECK_OUT_HOUR: int = 12

    # Debit with a single conditional decrement instead of read-then-write
    STRICT_BALANCE_CHECK: bool = False

    model_config = ConfigDict(env_file=".env", case_sensitive=True)


# Global settings instance
settings = Settings()
