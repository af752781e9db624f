"""Application configuration using Pydantic BaseSettings"""
import logging
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator

# Setup logging
logger = logging.getLogger("config")


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    ENVIRONMENT: str = "development"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Stripe
    STRIPE_SECRET_KEY: str = ""
    STRIPE_WEBHOOK_SECRET: str = ""
    STRIPE_DASHBOARD_URL: str = "https://dashboard.stripe.com"

    # Gmail OAuth
    GMAIL_CLIENT_ID: str = ""
    GMAIL_CLIENT_SECRET: str = ""
    GMAIL_REFRESH_TOKEN: str = ""

    # Alerts
    ALERT_EMAIL: str = "admin@example.com"
    ACTIVITY_LOG_CAPACITY: int = 100

    # Pydantic V2 Config
    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @field_validator("ACTIVITY_LOG_CAPACITY")
    @classmethod
    def check_capacity(cls, v):
        if v < 1:
            raise ValueError("ACTIVITY_LOG_CAPACITY must be at least 1")
        return v

    @field_validator("STRIPE_WEBHOOK_SECRET")
    @classmethod
    def check_webhook_secret(cls, v):
        if not v or v.strip() == "":
            # Every webhook will fail verification without it
            logger.warning("STRIPE_WEBHOOK_SECRET is not set; webhook signatures cannot be verified")
        return v

    @property
    def stripe_connected(self) -> bool:
        return bool(self.STRIPE_SECRET_KEY)

    @property
    def gmail_connected(self) -> bool:
        return bool(self.GMAIL_CLIENT_ID) and bool(self.GMAIL_REFRESH_TOKEN)


def get_settings() -> Settings:
    """Load settings from the current process environment"""
    return Settings()
