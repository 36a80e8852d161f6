"""Configuration management using Pydantic Settings."""
from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Visibility Assessment Service"
    app_version: str = "1.0.0"
    debug: bool = False
    cors_origins: list[str] = ["*"]

    # Redis (session state + report rate limiting)
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0

    # Session TTL (seconds)
    session_ttl: int = 3600  # 1 hour

    # Website audit service
    audit_base_url: str = Field(
        default="https://n8n.chooomedia.com/webhook",
        validation_alias="AUDIT_BASE_URL",
    )
    audit_timeout: float = 180.0  # 3 minutes
    audit_ping_timeout: float = 5.0

    # Email report webhook
    report_webhook_url: str = Field(
        default="https://n8n.chooomedia.com/webhook/websitehealth__done",
        validation_alias="REPORT_WEBHOOK_URL",
    )
    # Optional; sent as X-API-Key when set
    report_api_key: str = Field(default="", validation_alias="N8N_API_KEY")
    report_timeout: float = 30.0
    report_daily_limit: int = 3
    report_source: str = "digital-pusher-assessment"
    default_locale: str = "de"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
