from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProviderSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SIGNALDESK_",
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )
    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_API_KEY", "SIGNALDESK_OPENAI_API_KEY"),
    )
    openai_base_url: str = "https://api.openai.com"
    openai_model: str = "gpt-4o-mini"
    vndirect_base_url: str = "https://api-finfo.vndirect.com.vn"
    upstream_timeout_seconds: float = 10.0


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SIGNALDESK_",
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    redis_url: str = Field(
        default="redis://localhost:6379/0",
        validation_alias=AliasChoices("REDIS_URL", "SIGNALDESK_REDIS_URL"),
    )
    market_cache_ttl_seconds: int = 3
    stock_prices_cache_ttl_seconds: int = 120
    ratios_cache_ttl_seconds: int = 3600
    log_level: str = "INFO"
    api_prefix: str = "/api"

    providers: ProviderSettings = Field(default_factory=ProviderSettings)


settings = Settings()


def get_settings() -> Settings:
    return settings
