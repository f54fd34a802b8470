"""Application settings via Pydantic Settings."""

from functools import lru_cache
import json

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Storefront Pricing API"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # CORS
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        validation_alias=AliasChoices("CORS_ORIGINS", "ALLOWED_ORIGINS"),
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v: object) -> list[str]:
        """
        Accept either:
        - JSON array string: '["https://a.com","http://localhost:3000"]'
        - Comma-separated string: "https://a.com,http://localhost:3000"
        - Already-parsed list[str]
        """
        if v is None:
            return []
        if isinstance(v, list):
            return [str(x).strip() for x in v if str(x).strip()]
        if isinstance(v, str):
            s = v.strip()
            if not s:
                return []
            if s.startswith("["):
                try:
                    parsed = json.loads(s)
                except json.JSONDecodeError:
                    # Fall back to comma split if env var isn't valid JSON.
                    parsed = s.split(",")
                if isinstance(parsed, list):
                    return [str(x).strip() for x in parsed if str(x).strip()]
                return [str(parsed).strip()]
            return [part.strip() for part in s.split(",") if part.strip()]
        return [str(v).strip()] if str(v).strip() else []

    # Catalog REST API (source of product JSON)
    catalog_api_url: str = Field(
        default="http://localhost:5000/api",
        validation_alias=AliasChoices("CATALOG_API_URL", "API_BASE_URL"),
    )
    catalog_timeout_seconds: float = Field(
        default=10.0,
        validation_alias=AliasChoices("CATALOG_TIMEOUT_SECONDS"),
        gt=0,
        le=120,
    )

    # Money formatting
    currency_code: str = "BDT"
    currency_symbol: str = Field(
        default="৳",
        description="Symbol substituted for the currency code in formatted prices",
    )
    emi_default_months: int = Field(
        default=12,
        validation_alias=AliasChoices("EMI_DEFAULT_MONTHS"),
        ge=1,
        le=60,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
