"""Configuration for the Smartis client.

Settings are read from ``SMARTIS_*`` environment variables or a local
``.env`` file:

    SMARTIS_API_KEY=...        (required)
    SMARTIS_CRM_TOKEN=...      (needed only for CRM column name lookups)
    SMARTIS_BASE_URL=https://my.smartis.bi/api/
    SMARTIS_TIMEOUT=30
"""

from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://my.smartis.bi/api/"


class SmartisSettings(BaseSettings):
    """Smartis API settings."""

    model_config = SettingsConfigDict(
        env_prefix="SMARTIS_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    api_key: SecretStr = Field(..., min_length=1)
    crm_token: SecretStr | None = None
    base_url: str = Field(default=DEFAULT_BASE_URL)
    timeout: float = Field(
        default=30.0, gt=0, description="Request timeout in seconds"
    )

    @field_validator("base_url")
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        if not v.endswith("/"):
            return v + "/"
        return v


@lru_cache
def get_settings() -> SmartisSettings:
    """Get cached settings instance."""
    return SmartisSettings()
