"""Pydantic-based runtime settings for the targeting console.

Loads from environment variables (prefix ``TARGETWISE_``, optional .env file).
Invalid values fail fast when settings are first loaded.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

from ..domain.pricing import CANONICAL_PRICING_TIERS
from ..domain.targeting_engine import MissingBirthYearPolicy


class RuntimeSettings(BaseSettings):
    """All configuration for targetwise, validated at startup."""

    model_config = {"env_prefix": "TARGETWISE_", "env_file": ".env", "env_file_encoding": "utf-8"}

    # --- Backend ---
    backend_url: str = Field(
        default="http://127.0.0.1:8080",
        description="Base URL of the campaign backend",
    )
    backend_auth_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("TARGETWISE_BACKEND_AUTH_TOKEN", "AUTH_TOKEN"),
        description="Value forwarded as the auth-token cookie",
    )
    request_timeout_seconds: float = Field(default=10.0, gt=0, description="Per-request timeout")

    # --- Customer directory ---
    customer_page_size: int = Field(default=500, ge=1, le=5000, description="Customers per directory page")
    max_customer_pages: int = Field(default=200, ge=1, description="Upper bound on pages fetched per snapshot")

    # --- Targeting & pricing ---
    pricing_tiers: list[int] = Field(
        default_factory=lambda: list(CANONICAL_PRICING_TIERS),
        description="Unit price per active filter count; last entry applies beyond the table",
    )
    missing_birth_year_policy: MissingBirthYearPolicy = Field(
        default=MissingBirthYearPolicy.zero,
        description="Age-filter treatment of customers without a birth year",
    )
    current_year: int | None = Field(
        default=None,
        ge=1900,
        description="Pin the year used for age computation (defaults to the current UTC year)",
    )

    # --- Auth ---
    require_console_key: bool = Field(
        default=False,
        description="If True, the MCP server requires TARGETWISE_CONSOLE_KEY",
    )

    @field_validator("backend_url")
    @classmethod
    def _validate_backend_url(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"backend_url must be an http(s) URL, got {v!r}")
        return v.rstrip("/")

    @field_validator("pricing_tiers")
    @classmethod
    def _tiers_non_decreasing(cls, v: list[int]) -> list[int]:
        if not v:
            raise ValueError("pricing_tiers must have at least one entry")
        if any(price < 0 for price in v):
            raise ValueError(f"pricing_tiers must be non-negative, got {v}")
        if any(later < earlier for earlier, later in zip(v, v[1:])):
            raise ValueError(f"pricing_tiers must be non-decreasing, got {v}")
        return v


@lru_cache(maxsize=1)
def get_settings() -> RuntimeSettings:
    """Return the singleton RuntimeSettings (cached after first call)."""
    return RuntimeSettings()
