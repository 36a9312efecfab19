"""Wavefetch configuration — loaded from .env via pydantic-settings."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class WavefetchSettings(BaseSettings):
    """All Wavefetch configuration. Reads from .env file and environment variables."""

    # --- Solscan API ---
    auth_token: str = Field(
        default="",
        validation_alias=AliasChoices("WAVEFETCH_AUTH_TOKEN", "SOLSCAN_AUTH_TOKEN"),
        description="Static API token sent in the `token` header",
    )
    public_base_url: str = Field(
        default="https://public-api.solscan.io",
        description="Public (unauthenticated) API base URL",
    )
    pro_base_url: str = Field(
        default="https://pro-api.solscan.io/v2.0",
        description="Pro API base URL",
    )

    # --- Rate budgets (per API tier) ---
    v2_requests_per_minute: int = Field(default=1000, description="Published V2 tier limit")
    v3_requests_per_minute: int = Field(default=2000, description="Published V3 tier limit")
    rate_budget_fraction: float = Field(
        default=0.5,
        description="Share of the published limit the gates actually allow",
    )

    # --- HTTP / retry ---
    request_timeout: float = Field(default=30.0, description="Per-request timeout in seconds")
    retry_interval: float = Field(default=1.0, description="Fixed sleep between attempts")
    paging_max_attempts: int = Field(
        default=100,
        description="Attempts per page request for paged operations",
    )
    default_max_concurrency: int = Field(default=5, description="Pages per wave")

    # --- Logging ---
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(
        default="console",
        description="Log format: 'console' for dev, 'json' for production",
    )

    model_config = {
        "env_prefix": "WAVEFETCH_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Singleton — import this everywhere
settings = WavefetchSettings()
