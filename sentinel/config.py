"""
Central application configuration.

Every tunable value lives here as a typed, documented field.
Any field can be overridden at runtime via an environment variable of the
same name (case-insensitive), e.g.:

    MAX_ASSET_MB=25 uvicorn sentinel.main:app        # tighter upload ceiling
    export SCAN_MIN_DISPLAY_SEC=6                     # server-side progress timer

A `.env` file at the project root is loaded automatically.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,   # MAX_ASSET_MB == max_asset_mb
        extra="ignore",         # silently drop unknown env vars
    )

    # ------------------------------------------------------------------ #
    # Asset Limits                                                        #
    # ------------------------------------------------------------------ #
    max_asset_mb: int = Field(
        50, description="Max MB for an uploaded asset"
    )

    # ------------------------------------------------------------------ #
    # Gemini Client                                                       #
    # ------------------------------------------------------------------ #
    gemini_model: str = Field(
        "gemini-2.5-flash", description="Model used to synthesize reports"
    )
    gemini_temperature: float = Field(
        0.2, description="Sampling temperature for Gemini model"
    )
    gemini_http_timeout_ms: int = Field(
        120_000, description="HTTP client total timeout (ms)"
    )
    gemini_max_attempts: int = Field(
        5, description="Total attempts when the API reports rate limiting"
    )
    gemini_retry_initial_delay: float = Field(
        4.0, description="First retry delay (seconds)"
    )
    gemini_retry_exp_base: float = Field(
        2.0, description="Exponential back-off multiplier"
    )

    # ------------------------------------------------------------------ #
    # Scan Presentation                                                   #
    # ------------------------------------------------------------------ #
    scan_id_length: int = Field(
        8, description="Characters in a scan ID (62^8 ≈ 218 T combos)"
    )
    scan_min_display_sec: float = Field(
        0.0,
        description="Server-side minimum progress display time; 0 waits for the client signal",
    )

    # ------------------------------------------------------------------ #
    # Derived byte-level properties (computed from MB fields)             #
    # ------------------------------------------------------------------ #
    @property
    def max_asset_bytes(self) -> int:
        return self.max_asset_mb * 1024 * 1024


# Single shared instance — import this everywhere.
settings = Settings()
