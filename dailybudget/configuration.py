"""Mini README: Centralised configuration models and helpers for dailybudget.

Structure:
    * DailyBudgetSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read ``DAILYBUDGET_*`` environment variables
    (or a ``.env`` file): where ledgers are stored, the default daily target
    and allocation policy, the web interface binding, the remote
    key-value endpoint used for sync and the generative advice service
    credentials. Validation runs once per process.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DailyBudgetSettings(BaseSettings):
    """Runtime configuration for the budget planner."""

    model_config = SettingsConfigDict(
        env_prefix="DAILYBUDGET_",
        env_file=".env",
        case_sensitive=False,
    )

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding one JSON ledger file per budget period.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the web interface to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the web interface exposes.",
        ge=1,
        le=65535,
    )
    base_daily_target: float = Field(
        30.0,
        description="Nominal per-day budget used when a request does not supply one.",
        gt=0,
    )
    default_policy: str = Field(
        "scr",
        description="Allocation policy name used when a request does not pick one.",
    )
    sync_base_url: str = Field(
        "https://api.keyvalue.xyz",
        description="Base URL of the remote key-value endpoint used for ledger sync.",
    )
    sync_timeout_seconds: float = Field(
        10.0,
        description="Timeout applied to every remote sync request.",
        gt=0,
    )
    advice_api_key: Optional[str] = Field(
        None,
        description="API key for the generative advice service; offline advice is used without one.",
    )
    advice_model: str = Field(
        "gemini-2.5-flash",
        description="Model name requested from the generative advice service.",
    )

    @field_validator("data_directory", mode="before")
    @classmethod
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Ensure configured paths expand user directories and exist."""

        path = Path(value or "data").expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @field_validator("default_policy")
    @classmethod
    def _normalise_policy(cls, value: str) -> str:
        """Policy names are matched case-insensitively by the registry."""

        return value.strip().lower()


@lru_cache()
def get_settings() -> DailyBudgetSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return DailyBudgetSettings()
