"""Mini README: Centralised configuration models and helpers for the ledger.

Structure:
    * LedgerSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read environment variables prefixed with
    ``HOUSEHOLDLEDGER_`` (or a local ``.env`` file). The settings decide where
    the persisted slot lives, which key it uses, the default category for new
    entries, and where the web service binds.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings

DEFAULT_STORAGE_KEY = "ledger_transactions_v1"
DEFAULT_CATEGORY = "기타"


class LedgerSettings(BaseSettings):
    """Runtime configuration for the household ledger."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the file-backed key-value slots.",
    )
    storage_key: str = Field(
        DEFAULT_STORAGE_KEY,
        description="Key of the slot that stores the JSON encoded transactions.",
        min_length=1,
    )
    default_category: str = Field(
        DEFAULT_CATEGORY,
        description="Category applied when a transaction is recorded without one.",
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level, e.g. DEBUG while investigating imports.",
    )
    interface_host: str = Field(
        "127.0.0.1",
        description="Network interface for the ledger web service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the ledger web service exposes.",
        ge=1,
        le=65535,
    )

    class Config:
        env_prefix = "HOUSEHOLDLEDGER_"
        env_file = ".env"
        case_sensitive = False

    @validator("data_directory", pre=True)
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Ensure configured paths expand user directories and exist."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path


@lru_cache()
def get_settings() -> LedgerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return LedgerSettings()
