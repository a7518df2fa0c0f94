"""
Configuration for moneybook.

Values come from environment variables prefixed with ``MONEYBOOK_`` (or a
``.env`` file), e.g. ``MONEYBOOK_CURRENCY_SYMBOL=€``. List fields such as
``chart_palette`` are given as JSON arrays.
"""

from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SEED_PATH = Path(__file__).resolve().parent.parent / "data" / "seed.json"

DEFAULT_PALETTE = [
    "#ef4444", "#f97316", "#f59e0b", "#eab308", "#10b981",
    "#06b6d4", "#3b82f6", "#7c3aed", "#ec4899", "#64748b",
]


class LedgerSettings(BaseSettings):
    """Display and startup settings for the ledger app."""

    model_config = SettingsConfigDict(
        env_prefix="MONEYBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    currency_symbol: str = Field(
        default="$",
        description="Prefix used when displaying amounts"
    )
    seed_path: Path = Field(
        default=DEFAULT_SEED_PATH,
        description="JSON file with the starting accounts and categories"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum level for log output"
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON log lines instead of console output"
    )
    chart_palette: List[str] = Field(
        default_factory=lambda: list(DEFAULT_PALETTE),
        min_length=1,
        description="Colours cycled through by the donut charts"
    )
    donut_hole: float = Field(
        default=0.55,
        gt=0.0,
        lt=1.0,
        description="Size of the donut hole as a fraction of the radius"
    )

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    def format_amount(self, value: float) -> str:
        sign = "-" if value < 0 else ""
        return f"{sign}{self.currency_symbol}{abs(value):,.2f}"


@lru_cache()
def get_settings() -> LedgerSettings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload after changing the environment.
    """
    return LedgerSettings()
