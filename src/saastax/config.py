"""
saastax.config
~~~~~~~~~~~~~~
Central configuration for the saastax library.

Holds the calculator's default inputs (locale, subscription price, living
costs, which optional deductions apply) and the web UI settings. Tax rates
are fixed constants in ``saastax.tax`` and deliberately not configurable.

Override any field via a ``.env`` file or environment variables
- pydantic-settings picks them up automatically.

Usage::

    from saastax.config import cfg

    print(cfg.locale)                    # "en"
    print(cfg.get_scenario_defaults())   # typed ScenarioDefaults dataclass
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .utils import SUPPORTED_LOCALES


_LOG_LEVELS = ("debug", "info", "warning", "error")


# ---------------------------------------------------------------------------
# Typed return value for the scenario defaults
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ScenarioDefaults:
    """Immutable snapshot of the default calculator inputs."""

    locale: str
    monthly_price: float
    monthly_living_cost: float
    include_app_store_provision: bool
    include_payment_service: bool


# ---------------------------------------------------------------------------
# Main settings class
# ---------------------------------------------------------------------------

class Config(BaseSettings):
    """
    Runtime configuration for saastax.

    Reads from (in priority order):
      1. Environment variables (prefixed with ``SAASTAX_``)
      2. A ``.env`` file in the working directory
      3. The defaults defined below
    """

    model_config = SettingsConfigDict(
        env_prefix="SAASTAX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Calculator defaults
    # ------------------------------------------------------------------

    locale: str = Field(
        default="en",
        description="Display locale: 'de' (EUR) or 'en' (USD).",
    )
    monthly_price: float = Field(
        default=10.0,
        ge=0.0,
        description="Monthly subscription price, used to derive the subscriber count.",
    )
    monthly_living_cost: float = Field(
        default=2_000.0,
        ge=0.0,
        description="Monthly living costs compared against the monthly net income.",
    )
    include_app_store_provision: bool = Field(
        default=False,
        description="Deduct the 15 % app store commission.",
    )
    include_payment_service: bool = Field(
        default=False,
        description="Deduct the payment service fee (percentage plus per-charge fee).",
    )

    # ------------------------------------------------------------------
    # Web UI
    # ------------------------------------------------------------------

    ui_host: str = Field(
        default="127.0.0.1",
        description="Bind address of the web UI server.",
    )
    ui_port: int = Field(
        default=8000,
        ge=1,
        le=65_535,
        description="TCP port of the web UI server.",
    )
    log_level: str = Field(
        default="warning",
        description="Log level for the UI server (debug, info, warning, error).",
    )

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @field_validator("locale")
    @classmethod
    def _validate_locale(cls, v: str) -> str:
        normalised = v.strip().lower()
        if normalised not in SUPPORTED_LOCALES:
            raise ValueError(f"locale must be one of {SUPPORTED_LOCALES}, got {v!r}.")
        return normalised

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        normalised = v.strip().lower()
        if normalised not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_LOG_LEVELS}, got {v!r}.")
        return normalised

    @model_validator(mode="after")
    def _warn_on_payment_service_without_price(self) -> "Config":
        if self.include_payment_service and self.monthly_price == 0:
            warnings.warn(
                "include_payment_service is enabled but monthly_price is 0. "
                "The subscriber count cannot be derived, so only the percentage "
                "part of the payment service fee is applied.",
                UserWarning,
                stacklevel=2,
            )
        return self

    # ------------------------------------------------------------------
    # Helper methods
    # ------------------------------------------------------------------

    def get_scenario_defaults(self) -> ScenarioDefaults:
        """Return an immutable, typed snapshot of the calculator defaults."""
        return ScenarioDefaults(
            locale=self.locale,
            monthly_price=self.monthly_price,
            monthly_living_cost=self.monthly_living_cost,
            include_app_store_provision=self.include_app_store_provision,
            include_payment_service=self.include_payment_service,
        )


# ---------------------------------------------------------------------------
# Module-level singleton - import this everywhere
# ---------------------------------------------------------------------------

cfg = Config()

__all__ = ["Config", "ScenarioDefaults", "cfg"]
