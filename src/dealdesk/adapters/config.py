# src/dealdesk/adapters/config.py
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    # App & logging
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")

    # -----------------------------
    # Calculation factor defaults
    # -----------------------------
    # Percent values are stored the way the engine consumes them:
    # 5 means 5%, not 0.05.
    DEFAULT_STRATEGY: str = Field(default="fix-and-flip")
    DEFAULT_PURCHASE_MODEL: str = Field(default="financed")
    DEFAULT_INTEREST_RATE: float = Field(default=5.0)
    DEFAULT_DOWN_PAYMENT_PCT: float = Field(default=10.0)
    DEFAULT_REHAB_FINANCING_PCT: float = Field(default=100.0)
    DEFAULT_HOLDING_PERIOD_MONTHS: float = Field(default=6.0)
    DEFAULT_MISC_COSTS_PCT: float = Field(default=5.0)

    # -----------------------------
    # Search defaults
    # -----------------------------
    SEARCH_MAX_PRICE: float = Field(default=200_000.0)
    SEARCH_MIN_BEDROOMS: int = Field(default=1)

    model_config = SettingsConfigDict(
        env_prefix="DEALDESK_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator(
        "DEFAULT_INTEREST_RATE",
        "DEFAULT_DOWN_PAYMENT_PCT",
        "DEFAULT_REHAB_FINANCING_PCT",
        "DEFAULT_MISC_COSTS_PCT",
        mode="before",
    )
    @classmethod
    def _to_non_negative_percent(cls, v: Any) -> Any:
        if v is None:
            return v
        if isinstance(v, str):
            v = v.strip().replace("%", "")
        try:
            f = float(v)
        except Exception as err:
            raise ValueError("percentage must be numeric or percent-like") from err
        if f < 0:
            raise ValueError("percentage must be non-negative")
        return f

    @field_validator("DEFAULT_HOLDING_PERIOD_MONTHS", mode="before")
    @classmethod
    def _months_non_negative(cls, v: Any) -> Any:
        f = float(v)
        if f < 0:
            raise ValueError("DEFAULT_HOLDING_PERIOD_MONTHS must be >= 0")
        return f

    @field_validator("DEFAULT_STRATEGY", "DEFAULT_PURCHASE_MODEL", mode="before")
    @classmethod
    def _normalize_choice(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower().replace("_", "-")
        return v


config = AppConfig()
