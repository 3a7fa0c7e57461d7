"""
Application configuration and environment variable parsing.

This module provides a lightweight configuration class that reads
environment variables and exposes typed attributes.  The values act as
defaults for the HTTP layer: a request that omits the VAT rate, the
platform or the rounding policy falls back to what is configured here.
The calculation functions themselves never read settings.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: Optional[float] = None) -> Optional[float]:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(name: str, default: Optional[int] = None) -> Optional[int]:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass
class Settings:
    """Configuration values loaded from environment variables."""

    CURRENCY: str = os.getenv("CURRENCY", "GBP")
    DEFAULT_PLATFORM: str = os.getenv("DEFAULT_PLATFORM", "etsy")
    PAYMENT_METHOD: str = os.getenv("PAYMENT_METHOD", "platform_included")

    VAT_RATE: float = _env_float("VAT_RATE", 20.0)
    VAT_REGISTERED: bool = _env_bool("VAT_REGISTERED", False)
    TARGET_MARGIN: float = _env_float("TARGET_MARGIN", 30.0)

    ROUNDING_MODE: str = os.getenv("ROUNDING_MODE", "nearest_99")
    ROUNDING_INCREMENT: Optional[int] = _env_int("ROUNDING_INCREMENT")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


def get_settings() -> Settings:
    """Factory function to create a new Settings instance.

    Using a function rather than a global instance ensures environment
    variables are read each time the settings are needed, which is
    useful for testing and dynamic reloads.
    """
    return Settings()
