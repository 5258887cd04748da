"""
PWS normalizer configuration loaded from environment variables.

Uses Pydantic BaseSettings for automatic env var loading and validation.
The settings hold the user's preferred display units and the log level;
they are read once and handed to the core as an immutable UnitPreferences
snapshot, never consulted as global state.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings

from pws.src.models import UnitPreferences
from pws.src.units import Quantity, parse_unit


class PwsSettings(BaseSettings):
    """Configuration for the PWS normalizer.

    Unit preferences accept any label the conversion engine understands
    (``"km/h"``, ``"KMH"``, ``"°F"``, ``"inHg"``, ...).  Defaults are
    Celsius, millibar, millimetres and km/h.

    Attributes:
        pref_temp_unit: Preferred temperature unit.
        pref_press_unit: Preferred pressure unit.
        pref_rain_unit: Preferred rain unit.
        pref_wind_unit: Preferred wind speed unit.
        log_level: Root log level name (``DEBUG``, ``INFO``, ...).
    """

    pref_temp_unit: str = "°C"
    pref_press_unit: str = "mb"
    pref_rain_unit: str = "mm"
    pref_wind_unit: str = "km/h"
    log_level: str = "INFO"

    @field_validator("pref_temp_unit")
    @classmethod
    def temp_unit_must_be_known(cls, v: str) -> str:
        """Validate the temperature unit label resolves."""
        parse_unit(v, Quantity.TEMPERATURE)
        return v

    @field_validator("pref_press_unit")
    @classmethod
    def press_unit_must_be_known(cls, v: str) -> str:
        """Validate the pressure unit label resolves."""
        parse_unit(v, Quantity.PRESSURE)
        return v

    @field_validator("pref_rain_unit")
    @classmethod
    def rain_unit_must_be_known(cls, v: str) -> str:
        """Validate the rain unit label resolves."""
        parse_unit(v, Quantity.RAIN)
        return v

    @field_validator("pref_wind_unit")
    @classmethod
    def wind_unit_must_be_known(cls, v: str) -> str:
        """Validate the wind speed unit label resolves."""
        parse_unit(v, Quantity.WIND_SPEED)
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        """Validate LOG_LEVEL names a standard logging level."""
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"LOG_LEVEL must be a logging level name (got: '{v}')")
        return level

    def unit_preferences(self) -> UnitPreferences:
        """Build the read-only UnitPreferences snapshot for this configuration."""
        return UnitPreferences(
            temperature=self.pref_temp_unit,
            pressure=self.pref_press_unit,
            rain=self.pref_rain_unit,
            wind_speed=self.pref_wind_unit,
        )

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}
