"""
Pydantic models for PWS sources, payloads and normalized readings.

A WeatherReading is the canonical output of every dialect parser.  Every
field is optional: an absent value is a valid state, not an error.  Numeric
fields are stored as a Measurement so that each value always travels with
the unit it was reported in; the reading never assumes a unit.

All models are frozen so a reading can be shared freely between tasks.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

from pws.src.units import (
    PressureUnit,
    Quantity,
    RainUnit,
    TemperatureUnit,
    Unit,
    WindSpeedUnit,
    parse_unit,
)


class SourceDescriptor(BaseModel):
    """A configured station source.

    Attributes:
        name: Display name of the station.
        url: Fetch URL.  Only its suffix is used, to pick a parser.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    url: str


class RawPayload(BaseModel):
    """Raw bytes or text fetched from a source, consumed once by the dispatcher."""

    model_config = ConfigDict(frozen=True)

    source: SourceDescriptor
    body: bytes | str

    def text(self) -> str:
        """Return the body as text, decoding bytes as UTF-8."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8", errors="replace")
        return self.body


class Measurement(BaseModel):
    """A numeric value tagged with the unit it was reported in."""

    model_config = ConfigDict(frozen=True)

    value: float
    unit: Unit


class WeatherReading(BaseModel):
    """A single normalized weather reading.

    Values keep the native units of the dialect they were parsed from.

    Attributes:
        location: Station location or display name.
        timestamp: Formatted local timestamp, or the raw date/time text when
            it could not be parsed.
        temperature: Outdoor temperature.
        humidity_percent: Outdoor relative humidity (0-100).
        pressure: Barometric pressure.
        rain: Rain accumulated today.
        wind_speed: Wind speed.
    """

    model_config = ConfigDict(frozen=True)

    location: str | None = None
    timestamp: str | None = None
    temperature: Measurement | None = None
    humidity_percent: float | None = None
    pressure: Measurement | None = None
    rain: Measurement | None = None
    wind_speed: Measurement | None = None


class UnitPreferences(BaseModel):
    """User-selected target unit per quantity.

    Labels are accepted as free text (``"km/h"``, ``"°F"``) and resolved
    into unit members on construction.
    """

    model_config = ConfigDict(frozen=True)

    temperature: TemperatureUnit = TemperatureUnit.C
    pressure: PressureUnit = PressureUnit.MB
    rain: RainUnit = RainUnit.MM
    wind_speed: WindSpeedUnit = WindSpeedUnit.KMH

    @field_validator("temperature", "pressure", "rain", "wind_speed", mode="before")
    @classmethod
    def _resolve_label(cls, v: object, info: ValidationInfo) -> object:
        """Resolve free-text unit labels through the conversion engine."""
        if isinstance(v, str):
            return parse_unit(v, Quantity(info.field_name))
        return v

    def target(self, quantity: Quantity | str) -> Unit:
        """Return the preferred unit for *quantity*."""
        return getattr(self, Quantity(quantity).value)
