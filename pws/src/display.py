"""
Display adapter: renders a WeatherReading as strings in preferred units.

This is the thin layer a presentation surface needs on top of the parsing
core.  Each measurement is converted through the unit conversion engine
into the unit chosen in :class:`UnitPreferences` and formatted with its
display label; absent fields render as :data:`PLACEHOLDER`.  A reading
without a location shows the source's display name when one is given.

CHANGELOG:
- 2026-10-19: Initial creation
- 2026-10-19: Source name fallback for location; whole humidity without ".0"

TODO:
- None
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pws.src.models import Measurement, UnitPreferences, WeatherReading
from pws.src.units import (
    PressureUnit,
    Quantity,
    RainUnit,
    TemperatureUnit,
    Unit,
    WindSpeedUnit,
    convert,
)

PLACEHOLDER = "-"

DISPLAY_LABELS: dict[Unit, str] = {
    TemperatureUnit.C: "°C",
    TemperatureUnit.F: "°F",
    PressureUnit.HPA: "hPa",
    PressureUnit.INHG: "inHg",
    PressureUnit.MB: "mb",
    RainUnit.MM: "mm",
    RainUnit.IN: "in",
    WindSpeedUnit.KMH: "km/h",
    WindSpeedUnit.KTS: "kts",
    WindSpeedUnit.MPH: "mph",
    WindSpeedUnit.MS: "m/s",
}


class DisplayReading(BaseModel):
    """A WeatherReading rendered as display strings."""

    model_config = ConfigDict(frozen=True)

    location: str = PLACEHOLDER
    timestamp: str = PLACEHOLDER
    temperature: str = PLACEHOLDER
    humidity: str = PLACEHOLDER
    pressure: str = PLACEHOLDER
    rain: str = PLACEHOLDER
    wind_speed: str = PLACEHOLDER


def convert_measurement(
    measurement: Measurement,
    quantity: Quantity,
    prefs: UnitPreferences,
) -> Measurement:
    """Return *measurement* expressed in the preferred unit for *quantity*."""
    target = prefs.target(quantity)
    value = convert(measurement.value, quantity, measurement.unit, target)
    return Measurement(value=value, unit=target)


def _render_measurement(
    measurement: Measurement | None,
    quantity: Quantity,
    prefs: UnitPreferences,
) -> str:
    if measurement is None:
        return PLACEHOLDER
    converted = convert_measurement(measurement, quantity, prefs)
    label = DISPLAY_LABELS[converted.unit]
    if quantity is Quantity.TEMPERATURE:
        return f"{converted.value}{label}"
    return f"{converted.value} {label}"


def render(
    reading: WeatherReading,
    prefs: UnitPreferences,
    *,
    source_name: str | None = None,
) -> DisplayReading:
    """Render *reading* for display in the units chosen by *prefs*.

    Args:
        reading: Parsed reading in its native units.
        prefs: Read-only snapshot of the user's unit preferences.
        source_name: Display name of the source, shown when the reading
            carries no location.

    Returns:
        The display strings; missing fields hold :data:`PLACEHOLDER`.
    """
    humidity = PLACEHOLDER
    if reading.humidity_percent is not None:
        humidity = f"{reading.humidity_percent:g}%"

    return DisplayReading(
        location=reading.location or source_name or PLACEHOLDER,
        timestamp=reading.timestamp or PLACEHOLDER,
        temperature=_render_measurement(reading.temperature, Quantity.TEMPERATURE, prefs),
        humidity=humidity,
        pressure=_render_measurement(reading.pressure, Quantity.PRESSURE, prefs),
        rain=_render_measurement(reading.rain, Quantity.RAIN, prefs),
        wind_speed=_render_measurement(reading.wind_speed, Quantity.WIND_SPEED, prefs),
    )
