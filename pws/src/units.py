"""
Unit conversion engine for PWS measurements -- single source of truth for units.

Defines the closed unit enumerations per quantity, resolves the free-text unit
labels that station software writes (``"km/h"``, ``"°C"``, ``"knots"``, ...)
into those enumerations, and converts values between units.

Every quantity converts through a canonical pivot unit:

    temperature  -> degrees Celsius
    pressure     -> hectopascal
    rain         -> millimetre
    wind speed   -> kilometres per hour

All results are rounded half-up to 2 decimal places.  When source and target
resolve to the same unit the input value is returned untouched.

These are pure functions: no I/O, no clock, no shared mutable state.

CHANGELOG:
- 2026-10-19: Initial creation
- 2026-10-19: Reject unit members of another quantity

TODO:
- None
"""

from __future__ import annotations

import math
from enum import StrEnum

from pws.src.errors import UnknownUnitError

# ---------------------------------------------------------------------------
# Quantities and units
# ---------------------------------------------------------------------------


class Quantity(StrEnum):
    """Physical quantities carried by a WeatherReading."""

    TEMPERATURE = "temperature"
    PRESSURE = "pressure"
    RAIN = "rain"
    WIND_SPEED = "wind_speed"


class TemperatureUnit(StrEnum):
    C = "C"
    F = "F"


class PressureUnit(StrEnum):
    """Pressure units.  ``mb`` and ``hPa`` are numerically identical."""

    HPA = "hPa"
    INHG = "inHg"
    MB = "mb"


class RainUnit(StrEnum):
    MM = "mm"
    IN = "in"


class WindSpeedUnit(StrEnum):
    KMH = "kmh"
    KTS = "kts"
    MPH = "mph"
    MS = "ms"


Unit = TemperatureUnit | PressureUnit | RainUnit | WindSpeedUnit

UNIT_TYPES: dict[Quantity, type[StrEnum]] = {
    Quantity.TEMPERATURE: TemperatureUnit,
    Quantity.PRESSURE: PressureUnit,
    Quantity.RAIN: RainUnit,
    Quantity.WIND_SPEED: WindSpeedUnit,
}
"""Maps each quantity to the enumeration of its units."""

# ---------------------------------------------------------------------------
# Conversion factors: multiply by the factor to reach the canonical unit.
# Temperature is affine and handled separately.
# ---------------------------------------------------------------------------

KTS_TO_KMH = 1.852
MPH_TO_KMH = 1.60934
MS_TO_KMH = 3.6
INHG_TO_HPA = 33.86389
MB_TO_HPA = 1.0
IN_TO_MM = 25.4

CANONICAL_FACTORS: dict[Quantity, dict[Unit, float]] = {
    Quantity.PRESSURE: {
        PressureUnit.HPA: 1.0,
        PressureUnit.MB: MB_TO_HPA,
        PressureUnit.INHG: INHG_TO_HPA,
    },
    Quantity.RAIN: {
        RainUnit.MM: 1.0,
        RainUnit.IN: IN_TO_MM,
    },
    Quantity.WIND_SPEED: {
        WindSpeedUnit.KMH: 1.0,
        WindSpeedUnit.KTS: KTS_TO_KMH,
        WindSpeedUnit.MPH: MPH_TO_KMH,
        WindSpeedUnit.MS: MS_TO_KMH,
    },
}
"""Maps quantity -> unit -> factor to its canonical unit (temperature excluded)."""

# ---------------------------------------------------------------------------
# Label resolution
# ---------------------------------------------------------------------------

_DEGREE_SIGNS = ("°", "º")

# Keys are normalized labels (see normalize_label).
_ALIASES: dict[Quantity, dict[str, Unit]] = {
    Quantity.PRESSURE: {
        "hpa": PressureUnit.HPA,
        "mb": PressureUnit.MB,
        "mbar": PressureUnit.MB,
        "millibar": PressureUnit.MB,
        "inhg": PressureUnit.INHG,
        # Cumulus writes barometer units as "in".
        "in": PressureUnit.INHG,
    },
    Quantity.RAIN: {
        "mm": RainUnit.MM,
        "in": RainUnit.IN,
        "inch": RainUnit.IN,
        "inches": RainUnit.IN,
    },
    Quantity.WIND_SPEED: {
        "kmh": WindSpeedUnit.KMH,
        "kph": WindSpeedUnit.KMH,
        "kts": WindSpeedUnit.KTS,
        "kt": WindSpeedUnit.KTS,
        "knot": WindSpeedUnit.KTS,
        "knots": WindSpeedUnit.KTS,
        "mph": WindSpeedUnit.MPH,
        "ms": WindSpeedUnit.MS,
        "mps": WindSpeedUnit.MS,
    },
}

_TEMPERATURE_LETTERS: dict[str, TemperatureUnit] = {
    "c": TemperatureUnit.C,
    "f": TemperatureUnit.F,
}


def normalize_label(label: str) -> str:
    """Lower-case *label* and drop whitespace, ``/`` and degree signs."""
    text = label.strip().replace("/", "").replace(" ", "")
    for sign in _DEGREE_SIGNS:
        text = text.replace(sign, "")
    return text.lower()


def parse_unit(label: str | Unit, quantity: Quantity | str) -> Unit:
    """Resolve a unit label into the unit enumeration for *quantity*.

    Comparison is case-insensitive and ignores ``/`` (``"km/h"`` equals
    ``"KMH"``).  Temperature labels are matched on their last letter once
    degree signs are stripped, so ``"°C"``, ``"C"`` and ``"degC"`` all
    resolve to Celsius.

    Args:
        label: Free-text label or an already resolved unit.
        quantity: Quantity the label belongs to.

    Returns:
        The matching unit member.

    Raises:
        UnknownUnitError: If the label names no unit of *quantity*, or is a
            unit member of another quantity.
    """
    quantity = Quantity(quantity)
    unit_type = UNIT_TYPES[quantity]
    if isinstance(label, unit_type):
        return label  # type: ignore[return-value]
    if isinstance(label, StrEnum):
        raise UnknownUnitError(str(label), quantity.value)

    key = normalize_label(str(label))
    if quantity is Quantity.TEMPERATURE:
        unit = _TEMPERATURE_LETTERS.get(key[-1:]) if key else None
    else:
        unit = _ALIASES[quantity].get(key)
    if unit is None:
        raise UnknownUnitError(str(label), quantity.value)
    return unit


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------


def round_half_up(value: float) -> float:
    """Round to 2 decimals with halves going up."""
    return math.floor(value * 100.0 + 0.5) / 100.0


def fahrenheit_to_celsius(value: float) -> float:
    return (value - 32) * 5 / 9


def celsius_to_fahrenheit(value: float) -> float:
    return (value * 9 / 5) + 32


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def convert(
    value: float,
    quantity: Quantity | str,
    from_unit: str | Unit,
    to_unit: str | Unit,
) -> float:
    """Convert *value* of *quantity* from one unit to another.

    Args:
        value: Numeric value expressed in *from_unit*.
        quantity: One of :class:`Quantity` (or its string value).
        from_unit: Source unit, as a label or unit member.
        to_unit: Target unit, as a label or unit member.

    Returns:
        The converted value rounded half-up to 2 decimals, or *value*
        itself when both units resolve to the same unit.

    Raises:
        UnknownUnitError: If either label is not a unit of *quantity*.
    """
    quantity = Quantity(quantity)
    source = parse_unit(from_unit, quantity)
    target = parse_unit(to_unit, quantity)

    if source == target:
        return value

    if quantity is Quantity.TEMPERATURE:
        if source is TemperatureUnit.F:
            result = fahrenheit_to_celsius(value)
        else:
            result = celsius_to_fahrenheit(value)
    else:
        factors = CANONICAL_FACTORS[quantity]
        result = value * factors[source] / factors[target]

    return round_half_up(result)


def convert_temperature(value: float, from_unit: str | Unit, to_unit: str | Unit) -> float:
    """Convert a temperature between Celsius and Fahrenheit."""
    return convert(value, Quantity.TEMPERATURE, from_unit, to_unit)


def convert_pressure(value: float, from_unit: str | Unit, to_unit: str | Unit) -> float:
    """Convert a pressure via hectopascal."""
    return convert(value, Quantity.PRESSURE, from_unit, to_unit)


def convert_rain(value: float, from_unit: str | Unit, to_unit: str | Unit) -> float:
    """Convert a rain accumulation via millimetres."""
    return convert(value, Quantity.RAIN, from_unit, to_unit)


def convert_wind_speed(value: float, from_unit: str | Unit, to_unit: str | Unit) -> float:
    """Convert a wind speed via kilometres per hour."""
    return convert(value, Quantity.WIND_SPEED, from_unit, to_unit)
