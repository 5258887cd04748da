"""
Dialect layouts for PWS telemetry files -- single source of truth.

The two text dialects are flat, space-delimited records whose meaning is
given purely by token position.  The positions are tied to the station
software versions that write them and are not versioned in the files
themselves, so they are kept here as data: a revised dialect is a table
edit, not a parser change.

The XML dialect names its values through attribute values instead of
positions; its synonym table lives here as well.

References:
    - Weather Display "clientraw.txt" field list
    - Cumulus "realtime.txt" and "realtime.xml" web tags

CHANGELOG:
- 2026-10-19: Initial creation
- 2026-10-19: Humidity valid range

TODO:
- None
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pws.src.units import (
    PressureUnit,
    Quantity,
    RainUnit,
    TemperatureUnit,
    Unit,
    WindSpeedUnit,
)

HUMIDITY_RANGE: tuple[float, float] = (0.0, 100.0)
"""Valid relative humidity in percent, shared by every dialect."""

# ---------------------------------------------------------------------------
# Data definitions
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FieldDef:
    """Position of one reading field within a space-delimited record.

    Attributes:
        name: WeatherReading attribute the value populates.
        index: Token index of the numeric value.
        quantity: Quantity of the value, or ``None`` for humidity, which is
            a plain percentage.
        unit: Fixed unit of the value when the dialect implies one.
        unit_index: Token index of the unit label when the dialect writes
            the unit alongside the value.  Exactly one of *unit* and
            *unit_index* is set for a field with a quantity.
        valid_range: Optional ``(min, max)`` tuple for the parsed value.
            Values outside it are discarded.
        description: Free-text description of the field.
    """

    name: str
    index: int
    quantity: Quantity | None = None
    unit: Unit | None = None
    unit_index: int | None = None
    valid_range: tuple[float, float] | None = None
    description: str = ""

    def __post_init__(self) -> None:  # noqa: D105
        if self.quantity is not None and (self.unit is None) == (self.unit_index is None):
            msg = f"Field '{self.name}': set exactly one of unit or unit_index"
            raise ValueError(msg)

    @property
    def indices(self) -> tuple[int, ...]:
        """All token indices this field reads."""
        if self.unit_index is None:
            return (self.index,)
        return (self.index, self.unit_index)


@dataclass(frozen=True, slots=True)
class PositionalLayout:
    """Token layout of a space-delimited dialect.

    Attributes:
        dialect: Human-readable dialect name used in logs and errors.
        fields: Ordered field definitions.
        date_index: Token index of the date.
        time_indices: Token indices of the time.  A single index holds
            ``HH:MM:SS``; three indices hold hour, minute and second.
        min_tokens: Smallest token count that satisfies every index.
            Derived from the other attributes.
    """

    dialect: str
    fields: tuple[FieldDef, ...]
    date_index: int
    time_indices: tuple[int, ...]
    min_tokens: int = field(default=0, init=False)

    def __post_init__(self) -> None:  # noqa: D105
        indices = [self.date_index, *self.time_indices]
        for fdef in self.fields:
            indices.extend(fdef.indices)
        # frozen=True requires object.__setattr__
        object.__setattr__(self, "min_tokens", max(indices) + 1)


# ---------------------------------------------------------------------------
# clientraw.txt (Weather Display)
# Units are fixed by the protocol: knots, Celsius, hPa, mm.
# ---------------------------------------------------------------------------

CLIENTRAW_LAYOUT = PositionalLayout(
    dialect="clientraw",
    fields=(
        FieldDef(
            name="wind_speed",
            index=2,
            quantity=Quantity.WIND_SPEED,
            unit=WindSpeedUnit.KTS,
            description="Average wind speed",
        ),
        FieldDef(
            name="temperature",
            index=4,
            quantity=Quantity.TEMPERATURE,
            unit=TemperatureUnit.C,
            description="Outdoor temperature",
        ),
        FieldDef(
            name="humidity_percent",
            index=5,
            valid_range=HUMIDITY_RANGE,
            description="Outdoor relative humidity",
        ),
        FieldDef(
            name="pressure",
            index=6,
            quantity=Quantity.PRESSURE,
            unit=PressureUnit.HPA,
            description="Barometer",
        ),
        FieldDef(
            name="rain",
            index=7,
            quantity=Quantity.RAIN,
            unit=RainUnit.MM,
            description="Rain since midnight",
        ),
    ),
    date_index=74,
    time_indices=(29, 30, 31),
)

# ---------------------------------------------------------------------------
# realtime.txt (Cumulus)
# Every value has its unit label written further down the record.
# ---------------------------------------------------------------------------

REALTIME_TXT_LAYOUT = PositionalLayout(
    dialect="realtime.txt",
    fields=(
        FieldDef(
            name="temperature",
            index=2,
            quantity=Quantity.TEMPERATURE,
            unit_index=14,
            description="Outdoor temperature",
        ),
        FieldDef(
            name="humidity_percent",
            index=3,
            valid_range=HUMIDITY_RANGE,
            description="Outdoor relative humidity",
        ),
        FieldDef(
            name="wind_speed",
            index=5,
            quantity=Quantity.WIND_SPEED,
            unit_index=13,
            description="Average wind speed",
        ),
        FieldDef(
            name="rain",
            index=9,
            quantity=Quantity.RAIN,
            unit_index=16,
            description="Rain today",
        ),
        FieldDef(
            name="pressure",
            index=10,
            quantity=Quantity.PRESSURE,
            unit_index=15,
            description="Barometer",
        ),
    ),
    date_index=0,
    time_indices=(1,),
)

# ---------------------------------------------------------------------------
# realtime.xml (Cumulus / compatible)
# ---------------------------------------------------------------------------

XML_SCOPE_ATTRIBUTES: frozenset[str] = frozenset(
    {"misc", "realtime", "today", "yesterday", "record"}
)
"""Attribute names on ``<data>`` whose value names the carried field."""

XML_LOCATION_MARKER = ("data", "station_location")
"""(attribute name, value) on ``<misc>`` that marks the station location."""

XML_FIELD_SYNONYMS: dict[str, str] = {
    "temp": "temperature",
    "tempunit": "temperature_unit",
    "hum": "humidity",
    "press": "pressure",
    "barometer": "pressure",
    "barunit": "pressure_unit",
    "todaysrain": "rain",
    "today_rainfall": "rain",
    "rainunit": "rain_unit",
    "windspeed": "wind_speed",
    "avg_windspeed": "wind_speed",
    "windunit": "wind_unit",
    "station_date": "date",
    "station_time": "time",
    "location": "location",
    "refresh_time": "refresh_time",
}
"""Maps attribute value -> canonical slot collected by the XML parser."""

XML_MEASUREMENTS: dict[str, tuple[Quantity, str]] = {
    "temperature": (Quantity.TEMPERATURE, "temperature_unit"),
    "pressure": (Quantity.PRESSURE, "pressure_unit"),
    "rain": (Quantity.RAIN, "rain_unit"),
    "wind_speed": (Quantity.WIND_SPEED, "wind_unit"),
}
"""Maps value slot -> (quantity, slot holding its unit label)."""

REFRESH_TIME_DATE = slice(0, 10)
REFRESH_TIME_TIME = slice(12, None)
"""Character ranges of the date and time within a ``refresh_time`` value."""
