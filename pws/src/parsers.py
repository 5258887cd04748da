"""
Dialect parsers that turn raw PWS payload text into a WeatherReading.

Three dialects are supported:

- **clientraw** (Weather Display): one space-delimited line, fixed units.
- **realtime.txt** (Cumulus): one space-delimited line, unit labels inline.
- **realtime.xml** (Cumulus and compatibles): ``<misc>`` and ``<data>``
  elements whose attribute values name the carried field.

Failure policy:

- Structural problems (record too short for the layout, XML that does not
  parse) raise :class:`MalformedPayloadError` and abort the reading.
- Anything narrower (a non-numeric token, a value outside its valid range,
  an unknown unit label, a date that does not parse) is logged and degrades
  that one field to ``None`` or to its raw text, leaving the rest of the
  reading intact.

Values keep the dialect's native units; conversion is the caller's job.
These are pure functions apart from ``realtime.txt`` reading today's date
when none is injected.

CHANGELOG:
- 2026-10-19: Initial creation
- 2026-10-19: Range-check humidity; accept undecoded realtime.xml bytes

TODO:
- None
"""

from __future__ import annotations

import logging
import math
import xml.etree.ElementTree as ET
from collections.abc import Callable
from datetime import date

from pws.src.errors import MalformedPayloadError, UnknownUnitError
from pws.src.layouts import (
    CLIENTRAW_LAYOUT,
    HUMIDITY_RANGE,
    REALTIME_TXT_LAYOUT,
    REFRESH_TIME_DATE,
    REFRESH_TIME_TIME,
    XML_FIELD_SYNONYMS,
    XML_LOCATION_MARKER,
    XML_MEASUREMENTS,
    XML_SCOPE_ATTRIBUTES,
    PositionalLayout,
)
from pws.src.models import Measurement, WeatherReading
from pws.src.timestamps import (
    CLIENTRAW_PATTERNS,
    ISO_PATTERNS,
    expand_two_digit_year,
    format_timestamp,
    normalize_separators,
)
from pws.src.units import Quantity, Unit, parse_unit

logger = logging.getLogger(__name__)

XML_DIALECT = "realtime.xml"

# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def _parse_number(raw: str | None, name: str) -> float | None:
    """Parse a numeric token, returning ``None`` when it is not a finite number."""
    if raw is None:
        return None
    try:
        value = float(raw.strip())
    except ValueError:
        logger.warning("Field '%s': non-numeric value %r", name, raw)
        return None
    if not math.isfinite(value):
        logger.warning("Field '%s': non-finite value %r", name, raw)
        return None
    return value


def _check_range(
    value: float | None, valid_range: tuple[float, float] | None, name: str
) -> float | None:
    """Return *value*, or ``None`` when it falls outside *valid_range*."""
    if value is None or valid_range is None:
        return value
    lo, hi = valid_range
    if not (lo <= value <= hi):
        logger.warning(
            "Field '%s': value %.4g outside valid range (%s, %s)", name, value, lo, hi
        )
        return None
    return value


def _resolve_unit(label: str | None, quantity: Quantity, name: str) -> Unit | None:
    """Resolve a unit label, returning ``None`` when it is missing or unknown."""
    if label is None or not label.strip():
        logger.warning("Field '%s': value has no unit label", name)
        return None
    try:
        return parse_unit(label, quantity)
    except UnknownUnitError:
        logger.warning("Field '%s': unknown %s unit %r", name, quantity.value, label)
        return None


# ---------------------------------------------------------------------------
# Space-delimited dialects
# ---------------------------------------------------------------------------


def _tokenize(text: str, layout: PositionalLayout) -> list[str]:
    """Split a record on single spaces and check it covers every layout index."""
    tokens = text.strip().split(" ")
    if len(tokens) < layout.min_tokens:
        raise MalformedPayloadError(
            layout.dialect,
            f"expected at least {layout.min_tokens} tokens, got {len(tokens)}",
        )
    return tokens


def _extract_fields(layout: PositionalLayout, tokens: list[str]) -> dict[str, object]:
    """Extract every field of *layout* that parses cleanly.

    Returns a dict of WeatherReading keyword arguments.  Fields that fail
    to parse are left out and therefore default to ``None``.
    """
    fields: dict[str, object] = {}

    for fdef in layout.fields:
        value = _check_range(
            _parse_number(tokens[fdef.index], fdef.name), fdef.valid_range, fdef.name
        )
        if value is None:
            continue

        if fdef.quantity is None:
            fields[fdef.name] = value
            continue

        if fdef.unit is not None:
            unit: Unit | None = fdef.unit
        else:
            unit = _resolve_unit(tokens[fdef.unit_index], fdef.quantity, fdef.name)
        if unit is None:
            continue

        fields[fdef.name] = Measurement(value=value, unit=unit)

    return fields


def parse_clientraw(text: str) -> WeatherReading:
    """Parse a Weather Display ``clientraw.txt`` record.

    Args:
        text: The single-line record.

    Returns:
        A WeatherReading in knots, Celsius, hPa and mm.

    Raises:
        MalformedPayloadError: If the record has fewer tokens than the
            highest index the layout reads.
    """
    layout = CLIENTRAW_LAYOUT
    tokens = _tokenize(text, layout)
    fields = _extract_fields(layout, tokens)

    clock = ":".join(tokens[i] for i in layout.time_indices)
    fields["timestamp"] = format_timestamp(
        f"{tokens[layout.date_index]} {clock}", CLIENTRAW_PATTERNS
    )

    return WeatherReading(**fields)


def parse_realtime_txt(text: str, *, today: date | None = None) -> WeatherReading:
    """Parse a Cumulus ``realtime.txt`` record.

    The record's date carries a two-digit year; its century is taken from
    *today* (the current date when not given).

    Args:
        text: The single-line record.
        today: Date whose century completes the two-digit year.

    Returns:
        A WeatherReading in the units the record declares.

    Raises:
        MalformedPayloadError: If the record has fewer tokens than the
            highest index the layout reads.
    """
    layout = REALTIME_TXT_LAYOUT
    tokens = _tokenize(text, layout)
    fields = _extract_fields(layout, tokens)

    date_text = tokens[layout.date_index].strip()
    time_text = " ".join(tokens[i].strip() for i in layout.time_indices)
    expanded = expand_two_digit_year(
        normalize_separators(f"{date_text} {time_text}"),
        today or date.today(),
    )
    fields["timestamp"] = format_timestamp(
        expanded, ISO_PATTERNS, fallback=f"{date_text} {time_text}"
    )

    return WeatherReading(**fields)


# ---------------------------------------------------------------------------
# realtime.xml
# ---------------------------------------------------------------------------

_Setter = Callable[[dict[str, str], str], None]


def _store(slot: str) -> _Setter:
    def setter(slots: dict[str, str], text: str) -> None:
        slots[slot] = text

    return setter


def _store_refresh_time(slots: dict[str, str], text: str) -> None:
    """Split a combined ``refresh_time`` value into date and time."""
    slots["date"] = text[REFRESH_TIME_DATE].strip()
    time_text = text[REFRESH_TIME_TIME].strip()
    if time_text:
        slots["time"] = time_text


_XML_SETTERS: dict[str, _Setter] = {
    value: _store_refresh_time if slot == "refresh_time" else _store(slot)
    for value, slot in XML_FIELD_SYNONYMS.items()
}
"""Maps attribute value -> setter for the slot it feeds."""


def _element_text(element: ET.Element) -> str:
    return (element.text or "").strip()


def _collect_xml_slots(root: ET.Element) -> tuple[dict[str, str], str | None]:
    """Walk the document and collect slot texts plus the ``<misc>`` location.

    Later elements overwrite earlier ones for the same slot.
    """
    slots: dict[str, str] = {}
    misc_location: str | None = None
    marker_name, marker_value = XML_LOCATION_MARKER

    for element in root.iter():
        if element.tag == "misc":
            if element.get(marker_name) == marker_value:
                misc_location = _element_text(element) or misc_location
        elif element.tag == "data":
            text = _element_text(element)
            if not text:
                continue
            for name, value in element.attrib.items():
                if name not in XML_SCOPE_ATTRIBUTES:
                    continue
                setter = _XML_SETTERS.get(value)
                if setter is not None:
                    setter(slots, text)

    return slots, misc_location


def parse_realtime_xml(text: bytes | str) -> WeatherReading:
    """Parse a ``realtime.xml`` document.

    A well-formed document with no recognised elements yields a reading
    whose fields are all ``None``.  Bytes are decoded with the encoding the
    XML declaration names, UTF-8 when it names none.

    Args:
        text: The XML document, undecoded or as text.

    Returns:
        A WeatherReading in the units the document declares.

    Raises:
        MalformedPayloadError: If the document is not well-formed XML.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise MalformedPayloadError(XML_DIALECT, f"unparsable document: {exc}") from exc

    slots, misc_location = _collect_xml_slots(root)
    fields: dict[str, object] = {"location": slots.get("location") or misc_location}

    humidity = slots.get("humidity")
    if humidity is not None:
        fields["humidity_percent"] = _check_range(
            _parse_number(humidity.rstrip("%"), "humidity_percent"),
            HUMIDITY_RANGE,
            "humidity_percent",
        )

    for name, (quantity, unit_slot) in XML_MEASUREMENTS.items():
        value = _parse_number(slots.get(name), name)
        if value is None:
            continue
        unit = _resolve_unit(slots.get(unit_slot), quantity, name)
        if unit is None:
            continue
        fields[name] = Measurement(value=value, unit=unit)

    parts = [slots[key] for key in ("date", "time") if slots.get(key)]
    if parts:
        raw = " ".join(parts)
        fields["timestamp"] = format_timestamp(raw, ISO_PATTERNS, fallback=raw)

    return WeatherReading(**fields)
