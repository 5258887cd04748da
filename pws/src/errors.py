"""Error types raised by the PWS parsing core."""

from __future__ import annotations


class PwsError(Exception):
    """Base error for PWS telemetry handling."""


class ParseError(PwsError):
    """A payload could not be turned into a WeatherReading."""


class UnsupportedFormatError(ParseError):
    """The source URL matches none of the supported dialect suffixes."""

    def __init__(self, url: str) -> None:
        super().__init__(f"No parser for source URL '{url}'")
        self.url = url


class MalformedPayloadError(ParseError):
    """The payload is structurally invalid for the selected dialect."""

    def __init__(self, dialect: str, message: str) -> None:
        super().__init__(f"{dialect}: {message}")
        self.dialect = dialect


class UnknownUnitError(PwsError, ValueError):
    """A unit label does not name a known unit for the quantity."""

    def __init__(self, label: str, quantity: str) -> None:
        super().__init__(f"Unknown {quantity} unit '{label}'")
        self.label = label
        self.quantity = quantity
