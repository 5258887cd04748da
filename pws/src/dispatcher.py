"""
Format dispatcher: picks the dialect parser for a payload from its source URL.

Selection is a case-sensitive suffix match on the source URL, checked in
order:

1. ``clientraw.txt`` -> clientraw parser
2. ``.txt``          -> realtime.txt parser
3. ``.xml``          -> realtime.xml parser

Anything else raises :class:`UnsupportedFormatError` without looking at the
payload.  The body is never sniffed; a misnamed URL feeds the wrong parser,
which then fails on the record shape or degrades field by field.

CHANGELOG:
- 2026-10-19: Initial creation
- 2026-10-19: Location fallback moved to the renderer; XML body passed undecoded

TODO:
- None
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from pws.src.errors import UnsupportedFormatError
from pws.src.models import RawPayload, SourceDescriptor, WeatherReading
from pws.src.parsers import parse_clientraw, parse_realtime_txt, parse_realtime_xml

logger = logging.getLogger(__name__)

Parser = Callable[..., WeatherReading]

PARSERS: tuple[tuple[str, Parser], ...] = (
    ("clientraw.txt", parse_clientraw),
    (".txt", parse_realtime_txt),
    (".xml", parse_realtime_xml),
)
"""Ordered (URL suffix, parser) pairs; the first match wins."""

STATION_FILES: tuple[str, ...] = ("realtime.txt", "realtime.xml")
"""Files tried under a bare station URL, in order."""

_UNDECODED_PARSERS: frozenset[Parser] = frozenset({parse_realtime_xml})
"""Parsers handed the undecoded body; they honour the encoding it declares."""


def select_parser(url: str) -> Parser:
    """Return the parser for *url*.

    Raises:
        UnsupportedFormatError: If *url* ends with none of the known suffixes.
    """
    for suffix, parser in PARSERS:
        if url.endswith(suffix):
            return parser
    raise UnsupportedFormatError(url)


def dispatch(payload: RawPayload) -> WeatherReading:
    """Parse *payload* with the parser its source URL selects.

    The reading holds only what the payload carries; substituting the
    source's display name for a missing location is left to the renderer.

    Args:
        payload: Raw payload and the source it was fetched from.

    Returns:
        The parsed WeatherReading.

    Raises:
        UnsupportedFormatError: If the source URL selects no parser.
        MalformedPayloadError: If the payload is structurally invalid for
            the selected dialect.
    """
    source = payload.source
    parser = select_parser(source.url)
    logger.debug("Parsing '%s' with %s", source.url, parser.__name__)

    if parser in _UNDECODED_PARSERS:
        return parser(payload.body)
    return parser(payload.text())


dispatch_and_parse = dispatch


def candidate_sources(source: SourceDescriptor) -> list[SourceDescriptor]:
    """Expand a station base URL into the dialect files it may serve.

    A URL that already ends with a supported suffix is returned as is.
    Otherwise it is taken as the station's base URL, and one descriptor per
    entry of :data:`STATION_FILES` is returned.  Nothing is fetched here.

    Args:
        source: The configured source.

    Returns:
        Descriptors to fetch, in the order they should be tried.
    """
    if any(source.url.endswith(suffix) for suffix, _ in PARSERS):
        return [source]
    base = source.url.rstrip("/")
    return [
        SourceDescriptor(name=source.name, url=f"{base}/{filename}")
        for filename in STATION_FILES
    ]
