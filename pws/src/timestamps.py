"""
Timestamp normalizer shared by all dialect parsers.

Station software writes date and time in several layouts (``19/10/26``,
``19.10.2026``, ``2026-10-19``).  The helpers here unify the separators,
try the dialect's known patterns and format the result as a canonical local
timestamp string.  When no pattern matches they return a textual fallback
instead of raising, so a reading keeps its timestamp in some form whenever
date/time tokens were present at all.

The output is a string, not a datetime: several dialects carry
no timezone and cannot always be parsed into a real instant.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date, datetime

logger = logging.getLogger(__name__)

OUTPUT_FORMAT = "%Y-%m-%d %H:%M:%S"
"""Canonical layout of a formatted timestamp."""

# Pattern sets per dialect, applied after normalize_separators().
CLIENTRAW_PATTERNS: tuple[str, ...] = ("%d-%m-%y %H:%M:%S", "%d-%m-%Y %H:%M:%S")
ISO_PATTERNS: tuple[str, ...] = ("%Y-%m-%d %H:%M:%S",)

_SEPARATORS = ("/", ".")


def normalize_separators(text: str) -> str:
    """Trim *text* and replace ``/`` and ``.`` with ``-``."""
    text = text.strip()
    for sep in _SEPARATORS:
        text = text.replace(sep, "-")
    return text


def format_timestamp(
    text: str,
    patterns: Sequence[str],
    *,
    fallback: str | None = None,
) -> str:
    """Parse a date/time string and render it in :data:`OUTPUT_FORMAT`.

    Args:
        text: Date and time joined by a space, in any separator style.
        patterns: ``strptime`` patterns tried in order against the
            separator-normalized text.
        fallback: Returned when no pattern matches.  Defaults to the
            separator-normalized text.

    Returns:
        The formatted timestamp, or the fallback text.
    """
    normalized = normalize_separators(text)
    for pattern in patterns:
        try:
            parsed = datetime.strptime(normalized, pattern)
        except ValueError:
            continue
        return parsed.strftime(OUTPUT_FORMAT)

    logger.debug("Timestamp '%s' matched none of %s", normalized, list(patterns))
    return normalized if fallback is None else fallback


def expand_two_digit_year(text: str, today: date) -> str:
    """Rewrite ``dd-mm-yy HH:MM:SS`` as ``yyyy-mm-dd HH:MM:SS``.

    The century is taken from *today*: its year keeps its first two digits
    and the token supplies the last two.  A station reporting from another
    century is misdated.

    The rewrite is positional and does not validate its input; a malformed
    token produces text that simply fails the subsequent parse.

    Args:
        text: Separator-normalized date and time.
        today: Date whose century is assumed.

    Returns:
        The reordered date/time text.
    """
    century = str(today.year)[:2]
    widened = text[:6] + century + text[6:]
    return f"{widened[6:10]}-{widened[3:5]}-{widened[0:2]} {widened[11:]}"
