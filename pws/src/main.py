"""
Command-line entrypoint for the PWS normalizer.

Reads a station payload from a file (or ``-`` for stdin), parses it with the
dialect its source URL selects and prints the result as JSON on stdout:

    pws-normalize clientraw.txt --url http://station.example/clientraw.txt
    pws-normalize - --url http://station.example/realtime.xml --name Home --raw
    pws-normalize --candidates --url http://station.example

By default the reading is rendered in the preferred units from the
environment (see PwsSettings); ``--raw`` prints the parsed reading in its
native units instead.  Fetching is left to the caller.

Structured JSON logging goes to stderr.

CHANGELOG:
- 2026-10-19: Initial creation
- 2026-10-19: Pass the source name to the renderer

TODO:
- None
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

from pws.src.config import PwsSettings
from pws.src.dispatcher import candidate_sources, dispatch_and_parse
from pws.src.display import render
from pws.src.errors import ParseError
from pws.src.models import RawPayload, SourceDescriptor

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PARSE_ERROR = 2

# ---------------------------------------------------------------------------
# Structured JSON logging setup
# ---------------------------------------------------------------------------


class JsonFormatter(logging.Formatter):
    """Minimal JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def configure_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging on stderr at *level*."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    p = argparse.ArgumentParser(
        prog="pws-normalize",
        description="Normalize a personal weather station payload into JSON",
    )
    p.add_argument(
        "path", nargs="?", default="-",
        help="Payload file, or '-' to read stdin (default)",
    )
    p.add_argument("--url", required=True, help="Source URL; its suffix selects the dialect")
    p.add_argument("--name", default="", help="Station display name")
    p.add_argument(
        "--raw", action="store_true",
        help="Print the reading in its native units instead of rendering it",
    )
    p.add_argument(
        "--candidates", action="store_true",
        help="Only print the URLs to fetch for --url and exit",
    )
    return p.parse_args(argv)


def _read_body(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()


def run(args: argparse.Namespace, settings: PwsSettings) -> int:
    """Execute one CLI invocation and return the process exit code."""
    source = SourceDescriptor(name=args.name, url=args.url)

    if args.candidates:
        urls = [candidate.url for candidate in candidate_sources(source)]
        print(json.dumps(urls))
        return EXIT_OK

    payload = RawPayload(source=source, body=_read_body(args.path))
    try:
        reading = dispatch_and_parse(payload)
    except ParseError as exc:
        logger.error("Failed to parse payload from '%s': %s", source.url, exc)
        return EXIT_PARSE_ERROR

    if args.raw:
        print(reading.model_dump_json())
    else:
        shown = render(reading, settings.unit_preferences(), source_name=source.name)
        print(shown.model_dump_json())
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Synchronous entrypoint for ``pws-normalize``."""
    args = parse_args(argv)
    settings = PwsSettings()
    configure_logging(settings.log_level)
    return run(args, settings)


if __name__ == "__main__":
    sys.exit(main())
