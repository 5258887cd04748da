"""
PWS telemetry normalization package.

Detects which of the three personal weather station dialects (ClientRaw,
realtime.txt, realtime.xml) a payload is written in, parses it into a
canonical WeatherReading and converts its measurements into the user's
preferred units.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""
