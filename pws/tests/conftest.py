"""
Shared test fixtures for the PWS normalizer tests.

Provides environment isolation for PwsSettings and sample payloads for each
of the three station dialects.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import pytest

# All PwsSettings environment variable names, used for cleanup.
_ALL_PWS_ENV_VARS = (
    "PREF_TEMP_UNIT",
    "PREF_PRESS_UNIT",
    "PREF_RAIN_UNIT",
    "PREF_WIND_UNIT",
    "LOG_LEVEL",
)

CLIENTRAW_TOKEN_COUNT = 177


def make_clientraw(**overrides: str) -> str:
    """Return a clientraw.txt record with plausible values.

    Keyword arguments are ``t<index>=value`` overrides, e.g. ``t4="-3.5"``.

    Defaults:
        t2  wind speed    10.0 kts
        t4  temperature   21.4 C
        t5  humidity      55 %
        t6  pressure      1013.2 hPa
        t7  rain today    0.0 mm
        t29/t30/t31       14:05:09
        t74 date          19/10/26
    """
    tokens = ["0"] * CLIENTRAW_TOKEN_COUNT
    tokens[0] = "12345"
    defaults = {
        "t2": "10.0",
        "t4": "21.4",
        "t5": "55",
        "t6": "1013.2",
        "t7": "0.0",
        "t29": "14",
        "t30": "05",
        "t31": "09",
        "t74": "19/10/26",
    }
    defaults.update(overrides)
    for key, value in defaults.items():
        tokens[int(key[1:])] = value
    tokens[-1] = "!!C10.37S129!!"
    return " ".join(tokens)


def make_realtime_txt(**overrides: str) -> str:
    """Return a Cumulus realtime.txt record.

    Keyword arguments are ``t<index>=value`` overrides.
    """
    tokens = [
        "19/10/26",  # 0 date
        "14:05:09",  # 1 time
        "12.3",  # 2 temperature
        "87",  # 3 humidity
        "10.2",  # 4 dew point
        "8.5",  # 5 wind speed (avg)
        "11.0",  # 6 latest wind speed
        "225",  # 7 bearing
        "0.4",  # 8 rain rate
        "1.2",  # 9 rain today
        "1012.4",  # 10 pressure
        "SW",  # 11 wind direction
        "2",  # 12 beaufort
        "km/h",  # 13 wind unit
        "C",  # 14 temperature unit
        "hPa",  # 15 pressure unit
        "mm",  # 16 rain unit
        "48",  # 17 wind run
        "-0.3",  # 18 pressure trend
    ]
    for key, value in overrides.items():
        tokens[int(key[1:])] = value
    return " ".join(tokens)


REALTIME_XML = """\
<maintag>
<misc data="station_location">Hilltop</misc>
<realtime>
<data realtime="temp">12.3</data>
<data realtime="tempunit">&#176;C</data>
<data realtime="hum">87</data>
<data realtime="press">1012.4</data>
<data realtime="barunit">hPa</data>
<data realtime="windspeed">8.5</data>
<data realtime="windunit">km/h</data>
<data realtime="station_date">2026-10-19</data>
<data realtime="station_time">14:05:09</data>
</realtime>
<today>
<data today="todaysrain">1.2</data>
<data today="rainunit">mm</data>
</today>
</maintag>
"""


@pytest.fixture(autouse=True)
def _clean_pws_env(monkeypatch: pytest.MonkeyPatch, tmp_path: str) -> None:
    """Remove all PWS env vars and isolate from .env files before each test.

    Changes working directory to tmp_path so no .env file is accidentally
    loaded by Pydantic BaseSettings.
    """
    for var in _ALL_PWS_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def clientraw_text() -> str:
    return make_clientraw()


@pytest.fixture()
def realtime_txt_text() -> str:
    return make_realtime_txt()


@pytest.fixture()
def realtime_xml_text() -> str:
    return REALTIME_XML
