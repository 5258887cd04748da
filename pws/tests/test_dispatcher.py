"""
Tests for the format dispatcher.

Verifies suffix-based parser selection and its order, the unsupported-format
error, payload decoding and station URL expansion.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import pytest
from conftest import make_clientraw
from pws.src.dispatcher import (
    candidate_sources,
    dispatch,
    dispatch_and_parse,
    select_parser,
)
from pws.src.errors import MalformedPayloadError, UnsupportedFormatError
from pws.src.models import RawPayload, SourceDescriptor
from pws.src.parsers import parse_clientraw, parse_realtime_txt, parse_realtime_xml
from pws.src.units import TemperatureUnit, WindSpeedUnit


def _payload(url: str, body: bytes | str, name: str = "Station") -> RawPayload:
    return RawPayload(source=SourceDescriptor(name=name, url=url), body=body)


class TestSelectParser:
    """Suffixes are checked in order: clientraw.txt, .txt, .xml."""

    def test_clientraw_wins_over_txt(self) -> None:
        assert select_parser("http://wx.example/clientraw.txt") is parse_clientraw

    def test_other_txt_is_realtime(self) -> None:
        assert select_parser("http://wx.example/realtime.txt") is parse_realtime_txt

    def test_xml_is_realtime_xml(self) -> None:
        assert select_parser("http://wx.example/realtime.xml") is parse_realtime_xml

    def test_match_is_case_sensitive(self) -> None:
        with pytest.raises(UnsupportedFormatError):
            select_parser("http://wx.example/REALTIME.TXT")

    def test_clientraw_case_mismatch_falls_to_txt(self) -> None:
        assert select_parser("http://wx.example/ClientRaw.txt") is parse_realtime_txt


class TestDispatch:
    """Payloads are parsed by the parser their URL selects."""

    def test_clientraw_payload(self, clientraw_text: str) -> None:
        reading = dispatch(_payload("http://wx.example/clientraw.txt", clientraw_text))
        assert reading.wind_speed is not None
        assert reading.wind_speed.unit is WindSpeedUnit.KTS

    def test_realtime_txt_payload_as_bytes(self, realtime_txt_text: str) -> None:
        body = realtime_txt_text.encode("utf-8")
        reading = dispatch(_payload("http://wx.example/realtime.txt", body))
        assert reading.temperature is not None
        assert reading.temperature.unit is TemperatureUnit.C

    def test_realtime_xml_payload_keeps_document_location(self, realtime_xml_text: str) -> None:
        reading = dispatch(_payload("http://wx.example/realtime.xml", realtime_xml_text))
        assert reading.location == "Hilltop"

    def test_source_name_is_not_copied_into_reading(self, clientraw_text: str) -> None:
        reading = dispatch(
            _payload("http://wx.example/clientraw.txt", clientraw_text, name="Backyard")
        )
        assert reading.location is None

    def test_document_without_fields_yields_empty_reading(self) -> None:
        reading = dispatch(_payload("http://wx.example/realtime.xml", "<maintag/>"))
        assert all(value is None for value in reading.model_dump().values())

    def test_latin1_xml_keeps_declared_encoding(self) -> None:
        body = (
            '<?xml version="1.0" encoding="ISO-8859-1"?>'
            '<maintag><misc data="station_location">Zürich</misc></maintag>'
        ).encode("latin-1")
        reading = dispatch(_payload("http://wx.example/realtime.xml", body))
        assert reading.location == "Zürich"

    def test_json_url_is_unsupported_without_reading_body(self) -> None:
        class _Untouchable(RawPayload):
            def text(self) -> str:
                raise AssertionError("payload body must not be read")

        payload = _Untouchable(
            source=SourceDescriptor(name="Station", url="http://wx.example/data.json"),
            body="{}",
        )
        with pytest.raises(UnsupportedFormatError) as exc_info:
            dispatch(payload)
        assert exc_info.value.url == "http://wx.example/data.json"

    def test_misnamed_url_fails_safely(self, realtime_xml_text: str) -> None:
        with pytest.raises(MalformedPayloadError):
            dispatch(_payload("http://wx.example/clientraw.txt", realtime_xml_text))

    def test_clientraw_body_under_generic_txt_url_is_not_misread(self) -> None:
        reading = dispatch(_payload("http://wx.example/wx.txt", make_clientraw(t3="225")))
        assert reading.humidity_percent is None
        assert reading.temperature is None
        assert reading.pressure is None
        assert reading.rain is None
        assert reading.wind_speed is None

    def test_public_alias(self) -> None:
        assert dispatch_and_parse is dispatch


class TestCandidateSources:
    """Bare station URLs expand into the realtime files they may serve."""

    def test_known_suffix_is_returned_unchanged(self) -> None:
        source = SourceDescriptor(name="A", url="http://wx.example/clientraw.txt")
        assert candidate_sources(source) == [source]

    def test_base_url_expands_to_txt_then_xml(self) -> None:
        source = SourceDescriptor(name="A", url="http://wx.example/station")
        urls = [candidate.url for candidate in candidate_sources(source)]
        assert urls == [
            "http://wx.example/station/realtime.txt",
            "http://wx.example/station/realtime.xml",
        ]

    def test_trailing_slash_is_not_doubled(self) -> None:
        source = SourceDescriptor(name="A", url="http://wx.example/")
        urls = [candidate.url for candidate in candidate_sources(source)]
        assert urls[0] == "http://wx.example/realtime.txt"

    def test_name_is_carried_over(self) -> None:
        source = SourceDescriptor(name="Hilltop", url="http://wx.example")
        assert {c.name for c in candidate_sources(source)} == {"Hilltop"}
