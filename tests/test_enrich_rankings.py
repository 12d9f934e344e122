"""Tests for functions.enrich_rankings."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from functions.enrich_rankings import (
    build_color_map,
    build_poll_json,
    build_record_map,
    format_record,
    normalize_name,
    serialize_poll,
)

NOW = datetime(2025, 10, 19, 14, 30, tzinfo=timezone.utc)


def _selection(*rows):
    return {"season": 2025, "week": 8, "ranks": list(rows)}


def _row(school, record="", conference="Big Ten", rank=1):
    return {"rank": rank, "school": school, "record": record, "conference": conference}


class TestNormalizeName:
    def test_equivalent_spellings(self):
        assert normalize_name("Ohio State") == normalize_name("ohio-state") == normalize_name("OHIO STATE")

    def test_strips_punctuation(self):
        assert normalize_name("Texas A&M") == "texasam"
        assert normalize_name("Miami (OH)") == "miamioh"

    def test_none(self):
        assert normalize_name(None) == ""


class TestLookupTables:
    def test_color_falls_back_to_alt_color(self):
        colors = build_color_map([
            {"school": "Ohio State", "color": "#ce1141", "alt_color": "#505056"},
            {"school": "Army", "color": None, "alt_color": "#d6c499"},
            {"school": "Navy", "alternateColor": "#00205b"},
            {"school": "Nowhere"},
        ])
        assert colors == {"ohiostate": "#ce1141", "army": "#d6c499", "navy": "#00205b"}

    def test_record_map_defaults_missing_counts(self):
        records = build_record_map([
            {"team": "Ohio State", "total": {"games": 12, "wins": 10, "losses": 2, "ties": 0}},
            {"team": "Army", "total": {"wins": 3}},
            {"team": None, "total": {"wins": 1}},
        ])
        assert records == {
            "ohiostate": {"wins": 10, "losses": 2, "ties": 0},
            "army": {"wins": 3, "losses": 0, "ties": 0},
        }


class TestFormatRecord:
    def test_without_ties(self):
        assert format_record({"wins": 10, "losses": 2, "ties": 0}) == "10-2"

    def test_with_ties(self):
        assert format_record({"wins": 10, "losses": 2, "ties": 1}) == "10-2-1"

    def test_missing(self):
        assert format_record(None) == ""


class TestBuildPollJson:
    def test_record_falls_back_to_season_totals(self):
        records = {"ohiostate": {"wins": 10, "losses": 2, "ties": 0}}
        doc = build_poll_json("AP", _selection(_row("Ohio State")), {}, records, NOW)
        assert doc["teams"][0]["rec"] == "10-2"

    def test_record_fallback_with_ties(self):
        records = {"ohiostate": {"wins": 10, "losses": 2, "ties": 1}}
        doc = build_poll_json("AP", _selection(_row("Ohio State")), {}, records, NOW)
        assert doc["teams"][0]["rec"] == "10-2-1"

    def test_row_record_wins_over_totals(self):
        records = {"ohiostate": {"wins": 10, "losses": 2, "ties": 0}}
        doc = build_poll_json("AP", _selection(_row("Ohio State", record="9-3")), {}, records, NOW)
        assert doc["teams"][0]["rec"] == "9-3"

    def test_no_record_anywhere(self):
        doc = build_poll_json("AP", _selection(_row("Ohio State")), {}, {}, NOW)
        assert doc["teams"][0]["rec"] == ""

    def test_color_join_uses_normalized_key(self):
        colors = build_color_map([{"school": "OHIO-STATE", "color": "#ce1141"}])
        doc = build_poll_json("AP", _selection(_row("Ohio State")), colors, {}, NOW)
        assert doc["teams"][0]["color"] == "#ce1141"

    def test_missing_color_is_none(self):
        doc = build_poll_json("Coaches", _selection(_row("Boise State")), {"army": "#000"}, None, NOW)
        assert doc["teams"][0]["color"] is None

    def test_document_shape(self):
        rows = [_row("Georgia", "8-0", "SEC", 1), _row("Oregon", "7-1", None, 2)]
        doc = build_poll_json("Coaches", _selection(*rows), {}, {}, NOW)
        assert list(doc) == ["poll", "season", "week", "lastUpdated", "teams"]
        assert doc["poll"] == "Coaches"
        assert (doc["season"], doc["week"]) == (2025, 8)
        assert doc["lastUpdated"] == "2025-10-19T14:30:00.000Z"
        assert doc["teams"] == [
            {"rk": 1, "team": "Georgia", "rec": "8-0", "conf": "SEC", "color": None},
            {"rk": 2, "team": "Oregon", "rec": "7-1", "conf": "", "color": None},
        ]

    def test_last_updated_is_utc(self):
        eastern = NOW.astimezone(timezone(timedelta(hours=-4)))
        doc = build_poll_json("AP", _selection(_row("Army")), {}, {}, eastern)
        assert doc["lastUpdated"] == "2025-10-19T14:30:00.000Z"

    @pytest.mark.parametrize("selection", [None, {}, {"season": 2025, "week": 1, "ranks": []}])
    def test_nothing_to_publish(self, selection):
        assert build_poll_json("AP", selection, {}, {}, NOW) is None


class TestSerializePoll:
    def test_republish_differs_only_in_timestamp(self):
        selection = _selection(_row("Georgia", "8-0", "SEC", 1), _row("Oregon", "", "Big Ten", 2))
        colors = {"georgia": "#ba0c2f"}
        records = {"oregon": {"wins": 7, "losses": 1, "ties": 0}}

        first = build_poll_json("AP", selection, colors, records, NOW)
        second = build_poll_json("AP", selection, colors, records, NOW + timedelta(minutes=5))
        assert first["lastUpdated"] != second["lastUpdated"]

        second["lastUpdated"] = first["lastUpdated"]
        assert serialize_poll(first) == serialize_poll(second)

    def test_valid_json(self):
        doc = build_poll_json("AP", _selection(_row("San José State")), {}, {}, NOW)
        assert json.loads(serialize_poll(doc)) == doc
