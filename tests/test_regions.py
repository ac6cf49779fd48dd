import pytest

from shortlist.regions import Region, address_snippet, classify, parse_region_choice


def test_anchor_wins_over_later_keywords():
    text = "Current Address: Geneva, Switzerland " + "x" * 120 + " London, United Kingdom, Tokyo"
    assert classify(text) == Region.SWITZERLAND


def test_anchor_capture_stops_at_newline():
    text = "Name: Jane\nCurrent Address: 12 Main Street, Springfield\nPrevious employer office: London"
    assert address_snippet(text) == "12 main street, springfield"
    assert classify(text) == Region.OTHERS


def test_anchor_is_case_insensitive():
    assert classify("CURRENT ADDRESS:   Minato-ku, Tokyo, Japan") == Region.DEVELOPED


def test_fallback_only_reads_first_300_chars():
    assert classify("x" * 500 + " zurich") == Region.OTHERS
    assert classify("x" * 100 + " zurich") == Region.SWITZERLAND


def test_priority_prefers_switzerland_over_europe():
    assert classify("Current Address: Rue de Lausanne, near the France border") == Region.SWITZERLAND


def test_priority_prefers_europe_over_developed():
    assert classify("Current Address: Dublin, Ireland (US citizen, New York)") == Region.EUROPE


def test_substring_matching_has_no_word_boundaries():
    assert classify("Current Address: Bernstrasse 4, Thun") == Region.SWITZERLAND


@pytest.mark.parametrize("text", ["", None])
def test_empty_input_is_others(text):
    assert classify(text) == Region.OTHERS


def test_parse_region_choice():
    assert parse_region_choice("All") is None
    assert parse_region_choice(None) is None
    assert parse_region_choice("europe") == Region.EUROPE
    assert parse_region_choice(" Others ") == Region.OTHERS
    with pytest.raises(ValueError):
        parse_region_choice("Mars")
