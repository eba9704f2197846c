"""
Tests for the field parsers.

Covers the accepted text forms for each field, the range limits and the
OCR confusions the parsers are expected to tolerate.

Usage:
    pytest tests/test_parsers.py
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from huntscan.parsers import (
    normalize_digits,
    parse_counter,
    parse_counter_gauge,
    parse_currency,
    parse_exp_percent,
    parse_fragments,
    parse_gauge,
    parse_level,
)


# ---------------------------------------------------------------- level

@pytest.mark.parametrize("text, expected", [
    ("Lv.287", 287),
    ("LV287", 287),
    ("Lv 300", 300),
    ("lv.250 규빅", 250),
    ("Lv. 1", 1),
])
def test_level_forms(text, expected):
    assert parse_level(text) == expected


@pytest.mark.parametrize("text", ["invalid", "", None, "287", "Lv.0", "Lv.301", "Lv.2870"])
def test_level_rejected(text):
    assert parse_level(text) is None


def test_level_custom_range():
    assert parse_level("Lv.301", max_level=999) == 301
    assert parse_level("Lv.5", min_level=10) is None


def test_level_ocr_confusion():
    assert parse_level("Lv.2O1") == 201


@pytest.mark.parametrize("text, expected", [
    ("LⅥ287", 287),
    ("LVI287", 287),
    ("LⅤ 45", 45),
    ("레벨 287", 287),
    ("레벨287", 287),
])
def test_level_fallback_labels(text, expected):
    assert parse_level(text) == expected


def test_level_fallback_keeps_range_check():
    assert parse_level("LVI2870") is None
    assert parse_level("레벨 999") is None


# ---------------------------------------------------------------- experience

@pytest.mark.parametrize("text, expected", [
    ("67.432%", 67.432),
    ("67.432 %", 67.432),
    ("EXP 1234567 [67.432%]", 67.432),
    ("0.001%", 0.001),
    ("50%", 50.0),
    ("0%", 0.0),
])
def test_exp_forms(text, expected):
    assert parse_exp_percent(text) == pytest.approx(expected)


@pytest.mark.parametrize("text", ["100%", "100.5%", "67.432", "", None, "abc%"])
def test_exp_rejected(text):
    assert parse_exp_percent(text) is None


def test_exp_prefers_decimal_form():
    assert parse_exp_percent("12% 45.5%") == pytest.approx(45.5)


@pytest.mark.parametrize("text", [
    "EXP 48211 l67.432%]",
    "EXP 48211 I67.432%",
    "EXP 48211 |67.432%|",
])
def test_exp_misread_bracket_before_number(text):
    assert parse_exp_percent(text) == pytest.approx(67.432)


@pytest.mark.parametrize("text, expected", [
    ("EXP: 45.2", 45.2),
    ("exp 12", 12.0),
    ("경험치: 67.432", 67.432),
])
def test_exp_label_without_percent(text, expected):
    assert parse_exp_percent(text) == pytest.approx(expected)


def test_exp_label_without_percent_range_checked():
    assert parse_exp_percent("EXP 48211") is None
    assert parse_exp_percent("경험치 100.5") is None


# ---------------------------------------------------------------- currency

@pytest.mark.parametrize("text, expected", [
    ("25억 2758만 6086", 2_527_586_086),
    ("25역 2758만 6086", 2_527_586_086),
    ("25억2758만6086", 2_527_586_086),
    ("1억", 100_000_000),
    ("5000만", 50_000_000),
    ("3만 25", 30_025),
    ("2,913,009,385", 2_913_009_385),
    ("1234", 1234),
    ("메소 2527586086", 2_527_586_086),
])
def test_currency_forms(text, expected):
    assert parse_currency(text) == expected


@pytest.mark.parametrize("glyph", ["억", "역", "의"])
@pytest.mark.parametrize("billions, ten_thousands, remainder", [
    (0, 0, 0),
    (0, 0, 9999),
    (1, 0, 1),
    (25, 2758, 6086),
    (99, 9999, 9999),
])
def test_currency_unit_form_composes(glyph, billions, ten_thousands, remainder):
    text = f"{billions}{glyph} {ten_thousands}만 {remainder}"
    expected = billions * 100_000_000 + ten_thousands * 10_000 + remainder
    assert parse_currency(text) == expected


def test_currency_dropped_hundred_million_glyph():
    assert parse_currency("26 7758만 6006") == 2_677_586_006


def test_currency_hundred_million_group_is_two_digits():
    # "9999억" is not a unit form; only the bare digit run is left
    assert parse_currency("9999억") == 9999
    assert parse_currency("999억 5만") == 50_000


def test_currency_unit_form_wins_over_digits():
    assert parse_currency("99999 3억 5만") == 300_050_000


@pytest.mark.parametrize("text", ["12", "invalid", "", None, "1,2"])
def test_currency_rejected(text):
    assert parse_currency(text) is None


# ---------------------------------------------------------------- counter / gauge

@pytest.mark.parametrize("value", range(0, 21))
def test_counter_range(value):
    assert parse_counter(str(value)) == value


def test_counter_rejected():
    assert parse_counter("21") is None
    assert parse_counter("348/1000") is None
    assert parse_counter("") is None
    assert parse_counter(None) is None


def test_counter_ignores_gauge_numerator():
    assert parse_counter("19 348/1000") == 19


@pytest.mark.parametrize("text, expected", [
    ("348/1000", 348),
    ("348 / 1,000", 348),
    ("0/1000", 0),
    ("999/1000", 999),
    ("19 348/1000", 348),
])
def test_gauge_forms(text, expected):
    assert parse_gauge(text) == expected


@pytest.mark.parametrize("text", ["1000/1000", "348/100", "348", "", None])
def test_gauge_rejected(text):
    assert parse_gauge(text) is None


def test_counter_gauge_pair():
    assert parse_counter_gauge("19 348/1000") == (19, 348)
    assert parse_counter_gauge("19개 348/1000") == (19, 348)
    assert parse_counter_gauge("348/1000") == (None, 348)
    assert parse_counter_gauge(None) == (None, None)


# ---------------------------------------------------------------- fragments

@pytest.mark.parametrize("text, expected", [
    ("41", 41),
    ("1,234", 1234),
    ("조각: 41", 41),
    ("41 조각", 41),
    ("41개 조각", 41),
    ("Fragment 41", 41),
    ("fragments: 7", 7),
    ("99999", 99999),
])
def test_fragment_forms(text, expected):
    assert parse_fragments(text) == expected


def test_fragment_keyword_preferred():
    assert parse_fragments("12\n조각 41") == 41
    assert parse_fragments("3 slots\nSol Erda Fragment x 250") == 250


@pytest.mark.parametrize("text", ["100000", "", None, "none"])
def test_fragment_rejected(text):
    assert parse_fragments(text) is None


# ---------------------------------------------------------------- helpers

def test_normalize_digits():
    assert normalize_digits("2O1") == "201"
    assert normalize_digits("1l2") == "112"
    assert normalize_digits("[l67.4%]") == "[l67.4%]"
    assert normalize_digits("Lv.3|0") == "Lv.310"
    assert normalize_digits("Lv Ol") == "Lv Ol"
