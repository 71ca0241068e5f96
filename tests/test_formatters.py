# tests/test_formatters.py

import pytest

import core.formatters as formatters


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("12345678901", "123.456.789-01"),
        ("123.456.789-01", "123.456.789-01"),
        ("1234", "123.4"),
        ("123456789", "123.456.789"),
        ("1234567890", "123.456.789-0"),
        ("12345678901999", "123.456.789-01"),
        ("abc", ""),
    ],
)
def test_format_national_id(raw, expected):
    assert formatters.format_national_id(raw) == expected


def test_format_portal_link():
    assert formatters.format_portal_link("sme.example.org") == "https://sme.example.org"
    assert formatters.format_portal_link("http://sme.example.org") == "http://sme.example.org"
    assert formatters.format_portal_link("") is None
    assert formatters.format_portal_link(None) is None


def test_format_average():
    assert formatters.format_average(None) == formatters.NO_DATA
    assert formatters.format_average(7) == "7.00"
    assert formatters.format_average(4.25, decimals=1) == "4.2"


def test_format_percent_and_count():
    assert formatters.format_percent(66.666) == "66.7%"
    assert formatters.format_count(3) == "03"
    assert formatters.format_count(120) == "120"
