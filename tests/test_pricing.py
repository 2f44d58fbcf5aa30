"""
Tests for price parsing and currency display
"""
from decimal import Decimal

import pytest

from pickapart.build.models import BuildItem
from pickapart.build.pricing import CURRENCIES, USD, display, get_currency, parse_price


@pytest.mark.parametrize("raw,expected", [
    ("$1,299.99", Decimal("1299.99")),
    ("$0", Decimal("0")),
    (" 45.5 USD", Decimal("45.5")),
    (19.99, Decimal("19.99")),
    (250, Decimal("250")),
    ("-$5.00", Decimal("5.00")),
])
def test_parse_price(raw, expected):
    assert parse_price(raw) == expected


@pytest.mark.parametrize("raw", ["", "N/A", None, "1.2.3", ".", "$"])
def test_parse_price_unparseable_is_zero(raw):
    assert parse_price(raw) == 0


@pytest.mark.parametrize("amount", [0, 1, 9.999, 1299.99, Decimal("123.4567")])
def test_usd_display_matches_two_decimals(amount):
    assert display(amount, USD) == "$" + format(Decimal(str(amount)), ".2f")


def test_display_converts_with_rate():
    eur = CURRENCIES["EUR"]
    assert display(Decimal("100"), eur) == "€92.00"


def test_get_currency_is_case_insensitive():
    assert get_currency("gbp").code == "GBP"


def test_unknown_currency_falls_back_to_usd():
    assert get_currency("XYZ") is USD
    assert get_currency("") is USD


@pytest.mark.parametrize("raw,expected", [
    (1e-05, Decimal("0.00001")),
    (1e16, Decimal("10000000000000000")),
    (Decimal("2.5E+3"), Decimal("2500")),
    (-12.5, Decimal("12.5")),
])
def test_parse_price_numbers_in_exponent_form(raw, expected):
    assert parse_price(raw) == expected


@pytest.mark.parametrize("raw", [float("nan"), float("inf")])
def test_parse_price_non_finite_is_zero(raw):
    assert parse_price(raw) == 0


def test_tiny_float_price_totals_near_zero():
    item = BuildItem(id="cable-1", price=1e-05, quantity=3)
    assert item.line_total == Decimal("0.00003")
