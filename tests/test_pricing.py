"""Tests for per-token -> per-million price normalization."""
from __future__ import annotations

import pytest

from openrouter_catalog.pricing import parse_price


def test_missing_price_is_absent() -> None:
    assert parse_price(None) is None


def test_empty_string_is_absent() -> None:
    assert parse_price("") is None
    assert parse_price("   ") is None


def test_decimal_string_scaled_to_per_million() -> None:
    assert parse_price("1.5") == 1_500_000


def test_zero_is_a_price_not_missing() -> None:
    result = parse_price("0")
    assert result is not None
    assert result == 0


def test_small_per_token_price() -> None:
    assert parse_price("0.000003") == pytest.approx(3.0)


def test_numeric_input_accepted() -> None:
    assert parse_price(0.000015) == pytest.approx(15.0)
    assert parse_price(0) == 0


@pytest.mark.parametrize("value", ["abc", "1.2.3", [], {}, True, "nan", "inf"])
def test_unparsable_input_is_absent(value) -> None:
    assert parse_price(value) is None
