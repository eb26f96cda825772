"""Tests for duration-tier price resolution and formatting."""

from __future__ import annotations

from decimal import Decimal

import pytest

from rentdesk.services.pricing_calculator import (
    InvalidInputError,
    PriceCalculation,
    PricingTierInput,
    discount_percentage,
    format_price,
    format_price_range,
    format_price_with_discount,
    resolve_price,
)

TIERS = [
    PricingTierInput(1, 6, Decimal("100.00"), "Daily"),
    PricingTierInput(7, 29, Decimal("80.00"), "Weekly"),
    PricingTierInput(30, None, Decimal("60.00"), "Monthly"),
]


def test_base_rate_without_tiers() -> None:
    result = resolve_price(Decimal("50.00"), 3)
    assert result.price_per_day == Decimal("50.00")
    assert result.total_price == Decimal("150.00")
    assert result.original_price == result.total_price
    assert result.savings == Decimal("0.00")
    assert result.is_discounted is False
    assert result.tier_name is None


@pytest.mark.parametrize("days", [0, -4])
def test_non_positive_duration_bills_one_day(days: int) -> None:
    result = resolve_price(Decimal("100.00"), days, TIERS)
    assert result.total_price == Decimal("100.00")
    assert result.original_price == Decimal("100.00")
    assert result.tier_name is None
    assert result.is_discounted is False


def test_weekly_tier_applies_discount() -> None:
    result = resolve_price(Decimal("100.00"), 10, TIERS)
    assert result.price_per_day == Decimal("80.00")
    assert result.total_price == Decimal("800.00")
    assert result.original_price == Decimal("1000.00")
    assert result.savings == Decimal("200.00")
    assert result.is_discounted is True
    assert result.tier_name == "Weekly"


def test_open_ended_tier_covers_long_rentals() -> None:
    result = resolve_price(Decimal("100.00"), 365, TIERS)
    assert result.tier_name == "Monthly"
    assert result.total_price == Decimal("21900.00")


def test_tier_boundaries_are_inclusive() -> None:
    assert resolve_price(Decimal("100.00"), 6, TIERS).tier_name == "Daily"
    assert resolve_price(Decimal("100.00"), 7, TIERS).tier_name == "Weekly"
    assert resolve_price(Decimal("100.00"), 29, TIERS).tier_name == "Weekly"
    assert resolve_price(Decimal("100.00"), 30, TIERS).tier_name == "Monthly"


def test_uncovered_duration_falls_back_to_base_rate() -> None:
    tiers = [PricingTierInput(7, 13, Decimal("70.00"), "Week")]
    result = resolve_price(Decimal("90.00"), 3, tiers)
    assert result.price_per_day == Decimal("90.00")
    assert result.total_price == Decimal("270.00")
    assert result.tier_name is None
    assert result.is_discounted is False


def test_first_matching_tier_wins_in_input_order() -> None:
    tiers = [
        PricingTierInput(5, 10, Decimal("40.00"), "First"),
        PricingTierInput(1, None, Decimal("30.00"), "Second"),
    ]
    assert resolve_price(Decimal("50.00"), 7, tiers).tier_name == "First"
    assert resolve_price(Decimal("50.00"), 2, tiers).tier_name == "Second"


def test_tier_above_base_price_is_not_discounted() -> None:
    tiers = [PricingTierInput(1, None, Decimal("120.00"), "Premium")]
    result = resolve_price(Decimal("100.00"), 2, tiers)
    assert result.total_price == Decimal("240.00")
    assert result.savings == Decimal("-40.00")
    assert result.is_discounted is False
    assert discount_percentage(result) == 0


def test_totals_are_rounded_to_cents() -> None:
    result = resolve_price("33.333", 3)
    assert result.price_per_day == Decimal("33.33")
    assert result.total_price == Decimal("100.00")


@pytest.mark.parametrize("price", [0, -10, "abc", Decimal("NaN"), float("inf")])
def test_invalid_base_price_is_rejected(price: object) -> None:
    with pytest.raises(InvalidInputError):
        resolve_price(price, 3, TIERS)  # type: ignore[arg-type]


@pytest.mark.parametrize("days", [2.5, "3", True, None])
def test_invalid_duration_is_rejected(days: object) -> None:
    with pytest.raises(InvalidInputError):
        resolve_price(Decimal("10.00"), days, TIERS)  # type: ignore[arg-type]


def test_invalid_input_is_a_value_error() -> None:
    assert issubclass(InvalidInputError, ValueError)


def test_to_dict_serializes_amounts_as_strings() -> None:
    data = resolve_price(Decimal("100.00"), 10, TIERS).to_dict()
    assert data == {
        "price_per_day": "80.00",
        "total_price": "800.00",
        "original_price": "1000.00",
        "savings": "200.00",
        "is_discounted": True,
        "tier_name": "Weekly",
    }


def test_base_rate_total_uses_rounded_daily_rate() -> None:
    result = resolve_price(Decimal("10.005"), 3, [])
    assert result.price_per_day == Decimal("10.01")
    assert result.total_price == Decimal("30.03")
    assert result.total_price == result.price_per_day * 3


def test_format_price_uses_brazilian_separators() -> None:
    assert format_price(Decimal("1250"), "R$") == "R$ 1.250,00"
    assert format_price(Decimal("1234567.891"), "R$") == "R$ 1.234.567,89"
    assert format_price(Decimal("0.5"), "R$") == "R$ 0,50"


def test_format_price_accepts_custom_separators() -> None:
    formatted = format_price(
        Decimal("1250"), "$", thousands_separator=",", decimal_separator="."
    )
    assert formatted == "$ 1,250.00"


def test_format_price_defaults_to_configured_symbol() -> None:
    assert format_price(Decimal("10")) == "R$ 10,00"


def test_format_price_range() -> None:
    assert format_price_range(10, 10, "R$") == "R$ 10,00"
    assert format_price_range(10, 25, "R$") == "R$ 10,00 - R$ 25,00"


def test_format_discounted_price() -> None:
    display = format_price_with_discount(
        resolve_price(Decimal("100.00"), 10, TIERS), "R$"
    )
    assert display.display_price == "R$ 800,00"
    assert display.original_price == "R$ 1.000,00"
    assert display.savings == "R$ 200,00"
    assert display.discount_percentage == 20


def test_format_price_without_discount_omits_extras() -> None:
    display = format_price_with_discount(resolve_price(Decimal("100.00"), 3), "R$")
    assert display.display_price == "R$ 300,00"
    assert display.original_price is None
    assert display.savings is None
    assert display.discount_percentage == 0


def test_discount_percentage_rounds_half_up() -> None:
    calculation = PriceCalculation(
        price_per_day=Decimal("0"),
        total_price=Decimal("66.50"),
        original_price=Decimal("100.00"),
        savings=Decimal("33.50"),
        is_discounted=True,
    )
    assert discount_percentage(calculation) == 34


def test_discount_percentage_without_original_price() -> None:
    calculation = PriceCalculation(
        price_per_day=Decimal("0"),
        total_price=Decimal("0"),
        original_price=Decimal("0"),
        savings=Decimal("0"),
        is_discounted=False,
    )
    assert discount_percentage(calculation) == 0


def test_short_and_long_rentals_against_two_tiers() -> None:
    tiers = [
        PricingTierInput(1, 6, Decimal("50")),
        PricingTierInput(7, None, Decimal("40")),
    ]
    short = resolve_price(Decimal("60"), 5, tiers)
    assert (short.price_per_day, short.total_price) == (Decimal("50"), Decimal("250"))
    assert short.savings == Decimal("50")
    assert short.is_discounted is True

    long = resolve_price(Decimal("60"), 10, tiers)
    assert (long.price_per_day, long.total_price) == (Decimal("40"), Decimal("400"))
    assert long.savings == Decimal("200")


def test_overlapping_tiers_prefer_first_listed() -> None:
    tiers = [
        PricingTierInput(1, 10, Decimal("50")),
        PricingTierInput(5, 15, Decimal("30")),
    ]
    assert resolve_price(Decimal("60"), 7, tiers).price_per_day == Decimal("50")
