"""Duration-tier rental price resolution.

Products have a base daily price and may define pricing tiers that lower (or
raise) the per-day rate for longer rentals. Resolution is a pure function of
the base rate, the rental duration and the tiers as supplied by the caller:
the first tier whose ``[min_days, max_days]`` range contains the duration wins,
in input order. Callers normally pass tiers sorted by ``min_days``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Protocol

MONEY_PLACES = Decimal("0.01")


class InvalidInputError(ValueError):
    """Raised when a price cannot be computed from the given inputs."""


class PricingTierLike(Protocol):
    """Anything exposing the attributes of a pricing tier."""

    min_days: int
    max_days: int | None
    price_per_day: Decimal
    tier_name: str | None


@dataclass(slots=True)
class PricingTierInput:
    """In-memory pricing tier, used when tiers do not come from the database."""

    min_days: int
    max_days: int | None
    price_per_day: Decimal
    tier_name: str | None = None


@dataclass(slots=True)
class PriceCalculation:
    """Resolved price for a rental duration."""

    price_per_day: Decimal
    total_price: Decimal
    original_price: Decimal
    savings: Decimal
    is_discounted: bool
    tier_name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize the calculation to plain types for responses."""
        return {
            "price_per_day": _to_str(self.price_per_day),
            "total_price": _to_str(self.total_price),
            "original_price": _to_str(self.original_price),
            "savings": _to_str(self.savings),
            "is_discounted": self.is_discounted,
            "tier_name": self.tier_name,
        }


@dataclass(slots=True)
class PriceDisplay:
    """Formatted strings for showing a price, with its discount when any."""

    display_price: str
    original_price: str | None = None
    savings: str | None = None
    discount_percentage: int = 0


def _to_money(value: Decimal | float | int | str) -> Decimal:
    return Decimal(str(value)).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def _to_str(value: Decimal) -> str:
    return f"{value.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP):.2f}"


def _validate_base_price(value: Decimal | float | int | str) -> Decimal:
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise InvalidInputError(f"Invalid daily price: {value!r}") from exc
    if not price.is_finite() or price <= 0:
        raise InvalidInputError("Daily price must be a positive finite amount")
    return price


def _validate_days(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"Rental days must be an integer, got {value!r}")
    return value


def tier_matches(tier: PricingTierLike, rental_days: int) -> bool:
    """Return whether ``rental_days`` falls inside the tier's range."""
    if rental_days < tier.min_days:
        return False
    return tier.max_days is None or rental_days <= tier.max_days


def _base_rate(base_price: Decimal, billed_days: int) -> PriceCalculation:
    price_per_day = _to_money(base_price)
    total = _to_money(price_per_day * billed_days)
    return PriceCalculation(
        price_per_day=price_per_day,
        total_price=total,
        original_price=total,
        savings=Decimal("0.00"),
        is_discounted=False,
    )


def resolve_price(
    base_daily_price: Decimal | float | int | str,
    rental_days: int,
    tiers: Iterable[PricingTierLike] = (),
) -> PriceCalculation:
    """Pick the per-day rate for ``rental_days`` and compute totals.

    A non-positive duration, or an empty tier list, is billed as
    ``max(1, rental_days)`` days at the base rate without consulting tiers.
    When no tier covers the duration the base rate applies as well.
    """
    base_price = _validate_base_price(base_daily_price)
    days = _validate_days(rental_days)
    tier_list = list(tiers)

    if days <= 0 or not tier_list:
        return _base_rate(base_price, max(1, days))

    tier = next((item for item in tier_list if tier_matches(item, days)), None)
    if tier is None:
        return _base_rate(base_price, days)

    price_per_day = _to_money(tier.price_per_day)
    total_price = _to_money(price_per_day * days)
    original_price = _to_money(_to_money(base_price) * days)
    savings = original_price - total_price
    return PriceCalculation(
        price_per_day=price_per_day,
        total_price=total_price,
        original_price=original_price,
        savings=savings,
        is_discounted=savings > 0,
        tier_name=tier.tier_name,
    )


def discount_percentage(calculation: PriceCalculation) -> int:
    """Whole percentage saved against the base rate (0 without a base)."""
    if calculation.original_price == 0 or calculation.savings <= 0:
        return 0
    ratio = calculation.savings / calculation.original_price * 100
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_price(
    amount: Decimal | float | int,
    symbol: str | None = None,
    *,
    thousands_separator: str | None = None,
    decimal_separator: str | None = None,
) -> str:
    """Render an amount as a currency string, e.g. ``R$ 1.250,00``.

    Symbol and separators default to the configured currency settings.
    """
    if symbol is None or thousands_separator is None or decimal_separator is None:
        from rentdesk.core.config import get_settings

        settings = get_settings()
        if symbol is None:
            symbol = settings.currency_symbol
        if thousands_separator is None:
            thousands_separator = settings.currency_thousands_separator
        if decimal_separator is None:
            decimal_separator = settings.currency_decimal_separator
    whole, _, cents = f"{_to_money(amount):,.2f}".partition(".")
    whole = whole.replace(",", thousands_separator)
    return f"{symbol} {whole}{decimal_separator}{cents}"


def format_price_range(
    min_price: Decimal | float | int,
    max_price: Decimal | float | int,
    symbol: str | None = None,
) -> str:
    """Render a price range, collapsing it when both ends are equal."""
    if _to_money(min_price) == _to_money(max_price):
        return format_price(min_price, symbol)
    return f"{format_price(min_price, symbol)} - {format_price(max_price, symbol)}"


def format_price_with_discount(
    calculation: PriceCalculation, symbol: str | None = None
) -> PriceDisplay:
    """Derive display strings from a calculation.

    The original price and savings are only filled in when the calculation
    is a discount.
    """
    display = format_price(calculation.total_price, symbol)
    if not (calculation.is_discounted and calculation.savings > 0):
        return PriceDisplay(display_price=display)
    return PriceDisplay(
        display_price=display,
        original_price=format_price(calculation.original_price, symbol),
        savings=format_price(calculation.savings, symbol),
        discount_percentage=discount_percentage(calculation),
    )
