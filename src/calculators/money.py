"""Decimal helpers shared by the withholding calculators."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from src.calculators.errors import InvalidInputError

CENTS = Decimal("0.01")
RATE_PLACES = Decimal("0.0001")

Numeric = Decimal | int | float | str


def to_decimal(value: Numeric, field: str = "value") -> Decimal:
    """Convert a caller-supplied number to Decimal.

    Floats go through ``str()`` so 0.1 becomes Decimal("0.1") rather than
    its binary expansion. Booleans and non-finite values are rejected.
    """
    if isinstance(value, bool):
        raise InvalidInputError(field, f"{field} must be a number")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as e:
            raise InvalidInputError(field, f"{field} must be a number") from e
    if not result.is_finite():
        raise InvalidInputError(field, f"{field} must be a finite number")
    return result


def round_money(value: Decimal) -> Decimal:
    """Round to cents, half up."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def round_rate(value: Decimal) -> Decimal:
    """Round a percentage rate to four decimal places, half up."""
    return value.quantize(RATE_PLACES, rounding=ROUND_HALF_UP)


def percent_of(part: Decimal, whole: Decimal) -> Decimal:
    """Return ``part / whole * 100`` rounded to two places (0 when whole is 0)."""
    if whole == 0:
        return Decimal("0.00")
    return round_money(part / whole * 100)
