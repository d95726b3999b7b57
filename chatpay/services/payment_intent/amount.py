"""Amount and receipt email resolution from interpolated block fields."""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from chatpay.services.payment_intent.errors import ValidationError
from chatpay.services.payment_intent.templating import Interpolate


MINOR_UNITS_PER_MAJOR = Decimal(100)
# Plain decimal or exponent notation only; no digit separators, NaN or Infinity.
_NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def to_minor_units(raw: str) -> int:
    """Parse a decimal string and convert it to minor units, rounding half up.

    `"19.999"` becomes `2000` and `"0.005"` becomes `1`.
    """

    text = raw.strip()
    if not _NUMBER_PATTERN.fullmatch(text):
        raise ValidationError(f"amount is not a number: {raw!r}")
    try:
        value = Decimal(text)
        minor = int((value * MINOR_UNITS_PER_MAJOR).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    except InvalidOperation as exc:
        raise ValidationError(f"amount is not a number: {raw!r}") from exc
    if minor < 0:
        raise ValidationError(f"amount is negative: {raw!r}")
    return minor


def compute_amount(expression: str | None, interpolate: Interpolate) -> int:
    """Interpolate the amount expression and convert it to minor units."""

    return to_minor_units(interpolate(expression))


def compute_receipt_email(expression: str | None, interpolate: Interpolate) -> str | None:
    """Interpolate the receipt email; an empty result means no receipt."""

    email = interpolate(expression)
    return email or None
