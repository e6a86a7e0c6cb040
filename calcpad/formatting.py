"""Number parsing and result formatting for the calculator display.

Results are rounded to 10 decimal places to hide binary floating-point
noise (0.1 + 0.2 shows as 0.3), rendered as the shortest decimal string that
round-trips, then cut down to fit a 12-character display.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal

MAX_DISPLAY_CHARS = 12
ROUND_DIGITS = 10

_SCALE = 10.0 ** ROUND_DIGITS

# Longest numeric prefix, e.g. "3." → 3.0, "12abc" → 12.0, "Error" → no match
_NUMBER_PREFIX_RE = re.compile(
    r"^\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)

# Plain notation is used for decimal exponents in (-6, 21]; outside that
# range numbers switch to d.ddde±N.
_MIN_PLAIN_EXPONENT = -6
_MAX_PLAIN_EXPONENT = 21


def parse_number(text: str) -> float:
    """Parse the leading number in text.

    Returns NaN when text does not start with a number. Trailing garbage is
    ignored, so a half-typed value like "3." parses as 3.0.
    """
    match = _NUMBER_PREFIX_RE.match(text)
    if not match:
        return math.nan
    return float(match.group(1))


def _round_half_up(x: float) -> float:
    """Round to the nearest integer, halves toward +inf (-2.5 → -2)."""
    floor = math.floor(x)
    if x - floor >= 0.5:
        floor += 1
    return float(floor)


def number_to_string(value: float) -> str:
    """Render a float as the shortest decimal string that round-trips.

    Integral values carry no trailing ".0" ("998001", not "998001.0").
    Very large or very small magnitudes use exponent notation ("1e+21",
    "1.5e-7"). Non-finite values render as "NaN", "Infinity" or "-Infinity".
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        # Covers -0.0 as well
        return "0"

    sign = "-" if value < 0 else ""
    # repr() gives the shortest round-trip digits; Decimal splits them out
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    raw = "".join(str(d) for d in digit_tuple)
    digits = raw.rstrip("0")
    exponent += len(raw) - len(digits)

    # value == 0.<digits> * 10**point
    k = len(digits)
    point = exponent + k

    if k <= point <= _MAX_PLAIN_EXPONENT:
        body = digits + "0" * (point - k)
    elif 0 < point <= _MAX_PLAIN_EXPONENT:
        body = f"{digits[:point]}.{digits[point:]}"
    elif _MIN_PLAIN_EXPONENT < point <= 0:
        body = "0." + "0" * -point + digits
    else:
        e = point - 1
        mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
        body = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"
    return sign + body


def format_result(value: float) -> str:
    """Format an arithmetic result for the display.

    Args:
        value: Raw float result of a calculation.

    Returns:
        Display string of at most MAX_DISPLAY_CHARS characters (non-finite
        values excepted, which render as "Infinity" etc.).
    """
    scaled = value * _SCALE
    if math.isfinite(scaled):
        rounded = _round_half_up(scaled) / _SCALE
    else:
        # Too large to carry a fraction anyway; scaling would overflow to inf
        rounded = value

    text = number_to_string(rounded)
    if len(text) <= MAX_DISPLAY_CHARS:
        return text

    if "." not in text:
        return text[:MAX_DISPLAY_CHARS]

    integer, fraction = text.split(".", 1)
    if len(integer) >= MAX_DISPLAY_CHARS:
        # No room left for the point, drop the fraction entirely
        return integer[:MAX_DISPLAY_CHARS]
    room = MAX_DISPLAY_CHARS - len(integer) - 1
    return f"{integer}.{fraction[:room]}"
