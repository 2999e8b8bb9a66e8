"""French display formatting for dates and numbers.

Matches what browsers produce for the ``fr-FR`` locale: long dates such as
"15 janvier 2024" and numbers grouped with a narrow no-break space and a
decimal comma, rounded to at most three decimals.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, localcontext

FRENCH_MONTHS = (
    "janvier",
    "février",
    "mars",
    "avril",
    "mai",
    "juin",
    "juillet",
    "août",
    "septembre",
    "octobre",
    "novembre",
    "décembre",
)

GROUP_SEPARATOR = "\u202f"  # narrow no-break space
DECIMAL_SEPARATOR = ","
MAX_FRACTION_DIGITS = 3


def _to_date(value: str | date | None) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None


def format_date(value: str | date | None) -> str:
    """Format an ISO string, date or datetime as e.g. "15 janvier 2024".

    Empty or unparseable input gives an empty string.
    """
    day = _to_date(value)
    if day is None:
        return ""
    return f"{day.day} {FRENCH_MONTHS[day.month - 1]} {day.year}"


def format_number(num: object) -> str:
    """Format a number with French thousands grouping.

    Non-numbers (including booleans) give an empty string.
    """
    if isinstance(num, bool) or not isinstance(num, int | float):
        return ""
    if isinstance(num, float):
        if math.isnan(num):
            return "NaN"
        if math.isinf(num):
            return "-∞" if num < 0 else "∞"

    quantum = Decimal(1).scaleb(-MAX_FRACTION_DIGITS)
    value = Decimal(str(num))
    with localcontext() as ctx:
        # Room for every integer digit plus the kept decimals
        ctx.prec = max(ctx.prec, value.adjusted() + 2 + MAX_FRACTION_DIGITS)
        rounded = value.quantize(quantum, rounding=ROUND_HALF_UP)
        sign = "-" if rounded < 0 else ""
        integer_part, _, fraction = f"{abs(rounded):f}".partition(".")
    fraction = fraction.rstrip("0")

    grouped = f"{int(integer_part):,}".replace(",", GROUP_SEPARATOR)
    if fraction:
        return f"{sign}{grouped}{DECIMAL_SEPARATOR}{fraction}"
    return f"{sign}{grouped}"
