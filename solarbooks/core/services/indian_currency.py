"""
Indian currency presentation helpers.

Amount in words uses the Indian numbering system (Crore, Lakh, Thousand)
and lakh/crore digit grouping for display. The tax engine emits plain
Decimals; these helpers are applied only at the edges (PDF, API extras).
"""

from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation
from typing import Any

_ONES = [
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen",
    "Seventeen", "Eighteen", "Nineteen",
]
_TENS = [
    "", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty",
    "Ninety",
]

CRORE = 10_000_000
LAKH = 100_000
THOUSAND = 1_000

ZERO_WORDS = "Zero Rupees Only"

# Amounts at or above this are read as unreadable input
MAX_AMOUNT = Decimal("1e30")

_ROUNDING = Context(prec=60, rounding=ROUND_HALF_UP)


def _below_hundred(n: int) -> str:
    if n < 20:
        return _ONES[n]
    tens, ones = divmod(n, 10)
    return f"{_TENS[tens]} {_ONES[ones]}".strip()


def _below_thousand(n: int) -> str:
    hundreds, rest = divmod(n, 100)
    parts = []
    if hundreds:
        parts.append(f"{_ONES[hundreds]} Hundred")
    if rest:
        parts.append(_below_hundred(rest))
    return " ".join(parts)


def number_to_words(n: int) -> str:
    """Spell a non-negative integer in Indian numbering. 0 gives ''."""
    if n <= 0:
        return ""

    parts = []
    crores, n = divmod(n, CRORE)
    lakhs, n = divmod(n, LAKH)
    thousands, n = divmod(n, THOUSAND)

    if crores:
        # Counts past 99 crore recurse ("One Thousand Crore")
        parts.append(f"{number_to_words(crores)} Crore")
    if lakhs:
        parts.append(f"{_below_hundred(lakhs)} Lakh")
    if thousands:
        parts.append(f"{_below_hundred(thousands)} Thousand")
    if n:
        parts.append(_below_thousand(n))
    return " ".join(parts)


def _finite_decimal(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not result.is_finite() or abs(result) >= MAX_AMOUNT:
        return None
    return result


def amount_in_words(amount: Any) -> str:
    """
    Render a rupee amount in words.

    Examples:
        2124        -> "Two Thousand One Hundred Twenty Four Rupees Only"
        1250000.50  -> "Twelve Lakh Fifty Thousand Rupees and Fifty Paise Only"
        0 / NaN     -> "Zero Rupees Only"

    NaN, infinities and amounts of MAX_AMOUNT or more read as zero.
    """
    value = _finite_decimal(amount)
    if value is None or value == 0:
        return ZERO_WORDS

    prefix = "Minus " if value < 0 else ""
    value = abs(value).quantize(Decimal("0.01"), context=_ROUNDING)
    rupees = int(value)
    paise = int((value - rupees) * 100)

    if rupees == 0 and paise == 0:
        return ZERO_WORDS

    rupee_words = number_to_words(rupees) or "Zero"
    if paise:
        return f"{prefix}{rupee_words} Rupees and {_below_hundred(paise)} Paise Only"
    return f"{prefix}{rupee_words} Rupees Only"


def _group_indian(digits: str) -> str:
    """12345678 -> 1,23,45,678"""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups) + "," + tail


def format_indian_number(amount: Any, decimals: int = 2) -> str:
    """Format with lakh/crore grouping; non-numeric input formats as 0."""
    value = _finite_decimal(amount) or Decimal("0")
    quantum = Decimal(1).scaleb(-decimals) if decimals > 0 else Decimal(1)
    value = value.quantize(quantum, context=_ROUNDING)

    sign = "-" if value < 0 else ""
    text = f"{abs(value):.{max(decimals, 0)}f}"
    whole, _, fraction = text.partition(".")
    grouped = _group_indian(whole)
    return f"{sign}{grouped}.{fraction}" if fraction else f"{sign}{grouped}"


def format_inr(amount: Any, decimals: int = 2, symbol: str = "₹") -> str:
    """₹12,34,567.89 style display string."""
    text = format_indian_number(amount, decimals)
    if text.startswith("-"):
        return f"-{symbol}{text[1:]}"
    return f"{symbol}{text}"
