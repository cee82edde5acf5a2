"""
GST tax and document totals engine.

Layer-pure, synchronous functions shared by quotations and invoices:

- Tax-type resolution (intra-state CGST+SGST vs inter-state IGST)
- Line-item calculation (gross, discount, taxable, tax split, total)
- Document aggregation (sums, TCS, round-off, grand total)

The engine never raises on bad numbers. Anything that cannot be read as a
finite number, or is larger than MAX_MAGNITUDE, becomes zero. Negatives are
clamped to zero and a GST rate off the slab list counts as 0, so live
recalculation keeps working on partially typed input.
"""

import re
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation
from typing import Any

from solarbooks.core.entities.tax import (
    GST_RATES,
    DiscountMode,
    DocumentTotals,
    GSTType,
    LineItem,
)
from solarbooks.core.services.indian_currency import amount_in_words

ZERO = Decimal("0")
HUNDRED = Decimal("100")
PAISE = Decimal("0.01")
RUPEE = Decimal("1")
MAX_TCS_RATE = Decimal("10")

# Quantities, prices and amounts above this are treated as unreadable
MAX_MAGNITUDE = Decimal("1e12")

GST_SLABS = frozenset(Decimal(rate) for rate in GST_RATES)

_ROUNDING = Context(prec=60, rounding=ROUND_HALF_UP)

# Place-of-supply state name -> GST state code
STATE_CODES: dict[str, str] = {
    "Karnataka": "29",
    "Maharashtra": "27",
    "Tamil Nadu": "33",
    "Delhi": "07",
    "Gujarat": "24",
    "Rajasthan": "08",
    "Uttar Pradesh": "09",
    "West Bengal": "19",
    "Andhra Pradesh": "37",
    "Telangana": "36",
    "Kerala": "32",
    "Punjab": "03",
}

# State code, PAN, entity number, then the fixed "Z" and a check character
_GSTIN_RE = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]$")


# ---------------------------------------------------------------------------
# Numeric coercion
# ---------------------------------------------------------------------------


def to_decimal(value: Any) -> Decimal:
    """Read *value* as a Decimal; non-finite or oversized values become 0."""
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            text = str(value).strip().replace(",", "")
            result = Decimal(text) if text else ZERO
        except (InvalidOperation, ValueError):
            return ZERO
    if not result.is_finite() or abs(result) > MAX_MAGNITUDE:
        return ZERO
    return result


def non_negative(value: Any) -> Decimal:
    """Coerce and clamp at zero."""
    return max(ZERO, to_decimal(value))


def clamp_percent(value: Any, upper: Decimal = HUNDRED) -> Decimal:
    """Coerce and clamp into ``[0, upper]``."""
    return min(upper, non_negative(value))


def round_paise(value: Decimal) -> Decimal:
    return value.quantize(PAISE, context=_ROUNDING)


def round_rupee(value: Decimal) -> Decimal:
    return value.quantize(RUPEE, context=_ROUNDING)


def gst_slab(value: Any) -> Decimal:
    """Coerce a GST rate; anything outside the 0/5/12/18/28 slabs becomes 0."""
    rate = to_decimal(value)
    return rate if rate in GST_SLABS else ZERO


# ---------------------------------------------------------------------------
# Tax-type resolver
# ---------------------------------------------------------------------------


def validate_gstin(gstin: str | None) -> bool:
    """GSTIN structure check (case-insensitive)."""
    if not gstin:
        return False
    return bool(_GSTIN_RE.match(gstin.strip().upper()))


def state_code_from_gstin(gstin: str | None) -> str:
    """First two characters of a GSTIN, or '' when absent."""
    if not gstin:
        return ""
    return gstin.strip()[:2]


def state_code_for(state_name: str | None) -> str:
    """Two-digit GST code for a state name; '' if the state is unknown."""
    if not state_name:
        return ""
    return STATE_CODES.get(state_name.strip(), "")


def resolve_interstate(company_gstin: str | None, place_of_supply: str | None) -> bool:
    """
    Decide whether a supply is inter-state.

    True only when both state codes are known and differ. A missing GSTIN or
    an unknown place of supply resolves to intra-state.
    """
    company_code = state_code_from_gstin(company_gstin)
    supply_code = state_code_for(place_of_supply)
    if not company_code or not supply_code:
        return False
    return company_code != supply_code


def resolve_gst_type(company_gstin: str | None, place_of_supply: str | None) -> GSTType:
    return GSTType.from_interstate(resolve_interstate(company_gstin, place_of_supply))


# ---------------------------------------------------------------------------
# Line-item calculator
# ---------------------------------------------------------------------------


def calculate_line_item(line: LineItem, is_interstate: bool) -> LineItem:
    """
    Recompute every derived field of *line*.

    Returns a new LineItem; the input is not modified. Calling this again on
    the result with the same *is_interstate* returns identical values.
    """
    quantity = non_negative(line.quantity)
    unit_price = non_negative(line.unit_price)
    gst_rate = gst_slab(line.gst_rate)

    gross = round_paise(quantity * unit_price)

    if line.discount_mode == DiscountMode.AMOUNT:
        discount_amount = min(gross, round_paise(non_negative(line.discount_amount)))
        discount_percent = (discount_amount / gross * HUNDRED) if gross else ZERO
    else:
        discount_percent = clamp_percent(line.discount_percent)
        discount_amount = round_paise(gross * discount_percent / HUNDRED)

    taxable = gross - discount_amount

    if is_interstate:
        igst = round_paise(taxable * gst_rate / HUNDRED)
        cgst = sgst = ZERO
    else:
        cgst = round_paise(taxable * gst_rate / (HUNDRED * 2))
        sgst = cgst
        igst = ZERO

    return line.model_copy(
        update={
            "quantity": quantity,
            "unit_price": unit_price,
            "gst_rate": gst_rate,
            "discount_percent": discount_percent,
            "discount_amount": discount_amount,
            "gross": gross,
            "taxable_amount": taxable,
            "cgst": cgst,
            "sgst": sgst,
            "igst": igst,
            "total_amount": taxable + cgst + sgst + igst,
        }
    )


def calculate_line_items(
    lines: Iterable[LineItem], is_interstate: bool
) -> list[LineItem]:
    """Recompute a batch of lines and renumber them in order."""
    return [
        calculate_line_item(line, is_interstate).model_copy(update={"line_number": n})
        for n, line in enumerate(lines, 1)
    ]


def base_from_inclusive(inclusive_amount: Any, gst_rate: Any) -> tuple[Decimal, Decimal]:
    """Split a GST-inclusive price into (base, gst), both rounded to paise."""
    amount = non_negative(inclusive_amount)
    rate = gst_slab(gst_rate)
    base = amount / (1 + rate / HUNDRED)
    return round_paise(base), round_paise(amount - base)


# ---------------------------------------------------------------------------
# Document aggregator
# ---------------------------------------------------------------------------


def aggregate_totals(
    lines: Iterable[LineItem],
    tcs_rate: Any = ZERO,
    gst_type: GSTType = GSTType.INTRA_STATE,
) -> DocumentTotals:
    """
    Reduce computed lines into document totals.

    Discounts are line-level only. The grand total is rounded half-up to the
    rupee and round-off carries the difference, so

        sum(line.total_amount) + tcs_amount + round_off == grand_total

    holds exactly.
    """
    lines = list(lines)
    subtotal = sum((line.gross for line in lines), ZERO)
    total_discount = sum((line.discount_amount for line in lines), ZERO)
    taxable = sum((line.taxable_amount for line in lines), ZERO)
    cgst = sum((line.cgst for line in lines), ZERO)
    sgst = sum((line.sgst for line in lines), ZERO)
    igst = sum((line.igst for line in lines), ZERO)
    total_gst = cgst + sgst + igst

    rate = clamp_percent(tcs_rate, MAX_TCS_RATE)
    tcs_amount = round_paise(taxable * rate / HUNDRED)

    total_before_rounding = taxable + total_gst + tcs_amount
    grand_total = round_rupee(total_before_rounding)
    round_off = grand_total - total_before_rounding

    return DocumentTotals(
        subtotal=subtotal,
        total_discount=total_discount,
        taxable_amount=taxable,
        cgst=cgst,
        sgst=sgst,
        igst=igst,
        total_gst=total_gst,
        tcs_rate=rate,
        tcs_amount=tcs_amount,
        round_off=round_off,
        grand_total=grand_total,
        amount_in_words=amount_in_words(grand_total),
        gst_type=gst_type,
        line_count=len(lines),
    )


def calculate_document(
    lines: Iterable[LineItem],
    company_gstin: str | None,
    place_of_supply: str | None,
    tcs_rate: Any = ZERO,
) -> tuple[list[LineItem], DocumentTotals]:
    """Resolve the tax type, recompute every line and aggregate."""
    is_interstate = resolve_interstate(company_gstin, place_of_supply)
    computed = calculate_line_items(lines, is_interstate)
    totals = aggregate_totals(
        computed,
        tcs_rate=tcs_rate,
        gst_type=GSTType.from_interstate(is_interstate),
    )
    return computed, totals
