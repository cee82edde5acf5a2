"""
Core business logic services.

Layer-pure services that depend only on:
- solarbooks/core/entities/*
- solarbooks/core/exceptions.py

NO infrastructure imports.
"""

from solarbooks.core.services.gst_calculator import (
    STATE_CODES,
    aggregate_totals,
    base_from_inclusive,
    calculate_document,
    calculate_line_item,
    calculate_line_items,
    gst_slab,
    resolve_gst_type,
    resolve_interstate,
    state_code_for,
    state_code_from_gstin,
    to_decimal,
    validate_gstin,
)
from solarbooks.core.services.indian_currency import (
    amount_in_words,
    format_indian_number,
    format_inr,
    number_to_words,
)
from solarbooks.core.services.payment_schedule import (
    PRESETS,
    ScheduleSummary,
    build_schedule,
    recompute_amounts,
    summarize,
)
from solarbooks.core.services.stock_ledger import (
    build_entry,
    direction_for,
    replay_balances,
    signed_quantity,
)

__all__ = [
    # Tax engine
    "STATE_CODES",
    "resolve_interstate",
    "resolve_gst_type",
    "state_code_for",
    "state_code_from_gstin",
    "validate_gstin",
    "to_decimal",
    "gst_slab",
    "calculate_line_item",
    "calculate_line_items",
    "aggregate_totals",
    "calculate_document",
    "base_from_inclusive",
    # Currency
    "amount_in_words",
    "number_to_words",
    "format_inr",
    "format_indian_number",
    # Payment schedule
    "PRESETS",
    "ScheduleSummary",
    "build_schedule",
    "recompute_amounts",
    "summarize",
    # Stock ledger
    "build_entry",
    "direction_for",
    "signed_quantity",
    "replay_balances",
]
