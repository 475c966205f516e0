"""View pipeline and display formatting package."""

from debt_tracker.queries.formatting import (
    date_label,
    describe_debt,
    describe_summary,
    format_cents,
    format_cents_for_input,
    mask_last4,
)
from debt_tracker.queries.pipeline import (
    NO_DUE_DATE_SENTINEL,
    next_due,
    project,
    summarize,
)

__all__ = [
    "NO_DUE_DATE_SENTINEL",
    "date_label",
    "describe_debt",
    "describe_summary",
    "format_cents",
    "format_cents_for_input",
    "mask_last4",
    "next_due",
    "project",
    "summarize",
]
