"""
View Pipeline

Derives what the list and the dashboard show from the store's records.

GUARANTEES:
- Pure: the input sequence and its records are never modified
- Deterministic: the same records and query always give the same output
- Filtering happens before sorting, and every sort is stable
"""

from datetime import date
from typing import Iterable, Optional, Sequence

from debt_tracker.models.debt import (
    DashboardSummary,
    DebtRecord,
    DebtStatus,
    SortKey,
    StatusFilter,
    ViewQuery,
)
from debt_tracker.validation.parsers import sanitize_text


# Debts without a due date sort after every real date
NO_DUE_DATE_SENTINEL = date(9999, 12, 31)


def _matches_status(record: DebtRecord, status_filter: StatusFilter) -> bool:
    if status_filter is StatusFilter.ALL:
        return True
    return record.status.value == status_filter.value


def _sort(records: list[DebtRecord], sort_key: Optional[SortKey]) -> list[DebtRecord]:
    if sort_key is SortKey.CREATED_AT_DESC:
        return sorted(records, key=lambda r: r.created_at, reverse=True)
    if sort_key is SortKey.AMOUNT_DESC:
        return sorted(records, key=lambda r: r.amount_cents, reverse=True)
    if sort_key is SortKey.DUE_DATE_ASC:
        return sorted(records, key=lambda r: r.due_date or NO_DUE_DATE_SENTINEL)
    return records


def project(
    records: Sequence[DebtRecord],
    query: Optional[ViewQuery] = None,
) -> list[DebtRecord]:
    """
    Filtered, searched and sorted view of the records.

    Args:
        records: Records in store order
        query: Search text, status filter and sort key. None shows
               everything in store order.

    Returns:
        A new list; `records` is left untouched
    """
    query = query or ViewQuery()
    needle = sanitize_text(query.search_text).lower()

    result = [r for r in records if _matches_status(r, query.status_filter)]
    if needle:
        result = [r for r in result if needle in r.search_text]

    return _sort(result, query.sort_key)


def next_due(records: Iterable[DebtRecord]) -> Optional[DebtRecord]:
    """
    Open record with the earliest due date.

    Equal due dates are broken by the smallest id. Records without a
    due date are never picked.
    """
    candidates = [
        r for r in records
        if r.status is DebtStatus.OPEN and r.due_date is not None
    ]
    if not candidates:
        return None
    return min(candidates, key=lambda r: (r.due_date, r.id))


def summarize(records: Sequence[DebtRecord]) -> DashboardSummary:
    """Dashboard figures: open total and count, paid count, next due."""
    open_records = [r for r in records if r.status is DebtStatus.OPEN]
    paid_count = sum(1 for r in records if r.status is DebtStatus.PAID)

    return DashboardSummary(
        open_total_cents=sum(r.amount_cents for r in open_records),
        open_count=len(open_records),
        paid_count=paid_count,
        next_due=next_due(open_records),
    )
