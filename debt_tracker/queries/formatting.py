"""
Display formatting helpers.

Amounts are shown the pt-BR way ("R$ 1.200,50"), dates as DD/MM/YYYY,
and card numbers only ever as "**** 1234".
"""

from datetime import date
from typing import Optional

from debt_tracker.models.debt import DashboardSummary, DebtRecord, DebtStatus, DebtType

PLACEHOLDER = "—"

TYPE_LABELS = {
    DebtType.CARD: "Card",
    DebtType.BILL: "Bill",
    DebtType.LOAN: "Loan",
    DebtType.OTHER: "Other",
}

STATUS_LABELS = {
    DebtStatus.OPEN: "Open",
    DebtStatus.PAID: "Paid",
}


def _group_thousands(units: int) -> str:
    return f"{units:,}".replace(",", ".")


def format_cents(cents: Optional[int], currency_symbol: str = "R$") -> str:
    """
    Currency label for an amount in cents.

    >>> format_cents(120050)
    'R$ 1.200,50'
    """
    cents = cents or 0
    sign = "-" if cents < 0 else ""
    units, remainder = divmod(abs(cents), 100)
    return f"{sign}{currency_symbol} {_group_thousands(units)},{remainder:02d}"


def format_cents_for_input(cents: Optional[int]) -> str:
    """Amount as the edit form shows it, e.g. 120050 -> "1200,50"."""
    units, remainder = divmod(cents or 0, 100)
    return f"{units},{remainder:02d}"


def mask_last4(last4: Optional[str]) -> str:
    if not last4:
        return PLACEHOLDER
    return f"**** {last4}"


def date_label(value: Optional[date]) -> str:
    if value is None:
        return PLACEHOLDER
    return value.strftime("%d/%m/%Y")


def toggle_action_label(record: DebtRecord) -> str:
    """Text of the button that flips a debt's status."""
    return "Mark as open" if record.status is DebtStatus.PAID else "Mark as paid"


def describe_debt(record: DebtRecord, currency_symbol: str = "R$") -> dict[str, str]:
    """Text shown on one debt card of the list."""
    return {
        "id": record.id,
        "title": record.title,
        "status": STATUS_LABELS[record.status],
        "type": TYPE_LABELS.get(record.type, PLACEHOLDER),
        "installments": f"Installments: {record.installments}",
        "amount": format_cents(record.amount_cents, currency_symbol),
        "due_date": date_label(record.due_date),
        "card": mask_last4(record.card_last4),
        "notes": record.notes,
        "toggle_action": toggle_action_label(record),
    }


def describe_summary(summary: DashboardSummary, currency_symbol: str = "R$") -> dict[str, str]:
    """
    Dashboard figures rendered as text.

    Keys: open_total, open_meta, paid, paid_meta, next_due, next_due_meta.
    """
    if summary.next_due is None:
        next_due_text = PLACEHOLDER
        next_due_meta = "No due dates recorded"
    else:
        next_due_text = date_label(summary.next_due.due_date)
        next_due_meta = summary.next_due.title

    return {
        "open_total": format_cents(summary.open_total_cents, currency_symbol),
        "open_meta": f"{summary.open_count} open debt(s)",
        "paid": str(summary.paid_count),
        "paid_meta": "Debts paid off",
        "next_due": next_due_text,
        "next_due_meta": next_due_meta,
    }
