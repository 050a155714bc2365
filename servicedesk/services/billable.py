"""Billable rows for the invoices view.

Assignments fetched from ``/billing/info`` are flattened into one row per
renewal (or a single service row when an assignment has none), tagged as
paid, unpaid or overdue, then filtered and ordered for display.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone
from decimal import Decimal

from servicedesk.models import to_datetime
from servicedesk.models.assignment import ServiceAssignment
from servicedesk.models.invoice import BillableRow, InvoiceStatus, RowSource, StatusFilter, status_bucket

__all__ = [
    "classify",
    "flatten_to_billable_rows",
    "present",
    "status_bucket",
]

_PRIORITY = {
    InvoiceStatus.OVERDUE: -1,
    InvoiceStatus.UNPAID: 0,
    InvoiceStatus.PAID: 1,
}


def classify(due_date: datetime | None, paid: bool, now: datetime) -> tuple[bool, bool]:
    """Return ``(paid, is_overdue)`` for a row.

    A row without a due date is never overdue, however long it stays unpaid.
    """
    due_date, now = to_datetime(due_date), to_datetime(now)
    is_overdue = due_date is not None and now is not None and not paid and due_date < now
    return paid, is_overdue


def flatten_to_billable_rows(
    assignments: Iterable[ServiceAssignment],
    now: datetime | None = None,
) -> list[BillableRow]:
    now = to_datetime(now) or datetime.now(timezone.utc)
    rows: list[BillableRow] = []

    for assignment in assignments:
        base = dict(
            service_id=assignment.id,
            invoice_id=assignment.invoice_id,
            service_name=assignment.service_name,
            currency=assignment.currency,
            issue_date=assignment.issue_date,
        )
        renewals = assignment.renewal_dates if isinstance(assignment.renewal_dates, list) else []

        if not renewals:
            # Service-level rows carry no due-date semantics.
            rows.append(
                BillableRow(
                    source=RowSource.SERVICE,
                    due_date=assignment.end_date,
                    amount=assignment.price if assignment.price is not None else Decimal("0"),
                    paid=assignment.is_paid,
                    is_overdue=False,
                    **base,
                )
            )
            continue

        for renewal in renewals:
            price = renewal.price if renewal.price is not None else assignment.price
            paid, is_overdue = classify(renewal.date, renewal.has_paid, now)
            rows.append(
                BillableRow(
                    source=RowSource.RENEWAL,
                    renewal_id=renewal.id or None,
                    due_date=renewal.date,
                    amount=price if price is not None else Decimal("0"),
                    paid=paid,
                    is_overdue=is_overdue,
                    **base,
                )
            )

    return rows


def _matches_status(row: BillableRow, status: StatusFilter) -> bool:
    if status == StatusFilter.PAID:
        return row.paid
    if status == StatusFilter.UNPAID:
        return not row.paid and not row.is_overdue
    if status == StatusFilter.OVERDUE:
        return row.is_overdue
    return True


def present(
    rows: Iterable[BillableRow],
    search_text: str = "",
    status: StatusFilter | str = StatusFilter.ALL,
) -> list[BillableRow]:
    """Filter rows by reference text and status, overdue first, then unpaid, then paid.

    ``sorted`` is stable, so rows of equal priority keep their input order.
    """
    status = StatusFilter(status)
    query = (search_text or "").strip().lower()

    kept = [
        row
        for row in rows
        if (not query or query in row.reference.lower()) and _matches_status(row, status)
    ]
    return sorted(kept, key=lambda row: _PRIORITY[row.status])
