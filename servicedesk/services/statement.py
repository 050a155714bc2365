from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from dateutil.relativedelta import relativedelta

from servicedesk.models import to_datetime
from servicedesk.models.assignment import BillingCycle, RenewalDate, ServiceAssignment
from servicedesk.models.statement import InvoiceStatement, StatementLine

_FAR_FUTURE = datetime.max.replace(tzinfo=timezone.utc)


def invoice_number(assignment: ServiceAssignment) -> str:
    if assignment.invoice_id:
        return assignment.invoice_id
    return f"INV-{assignment.id[-8:].upper()}"


def next_renewal_date(
    end_date: datetime | None,
    cycle: BillingCycle,
    now: datetime,
) -> datetime | None:
    """One cycle past ``end_date``, or None if that is already in the past."""
    end_date = to_datetime(end_date)
    now = to_datetime(now) or datetime.now(timezone.utc)
    if end_date is None:
        return None
    if cycle == BillingCycle.MONTHLY:
        candidate = end_date + relativedelta(months=1)
    elif cycle == BillingCycle.ANNUAL:
        candidate = end_date + relativedelta(years=1)
    else:
        return None
    return candidate if candidate > now else None


def _renewal_sort_key(renewal: RenewalDate) -> datetime:
    return renewal.date or _FAR_FUTURE


def build_statement(assignment: ServiceAssignment, now: datetime | None = None) -> InvoiceStatement:
    now = to_datetime(now) or datetime.now(timezone.utc)
    base_price = assignment.price or Decimal("0")

    lines = [
        StatementLine(
            label=assignment.service_name or "Service",
            date=assignment.start_date,
            amount=base_price,
        )
    ]
    paid_renewals = sorted((r for r in assignment.renewal_dates if r.has_paid), key=_renewal_sort_key)
    for index, renewal in enumerate(paid_renewals, start=1):
        lines.append(
            StatementLine(
                label=renewal.label or f"Renewal #{index}",
                date=renewal.date,
                amount=renewal.price or Decimal("0"),
            )
        )

    return InvoiceStatement(
        assignment_id=assignment.id,
        invoice_number=invoice_number(assignment),
        client_name=assignment.client_name,
        email=assignment.email,
        service_name=assignment.service_name,
        currency=assignment.currency,
        cycle=assignment.cycle,
        issue_date=assignment.issue_date or now,
        period_start=assignment.start_date,
        period_end=assignment.end_date,
        lines=lines,
        subtotal=sum((line.amount for line in lines), Decimal("0")),
        next_renewal_date=next_renewal_date(assignment.end_date, assignment.cycle, now),
    )
