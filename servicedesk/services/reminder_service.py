from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import date, datetime, timezone

from servicedesk.models import to_datetime
from servicedesk.models.assignment import ServiceAssignment
from servicedesk.models.reminder import RenewalReminder
from servicedesk.repositories.base import BillingRepository

logger = logging.getLogger(__name__)

DEFAULT_OFFSETS = (7, 3, 1)


def days_until(due: datetime, today: date) -> int:
    return (to_datetime(due).astimezone(timezone.utc).date() - today).days


def find_due_reminders(
    assignments: Iterable[ServiceAssignment],
    today: date,
    offsets: Sequence[int] = DEFAULT_OFFSETS,
) -> list[RenewalReminder]:
    """Unpaid renewals falling exactly ``offsets`` days from ``today``."""
    reminders: list[RenewalReminder] = []
    for assignment in assignments:
        for renewal in assignment.renewal_dates:
            if renewal.has_paid or renewal.date is None:
                continue
            remaining = days_until(renewal.date, today)
            logger.debug(
                "Checking renewal %r of %s: due=%s days=%d",
                renewal.label,
                assignment.id,
                renewal.date.date().isoformat(),
                remaining,
            )
            if remaining not in offsets:
                continue
            reminders.append(
                RenewalReminder(
                    assignment_id=assignment.id,
                    renewal_id=renewal.id,
                    client_name=assignment.client_name,
                    email=assignment.email,
                    service_name=assignment.service_name,
                    renewal_label=renewal.label,
                    renewal_date=renewal.date,
                    renewal_price=renewal.price,
                    currency=assignment.currency,
                    days_until_due=remaining,
                )
            )
    return reminders


class ReminderService:
    def __init__(self, billing_repo: BillingRepository, offsets: Sequence[int] = DEFAULT_OFFSETS) -> None:
        self.billing_repo = billing_repo
        self.offsets = tuple(offsets)

    def due_reminders(self, today: date | None = None) -> list[RenewalReminder]:
        today = today or datetime.now(timezone.utc).date()
        assignments = [a for a in self.billing_repo.list_assignments() if a.renewal_dates]
        logger.debug("Found %d assignments with renewals to check", len(assignments))
        return find_due_reminders(assignments, today, self.offsets)

    def send_due_reminders(self, today: date | None = None) -> list[RenewalReminder]:
        reminders = self.due_reminders(today)
        for reminder in reminders:
            logger.info(
                "Renewal reminder: %s (%s) due in %d day(s) for %s <%s>",
                reminder.renewal_label or "renewal",
                reminder.service_name,
                reminder.days_until_due,
                reminder.client_name,
                reminder.email,
            )
        logger.info("Renewal reminder run complete: %d sent", len(reminders))
        return reminders
