from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path

from servicedesk.models.assignment import ServiceAssignment
from servicedesk.models.history import BillingHistoryPage, BillingStats, PaymentStatus
from servicedesk.models.invoice import BillableRow, StatusFilter
from servicedesk.models.statement import InvoiceStatement
from servicedesk.pdf.invoice import InvoicePDF
from servicedesk.repositories.base import BillingRepository
from servicedesk.services.billable import flatten_to_billable_rows, present
from servicedesk.services.statement import build_statement

logger = logging.getLogger(__name__)


class InvoiceService:
    def __init__(self, billing_repo: BillingRepository) -> None:
        self.billing_repo = billing_repo
        self.pdf_generator = InvoicePDF()

    def list_assignments(self) -> list[ServiceAssignment]:
        result = self.billing_repo.list_assignments()
        logger.debug("Listed %d assignments", len(result))
        return result

    def list_rows(
        self,
        search: str = "",
        status: StatusFilter | str = StatusFilter.ALL,
        now: datetime | None = None,
    ) -> list[BillableRow]:
        rows = flatten_to_billable_rows(self.list_assignments(), now=now)
        result = present(rows, search, status)
        logger.debug(
            "Presented %d of %d billable rows (search=%r, status=%s)",
            len(result),
            len(rows),
            search,
            StatusFilter(status).value,
        )
        return result

    def payment_history(
        self,
        status: PaymentStatus | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> BillingHistoryPage:
        if page < 1 or limit < 1:
            raise ValueError("Page and limit must be positive")
        if start_date and end_date and start_date > end_date:
            raise ValueError("The start date must not be after the end date")
        result = self.billing_repo.list_history(
            status=status, start_date=start_date, end_date=end_date, page=page, limit=limit
        )
        logger.debug("payment_history page=%d records=%d", page, len(result.records))
        return result

    def payment_stats(self) -> BillingStats:
        return self.billing_repo.get_stats()

    def get_assignment(self, assignment_id: str) -> ServiceAssignment | None:
        result = next((a for a in self.list_assignments() if a.id == assignment_id), None)
        logger.debug("get_assignment id=%s found=%s", assignment_id, result is not None)
        return result

    def build_statement(self, assignment: ServiceAssignment, now: datetime | None = None) -> InvoiceStatement:
        return build_statement(assignment, now=now)

    def render_pdf(self, assignment: ServiceAssignment, output_dir: str | Path, now: datetime | None = None) -> Path:
        """Write the assignment's invoice PDF into ``output_dir`` and return its path."""
        statement = self.build_statement(assignment, now=now)
        pdf_bytes = self.pdf_generator.generate(statement)

        directory = Path(output_dir)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"{statement.invoice_number}.pdf"
        path.write_bytes(pdf_bytes)
        logger.info("Invoice %s written to %s", statement.invoice_number, path)
        return path
