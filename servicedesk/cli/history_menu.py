from __future__ import annotations

from datetime import date

import questionary
from rich.console import Console
from rich.table import Table

from servicedesk.constants import format_date
from servicedesk.models import format_money, to_datetime
from servicedesk.models.history import BillingHistoryPage, BillingStats, PaymentStatus
from servicedesk.services.invoice_service import InvoiceService

console = Console()

PAGE_SIZE = 10

STATUS_CHOICES = {
    "All": None,
    "Completed": PaymentStatus.COMPLETED,
    "Pending": PaymentStatus.PENDING,
    "Failed": PaymentStatus.FAILED,
    "Refunded": PaymentStatus.REFUNDED,
}

PAYMENT_STYLES = {
    PaymentStatus.COMPLETED: "green",
    PaymentStatus.PENDING: "yellow",
    PaymentStatus.FAILED: "red",
    PaymentStatus.REFUNDED: "dim",
}


def _ask_date(prompt: str) -> date | None | bool:
    """Returns a date, None when left blank, or False on unreadable input."""
    text = questionary.text(prompt).ask()
    if not text:
        return None
    parsed = to_datetime(text)
    if parsed is None:
        console.print(f"[red]Not a date: {text}[/red]")
        return False
    return parsed.date()


def _history_table(page: BillingHistoryPage) -> Table:
    table = Table(title=f"Payment History (page {page.pagination.page} of {max(page.pagination.pages, 1)})")
    table.add_column("Date")
    table.add_column("Invoice", style="bold")
    table.add_column("Service")
    table.add_column("Amount", justify="right")
    table.add_column("Status", justify="center")

    for record in page.records:
        style = PAYMENT_STYLES[record.payment_status]
        table.add_row(
            format_date(record.payment_date or record.created_at),
            record.invoice_id or "-",
            record.service_name,
            format_money(record.amount, record.currency),
            f"[{style}]{record.payment_status.value.capitalize()}[/{style}]",
        )
    return table


def _show_stats(stats: BillingStats, currency: str) -> None:
    parts = []
    for status in PaymentStatus:
        entry = stats.for_status(status)
        if entry.count:
            parts.append(f"{status.value}: {entry.count}")
    console.print(f"  [bold]Total paid: {format_money(stats.total_paid, currency)}[/bold]")
    if parts:
        console.print(f"  [dim]{', '.join(parts)}[/dim]")


def history_menu(invoice_service: InvoiceService) -> None:
    from servicedesk.settings import settings as app_settings

    console.print()
    console.print("[bold]Payment History[/bold]", style="cyan")

    status_label = questionary.select("Status:", choices=list(STATUS_CHOICES)).ask()
    if status_label is None:
        return
    start_date = _ask_date("From (YYYY-MM-DD, optional):")
    if start_date is False:
        return
    end_date = _ask_date("To (YYYY-MM-DD, optional):")
    if end_date is False:
        return

    page_number = 1
    while True:
        try:
            page = invoice_service.payment_history(
                status=STATUS_CHOICES[status_label],
                start_date=start_date,
                end_date=end_date,
                page=page_number,
                limit=PAGE_SIZE,
            )
        except ValueError as exc:
            console.print(f"[red]{exc}[/red]")
            return
        if page_number == 1:
            _show_stats(invoice_service.payment_stats(), app_settings.default_currency)
        if not page.records:
            console.print("[yellow]No payments found.[/yellow]")
            return

        console.print()
        console.print(_history_table(page))
        console.print()

        choices = []
        if page.pagination.has_previous:
            choices.append("Previous page")
        if page.pagination.has_next:
            choices.append("Next page")
        if not choices:
            return
        choice = questionary.select("Navigate:", choices=choices + ["Back"]).ask()
        if choice == "Next page":
            page_number += 1
        elif choice == "Previous page":
            page_number -= 1
        else:
            return
