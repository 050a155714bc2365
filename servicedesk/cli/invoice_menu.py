from __future__ import annotations

import questionary
from rich.console import Console
from rich.table import Table

from servicedesk.constants import STATUS_LABELS, STATUS_STYLES, format_date
from servicedesk.models import format_money
from servicedesk.models.assignment import ServiceAssignment
from servicedesk.models.invoice import BillableRow, StatusFilter
from servicedesk.models.statement import InvoiceStatement
from servicedesk.services.invoice_service import InvoiceService

console = Console()

STATUS_CHOICES = {
    "All": StatusFilter.ALL,
    "Unpaid": StatusFilter.UNPAID,
    "Overdue": StatusFilter.OVERDUE,
    "Paid": StatusFilter.PAID,
}


def _rows_table(rows: list[BillableRow]) -> Table:
    table = Table(title="Invoices")
    table.add_column("#", style="dim")
    table.add_column("Invoice", style="bold")
    table.add_column("Service")
    table.add_column("Issued")
    table.add_column("Due")
    table.add_column("Amount", justify="right")
    table.add_column("Status", justify="center")

    for index, row in enumerate(rows, start=1):
        style = STATUS_STYLES[row.status]
        table.add_row(
            str(index),
            row.invoice_id or "-",
            row.service_name,
            format_date(row.issue_date),
            format_date(row.due_date),
            format_money(row.amount, row.currency),
            f"[{style}]{STATUS_LABELS[row.status]}[/{style}]",
        )
    return table


def _show_statement(statement: InvoiceStatement) -> None:
    console.print()
    console.print(f"[bold cyan]Invoice {statement.invoice_number}[/bold cyan]")
    if statement.client_name:
        console.print(f"  Bill to: {statement.client_name} {statement.email}".rstrip())
    period_end = format_date(statement.period_end) if statement.period_end else "Ongoing"
    console.print(f"  Service period: {format_date(statement.period_start)} - {period_end}")

    table = Table()
    table.add_column("Description")
    table.add_column("Date", justify="center")
    table.add_column("Amount", justify="right")
    for line in statement.lines:
        table.add_row(line.label, format_date(line.date), format_money(line.amount, statement.currency))

    console.print(table)
    console.print(f"  [bold]Subtotal: {format_money(statement.subtotal, statement.currency)}[/bold]")
    if statement.next_renewal_date is not None:
        console.print(f"  Next renewal due: {format_date(statement.next_renewal_date)}")


def statement_menu(assignment: ServiceAssignment, invoice_service: InvoiceService) -> None:
    from servicedesk.settings import settings as app_settings

    statement = invoice_service.build_statement(assignment)
    _show_statement(statement)

    export = questionary.confirm("Export this invoice as PDF?", default=False).ask()
    if export:
        path = invoice_service.render_pdf(assignment, app_settings.pdf_output_dir)
        console.print(f"[green]Invoice saved to {path}[/green]")


def invoices_menu(invoice_service: InvoiceService) -> None:
    console.print()
    console.print("[bold]Invoices[/bold]", style="cyan")

    search = questionary.text("Search by invoice number or service (optional):").ask() or ""
    status_label = questionary.select("Status:", choices=list(STATUS_CHOICES)).ask()
    if status_label is None:
        return

    rows = invoice_service.list_rows(search=search, status=STATUS_CHOICES[status_label])
    if not rows:
        console.print("[yellow]No invoices found.[/yellow]")
        return

    console.print()
    console.print(_rows_table(rows))
    console.print()

    row_choices = {
        f"{index}. {row.invoice_id or row.service_name} ({format_date(row.due_date)})": row
        for index, row in enumerate(rows, start=1)
    }
    choice = questionary.select("Open an invoice:", choices=list(row_choices) + ["Back"]).ask()
    if choice is None or choice == "Back":
        return

    row = row_choices[choice]
    assignment = invoice_service.get_assignment(row.service_id)
    if assignment is None:
        console.print("[red]Invoice not found.[/red]")
        return

    statement_menu(assignment, invoice_service)
