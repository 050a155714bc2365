from __future__ import annotations

from rich.console import Console
from rich.table import Table

from servicedesk.constants import format_date
from servicedesk.models import format_money
from servicedesk.services.reminder_service import ReminderService

console = Console()


def reminders_menu(reminder_service: ReminderService) -> None:
    reminders = reminder_service.send_due_reminders()

    if not reminders:
        console.print("[yellow]No renewal reminders due today.[/yellow]")
        return

    table = Table(title="Renewal Reminders")
    table.add_column("Client", style="bold")
    table.add_column("Email")
    table.add_column("Service")
    table.add_column("Renewal")
    table.add_column("Due")
    table.add_column("Days", justify="right")
    table.add_column("Amount", justify="right")

    for r in reminders:
        table.add_row(
            r.client_name,
            r.email,
            r.service_name,
            r.renewal_label,
            format_date(r.renewal_date),
            str(r.days_until_due),
            format_money(r.renewal_price, r.currency) if r.renewal_price is not None else "-",
        )

    console.print()
    console.print(table)
