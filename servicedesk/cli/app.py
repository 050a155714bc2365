import questionary
from rich.console import Console

from servicedesk.api.errors import ApiError
from servicedesk.cli.cart_menu import cart_menu
from servicedesk.cli.history_menu import history_menu
from servicedesk.cli.invoice_menu import invoices_menu
from servicedesk.cli.reminder_menu import reminders_menu
from servicedesk.repositories.factory import (
    get_api_client,
    get_billing_repository,
    get_cart_repository,
)
from servicedesk.services.cart_service import CartService
from servicedesk.services.invoice_service import InvoiceService
from servicedesk.services.reminder_service import ReminderService
from servicedesk.settings import settings

console = Console()


def _build_services() -> tuple[InvoiceService, CartService, ReminderService]:
    client = get_api_client()
    billing_repo = get_billing_repository(client)
    cart_repo = get_cart_repository(client)
    return (
        InvoiceService(billing_repo),
        CartService(cart_repo),
        ReminderService(billing_repo, settings.reminder_days),
    )


def main_menu() -> None:
    invoice_service, cart_service, reminder_service = _build_services()

    console.print()
    console.print("[bold]Service Billing[/bold]", style="cyan")
    console.print()

    while True:
        choice = questionary.select(
            "Main Menu",
            choices=[
                "Invoices",
                "Payment History",
                "Cart",
                "Renewal Reminders",
                "Exit",
            ],
        ).ask()

        if choice is None or choice == "Exit":
            console.print("[bold]Goodbye![/bold]")
            break

        try:
            if choice == "Invoices":
                invoices_menu(invoice_service)
            elif choice == "Payment History":
                history_menu(invoice_service)
            elif choice == "Cart":
                cart_menu(cart_service)
            elif choice == "Renewal Reminders":
                reminders_menu(reminder_service)
        except ApiError as exc:
            console.print(f"[red]{exc}[/red]")
