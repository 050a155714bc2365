from __future__ import annotations

import questionary
from rich.console import Console
from rich.table import Table

from servicedesk.models import format_money
from servicedesk.models.cart import Cart, CartLineStatus
from servicedesk.services.cart_service import CartService
from servicedesk.services.pricing import resolve_effective_price
from servicedesk.settings import settings

console = Console()


def _show_cart(cart: Cart | None) -> None:
    if cart is None or not cart.lines:
        console.print("[yellow]The cart is empty.[/yellow]")
        return

    table = Table(title="Cart")
    table.add_column("Service", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Price", justify="right")
    table.add_column("Effective", justify="right")

    currency = settings.default_currency
    for line in cart.lines:
        service = line.service
        if service is None:
            table.add_row("[dim]unavailable[/dim]", line.status.value, "-", "-")
            continue
        currency = service.currency
        if service.price is None:
            table.add_row(service.name, line.status.value, "-", "-")
            continue
        effective = resolve_effective_price(service.price, service.discount)
        table.add_row(
            service.name,
            line.status.value,
            format_money(service.price, service.currency),
            format_money(effective, service.currency),
        )

    console.print(table)
    console.print(f"  [bold]Total: {format_money(cart.total, currency)}[/bold]")


def cart_menu(cart_service: CartService) -> None:
    console.print()
    console.print("[bold]Cart[/bold]", style="cyan")

    user_id = questionary.text("User id:").ask()
    if not user_id:
        console.print("[yellow]Operation cancelled.[/yellow]")
        return

    while True:
        cart = cart_service.get_cart(user_id)
        console.print()
        _show_cart(cart)
        console.print()

        action = questionary.select(
            "Actions:",
            choices=["Add Service", "Remove Service", "Update Status", "Clear Cart", "Back"],
        ).ask()

        if action is None or action == "Back":
            break
        elif action == "Add Service":
            service_id = questionary.text("  Service id:").ask()
            if not service_id:
                continue
            try:
                cart_service.add_service(user_id, service_id)
            except ValueError as exc:
                console.print(f"[red]{exc}[/red]")
                continue
            console.print("[green]Service added to cart.[/green]")
        elif action == "Remove Service":
            lines = [line for line in (cart.lines if cart else []) if line.service is not None]
            if not lines:
                console.print("[yellow]Nothing to remove.[/yellow]")
                continue
            line_choices = {f"{line.service.name} ({line.service.id})": line for line in lines}
            choice = questionary.select("  Remove which service?", choices=list(line_choices) + ["Cancel"]).ask()
            if choice is None or choice == "Cancel":
                continue
            cart_service.remove_service(user_id, line_choices[choice].service.id)
            console.print("[green]Service removed from cart.[/green]")
        elif action == "Update Status":
            lines = [line for line in (cart.lines if cart else []) if line.id]
            if not lines:
                console.print("[yellow]Nothing to update.[/yellow]")
                continue
            line_choices = {
                f"{line.service.name if line.service else 'unavailable'} ({line.id}) [{line.status.value}]": line
                for line in lines
            }
            choice = questionary.select("  Which service?", choices=list(line_choices) + ["Cancel"]).ask()
            if choice is None or choice == "Cancel":
                continue
            status = questionary.select(
                "  New status:",
                choices=[s.value for s in CartLineStatus],
                default=line_choices[choice].status.value,
            ).ask()
            if status is None:
                continue
            cart_service.update_line_status(line_choices[choice].id, status)
            console.print(f"[green]Status set to {status}.[/green]")
        elif action == "Clear Cart":
            if not questionary.confirm("  Remove every service from the cart?", default=False).ask():
                continue
            cart_service.clear_cart(user_id)
            console.print("[green]Cart cleared.[/green]")
