from datetime import date, datetime

from servicedesk.models.invoice import InvoiceStatus

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "AUD": "A$",
    "CAD": "C$",
    "CHF": "CHF",
    "CNY": "¥",
    "INR": "₹",
    "NZD": "NZ$",
    "SGD": "S$",
    "HKD": "HK$",
    "SEK": "kr",
    "NOK": "kr",
    "MXN": "$",
    "BRL": "R$",
    "ZAR": "R",
}

STATUS_LABELS = {
    InvoiceStatus.PAID: "Paid",
    InvoiceStatus.UNPAID: "Sent",
    InvoiceStatus.OVERDUE: "Overdue",
}

STATUS_STYLES = {
    InvoiceStatus.PAID: "green",
    InvoiceStatus.UNPAID: "yellow",
    InvoiceStatus.OVERDUE: "red",
}


def format_date(value: date | datetime | None) -> str:
    """Format a date as 'Mar 05, 2025'; '-' when missing."""
    if value is None:
        return "-"
    return value.strftime("%b %d, %Y")
