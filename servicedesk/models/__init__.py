from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation

from pydantic import ValidationInfo

FALLBACK_CURRENCY = "USD"


def to_decimal(value: object) -> Decimal | None:
    """Coerce a loose JSON number/string into a finite Decimal.

    Returns None for missing, boolean, non-numeric, NaN or infinite input.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        text = str(value).strip()
        if not text:
            return None
        try:
            result = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None
    if not result.is_finite():
        return None
    return result


def format_money(amount: Decimal | int | float, currency: str = FALLBACK_CURRENCY) -> str:
    """Format an amount with its currency symbol: Decimal('1234.5') -> '$1,234.50'"""
    from servicedesk.constants import CURRENCY_SYMBOLS

    code = (currency or FALLBACK_CURRENCY).upper()
    symbol = CURRENCY_SYMBOLS.get(code, f"{code} ")
    value = Decimal(str(amount))
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def to_datetime(value: object) -> datetime | None:
    """Coerce an ISO date/datetime (string or object) into an aware datetime.

    Naive values are taken as UTC. Returns None when the value can't be read.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        result = value
    elif isinstance(value, date):
        result = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            result = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if result.tzinfo is None:
        result = result.replace(tzinfo=timezone.utc)
    return result


def to_text(value: object) -> str:
    """Coerce a loose JSON scalar into text; populated references yield their id."""
    if value is None:
        return ""
    if isinstance(value, dict):
        return to_text(value.get("_id") or value.get("id"))
    return str(value)


def to_currency(value: object, info: ValidationInfo | None = None) -> str:
    """Upper-cased currency code; a missing code falls back to the
    ``default_currency`` passed in the validation context."""
    code = to_text(value).strip().upper()
    if code:
        return code
    if info is not None and info.context:
        return (info.context.get("default_currency") or FALLBACK_CURRENCY).upper()
    return FALLBACK_CURRENCY
