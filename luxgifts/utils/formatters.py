"""
Display formatting for amounts, dates and phone numbers.
"""

import re
from datetime import date, datetime
from typing import Optional, Union

_CURRENCY_SYMBOLS = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}


def _group_indian(digits: str) -> str:
    # 12345678 -> 1,23,45,678
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(amount: Optional[float], currency: str = "INR") -> str:
    """
    Format an amount with its currency symbol and two decimals.

    INR uses lakh/crore digit grouping (₹1,23,456.00); other currencies use
    thousands grouping.
    """
    value = float(amount or 0)
    sign = "-" if value < 0 else ""
    whole, fraction = f"{abs(value):.2f}".split(".")
    code = currency.upper()
    if code == "INR":
        grouped = _group_indian(whole)
    else:
        grouped = f"{int(whole):,}"
    symbol = _CURRENCY_SYMBOLS.get(code, f"{code} ")
    return f"{sign}{symbol}{grouped}.{fraction}"


def format_cents(cents: Optional[int], currency: str = "INR") -> str:
    return format_currency((cents or 0) / 100, currency)


def format_date(value: Union[str, datetime, date, None]) -> str:
    """Format a date as "January 5, 2024". Missing -> "N/A"; unparseable strings pass through."""
    if not value:
        return "N/A"
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return value
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def format_phone(phone: Optional[str]) -> str:
    """Format a 10-digit number as 123-456-7890; anything else is returned as given."""
    if not phone:
        return ""
    cleaned = re.sub(r"\D", "", phone)
    match = re.fullmatch(r"(\d{3})(\d{3})(\d{4})", cleaned)
    if match:
        return "-".join(match.groups())
    return phone
