"""Query-string formatting helpers"""

from datetime import date, datetime
from urllib.parse import quote_plus


def format_number(value: float | int) -> str:
    """Shortest decimal form, so 100.0 is sent as 100"""
    if isinstance(value, int):
        return str(value)
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def enum_value(value) -> str:
    """Wire value of an enum member or plain string"""
    return value.value if hasattr(value, "value") else str(value)


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def format_date(value: date | datetime | str) -> str:
    """yyyy-MM-dd as expected by the trades endpoint"""
    if isinstance(value, str):
        return value
    return value.strftime("%Y-%m-%d")


def escape(value: str) -> str:
    return quote_plus(value)
