from datetime import date, datetime
from typing import Optional, Union


def format_show_date(value: Optional[Union[str, date]]) -> str:
    """'2025-03-07' -> '07/03/2025'; '--/--' when missing or unparseable."""
    if not value:
        return "--/--"
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip()).date()
        except ValueError:
            return "--/--"
    return value.strftime("%d/%m/%Y")


def format_show_time(value: Optional[str]) -> str:
    """'10:00:00' -> '10:00'."""
    if not value or not isinstance(value, str):
        return "--:--"
    return value.strip()[:5]


def format_vnd(amount: int) -> str:
    """150000 -> '150.000đ'."""
    return f"{amount:,}".replace(",", ".") + "đ"
