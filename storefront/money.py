from typing import Callable

MoneyFormatter = Callable[[int], str]


def format_vnd(amount: int) -> str:
    """Render an amount of dong the way vi-VN does: ``49.000 ₫``."""
    sign = "-" if amount < 0 else ""
    grouped = f"{abs(int(amount)):,}".replace(",", ".")
    return f"{sign}{grouped} ₫"
