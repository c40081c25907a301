from __future__ import annotations
import math

from params import Params


def format_currency(amount: float, symbol: str = Params.currency_symbol) -> str:
    """Whole currency units with thousands separators, e.g. £12,346."""
    if not math.isfinite(amount):
        return "N/A"
    # Half rounds up, so -2.5 -> -2 and 2.5 -> 3; sign follows the symbol
    rounded = int(math.floor(amount + 0.5))
    return f"{symbol}{rounded:,}"


def format_percent(value: float, decimals: int = Params.percent_decimals) -> str:
    if not math.isfinite(value):
        return "N/A"
    return f"{value:.{decimals}f}%"
