"""Display formatting for man-yen amounts, rates and year differences."""

import math
from typing import Optional

from calc.rounding import round_half_up


def format_money(value: float) -> str:
    """Format a man-yen amount; 10,000 man-yen and above is shown in oku-yen."""
    if math.isinf(value):
        return "∞"
    if value >= 10000:
        return f"{value / 10000:.1f}億円"
    return f"{round_half_up(value):,}万円"


def format_yen(value: int) -> str:
    return f"{value:,}円"


def format_percent(value: float) -> str:
    """Format a fractional rate such as 0.04 as '4.0%'."""
    return f"{value * 100:.1f}%"


def format_year_diff(diff: Optional[int]) -> str:
    if diff is None:
        return "ー"
    if diff == 0:
        return "変化なし"
    if diff < 0:
        return f"{abs(diff)}年短縮"
    return f"{diff}年延長"


def format_years(years: Optional[int]) -> str:
    return "未達成" if years is None else f"{years}年"


def format_monthly(value: float) -> str:
    """Monthly man-yen amount with one decimal, e.g. '22.5万円'."""
    return f"{value:.1f}万円"
