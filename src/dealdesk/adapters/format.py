# src/dealdesk/adapters/format.py
import math


def format_currency(value: float) -> str:
    """
    USD with no fractional digits: 1234.5 -> "$1,235", -500 -> "-$500".

    Non-finite values render as "$NaN" / "$∞" / "-$∞" so broken metrics stay
    visible instead of being hidden behind a formatting error.
    """
    if math.isnan(value):
        return "$NaN"
    sign = "-" if value < 0 else ""
    if math.isinf(value):
        return f"{sign}$∞"
    # Intl rounds half away from zero; round() is banker's rounding.
    whole = math.floor(abs(value) + 0.5)
    if whole == 0:
        sign = ""
    return f"{sign}${whole:,.0f}"


def format_percent(value: float, digits: int = 1) -> str:
    if not math.isfinite(value):
        return f"{value}%"
    return f"{value:.{digits}f}%"
