from __future__ import annotations

from typing import Optional

# en-US currency symbols, as the document screens show them
CURRENCY_SYMBOLS = {
    "USD": "$",
    "MXN": "MX$",
    "CAD": "CA$",
    "EUR": "€",
    "GBP": "£",
}


def format_currency(value: Optional[float], currency: str = "MXN") -> str:
    """
    Format an amount for display: 1234.5 -> 'MX$1,234.50'.
    None gives an empty string (e.g. a converted amount that does not apply).
    Unknown currencies are shown with their code: 'JPY 1,234.50'.
    """
    if value is None:
        return ""
    try:
        num = float(value)
    except (TypeError, ValueError):
        return str(value)

    code = (currency or "").upper()
    sign = "-" if num < 0 else ""
    digits = f"{abs(num):,.2f}"

    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol:
        return f"{sign}{symbol}{digits}"
    return f"{sign}{code} {digits}".strip()
