from __future__ import annotations

import json
import sys
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

from eventdocs.server.settings.config import settings
from eventdocs.services.anomalies import log_missing_rate

# Units of MXN per one unit of each currency.
# 1 USD = 17.50 MXN
DEFAULT_RATES: Dict[str, float] = {
    "MXN": 1.0,
    "USD": 17.50,
    "GBP": 22.10,
    "EUR": 18.90,
    "CAD": 12.80,
}


def _load_rates_file(path: Path) -> Dict[str, float]:
    """
    Read {"USD": 17.9, ...} from a JSON file. Rows that are not numbers
    are skipped.
    """
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f) or {}
    except (OSError, ValueError) as e:
        print(f"[currency] Could not read exchange rates {path}: {e}", file=sys.stderr)
        return {}

    if not isinstance(data, dict):
        print(f"[currency] Exchange rates {path} must be a JSON object", file=sys.stderr)
        return {}

    result: Dict[str, float] = {}
    for code, raw in data.items():
        if code is None:
            continue
        try:
            result[str(code).strip().upper()] = float(raw)
        except (TypeError, ValueError):
            continue
    return result


@lru_cache(maxsize=1)
def _load_rates() -> Dict[str, float]:
    """
    Built-in rates, overridden/extended by EXCHANGE_RATES_PATH when set.
    """
    rates = dict(DEFAULT_RATES)
    if not settings.exchange_rates_path:
        return rates

    path = Path(settings.exchange_rates_path)
    if not path.exists():
        print(f"[currency] Exchange rate file not found: {path}", file=sys.stderr)
        return rates

    overrides = _load_rates_file(path)
    rates.update(overrides)
    print(f"[currency] Loaded {len(overrides)} exchange rates from {path.name}", file=sys.stderr)
    return rates


def reload_rates() -> None:
    _load_rates.cache_clear()


def _known_rate(rates: Dict[str, float], code: str) -> float:
    rate = rates.get(code)
    if rate is None:
        print(f"[currency] No exchange rate for {code}", file=sys.stderr)
        log_missing_rate(currency=code)
        return 0.0
    return rate


def get_rate(currency: Optional[str], base_currency: Optional[str] = None) -> float:
    """
    Units of base_currency (default: the configured base currency) per one
    unit of currency. The rate table is quoted in MXN; other bases are
    crossed through it.
    Unknown currencies give 0.0, which callers read as "no conversion".
    """
    base = (base_currency or settings.base_currency).strip().upper()
    code = (currency or base).strip().upper()
    if code == base:
        return 1.0

    rates = _load_rates()
    code_rate = _known_rate(rates, code)
    base_rate = _known_rate(rates, base)
    if code_rate <= 0 or base_rate <= 0:
        return 0.0
    return code_rate / base_rate


def get_exchange_rate(from_currency: str, to_currency: str) -> float:
    """
    How many units of to_currency one unit of from_currency buys,
    crossed through the rate table. 0.0 when either rate is unknown.
    """
    if (from_currency or "").upper() == (to_currency or "").upper():
        return 1.0
    return get_rate(from_currency, base_currency=to_currency)


def convert_from_base(amount: float, currency: str) -> Optional[float]:
    rate = get_rate(currency)
    if rate <= 0:
        return None
    return amount / rate
