"""
Quote totals, computed from the quote's own lines and taxes.

No total is stored: subtotal, taxes and the converted amount are derived on
every read. Amounts are in the base currency (MXN unless the caller passes
another); the converted amount is the same total expressed in the quote's
own currency.

Nothing is rounded here. Rounding and formatting belong to the display layer
(see core.formatting).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta, tzinfo
from typing import Any, Callable, Dict, List, Optional

from eventdocs.core.dates import parse_date_input
from eventdocs.core.rows import row_get, to_float
from eventdocs.server.settings.config import settings
from eventdocs.services.currency import get_rate

RateLookup = Callable[[str], Optional[float]]


@dataclass
class TaxLine:
    name: Optional[str]
    rate: Optional[float]
    amount: float  # signed: retentions are negative
    is_retention: bool


@dataclass
class QuoteTotals:
    currency: str
    subtotal: float
    tax_net: float
    base_total: float
    effective_rate: float
    converted_amount: Optional[float]
    tax_lines: List[TaxLine] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Optional[float]]:
        return {
            "base_total": self.base_total,
            "converted_amount": self.converted_amount,
        }


def line_total(item: Any) -> float:
    """
    Precomputed line total when present (0 counts as present),
    else quantity × unit_price.
    """
    total = row_get(item, "total")
    if total is not None:
        return to_float(total)
    return to_float(row_get(item, "quantity")) * to_float(row_get(item, "unit_price"))


def signed_tax_amount(tax: Any) -> float:
    amount = to_float(row_get(tax, "amount"))
    return -amount if row_get(tax, "is_retention") else amount


def calculate_subtotal(items: Optional[List[Any]]) -> float:
    return sum((line_total(item) for item in items or []), 0.0)


def calculate_tax_net(taxes: Optional[List[Any]]) -> float:
    return sum((signed_tax_amount(tax) for tax in taxes or []), 0.0)


def _effective_rate(
    document: Any,
    currency: str,
    base_currency: str,
    rate_lookup: RateLookup,
) -> float:
    """
    1) Base currency → 1.
    2) The rate stored on the document, if set (0 counts as not set).
    3) The rate lookup.
    """
    if currency == base_currency:
        return 1.0

    stored = to_float(row_get(document, "exchange_rate"))
    if stored:
        return stored

    return to_float(rate_lookup(currency))


def calculate_totals(
    document: Any,
    rate_lookup: Optional[RateLookup] = None,
    base_currency: Optional[str] = None,
) -> QuoteTotals:
    """
    Derive totals for a quote-like document.

      subtotal         Σ line totals
      tax_net          Σ taxes, retentions subtracted
      base_total       subtotal + tax_net
      converted_amount base_total / effective_rate, only for a foreign
                       currency with a rate > 0; otherwise None (not 0)

    A document without a currency is read as being in the base currency.
    """
    base = (base_currency or settings.base_currency).upper()
    lookup = rate_lookup or (lambda code: get_rate(code, base_currency=base))
    currency = (row_get(document, "currency") or base).upper()

    items = row_get(document, "items") or []
    taxes = row_get(document, "taxes") or []

    subtotal = calculate_subtotal(items)
    tax_lines = [
        TaxLine(
            name=row_get(tax, "name"),
            rate=row_get(tax, "rate"),
            amount=signed_tax_amount(tax),
            is_retention=bool(row_get(tax, "is_retention")),
        )
        for tax in taxes
    ]
    tax_net = calculate_tax_net(taxes)
    base_total = subtotal + tax_net

    rate = _effective_rate(document, currency, base, lookup)
    converted: Optional[float] = None
    if currency != base and rate > 0:
        converted = base_total / rate

    return QuoteTotals(
        currency=currency,
        subtotal=subtotal,
        tax_net=tax_net,
        base_total=base_total,
        effective_rate=rate,
        converted_amount=converted,
        tax_lines=tax_lines,
    )


# ==============================
# PAYMENT PLAN
# ==============================

@dataclass
class PaymentPlan:
    retainer_ratio: float
    retainer: float
    balance: float
    balance_due: Optional[date]


def build_payment_plan(
    totals: QuoteTotals,
    event_date: Any = None,
    retainer_ratio: Optional[float] = None,
    balance_due_days: Optional[int] = None,
    tz: Optional[tzinfo] = None,
) -> PaymentPlan:
    """
    Split the base total into a retainer paid on booking and a balance due
    a number of days before the event.

    Without a usable event date the balance has no due date (None).
    """
    ratio = settings.retainer_ratio if retainer_ratio is None else retainer_ratio
    days = settings.balance_due_days if balance_due_days is None else balance_due_days

    retainer = totals.base_total * ratio
    balance = totals.base_total - retainer

    balance_due: Optional[date] = None
    if event_date:
        parsed = parse_date_input(event_date, tz)
        if parsed.ok:
            balance_due = parsed.value - timedelta(days=days)

    return PaymentPlan(
        retainer_ratio=ratio,
        retainer=retainer,
        balance=balance,
        balance_due=balance_due,
    )
