from datetime import date
from typing import List, Optional

from pydantic import BaseModel


class QuoteItemIn(BaseModel):
    description: Optional[str] = None
    quantity: float = 0
    unit_price: float = 0        # MXN
    total: Optional[float] = None  # precomputed line total, wins over quantity × unit_price


class QuoteTaxIn(BaseModel):
    name: Optional[str] = None
    rate: Optional[float] = None   # percent, display only
    amount: float = 0
    is_retention: bool = False     # retentions are subtracted


class QuoteIn(BaseModel):
    """
    Payload for /quotes/totals. event_date is optional and only used for the
    balance due date of the payment plan.
    """
    id: Optional[str] = None
    items: List[QuoteItemIn] = []
    taxes: List[QuoteTaxIn] = []
    currency: str = "MXN"
    exchange_rate: Optional[float] = None
    event_date: Optional[str] = None


class TaxLineOut(BaseModel):
    name: Optional[str] = None
    rate: Optional[float] = None
    amount: float
    is_retention: bool


class PaymentPlanOut(BaseModel):
    retainer_ratio: float
    retainer: float
    balance: float
    balance_due: Optional[date] = None


class QuoteTotalsOut(BaseModel):
    currency: str
    subtotal: float
    tax_net: float
    base_total: float
    effective_rate: float
    converted_amount: Optional[float] = None
    tax_lines: List[TaxLineOut]
    payment_plan: PaymentPlanOut
