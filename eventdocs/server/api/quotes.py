from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from eventdocs.server.db.session import get_session
from eventdocs.server.models import Event, Quote
from eventdocs.server.schemas.quote import QuoteIn, QuoteTotalsOut
from eventdocs.server.settings.config import settings
from eventdocs.services.totals import build_payment_plan, calculate_totals

router = APIRouter(prefix="/quotes", tags=["quotes"])


def _totals_out(document: Any, event_date: Any) -> QuoteTotalsOut:
    totals = calculate_totals(document)
    plan = build_payment_plan(totals, event_date=event_date, tz=settings.display_tz())

    data = asdict(totals)
    data["payment_plan"] = asdict(plan)
    return QuoteTotalsOut(**data)


@router.get("/{quote_id}/totals", response_model=QuoteTotalsOut, summary="Totals of a stored quote")
def get_quote_totals(quote_id: str, session: Session = Depends(get_session)):
    quote = session.get(Quote, quote_id)
    if not quote:
        raise HTTPException(status_code=404, detail="Quote not found")

    event = session.get(Event, quote.event_id) if quote.event_id else None
    return _totals_out(quote, event.date if event else None)


@router.post("/totals", response_model=QuoteTotalsOut, summary="Totals of a posted quote")
def post_quote_totals(payload: QuoteIn):
    return _totals_out(payload, payload.event_date)
