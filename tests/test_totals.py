from datetime import date

import pytest

from eventdocs.services.totals import build_payment_plan, calculate_tax_net, calculate_totals, line_total


def _quote(**overrides):
    quote = {
        "items": [
            {"description": "Dinner", "quantity": 2, "unit_price": 100},
            {"description": "Cake", "quantity": 1, "unit_price": 50},
        ],
        "taxes": [{"name": "IVA", "rate": 16, "amount": 25, "is_retention": False}],
        "currency": "MXN",
    }
    quote.update(overrides)
    return quote


def test_tax_is_added():
    assert calculate_totals(_quote()).base_total == 275


def test_retention_is_subtracted():
    quote = _quote(taxes=[{"name": "ISR", "amount": 25, "is_retention": True}])
    totals = calculate_totals(quote)
    assert totals.base_total == 225
    assert totals.tax_lines[0].amount == -25


def test_tax_net_subtracts_retentions():
    taxes = [{"name": "IVA", "amount": 25}, {"name": "ISR", "amount": 10, "is_retention": True}]
    assert calculate_tax_net(taxes) == 15
    assert calculate_tax_net(None) == 0


def test_precomputed_line_total_wins():
    assert line_total({"quantity": 2, "unit_price": 100, "total": 150}) == 150
    assert line_total({"quantity": 2, "unit_price": 100, "total": 0}) == 0
    assert line_total({"quantity": "3", "unit_price": "10"}) == 30


def test_empty_quote():
    totals = calculate_totals({"items": [], "taxes": None, "currency": "MXN"})
    assert totals.subtotal == 0
    assert totals.tax_net == 0
    assert totals.base_total == 0
    assert totals.converted_amount is None


def test_base_currency_is_never_converted():
    totals = calculate_totals(_quote(exchange_rate=17.5))
    assert totals.effective_rate == 1
    assert totals.converted_amount is None


def test_stored_rate_is_used():
    totals = calculate_totals(_quote(currency="USD", exchange_rate=20), rate_lookup=lambda c: 99)
    assert totals.effective_rate == 20
    assert totals.converted_amount == pytest.approx(275 / 20)


def test_lookup_used_without_stored_rate():
    totals = calculate_totals(_quote(currency="usd", exchange_rate=None), rate_lookup=lambda c: 25)
    assert totals.currency == "USD"
    assert totals.converted_amount == pytest.approx(11)


def test_zero_rate_gives_no_converted_amount():
    totals = calculate_totals(_quote(currency="USD"), rate_lookup=lambda c: 0)
    assert totals.converted_amount is None
    assert totals.as_dict() == {"base_total": 275, "converted_amount": None}


def test_negative_rate_gives_no_converted_amount():
    totals = calculate_totals(_quote(currency="EUR", exchange_rate=-3))
    assert totals.converted_amount is None


def test_default_lookup_uses_currency_service():
    totals = calculate_totals(_quote(currency="USD"))
    assert totals.effective_rate == 17.5
    assert totals.converted_amount == pytest.approx(275 / 17.5)


def test_missing_currency_is_base_currency():
    totals = calculate_totals(_quote(currency=None))
    assert totals.currency == "MXN"
    assert totals.converted_amount is None


def test_payment_plan():
    totals = calculate_totals(_quote(items=[{"quantity": 1, "unit_price": 1000}], taxes=[]))
    plan = build_payment_plan(totals, event_date="2025-06-14")
    assert plan.retainer == pytest.approx(350)
    assert plan.balance == pytest.approx(650)
    assert plan.balance_due == date(2025, 6, 4)


def test_payment_plan_without_event_date():
    totals = calculate_totals(_quote())
    plan = build_payment_plan(totals, retainer_ratio=0.5, balance_due_days=3)
    assert plan.retainer == plan.balance == pytest.approx(137.5)
    assert plan.balance_due is None


def test_default_lookup_follows_the_requested_base_currency():
    # 1 USD = 17.50 MXN, so a USD-based view of an MXN quote divides by 1/17.5
    totals = calculate_totals(_quote(currency="MXN"), base_currency="USD")
    assert totals.effective_rate == pytest.approx(1 / 17.50)
    assert totals.converted_amount == pytest.approx(275 * 17.50)

    totals = calculate_totals(_quote(currency="USD"), base_currency="USD")
    assert totals.effective_rate == 1
    assert totals.converted_amount is None
