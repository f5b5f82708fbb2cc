import json

import pytest

from eventdocs.server.settings.config import settings
from eventdocs.services import currency
from eventdocs.services.currency import convert_from_base, get_exchange_rate, get_rate, reload_rates


def test_base_currency_rate_is_one():
    assert get_rate("MXN") == 1.0
    assert get_rate(None) == 1.0


def test_built_in_rates():
    assert get_rate("usd") == 17.50
    assert get_rate("EUR") == 18.90


def test_unknown_currency_is_zero_and_logged(anomaly_log_dir):
    assert get_rate("JPY") == 0.0
    lines = (anomaly_log_dir / "missing_exchange_rates.jsonl").read_text(encoding="utf-8").splitlines()
    event = json.loads(lines[-1])
    assert event["type"] == "missing_exchange_rate"
    assert event["currency"] == "JPY"


def test_rates_file_overrides_and_extends(tmp_path, monkeypatch):
    path = tmp_path / "exchange_rates.json"
    path.write_text(json.dumps({"usd": 18.25, "JPY": "0.12", "BAD": "n/a"}), encoding="utf-8")
    monkeypatch.setattr(settings, "exchange_rates_path", str(path))
    reload_rates()

    assert get_rate("USD") == 18.25
    assert get_rate("JPY") == 0.12
    assert get_rate("GBP") == 22.10
    assert "BAD" not in currency._load_rates()


def test_unreadable_rates_file_keeps_defaults(tmp_path, monkeypatch):
    path = tmp_path / "exchange_rates.json"
    path.write_text("{not json", encoding="utf-8")
    monkeypatch.setattr(settings, "exchange_rates_path", str(path))
    reload_rates()

    assert get_rate("USD") == 17.50


def test_cross_rate_goes_through_base_currency():
    assert get_exchange_rate("USD", "USD") == 1.0
    assert get_exchange_rate("USD", "EUR") == pytest.approx(17.50 / 18.90)
    assert get_exchange_rate("USD", "XYZ") == 0.0


def test_convert_from_base():
    assert convert_from_base(175.0, "USD") == pytest.approx(10.0)
    assert convert_from_base(175.0, "XYZ") is None


def test_rate_against_another_base_currency():
    assert get_rate("USD", base_currency="USD") == 1.0
    assert get_rate("MXN", base_currency="usd") == pytest.approx(1 / 17.50)
    assert get_rate("EUR", base_currency="USD") == pytest.approx(18.90 / 17.50)
    assert get_rate("EUR", base_currency="XYZ") == 0.0
