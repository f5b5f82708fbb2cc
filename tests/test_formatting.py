from eventdocs.core.formatting import format_currency


def test_known_currencies():
    assert format_currency(1234.5, "MXN") == "MX$1,234.50"
    assert format_currency(1234.5, "USD") == "$1,234.50"
    assert format_currency(-25, "mxn") == "-MX$25.00"


def test_unknown_currency_uses_code():
    assert format_currency(1000, "JPY") == "JPY 1,000.00"


def test_none_is_empty():
    assert format_currency(None, "USD") == ""
