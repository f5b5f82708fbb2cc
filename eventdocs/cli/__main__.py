# eventdocs/cli/__main__.py
import sys, json
from pathlib import Path

from eventdocs.core.formatting import format_currency
from eventdocs.server.settings.config import settings
from eventdocs.services.document_codes import codes_by_id, prefix_for_kind
from eventdocs.services.totals import calculate_totals

USAGE = """Usage:
  python -m eventdocs.cli codes <snapshot.json> [--kind=quotes] [--fallback-event=EVENT_ID]
  python -m eventdocs.cli totals <quote.json>

snapshot.json: {"events": [...], "documents": [...]}
kind: quotes | invoices | contracts | questionnaires

Examples:
  python -m eventdocs.cli codes examples/snapshot.json --kind=invoices
  python -m eventdocs.cli totals examples/quote.json
"""


def _load_json(p: str):
    try:
        return json.loads(Path(p).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        print(f"Error reading JSON '{p}': {e}", file=sys.stderr)
        sys.exit(2)


def _cmd_codes(data, options) -> int:
    kind = options.get("kind", "quotes")
    try:
        prefix = prefix_for_kind(kind)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 1

    events = data.get("events") or []
    documents = data.get("documents") or []

    fallback_event = None
    fallback_id = options.get("fallback-event")
    if fallback_id:
        fallback_event = next((e for e in events if str(e.get("id")) == fallback_id), None)
        if fallback_event is None:
            print(f"Fallback event '{fallback_id}' not found in snapshot", file=sys.stderr)
            return 1

    codes = codes_by_id(prefix, documents, events, fallback_event=fallback_event)
    for doc_id, code in codes.items():
        print(f"{doc_id}\t{code}")
    return 0


def _cmd_totals(data, options) -> int:
    totals = calculate_totals(data)
    base = settings.base_currency

    print(f"Subtotal:\t{format_currency(totals.subtotal, base)}")
    for tax in totals.tax_lines:
        label = tax.name or ("Retention" if tax.is_retention else "Tax")
        print(f"{label}:\t{format_currency(tax.amount, base)}")
    print(f"Total:\t{format_currency(totals.base_total, base)}")
    if totals.converted_amount is not None:
        print(f"Total ({totals.currency}):\t{format_currency(totals.converted_amount, totals.currency)}")
    return 0


def main(argv=None):
    argv = list(sys.argv[1:] if argv is None else argv)
    if len(argv) < 2:
        print(USAGE, file=sys.stderr); sys.exit(1)

    cmd = argv[0].lower()
    data_path = argv[1]

    # --key=value, order-agnostic
    options = {}
    for arg in argv[2:]:
        if arg.startswith("--") and "=" in arg:
            key, value = arg[2:].split("=", 1)
            options[key] = value

    if cmd not in ("codes", "totals"):
        print(USAGE, file=sys.stderr); sys.exit(1)

    data = _load_json(data_path)
    if not isinstance(data, dict):
        print(f"Error: '{data_path}' must contain a JSON object", file=sys.stderr)
        sys.exit(2)

    if cmd == "codes":
        code = _cmd_codes(data, options)
    else:
        code = _cmd_totals(data, options)

    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
