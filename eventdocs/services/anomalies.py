from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from eventdocs.server.settings.config import settings

# Project root, e.g. /srv/eventdocs
ROOT = Path(__file__).resolve().parents[2]

LOG_DIR = Path(settings.log_dir) if settings.log_dir else ROOT / "knowledge" / "logs"
INVALID_DATES_LOG = "invalid_dates.jsonl"
MISSING_RATES_LOG = "missing_exchange_rates.jsonl"


def _ensure_log_dir() -> bool:
    """
    Make sure the log directory exists.
    """
    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        return True
    except OSError as e:
        print(f"[anomalies] Could not create log directory {LOG_DIR}: {e}", file=sys.stderr)
        return False


def append_json_line(filename: str, payload: Dict[str, Any]) -> None:
    """
    Append one JSON event to a log file (JSON Lines).
    One line per event, so the files are easy to grep and load afterwards.
    """
    if not _ensure_log_dir():
        return
    path = LOG_DIR / filename
    try:
        with path.open("a", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, default=str)
            f.write("\n")
    except OSError as e:
        print(f"[anomalies] Could not write to log {path}: {e}", file=sys.stderr)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def log_invalid_date(
    *,
    prefix: str,
    document_id: Optional[str],
    event_id: Optional[str],
    raw_value: Any,
) -> None:
    """
    A document code was rendered with UNKNOWN because its reference date
    could not be parsed (as opposed to simply being empty).
    """
    append_json_line(
        INVALID_DATES_LOG,
        {
            "ts": _now(),
            "type": "invalid_date",
            "prefix": prefix,
            "document_id": document_id,
            "event_id": event_id,
            "raw_value": raw_value,
        },
    )


def log_missing_rate(*, currency: str) -> None:
    """
    No exchange rate known for a currency; converted amounts are left out.
    """
    append_json_line(
        MISSING_RATES_LOG,
        {
            "ts": _now(),
            "type": "missing_exchange_rate",
            "currency": currency,
        },
    )
