"""
Human-readable document codes: PREFIX-YYMMDD-EE-DD.

  PREFIX  QT (quote), INV (invoice), CON (contract), QST (questionnaire)
  YYMMDD  calendar date of the event the document belongs to, or UNKNOWN
  EE      the event's position among events on that day
  DD      the document's position among its siblings

Example: the 1st quote of the 2nd event on 2025-06-14 → QT-250614-02-01.

The codes are derived, never stored. See core.sequences for how EE and DD
are assigned.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import tzinfo
from enum import Enum
from typing import Any, Dict, Optional, Union

from eventdocs.core.dates import ParsedDate, parse_date_input
from eventdocs.core.rows import row_get, row_id

UNKNOWN_DATE_TOKEN = "UNKNOWN"
SEQUENCE_WIDTH = 2

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class DocumentPrefix(str, Enum):
    QUOTE = "QT"
    INVOICE = "INV"
    CONTRACT = "CON"
    QUESTIONNAIRE = "QST"


SequenceValue = Union[int, float, str, None]


def pad_sequence(value: SequenceValue, size: int = SEQUENCE_WIDTH) -> str:
    """
    Zero-pad a sequence component.

    - numbers and numeric strings ("7", " 12abc") → integer value, e.g. "07"
    - other strings → the string itself, left-padded with "0"
    - None → treated as omitted, i.e. 1

    Values wider than size are never truncated (100 → "100").
    """
    if value is None:
        value = 1

    if isinstance(value, bool):
        value = int(value)

    if isinstance(value, int):
        return str(value).rjust(size, "0")

    if isinstance(value, float):
        if math.isfinite(value):
            return str(int(value)).rjust(size, "0")
        return str(value).rjust(size, "0")

    text = str(value)
    match = _LEADING_INT.match(text)
    if match:
        return str(int(match.group(1))).rjust(size, "0")
    return text.rjust(size, "0")


def format_date_token(parsed: ParsedDate) -> str:
    if not parsed.ok:
        return UNKNOWN_DATE_TOKEN
    d = parsed.value
    return f"{d.year % 100:02d}{d.month:02d}{d.day:02d}"


def format_document_id(
    prefix: Union[DocumentPrefix, str],
    event_date: Any,
    event_number: SequenceValue = 1,
    document_number: SequenceValue = 1,
    tz: Optional[tzinfo] = None,
) -> str:
    """
    Render PREFIX-YYMMDD-EE-DD.

    An empty event_date gives PREFIX-UNKNOWN-EE-DD. A date that cannot be
    parsed also renders UNKNOWN; use describe_document_id to find out which
    of the two happened.
    """
    token = DocumentPrefix(prefix).value

    if not event_date:
        date_token = UNKNOWN_DATE_TOKEN
    else:
        date_token = format_date_token(parse_date_input(event_date, tz))

    return f"{token}-{date_token}-{pad_sequence(event_number)}-{pad_sequence(document_number)}"


@dataclass(frozen=True)
class ResolvedDocumentId:
    code: str
    reference_date: Optional[ParsedDate]
    event_sequence: int
    document_sequence: int
    used_fallback_event: bool

    @property
    def has_invalid_date(self) -> bool:
        return self.reference_date is not None and self.reference_date.is_invalid


def describe_document_id(
    prefix: Union[DocumentPrefix, str],
    item: Any,
    *,
    events_map: Dict[str, Any],
    event_sequences: Dict[str, int],
    doc_sequences: Dict[str, int],
    fallback_event: Any = None,
    tz: Optional[tzinfo] = None,
) -> ResolvedDocumentId:
    """
    Resolve the code of one document from precomputed structures.

    1) Reference event: the linked event (if known in events_map), else
       fallback_event, else none.
    2) Reference date: the reference event's date, else the document's
       created_at.
    3) Event sequence: the linked event id in event_sequences; for an
       unlinked document, the fallback event's id; 1 on every miss.
    4) Document sequence: doc_sequences[item.id], default 1.

    Missing data never raises, it degrades to the defaults above.
    """
    event_id = row_get(item, "event_id")

    linked_event = events_map.get(str(event_id)) if event_id else None
    reference_event = linked_event or fallback_event or None
    used_fallback = linked_event is None and reference_event is not None

    event_date = row_get(reference_event, "date") if reference_event is not None else None
    reference_date = event_date or row_get(item, "created_at")

    if event_id:
        event_sequence = event_sequences.get(str(event_id)) or 1
    elif reference_event is not None and row_id(reference_event):
        event_sequence = event_sequences.get(str(row_id(reference_event))) or 1
    else:
        event_sequence = 1

    document_sequence = doc_sequences.get(str(row_id(item))) or 1

    parsed = parse_date_input(reference_date, tz) if reference_date else None
    code = format_document_id(prefix, reference_date, event_sequence, document_sequence, tz=tz)

    return ResolvedDocumentId(
        code=code,
        reference_date=parsed,
        event_sequence=event_sequence,
        document_sequence=document_sequence,
        used_fallback_event=used_fallback,
    )


def resolve_document_id(
    prefix: Union[DocumentPrefix, str],
    item: Any,
    *,
    events_map: Dict[str, Any],
    event_sequences: Dict[str, int],
    doc_sequences: Dict[str, int],
    fallback_event: Any = None,
    tz: Optional[tzinfo] = None,
) -> str:
    return describe_document_id(
        prefix,
        item,
        events_map=events_map,
        event_sequences=event_sequences,
        doc_sequences=doc_sequences,
        fallback_event=fallback_event,
        tz=tz,
    ).code
