from __future__ import annotations

import sys
from dataclasses import dataclass
from datetime import date, tzinfo
from typing import Any, Dict, Iterable, List, Optional, Union

from eventdocs.core.dates import DateStatus
from eventdocs.core.identifiers import DocumentPrefix, describe_document_id
from eventdocs.core.rows import row_get, row_id
from eventdocs.core.sequences import (
    build_doc_sequence_map,
    build_event_sequence_map,
    build_events_map,
)
from eventdocs.server.settings.config import settings
from eventdocs.services.anomalies import log_invalid_date

KIND_PREFIXES: Dict[str, DocumentPrefix] = {
    "quotes": DocumentPrefix.QUOTE,
    "invoices": DocumentPrefix.INVOICE,
    "contracts": DocumentPrefix.CONTRACT,
    "questionnaires": DocumentPrefix.QUESTIONNAIRE,
}


def prefix_for_kind(kind: str) -> DocumentPrefix:
    """
    "quotes" / "quote" → QT, and so on. Unknown kinds raise ValueError.
    """
    key = (kind or "").strip().lower()
    if key in KIND_PREFIXES:
        return KIND_PREFIXES[key]
    if key + "s" in KIND_PREFIXES:
        return KIND_PREFIXES[key + "s"]
    raise ValueError(f"Unknown document kind: {kind!r}")


@dataclass
class DocumentCode:
    id: str
    code: str
    event_sequence: int
    document_sequence: int
    reference_date: Optional[date]
    date_status: Optional[DateStatus]
    used_fallback_event: bool


def derive_document_codes(
    prefix: Union[DocumentPrefix, str],
    documents: Iterable[Any],
    events: Iterable[Any],
    fallback_event: Any = None,
    tz: Optional[tzinfo] = None,
) -> List[DocumentCode]:
    """
    Codes for one kind of document over one snapshot.

    documents must be the complete sibling set (all documents of this kind
    for the event or client in question) and events must hold every event
    on the days involved, otherwise the sequence numbers are off. Results
    are only valid for this snapshot and must not be cached.
    """
    prefix = DocumentPrefix(prefix)
    documents = list(documents)
    events = list(events)
    tz = tz or settings.display_tz()

    events_map = build_events_map(events)
    event_sequences = build_event_sequence_map(events, tz)
    doc_sequences = build_doc_sequence_map(documents, kind=prefix.value)

    out: List[DocumentCode] = []
    for doc in documents:
        resolved = describe_document_id(
            prefix,
            doc,
            events_map=events_map,
            event_sequences=event_sequences,
            doc_sequences=doc_sequences,
            fallback_event=fallback_event,
            tz=tz,
        )

        ref = resolved.reference_date
        if resolved.has_invalid_date:
            print(
                f"[document_codes] Invalid reference date {ref.raw!r} "
                f"for {prefix.value} {row_id(doc)}, rendered as {resolved.code}",
                file=sys.stderr,
            )
            log_invalid_date(
                prefix=prefix.value,
                document_id=row_id(doc),
                event_id=row_get(doc, "event_id"),
                raw_value=ref.raw,
            )

        out.append(
            DocumentCode(
                id=str(row_id(doc)),
                code=resolved.code,
                event_sequence=resolved.event_sequence,
                document_sequence=resolved.document_sequence,
                reference_date=ref.value if ref is not None else None,
                date_status=ref.status if ref is not None else None,
                used_fallback_event=resolved.used_fallback_event,
            )
        )

    return out


def codes_by_id(
    prefix: Union[DocumentPrefix, str],
    documents: Iterable[Any],
    events: Iterable[Any],
    fallback_event: Any = None,
    tz: Optional[tzinfo] = None,
) -> Dict[str, str]:
    return {
        row.id: row.code
        for row in derive_document_codes(prefix, documents, events, fallback_event, tz)
    }
