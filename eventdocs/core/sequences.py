"""
Sequence numbers for events and documents, recomputed on every read.

Nothing here is stored. A sequence number is the 1-based position of a row
among its siblings ordered by created_at, so inserting or deleting a sibling
renumbers the rest. Python's sort is stable: rows with equal created_at keep
their input order.
"""

from __future__ import annotations

from datetime import tzinfo
from typing import Any, Callable, Dict, Iterable, List, NamedTuple, Optional

from eventdocs.core.dates import calendar_key, timestamp_sort_key
from eventdocs.core.rows import row_get, row_id


class GroupingKey(NamedTuple):
    """
    Scope of a document sequence: one document kind within one event,
    or within one client when no event is linked.
    """
    kind: Optional[str]
    scope: str  # "event" | "client" | "unassigned"
    ref: Optional[str]


def grouping_key(item: Any, kind: Optional[str] = None) -> GroupingKey:
    event_id = row_get(item, "event_id")
    if event_id:
        return GroupingKey(kind, "event", str(event_id))
    client_id = row_get(item, "client_id")
    if client_id:
        return GroupingKey(kind, "client", str(client_id))
    return GroupingKey(kind, "unassigned", None)


def _by_created_at(row: Any) -> tuple:
    return timestamp_sort_key(row_get(row, "created_at"))


def _assign_positions(groups: Dict[Any, List[Any]]) -> Dict[str, int]:
    sequence_map: Dict[str, int] = {}
    for rows in groups.values():
        for index, row in enumerate(sorted(rows, key=_by_created_at), start=1):
            sequence_map[str(row_id(row))] = index
    return sequence_map


def build_events_map(events: Iterable[Any]) -> Dict[str, Any]:
    """
    event id → event. Duplicate ids: the last one wins.
    """
    return {str(row_id(event)): event for event in events}


def build_event_sequence_map(
    events: Iterable[Any],
    tz: Optional[tzinfo] = None,
) -> Dict[str, int]:
    """
    event id → position among all events on the same calendar day,
    ordered by created_at.

    Events without a date (or with a date that cannot be parsed) get no
    entry; readers fall back to 1.
    """
    grouped: Dict[str, List[Any]] = {}
    for event in events:
        key = calendar_key(row_get(event, "date"), tz)
        if key is None:
            continue
        grouped.setdefault(key, []).append(event)

    return _assign_positions(grouped)


def build_doc_sequence_map(
    items: Iterable[Any],
    kind: Optional[str] = None,
    key: Optional[Callable[[Any], Any]] = None,
) -> Dict[str, int]:
    """
    document id → position among sibling documents of the same grouping key,
    ordered by created_at.

    The default key is GroupingKey(kind, "event", event_id) for linked
    documents and GroupingKey(kind, "client", client_id) otherwise, so
    event-less documents of different clients never share a sequence.
    """
    key_fn = key or (lambda item: grouping_key(item, kind))

    grouped: Dict[Any, List[Any]] = {}
    for item in items:
        grouped.setdefault(key_fn(item), []).append(item)

    return _assign_positions(grouped)
