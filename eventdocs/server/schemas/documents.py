from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class DocumentKind(str, Enum):
    quotes = "quotes"
    invoices = "invoices"
    contracts = "contracts"
    questionnaires = "questionnaires"


class EventIn(BaseModel):
    """
    An event row as the data store returns it. date and created_at are kept
    as raw strings; parsing them is the code derivation's job.
    """
    id: str
    name: Optional[str] = None
    date: Optional[str] = None
    created_at: Optional[str] = None


class DocumentIn(BaseModel):
    id: str
    event_id: Optional[str] = None
    client_id: Optional[str] = None
    created_at: Optional[str] = None


class SnapshotIn(BaseModel):
    """
    Payload for /documents/codes: one kind of document plus every event
    needed for the event sequence numbers.
    """
    kind: DocumentKind
    documents: List[DocumentIn]
    events: List[EventIn] = []
    fallback_event_id: Optional[str] = None


class DocumentCodeOut(BaseModel):
    id: str
    code: str
    event_sequence: int
    document_sequence: int
    reference_date: Optional[date] = None
    date_status: Optional[str] = None   # ok | empty | invalid
    used_fallback_event: bool = False
