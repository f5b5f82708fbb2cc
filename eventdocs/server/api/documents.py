from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from eventdocs.server.db.session import get_session
from eventdocs.server.models import Client, Event
from eventdocs.server.repository import (
    fetch_documents,
    fetch_events,
    fetch_siblings,
    get_document,
)
from eventdocs.server.schemas.documents import DocumentCodeOut, DocumentKind, SnapshotIn
from eventdocs.services.document_codes import DocumentCode, derive_document_codes, prefix_for_kind

router = APIRouter(tags=["documents"])


# ==============================
# HELPERS
# ==============================

def _serialize_codes(codes: List[DocumentCode]) -> List[DocumentCodeOut]:
    return [DocumentCodeOut(**asdict(c)) for c in codes]


# ==============================
# FROM THE DATABASE
# ==============================

@router.get(
    "/events/{event_id}/documents/{kind}",
    response_model=List[DocumentCodeOut],
    summary="Codes for all documents of one kind linked to an event",
)
def list_event_document_codes(
    event_id: str,
    kind: DocumentKind,
    session: Session = Depends(get_session),
):
    if not session.get(Event, event_id):
        raise HTTPException(status_code=404, detail="Event not found")

    documents = fetch_documents(session, kind.value, event_id=event_id)
    events = fetch_events(session)
    codes = derive_document_codes(prefix_for_kind(kind.value), documents, events)
    return _serialize_codes(codes)


@router.get(
    "/clients/{client_id}/documents/{kind}",
    response_model=List[DocumentCodeOut],
    summary="Codes for a client's documents that are not linked to any event",
)
def list_client_document_codes(
    client_id: str,
    kind: DocumentKind,
    fallback_event_id: Optional[str] = Query(default=None),
    session: Session = Depends(get_session),
):
    if not session.get(Client, client_id):
        raise HTTPException(status_code=404, detail="Client not found")

    fallback_event = None
    if fallback_event_id:
        fallback_event = session.get(Event, fallback_event_id)
        if not fallback_event:
            raise HTTPException(status_code=404, detail="Fallback event not found")

    documents = fetch_documents(session, kind.value, client_id=client_id)
    events = fetch_events(session)
    codes = derive_document_codes(
        prefix_for_kind(kind.value), documents, events, fallback_event=fallback_event
    )
    return _serialize_codes(codes)


@router.get(
    "/documents/{kind}/{document_id}",
    response_model=DocumentCodeOut,
    summary="Code of a single document",
)
def get_document_code(
    kind: DocumentKind,
    document_id: str,
    session: Session = Depends(get_session),
):
    document = get_document(session, kind.value, document_id)
    if not document:
        raise HTTPException(status_code=404, detail="Document not found")

    # The code depends on the whole sibling set, not just this row
    siblings = fetch_siblings(session, kind.value, document)
    events = fetch_events(session)
    codes = derive_document_codes(prefix_for_kind(kind.value), siblings, events)

    for code in codes:
        if code.id == str(document.id):
            return DocumentCodeOut(**asdict(code))
    raise HTTPException(status_code=500, detail="Document missing from its own sibling set")


# ==============================
# FROM A POSTED SNAPSHOT
# ==============================

@router.post(
    "/documents/codes",
    response_model=List[DocumentCodeOut],
    summary="Derive codes for a snapshot sent by the caller",
)
def derive_snapshot_codes(payload: SnapshotIn):
    fallback_event = None
    if payload.fallback_event_id:
        fallback_event = next(
            (e for e in payload.events if e.id == payload.fallback_event_id), None
        )
        if fallback_event is None:
            raise HTTPException(
                status_code=400,
                detail="fallback_event_id must refer to one of the posted events",
            )

    codes = derive_document_codes(
        prefix_for_kind(payload.kind.value),
        payload.documents,
        payload.events,
        fallback_event=fallback_event,
    )
    return _serialize_codes(codes)
