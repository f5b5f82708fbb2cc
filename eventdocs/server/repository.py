from typing import List, Optional, Type

from sqlmodel import Session, SQLModel, select

from eventdocs.server.models import DOCUMENT_MODELS, Event


# ==============================
# READ-ONLY ACCESS TO RAW ROWS
# ==============================

def document_model(kind: str) -> Type[SQLModel]:
    model = DOCUMENT_MODELS.get(kind)
    if model is None:
        raise ValueError(f"Unknown document kind: {kind!r}")
    return model


def fetch_events(session: Session) -> List[Event]:
    """
    All events. Event sequence numbers need every event of a day, so we
    never hand out a partial list here.
    """
    return list(session.exec(select(Event)).all())


def fetch_documents(
    session: Session,
    kind: str,
    *,
    event_id: Optional[str] = None,
    client_id: Optional[str] = None,
) -> List[SQLModel]:
    """
    Sibling rows of one kind:
      - event_id given  → all documents linked to that event
      - client_id given → the client's documents that have no event
      - neither         → every document of the kind
    """
    model = document_model(kind)
    stmt = select(model)
    if event_id:
        stmt = stmt.where(model.event_id == event_id)
    elif client_id:
        stmt = stmt.where(model.client_id == client_id).where(model.event_id.is_(None))
    return list(session.exec(stmt).all())


def get_document(session: Session, kind: str, document_id: str) -> Optional[SQLModel]:
    return session.get(document_model(kind), document_id)


def fetch_siblings(session: Session, kind: str, document: SQLModel) -> List[SQLModel]:
    """
    The sibling set a document is numbered in: same event, or same client
    when the document has no event.
    """
    if document.event_id:
        return fetch_documents(session, kind, event_id=document.event_id)
    if document.client_id:
        return fetch_documents(session, kind, client_id=document.client_id)
    model = document_model(kind)
    stmt = select(model).where(model.event_id.is_(None)).where(model.client_id.is_(None))
    return list(session.exec(stmt).all())
