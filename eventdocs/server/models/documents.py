from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import Column, JSON
from sqlmodel import SQLModel, Field

from eventdocs.server.models.base import new_id, utcnow


class Quote(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    client_id: Optional[str] = Field(default=None, foreign_key="client.id", index=True)
    event_id: Optional[str] = Field(default=None, foreign_key="event.id", index=True)
    # [{"description", "quantity", "unit_price", "total"}], amounts in MXN
    items: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
    # [{"name", "rate", "amount", "is_retention"}]
    taxes: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
    currency: str = "MXN"
    exchange_rate: Optional[float] = None  # MXN per 1 unit of currency, at creation
    status: str = "draft"  # draft | sent | accepted | rejected
    created_at: datetime = Field(default_factory=utcnow)


class Invoice(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    client_id: Optional[str] = Field(default=None, foreign_key="client.id", index=True)
    event_id: Optional[str] = Field(default=None, foreign_key="event.id", index=True)
    status: str = "draft"  # draft | sent | paid | overdue | cancelled
    due_date: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)


class Contract(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    client_id: Optional[str] = Field(default=None, foreign_key="client.id", index=True)
    event_id: Optional[str] = Field(default=None, foreign_key="event.id", index=True)
    status: str = "draft"  # draft | sent | signed
    created_at: datetime = Field(default_factory=utcnow)


class Questionnaire(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    client_id: Optional[str] = Field(default=None, foreign_key="client.id", index=True)
    event_id: Optional[str] = Field(default=None, foreign_key="event.id", index=True)
    title: str = ""
    status: str = "pending"  # pending | completed
    created_at: datetime = Field(default_factory=utcnow)
