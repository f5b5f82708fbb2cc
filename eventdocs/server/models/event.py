from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field

from eventdocs.server.models.base import new_id, utcnow


class Event(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    name: str = ""
    # "YYYY-MM-DD" or a full timestamp, as entered
    date: Optional[str] = Field(default=None, index=True)
    client_id: Optional[str] = Field(default=None, foreign_key="client.id", index=True)
    status: str = "inquiry"  # inquiry | confirmed | completed | cancelled
    created_at: datetime = Field(default_factory=utcnow)
