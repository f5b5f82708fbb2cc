from typing import Optional

from sqlmodel import SQLModel, Field

from eventdocs.server.models.base import new_id


class Client(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    name: str
    email: Optional[str] = None
