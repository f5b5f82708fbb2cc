import sys

from sqlmodel import SQLModel, create_engine, Session

from eventdocs.server.settings.config import settings

connect_args = {}
if settings.database_url.startswith("sqlite"):
    connect_args = {"check_same_thread": False}

engine = create_engine(settings.database_url, echo=settings.debug, connect_args=connect_args)


def init_db() -> None:
    # Make sure the models are registered on SQLModel.metadata
    from eventdocs.server.models import __all_models  # noqa: F401
    print(f"[db] Creating tables on {engine.url}", file=sys.stderr)
    SQLModel.metadata.create_all(engine)


def get_session():
    with Session(engine) as session:
        yield session
