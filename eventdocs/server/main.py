import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from eventdocs.server.api import documents, quotes, system
from eventdocs.server.db.session import init_db
from eventdocs.server.settings.config import settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    print("[main] Initializing database...", file=sys.stderr)
    init_db()
    yield
    print("[main] Shutting down...", file=sys.stderr)


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(system.router)
app.include_router(documents.router)   # /events/.../documents, /clients/.../documents, /documents/...
app.include_router(quotes.router)      # /quotes/{id}/totals, /quotes/totals
