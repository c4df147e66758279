from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from starlette.middleware.cors import CORSMiddleware

from api.v1.router import api_router
from config import settings
from services.db import Database
from services.memory_store import InMemoryStore
from services.store import NutritionStore

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
_LOG = logging.getLogger(__name__)


def create_app(
    database: Database | None = None,
    store: NutritionStore | None = None,
) -> FastAPI:
    """
    Build the API around an explicit persistence handle.

    * ``database`` given → one ``SqlStore`` session per request
    * otherwise         → ``store`` (default: a fresh ``InMemoryStore``)
    """
    if database is None and store is None and settings.database_url:
        database = Database(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if database is not None:
            await database.dispose()

    app = FastAPI(title="Macro Tracker API", version="1.0.0", lifespan=lifespan)
    app.state.db = database
    app.state.store = store if store is not None else InMemoryStore()
    if database is None:
        _LOG.warning("no database configured – using the in-memory store (data is not persisted)")
    else:
        _LOG.info("using database store")

    # CORS (public demo only – lock down in prod)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api/v1")

    @app.get("/", response_class=PlainTextResponse, tags=["meta"])
    def root() -> str:
        return "NUTRITION TRACKER API IS RUNNING"

    @app.get("/health", tags=["meta"])
    def health() -> dict[str, str]:
        return {"status": "ok", "env": settings.env_name}

    return app


app = create_app()
