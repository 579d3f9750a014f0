from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from staylimit.api import (
    entries_router,
    health_router,
    rules_router,
    status_router,
)
from staylimit.config import settings
from staylimit.db.database import dispose_db, init_db


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Create tables on startup, release the connection pool on shutdown."""
    await init_db()
    yield
    await dispose_db()


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("staylimit"),
    lifespan=lifespan,
)

app.include_router(entries_router)
app.include_router(health_router)
app.include_router(rules_router)
app.include_router(status_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
