"""BookPost API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map BookPostError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Logging and database initialized on startup via the lifespan context manager,
      engine disposed on shutdown
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bookpost.api.error_handlers import register_error_handlers
from bookpost.api.request_logging import register_request_logging
from bookpost.api.routes import (
    activities, books, carts, comments, health, posts, rentals, users,
)
from bookpost.config import get_settings
from bookpost.infrastructure.database import close_db, init_db
from bookpost.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format, settings.log_file)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("BookPost API started")
    yield
    await close_db()
    logger.info("BookPost API shut down")


app = FastAPI(
    title="BookPost API",
    description="Book rental store and social posting service",
    version="1.0.0",
    lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_request_logging(app)
register_error_handlers(app)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(books.router)
app.include_router(carts.router)
app.include_router(rentals.router)
app.include_router(posts.router)
app.include_router(comments.router)
app.include_router(activities.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("bookpost.main:app", host="0.0.0.0", port=8080)
