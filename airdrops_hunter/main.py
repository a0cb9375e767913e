"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from airdrops_hunter.api import airdrops, blog_posts, contact, newsletter, users
from airdrops_hunter.api.dependencies import get_memory_storage
from airdrops_hunter.api.errors import validation_exception_handler
from airdrops_hunter.config import get_settings
from airdrops_hunter.database import SessionLocal, init_db
from airdrops_hunter.services.db_storage import DatabaseStorage
from airdrops_hunter.services.seed import seed_storage

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logging.basicConfig(level=settings.log_level)

    # Startup: prepare the store and make sure the admin account exists
    if settings.storage_backend == "database":
        init_db()
        db = SessionLocal()
        try:
            seed_storage(DatabaseStorage(db), settings)
        finally:
            db.close()
    else:
        seed_storage(get_memory_storage(), settings)
    logger.info(f"Started with {settings.storage_backend} storage ({settings.environment})")
    yield


app = FastAPI(
    title="Airdrops Hunter API",
    description="Catalog of crypto airdrops and blog articles with admin content management",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_exception_handler(RequestValidationError, validation_exception_handler)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://localhost:5173",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Register routers
app.include_router(users.router)
app.include_router(airdrops.router)
app.include_router(blog_posts.router)
app.include_router(newsletter.router)
app.include_router(contact.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
