# Main application entry point
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware

from .api import auth_router, notes_router, search_router, users_router
from .api.responses import api_response
from .config import get_settings
from .core.blacklist import RedisTokenBlacklist
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .core.redis_client import RedisClient
from .database import create_tables
from .middleware.error_handlers import register_error_handlers

# Setup logging first
setup_logging()
logger = get_logger("main")

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(
        "Starting NoteKeeper application",
        extra={
            "version": settings.app_version,
            "environment": settings.environment,
            "debug": settings.debug,
        },
    )

    # the blacklist is required for every authenticated request
    redis_client = RedisClient()
    client = await redis_client.connect()
    app.state.token_blacklist = RedisTokenBlacklist(client)

    # Allow tests to skip touching the real DB (e.g., when using SQLite in-memory)
    if os.getenv("NOTEKEEPER_SKIP_LIFESPAN_DB") == "1":
        logger.info("Skipping DB table creation due to NOTEKEEPER_SKIP_LIFESPAN_DB=1")
    else:
        try:
            await create_tables()
            logger.info("Database tables created/verified")
        except Exception as e:
            logger.error("Failed to create database tables", exc_info=e)
            raise

    yield

    logger.info("Shutting down NoteKeeper application")
    await redis_client.disconnect()


app = FastAPI(
    title=settings.app_name,
    description="Notes with sharing, search and JWT authentication",
    version=settings.app_version,
    lifespan=lifespan,
)

register_error_handlers(app)

app.add_middleware(LoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(notes_router, prefix="/api")
app.include_router(search_router, prefix="/api")


@app.get("/")
async def root():
    return api_response(status.HTTP_200_OK, "Welcome to Notes API")


@app.get("/api/")
async def api_root():
    return api_response(status.HTTP_200_OK, "Welcome to Notes API")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("notekeeper.main:app", host=settings.host, port=settings.port, reload=settings.reload)
