"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from grocerycombiner.config import get_settings
from grocerycombiner.logging_config import configure_logging, get_logger
from grocerycombiner.routers import grocery_router

settings = get_settings()

# Configure logging on module load
configure_logging(log_level=settings.log_level)
logger = get_logger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info(
        f"Starting Grocery Combiner API (ambiguous merge policy: {settings.ambiguous_merge_policy})"
    )
    yield
    logger.info("Shutting down Grocery Combiner API")


app = FastAPI(
    title="Grocery Combiner API",
    description="Consolidates grocery list entries into shopping-ready lines",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(grocery_router)


@app.get("/health")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok", "service": "grocerycombiner-api"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": "Grocery Combiner API",
        "version": VERSION,
        "docs": "/docs",
        "health": "/health",
    }
