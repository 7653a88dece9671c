"""
ReqBeam - FastAPI Application Entry Point

Stores HTTP request templates with {{variable}} placeholders, resolves
them against environments and executes them.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .database import init_db
from .exceptions import register_exception_handlers
from .logging_config import setup_logging
from .routers import requests, environments, execute, preview, history


logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    setup_logging(settings.log_level)
    init_db()
    logger.info("ReqBeam started with database %s", settings.database_url)
    yield


app = FastAPI(
    title="ReqBeam",
    description="Request templates with environment variables, resolved and executed over HTTP",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/")
async def root():
    """Root endpoint returning API information."""
    return {
        "name": "ReqBeam",
        "version": "1.0.0",
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


app.include_router(requests.router)
app.include_router(environments.router)
app.include_router(execute.router)
app.include_router(preview.router)
app.include_router(history.router)
