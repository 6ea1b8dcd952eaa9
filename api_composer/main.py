"""
API Composer - FastAPI Application Entry Point

A Postman-like HTTP request composer: assemble requests from rows,
environments and authentication, send them, and inspect normalized
responses, with history, environments and saved requests persisted.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .config import LOG_LEVEL, REQUEST_TIMEOUT
from .database import SessionLocal, init_db
from .exceptions import register_exception_handlers
from .logging_config import setup_logging
from .routers import composer, environments, execute, history, requests
from .services.blob_store import SqlBlobStore
from .services.http_executor import HttpxTransport
from .services.workspace_store import WorkspaceStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    setup_logging(LOG_LEVEL)
    # Startup: Initialize database and load the persisted workspace
    init_db()
    app.state.store = WorkspaceStore(SqlBlobStore(SessionLocal))
    app.state.transport = HttpxTransport(timeout=REQUEST_TIMEOUT)
    logger.info("Workspace loaded")
    yield


app = FastAPI(
    title="API Composer",
    description="A Postman-like HTTP request composer and inspector",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# Configure CORS middleware
# Allow all origins for development; restrict in production
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure specific origins in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register global exception handlers
register_exception_handlers(app)


@app.get("/")
async def root():
    """Root endpoint returning API information."""
    return {
        "name": "API Composer",
        "version": "1.0.0",
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Register routers
app.include_router(composer.router)
app.include_router(execute.router)
app.include_router(environments.router)
app.include_router(requests.router)
app.include_router(history.router)
