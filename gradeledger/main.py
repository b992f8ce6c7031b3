# /gradeledger/main.py

# --- Core FastAPI Imports ---
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional, Union

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import sessionmaker

# --- Application-specific Imports ---
from .core import config
from .core.errors import ExportError, NotAuthenticatedError, RemoteStoreError
from .core.logging_config import setup_logging
from .db.base import Base
from .db.database import SessionLocal
from .routers import (
    auth_router,
    students_router,
    records_router,
    export_router,
    sync_router,
    dashboard_router,
)
from .services.workspace_service import WorkspaceRegistry

logger = logging.getLogger(__name__)


def create_app(
    session_factory: Optional[sessionmaker] = None,
    cache_dir: Optional[Union[str, Path]] = None,
) -> FastAPI:
    """
    Builds the API. Tests pass their own session factory (bound to an
    in-memory database) and a temporary cache directory.
    """
    session_factory = session_factory or SessionLocal

    # --- Application Lifecycle Management ---
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging()
        Base.metadata.create_all(bind=session_factory.kw["bind"])
        logger.info("GradeLedger API started")
        yield
        logger.info("GradeLedger API stopped")

    app = FastAPI(
        title="GradeLedger API",
        description="Student records, academic records and GPA reporting.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.session_factory = session_factory
    app.state.workspaces = WorkspaceRegistry()
    app.state.cache_dir = Path(cache_dir or config.LOCAL_CACHE_DIR)

    # --- Middleware Configuration ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Error Translation ---
    @app.exception_handler(RemoteStoreError)
    async def remote_store_error_handler(request: Request, exc: RemoteStoreError):
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": str(exc)})

    @app.exception_handler(ExportError)
    async def export_error_handler(request: Request, exc: ExportError):
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": str(exc)})

    @app.exception_handler(NotAuthenticatedError)
    async def not_authenticated_handler(request: Request, exc: NotAuthenticatedError):
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": str(exc)},
            headers={"WWW-Authenticate": "Bearer"},
        )

    # --- API Router Inclusion ---
    app.include_router(auth_router.router, prefix="/api/auth", tags=["Auth"])
    app.include_router(students_router.router, prefix="/api/students", tags=["Students"])
    app.include_router(records_router.router, prefix="/api/records", tags=["Academic Records"])
    app.include_router(export_router.router, prefix="/api/exports", tags=["Exports"])
    app.include_router(sync_router.router, prefix="/api/sync", tags=["Sync"])
    app.include_router(dashboard_router.router, prefix="/api/dashboard", tags=["Dashboard"])

    # --- Root / Health Check Endpoint ---
    @app.get("/", tags=["Health Check"])
    async def read_root():
        """A simple health check endpoint to confirm the API is online."""
        return {"status": "GradeLedger is running!", "version": app.version}

    return app


app = create_app()
