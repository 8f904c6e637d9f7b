"""
FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from myguard import __version__
from myguard.api.routes import router
from myguard.config import get_settings
from myguard.exceptions import CollaboratorError, EmptyInputError, ModelNotConfiguredError
from myguard.services.analysis_service import ContractAnalyzer

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    logger.info("application_starting")

    settings = get_settings()
    app.state.analyzer = ContractAnalyzer.from_settings(settings)
    logger.info(
        "configuration_loaded",
        environment=settings.environment,
        debug=settings.debug,
        dataset_size=app.state.analyzer.dataset_size(),
    )

    yield

    # Shutdown
    logger.info("application_shutting_down")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="MyGuard API",
        description="Contract clause fairness classification",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(EmptyInputError)
    async def empty_input_handler(request: Request, exc: EmptyInputError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(CollaboratorError)
    async def collaborator_handler(request: Request, exc: CollaboratorError) -> JSONResponse:
        logger.error("collaborator_failed", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=502, content={"error": str(exc)})

    @app.exception_handler(ModelNotConfiguredError)
    async def model_not_configured_handler(
        request: Request, exc: ModelNotConfiguredError
    ) -> JSONResponse:
        return JSONResponse(status_code=503, content={"error": str(exc)})

    app.include_router(router, prefix="/api")

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {"status": "healthy", "service": "myguard-api"}

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    return app


app = create_app()
