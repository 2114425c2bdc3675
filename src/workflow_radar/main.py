"""
FastAPI application entry point.
"""

import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from workflow_radar import __version__
from workflow_radar.api.deps import container
from workflow_radar.api.v1 import analysis, health, interpret, models, suggestions
from workflow_radar.core.config import settings
from workflow_radar.core.constants import API_PREFIX, REQUEST_ID_HEADER
from workflow_radar.core.exceptions import WorkflowRadarError
from workflow_radar.core.logging import bind_context, clear_context, get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info(
        "Starting Workflow Radar",
        app_name=settings.app_name,
        env=settings.app_env,
    )

    container.initialize()

    yield

    logger.info("Shutting down Workflow Radar")
    await container.close()


app = FastAPI(
    title="Workflow Radar API",
    description="Correlates issue tracker and code host activity into workflows and synthesizes prioritized insights",
    version=__version__,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    openapi_url="/openapi.json" if settings.debug else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.security.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Tag every log line of a request with its request id."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:16]
    clear_context()
    bind_context(request_id=request_id, path=request.url.path)
    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


# Exception handlers
@app.exception_handler(WorkflowRadarError)
async def workflow_radar_error_handler(
    request: Request,
    exc: WorkflowRadarError,
) -> JSONResponse:
    """Handle application errors."""
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "Application error",
        error_code=exc.code,
        error_message=exc.message,
        retryable=exc.retryable,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Report malformed request bodies with the standard error envelope."""
    errors = [
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    ]
    logger.warning("Invalid request body", path=request.url.path, errors=errors)
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request body",
            "code": "INVALID_REQUEST",
            "details": {"errors": errors},
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle unexpected errors."""
    logger.exception(
        "Unexpected error",
        error=str(exc),
        path=request.url.path,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
            "details": {},
        },
    )


# Include routers
app.include_router(health.router, prefix=API_PREFIX, tags=["Health"])
app.include_router(analysis.router, prefix=API_PREFIX, tags=["Analysis"])
app.include_router(interpret.router, prefix=API_PREFIX, tags=["Interpretation"])
app.include_router(suggestions.router, prefix=API_PREFIX, tags=["Suggestions"])
app.include_router(models.router, prefix=API_PREFIX, tags=["Models"])


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": __version__,
        "docs": "/docs" if settings.debug else "Disabled in production",
        "endpoints": {
            "health": f"{API_PREFIX}/health",
            "analyze": f"{API_PREFIX}/ai/analyze",
            "interpret": f"{API_PREFIX}/ai/interpret",
            "suggestions": f"{API_PREFIX}/suggestions",
            "models": f"{API_PREFIX}/models",
        },
    }


def run() -> None:
    """Console entry point."""
    import uvicorn

    uvicorn.run(
        "workflow_radar.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    run()
