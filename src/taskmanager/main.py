"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskmanager import __version__
from taskmanager.api.routes import auth, tasks
from taskmanager.config import get_settings
from taskmanager.core.logging import setup_logging
from taskmanager.database import init_db
from taskmanager.schemas.common import APIResponse
from taskmanager.telemetry import TelemetryManager

# Get settings
settings = get_settings()

# Configure logging
setup_logging(settings)
logger = logging.getLogger(__name__)

# Initialize telemetry
telemetry_manager = TelemetryManager(settings)
telemetry_manager.setup()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting Task Manager application")

    init_db(settings)
    logger.info("Database initialized")

    yield

    telemetry_manager.shutdown()
    logger.info("Shutting down Task Manager application")


app = FastAPI(
    title=settings.app_name,
    description="Authentication and per-user task management",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Instrument FastAPI with OpenTelemetry
if settings.otel_enabled:
    FastAPIInstrumentor.instrument_app(app)
    logger.info("FastAPI instrumented with OpenTelemetry")

# Include routers
app.include_router(auth.router, prefix=settings.api_prefix)
app.include_router(tasks.router, prefix=settings.api_prefix)


def _envelope(message: str, status_code: int, headers: dict[str, str] | None = None) -> JSONResponse:
    """Wrap an error message in the API response envelope."""
    body = APIResponse.error(message, status_code).model_dump(mode="json", by_alias=True)
    return JSONResponse(status_code=status_code, content=body, headers=headers)


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": f"{settings.app_name} API", "version": __version__}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors inside the response envelope."""
    return _envelope(str(exc.detail), exc.status_code, getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report request validation failures as 400."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"] if part != "body")
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    logger.info(f"Rejected request to {request.url.path}: {'; '.join(messages)}")
    return _envelope("; ".join(messages), status.HTTP_400_BAD_REQUEST)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return _envelope("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "taskmanager.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )
