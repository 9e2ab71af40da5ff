"""FastAPI application for the plann.er API."""

import asyncio
from contextlib import asynccontextmanager

import fastapi
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import get_settings
from core.database import (
    create_engine,
    create_session_maker,
    dispose_engine,
    init_db,
)
from core.logger import configure_logging, get_logger
from core.middleware import (
    AccessLogMiddleware,
    RecoveryMiddleware,
    RequestIdMiddleware,
)
from routes import health_router, participants_router, trips_router

configure_logging()
logger = get_logger(__name__)


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render every HTTP error as ``{"message": ...}``."""
    if not isinstance(exc, StarletteHTTPException):
        return JSONResponse(status_code=500, content={"message": "internal server error"})

    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Handler for request validation errors.

    Undecodable bodies get "invalid JSON"; anything that decodes but breaks
    the request schema gets "invalid input". Both are 400s.
    """
    if not isinstance(exc, RequestValidationError):
        return JSONResponse(status_code=500, content={"message": "internal server error"})

    errors = exc.errors()
    is_json_error = any(error.get("type") == "json_invalid" for error in errors)

    logger.warning(
        "request.validation_error",
        path=request.url.path,
        method=request.method,
        error_count=len(errors),
        json_invalid=is_json_error,
    )
    return JSONResponse(
        status_code=400,
        content={"message": "invalid JSON" if is_json_error else "invalid input"},
    )


@asynccontextmanager
async def lifespan(app: fastapi.FastAPI):
    """Create DB engine at startup, dispose on shutdown."""
    app.state.engine = create_engine()
    app.state.session_maker = create_session_maker(app.state.engine)
    app.state.init_done = False

    try:
        async with asyncio.timeout(60):
            await init_db(app.state.engine)
    except Exception as e:
        logger.error("init.failed", error=str(e), exc_info=True)
        await dispose_engine(app.state.engine)
        raise

    app.state.init_done = True
    logger.info("init.complete")

    try:
        yield
    finally:
        await dispose_engine(app.state.engine)


_settings = get_settings()

app = fastapi.FastAPI(
    title="plann.er API",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if _settings.debug else None,
    redoc_url="/redoc" if _settings.debug else None,
    openapi_url="/openapi.json" if _settings.debug else None,
)

app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

# Added innermost first: RequestId -> AccessLog -> Recovery -> routes
app.add_middleware(RecoveryMiddleware)
app.add_middleware(AccessLogMiddleware)
app.add_middleware(RequestIdMiddleware)

app.include_router(health_router)
app.include_router(participants_router)
app.include_router(trips_router)
