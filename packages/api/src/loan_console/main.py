# This project was developed with assistance from AI tools.
"""FastAPI application entry point."""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from lending.errors import DegenerateInput, Forbidden, InvalidTransition, TransitionRejected
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .core.config import settings
from .routes import admin, health, verifier
from .schemas.error import ErrorResponse
from .services.backend import BackendError, close_backend_client, init_backend_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application startup/shutdown lifecycle."""
    if settings.AUTH_DISABLED:
        logger.warning("AUTH_DISABLED is set -- every request runs as the dev admin")
    init_backend_client(settings)
    yield
    await close_backend_client()


app = FastAPI(
    title="Microloan Console API",
    description="Role-based administrative console for a microloan platform",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)

_HTTP_STATUS_TITLES: dict[int, str] = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    409: "Conflict",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
    502: "Bad Gateway",
    503: "Service Unavailable",
}

_TRANSITION_STATUS: dict[type[TransitionRejected], int] = {
    DegenerateInput: 400,
    Forbidden: 403,
    InvalidTransition: 409,
}


def _request_id(request: Request) -> str:
    return request.headers.get("x-request-id", str(uuid.uuid4()))


def _problem(status_code: int, detail: str, request_id: str, code: str = "") -> JSONResponse:
    body = ErrorResponse(
        type="about:blank",
        title=_HTTP_STATUS_TITLES.get(status_code, "Error"),
        status=status_code,
        detail=detail,
        code=code,
        request_id=request_id,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Convert HTTPException to RFC 7807 Problem Details."""
    response = _problem(exc.status_code, str(exc.detail), _request_id(request))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Convert Pydantic validation errors to RFC 7807 Problem Details."""
    return _problem(422, str(exc.errors()), _request_id(request), code="validation_error")


@app.exception_handler(TransitionRejected)
async def transition_rejected_handler(request: Request, exc: TransitionRejected):
    """Refused status change: 400 degenerate, 403 forbidden, 409 not in the lifecycle."""
    status_code = _TRANSITION_STATUS.get(type(exc), 400)
    return _problem(status_code, str(exc), _request_id(request), code=exc.code)


@app.exception_handler(BackendError)
async def backend_error_handler(request: Request, exc: BackendError):
    """A 404 from the backend is passed through; anything else is a bad gateway."""
    if exc.status_code == 404:
        return _problem(404, exc.message, _request_id(request), code="not_found")
    code = "backend_error" if exc.status_code else "backend_unavailable"
    return _problem(502, exc.message, _request_id(request), code=code)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all for unhandled exceptions -- log and return 500."""
    request_id = _request_id(request)
    logger.exception("Unhandled exception (request_id=%s)", request_id)
    return _problem(500, "An unexpected error occurred.", request_id)


app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(admin.router, prefix="/api/admin", tags=["admin"])
app.include_router(verifier.router, prefix="/api/verifier", tags=["verifier"])
