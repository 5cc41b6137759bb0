import logging
import uuid
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError

from app.core.config import settings
from app.core.exceptions import ConstraintViolationError, MatchingError, StoreUnavailableError
from app.core.logging import configure_logging
from app.api.v1 import swipes, feed, matches, reviews, compatibility

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(app_env=settings.app_env)
    logger.info("Caregiver Match API starting (env=%s)", settings.app_env)
    yield


app = FastAPI(
    title="Caregiver Match API",
    description="Swipe, match and candidate feed backend connecting families with caregivers",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def bind_request_id(request: Request, call_next):
    """Bind a request id to every log line emitted while handling the request"""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


def _error_response(error: MatchingError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content={"detail": error.detail, "code": error.code, "retryable": error.retryable},
    )


@app.exception_handler(MatchingError)
async def matching_error_handler(request: Request, exc: MatchingError):
    if exc.status_code >= 500:
        logger.error("%s on %s: %s", exc.code, request.url.path, exc.detail)
    return _error_response(exc)


@app.exception_handler(IntegrityError)
async def constraint_violation_handler(request: Request, exc: IntegrityError):
    # Constraint violations are never retryable
    logger.warning("Constraint violation on %s: %s", request.url.path, exc.orig)
    return _error_response(ConstraintViolationError())


@app.exception_handler(OperationalError)
@app.exception_handler(DBAPIError)
@app.exception_handler(TimeoutError)
async def store_unavailable_handler(request: Request, exc: Exception):
    # Surface as retryable; the client decides whether to resubmit
    logger.error("Data store failure on %s: %s", request.url.path, exc)
    return _error_response(StoreUnavailableError())


# Include API routers
app.include_router(swipes.router, prefix="/api/v1/swipes", tags=["Swipes"])
app.include_router(feed.router, prefix="/api/v1/feed", tags=["Feed"])
app.include_router(matches.router, prefix="/api/v1/matches", tags=["Matches"])
app.include_router(compatibility.router, prefix="/api/v1/compatibility", tags=["Compatibility"])
app.include_router(reviews.router, prefix="/api/v1", tags=["Reviews"])


@app.get("/healthz")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "version": "1.0.0"}


@app.get("/")
async def root():
    """Root endpoint"""
    return {"message": "Caregiver Match API", "docs": "/docs"}
