# type: ignore
# pyright: reportGeneralTypeIssues=false
# pyright: reportOptionalMemberAccess=false
"""
Waitlist Service
================
Collects waitlist signups from the marketing site form: validates the
submission, rejects duplicate emails, and stores it in the ``interests`` table.

    POST /interests  → 201 | 400 | 409 | 500
    GET  /interests  → 200 | 503

Port: 8000
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from waitlist import __version__
from waitlist.controllers import interest_controller, system_controller
from waitlist.core.config import settings
from waitlist.core.database import dispose_engine
from waitlist.core.dependencies import get_interest_repo
from waitlist.core.logging import get_logger
from waitlist.middleware import (
    INTERNAL_ERROR_BODY, MetricsMiddleware, RequestIDMiddleware, UnhandledErrorMiddleware,
)
from waitlist.services.interest_service import InterestService

logger = get_logger(settings.SERVICE_NAME)


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    if settings.SCHEMA_BOOTSTRAP_ON_STARTUP:
        service = InterestService(get_interest_repo())
        if service.ensure_schema().success:
            service.seed_gauges()
        else:
            logger.warning("Schema bootstrap failed, will retry on first request")
    logger.info("Waitlist service started")
    yield
    dispose_engine()


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Waitlist Service",
    description="Validates and stores waitlist signups, rejecting duplicate emails.",
    version=__version__,
    lifespan=lifespan,
)

# Added last runs first: request ID wraps CORS so preflights get it, and the
# error converter sits innermost so crash 500s pass back out through both.
app.add_middleware(UnhandledErrorMiddleware)
app.add_middleware(MetricsMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOWED_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)
app.add_middleware(RequestIDMiddleware)


@app.exception_handler(RequestValidationError)
async def invalid_body_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected unparseable request body on %s", request.url.path)
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body",
                 "details": "The request body must be a JSON object"},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    # Last resort for failures inside the middleware stack itself
    logger.exception("Unhandled exception")
    response = JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        response.headers["X-Request-ID"] = request_id
    return response


app.include_router(system_controller.router)
app.include_router(interest_controller.router)
