# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: waitlist signup submission and endpoint status check."""
from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from waitlist.core.dependencies import get_interest_service
from waitlist.core.logging import get_logger
from waitlist.schemas import (
    CREATED, DUPLICATE, INVALID, LOOKUP_FAILED, SAVE_FAILED, SCHEMA_FAILED,
    ErrorResponse, InterestCreated, StatusMessage, SubmissionOutcome,
)
from waitlist.services.interest_service import InterestService

logger = get_logger(__name__)

router = APIRouter(tags=["Interests"])

TRY_LATER = "Please try again later or contact support if the problem persists"
SETUP_FAILED = ("Database setup failed",
                "Unable to initialize the database. Please try again later.")

# status → (HTTP code, error, details); INVALID carries per-field errors instead
_FAILURES = {
    SCHEMA_FAILED: (500, *SETUP_FAILED),
    DUPLICATE: (409, "This email is already registered",
                "Please use a different email address or contact us if you need help"),
    LOOKUP_FAILED: (500, "Unable to verify email", TRY_LATER),
    SAVE_FAILED: (500, "Unable to save your information", TRY_LATER),
}


def _error(status_code: int, error: str, details: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code,
                        content={"error": error, "details": details, **extra})


def _to_response(outcome: SubmissionOutcome) -> JSONResponse:
    if outcome.status == CREATED:
        body = InterestCreated(message="Successfully joined the waitlist!", id=outcome.interest.id)
        return JSONResponse(status_code=201, content=body.model_dump())
    if outcome.status == INVALID:
        first = outcome.errors[0]
        return _error(400, first.error, first.details,
                      fields={e.field: e.error for e in outcome.errors})
    return _error(*_FAILURES[outcome.status])


@router.post(
    "/interests",
    status_code=201,
    response_model=InterestCreated,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse},
               500: {"model": ErrorResponse}},
)
def submit_interest(payload: Any = Body(default=None),
                    service: InterestService = Depends(get_interest_service)):
    try:
        return _to_response(service.submit(payload))
    except Exception:
        logger.exception("Error processing interest submission")
        return _error(500, "Unable to process your request", TRY_LATER)


@router.get(
    "/interests",
    response_model=StatusMessage,
    responses={503: {"model": ErrorResponse}},
)
def interests_status(service: InterestService = Depends(get_interest_service)):
    try:
        if not service.ensure_schema().success:
            return _error(503, *SETUP_FAILED)
        return {"message": "Interests API endpoint is working"}
    except Exception:
        logger.exception("Error in GET /interests")
        return _error(503, "Service temporarily unavailable", "Please try again later")
