# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Pydantic request/response schemas and outcome types."""
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel

VALID_ROLES = ("investor", "employer", "applicant")
HEARD_ABOUT_CHANNELS = (
    "search", "instagram", "tiktok", "wordofmouth", "referral",
    "news", "newsletter", "sms", "ads", "other",
)
OTHER_CHANNEL = "other"
MIN_OTHER_DETAIL_LENGTH = 3

# Request field name → DB column
REQUIRED_FIELDS = {
    "email": "email",
    "firstName": "first_name",
    "lastName": "last_name",
    "role": "role",
    "heardAbout": "heard_about",
}
OPTIONAL_TEXT_FIELDS = ("heardAboutOther", "specificInterest")

# VARCHAR widths of the interests table, keyed by request field
MAX_FIELD_LENGTHS = {
    "email": 255,
    "firstName": 100,
    "lastName": 100,
}

# Submission outcome statuses
CREATED = "created"
INVALID = "invalid"
DUPLICATE = "duplicate"
SCHEMA_FAILED = "schema_failed"
LOOKUP_FAILED = "lookup_failed"
SAVE_FAILED = "save_failed"

T = TypeVar("T")


class InterestCreate(BaseModel):
    """A validated, normalised signup ready to be inserted."""
    email: str
    first_name: str
    last_name: str
    role: str
    heard_about: str
    specific_interest: Optional[str] = None


class InterestOut(InterestCreate):
    id: str
    created_at: str


class FieldError(BaseModel):
    field: str
    error: str
    details: str


class ValidationOutcome(BaseModel):
    interest: Optional[InterestCreate] = None
    errors: List[FieldError] = []

    @property
    def ok(self) -> bool:
        return self.interest is not None and not self.errors

    def field_messages(self) -> Dict[str, str]:
        return {e.field: e.error for e in self.errors}


class DbResult(BaseModel, Generic[T]):
    """Success/failure wrapper returned by every repository operation."""
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    conflict: bool = False

    @classmethod
    def ok(cls, data: Any = None) -> "DbResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, conflict: bool = False) -> "DbResult":
        return cls(success=False, error=error, conflict=conflict)


class SubmissionOutcome(BaseModel):
    status: str
    interest: Optional[InterestOut] = None
    errors: List[FieldError] = []


class InterestCreated(BaseModel):
    message: str
    id: str


class StatusMessage(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
    fields: Optional[Dict[str, str]] = None
