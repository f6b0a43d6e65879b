# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Business logic for waitlist signups: validate, dedupe, store."""
from typing import Any

from waitlist.core.logging import get_logger, mask_email
from waitlist.metrics import SIGNUPS, SIGNUPS_CREATED, SIGNUPS_REJECTED, STORAGE_ERRORS
from waitlist.repositories.interest_repository import InterestRepository
from waitlist.schemas import (
    CREATED, DUPLICATE, INVALID, LOOKUP_FAILED, SAVE_FAILED, SCHEMA_FAILED,
    DbResult, SubmissionOutcome,
)
from waitlist.services.validation import validate_submission

logger = get_logger(__name__)


class InterestService:
    def __init__(self, repo: InterestRepository):
        self._repo = repo

    def ensure_schema(self) -> DbResult[None]:
        result = self._repo.ensure_schema()
        if not result.success:
            STORAGE_ERRORS.labels(operation="ensure_schema").inc()
        return result

    def seed_gauges(self):
        result = self._repo.count_by_role()
        if not result.success:
            STORAGE_ERRORS.labels(operation="count_by_role").inc()
            logger.warning("Could not seed gauges; DB may not be ready yet")
            return
        for role, cnt in result.data.items():
            SIGNUPS.labels(role=role).set(cnt)
        logger.info("Prometheus gauges loaded from DB")

    def submit(self, payload: Any) -> SubmissionOutcome:
        if not self.ensure_schema().success:
            return SubmissionOutcome(status=SCHEMA_FAILED)

        validation = validate_submission(payload)
        if not validation.ok:
            SIGNUPS_REJECTED.labels(reason=INVALID).inc()
            logger.info("Signup rejected fields=%s", ",".join(validation.field_messages()))
            return SubmissionOutcome(status=INVALID, errors=validation.errors)

        interest = validation.interest
        exists = self._repo.email_exists(interest.email)
        if not exists.success:
            STORAGE_ERRORS.labels(operation="email_exists").inc()
            return SubmissionOutcome(status=LOOKUP_FAILED)
        if exists.data:
            return self._duplicate(interest.email)

        stored = self._repo.insert(interest)
        if stored.conflict:
            return self._duplicate(interest.email)
        if not stored.success:
            STORAGE_ERRORS.labels(operation="insert").inc()
            return SubmissionOutcome(status=SAVE_FAILED)

        SIGNUPS_CREATED.labels(role=interest.role).inc()
        SIGNUPS.labels(role=interest.role).inc()
        logger.info("Signup stored id=%s role=%s", stored.data.id, interest.role)
        return SubmissionOutcome(status=CREATED, interest=stored.data)

    def _duplicate(self, email: str) -> SubmissionOutcome:
        SIGNUPS_REJECTED.labels(reason=DUPLICATE).inc()
        logger.info("Signup rejected: %s already registered", mask_email(email))
        return SubmissionOutcome(status=DUPLICATE)
