# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access layer for waitlist interests."""
from typing import Any, Dict

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from waitlist.core.logging import get_logger, mask_email
from waitlist.schemas import VALID_ROLES, DbResult, InterestCreate, InterestOut

logger = get_logger(__name__)

INTEREST_COLS = (
    "id, email, first_name, last_name, role, heard_about, specific_interest, created_at"
)

CREATE_TABLE_SQL = """
    CREATE TABLE IF NOT EXISTS interests (
        id UUID DEFAULT gen_random_uuid() PRIMARY KEY,
        email VARCHAR(255) NOT NULL UNIQUE,
        first_name VARCHAR(100) NOT NULL,
        last_name VARCHAR(100) NOT NULL,
        role VARCHAR(20) NOT NULL CHECK (role IN ('investor', 'employer', 'applicant')),
        heard_about TEXT NOT NULL,
        specific_interest TEXT,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
"""

# ON CONFLICT makes the insert itself the duplicate check: no row back means
# another request already stored this email.
INSERT_SQL = f"""
    INSERT INTO interests
        (email, first_name, last_name, role, heard_about, specific_interest)
    VALUES
        (:email, :first_name, :last_name, :role, :heard_about, :specific_interest)
    ON CONFLICT (email) DO NOTHING
    RETURNING {INTEREST_COLS}
"""


def _row_to_interest(row) -> InterestOut:
    created = row["created_at"]
    return InterestOut(
        id=str(row["id"]),
        email=row["email"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        role=row["role"],
        heard_about=row["heard_about"],
        specific_interest=row["specific_interest"],
        created_at=created.isoformat() if hasattr(created, "isoformat") else str(created or ""),
    )


class InterestRepository:
    def __init__(self, engine: Engine):
        self._engine = engine

    # ── Schema ─────────────────────────────────────────────────────────

    def ensure_schema(self) -> DbResult[None]:
        try:
            with self._engine.begin() as conn:
                conn.execute(text(CREATE_TABLE_SQL))
        except SQLAlchemyError as exc:
            logger.error("Failed to create interests table: %s", exc)
            return DbResult.fail("Failed to create database table")
        logger.debug("Interests table created or already exists")
        return DbResult.ok()

    # ── Read ───────────────────────────────────────────────────────────

    def email_exists(self, email: str) -> DbResult[bool]:
        try:
            with self._engine.connect() as conn:
                exists = conn.execute(
                    text("SELECT EXISTS(SELECT 1 FROM interests WHERE email = :email)"),
                    {"email": email},
                ).scalar()
        except SQLAlchemyError as exc:
            logger.error("Failed to check email %s: %s", mask_email(email), exc)
            return DbResult.fail("Failed to check email existence")
        return DbResult[bool].ok(bool(exists))

    def count_by_role(self) -> DbResult[Dict[str, int]]:
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(
                    text("SELECT role, COUNT(*) AS cnt FROM interests GROUP BY role")
                ).mappings().all()
        except SQLAlchemyError as exc:
            logger.error("Failed to count interests by role: %s", exc)
            return DbResult.fail("Failed to count interests")
        counts: Dict[str, int] = {role: 0 for role in VALID_ROLES}
        for r in rows:
            counts[r["role"]] = r["cnt"] or 0
        return DbResult[Dict[str, int]].ok(counts)

    # ── Write ──────────────────────────────────────────────────────────

    def insert(self, interest: InterestCreate) -> DbResult[InterestOut]:
        params: Dict[str, Any] = interest.model_dump()
        try:
            with self._engine.begin() as conn:
                row = conn.execute(text(INSERT_SQL), params).mappings().first()
        except SQLAlchemyError as exc:
            logger.error("Failed to create interest for %s: %s", mask_email(interest.email), exc)
            return DbResult.fail("Failed to create interest record")
        if row is None:
            return DbResult.fail("Email already registered", conflict=True)
        return DbResult[InterestOut].ok(_row_to_interest(row))

    # ── Ops ────────────────────────────────────────────────────────────

    def verify_connection(self):
        with self._engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def dispose(self):
        self._engine.dispose()
