# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Submission validation: pure, no I/O.

Maps a raw JSON body to either a normalised ``InterestCreate`` or a list of
``FieldError``s. Every rule is checked independently so the form can flag all
offending fields at once; the first error (in rule order) is the headline the
API returns.
"""
import re
from typing import Any, Dict, List, Optional

from waitlist.schemas import (
    HEARD_ABOUT_CHANNELS, MAX_FIELD_LENGTHS, MIN_OTHER_DETAIL_LENGTH, OPTIONAL_TEXT_FIELDS,
    OTHER_CHANNEL, REQUIRED_FIELDS, VALID_ROLES, FieldError, InterestCreate, ValidationOutcome,
)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

REQUIRED_ERROR = "Please fill in all required fields"
REQUIRED_DETAILS = "First name, last name, email, role, and how you heard about us are required"
EMAIL_ERROR = "Please enter a valid email address"
EMAIL_DETAILS = "The email format you entered is not valid"
ROLE_ERROR = "Please select a valid role"
ROLE_DETAILS = "Role must be one of: investor, employer, or applicant"
HEARD_ABOUT_ERROR = "Please provide more details about how you heard about us"
HEARD_ABOUT_DETAILS = 'If you selected "Other", please elaborate with at least 3 characters'
LENGTH_ERROR = "Please shorten your entry"
LENGTH_DETAILS = "{label} must be {limit} characters or fewer"
UNSUPPORTED_TEXT_ERROR = "Please remove unsupported characters"
UNSUPPORTED_TEXT_DETAILS = "Text fields cannot contain null bytes or invalid Unicode"

FIELD_LABELS = {"email": "Email", "firstName": "First name", "lastName": "Last name"}


def _text(payload: Dict[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    return value if isinstance(value, str) else None


def _present(value: Optional[str]) -> bool:
    return value is not None and value.strip() != ""


def is_valid_email(email: str) -> bool:
    return EMAIL_RE.match(email) is not None


def is_valid_role(role: str) -> bool:
    return role in VALID_ROLES


def is_storable(value: str) -> bool:
    """False for text the database driver cannot send: NUL bytes or lone surrogates."""
    if "\x00" in value:
        return False
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def exceeds_length(key: str, value: str, limit: int) -> bool:
    # Names are stored trimmed, email verbatim
    stored = value if key == "email" else value.strip()
    return len(stored) > limit


def resolve_heard_about(heard_about: str, other_detail: Optional[str] = None) -> Optional[str]:
    """Return the value to store for ``heardAbout``, or None if it is rejected.

    Channel tags are kept verbatim. Anything else is free "other" text and
    must be at least three characters once trimmed. A non-blank
    ``heardAboutOther`` alongside the bare ``other`` tag replaces it.
    """
    if heard_about == OTHER_CHANNEL and _present(other_detail):
        heard_about = other_detail
    elif heard_about in HEARD_ABOUT_CHANNELS:
        return heard_about
    custom = heard_about.strip()
    if len(custom) < MIN_OTHER_DETAIL_LENGTH:
        return None
    return custom


def validate_submission(payload: Any) -> ValidationOutcome:
    if not isinstance(payload, dict):
        payload = {}

    errors: List[FieldError] = []
    values = {key: _text(payload, key) for key in REQUIRED_FIELDS}

    for key, value in values.items():
        if not _present(value):
            errors.append(FieldError(field=key, error=REQUIRED_ERROR, details=REQUIRED_DETAILS))

    # Fields PostgreSQL would refuse are reported once and skip the later rules
    unstorable = set()
    for key in (*REQUIRED_FIELDS, *OPTIONAL_TEXT_FIELDS):
        value = _text(payload, key)
        if _present(value) and not is_storable(value):
            unstorable.add(key)
            errors.append(FieldError(field=key, error=UNSUPPORTED_TEXT_ERROR,
                                     details=UNSUPPORTED_TEXT_DETAILS))

    def _check(key: str) -> bool:
        return _present(values[key]) and key not in unstorable

    for key, limit in MAX_FIELD_LENGTHS.items():
        if _check(key) and exceeds_length(key, values[key], limit):
            errors.append(FieldError(field=key, error=LENGTH_ERROR,
                                     details=LENGTH_DETAILS.format(label=FIELD_LABELS[key],
                                                                   limit=limit)))

    email = values["email"]
    if _check("email") and not is_valid_email(email):
        errors.append(FieldError(field="email", error=EMAIL_ERROR, details=EMAIL_DETAILS))

    role = values["role"]
    if _check("role") and not is_valid_role(role):
        errors.append(FieldError(field="role", error=ROLE_ERROR, details=ROLE_DETAILS))

    heard_about = None
    if _check("heardAbout") and "heardAboutOther" not in unstorable:
        heard_about = resolve_heard_about(values["heardAbout"], _text(payload, "heardAboutOther"))
        if heard_about is None:
            errors.append(FieldError(field="heardAbout", error=HEARD_ABOUT_ERROR,
                                     details=HEARD_ABOUT_DETAILS))

    if errors:
        return ValidationOutcome(errors=errors)

    specific = _text(payload, "specificInterest")
    return ValidationOutcome(interest=InterestCreate(
        email=email,
        first_name=values["firstName"].strip(),
        last_name=values["lastName"].strip(),
        role=role,
        heard_about=heard_about,
        specific_interest=specific.strip() if _present(specific) else None,
    ))
