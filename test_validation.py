"""
Waitlist Service: Validator Unit Tests
========================================
Run:  pytest test_validation.py -v
"""
import pytest

from waitlist.schemas import HEARD_ABOUT_CHANNELS
from waitlist.services.validation import (
    EMAIL_ERROR, HEARD_ABOUT_ERROR, LENGTH_ERROR, REQUIRED_ERROR, ROLE_ERROR,
    UNSUPPORTED_TEXT_ERROR, is_storable, is_valid_email, resolve_heard_about, validate_submission,
)


def _submission(**overrides):
    body = {
        "email": "ada@example.com",
        "firstName": "Ada",
        "lastName": "Lovelace",
        "role": "investor",
        "heardAbout": "newsletter",
    }
    body.update(overrides)
    return body


# ═══════════════════════════════════════════════════════════════════════════
# PRESENCE
# ═══════════════════════════════════════════════════════════════════════════
class TestRequiredFields:
    def test_valid_submission_passes(self):
        outcome = validate_submission(_submission())
        assert outcome.ok
        assert outcome.errors == []
        assert outcome.interest.email == "ada@example.com"
        assert outcome.interest.first_name == "Ada"
        assert outcome.interest.role == "investor"

    @pytest.mark.parametrize("field", ["email", "firstName", "lastName", "role", "heardAbout"])
    def test_missing_field_rejected(self, field):
        body = _submission()
        del body[field]
        outcome = validate_submission(body)
        assert not outcome.ok
        assert outcome.interest is None
        assert outcome.field_messages() == {field: REQUIRED_ERROR}

    @pytest.mark.parametrize("field", ["email", "firstName", "lastName", "role", "heardAbout"])
    def test_blank_field_rejected(self, field):
        outcome = validate_submission(_submission(**{field: "   "}))
        assert outcome.field_messages()[field] == REQUIRED_ERROR

    def test_non_string_counts_as_missing(self):
        outcome = validate_submission(_submission(firstName=42))
        assert outcome.field_messages() == {"firstName": REQUIRED_ERROR}

    @pytest.mark.parametrize("payload", [None, [], "hello", 7])
    def test_non_object_payload_reports_every_field(self, payload):
        outcome = validate_submission(payload)
        assert set(outcome.field_messages()) == {
            "email", "firstName", "lastName", "role", "heardAbout",
        }

    def test_all_violations_reported_together(self):
        outcome = validate_submission(_submission(
            firstName="", email="nope", role="Investor", heardAbout="hi",
        ))
        assert outcome.field_messages() == {
            "firstName": REQUIRED_ERROR,
            "email": EMAIL_ERROR,
            "role": ROLE_ERROR,
            "heardAbout": HEARD_ABOUT_ERROR,
        }
        # headline comes from the presence rule
        assert outcome.errors[0].error == REQUIRED_ERROR


# ═══════════════════════════════════════════════════════════════════════════
# EMAIL
# ═══════════════════════════════════════════════════════════════════════════
class TestEmail:
    @pytest.mark.parametrize("email", [
        "a@b.co", "a@b.com", "first.last+tag@sub.example.org", "x@y.z",
    ])
    def test_accepts_basic_shape(self, email):
        assert is_valid_email(email)
        assert validate_submission(_submission(email=email)).ok

    @pytest.mark.parametrize("email", [
        "not-an-email", "a@b", "@b.co", "a@.co", "a b@c.co", "a@b.co ", " a@b.co",
        "a@@b.co", "a@b.",
    ])
    def test_rejects_malformed(self, email):
        assert not is_valid_email(email)
        outcome = validate_submission(_submission(email=email))
        assert outcome.field_messages() == {"email": EMAIL_ERROR}

    def test_email_stored_verbatim(self):
        outcome = validate_submission(_submission(email="Ada@Example.com"))
        assert outcome.interest.email == "Ada@Example.com"


# ═══════════════════════════════════════════════════════════════════════════
# ROLE
# ═══════════════════════════════════════════════════════════════════════════
class TestRole:
    @pytest.mark.parametrize("role", ["investor", "employer", "applicant"])
    def test_valid_roles(self, role):
        assert validate_submission(_submission(role=role)).interest.role == role

    @pytest.mark.parametrize("role", ["Investor", "EMPLOYER", "student", " applicant", "admin"])
    def test_invalid_roles(self, role):
        outcome = validate_submission(_submission(role=role))
        assert outcome.field_messages() == {"role": ROLE_ERROR}


# ═══════════════════════════════════════════════════════════════════════════
# HEARD ABOUT
# ═══════════════════════════════════════════════════════════════════════════
class TestHeardAbout:
    @pytest.mark.parametrize("channel", HEARD_ABOUT_CHANNELS)
    def test_every_channel_tag_passes_verbatim(self, channel):
        assert validate_submission(_submission(heardAbout=channel)).interest.heard_about == channel

    @pytest.mark.parametrize("value,stored", [
        ("yes", "yes"),
        ("xyz", "xyz"),
        ("  a podcast  ", "a podcast"),
        ("Instagram", "Instagram"),
    ])
    def test_custom_text_of_three_or_more_passes(self, value, stored):
        assert validate_submission(_submission(heardAbout=value)).interest.heard_about == stored

    @pytest.mark.parametrize("value", ["hi", "ok", " ab ", "x"])
    def test_short_custom_text_rejected(self, value):
        outcome = validate_submission(_submission(heardAbout=value))
        assert outcome.field_messages() == {"heardAbout": HEARD_ABOUT_ERROR}

    def test_whitespace_only_is_missing(self):
        outcome = validate_submission(_submission(heardAbout="  "))
        assert outcome.field_messages() == {"heardAbout": REQUIRED_ERROR}

    def test_other_detail_replaces_bare_tag(self):
        outcome = validate_submission(_submission(heardAbout="other", heardAboutOther=" A podcast "))
        assert outcome.interest.heard_about == "A podcast"

    def test_short_other_detail_rejected(self):
        outcome = validate_submission(_submission(heardAbout="other", heardAboutOther="tv"))
        assert outcome.field_messages() == {"heardAbout": HEARD_ABOUT_ERROR}

    def test_blank_other_detail_keeps_tag(self):
        assert resolve_heard_about("other", "   ") == "other"

    def test_other_detail_ignored_for_other_tags(self):
        assert resolve_heard_about("search", "A podcast") == "search"


# ═══════════════════════════════════════════════════════════════════════════
# NORMALISATION
# ═══════════════════════════════════════════════════════════════════════════
class TestNormalisation:
    def test_names_trimmed(self):
        outcome = validate_submission(_submission(firstName="  Ada ", lastName=" Lovelace  "))
        assert outcome.interest.first_name == "Ada"
        assert outcome.interest.last_name == "Lovelace"

    @pytest.mark.parametrize("value", [None, "", "   ", 12])
    def test_empty_specific_interest_is_null(self, value):
        outcome = validate_submission(_submission(specificInterest=value))
        assert outcome.interest.specific_interest is None

    def test_absent_specific_interest_is_null(self):
        assert validate_submission(_submission()).interest.specific_interest is None

    def test_specific_interest_trimmed(self):
        outcome = validate_submission(_submission(specificInterest="  Seed rounds "))
        assert outcome.interest.specific_interest == "Seed rounds"

    def test_is_deterministic(self):
        body = _submission(heardAbout="a friend", specificInterest="AI")
        assert validate_submission(body) == validate_submission(body)


# ═══════════════════════════════════════════════════════════════════════════
# COLUMN LIMITS
# ═══════════════════════════════════════════════════════════════════════════
class TestLengthLimits:
    def test_values_at_limit_pass(self):
        email = "a" * 249 + "@b.com"
        outcome = validate_submission(_submission(email=email, firstName="F" * 100, lastName="L" * 100))
        assert len(email) == 255
        assert outcome.ok

    @pytest.mark.parametrize("field,value", [
        ("email", "a" * 250 + "@b.com"),
        ("firstName", "F" * 101),
        ("lastName", "L" * 101),
    ])
    def test_values_over_limit_rejected(self, field, value):
        outcome = validate_submission(_submission(**{field: value}))
        assert outcome.field_messages() == {field: LENGTH_ERROR}
        assert "characters or fewer" in outcome.errors[0].details

    def test_names_measured_after_trimming(self):
        outcome = validate_submission(_submission(firstName="  " + "F" * 100 + "  "))
        assert outcome.interest.first_name == "F" * 100

    def test_free_text_fields_have_no_limit(self):
        outcome = validate_submission(_submission(heardAbout="p" * 500, specificInterest="s" * 5000))
        assert outcome.ok


# ═══════════════════════════════════════════════════════════════════════════
# UNSTORABLE TEXT
# ═══════════════════════════════════════════════════════════════════════════
class TestUnsupportedText:
    @pytest.mark.parametrize("value", ["a\ud800b", "ab\x00c"])
    def test_is_storable_rejects(self, value):
        assert not is_storable(value)

    @pytest.mark.parametrize("value", ["Zoë", "李", "🙂 hello"])
    def test_is_storable_accepts_real_unicode(self, value):
        assert is_storable(value)

    @pytest.mark.parametrize("field", ["firstName", "lastName", "heardAbout"])
    def test_lone_surrogate_rejected(self, field):
        outcome = validate_submission(_submission(**{field: "Ad\ud800a"}))
        assert outcome.field_messages() == {field: UNSUPPORTED_TEXT_ERROR}

    def test_surrogate_email_not_also_reported_as_malformed(self):
        outcome = validate_submission(_submission(email="\ud800@b.com"))
        assert outcome.field_messages() == {"email": UNSUPPORTED_TEXT_ERROR}

    def test_null_byte_rejected(self):
        outcome = validate_submission(_submission(lastName="Love\x00lace"))
        assert outcome.field_messages() == {"lastName": UNSUPPORTED_TEXT_ERROR}

    @pytest.mark.parametrize("field", ["specificInterest", "heardAboutOther"])
    def test_optional_fields_checked(self, field):
        outcome = validate_submission(_submission(heardAbout="other", **{field: "x\ud800yz"}))
        assert outcome.field_messages() == {field: UNSUPPORTED_TEXT_ERROR}
