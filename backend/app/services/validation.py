"""
Form validation for the public site.

Each ``validate_*`` function takes the raw decoded JSON body and returns a
``ValidationResult``. Errors are ``"<field path>: <message>"`` strings so a
form can attribute them to the offending field.
"""
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional
from pydantic import BaseModel, ValidationError

from app.schemas.conference import ConferenceFees, RegistrationType
from app.schemas.forms import (
    AwardNominationForm,
    ConferenceRegistrationForm,
    NewsletterSignupForm,
    ProfessionalMembershipForm,
    StudentMembershipForm,
    StudentReference,
)

logger = logging.getLogger(__name__)

REGISTRATION_TEXT_LIMIT = 1000
NOMINATION_TEXT_LIMIT = 2000

SCRIPT_BLOCK = re.compile(r"<script\b[^>]*>.*?</script\s*>", re.IGNORECASE | re.DOTALL)
JAVASCRIPT_PROTOCOL = re.compile(r"javascript:", re.IGNORECASE)

REGISTRATION_REQUIRED_FIELDS = (
    "fullName", "email", "institution", "membershipStatus", "registrationType",
)

AWARD_FIELD_LABELS = {
    "awardId": "Award",
    "awardCategory": "Award Category",
    "nomineeInfo.name": "Nominee Name",
    "nomineeInfo.email": "Nominee Email",
    "nomineeInfo.organization": "Nominee Organization",
    "nomineeInfo.position": "Nominee Position",
    "nominatorInfo.name": "Nominator Name",
    "nominatorInfo.email": "Nominator Email",
    "nominatorInfo.organization": "Nominator Organization",
    "nominatorInfo.position": "Nominator Position",
    "nominationText": "Nomination Statement",
    "agreedToTerms": "Terms Agreement",
}

REFERENCE_FIELD_LABELS = {
    "name": "Name",
    "email": "Email",
    "relationship": "Relationship",
}


@dataclass
class ValidationResult:
    is_valid: bool
    data: Optional[dict[str, Any]] = None
    errors: list[str] = field(default_factory=list)


@dataclass
class RequirementsResult:
    is_valid: bool
    missing_fields: list[str] = field(default_factory=list)


def _error_path(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "form"


def format_validation_errors(exc: ValidationError) -> list[str]:
    return [f"{_error_path(err['loc'])}: {err['msg']}" for err in exc.errors()]


def format_award_error(path: str, message: str) -> str:
    """``nomineeInfo.email`` -> ``Nominee Email: <message>``"""
    return f"{AWARD_FIELD_LABELS.get(path, path)}: {message}"


def _not_a_form() -> ValidationResult:
    return ValidationResult(is_valid=False, errors=["form: Form data must be an object"])


def _validate(
    model: type[BaseModel],
    raw: Any,
    exclude_unset: bool = False,
) -> tuple[Optional[BaseModel], ValidationResult]:
    if not isinstance(raw, dict):
        return None, _not_a_form()
    try:
        form = model.model_validate(raw)
    except ValidationError as exc:
        return None, ValidationResult(is_valid=False, errors=format_validation_errors(exc))
    return form, ValidationResult(is_valid=True, data=form.to_data(exclude_unset=exclude_unset))


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


# ============================================================================
# PROFESSIONAL MEMBERSHIP
# ============================================================================

def validate_professional_membership_form(raw: Any) -> ValidationResult:
    """
    Validate a professional membership application.

    Renewals must carry the previous member number. On success ``data`` is
    the input with strings trimmed and empty optional fields dropped.
    """
    _, result = _validate(ProfessionalMembershipForm, raw, exclude_unset=True)
    errors = list(result.errors)

    if isinstance(raw, dict) and raw.get("membershipType") == "renewal":
        if _is_blank(raw.get("previousMemberNumber")):
            errors.append("previousMemberNumber: Previous member number is required for renewals")

    if errors:
        return ValidationResult(is_valid=False, errors=errors)
    return result


def validate_renewal_requirements(raw: Any) -> RequirementsResult:
    """Check the renewal rule alone; field presence belongs to the form schema."""
    if not isinstance(raw, dict):
        raw = {}

    missing = []
    if raw.get("membershipType") == "renewal" and _is_blank(raw.get("previousMemberNumber")):
        missing.append("previousMemberNumber")
    return RequirementsResult(is_valid=not missing, missing_fields=missing)


# ============================================================================
# CONFERENCE REGISTRATION
# ============================================================================

def validate_conference_registration_form(raw: Any) -> ValidationResult:
    _, result = _validate(ConferenceRegistrationForm, raw)
    errors = list(result.errors)

    if isinstance(raw, dict) and raw.get("membershipStatus") == "member":
        if _is_blank(raw.get("membershipId")):
            errors.append("membershipId: Membership ID is required for current members")

    if errors:
        return ValidationResult(is_valid=False, errors=errors)
    return result


def validate_registration_requirements(raw: Any) -> RequirementsResult:
    if not isinstance(raw, dict):
        raw = {}

    missing = [name for name in REGISTRATION_REQUIRED_FIELDS if _is_blank(raw.get(name))]
    if raw.get("agreeToTerms") is not True:
        missing.append("agreeToTerms")
    if raw.get("membershipStatus") == "member" and _is_blank(raw.get("membershipId")):
        missing.append("membershipId")
    return RequirementsResult(is_valid=not missing, missing_fields=missing)


def sanitize_text(value: str, max_length: int = NOMINATION_TEXT_LIMIT) -> str:
    """Strip script blocks and ``javascript:`` prefixes, trim, truncate."""
    value = SCRIPT_BLOCK.sub("", value)
    value = JAVASCRIPT_PROTOCOL.sub("", value)
    return value.strip()[:max_length]


def sanitize_registration_data(raw: dict[str, Any]) -> dict[str, Any]:
    sanitized: dict[str, Any] = {}
    for key, value in raw.items():
        if isinstance(value, str):
            sanitized[key] = sanitize_text(value, REGISTRATION_TEXT_LIMIT)
        elif key == "emergencyContact" and isinstance(value, dict):
            sanitized[key] = {
                k: sanitize_text(v, REGISTRATION_TEXT_LIMIT) if isinstance(v, str) else v
                for k, v in value.items()
            }
        else:
            sanitized[key] = value
    return sanitized


def determine_registration_type(
    membership_status: str,
    early_bird_deadline: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> RegistrationType:
    if membership_status == "student":
        return RegistrationType.STUDENT

    now = now or datetime.now(timezone.utc)
    if early_bird_deadline is not None:
        if early_bird_deadline.tzinfo is None:
            early_bird_deadline = early_bird_deadline.replace(tzinfo=timezone.utc)
        if now < early_bird_deadline:
            return RegistrationType.EARLY_BIRD
    return RegistrationType.REGULAR


def calculate_registration_fee(
    registration_type: str,
    membership_status: str,
    fees: ConferenceFees,
) -> float:
    """
    Price for a registration.

    Student pricing wins over everything else. Early bird without a
    configured early bird fee falls back to the member price.
    """
    registration_type = RegistrationType(registration_type)
    if registration_type == RegistrationType.STUDENT or membership_status == "student":
        return fees.student
    if registration_type == RegistrationType.EARLY_BIRD:
        return fees.early_bird.amount if fees.early_bird else fees.member
    if membership_status == "member":
        return fees.member
    return fees.non_member


# ============================================================================
# AWARD NOMINATION
# ============================================================================

def validate_award_nomination_form(raw: Any) -> ValidationResult:
    return _validate(AwardNominationForm, raw)[1]


NOMINATION_STEPS: dict[int, tuple[str, ...]] = {
    1: ("awardId", "awardCategory"),
    2: ("nomineeInfo",),
    3: ("nominatorInfo",),
    4: ("nominationText", "agreedToTerms"),
}


def validate_nomination_step(step: int, raw: Any) -> ValidationResult:
    """Validate only the fields collected by one step of the nomination wizard."""
    fields = NOMINATION_STEPS.get(step)
    if fields is None:
        return ValidationResult(is_valid=False, errors=[f"step: Unknown step {step}"])
    if not isinstance(raw, dict):
        return _not_a_form()

    errors: list[str] = []
    try:
        AwardNominationForm.model_validate(raw)
    except ValidationError as exc:
        for err in exc.errors():
            if err["loc"] and err["loc"][0] in fields:
                errors.append(format_award_error(_error_path(err["loc"]), err["msg"]))

    if errors:
        return ValidationResult(is_valid=False, errors=errors)
    return ValidationResult(is_valid=True, data={k: raw[k] for k in fields if k in raw})


def _normalize_person(person: dict[str, Any]) -> dict[str, Any]:
    normalized = {
        "name": person["name"].strip(),
        "email": person["email"].strip().lower(),
    }
    for optional in ("organization", "position"):
        value = (person.get(optional) or "").strip()
        if value:
            normalized[optional] = value
    return normalized


def normalize_nomination(data: dict[str, Any]) -> dict[str, Any]:
    """Stored shape of a validated nomination (status ``pending``)."""
    return {
        "awardId": data["awardId"].strip(),
        "awardCategory": data["awardCategory"],
        "nomineeInfo": _normalize_person(data["nomineeInfo"]),
        "nominatorInfo": _normalize_person(data["nominatorInfo"]),
        "nominationText": sanitize_text(data["nominationText"], NOMINATION_TEXT_LIMIT),
        "status": "pending",
    }


# ============================================================================
# STUDENT MEMBERSHIP
# ============================================================================

def validate_student_membership_form(raw: Any) -> ValidationResult:
    return _validate(StudentMembershipForm, raw)[1]


def validate_reference(raw: Any) -> ValidationResult:
    if not isinstance(raw, dict):
        return _not_a_form()
    try:
        reference = StudentReference.model_validate(raw)
    except ValidationError as exc:
        errors = []
        for err in exc.errors():
            path = _error_path(err["loc"])
            errors.append(f"{REFERENCE_FIELD_LABELS.get(path, path)}: {err['msg']}")
        return ValidationResult(is_valid=False, errors=errors)
    return ValidationResult(is_valid=True, data=reference.to_data())




# ============================================================================
# NEWSLETTER
# ============================================================================

def validate_newsletter_email(raw: Any) -> ValidationResult:
    """Accepts either ``{"email": ...}`` or the bare address."""
    if isinstance(raw, str):
        raw = {"email": raw}
    return _validate(NewsletterSignupForm, raw)[1]
