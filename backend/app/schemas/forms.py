"""
Pydantic schemas for public form submissions.

Form payloads arrive as camelCase keys straight from HTML forms. Strings are
trimmed; cross-field rules (renewal member number, member id for current
members) are checked in ``app.services.validation`` so their errors can be
attributed to a single field.
"""
import re
from datetime import date
from decimal import Decimal
from typing import Annotated, Literal, Optional
from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


US_STATES: tuple[str, ...] = (
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
    "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
    "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
    "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
    "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY",
    "DC",
)

PHONE_PATTERN = re.compile(r"^(\+?1[\s.-]?)?\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}$")
ZIP_PATTERN = re.compile(r"^\d{5}(-\d{4})?$")
NAME_PATTERN = re.compile(r"^[A-Za-z\s'\-\.]+$")

AWARD_CATEGORIES = ("Excellence", "Service", "Leadership", "Innovation", "Lifetime")


def _check_phone(value: str) -> str:
    if not PHONE_PATTERN.match(value):
        raise PydanticCustomError("phone_format", "Please enter a valid phone number")
    return value


def _check_zip(value: str) -> str:
    if not ZIP_PATTERN.match(value):
        raise PydanticCustomError(
            "zip_format", "Please enter a valid ZIP code (e.g., 12345 or 12345-6789)"
        )
    return value


def _check_state(value: str) -> str:
    value = value.upper()
    if value not in US_STATES:
        raise PydanticCustomError("state_code", "Please select a valid state")
    return value


def _check_name(value: str) -> str:
    if not NAME_PATTERN.match(value):
        raise PydanticCustomError(
            "name_format",
            "Name can only contain letters, spaces, hyphens, apostrophes and periods",
        )
    return value


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _must_be_true(value: bool) -> bool:
    if value is not True:
        raise PydanticCustomError("must_agree", "You must agree to the terms and conditions")
    return value


Phone = Annotated[str, AfterValidator(_check_phone)]
OptionalPhone = Annotated[Optional[Phone], BeforeValidator(_blank_to_none)]
ZipCode = Annotated[str, AfterValidator(_check_zip)]
StateCode = Annotated[str, AfterValidator(_check_state)]
PersonName = Annotated[str, Field(min_length=1, max_length=100), AfterValidator(_check_name)]
RequiredText = Annotated[str, Field(min_length=1, max_length=200)]
OptionalText = Annotated[Optional[str], BeforeValidator(_blank_to_none)]
Agreement = Annotated[bool, AfterValidator(_must_be_true)]


class FormModel(BaseModel):
    """Base for form payloads: camelCase aliases, trimmed strings."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    def to_data(self, exclude_unset: bool = False) -> dict:
        return self.model_dump(
            mode="json", by_alias=True, exclude_none=True, exclude_unset=exclude_unset
        )


# ============================================================================
# PROFESSIONAL MEMBERSHIP
# ============================================================================

class MembershipCommunicationPreferences(FormModel):
    newsletter: bool = False
    updates: bool = False
    events: bool = False


class ProfessionalMembershipForm(FormModel):
    first_name: PersonName
    last_name: PersonName
    email: EmailStr
    phone: Phone
    institution: RequiredText
    position: RequiredText
    years_experience: int = Field(ge=0, le=70)
    address: RequiredText
    city: RequiredText
    state: StateCode
    zip_code: ZipCode
    membership_type: Literal["new", "renewal"]
    previous_member_number: Optional[str] = None
    communication_preferences: MembershipCommunicationPreferences = Field(
        default_factory=MembershipCommunicationPreferences
    )


# ============================================================================
# CONFERENCE REGISTRATION
# ============================================================================

class EmergencyContact(FormModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    relationship: Optional[str] = None


class ConferenceRegistrationForm(FormModel):
    full_name: PersonName
    email: EmailStr
    phone: OptionalPhone = None
    institution: RequiredText
    job_title: OptionalText = None
    membership_status: Literal["member", "non-member", "student"]
    membership_id: OptionalText = None
    address: OptionalText = None
    city: OptionalText = None
    state: Annotated[Optional[StateCode], BeforeValidator(_blank_to_none)] = None
    zip_code: Annotated[Optional[ZipCode], BeforeValidator(_blank_to_none)] = None
    registration_type: Literal["regular", "early_bird", "student", "speaker"] = "regular"
    dietary_restrictions: OptionalText = None
    accessibility_needs: OptionalText = None
    session_preferences: list[str] = Field(default_factory=list)
    networking_opt_in: bool = False
    agree_to_terms: Agreement
    marketing_consent: bool = False
    emergency_contact: Optional[EmergencyContact] = None

    @field_validator("session_preferences")
    @classmethod
    def limit_session_preferences(cls, value: list[str]) -> list[str]:
        if len(value) > 10:
            raise PydanticCustomError(
                "too_many_sessions", "You can select up to 10 session preferences"
            )
        return value

    @field_validator("emergency_contact")
    @classmethod
    def emergency_contact_reachable(cls, value: Optional[EmergencyContact]):
        if value is not None and not (value.name or value.phone):
            raise PydanticCustomError(
                "emergency_contact",
                "Emergency contact must include at least a name or phone number",
            )
        return value


# ============================================================================
# AWARD NOMINATION
# ============================================================================

class NominationPerson(FormModel):
    name: PersonName
    email: EmailStr
    organization: OptionalText = None
    position: OptionalText = None


class AwardNominationForm(FormModel):
    award_id: RequiredText
    award_category: Literal[AWARD_CATEGORIES]  # type: ignore[valid-type]
    nominee_info: NominationPerson
    nominator_info: NominationPerson
    nomination_text: str = Field(min_length=50, max_length=2000)
    agreed_to_terms: Agreement


# ============================================================================
# STUDENT MEMBERSHIP APPLICATION
# ============================================================================

class StudentPersonalInfo(FormModel):
    first_name: PersonName
    last_name: PersonName
    email: EmailStr
    phone: OptionalPhone = None


class AcademicInfo(FormModel):
    institution: RequiredText
    major: RequiredText
    graduation_year: int
    gpa: Optional[float] = None

    @field_validator("graduation_year")
    @classmethod
    def graduation_year_in_range(cls, value: int) -> int:
        current = date.today().year
        if value < current or value > current + 10:
            raise PydanticCustomError(
                "graduation_year",
                "Graduation year must be between {low} and {high}",
                {"low": current, "high": current + 10},
            )
        return value

    @field_validator("gpa")
    @classmethod
    def gpa_in_range(cls, value: Optional[float]) -> Optional[float]:
        if value is None:
            return value
        if value < 0 or value > 4.0:
            raise PydanticCustomError("gpa_range", "GPA must be between 0.0 and 4.0")
        if Decimal(str(value)).as_tuple().exponent < -2:
            raise PydanticCustomError("gpa_precision", "GPA can have at most two decimal places")
        return value


class StudentReference(FormModel):
    name: RequiredText
    email: EmailStr
    relationship: RequiredText


class StudentMembershipForm(FormModel):
    personal_info: StudentPersonalInfo
    academic_info: AcademicInfo
    essay: str = Field(min_length=100, max_length=2000)
    references: list[StudentReference]

    @field_validator("references")
    @classmethod
    def reference_count(cls, value: list[StudentReference]) -> list[StudentReference]:
        if not 2 <= len(value) <= 3:
            raise PydanticCustomError(
                "reference_count", "Please provide two or three references"
            )
        return value


# ============================================================================
# NEWSLETTER
# ============================================================================

class NewsletterSignupForm(FormModel):
    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value
