"""
Pydantic schemas for conference and registrant documents.
"""
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from app.schemas.common import CamelModel


class ConferenceStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    REGISTRATION_OPEN = "registration_open"
    REGISTRATION_CLOSED = "registration_closed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Forward progression; cancellation is allowed from any non-terminal state.
VALID_STATUS_TRANSITIONS: dict[ConferenceStatus, set[ConferenceStatus]] = {
    ConferenceStatus.DRAFT: {ConferenceStatus.PUBLISHED, ConferenceStatus.CANCELLED},
    ConferenceStatus.PUBLISHED: {ConferenceStatus.REGISTRATION_OPEN, ConferenceStatus.CANCELLED},
    ConferenceStatus.REGISTRATION_OPEN: {ConferenceStatus.REGISTRATION_CLOSED, ConferenceStatus.CANCELLED},
    ConferenceStatus.REGISTRATION_CLOSED: {ConferenceStatus.COMPLETED, ConferenceStatus.CANCELLED},
    ConferenceStatus.COMPLETED: set(),
    ConferenceStatus.CANCELLED: set(),
}


class RegistrantStatus(str, Enum):
    REGISTERED = "registered"
    WAITLISTED = "waitlisted"
    CANCELLED = "cancelled"
    ATTENDED = "attended"
    NO_SHOW = "no_show"


class RegistrationType(str, Enum):
    REGULAR = "regular"
    EARLY_BIRD = "early_bird"
    STUDENT = "student"
    SPEAKER = "speaker"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"
    CANCELLED = "cancelled"


class AvailabilityStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    FULL = "full"
    NOT_STARTED = "not_started"


class ConferenceSchedule(CamelModel):
    date: datetime
    start_time: str = "09:00"
    end_time: str = "17:00"
    timezone: str = "America/New_York"


class ConferenceAddress(CamelModel):
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""


class ConferenceLocation(CamelModel):
    venue: str
    address: ConferenceAddress = Field(default_factory=ConferenceAddress)
    virtual_option: bool = False
    virtual_link: Optional[str] = None


class EarlyBirdFee(CamelModel):
    amount: float
    deadline: datetime


class ConferenceFees(CamelModel):
    member: float
    non_member: float
    student: float
    early_bird: Optional[EarlyBirdFee] = None


class ConferenceRegistrationSettings(CamelModel):
    is_open: bool = False
    open_date: datetime
    close_date: datetime
    capacity: int = Field(ge=0)
    current_count: int = 0
    waitlist_enabled: bool = False
    fees: ConferenceFees
    required_fields: list[str] = Field(default_factory=list)


class ConferenceMedia(CamelModel):
    image_url: Optional[str] = Field(default=None, alias="imageURL")
    brochure_url: Optional[str] = Field(default=None, alias="brochureURL")
    program_url: Optional[str] = Field(default=None, alias="programURL")


class Conference(CamelModel):
    id: Optional[str] = None
    title: str
    description: str = ""
    year: int
    schedule: ConferenceSchedule
    location: ConferenceLocation
    registration: ConferenceRegistrationSettings
    media: ConferenceMedia = Field(default_factory=ConferenceMedia)
    status: ConferenceStatus = ConferenceStatus.DRAFT


class Participant(CamelModel):
    full_name: str
    email: str
    phone: Optional[str] = None
    institution: str
    membership_id: Optional[str] = None
    membership_status: str


class RegistrationDetails(CamelModel):
    registration_date: datetime
    registration_type: RegistrationType = RegistrationType.REGULAR
    payment_status: PaymentStatus = PaymentStatus.PENDING
    total_amount: float = 0


class RegistrantPreferences(CamelModel):
    dietary_restrictions: Optional[str] = None
    accessibility_needs: Optional[str] = None
    session_preferences: list[str] = Field(default_factory=list)
    networking_opt_in: bool = False


class RegistrantCommunications(CamelModel):
    confirmation_sent: bool = False
    reminders_sent: int = 0


class Registrant(CamelModel):
    id: Optional[str] = None
    conference_id: str
    conference_title: str
    conference_year: int
    participant: Participant
    registration: RegistrationDetails
    preferences: RegistrantPreferences = Field(default_factory=RegistrantPreferences)
    status: RegistrantStatus = RegistrantStatus.REGISTERED
    communications: RegistrantCommunications = Field(default_factory=RegistrantCommunications)


class RegistrationAvailability(CamelModel):
    is_available: bool
    spots_remaining: int
    registration_status: AvailabilityStatus


class ConferenceStatusUpdate(BaseModel):
    status: ConferenceStatus


class RegistrationResponse(CamelModel):
    """Result of a conference registration."""
    success: bool
    message: str
    registrant_id: Optional[str] = None
    status: Optional[RegistrantStatus] = None
    total_amount: Optional[float] = None
    errors: Optional[list[str]] = None
