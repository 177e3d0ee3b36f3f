"""
Pydantic schemas for member and organization documents (flat shape).
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from pydantic import Field, model_validator

from app.schemas.common import CamelModel


class MemberStatus(str, Enum):
    """Member lifecycle states. Members are never hard-deleted in normal flow."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    PENDING = "pending"
    EXPIRED = "expired"


class OrganizationType(str, Enum):
    SCHOOL = "school"
    COLLEGE = "college"
    UNIVERSITY = "university"
    BUSINESS = "business"
    GOVERNMENT = "government"
    NONPROFIT = "nonprofit"
    OTHER = "other"


BOARD_POSITIONS_BY_ORDER: dict[int, str] = {
    1: "President",
    2: "Vice President",
    3: "Secretary",
    4: "Treasurer",
    5: "Past President",
}


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class CommunicationPreferences(CamelModel):
    newsletter: bool = False
    updates: bool = False
    events: bool = True
    mailings: bool = False


class Member(CamelModel):
    """A member document in the flat schema."""
    id: Optional[str] = None

    # Personal information
    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: Optional[str] = None

    # Organization and professional details
    organization_id: Optional[str] = None
    position: str = ""
    years_experience: int = Field(default=0, ge=0)
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""

    # Membership
    member_number: Optional[str] = None
    membership_type: str = "professional"
    status: MemberStatus = MemberStatus.PENDING
    join_date: datetime
    renewal_date: Optional[datetime] = None
    expiration_date: Optional[datetime] = None

    # Board service
    is_board_member: bool = False
    board_position: Optional[str] = None
    board_order: Optional[int] = None
    board_start_date: Optional[datetime] = None

    # Hall of fame
    is_hall_of_fame: bool = False
    hall_of_fame_year: Optional[int] = None
    hall_of_fame_award_type: Optional[str] = None
    hall_of_fame_order: Optional[int] = None

    # Profile
    bio: str = ""
    image_url: Optional[str] = None
    achievements: list[str] = Field(default_factory=list)

    communication_preferences: CommunicationPreferences = Field(
        default_factory=CommunicationPreferences
    )
    payment_history: list[dict[str, Any]] = Field(default_factory=list)
    notes: str = ""

    # Audit
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @model_validator(mode="after")
    def check_invariants(self) -> "Member":
        if self.is_board_member and not self.board_position:
            raise ValueError("boardPosition is required for board members")

        joined = _as_utc(self.join_date)
        for label, value in (
            ("renewalDate", self.renewal_date),
            ("expirationDate", self.expiration_date),
        ):
            if value is not None and _as_utc(value) < joined:
                raise ValueError(f"{label} must not be earlier than joinDate")
        return self


class OrganizationAddress(CamelModel):
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""


class OrganizationContact(CamelModel):
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None


class Organization(CamelModel):
    id: Optional[str] = None
    name: str
    type: OrganizationType = OrganizationType.OTHER
    address: OrganizationAddress = Field(default_factory=OrganizationAddress)
    contact: OrganizationContact = Field(default_factory=OrganizationContact)
    is_active: bool = True
    notes: Optional[str] = None


class MembershipPaymentResponse(CamelModel):
    """Outcome of a professional membership application."""
    success: bool
    message: str
    member_id: Optional[str] = None
    payment_url: Optional[str] = None
    failure_url: Optional[str] = None
    error: Optional[str] = None
    errors: Optional[list[str]] = None
