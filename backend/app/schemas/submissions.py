"""
Stored shapes for public submissions: newsletter subscribers, award
nominations and student membership applications.
"""
from datetime import datetime
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field

from app.schemas.common import CamelModel


class SubscriberStatus(str, Enum):
    ACTIVE = "active"
    PENDING = "pending"
    UNSUBSCRIBED = "unsubscribed"


class NewsletterSubscriber(CamelModel):
    """Keyed by the normalized email address."""
    email: str
    timestamp: datetime
    status: SubscriberStatus = SubscriberStatus.ACTIVE


class NewsletterRequest(BaseModel):
    email: str


class NewsletterResult(BaseModel):
    success: bool
    message: str
    error: Optional[str] = None


class SubmissionStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class NominationPersonInfo(CamelModel):
    name: str
    email: str
    organization: Optional[str] = None
    position: Optional[str] = None


class AwardNomination(CamelModel):
    id: Optional[str] = None
    award_id: str
    award_category: str
    nominee_info: NominationPersonInfo
    nominator_info: NominationPersonInfo
    nomination_text: str
    status: SubmissionStatus = SubmissionStatus.PENDING
    submission_date: Optional[datetime] = None


class StudentApplication(CamelModel):
    id: Optional[str] = None
    personal_info: dict[str, Any]
    academic_info: dict[str, Any]
    essay: str
    references: list[dict[str, Any]] = Field(default_factory=list)
    status: SubmissionStatus = SubmissionStatus.PENDING
    submission_date: Optional[datetime] = None


class NominationResponse(CamelModel):
    success: bool
    message: str
    error: Optional[str] = None
    nomination_id: Optional[str] = None
