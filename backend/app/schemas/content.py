"""
Schemas for public site content: board, past presidents, sponsors,
hall of fame and the editable homepage copy.
"""
from typing import Optional
from pydantic import Field

from app.schemas.common import CamelModel


class BoardMember(CamelModel):
    """Board member in display shape (also the legacy ``boardMembers`` document)."""
    id: Optional[str] = None
    name: str
    title: str
    bio: str = ""
    image_url: Optional[str] = Field(default=None, alias="imageURL")
    order: Optional[int] = None


class PastPresident(CamelModel):
    id: Optional[str] = None
    name: str
    term: str
    order: int


class Sponsor(CamelModel):
    id: Optional[str] = None
    name: str
    logo_url: Optional[str] = Field(default=None, alias="logoURL")
    website: Optional[str] = None
    order: int = 999


class HallOfFameMember(CamelModel):
    id: Optional[str] = None
    member_id: Optional[str] = None
    name: str
    year: int
    award_type: str = "other"
    bio: str = ""
    image_url: Optional[str] = None
    achievements: list[str] = Field(default_factory=list)
    order: int = 999


class HomepageContent(CamelModel):
    """Singleton document ``content/homepage``."""
    hero_title: str
    hero_subtitle: str
    hero_image_url: Optional[str] = Field(default=None, alias="heroImageURL")
    mission_title: str
    mission_content: str
    about_title: str
    about_content: str


class ContentSection(CamelModel):
    id: Optional[str] = None
    title: str
    content: str = ""
    image_url: Optional[str] = Field(default=None, alias="imageURL")
    order: int = 999
