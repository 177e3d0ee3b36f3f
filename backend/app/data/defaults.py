"""
Static fallback content served when the document store is unreachable.

These are plain, immutable data. Routers pass them explicitly to
``fetch_with_fallback`` at the call site; nothing reads them implicitly.
"""
from datetime import datetime, timezone

from app.schemas.conference import Conference
from app.schemas.content import (
    BoardMember,
    HallOfFameMember,
    HomepageContent,
    PastPresident,
    Sponsor,
)

DEFAULT_BOARD_MEMBERS: tuple[BoardMember, ...] = (
    BoardMember(
        id="1",
        name="Sarah Johnson",
        title="President",
        bio="Sarah has been an advocate for business education for over 15 years, "
            "bringing innovative teaching methods to the classroom.",
        order=1,
    ),
    BoardMember(
        id="2",
        name="Michael Chen",
        title="Vice President",
        bio="Michael specializes in entrepreneurship education and has helped "
            "launch numerous student business ventures.",
        order=2,
    ),
    BoardMember(
        id="3",
        name="Jennifer Rodriguez",
        title="Secretary",
        bio="Jennifer focuses on curriculum development and has authored several "
            "business education textbooks.",
        order=3,
    ),
    BoardMember(
        id="4",
        name="David Thompson",
        title="Treasurer",
        bio="David brings financial expertise and has been instrumental in "
            "securing funding for educational programs.",
        order=4,
    ),
)

# Order 1 is the most recent term.
DEFAULT_PAST_PRESIDENTS: tuple[PastPresident, ...] = (
    PastPresident(id="1", name="Robert Williams", term="2022-2023", order=1),
    PastPresident(id="2", name="Maria Garcia", term="2021-2022", order=2),
    PastPresident(id="3", name="James Smith", term="2020-2021", order=3),
    PastPresident(id="4", name="Patricia Davis", term="2019-2020", order=4),
    PastPresident(id="5", name="Christopher Brown", term="2018-2019", order=5),
)

DEFAULT_SPONSORS: tuple[Sponsor, ...] = (
    Sponsor(
        id="1",
        name="Sample Sponsor 1",
        logo_url="/placeholder-logo.png",
        website="https://example.com",
        order=1,
    ),
    Sponsor(
        id="2",
        name="Sample Sponsor 2",
        logo_url="/placeholder-logo.png",
        website="https://example.com",
        order=2,
    ),
)

DEFAULT_HOMEPAGE_CONTENT = HomepageContent(
    hero_title="New Hampshire Business Educators Association",
    hero_subtitle="Promoting excellence in business education throughout New Hampshire",
    mission_title="Our Mission",
    mission_content=(
        "The New Hampshire Business Educators Association is dedicated to promoting "
        "excellence in business education through professional development, "
        "networking, and advocacy for educators across the state."
    ),
    about_title="About NHBEA",
    about_content=(
        "Founded to support business educators in New Hampshire, NHBEA provides "
        "resources, professional development opportunities, and a community for "
        "educators to share best practices and advance the field of business education."
    ),
)

DEFAULT_HALL_OF_FAME_MEMBERS: tuple[HallOfFameMember, ...] = (
    HallOfFameMember(
        id="1",
        name="Distinguished Educator",
        year=2024,
        award_type="business_educator_of_the_year",
        bio="A dedicated educator who has made significant contributions to "
            "business education in New Hampshire.",
        image_url="",
        achievements=["Teacher of the Year 2023", "Curriculum Innovation Award"],
        order=1,
    ),
)

DEFAULT_CONFERENCE = Conference.model_validate({
    "id": "conference-2025",
    "title": "2025 NHBEA Annual Conference",
    "description": (
        "Join us for our annual conference featuring the latest in business "
        "education trends, networking opportunities, and professional "
        "development sessions."
    ),
    "year": 2025,
    "schedule": {
        "date": datetime(2025, 10, 15, tzinfo=timezone.utc),
        "startTime": "09:00",
        "endTime": "17:00",
        "timezone": "America/New_York",
    },
    "location": {
        "venue": "Manchester Downtown Hotel",
        "address": {
            "street": "700 Elm St",
            "city": "Manchester",
            "state": "NH",
            "zipCode": "03101",
        },
        "virtualOption": False,
    },
    "registration": {
        "isOpen": True,
        "openDate": datetime(2025, 7, 1, tzinfo=timezone.utc),
        "closeDate": datetime(2025, 10, 10, tzinfo=timezone.utc),
        "capacity": 150,
        "currentCount": 0,
        "waitlistEnabled": True,
        "fees": {
            "member": 100,
            "nonMember": 150,
            "student": 50,
            "earlyBird": {
                "amount": 75,
                "deadline": datetime(2025, 9, 1, tzinfo=timezone.utc),
            },
        },
        "requiredFields": ["fullName", "email", "institution"],
    },
    "media": {"imageURL": "/images/conference-2025.jpg"},
    "status": "registration_open",
})
