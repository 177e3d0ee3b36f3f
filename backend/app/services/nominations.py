"""
Award nominations and student membership applications.
"""
import logging
from datetime import datetime, timezone
from typing import Any

from app.core.exceptions import WriteError
from app.db.store import DocumentStore, where
from app.schemas.submissions import AwardNomination, StudentApplication, SubmissionStatus
from app.services.documents import load_collection

logger = logging.getLogger(__name__)

NOMINATIONS_COLLECTION = "awardNominations"
STUDENT_APPLICATIONS_COLLECTION = "studentApplicants"


async def create_nomination(store: DocumentStore, nomination: dict[str, Any]) -> str:
    """Store a normalized nomination. Raises WriteError on store failure."""
    data = {**nomination, "submissionDate": datetime.now(timezone.utc)}
    try:
        nomination_id = await store.add(NOMINATIONS_COLLECTION, data)
    except Exception as exc:
        logger.error(f"Error creating nomination: {exc}")
        raise WriteError("Failed to submit nomination") from exc

    logger.info(f"Nomination {nomination_id} submitted for award {nomination.get('awardId')}")
    return nomination_id


async def get_nominations_by_award(store: DocumentStore, award_id: str) -> list[AwardNomination]:
    return await load_collection(
        store, NOMINATIONS_COLLECTION, AwardNomination, "nominations",
        filters=[where("awardId", "==", award_id)],
        order_by="submissionDate", descending=True,
    )


async def create_student_application(store: DocumentStore, form: dict[str, Any]) -> str:
    """Store a validated student membership application as ``pending``."""
    application = StudentApplication(
        personal_info=form["personalInfo"],
        academic_info=form["academicInfo"],
        essay=form["essay"],
        references=form["references"],
        status=SubmissionStatus.PENDING,
        submission_date=datetime.now(timezone.utc),
    )
    try:
        application_id = await store.add(
            STUDENT_APPLICATIONS_COLLECTION, application.to_document()
        )
    except Exception as exc:
        logger.error(f"Error creating student application: {exc}")
        raise WriteError("Failed to submit application") from exc

    logger.info(f"Student application {application_id} submitted")
    return application_id
