"""
Student membership applications (reviewed by the board, no payment).
"""
import json

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.core.deps import get_store
from app.core.exceptions import WriteError
from app.db.store import DocumentStore
from app.schemas.common import SubmissionResponse
from app.services.nominations import create_student_application
from app.services.validation import validate_student_membership_form

router = APIRouter()


def _respond(status_code: int, body: SubmissionResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.post("/student", response_model=SubmissionResponse)
async def apply_student_membership(
    request: Request,
    store: DocumentStore = Depends(get_store),
):
    try:
        raw = await request.json()
    except json.JSONDecodeError:
        return _respond(status.HTTP_400_BAD_REQUEST, SubmissionResponse(
            success=False, message="Invalid request body", error="Request body must be JSON",
        ))

    result = validate_student_membership_form(raw)
    if not result.is_valid:
        return _respond(status.HTTP_400_BAD_REQUEST, SubmissionResponse(
            success=False, message="Form validation failed", errors=result.errors,
        ))

    try:
        application_id = await create_student_application(store, result.data)
    except WriteError as exc:
        return _respond(status.HTTP_503_SERVICE_UNAVAILABLE, SubmissionResponse(
            success=False,
            message="Unable to submit your application at this time. Please try again later.",
            error=exc.message,
        ))

    return _respond(status.HTTP_200_OK, SubmissionResponse(
        success=True,
        message="Thank you! Your student membership application has been submitted.",
        id=application_id,
    ))
