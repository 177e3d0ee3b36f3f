"""
Award nomination submission.

Response contract:
- 200 ``{success, message, nominationId}``
- 400 validation failure, errors joined into ``error``
- 503 the store rejected the write
- 500 anything else, including an unparseable body
"""
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.core.deps import get_store
from app.core.exceptions import WriteError
from app.db.store import DocumentStore
from app.schemas.submissions import NominationResponse
from app.services.nominations import create_nomination
from app.services.validation import normalize_nomination, validate_award_nomination_form

logger = logging.getLogger(__name__)

router = APIRouter()

SUCCESS_MESSAGE = (
    "Nomination submitted successfully! "
    "Thank you for recognizing excellence in business education."
)


def _respond(status_code: int, body: NominationResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


@router.post("", response_model=NominationResponse)
async def submit_nomination(request: Request, store: DocumentStore = Depends(get_store)):
    try:
        raw = await request.json()
        result = validate_award_nomination_form(raw)
        if not result.is_valid:
            return _respond(status.HTTP_400_BAD_REQUEST, NominationResponse(
                success=False,
                message="Form validation failed",
                error=", ".join(result.errors),
            ))

        nomination_id = await create_nomination(store, normalize_nomination(result.data))
    except WriteError as exc:
        logger.error(f"Nomination write failed: {exc.message}")
        return _respond(status.HTTP_503_SERVICE_UNAVAILABLE, NominationResponse(
            success=False,
            message="Unable to submit nomination at this time. Please try again later.",
            error="Database error",
        ))
    except Exception as exc:
        logger.exception("Unexpected error submitting nomination")
        return _respond(status.HTTP_500_INTERNAL_SERVER_ERROR, NominationResponse(
            success=False,
            message="An unexpected error occurred. Please try again.",
            error=str(exc),
        ))

    return _respond(status.HTTP_200_OK, NominationResponse(
        success=True,
        message=SUCCESS_MESSAGE,
        nomination_id=nomination_id,
    ))
