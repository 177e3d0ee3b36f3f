"""
Conference registration and cancellation.
"""
import json
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse

from app.core.deps import get_store
from app.core.exceptions import (
    DocumentNotFoundError,
    FetchError,
    RegistrationUnavailableError,
    WriteError,
)
from app.db.store import DocumentStore
from app.schemas.conference import Registrant, RegistrantStatus, RegistrationResponse
from app.services.conference import cancel_registration, get_conference, register_for_conference
from app.services.validation import (
    sanitize_registration_data,
    validate_conference_registration_form,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _respond(status_code: int, body: RegistrationResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


@router.post("/{conference_id}/registrations", response_model=RegistrationResponse)
async def register(
    conference_id: str,
    request: Request,
    store: DocumentStore = Depends(get_store),
):
    """
    Register for a conference.

    Returns 409 when registration is closed, not yet open, or full without
    a waitlist.
    """
    try:
        raw = await request.json()
    except json.JSONDecodeError:
        return _respond(status.HTTP_400_BAD_REQUEST, RegistrationResponse(
            success=False, message="Invalid request body",
        ))

    result = validate_conference_registration_form(raw)
    if not result.is_valid:
        return _respond(status.HTTP_400_BAD_REQUEST, RegistrationResponse(
            success=False, message="Form validation failed", errors=result.errors,
        ))

    try:
        conference = await get_conference(store, conference_id)
    except FetchError as exc:
        return _respond(status.HTTP_503_SERVICE_UNAVAILABLE, RegistrationResponse(
            success=False, message=exc.message,
        ))
    if conference is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Conference not found")

    try:
        registrant = await register_for_conference(
            store, conference, sanitize_registration_data(result.data)
        )
    except RegistrationUnavailableError as exc:
        return _respond(status.HTTP_409_CONFLICT, RegistrationResponse(
            success=False,
            message=f"Registration is {exc.registration_status.replace('_', ' ')}",
        ))
    except WriteError as exc:
        return _respond(status.HTTP_503_SERVICE_UNAVAILABLE, RegistrationResponse(
            success=False, message=exc.message,
        ))

    if registrant.status == RegistrantStatus.WAITLISTED:
        message = "The conference is full. You have been added to the waitlist."
    else:
        message = "Registration successful! A confirmation will be sent to your email."
    return _respond(status.HTTP_200_OK, RegistrationResponse(
        success=True,
        message=message,
        registrant_id=registrant.id,
        status=registrant.status,
        total_amount=registrant.registration.total_amount,
    ))


@router.post("/registrations/{registrant_id}/cancel", response_model=Registrant)
async def cancel(registrant_id: str, store: DocumentStore = Depends(get_store)):
    try:
        return await cancel_registration(store, registrant_id)
    except DocumentNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message)
