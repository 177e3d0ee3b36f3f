"""
Domain exceptions raised by the store and the accessor services.

Routers translate these into HTTP responses; accessors wrap transport
failures so callers only ever see the public message.
"""
from typing import Optional


class StoreError(Exception):
    """Base class for document store failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FetchError(StoreError):
    """A read from the store failed ("Failed to fetch board members")."""


class WriteError(StoreError):
    """A create/update against the store failed."""


class DocumentNotFoundError(StoreError):
    """The addressed document does not exist."""

    def __init__(self, collection: str, document_id: str, message: Optional[str] = None):
        super().__init__(message or f"Document {collection}/{document_id} not found")
        self.collection = collection
        self.document_id = document_id


class RegistrationUnavailableError(Exception):
    """A conference is not accepting registrations (closed, full, not started)."""

    def __init__(self, conference_id: str, registration_status: str):
        super().__init__(f"Registration for {conference_id} is {registration_status}")
        self.conference_id = conference_id
        self.registration_status = registration_status


class InvalidStatusTransitionError(Exception):
    """A conference status change that the lifecycle does not allow."""

    def __init__(self, current: str, requested: str):
        super().__init__(f"Cannot change conference status from {current} to {requested}")
        self.current = current
        self.requested = requested
