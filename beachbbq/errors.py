# beachbbq/errors.py
from fastapi import status


class BookingError(Exception):
    """Base class for domain failures; carries the HTTP status it maps to."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BookingError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(BookingError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(BookingError):
    status_code = status.HTTP_409_CONFLICT


class CapacityExceededError(ConflictError):
    pass


class InvalidTransitionError(ConflictError):
    def __init__(self, axis: str, current: str, requested: str):
        super().__init__(f"Cannot change {axis} from '{current}' to '{requested}'")
        self.axis = axis
        self.current = current
        self.requested = requested


class EquipmentUnavailableError(ConflictError):
    pass


class UpstreamError(BookingError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
