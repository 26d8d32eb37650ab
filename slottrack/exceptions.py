"""Typed errors raised by the service layer.

Every error carries a machine-readable ``code`` and an HTTP status so the API
layer can render it without parsing messages:

    SlotTrackError
    +-- InvalidArgument   400  invalid_argument
    +-- NotFound          404  <entity>_not_found
    +-- Conflict          409  <reason>, e.g. slot_occupied
    +-- StorageError      503  storage_error
"""


class SlotTrackError(Exception):
    code: str = "error"
    status_code: int = 500

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def to_dict(self) -> dict:
        return {"detail": self.message, "code": self.code}


class InvalidArgument(SlotTrackError):
    """A required field is missing or a value is malformed."""

    code = "invalid_argument"
    status_code = 400

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict:
        return {**super().to_dict(), "field": self.field}


class NotFound(SlotTrackError):
    """A referenced row does not exist. ``entity`` tells the UI which field to highlight."""

    status_code = 404

    def __init__(self, entity: str, entity_id: int | str | None = None):
        label = entity.replace("_", " ").capitalize()
        message = f"{label} {entity_id} not found" if entity_id is not None else f"{label} not found"
        super().__init__(message, code=f"{entity}_not_found")
        self.entity = entity
        self.entity_id = entity_id

    def to_dict(self) -> dict:
        return {**super().to_dict(), "entity": self.entity}


class Conflict(SlotTrackError):
    status_code = 409

    def __init__(self, reason: str, message: str):
        super().__init__(message, code=reason)
        self.reason = reason


class StorageError(SlotTrackError):
    """The database failed underneath us (connection loss, deadlock, unexpected constraint)."""

    code = "storage_error"
    status_code = 503

    def __init__(self, message: str = "Storage is temporarily unavailable, please retry"):
        super().__init__(message)
