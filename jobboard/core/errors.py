"""Domain errors raised by repositories and rendered by the app-level handler."""

from sqlalchemy.exc import IntegrityError

EMAIL_IN_USE_MESSAGE = "This email address is already in use by another company profile."
INVALID_STATUS_MESSAGE = "Invalid value for a status field."


class JobBoardError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidOperationError(JobBoardError):
    status_code = 400


class NotFoundError(JobBoardError):
    status_code = 404


class ConflictError(JobBoardError):
    status_code = 409


def integrity_error_message(exc: IntegrityError) -> str | None:
    """Translate the constraint violations users can trigger into readable text."""
    detail = str(getattr(exc, "orig", exc)).lower()
    if "official_email" in detail:
        return EMAIL_IN_USE_MESSAGE
    if "check constraint" in detail or "violates check" in detail:
        return INVALID_STATUS_MESSAGE
    return None
