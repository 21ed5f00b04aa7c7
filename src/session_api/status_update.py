"""Ordered guard checks for session status updates."""

import enum
import json
import logging
import re
from typing import Any

from pydantic import BaseModel
from therapy_common.db_models import SessionStatus

from session_api.exceptions import SessionNotFoundError, SessionUpdateError
from session_api.repositories import SessionRepository
from session_api.response_models import FlattenedSession


class UpdateErrorKind(str, enum.Enum):
    INVALID_ID = "invalid_id"
    INVALID_STATUS = "invalid_status"
    NOT_FOUND = "not_found"
    STORE_FAILURE = "store_failure"


class UpdateFailure(BaseModel, frozen=True):
    """A rejected update, tagged with the reason it was rejected."""

    kind: UpdateErrorKind
    message: str


INVALID_ID_MESSAGE = "Invalid session ID"
INVALID_STATUS_MESSAGE = 'Status must be either "Scheduled" or "Completed"'
NOT_FOUND_MESSAGE = "Session not found"
STORE_FAILURE_MESSAGE = "Failed to update session"

UpdateOutcome = FlattenedSession | UpdateFailure

_SESSION_ID_PATTERN = re.compile(r"^[+-]?\d+$")

logger = logging.getLogger(__name__)


def parse_session_id(raw_id: str) -> int | None:
    """
    Returns the integer identifier, or None if it is not a base-10 integer.

    The whole string must be an optional sign followed by digits; surrounding
    whitespace is ignored. This is stricter than a prefix parse, so "5abc"
    is rejected rather than read as 5.
    """
    if not isinstance(raw_id, str) or not _SESSION_ID_PATTERN.match(raw_id.strip()):
        return None
    return int(raw_id.strip())


def decode_body(raw_body: bytes) -> Any:
    """
    Decodes a JSON request body. An empty body decodes to None.

    Raises:
        ValueError: If the body is not valid UTF-8 JSON.
    """
    if not raw_body or not raw_body.strip():
        return None
    return json.loads(raw_body)


def parse_status(body: Any) -> SessionStatus | None:
    """Returns the requested status, or None if missing or not an allowed value."""
    if not isinstance(body, dict):
        return None
    status = body.get("status")
    if not isinstance(status, str):
        return None
    try:
        return SessionStatus(status)
    except ValueError:
        return None


def apply_status_update(
    raw_id: str, raw_body: bytes, repo: SessionRepository
) -> UpdateOutcome:
    """
    Validates and applies a status update.

    Checks run in a fixed order: identifier, status value, existence.
    The body is only decoded once the identifier has passed; a body that
    is not valid JSON is an unexpected failure, not a validation error.
    The first failing check decides the outcome. No check compares the
    requested status with the current one, so repeating an update succeeds.

    Args:
        raw_id: Session identifier as received in the URL path.
        raw_body: Request body bytes, expected to be a JSON object.
        repo: Repository bound to the request's database session.

    Returns:
        The updated flattened session, or an UpdateFailure.
    """
    session_id = parse_session_id(raw_id)
    if session_id is None:
        return UpdateFailure(kind=UpdateErrorKind.INVALID_ID, message=INVALID_ID_MESSAGE)

    try:
        body = decode_body(raw_body)
    except ValueError:
        logger.exception(
            "Failed to decode update request body", extra={"session_id": session_id}
        )
        return UpdateFailure(
            kind=UpdateErrorKind.STORE_FAILURE, message=STORE_FAILURE_MESSAGE
        )

    status = parse_status(body)
    if status is None:
        return UpdateFailure(
            kind=UpdateErrorKind.INVALID_STATUS, message=INVALID_STATUS_MESSAGE
        )

    try:
        return repo.update_status(session_id, status)
    except SessionNotFoundError:
        return UpdateFailure(kind=UpdateErrorKind.NOT_FOUND, message=NOT_FOUND_MESSAGE)
    except SessionUpdateError as e:
        logger.exception(
            "Failed to update session",
            extra={"session_id": session_id, "cause": repr(e.cause)},
        )
        return UpdateFailure(
            kind=UpdateErrorKind.STORE_FAILURE, message=STORE_FAILURE_MESSAGE
        )
