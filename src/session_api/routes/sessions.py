"""Session-related API endpoints."""

from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlmodel import Session as DBSession
from therapy_common.logging import setup_logging

from session_api.dependencies import get_db_session, get_session_repository
from session_api.exceptions import SessionFetchError
from session_api.repositories import SessionRepository
from session_api.response_models import ErrorResponse, FlattenedSession
from session_api.status_update import (
    UpdateErrorKind,
    UpdateFailure,
    apply_status_update,
)

logger = setup_logging()

router = APIRouter(prefix="/api/sessions", tags=["sessions"])

DBSessionDep = Annotated[DBSession, Depends(get_db_session)]

_FAILURE_STATUS_CODES = {
    UpdateErrorKind.INVALID_ID: 400,
    UpdateErrorKind.INVALID_STATUS: 400,
    UpdateErrorKind.NOT_FOUND: 404,
    UpdateErrorKind.STORE_FAILURE: 500,
}


def _get_repository(db_session: DBSessionDep) -> SessionRepository:
    """Dependency that creates a repository with an injected DB session."""
    return get_session_repository(db_session)


RepositoryDep = Annotated[SessionRepository, Depends(_get_repository)]


async def _read_raw_body(request: Request) -> bytes:
    """Dependency that hands the undecoded body to the update guards."""
    return await request.body()


RawBodyDep = Annotated[bytes, Depends(_read_raw_body)]


@router.get(
    "",
    response_model=List[FlattenedSession],
    responses={500: {"model": ErrorResponse}},
)
def list_sessions(repo: RepositoryDep):
    """Returns all sessions with therapist and patient, ordered by date."""
    try:
        return repo.list_all()
    except SessionFetchError as e:
        logger.error("Error fetching sessions", extra={"cause": repr(e.cause)})
        raise HTTPException(status_code=500, detail="Failed to fetch sessions")
    except Exception:
        logger.exception("Error fetching sessions")
        raise HTTPException(status_code=500, detail="Failed to fetch sessions")


@router.patch(
    "/{session_id}",
    response_model=FlattenedSession,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def update_session(
    session_id: str,
    repo: RepositoryDep,
    raw_body: RawBodyDep,
):
    """Sets the status of a session and returns the updated record."""
    try:
        outcome = apply_status_update(session_id, raw_body, repo)
    except Exception:
        logger.exception("Error updating session", extra={"session_id": session_id})
        raise HTTPException(status_code=500, detail="Failed to update session")

    if isinstance(outcome, UpdateFailure):
        raise HTTPException(
            status_code=_FAILURE_STATUS_CODES[outcome.kind], detail=outcome.message
        )

    logger.info(
        "Session status updated",
        extra={"session_id": outcome.id, "status": outcome.status.value},
    )
    return outcome
