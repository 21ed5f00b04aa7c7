"""Repository for session data access."""

from typing import List

from sqlmodel import Session as DBSession
from sqlmodel import select
from therapy_common.db_models import Patient, SessionStatus, Therapist
from therapy_common.db_models import Session as SessionEntity

from session_api.exceptions import (
    SessionFetchError,
    SessionNotFoundError,
    SessionUpdateError,
)
from session_api.response_models import FlattenedSession, PatientRead, TherapistRead


def flatten_session(
    session: SessionEntity, therapist: Therapist, patient: Patient
) -> FlattenedSession:
    """Builds the API representation with names copied to the top level."""
    return FlattenedSession(
        id=session.id,
        therapist_name=therapist.name,
        patient_name=patient.name,
        date=session.date,
        status=session.status,
        therapist=TherapistRead(id=therapist.id, name=therapist.name),
        patient=PatientRead(id=patient.id, name=patient.name),
    )


class SessionRepository:
    """
    Handles all database operations for sessions.

    Encapsulates SQL queries and returns API records,
    keeping the HTTP layer free of database concerns.
    """

    def __init__(self, db_session: DBSession):
        self._db = db_session

    def list_all(self) -> List[FlattenedSession]:
        """
        Retrieves every session with its therapist and patient, oldest first.

        Raises:
            SessionFetchError: If the query fails.
        """
        statement = (
            select(SessionEntity, Therapist, Patient)
            .join(Therapist, SessionEntity.therapist_id == Therapist.id)
            .join(Patient, SessionEntity.patient_id == Patient.id)
            .order_by(SessionEntity.date.asc())
        )
        try:
            results = self._db.exec(statement).all()
        except Exception as e:
            raise SessionFetchError(cause=e) from e

        return [
            flatten_session(session, therapist, patient)
            for session, therapist, patient in results
        ]

    def update_status(
        self, session_id: int, status: SessionStatus
    ) -> FlattenedSession:
        """
        Sets the status of a single session and returns the refreshed record.

        Only the status column is written. Setting a session to the status
        it already has is accepted and leaves the row unchanged.

        Args:
            session_id: Identifier of the session to update.
            status: The new status value.

        Raises:
            SessionNotFoundError: If the session does not exist.
            SessionUpdateError: If the database read or write fails.
        """
        try:
            session = self._db.get(SessionEntity, session_id)
        except Exception as e:
            raise SessionUpdateError(session_id, cause=e) from e

        if session is None:
            raise SessionNotFoundError(session_id)

        try:
            session.status = status
            self._db.add(session)
            self._db.commit()
            self._db.refresh(session)
            return flatten_session(session, session.therapist, session.patient)
        except Exception as e:
            self._db.rollback()
            raise SessionUpdateError(session_id, cause=e) from e
