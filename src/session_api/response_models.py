from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from therapy_common.db_models import SessionStatus


class TherapistRead(BaseModel):
    """Therapist as embedded in a session response."""

    id: int
    name: str


class PatientRead(BaseModel):
    """Patient as embedded in a session response."""

    id: int
    name: str


class FlattenedSession(BaseModel):
    """
    Session with therapist and patient names lifted to the top level.

    Serialized with camelCase keys (``therapistName``, ``patientName``)
    for the dashboard, while keeping the nested related records.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    therapist_name: str
    patient_name: str
    date: datetime
    status: SessionStatus
    therapist: TherapistRead
    patient: PatientRead


class ErrorResponse(BaseModel):
    """Error payload returned for every failed request."""

    error: str
