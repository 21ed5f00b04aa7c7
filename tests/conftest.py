import os
from datetime import datetime

# Must be set before the app module builds its engine and tracer
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DD_TRACE_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine, select

from session_api.dependencies import get_db_session
from session_api.main import app
from therapy_common.db_models import Patient, SessionStatus, Therapist
from therapy_common.db_models import Session as SessionEntity


@pytest.fixture
def engine():
    """In-memory SQLite engine shared by the test and the app under test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def opened_sessions():
    """Records every request-scoped DB session and whether it was closed."""
    return []


@pytest.fixture
def client(engine, opened_sessions):
    def _get_test_db_session():
        record = {"closed": False}
        opened_sessions.append(record)
        try:
            with Session(engine) as session:
                yield session
        finally:
            record["closed"] = True

    app.dependency_overrides[get_db_session] = _get_test_db_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_session(db_session):
    """Creates a session row, reusing therapists and patients by name."""

    def _get_or_create(model, name):
        existing = db_session.exec(select(model).where(model.name == name)).first()
        if existing:
            return existing
        person = model(name=name)
        db_session.add(person)
        db_session.commit()
        db_session.refresh(person)
        return person

    def _make(
        therapist_name="Ana Ruiz",
        patient_name="Leo Park",
        date=datetime(2024, 1, 1, 9, 0),
        status=SessionStatus.SCHEDULED,
    ) -> SessionEntity:
        therapist = _get_or_create(Therapist, therapist_name)
        patient = _get_or_create(Patient, patient_name)
        session = SessionEntity(
            date=date,
            status=status,
            therapist_id=therapist.id,
            patient_id=patient.id,
        )
        db_session.add(session)
        db_session.commit()
        db_session.refresh(session)
        return session

    return _make
