from therapy_common.config import DatabaseConfig
from therapy_common.db_models import Patient, Session, SessionStatus, Therapist
from therapy_common.logging import setup_logging

__all__ = [
    "setup_logging",
    "DatabaseConfig",
    "Patient",
    "Session",
    "SessionStatus",
    "Therapist",
]
