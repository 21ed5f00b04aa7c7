import enum
from datetime import datetime
from typing import List, Optional

from sqlalchemy import Column, DateTime
from sqlalchemy import Enum as SAEnum
from sqlmodel import Field, Relationship, SQLModel


class SessionStatus(str, enum.Enum):
    SCHEDULED = "Scheduled"
    COMPLETED = "Completed"


def enum_values(enum_cls):
    """Return persisted DB values for SAEnum mappings."""
    return [member.value for member in enum_cls]


class Therapist(SQLModel, table=True):
    __tablename__ = "therapists"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)

    sessions: List["Session"] = Relationship(back_populates="therapist")


class Patient(SQLModel, table=True):
    __tablename__ = "patients"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)

    sessions: List["Session"] = Relationship(back_populates="patient")


class Session(SQLModel, table=True):
    __tablename__ = "sessions"

    id: Optional[int] = Field(default=None, primary_key=True)
    date: datetime = Field(
        sa_column=Column(DateTime(timezone=False), index=True, nullable=False)
    )
    status: SessionStatus = Field(
        default=SessionStatus.SCHEDULED,
        sa_column=Column(
            SAEnum(
                SessionStatus,
                name="session_status",
                values_callable=enum_values,
            ),
            nullable=False,
        ),
    )
    therapist_id: int = Field(foreign_key="therapists.id")
    patient_id: int = Field(foreign_key="patients.id")

    therapist: Therapist = Relationship(back_populates="sessions")
    patient: Patient = Relationship(back_populates="sessions")
