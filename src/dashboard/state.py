"""
Dashboard state and the pure functions that drive it.

The view keeps one DashboardState record per browser session. Every user
action or network result is applied through a reducer that returns a new
record; the filtered list, summary counts and empty-state choice are derived
from the record on each render and never stored.
"""

import enum
from datetime import datetime
from typing import Iterable, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from therapy_common.db_models import SessionStatus

StatusFilter = Literal["All", "Scheduled", "Completed"]

STATUS_FILTER_OPTIONS: Tuple[StatusFilter, ...] = ("All", "Scheduled", "Completed")

_STATUS_FILTER_LABELS = {
    "All": "All statuses",
    "Scheduled": "Scheduled",
    "Completed": "Completed",
}


class PersonRef(BaseModel, frozen=True):
    """Therapist or patient as nested in a session record."""

    id: int
    name: str


class SessionRow(BaseModel):
    """A flattened session record as returned by the API."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    id: int
    therapist_name: str
    patient_name: str
    date: datetime
    status: SessionStatus
    therapist: Optional[PersonRef] = None
    patient: Optional[PersonRef] = None


class DashboardState(BaseModel, frozen=True):
    """Everything the dashboard needs to render, in one serializable record."""

    sessions: Tuple[SessionRow, ...] = ()
    loading: bool = True
    error: Optional[str] = None
    updating_id: Optional[int] = None
    search: str = ""
    status_filter: StatusFilter = "All"
    is_status_menu_open: bool = False
    is_mobile_nav_open: bool = False


class SessionSummary(BaseModel, frozen=True):
    therapist_count: int
    patient_count: int
    scheduled_count: int
    completed_count: int


class EmptyState(str, enum.Enum):
    LOADING = "loading"
    NO_SESSIONS = "no_sessions"
    NO_MATCHES = "no_matches"


# Derivations


def matches_search(session: SessionRow, search: str) -> bool:
    """Case-insensitive substring match on therapist or patient name."""
    if not search:
        return True
    needle = search.lower()
    return (
        needle in session.therapist_name.lower()
        or needle in session.patient_name.lower()
    )


def matches_status(session: SessionRow, status_filter: StatusFilter) -> bool:
    return status_filter == "All" or session.status.value == status_filter


def filter_sessions(state: DashboardState) -> Tuple[SessionRow, ...]:
    return tuple(
        s
        for s in state.sessions
        if matches_search(s, state.search) and matches_status(s, state.status_filter)
    )


def summarize(sessions: Iterable[SessionRow]) -> SessionSummary:
    """Counts over the full, unfiltered session list."""
    sessions = list(sessions)
    return SessionSummary(
        therapist_count=len({s.therapist_name for s in sessions}),
        patient_count=len({s.patient_name for s in sessions}),
        scheduled_count=sum(1 for s in sessions if s.status == SessionStatus.SCHEDULED),
        completed_count=sum(1 for s in sessions if s.status == SessionStatus.COMPLETED),
    )


def empty_state(state: DashboardState) -> Optional[EmptyState]:
    """Which placeholder to show instead of the table, if any."""
    if state.loading:
        return EmptyState.LOADING
    if not state.sessions:
        return EmptyState.NO_SESSIONS
    if not filter_sessions(state):
        return EmptyState.NO_MATCHES
    return None


def can_mark_completed(state: DashboardState, session: SessionRow) -> bool:
    """Only scheduled sessions without an update in flight expose the action."""
    return (
        session.status == SessionStatus.SCHEDULED
        and state.updating_id != session.id
    )


def status_filter_label(status_filter: StatusFilter) -> str:
    return _STATUS_FILTER_LABELS[status_filter]


def format_session_date(value: datetime) -> str:
    """Formats as e.g. 'Jan 3, 2024, 09:00 AM'."""
    return f"{value:%b} {value.day}, {value.year}, {value:%I:%M %p}"


def replace_session(
    sessions: Iterable[SessionRow], updated: SessionRow
) -> Tuple[SessionRow, ...]:
    """Swaps in the updated record wherever its id appears; order is kept."""
    return tuple(updated if s.id == updated.id else s for s in sessions)


# Reducers


def start_loading(state: DashboardState) -> DashboardState:
    return state.model_copy(update={"loading": True, "error": None})


def sessions_loaded(
    state: DashboardState, sessions: Iterable[SessionRow]
) -> DashboardState:
    return state.model_copy(update={"sessions": tuple(sessions), "loading": False})


def load_failed(state: DashboardState, message: str) -> DashboardState:
    return state.model_copy(update={"error": message, "loading": False})


def start_update(state: DashboardState, session_id: int) -> DashboardState:
    return state.model_copy(update={"updating_id": session_id})


def update_succeeded(state: DashboardState, updated: SessionRow) -> DashboardState:
    return state.model_copy(
        update={
            "sessions": replace_session(state.sessions, updated),
            "updating_id": None,
        }
    )


def update_failed(state: DashboardState, message: str) -> DashboardState:
    return state.model_copy(update={"error": message, "updating_id": None})


def set_search(state: DashboardState, search: str) -> DashboardState:
    return state.model_copy(update={"search": search})


def set_status_filter(
    state: DashboardState, status_filter: StatusFilter
) -> DashboardState:
    """Applies a status filter and closes the dropdown it was picked from."""
    if status_filter not in STATUS_FILTER_OPTIONS:
        raise ValueError(f"Unknown status filter: {status_filter!r}")
    return state.model_copy(
        update={"status_filter": status_filter, "is_status_menu_open": False}
    )


def reset_filters(state: DashboardState) -> DashboardState:
    return state.model_copy(update={"search": "", "status_filter": "All"})


def toggle_status_menu(state: DashboardState) -> DashboardState:
    return state.model_copy(update={"is_status_menu_open": not state.is_status_menu_open})


def toggle_mobile_nav(state: DashboardState) -> DashboardState:
    return state.model_copy(update={"is_mobile_nav_open": not state.is_mobile_nav_open})


def close_mobile_nav(state: DashboardState) -> DashboardState:
    return state.model_copy(update={"is_mobile_nav_open": False})
