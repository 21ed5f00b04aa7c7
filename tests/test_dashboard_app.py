from datetime import datetime
from pathlib import Path

import pytest
import streamlit as st
from streamlit.testing.v1 import AppTest

from dashboard import api_client
from dashboard import state as ds
from dashboard.api_client import SessionApiError
from therapy_common.db_models import SessionStatus

APP_PATH = Path(__file__).resolve().parents[1] / "src" / "dashboard" / "app.py"


def make_row(id, therapist, patient, status):
    return ds.SessionRow(
        id=id,
        therapist_name=therapist,
        patient_name=patient,
        date=datetime(2024, 1, id, 9, 0),
        status=status,
    )


class StubApiClient:
    """Stands in for SessionApiClient and records the calls it receives."""

    def __init__(self, sessions=(), list_error=None, update_error=None):
        self.sessions = list(sessions)
        self.list_error = list_error
        self.update_error = update_error
        self.list_calls = 0
        self.update_calls = []

    def list_sessions(self):
        self.list_calls += 1
        if self.list_error:
            raise self.list_error
        return list(self.sessions)

    def update_status(self, session_id, status):
        self.update_calls.append((session_id, status))
        if self.update_error:
            raise self.update_error
        current = next(s for s in self.sessions if s.id == session_id)
        return current.model_copy(update={"status": status})


@pytest.fixture
def install_client(monkeypatch):
    def _install(stub):
        st.cache_resource.clear()
        monkeypatch.setattr(api_client, "SessionApiClient", lambda *args, **kwargs: stub)
        return stub

    yield _install
    st.cache_resource.clear()


@pytest.fixture
def two_sessions():
    return [
        make_row(1, "Ana", "Leo", SessionStatus.SCHEDULED),
        make_row(2, "Ben", "Mia", SessionStatus.COMPLETED),
    ]


def run_app():
    return AppTest.from_file(str(APP_PATH), default_timeout=10).run()


def test_sessions_are_fetched_once(install_client, two_sessions):
    stub = install_client(StubApiClient(two_sessions))

    at = run_app()
    at.run()

    assert stub.list_calls == 1
    state = at.session_state["dashboard_state"]
    assert state.loading is False
    assert [s.id for s in state.sessions] == [1, 2]
    assert not at.exception


def test_fetch_failure_is_shown_and_state_settles(install_client):
    stub = install_client(
        StubApiClient(list_error=SessionApiError("Failed to fetch sessions", status_code=500))
    )

    at = run_app()

    state = at.session_state["dashboard_state"]
    assert stub.list_calls == 1
    assert state.loading is False
    assert state.error == "Failed to fetch sessions"
    assert at.error[0].value == "Failed to fetch sessions"


def test_mark_completed_replaces_the_row(install_client, two_sessions):
    stub = install_client(StubApiClient(two_sessions))
    at = run_app()

    at.button(key="complete_1").click().run()

    state = at.session_state["dashboard_state"]
    assert stub.update_calls == [(1, SessionStatus.COMPLETED)]
    assert stub.list_calls == 1
    assert state.updating_id is None
    assert [s.status for s in state.sessions] == [
        SessionStatus.COMPLETED,
        SessionStatus.COMPLETED,
    ]


def test_completed_sessions_have_no_action(install_client, two_sessions):
    install_client(StubApiClient(two_sessions))

    at = run_app()

    keys = {button.key for button in at.button}
    assert "complete_1" in keys
    assert "complete_2" not in keys


def test_update_failure_keeps_rows_and_clears_marker(install_client, two_sessions):
    stub = install_client(
        StubApiClient(
            two_sessions,
            update_error=SessionApiError("Failed to update session", status_code=404),
        )
    )
    at = run_app()

    at.button(key="complete_1").click().run()

    state = at.session_state["dashboard_state"]
    assert stub.update_calls == [(1, SessionStatus.COMPLETED)]
    assert state.updating_id is None
    assert state.error == "Failed to update session"
    assert list(state.sessions) == two_sessions
    assert at.error[0].value == "Failed to update session"


def test_status_menu_filters_and_closes(install_client, two_sessions):
    install_client(StubApiClient(two_sessions))
    at = run_app()

    at.button(key="toggle_status_menu").click().run()
    assert at.session_state["dashboard_state"].is_status_menu_open

    at.button(key="status_option_Completed").click().run()

    state = at.session_state["dashboard_state"]
    assert state.status_filter == "Completed"
    assert not state.is_status_menu_open
    assert not at.exception
    assert [s.id for s in ds.filter_sessions(state)] == [2]
