# Run with: streamlit run src/dashboard/app.py
import streamlit as st
from therapy_common.db_models import SessionStatus
from therapy_common.logging import setup_logging

from dashboard import state as ds
from dashboard.api_client import SessionApiClient, SessionApiError
from dashboard.config import load_config

logger = setup_logging()

# Centralize keys to avoid typos across callbacks
KEY_STATE = "dashboard_state"
KEY_SEARCH = "search_input"

NAV_LINKS = [
    "For kids & families",
    "Providers",
    "Learning center",
    "Send a referral",
]


@st.cache_resource
def get_api_client() -> SessionApiClient:
    config = load_config()
    return SessionApiClient(config.api_url, timeout=config.timeout_seconds)


def get_state() -> ds.DashboardState:
    return st.session_state[KEY_STATE]


def dispatch(reducer, *args) -> ds.DashboardState:
    new_state = reducer(get_state(), *args)
    st.session_state[KEY_STATE] = new_state
    return new_state


def load_sessions_once() -> None:
    """Fetch the list on the first run of a browser session only."""
    if KEY_STATE in st.session_state:
        return
    st.session_state[KEY_STATE] = ds.DashboardState()
    dispatch(ds.start_loading)
    try:
        with st.spinner("Loading sessions..."):
            sessions = get_api_client().list_sessions()
    except SessionApiError as e:
        dispatch(ds.load_failed, str(e))
        return
    dispatch(ds.sessions_loaded, sessions)


def mark_completed(session_id: int) -> None:
    dispatch(ds.start_update, session_id)
    try:
        updated = get_api_client().update_status(session_id, SessionStatus.COMPLETED)
    except SessionApiError as e:
        dispatch(ds.update_failed, str(e))
        return
    logger.info("Session marked completed", extra={"session_id": session_id})
    dispatch(ds.update_succeeded, updated)


def on_search_change() -> None:
    dispatch(ds.set_search, st.session_state[KEY_SEARCH])


def on_reset_filters() -> None:
    st.session_state[KEY_SEARCH] = ""
    dispatch(ds.reset_filters)


# -----------------------------
# Rendering
# -----------------------------
def render_header(state: ds.DashboardState) -> None:
    left, right = st.columns([4, 1])
    with left:
        st.caption("ORIGIN")
        st.subheader("Therapy dashboard")
    with right:
        st.button(
            "✕" if state.is_mobile_nav_open else "☰",
            key="toggle_nav",
            help="Toggle navigation",
            on_click=dispatch,
            args=(ds.toggle_mobile_nav,),
        )
    if state.is_mobile_nav_open:
        for link in NAV_LINKS:
            st.button(link, key=f"nav_{link}", on_click=dispatch, args=(ds.close_mobile_nav,))


def render_summary(state: ds.DashboardState) -> None:
    summary = ds.summarize(state.sessions)
    cols = st.columns(4)
    cols[0].metric("Therapists", summary.therapist_count or "—")
    cols[1].metric("Patients", summary.patient_count or "—")
    cols[2].metric("Scheduled", summary.scheduled_count)
    cols[3].metric("Completed", summary.completed_count)


def render_filters(state: ds.DashboardState) -> None:
    search_col, status_col = st.columns([3, 2])
    with search_col:
        st.text_input(
            "Search",
            key=KEY_SEARCH,
            placeholder="Search therapist or patient",
            label_visibility="collapsed",
            on_change=on_search_change,
        )
    with status_col:
        arrow = "▴" if state.is_status_menu_open else "▾"
        st.button(
            f"{ds.status_filter_label(state.status_filter)} {arrow}",
            key="toggle_status_menu",
            width="stretch",
            on_click=dispatch,
            args=(ds.toggle_status_menu,),
        )
        if state.is_status_menu_open:
            for option in ds.STATUS_FILTER_OPTIONS:
                label = ds.status_filter_label(option)
                if option == state.status_filter:
                    label = f"✓ {label}"
                st.button(
                    label,
                    key=f"status_option_{option}",
                    width="stretch",
                    on_click=dispatch,
                    args=(ds.set_status_filter, option),
                )


def render_sessions(state: ds.DashboardState) -> None:
    placeholder = ds.empty_state(state)
    if placeholder == ds.EmptyState.LOADING:
        st.info("Loading sessions...")
        return
    if placeholder == ds.EmptyState.NO_SESSIONS:
        st.markdown("**No sessions yet**")
        st.caption("Once therapy begins, sessions will show up here with live updates.")
        return
    if placeholder == ds.EmptyState.NO_MATCHES:
        st.markdown("**No matches for this filter**")
        st.button("Reset filters", key="reset_filters", on_click=on_reset_filters)
        return

    widths = [3, 3, 3, 2, 2]
    header = st.columns(widths)
    for col, title in zip(header, ["Therapist", "Patient", "Date & Time", "Status", "Action"]):
        col.markdown(f"**{title}**")

    for session in ds.filter_sessions(state):
        therapist_col, patient_col, date_col, status_col, action_col = st.columns(widths)
        therapist_col.write(session.therapist_name)
        patient_col.write(session.patient_name)
        date_col.write(ds.format_session_date(session.date))
        status_col.write(session.status.value)
        if session.status == SessionStatus.SCHEDULED:
            updating = state.updating_id == session.id
            action_col.button(
                "Updating…" if updating else "Mark completed",
                key=f"complete_{session.id}",
                disabled=not ds.can_mark_completed(state, session),
                on_click=mark_completed,
                args=(session.id,),
            )
        else:
            action_col.caption("COMPLETED")


def main() -> None:
    st.set_page_config(page_title="Therapy dashboard", layout="wide")
    load_sessions_once()
    state = get_state()

    render_header(state)
    render_summary(state)

    st.divider()
    st.caption("SESSIONS")
    st.subheader("Manage active care plans")
    render_filters(state)

    if state.error:
        st.error(state.error)

    render_sessions(state)


main()
