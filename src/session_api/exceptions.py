"""Custom exceptions for the session-api service."""


class SessionNotFoundError(Exception):
    """Raised when a requested session does not exist."""

    def __init__(self, session_id: int):
        self.session_id = session_id
        super().__init__(f"Session {session_id} not found")


class SessionFetchError(Exception):
    """Raised when reading sessions from the database fails."""

    def __init__(self, cause: Exception | None = None):
        self.cause = cause
        super().__init__("Failed to fetch sessions from database")


class SessionUpdateError(Exception):
    """Raised when updating a session in the database fails."""

    def __init__(self, session_id: int, cause: Exception | None = None):
        self.session_id = session_id
        self.cause = cause
        super().__init__(f"Failed to update session {session_id}")
