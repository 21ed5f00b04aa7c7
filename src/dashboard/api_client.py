"""HTTP client for the session API."""

import logging
from typing import List

import httpx
from therapy_common.db_models import SessionStatus

from dashboard.state import SessionRow

logger = logging.getLogger(__name__)

FETCH_ERROR_MESSAGE = "Failed to fetch sessions"
UPDATE_ERROR_MESSAGE = "Failed to update session"


class SessionApiError(Exception):
    """Raised when a session API call fails or returns an error status."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        cause: Exception | None = None,
    ):
        self.status_code = status_code
        self.cause = cause
        super().__init__(message)


class SessionApiClient:
    """
    Thin wrapper over httpx for the two session endpoints.

    Every failure, transport or HTTP, is raised as SessionApiError with a
    message suitable for showing to the user.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self._client = httpx.Client(
            base_url=base_url, timeout=timeout, transport=transport
        )

    def list_sessions(self) -> List[SessionRow]:
        """
        Fetches every session, ordered by date.

        Raises:
            SessionApiError: If the request fails.
        """
        response = self._request("GET", "/api/sessions", FETCH_ERROR_MESSAGE)
        try:
            return [SessionRow.model_validate(item) for item in response.json()]
        except (TypeError, ValueError) as e:
            logger.exception("Unexpected session list payload")
            raise SessionApiError(FETCH_ERROR_MESSAGE, cause=e) from e

    def update_status(self, session_id: int, status: SessionStatus) -> SessionRow:
        """
        Sets the status of one session and returns the server's record.

        Raises:
            SessionApiError: If the request fails.
        """
        response = self._request(
            "PATCH",
            f"/api/sessions/{session_id}",
            UPDATE_ERROR_MESSAGE,
            json={"status": status.value},
        )
        try:
            return SessionRow.model_validate(response.json())
        except ValueError as e:
            logger.exception(
                "Unexpected session payload", extra={"session_id": session_id}
            )
            raise SessionApiError(UPDATE_ERROR_MESSAGE, cause=e) from e

    def close(self) -> None:
        self._client.close()

    def _request(
        self, method: str, path: str, error_message: str, **kwargs
    ) -> httpx.Response:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.exception(
                "Session API request failed",
                extra={"method": method, "path": path},
            )
            raise SessionApiError(error_message, cause=e) from e

        if response.is_error:
            logger.error(
                "Session API returned an error",
                extra={
                    "method": method,
                    "path": path,
                    "status_code": response.status_code,
                },
            )
            raise SessionApiError(error_message, status_code=response.status_code)

        return response
