"""Dashboard configuration loaded from environment variables."""

import os

from pydantic import BaseModel


class DashboardConfig(BaseModel, frozen=True):
    """Location of the session API the dashboard talks to."""

    api_url: str
    timeout_seconds: float = 10.0


def load_config() -> DashboardConfig:
    """Loads configuration from environment variables."""
    return DashboardConfig(
        api_url=os.getenv("SESSION_API_URL", "http://localhost:8000"),
        timeout_seconds=float(os.getenv("SESSION_API_TIMEOUT_SECONDS", "10")),
    )
