"""Application configuration loaded from environment variables."""

import os

from pydantic import BaseModel
from therapy_common import DatabaseConfig


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    database: DatabaseConfig
    create_tables: bool = False


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        database=DatabaseConfig(
            host=os.getenv("POSTGRES_HOST", "postgres"),
            port=os.getenv("POSTGRES_PORT", "5432"),
            user=os.getenv("POSTGRES_USER", ""),
            password=os.getenv("POSTGRES_PASSWORD", ""),
            database=os.getenv("POSTGRES_DB", "therapy_dashboard"),
            override_url=os.getenv("DATABASE_URL") or None,
        ),
        create_tables=os.getenv("CREATE_TABLES", "false").lower() in ("1", "true", "yes"),
    )
