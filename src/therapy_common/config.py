"""Shared configuration models for infrastructure components."""

from pydantic import BaseModel, computed_field


class DatabaseConfig(BaseModel, frozen=True):
    """Immutable database connection configuration."""

    host: str
    port: str
    user: str
    password: str
    database: str
    override_url: str | None = None

    @computed_field
    @property
    def url(self) -> str:
        """Returns the connection URL, preferring an explicit override."""
        if self.override_url:
            return self.override_url
        return (
            f"postgresql+psycopg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.database}"
        )
