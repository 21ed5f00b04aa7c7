from session_api.repositories.session_repository import SessionRepository

__all__ = ["SessionRepository"]
