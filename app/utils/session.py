"""Session storage between console requests."""
import json
import logging
from pathlib import Path
from typing import Optional, Protocol

from pydantic import ValidationError

from app.config import settings
from app.models.auth import Session

logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    """Key-value holder for the logged-in session."""

    def get(self) -> Optional[Session]: ...

    def set(self, session: Session) -> None: ...

    def clear(self) -> None: ...


class MemorySessionStore:
    """Session kept in process memory (lost on restart)."""

    def __init__(self, session: Optional[Session] = None):
        self._session = session

    def get(self) -> Optional[Session]:
        return self._session

    def set(self, session: Session) -> None:
        self._session = session

    def clear(self) -> None:
        self._session = None


class FileSessionStore:
    """
    Session persisted as a JSON file so a restart restores the login.

    A missing, unreadable or malformed file is treated as no session.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def get(self) -> Optional[Session]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError:
            return None

        try:
            return Session.model_validate(json.loads(raw))
        except (ValueError, ValidationError):
            logger.warning("Ignoring malformed session file %s", self.path)
            return None

    def set(self, session: Session) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            session.model_dump_json(by_alias=True), encoding="utf-8"
        )

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


def build_session_store() -> SessionStore:
    """Pick the store from settings: a file when configured, memory otherwise."""
    if settings.session_file:
        return FileSessionStore(settings.session_file)
    return MemorySessionStore()


# Global session store, one operator per console process
session_store: SessionStore = build_session_store()


def get_session_store() -> SessionStore:
    """Dependency to get the session store."""
    return session_store
