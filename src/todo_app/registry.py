from __future__ import annotations

from threading import RLock
from typing import Callable, Optional

from .errors import SessionNotFound
from .models import Todo
from .session import PLACEHOLDER, EditSession
from .store import TodoStore


# PUBLIC_INTERFACE
class SessionRegistry:
    """
    Open edit sessions addressed by id.

    A session leaves the registry when it is confirmed or cancelled. Sessions
    opened here write their edits through `store`.
    """

    def __init__(self, store: Optional[TodoStore] = None, placeholder: str = PLACEHOLDER) -> None:
        self._lock = RLock()
        self._sessions: dict[str, EditSession] = {}
        self._store = store
        self._placeholder = placeholder

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def open(
        self,
        existing: Optional[Todo] = None,
        *,
        on_created: Optional[Callable[[Todo], None]] = None,
    ) -> EditSession:
        session = EditSession.begin(
            existing,
            placeholder=self._placeholder,
            store=self._store,
            on_created=on_created,
        )
        with self._lock:
            self._sessions[session.id] = session
        return session

    def get(self, session_id: str) -> EditSession:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def close(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)
