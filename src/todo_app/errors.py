from __future__ import annotations


class TodoError(Exception):
    """Base class for todo domain errors."""


# PUBLIC_INTERFACE
class IndexOutOfRange(TodoError, IndexError):
    """Raised when a position, section or row does not address an existing item."""

    def __init__(self, what: str, index: int, size: int) -> None:
        super().__init__(f"{what} {index} out of range (size {size})")
        self.what = what
        self.index = index
        self.size = size


# PUBLIC_INTERFACE
class TodoNotFound(TodoError, KeyError):
    """Raised when no todo has the requested id."""

    def __init__(self, todo_id: str) -> None:
        super().__init__(todo_id)
        self.todo_id = todo_id

    def __str__(self) -> str:
        return "Todo not found"


# PUBLIC_INTERFACE
class SessionNotFound(TodoError, KeyError):
    """Raised when no open edit session has the requested id."""

    def __init__(self, session_id: str) -> None:
        super().__init__(session_id)
        self.session_id = session_id

    def __str__(self) -> str:
        return "Edit session not found"


class SessionClosed(TodoError):
    """Raised when a confirmed or cancelled edit session is used again."""
