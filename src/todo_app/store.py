from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from threading import RLock
from typing import List, Optional

from .errors import IndexOutOfRange
from .models import Category, Priority, Todo

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class TodoStore(ABC):
    """Abstract contract for the authoritative, ordered todo collection."""

    @abstractmethod
    def create(self, todo: Todo) -> Todo:
        """Append a todo at the end of the collection and return it."""

    @abstractmethod
    def delete_at(self, position: int) -> Todo:
        """
        Remove and return the todo at `position` of the full enumeration.
        Raises IndexOutOfRange when the position does not exist.
        """

    @abstractmethod
    def all(self) -> List[Todo]:
        """Return every todo in insertion order."""

    @abstractmethod
    def filter_by_category(self, category: Category) -> List[Todo]:
        """Return the todos of one category, keeping their relative order from all()."""

    @abstractmethod
    def get(self, todo_id: str) -> Optional[Todo]:
        """Return the todo with the given id, or None if not found."""

    @abstractmethod
    def update(
        self,
        todo: Todo,
        *,
        title: str,
        text_content: str,
        priority: Priority,
        category: Category,
    ) -> bool:
        """
        Apply new field values to a held todo in one step.
        Return False, changing nothing, if the store no longer holds it.
        """

    @abstractmethod
    def position_of(self, todo_id: str) -> Optional[int]:
        """Return the full-enumeration position of a todo, or None if not found."""

    def delete(self, todo_id: str) -> bool:
        """Delete a todo by id. Return True if deleted, False if not found."""
        position = self.position_of(todo_id)
        if position is None:
            return False
        self.delete_at(position)
        return True


class InMemoryTodoStore(TodoStore):
    """
    Thread-safe in-memory store.

    Holds the todo objects themselves, not copies: an edit applied to a todo
    returned by a query is visible to every later query. Query results are
    new lists, so callers re-query after mutation.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: list[Todo] = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def create(self, todo: Todo) -> Todo:
        with self._lock:
            self._items.append(todo)
        logger.info("todo created", extra={"event": "todo_created", "todo_id": todo.id})
        return todo

    def delete_at(self, position: int) -> Todo:
        with self._lock:
            size = len(self._items)
            # Negative positions are rejected rather than counted from the end
            if not 0 <= position < size:
                logger.warning(
                    "delete position out of range",
                    extra={"event": "todo_delete_rejected", "position": position},
                )
                raise IndexOutOfRange("position", position, size)
            removed = self._items.pop(position)
        logger.info("todo deleted", extra={"event": "todo_deleted", "todo_id": removed.id})
        return removed

    def all(self) -> List[Todo]:
        with self._lock:
            return list(self._items)

    def filter_by_category(self, category: Category) -> List[Todo]:
        with self._lock:
            return [t for t in self._items if t.category == category]

    def get(self, todo_id: str) -> Optional[Todo]:
        with self._lock:
            for t in self._items:
                if t.id == todo_id:
                    return t
            return None

    def position_of(self, todo_id: str) -> Optional[int]:
        with self._lock:
            for i, t in enumerate(self._items):
                if t.id == todo_id:
                    return i
            return None

    def update(
        self,
        todo: Todo,
        *,
        title: str,
        text_content: str,
        priority: Priority,
        category: Category,
    ) -> bool:
        with self._lock:
            if not any(t is todo for t in self._items):
                return False
            todo.title = title
            todo.text_content = text_content
            todo.priority = priority
            todo.category = category
        return True

    def delete(self, todo_id: str) -> bool:
        with self._lock:
            return super().delete(todo_id)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
