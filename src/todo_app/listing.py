from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol

from .errors import IndexOutOfRange
from .models import Category, Todo
from .store import TodoStore

SECTIONS: tuple[Category, ...] = tuple(Category)


# PUBLIC_INTERFACE
class TodoListSource(Protocol):
    """Capability of anything that feeds a sectioned todo listing."""

    def number_of_sections(self) -> int:
        ...

    def number_of_rows(self, section: int) -> int:
        ...

    def todo_at(self, section: int, row: int) -> Todo:
        ...

    def title_for_section(self, section: int) -> str:
        ...


@dataclass(frozen=True)
class NavigateToEdit:
    """Command to open the edit surface; todo is None when creating a new one."""

    todo: Optional[Todo] = None


# PUBLIC_INTERFACE
class SectionedTodoList:
    """
    Listing grouped by category, one section per Category in declaration order.

    Rows are addressed inside their section: row N of the work section is the
    N-th work todo, not the N-th todo overall.
    """

    def __init__(self, store: TodoStore) -> None:
        self._store = store

    def _category(self, section: int) -> Category:
        if not 0 <= section < len(SECTIONS):
            raise IndexOutOfRange("section", section, len(SECTIONS))
        return SECTIONS[section]

    def number_of_sections(self) -> int:
        return len(SECTIONS)

    def number_of_rows(self, section: int) -> int:
        return len(self.rows(section))

    def rows(self, section: int) -> List[Todo]:
        return self._store.filter_by_category(self._category(section))

    def todo_at(self, section: int, row: int) -> Todo:
        rows = self.rows(section)
        if not 0 <= row < len(rows):
            raise IndexOutOfRange("row", row, len(rows))
        return rows[row]

    def title_for_section(self, section: int) -> str:
        return self._category(section).value

    def select(self, section: int, row: int) -> NavigateToEdit:
        """Resolve a tapped row to the command that opens it for editing."""
        return NavigateToEdit(self.todo_at(section, row))

    def navigate_to_new(self) -> NavigateToEdit:
        return NavigateToEdit(None)

    def delete_row(self, section: int, row: int) -> Todo:
        """Delete the todo shown at (section, row) through its full-enumeration position."""
        todo = self.todo_at(section, row)
        # delete() maps the id to its position and calls delete_at atomically.
        if not self._store.delete(todo.id):
            raise IndexOutOfRange("row", row, self.number_of_rows(section))
        return todo
