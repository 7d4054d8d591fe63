"""
Todo list service package.

The domain core (store, edit sessions, sectioned listing) lives in plain
modules; `todo_app.main` wires it into a FastAPI application.
"""

from .models import Category, Priority, Todo  # noqa: F401
from .session import EditOutcome, EditSession  # noqa: F401
from .store import InMemoryTodoStore, TodoStore  # noqa: F401
