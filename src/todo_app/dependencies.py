from __future__ import annotations

from fastapi import Depends, Request

from .listing import SectionedTodoList
from .registry import SessionRegistry
from .store import TodoStore


# PUBLIC_INTERFACE
def get_store(request: Request) -> TodoStore:
    """Return the store owned by the application instance."""
    return request.app.state.store


# PUBLIC_INTERFACE
def get_sessions(request: Request) -> SessionRegistry:
    """Return the registry of open edit sessions owned by the application instance."""
    return request.app.state.sessions


def get_listing(store: TodoStore = Depends(get_store)) -> SectionedTodoList:
    """
    Dependency building the sectioned listing over the application store.
    """
    return SectionedTodoList(store)
