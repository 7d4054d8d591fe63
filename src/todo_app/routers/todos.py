from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..dependencies import get_listing, get_sessions, get_store
from ..errors import IndexOutOfRange
from ..listing import SectionedTodoList
from ..models import Category
from ..registry import SessionRegistry
from ..schemas import SectionOut, SessionOut, TodoOut
from ..store import TodoStore

router = APIRouter(
    prefix="/api/v1/todos",
    tags=["todos"],
)


# PUBLIC_INTERFACE
@router.get(
    "/",
    response_model=List[TodoOut],
    summary="List Todos",
    description=(
        "List todos in insertion order.\n\n"
        "Query parameters:\n"
        "- category: only return todos of this category (life or work), order preserved"
    ),
    responses={
        200: {"description": "List retrieved successfully"},
        422: {"description": "Unknown category"},
    },
)
def list_todos(
    category: Optional[Category] = Query(None, description="Filter by category"),
    store: TodoStore = Depends(get_store),
) -> List[TodoOut]:
    """
    List all todos, or the todos of one category.
    """
    items = store.all() if category is None else store.filter_by_category(category)
    return [TodoOut.from_todo(t) for t in items]


# PUBLIC_INTERFACE
@router.get(
    "/sections",
    response_model=List[SectionOut],
    summary="List Sections",
    description="Todos grouped by category, one section per category in category order.",
)
def list_sections(listing: SectionedTodoList = Depends(get_listing)) -> List[SectionOut]:
    """
    Return the sectioned listing.
    """
    return [
        SectionOut(
            index=section,
            title=listing.title_for_section(section),
            items=[TodoOut.from_todo(t) for t in listing.rows(section)],
        )
        for section in range(listing.number_of_sections())
    ]


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Get Todo",
    description="Get a single Todo item by ID.",
    responses={
        200: {"description": "Todo found"},
        404: {"description": "Todo not found"},
    },
)
def get_todo(todo_id: str, store: TodoStore = Depends(get_store)) -> TodoOut:
    """
    Retrieve a single Todo item by its ID.
    """
    item = store.get(todo_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Todo not found")
    return TodoOut.from_todo(item)


# PUBLIC_INTERFACE
@router.delete(
    "/positions/{position}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Todo At Position",
    description="Delete the todo at a position of the full listing (insertion order, 0-based).",
    responses={
        204: {"description": "Todo deleted"},
        404: {"description": "Position out of range"},
    },
)
def delete_todo_at(position: int, store: TodoStore = Depends(get_store)) -> None:
    """
    Delete by full-listing position. Returns 204 on success, 404 if out of range.
    """
    try:
        store.delete_at(position)
    except IndexOutOfRange as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return None


# PUBLIC_INTERFACE
@router.delete(
    "/sections/{section}/rows/{row}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Todo In Section",
    description="Delete the todo shown at a row of a category section.",
    responses={
        204: {"description": "Todo deleted"},
        404: {"description": "Section or row out of range"},
    },
)
def delete_section_row(section: int, row: int, listing: SectionedTodoList = Depends(get_listing)) -> None:
    """
    Delete by (section, row). Returns 204 on success, 404 if out of range.
    """
    try:
        listing.delete_row(section, row)
    except IndexOutOfRange as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return None


# PUBLIC_INTERFACE
@router.post(
    "/sections/{section}/rows/{row}/edit",
    response_model=SessionOut,
    status_code=status.HTTP_201_CREATED,
    summary="Edit Selected Todo",
    description="Open an edit session for the todo shown at a row of a category section.",
    responses={
        201: {"description": "Edit session opened"},
        404: {"description": "Section or row out of range"},
    },
)
def edit_section_row(
    section: int,
    row: int,
    listing: SectionedTodoList = Depends(get_listing),
    sessions: SessionRegistry = Depends(get_sessions),
) -> SessionOut:
    """
    Resolve the selected row and open an EDITING session for it.
    """
    try:
        command = listing.select(section, row)
    except IndexOutOfRange as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return SessionOut.from_session(sessions.open(command.todo))
