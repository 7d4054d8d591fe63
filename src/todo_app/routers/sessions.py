from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from ..dependencies import get_sessions, get_store
from ..errors import SessionNotFound
from ..registry import SessionRegistry
from ..schemas import DraftUpdate, EditResultOut, PrioritySelect, SessionBegin, SessionOut, TodoOut
from ..session import EditResult, EditSession
from ..store import TodoStore

router = APIRouter(
    prefix="/api/v1/sessions",
    tags=["sessions"],
)


def _get_session(session_id: str, sessions: SessionRegistry = Depends(get_sessions)) -> EditSession:
    """
    Dependency resolving an open session, 404 when unknown or already finished.
    """
    try:
        return sessions.get(session_id)
    except SessionNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


def _result_out(result: EditResult) -> EditResultOut:
    return EditResultOut(
        outcome=result.outcome,
        validation_failed=result.validation_failed,
        todo=TodoOut.from_todo(result.todo) if result.todo is not None else None,
    )


# PUBLIC_INTERFACE
@router.post(
    "/",
    response_model=SessionOut,
    status_code=status.HTTP_201_CREATED,
    summary="Begin Edit Session",
    description=(
        "Open an edit session. With todo_id the session edits that todo; "
        "without it the session drafts a new todo (priority medium, body placeholder)."
    ),
    responses={
        201: {"description": "Edit session opened"},
        404: {"description": "Todo not found"},
    },
)
def begin_session(
    payload: SessionBegin,
    store: TodoStore = Depends(get_store),
    sessions: SessionRegistry = Depends(get_sessions),
) -> SessionOut:
    """
    Begin a NEW or EDITING session.
    """
    existing = None
    if payload.todo_id is not None:
        existing = store.get(payload.todo_id)
        if existing is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Todo not found")
    session = sessions.open(existing, on_created=store.create)
    return SessionOut.from_session(session)


# PUBLIC_INTERFACE
@router.get(
    "/{session_id}",
    response_model=SessionOut,
    summary="Get Edit Session",
    responses={404: {"description": "Edit session not found"}},
)
def get_session(session: EditSession = Depends(_get_session)) -> SessionOut:
    """
    Return the drafts of an open session.
    """
    return SessionOut.from_session(session)


# PUBLIC_INTERFACE
@router.patch(
    "/{session_id}",
    response_model=SessionOut,
    summary="Update Drafts",
    description="Change the draft title, body and/or category. Omitted fields are left unchanged.",
    responses={404: {"description": "Edit session not found"}},
)
def update_drafts(payload: DraftUpdate, session: EditSession = Depends(_get_session)) -> SessionOut:
    """
    Partial update of the drafts.
    """
    if payload.title is not None:
        session.set_title(payload.title)
    if payload.body is not None:
        session.set_body(payload.body)
    if payload.category is not None:
        session.select_category(payload.category)
    return SessionOut.from_session(session)


# PUBLIC_INTERFACE
@router.put(
    "/{session_id}/priority",
    response_model=SessionOut,
    summary="Select Priority",
    description="Select the draft priority by value, or by control index (0 high, 1 medium, 2 low).",
    responses={404: {"description": "Edit session not found"}},
)
def select_priority(payload: PrioritySelect, session: EditSession = Depends(_get_session)) -> SessionOut:
    """
    Set the draft priority.
    """
    if payload.control is not None:
        session.tap_priority_control(payload.control)
    elif payload.priority is not None:
        session.select_priority(payload.priority)
    return SessionOut.from_session(session)


# PUBLIC_INTERFACE
@router.post(
    "/{session_id}/body/focus",
    response_model=SessionOut,
    summary="Focus Body",
    description="The body field gained focus: a placeholder body is cleared.",
    responses={404: {"description": "Edit session not found"}},
)
def focus_body(session: EditSession = Depends(_get_session)) -> SessionOut:
    session.focus_body()
    return SessionOut.from_session(session)


# PUBLIC_INTERFACE
@router.post(
    "/{session_id}/body/blur",
    response_model=SessionOut,
    summary="Blur Body",
    description="The body field lost focus: an empty or blank body shows the placeholder again.",
    responses={404: {"description": "Edit session not found"}},
)
def blur_body(session: EditSession = Depends(_get_session)) -> SessionOut:
    session.blur_body()
    return SessionOut.from_session(session)


# PUBLIC_INTERFACE
@router.post(
    "/{session_id}/confirm",
    response_model=EditResultOut,
    summary="Confirm Edit Session",
    description=(
        "Save the drafts and close the session.\n\n"
        "- outcome 'created': a new todo was appended to the listing\n"
        "- outcome 'updated': the edited todo was changed in place\n"
        "- outcome 'cancelled' with validation_failed: the title was empty, nothing was saved"
    ),
    responses={404: {"description": "Edit session not found"}},
)
def confirm_session(
    session: EditSession = Depends(_get_session),
    sessions: SessionRegistry = Depends(get_sessions),
) -> EditResultOut:
    """
    Confirm the session; created todos reach the store through the session's on_created callback.
    """
    try:
        return _result_out(session.confirm())
    finally:
        sessions.close(session.id)


# PUBLIC_INTERFACE
@router.post(
    "/{session_id}/cancel",
    response_model=EditResultOut,
    summary="Cancel Edit Session",
    description="Discard the drafts and close the session. Nothing is saved.",
    responses={404: {"description": "Edit session not found"}},
)
def cancel_session(
    session: EditSession = Depends(_get_session),
    sessions: SessionRegistry = Depends(get_sessions),
) -> EditResultOut:
    """
    Cancel the session.
    """
    try:
        return _result_out(session.cancel())
    finally:
        sessions.close(session.id)
