"""
Edit sessions: the transient draft state of creating or editing one todo.

A session begins either NEW (no backing todo) or EDITING (seeded from an
existing todo). It ends with exactly one outcome: created, updated or
cancelled. Saving with an empty title is a cancel, never an error.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from enum import Enum
from threading import RLock
from typing import Callable, Optional, Protocol

from .errors import SessionClosed
from .models import Category, Priority, Todo
from .store import TodoStore

logger = logging.getLogger(__name__)

PLACEHOLDER = "Write a note"

# Index of each priority control, left to right.
PRIORITY_CONTROLS = (Priority.HIGH, Priority.MEDIUM, Priority.LOW)


class SessionState(str, Enum):
    NEW = "new"
    EDITING = "editing"


# PUBLIC_INTERFACE
class EditOutcome(str, Enum):
    """Signal returned to the caller when a session ends."""

    CREATED = "created"
    UPDATED = "updated"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class EditResult:
    """
    Result of confirm()/cancel().

    - outcome: which signal the caller receives
    - todo: the new todo (created), the updated backing todo (updated), or None
    - validation_failed: True when a confirm was turned into a cancel by an empty title
    """

    outcome: EditOutcome
    todo: Optional[Todo] = None
    validation_failed: bool = False


# PUBLIC_INTERFACE
class DraftTextEditing(Protocol):
    """Capability of a text draft that reacts to gaining and losing focus."""

    def begin_editing(self) -> None:
        ...

    def end_editing(self) -> None:
        ...


# PUBLIC_INTERFACE
def priority_for_control(index: int) -> Priority:
    """
    Map a priority control index to its priority.

    0/1/2 select high/medium/low. Any other index falls through to COMPLETE,
    which is the only way that value is ever set by a session.
    """
    if 0 <= index < len(PRIORITY_CONTROLS):
        return PRIORITY_CONTROLS[index]
    return Priority.COMPLETE


class BodyDraft:
    """
    Body text draft layered with a placeholder sentinel.

    The placeholder is shown while the body is empty and unfocused. It is
    presentation only: `content` never returns it.
    """

    def __init__(self, text: str, placeholder: str = PLACEHOLDER) -> None:
        self.text = text
        self.placeholder = placeholder

    @property
    def showing_placeholder(self) -> bool:
        return self.text == self.placeholder

    @property
    def content(self) -> str:
        return "" if self.showing_placeholder else self.text

    def begin_editing(self) -> None:
        if self.showing_placeholder:
            self.text = ""

    def end_editing(self) -> None:
        if not self.text.strip():
            self.text = self.placeholder


# PUBLIC_INTERFACE
class EditSession:
    """
    Draft state machine for creating or editing a single todo.

    Use EditSession.begin() to open one. Drafts may be changed freely until
    confirm() or cancel(), after which the session is closed.

    When a store is given, an EDITING confirm writes through TodoStore.update
    and turns into a cancel if the todo was deleted in the meantime.
    """

    def __init__(
        self,
        existing: Optional[Todo] = None,
        *,
        placeholder: str = PLACEHOLDER,
        store: Optional[TodoStore] = None,
        on_created: Optional[Callable[[Todo], None]] = None,
        on_updated: Optional[Callable[[Todo], None]] = None,
        on_cancelled: Optional[Callable[[], None]] = None,
    ) -> None:
        self.id = uuid.uuid4().hex
        self.todo = existing
        self._store = store
        self._on_created = on_created
        self._on_updated = on_updated
        self._on_cancelled = on_cancelled
        self._lock = RLock()
        self._closed = False

        if existing is not None:
            self.draft_title = existing.title
            self.draft_priority = existing.priority
            self.draft_category = existing.category
            self.body = BodyDraft(existing.text_content, placeholder)
        else:
            self.draft_title = ""
            self.draft_priority = Priority.MEDIUM
            self.draft_category = Category.LIFE
            self.body = BodyDraft(placeholder, placeholder)

    # PUBLIC_INTERFACE
    @classmethod
    def begin(
        cls,
        existing: Optional[Todo] = None,
        *,
        placeholder: str = PLACEHOLDER,
        store: Optional[TodoStore] = None,
        on_created: Optional[Callable[[Todo], None]] = None,
        on_updated: Optional[Callable[[Todo], None]] = None,
        on_cancelled: Optional[Callable[[], None]] = None,
    ) -> "EditSession":
        """Open a session: EDITING when `existing` is given, NEW otherwise."""
        session = cls(
            existing,
            placeholder=placeholder,
            store=store,
            on_created=on_created,
            on_updated=on_updated,
            on_cancelled=on_cancelled,
        )
        logger.debug(
            "edit session started",
            extra={"event": "session_started", "session_id": session.id, "state": session.state.value},
        )
        return session

    @property
    def state(self) -> SessionState:
        return SessionState.NEW if self.todo is None else SessionState.EDITING

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def draft_body(self) -> str:
        return self.body.text

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionClosed(f"edit session {self.id} is already closed")

    def set_title(self, text: str) -> None:
        with self._lock:
            self._ensure_open()
            self.draft_title = text

    def set_body(self, text: str) -> None:
        with self._lock:
            self._ensure_open()
            self.body.text = text

    def select_priority(self, priority: Priority) -> None:
        with self._lock:
            self._ensure_open()
            self.draft_priority = priority

    def tap_priority_control(self, index: int) -> Priority:
        """Select the priority behind a control index and return it."""
        with self._lock:
            self.select_priority(priority_for_control(index))
            return self.draft_priority

    def select_category(self, category: Category) -> None:
        with self._lock:
            self._ensure_open()
            self.draft_category = category

    def focus_body(self) -> None:
        with self._lock:
            self._ensure_open()
            self.body.begin_editing()

    def blur_body(self) -> None:
        with self._lock:
            self._ensure_open()
            self.body.end_editing()

    # PUBLIC_INTERFACE
    def confirm(self) -> EditResult:
        """
        Commit the drafts.

        - empty title: same as cancel(), with validation_failed set
        - EDITING: update the backing todo in place -> UPDATED, or CANCELLED
          when the store no longer holds it
        - NEW: build a new todo -> CREATED; the caller adds it to the store
        """
        with self._lock:
            self._ensure_open()
            if self.draft_title == "":
                logger.info(
                    "save with empty title discarded",
                    extra={"event": "session_validation_failed", "session_id": self.id},
                )
                return self._cancel(validation_failed=True)

            self._closed = True
            if self.todo is not None:
                return self._update(self.todo)

            todo = Todo(
                title=self.draft_title,
                text_content=self.body.content,
                priority=self.draft_priority,
                category=self.draft_category,
            )
            if self._on_created is not None:
                self._on_created(todo)
            return EditResult(EditOutcome.CREATED, todo)

    def _update(self, todo: Todo) -> EditResult:
        changes = dict(
            title=self.draft_title,
            text_content=self.body.content,
            priority=self.draft_priority,
            category=self.draft_category,
        )
        if self._store is None:
            for name, value in changes.items():
                setattr(todo, name, value)
        elif not self._store.update(todo, **changes):
            logger.warning(
                "edited todo no longer stored",
                extra={"event": "session_todo_gone", "session_id": self.id, "todo_id": todo.id},
            )
            return self._cancel(validation_failed=False)

        logger.info(
            "todo updated",
            extra={"event": "todo_updated", "session_id": self.id, "todo_id": todo.id},
        )
        if self._on_updated is not None:
            self._on_updated(todo)
        return EditResult(EditOutcome.UPDATED, todo)

    # PUBLIC_INTERFACE
    def cancel(self) -> EditResult:
        """Discard the drafts without touching any todo."""
        with self._lock:
            self._ensure_open()
            return self._cancel(validation_failed=False)

    def _cancel(self, *, validation_failed: bool) -> EditResult:
        self._closed = True
        logger.debug("edit session cancelled", extra={"event": "session_cancelled", "session_id": self.id})
        if self._on_cancelled is not None:
            self._on_cancelled()
        return EditResult(EditOutcome.CANCELLED, None, validation_failed)
