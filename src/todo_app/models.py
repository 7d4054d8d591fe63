from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum


# PUBLIC_INTERFACE
class Priority(str, Enum):
    """Urgency of a todo item."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    # Only set by the fallback branch of the priority controls.
    COMPLETE = "complete"


# PUBLIC_INTERFACE
class Category(str, Enum):
    """
    Listing bucket of a todo item.

    Declaration order is the section order of the listing (life first).
    """

    LIFE = "life"
    WORK = "work"


def _new_id() -> str:
    return uuid.uuid4().hex


# PUBLIC_INTERFACE
@dataclass(eq=False)
class Todo:
    """
    A single task record.

    Fields:
    - id: opaque unique identifier, assigned at construction and never reassigned
    - title: display title (non-emptiness is enforced by the edit session)
    - text_content: free-form body text, may be empty
    - priority: one of Priority, medium unless chosen otherwise
    - category: one of Category, decides the listing section

    Instances are mutable and compared by identity: the store holds the same
    objects that edit sessions update in place.
    """

    title: str
    text_content: str = ""
    priority: Priority = Priority.MEDIUM
    category: Category = Category.LIFE
    id: str = field(default_factory=_new_id)
