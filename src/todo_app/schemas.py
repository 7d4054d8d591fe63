from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .models import Category, Priority, Todo
from .session import EditOutcome, EditSession, SessionState


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "3f0c1a9e6b2d4c8f9a7e5d1b2c3a4f5e",
                "title": "Buy groceries",
                "text_content": "Milk, eggs, bread",
                "priority": "medium",
                "category": "life",
            }
        }
    )

    id: str = Field(..., description="Unique identifier of the todo item")
    title: str = Field(..., description="Short title for the todo item")
    text_content: str = Field(default="", description="Free-form body text")
    priority: Priority = Field(..., description="One of high, medium, low, complete")
    category: Category = Field(..., description="Listing bucket: life or work")

    @classmethod
    def from_todo(cls, todo: Todo) -> "TodoOut":
        return cls(
            id=todo.id,
            title=todo.title,
            text_content=todo.text_content,
            priority=todo.priority,
            category=todo.category,
        )


# PUBLIC_INTERFACE
class SectionOut(BaseModel):
    """
    One category section of the listing.
    """

    index: int = Field(..., description="Section index, in category order")
    title: str = Field(..., description="Section header (the category name)")
    items: List[TodoOut] = Field(..., description="Todos of this category in insertion order")


# PUBLIC_INTERFACE
class SessionBegin(BaseModel):
    """
    Schema for opening an edit session. Omit todo_id to create a new todo.
    """

    model_config = ConfigDict(json_schema_extra={"example": {"todo_id": None}})

    todo_id: Optional[str] = Field(default=None, description="Id of the todo to edit; absent for a new todo")


# PUBLIC_INTERFACE
class DraftUpdate(BaseModel):
    """
    Partial update of session drafts. Only provided fields change.
    Title emptiness is not validated here: saving with an empty title cancels.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"title": "Pay bills", "body": "Electricity", "category": "work"}}
    )

    title: Optional[str] = Field(default=None, description="Draft title")
    body: Optional[str] = Field(default=None, description="Draft body text")
    category: Optional[Category] = Field(default=None, description="Draft category")


# PUBLIC_INTERFACE
class PrioritySelect(BaseModel):
    """
    Select a draft priority, either directly or by priority control index.
    Exactly one of priority/control must be given.
    """

    model_config = ConfigDict(json_schema_extra={"example": {"control": 0}})

    priority: Optional[Priority] = Field(default=None, description="Priority value to select: high, medium or low")
    control: Optional[int] = Field(
        default=None, description="Control index: 0 high, 1 medium, 2 low, anything else complete"
    )

    @model_validator(mode="after")
    def exactly_one(self) -> "PrioritySelect":
        """
        Require exactly one of priority/control. COMPLETE is not a selectable priority.
        """
        if (self.priority is None) == (self.control is None):
            raise ValueError("provide exactly one of 'priority' or 'control'")
        if self.priority is Priority.COMPLETE:
            raise ValueError("priority must be one of high, medium, low")
        return self


# PUBLIC_INTERFACE
class SessionOut(BaseModel):
    """
    Current draft state of an open edit session.
    """

    id: str = Field(..., description="Session identifier")
    state: SessionState = Field(..., description="'new' or 'editing'")
    todo_id: Optional[str] = Field(default=None, description="Backing todo id when editing")
    draft_title: str
    draft_body: str = Field(..., description="Body as displayed; may be the placeholder sentinel")
    showing_placeholder: bool
    draft_priority: Priority
    draft_category: Category

    @classmethod
    def from_session(cls, session: EditSession) -> "SessionOut":
        return cls(
            id=session.id,
            state=session.state,
            todo_id=session.todo.id if session.todo is not None else None,
            draft_title=session.draft_title,
            draft_body=session.draft_body,
            showing_placeholder=session.body.showing_placeholder,
            draft_priority=session.draft_priority,
            draft_category=session.draft_category,
        )


# PUBLIC_INTERFACE
class EditResultOut(BaseModel):
    """
    Outcome signal of a finished session.
    """

    outcome: EditOutcome
    validation_failed: bool = False
    todo: Optional[TodoOut] = None
