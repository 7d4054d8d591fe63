import pytest

from todo_app.errors import IndexOutOfRange
from todo_app.listing import NavigateToEdit, SectionedTodoList
from todo_app.models import Category, Todo
from todo_app.store import InMemoryTodoStore


@pytest.fixture
def store():
    s = InMemoryTodoStore()
    for title, category in [("l1", Category.LIFE), ("w1", Category.WORK), ("l2", Category.LIFE), ("w2", Category.WORK)]:
        s.create(Todo(title=title, category=category))
    return s


def test_sections_follow_category_order(store):
    listing = SectionedTodoList(store)
    assert listing.number_of_sections() == 2
    assert [listing.title_for_section(i) for i in range(2)] == ["life", "work"]
    assert listing.number_of_rows(0) == 2
    assert listing.number_of_rows(1) == 2


def test_select_resolves_row_within_section(store):
    listing = SectionedTodoList(store)
    command = listing.select(1, 0)
    assert isinstance(command, NavigateToEdit)
    assert command.todo.title == "w1"
    assert listing.todo_at(0, 1).title == "l2"


def test_navigate_to_new(store):
    assert SectionedTodoList(store).navigate_to_new() == NavigateToEdit(None)


def test_delete_row_removes_section_item(store):
    listing = SectionedTodoList(store)
    removed = listing.delete_row(1, 1)
    assert removed.title == "w2"
    assert [t.title for t in store.all()] == ["l1", "w1", "l2"]
    assert listing.number_of_rows(1) == 1


@pytest.mark.parametrize("section,row", [(2, 0), (-1, 0), (0, 2), (1, -1)])
def test_out_of_range(store, section, row):
    listing = SectionedTodoList(store)
    with pytest.raises(IndexOutOfRange):
        listing.select(section, row)
    with pytest.raises(IndexOutOfRange):
        listing.delete_row(section, row)
    assert len(store) == 4
