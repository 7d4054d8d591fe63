import pytest
from fastapi.testclient import TestClient

from todo_app.main import create_app

app = create_app()
client = TestClient(app)


@pytest.fixture(autouse=True)
def empty_store():
    app.state.store.clear()
    yield


def create_todo(title="Test Task", body=None, priority=None, category=None):
    res = client.post("/api/v1/sessions/", json={})
    assert res.status_code == 201
    sid = res.json()["id"]

    drafts = {"title": title}
    if body is not None:
        drafts["body"] = body
    if category is not None:
        drafts["category"] = category
    assert client.patch(f"/api/v1/sessions/{sid}", json=drafts).status_code == 200
    if priority is not None:
        assert client.put(f"/api/v1/sessions/{sid}/priority", json={"priority": priority}).status_code == 200

    res = client.post(f"/api/v1/sessions/{sid}/confirm")
    assert res.status_code == 200
    result = res.json()
    assert result["outcome"] == "created"
    return result["todo"]


def assert_todo_shape(todo: dict):
    for key in ["id", "title", "text_content", "priority", "category"]:
        assert key in todo
    assert isinstance(todo["id"], str)
    assert isinstance(todo["title"], str)
    assert todo["priority"] in ("high", "medium", "low", "complete")
    assert todo["category"] in ("life", "work")


def titles(items):
    return [t["title"] for t in items]


class TestHealth:
    def test_health_check(self):
        res = client.get("/")
        assert res.status_code == 200
        data = res.json()
        assert data["message"] == "Healthy"
        assert data["todos"] == 0

    def test_health_counts_todos(self):
        create_todo("One")
        assert client.get("/").json()["todos"] == 1


class TestListing:
    def test_list_in_creation_order(self):
        for title in ["a", "b", "c", "d"]:
            create_todo(title)
        res = client.get("/api/v1/todos/")
        assert res.status_code == 200
        items = res.json()
        assert titles(items) == ["a", "b", "c", "d"]
        for item in items:
            assert_todo_shape(item)

    def test_filter_by_category_preserves_order(self):
        create_todo("l1", category="life")
        create_todo("w1", category="work")
        create_todo("l2", category="life")
        create_todo("w2", category="work")

        life = client.get("/api/v1/todos/?category=life").json()
        work = client.get("/api/v1/todos/?category=work").json()
        assert titles(life) == ["l1", "l2"]
        assert titles(work) == ["w1", "w2"]

    def test_sections(self):
        create_todo("w1", category="work")
        create_todo("l1", category="life")

        res = client.get("/api/v1/todos/sections")
        assert res.status_code == 200
        sections = res.json()
        assert [s["index"] for s in sections] == [0, 1]
        assert [s["title"] for s in sections] == ["life", "work"]
        assert titles(sections[0]["items"]) == ["l1"]
        assert titles(sections[1]["items"]) == ["w1"]

    def test_get_todo_and_not_found(self):
        todo = create_todo("Read book", body="chapter 3")
        res = client.get(f"/api/v1/todos/{todo['id']}")
        assert res.status_code == 200
        fetched = res.json()
        assert fetched["title"] == "Read book"
        assert fetched["text_content"] == "chapter 3"

        res_404 = client.get("/api/v1/todos/does-not-exist")
        assert res_404.status_code == 404
        assert res_404.json()["detail"] == "Todo not found"


class TestDeletion:
    def test_delete_at_position(self):
        for title in ["a", "b", "c"]:
            create_todo(title)

        res = client.delete("/api/v1/todos/positions/1")
        assert res.status_code == 204
        assert res.text == ""
        assert titles(client.get("/api/v1/todos/").json()) == ["a", "c"]

    def test_delete_out_of_range_leaves_items(self):
        create_todo("a")
        create_todo("b")

        for position in (2, 99, -1):
            res = client.delete(f"/api/v1/todos/positions/{position}")
            assert res.status_code == 404
        assert titles(client.get("/api/v1/todos/").json()) == ["a", "b"]

    def test_delete_section_row_targets_section_item(self):
        create_todo("l1", category="life")
        create_todo("w1", category="work")
        create_todo("w2", category="work")

        # Row 0 of the work section is w1, not the first todo overall.
        res = client.delete("/api/v1/todos/sections/1/rows/0")
        assert res.status_code == 204
        assert titles(client.get("/api/v1/todos/").json()) == ["l1", "w2"]

    def test_delete_section_row_out_of_range(self):
        create_todo("l1", category="life")
        assert client.delete("/api/v1/todos/sections/1/rows/0").status_code == 404
        assert client.delete("/api/v1/todos/sections/5/rows/0").status_code == 404
        assert len(client.get("/api/v1/todos/").json()) == 1

    def test_deleted_todo_disappears_from_every_view(self):
        todo = create_todo("gone", category="work")
        client.delete("/api/v1/todos/positions/0")

        assert client.get(f"/api/v1/todos/{todo['id']}").status_code == 404
        assert client.get("/api/v1/todos/?category=work").json() == []
        assert all(s["items"] == [] for s in client.get("/api/v1/todos/sections").json())


class TestValidationErrors:
    def test_unknown_category(self):
        res = client.get("/api/v1/todos/?category=hobby")
        assert res.status_code == 422
        body = res.json()
        assert body.get("error") == "ValidationError"
        assert body.get("message") == "Request validation failed"
        assert isinstance(body.get("detail"), list)

    def test_non_integer_position(self):
        res = client.delete("/api/v1/todos/positions/first")
        assert res.status_code == 422
        assert res.json().get("error") == "ValidationError"
