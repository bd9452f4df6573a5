import json
from datetime import datetime, timezone

import pytest

from todo_cli.errors import NoTodoFile, UnknownError
from todo_cli.models import TodoItem, TodoStatus
from todo_cli.operations import add_todo, update_todo
from todo_cli.storage import JsonTodoStore

COMPLETED_AT = datetime(2025, 1, 26, 9, 0, 0, 1, tzinfo=timezone.utc)


def sample_todos():
    todos = []
    add_todo("Buy Groceries", todos)
    add_todo("Pay bills", todos)
    update_todo(todos[1].id, TodoStatus.completed(COMPLETED_AT), todos)
    return todos


class TestLoad:
    def test_missing_file(self, tmp_path):
        path = tmp_path / "todos.json"
        store = JsonTodoStore(str(path))
        with pytest.raises(NoTodoFile) as exc_info:
            store.load()
        assert exc_info.value.is_file_not_found
        assert str(path) in str(exc_info.value)

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "todos.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(UnknownError) as exc_info:
            JsonTodoStore(str(path)).load()
        assert not exc_info.value.is_file_not_found

    def test_unknown_status_tag(self, tmp_path):
        path = tmp_path / "todos.json"
        doc = [
            {
                "id": "01890a5d-ac96-774b-bcce-b302099a8057",
                "modified": None,
                "contents": "x",
                "status": "Archived",
            }
        ]
        path.write_text(json.dumps(doc), encoding="utf-8")
        with pytest.raises(UnknownError):
            JsonTodoStore(str(path)).load()

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "todos.json"
        path.write_bytes(b"[\xff\xfe]")
        with pytest.raises(UnknownError) as exc_info:
            JsonTodoStore(str(path)).load()
        assert "utf-8" in str(exc_info.value)

    def test_naive_timestamps_are_read_as_utc(self, tmp_path):
        path = tmp_path / "todos.json"
        doc = [
            {
                "id": "01890a5d-ac96-774b-bcce-b302099a8057",
                "modified": "2025-01-26T09:00:00",
                "contents": "x",
                "status": {"Completed": "2025-01-26T09:00:00"},
            }
        ]
        path.write_text(json.dumps(doc), encoding="utf-8")
        (item,) = JsonTodoStore(str(path)).load()
        assert item.modified == datetime(2025, 1, 26, 9, 0, tzinfo=timezone.utc)
        assert item.status.completed_at == datetime(2025, 1, 26, 9, 0, tzinfo=timezone.utc)


class TestSave:
    def test_document_format(self, tmp_path):
        path = tmp_path / "todos.json"
        todos = sample_todos()
        JsonTodoStore(str(path)).save(todos)

        text = path.read_text(encoding="utf-8")
        # Pretty printed
        assert "\n  " in text
        data = json.loads(text)
        assert [set(d) for d in data] == [{"id", "modified", "contents", "status"}] * 2
        assert data[0]["id"] == str(todos[0].id)
        assert data[0]["modified"] is None
        assert data[0]["status"] == "Uncompleted"
        assert list(data[1]["status"]) == ["Completed"]
        completed = datetime.fromisoformat(data[1]["status"]["Completed"].replace("Z", "+00:00"))
        assert completed == COMPLETED_AT

    def test_round_trip(self, tmp_path):
        store = JsonTodoStore(str(tmp_path / "todos.json"))
        todos = sample_todos()
        store.save(todos)
        loaded = store.load()

        assert [t.id for t in loaded] == [t.id for t in todos]
        assert [t.contents for t in loaded] == [t.contents for t in todos]
        assert [t.modified for t in loaded] == [t.modified for t in todos]
        assert [t.status for t in loaded] == [t.status for t in todos]
        assert loaded[1].status.completed_at == COMPLETED_AT

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "todos.json"
        JsonTodoStore(str(path)).save([TodoItem.new("a")])
        assert path.exists()

    def test_unwritable_location(self, tmp_path):
        # A regular file cannot serve as the parent directory
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        store = JsonTodoStore(str(blocker / "todos.json"))
        with pytest.raises(UnknownError) as exc_info:
            store.save([])
        assert "Failed to create file" in str(exc_info.value)

    def test_target_is_a_directory(self, tmp_path):
        target = tmp_path / "todos.json"
        target.mkdir()
        with pytest.raises(UnknownError) as exc_info:
            JsonTodoStore(str(target)).save([])
        assert "Failed to write file" in str(exc_info.value)
        assert sorted(p.name for p in tmp_path.iterdir()) == ["todos.json"]

    def test_failed_write_keeps_previous_document(self, tmp_path, monkeypatch):
        path = tmp_path / "todos.json"
        store = JsonTodoStore(str(path))
        store.save(sample_todos())
        before = path.read_text(encoding="utf-8")

        def failing_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("todo_cli.storage.os.replace", failing_replace)
        with pytest.raises(UnknownError) as exc_info:
            store.save([])
        assert "Failed to write file: disk full" in str(exc_info.value)
        assert path.read_text(encoding="utf-8") == before
        # No temporary file is left behind
        assert [p.name for p in tmp_path.iterdir()] == ["todos.json"]

    def test_naive_completion_time_round_trips(self, tmp_path):
        store = JsonTodoStore(str(tmp_path / "todos.json"))
        todos = [TodoItem.new("backdated")]
        update_todo(todos[0].id, TodoStatus.completed(datetime(2024, 1, 1)), todos)
        store.save(todos)

        (loaded,) = store.load()
        assert loaded.modified == todos[0].modified
        assert loaded.modified == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert loaded.status.completed_at == todos[0].status.completed_at


class TestLoadOrInitialize:
    def test_creates_empty_document(self, tmp_path):
        path = tmp_path / "todos.json"
        items = JsonTodoStore(str(path)).load_or_initialize()
        assert items == []
        assert json.loads(path.read_text(encoding="utf-8")) == []

    def test_reads_existing_document(self, tmp_path):
        store = JsonTodoStore(str(tmp_path / "todos.json"))
        store.save(sample_todos())
        assert len(store.load_or_initialize()) == 2

    def test_other_failures_propagate(self, tmp_path):
        path = tmp_path / "todos.json"
        path.write_text("[{}]", encoding="utf-8")
        with pytest.raises(UnknownError):
            JsonTodoStore(str(path)).load_or_initialize()
