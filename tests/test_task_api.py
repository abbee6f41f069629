# tests/test_task_api.py

from __future__ import annotations

from pathlib import Path

from tasklist.tasks.task_api import (
    TITLE_REQUIRED,
    create_task,
    edit_task,
    format_task,
    list_tasks,
    remove_task,
    resolve_color,
)
from tasklist.tasks.task_models import ADD_FAILED, Task, WriteResult


def test_resolve_color() -> None:
    assert resolve_color("blue") == "#4ECDC4"
    assert resolve_color(" Purple ") == "#B388FF"
    assert resolve_color("#ff9f43") == "#FF9F43"
    assert resolve_color("#80FF9F43") == "#80FF9F43"
    assert resolve_color("mauve") == "#FF6B6B"
    assert resolve_color("#12345", default="#FFE66D") == "#FFE66D"
    assert resolve_color(None) == "#FF6B6B"


def test_create_requires_title(state, notifier) -> None:
    assert create_task(state, "   ") == ADD_FAILED
    assert notifier.messages == [TITLE_REQUIRED]
    assert state.task_store.count_tasks() == 0


def test_create_trims_and_defaults_color(state) -> None:
    task_id = create_task(state, "  Buy milk ", " 2 litres ", None, None, None)
    assert state.task_store.get_task_by_id(task_id) == Task(
        id=task_id,
        title="Buy milk",
        description="2 litres",
        deadline="",
        color="#FF6B6B",
        image=None,
    )


def test_edit_keeps_fields_not_passed(state) -> None:
    task_id = create_task(state, "Buy milk", "2 litres", "2025-05-01", "green", "/tmp/m.png")

    assert edit_task(state, task_id, title="Buy bread", color="yellow") is WriteResult.OK

    task = state.task_store.get_task_by_id(task_id)
    assert task is not None
    assert task.title == "Buy bread"
    assert task.color == "#FFE66D"
    assert task.description == "2 litres"
    assert task.deadline == "2025-05-01"
    assert task.image == "/tmp/m.png"


def test_edit_can_clear_image(state) -> None:
    task_id = create_task(state, "Photo", image_path="/tmp/p.png")
    assert edit_task(state, task_id, image_path="") is WriteResult.OK
    task = state.task_store.get_task_by_id(task_id)
    assert task is not None
    assert task.image is None


def test_edit_rejects_blank_title_and_missing_task(state, notifier) -> None:
    task_id = create_task(state, "Keep me")
    notifier.clear()

    assert edit_task(state, task_id, title=" ") is WriteResult.FAILED
    assert notifier.last == TITLE_REQUIRED
    assert state.task_store.get_task_by_id(task_id).title == "Keep me"

    assert edit_task(state, 999, title="x") is WriteResult.NOT_FOUND
    assert notifier.last == "Task not found"


def _write_image(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"\x89PNG")
    return path


def test_remove_deletes_image_file(state, settings) -> None:
    image = _write_image(settings.data_dir / "images" / "task.png")
    task_id = create_task(state, "With picture", image_path=str(image))

    assert remove_task(state, task_id) is WriteResult.OK
    assert state.task_store.get_task_by_id(task_id) is None
    assert not image.exists()


def test_remove_keeps_image_outside_data_dir(state, tmp_path: Path) -> None:
    document = _write_image(tmp_path / "outside" / "thesis.pdf")
    task_id = create_task(state, "Not ours", image_path=str(document))

    assert remove_task(state, task_id) is WriteResult.OK
    assert state.task_store.get_task_by_id(task_id) is None
    assert document.exists()


def test_remove_keeps_image_shared_with_other_task(state, settings) -> None:
    image = _write_image(settings.data_dir / "images" / "shared.png")
    first = create_task(state, "a", image_path=str(image))
    second = create_task(state, "b", image_path=str(image))

    assert remove_task(state, first) is WriteResult.OK
    assert image.exists()
    assert state.task_store.get_task_by_id(second).image == str(image)

    # last reference gone -> file goes too
    assert remove_task(state, second) is WriteResult.OK
    assert not image.exists()


def test_default_color_setting_is_normalized(state, settings) -> None:
    settings.default_color = "#4ecdc4"
    assert state.default_color == "#4ECDC4"

    settings.default_color = "banana"
    assert state.default_color == "#FF6B6B"
    task_id = create_task(state, "fallback")
    assert state.task_store.get_task_by_id(task_id).color == "#FF6B6B"


def test_remove_missing_task_leaves_files_alone(state, tmp_path: Path) -> None:
    assert remove_task(state, 12345) is WriteResult.NOT_FOUND


def test_list_tasks_with_and_without_query(state) -> None:
    create_task(state, "Buy milk")
    create_task(state, "Call mom")

    assert [t.title for t in list_tasks(state)] == ["Call mom", "Buy milk"]
    assert [t.title for t in list_tasks(state, "milk")] == ["Buy milk"]


def test_format_task() -> None:
    full = Task(
        id=7,
        title="Buy milk",
        description="2 litres",
        deadline="2025-05-01",
        color="#4ECDC4",
        image="/tmp/m.png",
    )
    assert format_task(full) == (
        "#7 [#4ECDC4] Buy milk | Deadline: 2025-05-01 | 2 litres | [image: /tmp/m.png]"
    )

    bare = Task(id=8, title="Call mom")
    assert format_task(bare) == "#8 [#FF6B6B] Call mom"
