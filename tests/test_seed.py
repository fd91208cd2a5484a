import pytest

from taskboard.errors import ValidationError
from taskboard.schemas import BoardCreate, ColumnCreate, ProjectCreate
from taskboard.services import ordering
from taskboard.utils.seed import SAMPLE_PROJECT_NAME, migrate_legacy_tasks, seed_sample_data


def test_seed_sample_data_builds_a_complete_board(storage):
    project = seed_sample_data(storage)

    assert project.name == SAMPLE_PROJECT_NAME
    (board,) = storage.boards.find_by_project_id(project.id)
    columns = storage.columns.find_by_board_id(board.id)
    assert [(column.name, column.color, column.position) for column in columns] == [
        ("To Do", "#6B7280", 0),
        ("In Progress", "#3B82F6", 1),
        ("Done", "#10B981", 2),
    ]
    tasks = storage.tasks.find_by_board_id(board.id)
    assert sorted(task.title for task in tasks) == ["Sample Task 1", "Sample Task 2"]
    (member,) = storage.members.find_by_project_id(project.id)
    assert member.role == "admin"
    assert all(task.assignee_id == member.user_id for task in tasks)


def test_seed_sample_data_is_idempotent(memory_storage):
    first = seed_sample_data(memory_storage)
    second = seed_sample_data(memory_storage)

    assert first.id == second.id
    assert len(memory_storage.projects.find_all()) == 1
    assert len(memory_storage.users.find_all()) == 1
    assert len(memory_storage.tasks.find_all()) == 2


def test_migrate_legacy_tasks_creates_status_columns(storage):
    project = storage.projects.create(ProjectCreate(name="Legacy"))
    board = storage.boards.create(BoardCreate(project_id=project.id, name="Imported"))
    existing = ordering.create_column(storage, ColumnCreate(board_id=board.id, name="To Do"))
    legacy = [
        {"title": "Write docs", "status": "todo", "position": 3, "assignee": "john"},
        {"title": "Ship it", "status": "done", "priority": "high"},
        {"title": "Review", "status": "in-review", "description": "Look at the diff"},
        {"title": "Plan", "status": "todo", "position": 1},
    ]

    migrated = migrate_legacy_tasks(storage, board.id, legacy)

    assert migrated == 4
    columns = storage.columns.find_by_board_id(board.id)
    assert [(column.name, column.position) for column in columns] == [
        ("To Do", 0),
        ("Done", 1),
        ("In Review", 2),
    ]
    assert columns[0].id == existing.id
    todo = storage.tasks.find_by_column_id(existing.id)
    assert [(task.title, task.position) for task in todo] == [("Plan", 1), ("Write docs", 3)]
    (done_task,) = storage.tasks.find_by_column_id(columns[1].id)
    assert done_task.priority == "high"
    assert done_task.assignee_id is None


def test_migrate_legacy_tasks_rejects_unknown_status_and_board(memory_storage):
    project = memory_storage.projects.create(ProjectCreate(name="Legacy"))
    board = memory_storage.boards.create(BoardCreate(project_id=project.id, name="Imported"))

    with pytest.raises(ValidationError):
        migrate_legacy_tasks(memory_storage, board.id, [{"title": "x", "status": "blocked"}])
    with pytest.raises(ValidationError):
        migrate_legacy_tasks(memory_storage, "missing", [])
