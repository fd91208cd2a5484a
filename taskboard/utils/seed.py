"""Sample data and the one-time migration of status-based legacy tasks."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping, Optional

from taskboard.config import get_settings
from taskboard.errors import ValidationError
from taskboard.logging_config import configure_logging
from taskboard.schemas import (
    BoardCreate,
    ColumnCreate,
    ColumnRecord,
    MemberRole,
    ProjectCreate,
    ProjectMemberCreate,
    ProjectRecord,
    TaskCreate,
    TaskPriority,
    UserCreate,
)
from taskboard.services import ordering
from taskboard.storage import Storage, build_storage

logger = logging.getLogger(__name__)

SAMPLE_PROJECT_NAME = "Sample Project"

DEFAULT_COLUMNS = (
    ("To Do", "#6B7280"),
    ("In Progress", "#3B82F6"),
    ("Done", "#10B981"),
)

# Legacy task status -> (column name, column color)
LEGACY_STATUS_COLUMNS: Dict[str, tuple] = {
    "todo": ("To Do", "#6B7280"),
    "in-progress": ("In Progress", "#3B82F6"),
    "in-review": ("In Review", "#F59E0B"),
    "done": ("Done", "#10B981"),
}


def seed_sample_data(storage: Storage) -> ProjectRecord:
    """Insert the sample user, project, board, columns and tasks.

    Running it again returns the existing sample project untouched.
    """
    for project in storage.projects.find_all():
        if project.name == SAMPLE_PROJECT_NAME:
            logger.info("Sample data already present (project %s)", project.id)
            return project

    user = storage.users.find_by_email("john@example.com")
    if user is None:
        user = storage.users.create(UserCreate(name="John Doe", email="john@example.com"))

    project = storage.projects.create(
        ProjectCreate(name=SAMPLE_PROJECT_NAME, description="A sample project for testing", color="#3B82F6")
    )
    storage.members.create(ProjectMemberCreate(project_id=project.id, user_id=user.id, role=MemberRole.ADMIN))
    board = storage.boards.create(
        BoardCreate(project_id=project.id, name="Sample Board", description="A sample board for testing")
    )

    columns = [
        ordering.create_column(storage, ColumnCreate(board_id=board.id, name=name, color=color))
        for name, color in DEFAULT_COLUMNS
    ]

    ordering.create_task(
        storage,
        TaskCreate(
            title="Sample Task 1",
            description="This is a sample task",
            board_id=board.id,
            column_id=columns[0].id,
            priority=TaskPriority.MEDIUM,
            assignee_id=user.id,
        ),
    )
    ordering.create_task(
        storage,
        TaskCreate(
            title="Sample Task 2",
            description="This is another sample task",
            board_id=board.id,
            column_id=columns[1].id,
            priority=TaskPriority.HIGH,
            assignee_id=user.id,
        ),
    )

    logger.info("Sample data inserted (project %s)", project.id)
    return project


def _status_column(storage: Storage, board_id: str, status: str, cache: Dict[str, ColumnRecord]) -> ColumnRecord:
    if status in cache:
        return cache[status]
    if status not in LEGACY_STATUS_COLUMNS:
        raise ValidationError(f"Unknown legacy task status: {status}")

    name, color = LEGACY_STATUS_COLUMNS[status]
    column: Optional[ColumnRecord] = next(
        (column for column in storage.columns.find_by_board_id(board_id) if column.name == name),
        None,
    )
    if column is None:
        column = ordering.create_column(storage, ColumnCreate(board_id=board_id, name=name, color=color))
        logger.info("Created column %r for legacy status %r", name, status)
    cache[status] = column
    return column


def migrate_legacy_tasks(storage: Storage, board_id: str, legacy_tasks: Iterable[Mapping[str, Any]]) -> int:
    """Move tasks from the old status-based schema onto ``board_id``'s columns.

    Each legacy task is a mapping with ``title``, ``status`` and optionally
    ``description``, ``priority``, ``position`` and ``due_date``. The free-text
    ``assignee`` of the old schema is dropped. Returns the number of tasks
    created.
    """
    if storage.boards.find_by_id(board_id) is None:
        raise ValidationError(f"Board {board_id} not found")

    columns: Dict[str, ColumnRecord] = {}
    migrated = 0
    for legacy in legacy_tasks:
        column = _status_column(storage, board_id, legacy.get("status") or "todo", columns)
        ordering.create_task(
            storage,
            TaskCreate(
                title=legacy["title"],
                description=legacy.get("description"),
                priority=legacy.get("priority") or TaskPriority.MEDIUM,
                board_id=board_id,
                column_id=column.id,
                position=legacy.get("position"),
                due_date=legacy.get("due_date"),
            ),
        )
        migrated += 1

    logger.info("Migrated %d legacy task(s) onto board %s", migrated, board_id)
    return migrated


def main() -> None:
    """Seed the configured storage backend with the sample data."""
    settings = get_settings()
    configure_logging(settings)
    storage = build_storage(settings)
    storage.initialize()
    try:
        seed_sample_data(storage)
    finally:
        storage.close()


if __name__ == "__main__":
    main()
