"""Position handling for columns within a board and tasks within a column.

The append rule is ``max(sibling positions) + 1`` (``0`` for an empty
parent) for both columns and tasks. Gaps are allowed and duplicates are
tolerated; reading always sorts ascending by position with ties kept in
creation order. Nothing here renumbers siblings implicitly.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from taskboard.errors import ValidationError
from taskboard.schemas import ColumnCreate, ColumnRecord, TaskCreate, TaskRecord
from taskboard.storage import Storage
from taskboard.utils.positions import next_position

logger = logging.getLogger(__name__)


def create_column(storage: Storage, data: ColumnCreate) -> ColumnRecord:
    """Create a column, appending it to its board unless a position is given."""
    if storage.boards.find_by_id(data.board_id) is None:
        raise ValidationError(f"Board {data.board_id} not found")

    position = data.position
    if position is None:
        position = next_position(storage.columns.find_by_board_id(data.board_id))
    return storage.columns.create(data.model_copy(update={"position": position}))


def create_task(storage: Storage, data: TaskCreate) -> TaskRecord:
    """Create a task, appending it to its column unless a position is given."""
    column = storage.columns.find_by_id(data.column_id)
    if column is None:
        raise ValidationError(f"Column {data.column_id} not found")
    if column.board_id != data.board_id:
        raise ValidationError(f"Column {data.column_id} does not belong to board {data.board_id}")
    if data.assignee_id is not None and storage.users.find_by_id(data.assignee_id) is None:
        raise ValidationError(f"User {data.assignee_id} not found")

    position = data.position
    if position is None:
        position = next_position(storage.tasks.find_by_column_id(data.column_id))
    return storage.tasks.create(data.model_copy(update={"position": position}))


def move_task(storage: Storage, task_id: str, column_id: str, position: Optional[int] = None) -> Optional[TaskRecord]:
    """Re-parent a task into ``column_id``.

    Without ``position`` the task is appended to the destination column. The
    source column keeps its remaining positions as they are. The task follows
    the destination column's board.
    """
    task = storage.tasks.find_by_id(task_id)
    if task is None:
        return None
    column = storage.columns.find_by_id(column_id)
    if column is None:
        raise ValidationError(f"Column {column_id} not found")

    if position is None:
        siblings = [sibling for sibling in storage.tasks.find_by_column_id(column_id) if sibling.id != task_id]
        position = next_position(siblings)

    logger.debug("Moving task %s from column %s to %s at %d", task_id, task.column_id, column_id, position)
    return storage.tasks.update(
        task_id,
        {"column_id": column.id, "board_id": column.board_id, "position": position},
    )


def reorder_tasks(storage: Storage, column_id: str, task_ids: Sequence[str]) -> int:
    """Give each listed task of ``column_id`` its index as position.

    Ids that do not exist or belong to another column are skipped. Returns
    the number of tasks updated.
    """
    updated = 0
    with storage.transaction():
        for index, task_id in enumerate(task_ids):
            task = storage.tasks.find_by_id(task_id)
            if task is None or task.column_id != column_id:
                logger.debug("Skipping task %s while reordering column %s", task_id, column_id)
                continue
            storage.tasks.update(task_id, {"position": index})
            updated += 1
    return updated


def reorder_columns(storage: Storage, column_ids: Sequence[str], board_id: Optional[str] = None) -> int:
    """Give each listed column its index as position.

    When ``board_id`` is given, columns of other boards are skipped. Returns
    the number of columns updated.
    """
    updated = 0
    with storage.transaction():
        for index, column_id in enumerate(column_ids):
            column = storage.columns.find_by_id(column_id)
            if column is None or (board_id is not None and column.board_id != board_id):
                logger.debug("Skipping column %s while reordering", column_id)
                continue
            storage.columns.update(column_id, {"position": index})
            updated += 1
    return updated


def compact_column(storage: Storage, column_id: str) -> List[TaskRecord]:
    """Renumber a column's tasks ``0..n-1`` keeping their current order."""
    tasks = storage.tasks.find_by_column_id(column_id)
    reorder_tasks(storage, column_id, [task.id for task in tasks])
    return storage.tasks.find_by_column_id(column_id)


def compact_board(storage: Storage, board_id: str) -> List[ColumnRecord]:
    """Renumber a board's columns ``0..n-1`` keeping their current order."""
    columns = storage.columns.find_by_board_id(board_id)
    reorder_columns(storage, [column.id for column in columns], board_id=board_id)
    return storage.columns.find_by_board_id(board_id)
