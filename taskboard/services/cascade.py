"""Cascade deletes performed by the application, identically on every backend.

Each delete is a saga: children are removed (or detached) first, one at a
time, then the parent. A child that fails is logged and recorded, and the
saga carries on with the rest; nothing is rolled back. The parent row is
deleted last, and a failure there propagates to the caller.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Literal

from taskboard.errors import HasDependentsError, TaskboardError
from taskboard.schemas import CascadeFailureOut, CascadeSummary
from taskboard.storage import Storage

logger = logging.getLogger(__name__)

ColumnDeletePolicy = Literal["cascade", "block"]


@dataclass
class CascadeFailure:
    kind: str
    id: str
    error: str


@dataclass
class CascadeResult:
    """Outcome of one cascade delete."""

    found: bool = True
    deleted: Dict[str, int] = field(default_factory=dict)
    detached: Dict[str, int] = field(default_factory=dict)
    failures: List[CascadeFailure] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return self.found and not self.failures

    def count(self, kind: str, bucket: str = "deleted") -> None:
        counts = getattr(self, bucket)
        counts[kind] = counts.get(kind, 0) + 1

    def merge(self, other: "CascadeResult") -> None:
        for kind, amount in other.deleted.items():
            self.deleted[kind] = self.deleted.get(kind, 0) + amount
        for kind, amount in other.detached.items():
            self.detached[kind] = self.detached.get(kind, 0) + amount
        self.failures.extend(other.failures)

    def summary(self) -> CascadeSummary:
        return CascadeSummary(
            deleted=dict(self.deleted),
            failures=[CascadeFailureOut(kind=f.kind, id=f.id, error=f.error) for f in self.failures],
        )


def _each(result: CascadeResult, kind: str, ids: Iterable[str], step: Callable[[str], bool], bucket: str = "deleted") -> None:
    for item_id in ids:
        try:
            done = step(item_id)
        except TaskboardError as exc:
            logger.warning("Cascade step failed for %s %s: %s", kind, item_id, exc.detail)
            result.failures.append(CascadeFailure(kind=kind, id=item_id, error=exc.detail))
            continue
        if done:
            result.count(kind, bucket)


def _finish(result: CascadeResult, kind: str, removed: bool) -> CascadeResult:
    if removed:
        result.count(kind)
    if result.failures:
        logger.warning("Deleted %s with %d failed cascade step(s)", kind, len(result.failures))
    return result


def delete_board(storage: Storage, board_id: str) -> CascadeResult:
    """Delete a board's tasks, then its columns, then the board."""
    if storage.boards.find_by_id(board_id) is None:
        return CascadeResult(found=False)

    result = CascadeResult()
    columns = storage.columns.find_by_board_id(board_id)
    task_ids = {task.id: None for task in storage.tasks.find_by_board_id(board_id)}
    for column in columns:
        # Also catch tasks whose board_id drifted from their column's board
        task_ids.update({task.id: None for task in storage.tasks.find_by_column_id(column.id)})

    _each(result, "task", list(task_ids), storage.tasks.delete)
    _each(result, "column", [column.id for column in columns], storage.columns.delete)
    return _finish(result, "board", storage.boards.delete(board_id))


def delete_column(storage: Storage, column_id: str, policy: ColumnDeletePolicy = "cascade") -> CascadeResult:
    """Delete a column according to ``policy``.

    ``cascade`` removes the column's tasks first; ``block`` refuses with
    ``HasDependentsError`` while the column still holds tasks.
    """
    if storage.columns.find_by_id(column_id) is None:
        return CascadeResult(found=False)

    tasks = storage.tasks.find_by_column_id(column_id)
    if tasks and policy == "block":
        raise HasDependentsError(
            f"Column still contains {len(tasks)} task(s); move or delete them first"
        )

    result = CascadeResult()
    _each(result, "task", [task.id for task in tasks], storage.tasks.delete)
    return _finish(result, "column", storage.columns.delete(column_id))


def delete_project(storage: Storage, project_id: str) -> CascadeResult:
    """Delete a project's memberships and boards (each cascading), then the project."""
    if storage.projects.find_by_id(project_id) is None:
        return CascadeResult(found=False)

    result = CascadeResult()
    members = storage.members.find_by_project_id(project_id)
    _each(result, "member", [member.id for member in members], storage.members.delete)

    for board in storage.boards.find_by_project_id(project_id):
        try:
            result.merge(delete_board(storage, board.id))
        except TaskboardError as exc:
            logger.warning("Cascade step failed for board %s: %s", board.id, exc.detail)
            result.failures.append(CascadeFailure(kind="board", id=board.id, error=exc.detail))

    return _finish(result, "project", storage.projects.delete(project_id))


def delete_user(storage: Storage, user_id: str) -> CascadeResult:
    """Unassign the user's tasks, drop their memberships, then delete the user.

    Tasks are never deleted with their assignee.
    """
    if storage.users.find_by_id(user_id) is None:
        return CascadeResult(found=False)

    result = CascadeResult()

    def unassign(task_id: str) -> bool:
        return storage.tasks.update(task_id, {"assignee_id": None}) is not None

    tasks = storage.tasks.find_by_assignee_id(user_id)
    _each(result, "task", [task.id for task in tasks], unassign, bucket="detached")
    members = storage.members.find_by_user_id(user_id)
    _each(result, "member", [member.id for member in members], storage.members.delete)
    return _finish(result, "user", storage.users.delete(user_id))
