"""Entity repositories shared by every storage backend."""
from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any, Generic, List, Mapping, Optional, Tuple, Type, TypeVar, Union

import pydantic
from pydantic import BaseModel

from taskboard.errors import ConflictError, StorageUnavailableError, ValidationError
from taskboard.schemas import (
    BoardRecord,
    ColumnRecord,
    ProjectMemberRecord,
    ProjectRecord,
    RecordBase,
    TaskRecord,
    UserRecord,
    utcnow,
)
from taskboard.utils.positions import sort_by_position

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from taskboard.storage.base import Collection

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=RecordBase)
Fields = Union[BaseModel, Mapping[str, Any]]

# Never written by a create or a patch
IMMUTABLE_FIELDS = ("id", "created_at", "updated_at")


def _as_fields(data: Fields, *, exclude_unset: bool) -> dict:
    if isinstance(data, BaseModel):
        return data.model_dump(exclude_unset=exclude_unset)
    return dict(data)


def _validate(record_type: Type[RecordT], values: Any) -> RecordT:
    try:
        return record_type.model_validate(values)
    except pydantic.ValidationError as exc:
        raise ValidationError(f"Invalid {record_type.__name__}: {exc}") from exc


def _load_record(record_type: Type[RecordT], item: Any) -> RecordT:
    """Validate a stored item; a malformed one means the store is corrupt."""
    try:
        return record_type.model_validate(item)
    except pydantic.ValidationError as exc:
        logger.error("Stored %s is malformed: %s", record_type.__name__, exc)
        raise StorageUnavailableError(f"Stored {record_type.__name__} is malformed") from exc


_clock_lock = threading.Lock()
_last_created: Optional[datetime] = None


def _creation_time() -> datetime:
    """Strictly increasing creation timestamps within this process."""
    global _last_created
    with _clock_lock:
        now = utcnow()
        if _last_created is not None and now <= _last_created:
            now = _last_created + timedelta(microseconds=1)
        _last_created = now
        return now


def apply_patch(record: RecordT, patch: Fields) -> RecordT:
    """Merge the explicitly set fields of ``patch`` over ``record``.

    ``updated_at`` is always refreshed; ``id`` and ``created_at`` are never
    touched whatever the patch contains.
    """
    changes = _as_fields(patch, exclude_unset=True)
    for field in IMMUTABLE_FIELDS:
        changes.pop(field, None)
    merged = {**record.model_dump(), **changes, "updated_at": utcnow()}
    return _validate(type(record), merged)


class Repository(Generic[RecordT]):
    """CRUD over one collection, returning validated records."""

    record_type: Type[RecordT]
    unique_together: Tuple[Tuple[str, ...], ...] = ()

    def __init__(self, collection: "Collection") -> None:
        self._collection = collection

    @property
    def collection(self) -> "Collection":
        return self._collection

    def _records(self, items: List[Any]) -> List[RecordT]:
        # Creation order is the fetch order on every backend
        records = [_load_record(self.record_type, item) for item in items]
        return sorted(records, key=lambda record: record.created_at)

    def _check_unique(self, record: RecordT) -> None:
        for fields in self.unique_together:
            criteria = {field: getattr(record, field) for field in fields}
            clashes = [
                item for item in self._collection.where(**criteria)
                if _load_record(self.record_type, item).id != record.id
            ]
            if clashes:
                described = ", ".join(f"{field}={value}" for field, value in criteria.items())
                raise ConflictError(f"{self.record_type.__name__} with {described} already exists")

    def find_all(self) -> List[RecordT]:
        return self._records(self._collection.all())

    def find_by_id(self, item_id: str) -> Optional[RecordT]:
        item = self._collection.get(item_id)
        if item is None:
            return None
        return _load_record(self.record_type, item)

    def find_where(self, **criteria: Any) -> List[RecordT]:
        return self._records(self._collection.where(**criteria))

    def create(self, data: Fields) -> RecordT:
        """Store a new record with a fresh id and both timestamps set to now."""
        fields = _as_fields(data, exclude_unset=False)
        for field in IMMUTABLE_FIELDS:
            fields.pop(field, None)
        now = _creation_time()
        record = _validate(
            self.record_type,
            {**fields, "id": str(uuid.uuid4()), "created_at": now, "updated_at": now},
        )
        self._check_unique(record)
        self._collection.insert(record)
        return record

    def update(self, item_id: str, patch: Fields) -> Optional[RecordT]:
        """Apply ``patch``; ``None`` when ``item_id`` does not exist."""
        existing = self.find_by_id(item_id)
        if existing is None:
            return None
        record = apply_patch(existing, patch)
        self._check_unique(record)
        if not self._collection.replace(record):
            return None
        return record

    def delete(self, item_id: str) -> bool:
        return self._collection.remove(item_id)


class UserRepository(Repository[UserRecord]):
    record_type = UserRecord
    unique_together = (("email",),)

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        matches = self.find_where(email=email)
        return matches[0] if matches else None


class ProjectRepository(Repository[ProjectRecord]):
    record_type = ProjectRecord


class ProjectMemberRepository(Repository[ProjectMemberRecord]):
    record_type = ProjectMemberRecord
    unique_together = (("project_id", "user_id"),)

    def find_by_project_id(self, project_id: str) -> List[ProjectMemberRecord]:
        return self.find_where(project_id=project_id)

    def find_by_user_id(self, user_id: str) -> List[ProjectMemberRecord]:
        return self.find_where(user_id=user_id)

    def find_by_project_and_user(self, project_id: str, user_id: str) -> Optional[ProjectMemberRecord]:
        matches = self.find_where(project_id=project_id, user_id=user_id)
        return matches[0] if matches else None


class BoardRepository(Repository[BoardRecord]):
    record_type = BoardRecord

    def find_by_project_id(self, project_id: str) -> List[BoardRecord]:
        return self.find_where(project_id=project_id)


class ColumnRepository(Repository[ColumnRecord]):
    record_type = ColumnRecord

    def find_by_board_id(self, board_id: str) -> List[ColumnRecord]:
        """Columns of a board, left to right."""
        return sort_by_position(self.find_where(board_id=board_id))


class TaskRepository(Repository[TaskRecord]):
    record_type = TaskRecord

    def find_by_column_id(self, column_id: str) -> List[TaskRecord]:
        """Tasks of a column, top to bottom."""
        return sort_by_position(self.find_where(column_id=column_id))

    def find_by_board_id(self, board_id: str) -> List[TaskRecord]:
        return sort_by_position(self.find_where(board_id=board_id))

    def find_by_assignee_id(self, user_id: str) -> List[TaskRecord]:
        return self.find_where(assignee_id=user_id)
