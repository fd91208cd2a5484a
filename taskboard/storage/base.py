"""Storage backend interface.

A backend only has to provide one :class:`Collection` per entity collection
and the medium-level hooks (``initialize``, ``check_health``). Everything a
caller sees (identifiers, timestamps, patches, unique constraints, sort
order) is implemented once in :mod:`taskboard.storage.repositories`, so the
relational, file and object-store backends behave identically.
"""
from __future__ import annotations

import contextlib
from abc import ABC, abstractmethod
from typing import Any, Iterator, List, Optional

from pydantic import BaseModel

from taskboard.schemas import HealthStatus
from taskboard.storage.repositories import (
    BoardRepository,
    ColumnRepository,
    ProjectMemberRepository,
    ProjectRepository,
    TaskRepository,
    UserRepository,
)

# Collection names; the file and object-store backends use them verbatim
USERS = "users"
PROJECTS = "projects"
PROJECT_MEMBERS = "project-members"
BOARDS = "boards"
COLUMNS = "columns"
TASKS = "tasks"

COLLECTIONS = (USERS, PROJECTS, PROJECT_MEMBERS, BOARDS, COLUMNS, TASKS)


class Collection(ABC):
    """Raw access to the stored documents/rows of one entity type.

    Read methods return objects a record schema can validate (plain dicts or
    ORM rows). Every method raises ``StorageUnavailableError`` when the medium
    fails; nothing lower level escapes.
    """

    name: str

    @abstractmethod
    def all(self) -> List[Any]:
        """Return every stored item, in no particular order."""

    @abstractmethod
    def get(self, item_id: str) -> Optional[Any]:
        """Return the item with ``item_id`` or ``None``."""

    def where(self, **criteria: Any) -> List[Any]:
        """Return the items whose fields equal every given criterion."""
        return [item for item in self.all() if _matches(item, criteria)]

    @abstractmethod
    def insert(self, record: BaseModel) -> None:
        """Persist a new record."""

    @abstractmethod
    def replace(self, record: BaseModel) -> bool:
        """Overwrite the stored item with the same id; ``False`` if it is gone."""

    @abstractmethod
    def remove(self, item_id: str) -> bool:
        """Delete an item, returning whether something was removed."""


def _matches(item: Any, criteria: dict) -> bool:
    for field, expected in criteria.items():
        value = item.get(field) if isinstance(item, dict) else getattr(item, field, None)
        if value != expected:
            return False
    return True


class Storage(ABC):
    """A configured persistence medium exposing one repository per entity."""

    backend_name: str = "abstract"

    def __init__(self) -> None:
        self.users = UserRepository(self.collection(USERS))
        self.projects = ProjectRepository(self.collection(PROJECTS))
        self.members = ProjectMemberRepository(self.collection(PROJECT_MEMBERS))
        self.boards = BoardRepository(self.collection(BOARDS))
        self.columns = ColumnRepository(self.collection(COLUMNS))
        self.tasks = TaskRepository(self.collection(TASKS))

    @abstractmethod
    def collection(self, name: str) -> Collection:
        """Return the collection driver for ``name``."""

    @abstractmethod
    def initialize(self) -> None:
        """Prepare the medium (tables, directories, sentinel objects)."""

    @abstractmethod
    def check_health(self) -> HealthStatus:
        """Report whether the medium is reachable. Never raises."""

    @contextlib.contextmanager
    def transaction(self) -> Iterator[None]:
        """Group several mutations.

        Only backends with a transaction primitive make the block atomic; the
        default runs each mutation on its own, so a failure part-way leaves
        the earlier writes in place.
        """
        yield

    def close(self) -> None:
        """Release connections or clients held by the backend."""
