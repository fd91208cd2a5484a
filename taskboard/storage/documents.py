"""Document backends: records stored as JSON documents, without transactions.

A :class:`DocumentDriver` knows how to read and write the JSON documents of a
collection on one medium; :class:`DocumentStorage` turns a driver into the
common storage interface.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from taskboard.schemas import HealthStatus
from taskboard.storage.base import COLLECTIONS, Collection, Storage

Document = Dict[str, Any]


class DocumentDriver(ABC):
    """Medium-level access to JSON documents grouped in named collections."""

    name: str = "document"

    @abstractmethod
    def read_all(self, collection: str) -> List[Document]:
        """Return every document of ``collection``."""

    @abstractmethod
    def read(self, collection: str, item_id: str) -> Optional[Document]:
        """Return one document or ``None``."""

    @abstractmethod
    def write(self, collection: str, document: Document) -> None:
        """Create or overwrite the document with ``document["id"]``."""

    @abstractmethod
    def delete(self, collection: str, item_id: str) -> bool:
        """Remove a document, returning whether it existed."""

    @abstractmethod
    def initialize(self, collections: List[str]) -> None:
        """Prepare the medium for the given collections."""

    @abstractmethod
    def check_health(self) -> HealthStatus:
        """Report whether the medium is reachable. Never raises."""


class DocumentCollection(Collection):
    def __init__(self, driver: DocumentDriver, name: str) -> None:
        self.name = name
        self._driver = driver

    def all(self) -> List[Any]:
        return self._driver.read_all(self.name)

    def get(self, item_id: str) -> Optional[Any]:
        return self._driver.read(self.name, item_id)

    def insert(self, record: BaseModel) -> None:
        self._driver.write(self.name, record.model_dump(mode="json"))

    def replace(self, record: BaseModel) -> bool:
        # Read-modify-write without a version check: the last writer wins
        if self._driver.read(self.name, record.id) is None:
            return False
        self._driver.write(self.name, record.model_dump(mode="json"))
        return True

    def remove(self, item_id: str) -> bool:
        return self._driver.delete(self.name, item_id)


class DocumentStorage(Storage):
    """Storage over a :class:`DocumentDriver`; ``transaction()`` is not atomic."""

    def __init__(self, driver: DocumentDriver) -> None:
        self._driver = driver
        self.backend_name = driver.name
        super().__init__()

    @property
    def driver(self) -> DocumentDriver:
        return self._driver

    def collection(self, name: str) -> Collection:
        return DocumentCollection(self._driver, name)

    def initialize(self) -> None:
        self._driver.initialize(list(COLLECTIONS))

    def check_health(self) -> HealthStatus:
        return self._driver.check_health()
