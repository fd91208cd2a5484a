"""In-process document driver, used by the test suite and for quick experiments."""
from __future__ import annotations

import copy
from typing import Dict, List, Optional

from taskboard.schemas import HealthStatus
from taskboard.storage.documents import Document, DocumentDriver


class MemoryDriver(DocumentDriver):
    name = "memory"

    def __init__(self) -> None:
        self._collections: Dict[str, Dict[str, Document]] = {}

    def _collection(self, collection: str) -> Dict[str, Document]:
        return self._collections.setdefault(collection, {})

    def read_all(self, collection: str) -> List[Document]:
        return [copy.deepcopy(document) for document in self._collection(collection).values()]

    def read(self, collection: str, item_id: str) -> Optional[Document]:
        document = self._collection(collection).get(item_id)
        return copy.deepcopy(document) if document is not None else None

    def write(self, collection: str, document: Document) -> None:
        self._collection(collection)[document["id"]] = copy.deepcopy(document)

    def delete(self, collection: str, item_id: str) -> bool:
        return self._collection(collection).pop(item_id, None) is not None

    def initialize(self, collections: List[str]) -> None:
        for collection in collections:
            self._collection(collection)

    def check_health(self) -> HealthStatus:
        return HealthStatus(status="connected", message="In-memory storage is accessible", backend=self.name)
