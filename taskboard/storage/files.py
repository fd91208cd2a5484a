"""Local-file document driver: one JSON array per collection.

Every mutation re-reads the whole collection file and rewrites it. There is
no locking, so two concurrent writers to the same collection can lose an
update (last write wins for the whole file). The rewrite goes through a
temporary file and ``os.replace`` so readers never see a truncated file.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Optional, Union

from taskboard.errors import StorageUnavailableError
from taskboard.schemas import HealthStatus
from taskboard.storage.documents import Document, DocumentDriver

logger = logging.getLogger(__name__)


class FileDriver(DocumentDriver):
    name = "file"

    def __init__(self, data_dir: Union[str, Path]) -> None:
        self._data_dir = Path(data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def _path(self, collection: str) -> Path:
        return self._data_dir / f"{collection}.json"

    def _ensure_dir(self) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)

    def _load(self, collection: str) -> List[Document]:
        path = self._path(collection)
        try:
            with path.open("r", encoding="utf-8") as handle:
                documents = json.load(handle)
        except FileNotFoundError:
            return []
        except (OSError, ValueError) as exc:
            logger.error("Cannot read collection file %s: %s", path, exc)
            raise StorageUnavailableError(f"Cannot read collection '{collection}'") from exc
        if not isinstance(documents, list) or not all(isinstance(item, dict) for item in documents):
            logger.error("Collection file %s is not a JSON array of objects", path)
            raise StorageUnavailableError(f"Collection file for '{collection}' is not a JSON array of objects")
        return documents

    def _dump(self, collection: str, documents: List[Document]) -> None:
        path = self._path(collection)
        try:
            self._ensure_dir()
            fd, tmp_name = tempfile.mkstemp(prefix=f".{collection}.", suffix=".tmp", dir=self._data_dir)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(documents, handle, indent=2)
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            logger.error("Cannot write collection file %s: %s", path, exc)
            raise StorageUnavailableError(f"Cannot write collection '{collection}'") from exc

    def read_all(self, collection: str) -> List[Document]:
        return self._load(collection)

    def read(self, collection: str, item_id: str) -> Optional[Document]:
        for document in self._load(collection):
            if document.get("id") == item_id:
                return document
        return None

    def write(self, collection: str, document: Document) -> None:
        documents = self._load(collection)
        for index, existing in enumerate(documents):
            if existing.get("id") == document["id"]:
                documents[index] = document
                break
        else:
            documents.append(document)
        self._dump(collection, documents)

    def delete(self, collection: str, item_id: str) -> bool:
        documents = self._load(collection)
        remaining = [document for document in documents if document.get("id") != item_id]
        if len(remaining) == len(documents):
            return False
        self._dump(collection, remaining)
        return True

    def initialize(self, collections: List[str]) -> None:
        for collection in collections:
            if not self._path(collection).exists():
                self._dump(collection, [])
        logger.info("Local file storage initialized in %s", self._data_dir)

    def check_health(self) -> HealthStatus:
        try:
            self._ensure_dir()
            if not os.access(self._data_dir, os.R_OK | os.W_OK):
                raise PermissionError(f"{self._data_dir} is not readable and writable")
        except OSError as exc:
            return HealthStatus(status="error", message=str(exc), backend=self.name)
        return HealthStatus(status="connected", message="Local file storage is accessible", backend=self.name)
