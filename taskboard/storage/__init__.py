"""Storage backends behind one repository interface."""
from taskboard.config import Settings
from taskboard.storage.base import COLLECTIONS, Collection, Storage
from taskboard.storage.documents import DocumentDriver, DocumentStorage
from taskboard.storage.files import FileDriver
from taskboard.storage.memory import MemoryDriver
from taskboard.storage.repositories import apply_patch
from taskboard.storage.s3 import ObjectStoreDriver
from taskboard.storage.sql import SqlStorage


def build_storage(settings: Settings) -> Storage:
    """Construct the backend selected by ``STORAGE_BACKEND``."""
    backend = settings.STORAGE_BACKEND
    if backend == "sql":
        return SqlStorage.from_url(settings.DATABASE_URL, echo=settings.DB_ECHO)
    if backend == "file":
        return DocumentStorage(FileDriver(settings.DATA_DIR))
    if backend == "s3":
        return DocumentStorage(ObjectStoreDriver.from_settings(settings))
    if backend == "memory":
        return DocumentStorage(MemoryDriver())
    raise ValueError(f"Unknown storage backend: {backend}")


__all__ = [
    "COLLECTIONS",
    "Collection",
    "DocumentDriver",
    "DocumentStorage",
    "FileDriver",
    "MemoryDriver",
    "ObjectStoreDriver",
    "SqlStorage",
    "Storage",
    "apply_patch",
    "build_storage",
]
