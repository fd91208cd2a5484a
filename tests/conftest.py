import io
from typing import Dict, Optional

import pytest
from botocore.exceptions import ClientError
from fastapi.testclient import TestClient

from taskboard.config import Settings
from taskboard.database import build_engine
from taskboard.main import create_app
from taskboard.storage import DocumentStorage, FileDriver, MemoryDriver, ObjectStoreDriver, SqlStorage

BACKENDS = ["memory", "file", "sql", "s3"]


def _client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class FakeS3Client:
    """Just enough of the boto3 S3 client for the object-store driver."""

    def __init__(self, page_size: int = 3) -> None:
        self.objects: Dict[str, bytes] = {}
        self.page_size = page_size
        self.fail_with: Optional[str] = None

    def _check(self, operation: str) -> None:
        if self.fail_with:
            raise _client_error(self.fail_with, operation)

    def get_object(self, Bucket, Key):
        self._check("GetObject")
        if Key not in self.objects:
            raise _client_error("NoSuchKey", "GetObject")
        return {"Body": io.BytesIO(self.objects[Key])}

    def head_object(self, Bucket, Key):
        self._check("HeadObject")
        if Key not in self.objects:
            raise _client_error("404", "HeadObject")
        return {"ContentLength": len(self.objects[Key])}

    def put_object(self, Bucket, Key, Body, ContentType=None):
        self._check("PutObject")
        self.objects[Key] = Body

    def delete_object(self, Bucket, Key):
        self._check("DeleteObject")
        self.objects.pop(Key, None)
        return {}

    def list_objects_v2(self, Bucket, Prefix, ContinuationToken=None):
        self._check("ListObjectsV2")
        keys = sorted(key for key in self.objects if key.startswith(Prefix))
        start = int(ContinuationToken or 0)
        page = keys[start:start + self.page_size]
        response = {"Contents": [{"Key": key} for key in page], "IsTruncated": start + self.page_size < len(keys)}
        if response["IsTruncated"]:
            response["NextContinuationToken"] = str(start + self.page_size)
        return response


def make_storage(kind: str, tmp_path):
    if kind == "memory":
        return DocumentStorage(MemoryDriver())
    if kind == "file":
        return DocumentStorage(FileDriver(tmp_path / "data"))
    if kind == "sql":
        return SqlStorage(build_engine("sqlite://"))
    if kind == "s3":
        return DocumentStorage(ObjectStoreDriver("test-bucket", "kanban-data", client=FakeS3Client()))
    raise ValueError(kind)


@pytest.fixture(params=BACKENDS)
def storage(request, tmp_path):
    """Every storage backend, initialized and empty."""
    instance = make_storage(request.param, tmp_path)
    instance.initialize()
    try:
        yield instance
    finally:
        instance.close()


@pytest.fixture
def memory_storage():
    instance = DocumentStorage(MemoryDriver())
    instance.initialize()
    return instance


@pytest.fixture
def settings() -> Settings:
    return Settings(STORAGE_BACKEND="memory", COLUMN_DELETE_POLICY="cascade", LOG_LEVEL="WARNING")


@pytest.fixture
def client(settings, memory_storage):
    app = create_app(settings=settings, storage=memory_storage)
    with TestClient(app) as test_client:
        yield test_client
