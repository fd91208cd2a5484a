"""Object-store document driver: one JSON object per record in an S3 bucket.

Records live at ``<prefix>/<collection>/<id>.json``. Updates are plain
read-modify-write without an ETag check, so concurrent writers to the same
record can lose an update; other records are unaffected.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from taskboard.errors import StorageUnavailableError
from taskboard.schemas import HealthStatus, utcnow
from taskboard.storage.documents import Document, DocumentDriver

logger = logging.getLogger(__name__)

_MISSING_CODES = {"NoSuchKey", "404", "NotFound"}
HEALTH_CHECK_KEY = "health-check.json"


def _is_missing(exc: ClientError) -> bool:
    return exc.response.get("Error", {}).get("Code") in _MISSING_CODES


class ObjectStoreDriver(DocumentDriver):
    name = "s3"

    def __init__(self, bucket: str, prefix: str = "kanban-data", client: Any = None, **client_kwargs: Any) -> None:
        self._bucket = bucket
        self._prefix = prefix.strip("/")
        self._client = client if client is not None else boto3.client("s3", **client_kwargs)

    @classmethod
    def from_settings(cls, settings: Any) -> "ObjectStoreDriver":
        client_kwargs: Dict[str, Any] = {"region_name": settings.AWS_REGION}
        if settings.S3_ENDPOINT_URL:
            client_kwargs["endpoint_url"] = settings.S3_ENDPOINT_URL
        return cls(settings.S3_BUCKET_NAME, settings.S3_PREFIX, **client_kwargs)

    def _key(self, *parts: str) -> str:
        return "/".join(part for part in (self._prefix, *parts) if part)

    def _record_key(self, collection: str, item_id: str) -> str:
        return self._key(collection, f"{item_id}.json")

    def _unavailable(self, action: str, exc: Exception) -> StorageUnavailableError:
        logger.error("Object store %s failed on bucket %s: %s", action, self._bucket, exc)
        return StorageUnavailableError(f"Object store unavailable ({action})")

    def _get_json(self, key: str) -> Optional[Document]:
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=key)
            body = response["Body"].read()
        except ClientError as exc:
            if _is_missing(exc):
                return None
            raise self._unavailable("get", exc) from exc
        except BotoCoreError as exc:
            raise self._unavailable("get", exc) from exc
        try:
            document = json.loads(body)
        except ValueError as exc:
            raise self._unavailable(f"decode {key}", exc) from exc
        if not isinstance(document, dict):
            logger.error("Object %s in bucket %s is not a JSON object", key, self._bucket)
            raise StorageUnavailableError(f"Object store unavailable (decode {key})")
        return document

    def _put_json(self, key: str, document: Document) -> None:
        try:
            self._client.put_object(
                Bucket=self._bucket,
                Key=key,
                Body=json.dumps(document, indent=2).encode("utf-8"),
                ContentType="application/json",
            )
        except (ClientError, BotoCoreError) as exc:
            raise self._unavailable("put", exc) from exc

    def _list_keys(self, collection: str) -> List[str]:
        keys: List[str] = []
        request: Dict[str, Any] = {"Bucket": self._bucket, "Prefix": self._key(collection) + "/"}
        try:
            while True:
                response = self._client.list_objects_v2(**request)
                keys.extend(
                    item["Key"] for item in response.get("Contents", []) if item["Key"].endswith(".json")
                )
                if not response.get("IsTruncated"):
                    return keys
                request["ContinuationToken"] = response["NextContinuationToken"]
        except (ClientError, BotoCoreError) as exc:
            raise self._unavailable("list", exc) from exc

    def read_all(self, collection: str) -> List[Document]:
        documents = []
        for key in self._list_keys(collection):
            document = self._get_json(key)
            # Deleted between the listing and the read
            if document is not None:
                documents.append(document)
        return documents

    def read(self, collection: str, item_id: str) -> Optional[Document]:
        return self._get_json(self._record_key(collection, item_id))

    def write(self, collection: str, document: Document) -> None:
        self._put_json(self._record_key(collection, document["id"]), document)

    def delete(self, collection: str, item_id: str) -> bool:
        key = self._record_key(collection, item_id)
        try:
            self._client.head_object(Bucket=self._bucket, Key=key)
        except ClientError as exc:
            if _is_missing(exc):
                return False
            raise self._unavailable("head", exc) from exc
        except BotoCoreError as exc:
            raise self._unavailable("head", exc) from exc
        try:
            self._client.delete_object(Bucket=self._bucket, Key=key)
        except (ClientError, BotoCoreError) as exc:
            raise self._unavailable("delete", exc) from exc
        return True

    def initialize(self, collections: List[str]) -> None:
        # Collections are key prefixes and need no setup; only the sentinel does
        key = self._key(HEALTH_CHECK_KEY)
        if self._get_json(key) is None:
            self._put_json(key, {"status": "healthy", "initialized_at": utcnow().isoformat()})
        logger.info("S3 storage initialized in bucket %s", self._bucket)

    def check_health(self) -> HealthStatus:
        try:
            self._client.head_object(Bucket=self._bucket, Key=self._key(HEALTH_CHECK_KEY))
        except ClientError as exc:
            if _is_missing(exc):
                return HealthStatus(
                    status="error",
                    message="Health check object missing; storage not initialized",
                    backend=self.name,
                )
            return HealthStatus(status="error", message=str(exc), backend=self.name)
        except BotoCoreError as exc:
            return HealthStatus(status="error", message=str(exc), backend=self.name)
        return HealthStatus(
            status="connected",
            message=f"S3 bucket {self._bucket} is accessible",
            backend=self.name,
        )
