"""
Pytest configuration for the blog service.

Provides fixtures for:
- Settings overrides for tests
- An in-memory BlogStore double with failure injection and cursor tracking
- MongoDB connectivity for integration tests
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Any, Generator, Iterator, Optional

import pytest
from bson import ObjectId
from pymongo import MongoClient
from pymongo.errors import AutoReconnect, PyMongoError

from blog_service.config import Settings
from blog_service.service import BlogService

_UNSET = object()


class FakeCursor:
    """
    Iterator over a snapshot of documents that records whether it was closed.

    ``fail_after`` makes the cursor raise ``error`` (AutoReconnect by default)
    once that many documents have been returned, like a connection dropping
    mid-scan or a reply that cannot be decoded.
    """

    def __init__(
        self,
        documents: list[dict[str, Any]],
        fail_after: Optional[int] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self._documents = documents
        self._fail_after = fail_after
        self._error = error or AutoReconnect("connection reset by peer")
        self.returned = 0
        self.closed = False

    def __iter__(self) -> "FakeCursor":
        return self

    def __next__(self) -> dict[str, Any]:
        if self.closed:
            raise StopIteration
        if self._fail_after is not None and self.returned >= self._fail_after:
            raise self._error
        if self.returned >= len(self._documents):
            raise StopIteration
        document = self._documents[self.returned]
        self.returned += 1
        return dict(document)

    def close(self) -> None:
        self.closed = True


class FakeBlogStore:
    """
    In-memory BlogStore keyed by ObjectId, preserving insertion order.
    """

    def __init__(self) -> None:
        self.documents: dict[ObjectId, dict[str, Any]] = {}
        self.calls: list[str] = []
        self.cursors: list[FakeCursor] = []
        self.errors: dict[str, Exception] = {}
        self.cursor_fail_after: Optional[int] = None
        self.cursor_error: Optional[Exception] = None
        self.inserted_id_override: Any = _UNSET

    def _record(self, operation: str) -> None:
        self.calls.append(operation)
        error = self.errors.get(operation)
        if error is not None:
            raise error

    def insert_raw(self, document: dict[str, Any]) -> ObjectId:
        """Store a document as-is, bypassing the service (e.g. a malformed one)."""
        oid = document.get("_id") or ObjectId()
        self.documents[oid] = {**document, "_id": oid}
        return oid

    def insert_one(self, document):
        self._record("insert_one")
        if self.inserted_id_override is not _UNSET:
            return self.inserted_id_override
        oid = ObjectId()
        self.documents[oid] = {"_id": oid, **document}
        return oid

    def find_by_id(self, blog_id):
        self._record("find_by_id")
        document = self.documents.get(blog_id)
        return dict(document) if document is not None else None

    def replace_by_id(self, blog_id, document) -> int:
        self._record("replace_by_id")
        if blog_id not in self.documents:
            return 0
        self.documents[blog_id] = {"_id": blog_id, **document}
        return 1

    def delete_by_id(self, blog_id) -> int:
        self._record("delete_by_id")
        return 1 if self.documents.pop(blog_id, None) is not None else 0

    @contextmanager
    def find_all(self) -> Iterator[FakeCursor]:
        self._record("find_all")
        cursor = FakeCursor(
            list(self.documents.values()),
            fail_after=self.cursor_fail_after,
            error=self.cursor_error,
        )
        self.cursors.append(cursor)
        try:
            yield cursor
        finally:
            cursor.close()


@pytest.fixture
def fake_store() -> FakeBlogStore:
    return FakeBlogStore()


@pytest.fixture
def service(fake_store: FakeBlogStore) -> BlogService:
    return BlogService(fake_store)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        mongo_uri=os.getenv("MONGO_URI", "mongodb://localhost:27017"),
        mongo_database=os.getenv("MONGO_TEST_DATABASE", "blog_service_test"),
        mongo_collection="blog",
        mongo_connect_timeout_ms=2_000,
        server_host="localhost",
        server_port=0,
        server_max_workers=4,
        shutdown_grace_seconds=0.5,
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def mongo_available(test_settings: Settings) -> bool:
    """
    Check if MongoDB is reachable.

    Used to conditionally skip integration tests when the database is not available.
    """
    client = MongoClient(test_settings.mongo_uri, serverSelectionTimeoutMS=2_000)
    try:
        client.admin.command("ping")
        return True
    except PyMongoError:
        return False
    finally:
        client.close()


@pytest.fixture
def mongo_collection(test_settings: Settings, mongo_available: bool) -> Generator[Any, None, None]:
    """
    Provide an empty test collection, dropped again after the test.

    Skips tests if MongoDB is not available.
    """
    if not mongo_available:
        pytest.skip("MongoDB not available for integration tests")

    client = MongoClient(test_settings.mongo_uri)
    collection = client[test_settings.mongo_database][test_settings.mongo_collection]
    collection.drop()
    try:
        yield collection
    finally:
        collection.drop()
        client.close()
