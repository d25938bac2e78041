"""
Integration tests against a real MongoDB instance.

These tests verify that:
1. MongoBlogStore performs each primitive against a live collection
2. The service contract holds end to end with real ObjectIds and cursors
3. The full server (MongoDB client + gRPC listener) starts and shuts down in order

Run with: RUN_INTEGRATION_TESTS=1 pytest tests/integration/
"""

from __future__ import annotations

import os

import grpc
import pytest
from bson import ObjectId

from blog_service.domain.errors import BlogNotFoundError, BlogStoreError
from blog_service.domain.models import BlogView
from blog_service.infrastructure.store import MongoBlogStore
from blog_service.rpc.client import BlogClient
from blog_service.server import BlogServer
from blog_service.service import BlogService

CALL_TIMEOUT = 5.0
POST_COUNT = 3

pytestmark = pytest.mark.skipif(
    os.getenv("RUN_INTEGRATION_TESTS", "0") != "1",
    reason="Integration tests require RUN_INTEGRATION_TESTS=1 and reachable MongoDB",
)


@pytest.fixture
def mongo_service(mongo_collection) -> BlogService:
    return BlogService(MongoBlogStore(mongo_collection))


class TestMongoBlogService:
    """Service contract against a live collection."""

    def test_create_stores_document_shape(self, mongo_service, mongo_collection):
        created = mongo_service.create(BlogView(author_id="u1", title="hello", content="world"))

        stored = mongo_collection.find_one({"_id": ObjectId(created.id)})
        assert stored == {
            "_id": ObjectId(created.id),
            "author_id": "u1",
            "title": "hello",
            "content": "world",
        }

    def test_full_lifecycle(self, mongo_service):
        created = mongo_service.create(BlogView(author_id="u1", title="hello", content="world"))
        assert mongo_service.read(created.id) == created

        replacement = BlogView(id=created.id, author_id="u2", title="new", content="")
        assert mongo_service.update(replacement) == replacement
        assert mongo_service.read(created.id) == replacement

        assert mongo_service.delete(created.id) == created.id
        with pytest.raises(BlogNotFoundError):
            mongo_service.delete(created.id)
        with pytest.raises(BlogNotFoundError):
            mongo_service.read(created.id)

    def test_update_of_missing_id_is_not_found(self, mongo_service, mongo_collection):
        with pytest.raises(BlogNotFoundError):
            mongo_service.update(
                BlogView(id=str(ObjectId()), author_id="u1", title="t", content="c")
            )
        assert mongo_collection.count_documents({}) == 0

    def test_list_returns_every_record_once(self, mongo_service):
        created = [
            mongo_service.create(BlogView(author_id=f"u{i}", title=f"t{i}", content=""))
            for i in range(POST_COUNT)
        ]

        listed = list(mongo_service.list_blogs())

        assert sorted(view.id for view in listed) == sorted(view.id for view in created)

    def test_list_on_empty_collection(self, mongo_service):
        assert list(mongo_service.list_blogs()) == []

    def test_list_aborts_on_malformed_document(self, mongo_service, mongo_collection):
        mongo_collection.insert_one({"author_id": 12, "title": "t", "content": "c"})

        with pytest.raises(BlogStoreError, match="unable to decode data"):
            list(mongo_service.list_blogs())


@pytest.mark.slow
def test_server_serves_over_grpc_and_shuts_down(test_settings, mongo_collection):
    blog_server = BlogServer(test_settings)
    blog_server.start()
    try:
        with grpc.insecure_channel(f"localhost:{blog_server.port}") as channel:
            client = BlogClient(channel)
            created = client.create_blog("u1", "hello", "world", timeout=CALL_TIMEOUT)
            assert client.read_blog(created.id, timeout=CALL_TIMEOUT) == created
            assert [view.id for view in client.list_blogs(timeout=CALL_TIMEOUT)] == [created.id]
    finally:
        blog_server.stop()

    assert mongo_collection.count_documents({}) == 1
