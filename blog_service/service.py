"""
Blog request handling.

``BlogService`` implements the five blog operations against an injected
``BlogStore``. Each operation validates the identifier before touching the
store, issues a single store call, and converts every failure into a
``BlogServiceError`` subclass carrying the status kind the caller should
see. The service has no mutable state of its own and is safe to call from
many threads at once.
"""

from __future__ import annotations

from typing import Iterator

from bson import ObjectId
from bson.errors import BSONError
from pydantic import ValidationError
from pymongo.errors import PyMongoError

from blog_service.domain.errors import BlogNotFoundError, BlogStoreError
from blog_service.domain.models import BlogRecord, BlogView, parse_blog_id
from blog_service.infrastructure.store import BlogStore
from blog_service.utils.logging import get_logger

log = get_logger(__name__)


class BlogService:
    """
    Create/read/update/delete/list over one blog collection.
    """

    def __init__(self, store: BlogStore) -> None:
        self._store = store

    def create(self, view: BlogView) -> BlogView:
        """
        Insert a new post. Any ``id`` on the incoming view is ignored.

        The response echoes the submitted fields with the assigned id; the
        stored document is not re-read.
        """
        record = view.to_record()
        try:
            inserted_id = self._store.insert_one(record.to_document())
        except PyMongoError as exc:
            log.error("Insert failed: %s", exc)
            raise BlogStoreError(f"Internal error: {exc}") from exc

        if not isinstance(inserted_id, ObjectId):
            log.error("Store returned a non-ObjectId identifier: %r", inserted_id)
            raise BlogStoreError(f"Can not convert to ObjectID: {inserted_id!r}")

        log.debug("Created blog %s", inserted_id)
        return BlogView(
            id=str(inserted_id),
            author_id=view.author_id,
            title=view.title,
            content=view.content,
        )

    def read(self, blog_id: str) -> BlogView:
        oid = parse_blog_id(blog_id)
        try:
            document = self._store.find_by_id(oid)
        except (PyMongoError, BSONError) as exc:
            log.error("Find failed for %s: %s", blog_id, exc)
            raise BlogStoreError(f"Internal error while reading blog: {exc}") from exc

        if document is None:
            raise BlogNotFoundError(f"Blog not found: {blog_id}", blog_id=blog_id)
        try:
            record = BlogRecord.from_document(document)
        except ValidationError as exc:
            raise BlogNotFoundError(f"Blog not found: {exc}", blog_id=blog_id) from exc

        log.debug("Read blog %s", blog_id)
        return BlogView.from_record(record)

    def update(self, view: BlogView) -> BlogView:
        """
        Fully replace the stored post identified by ``view.id``.

        Every replace failure, including a filter that matched nothing, is
        reported as not-found. The response is built from the submitted
        fields, not re-read from the store.
        """
        oid = parse_blog_id(view.id)
        record = view.to_record(blog_id=oid)
        try:
            matched = self._store.replace_by_id(oid, record.to_document())
        except PyMongoError as exc:
            log.warning("Replace failed for %s: %s", view.id, exc)
            raise BlogNotFoundError(f"Can not update blog: {exc}", blog_id=view.id) from exc

        if matched == 0:
            raise BlogNotFoundError(
                f"Can not update blog: no blog with ID {view.id}", blog_id=view.id
            )

        log.debug("Updated blog %s", view.id)
        return BlogView.from_record(record)

    def delete(self, blog_id: str) -> str:
        """Delete one post and echo back the id that was passed in."""
        oid = parse_blog_id(blog_id)
        try:
            deleted = self._store.delete_by_id(oid)
        except PyMongoError as exc:
            log.error("Delete failed for %s: %s", blog_id, exc)
            raise BlogStoreError(f"Can not delete blog: {exc}") from exc

        if deleted == 0:
            raise BlogNotFoundError("Not found blog with provided ID", blog_id=blog_id)

        log.debug("Deleted blog %s", blog_id)
        return blog_id

    def list_blogs(self) -> Iterator[BlogView]:
        """
        Stream every stored post, one view per document, in cursor order.

        The sequence is lazy and single-use. A document that fails to decode,
        or a cursor error raised mid-iteration, ends it with BlogStoreError.
        The cursor is closed whenever iteration stops, including when the
        consumer abandons the generator.
        """
        emitted = 0
        try:
            with self._store.find_all() as cursor:
                for document in cursor:
                    try:
                        record = BlogRecord.from_document(document)
                    except ValidationError as exc:
                        log.error("Undecodable blog document after %d blogs: %s", emitted, exc)
                        raise BlogStoreError(f"unable to decode data: {exc}") from exc
                    yield BlogView.from_record(record)
                    emitted += 1
        except BSONError as exc:
            log.error("Undecodable BSON reply after %d blogs: %s", emitted, exc)
            raise BlogStoreError(f"unable to decode data: {exc}") from exc
        except PyMongoError as exc:
            log.error("Cursor failed after %d blogs: %s", emitted, exc)
            raise BlogStoreError(f"internal error from cursor: {exc}") from exc
        log.debug("Listed %d blogs", emitted)


__all__ = ["BlogService"]
