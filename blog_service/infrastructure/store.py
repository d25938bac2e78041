"""
Typed access to the blog collection.

``BlogStore`` is the contract the service depends on: equality-by-id and
unfiltered-scan queries only, expressed as explicit methods rather than
filter documents built by callers. ``MongoBlogStore`` implements it on top of
a pymongo collection. Driver exceptions (``pymongo.errors.PyMongoError``)
propagate unchanged; translating them is the service's job.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, ContextManager, Iterator, Mapping, Optional, Protocol, runtime_checkable

from bson import ObjectId
from pymongo.collection import Collection

Document = Mapping[str, Any]


@runtime_checkable
class BlogStore(Protocol):
    """
    Storage primitives needed by the blog service.
    """

    def insert_one(self, document: Document) -> Any:
        """Insert a document and return the identifier assigned by the store."""
        ...

    def find_by_id(self, blog_id: ObjectId) -> Optional[Document]:
        """Return the document with this identifier, or None."""
        ...

    def replace_by_id(self, blog_id: ObjectId, document: Document) -> int:
        """Replace the document with this identifier; return the matched count."""
        ...

    def delete_by_id(self, blog_id: ObjectId) -> int:
        """Delete the document with this identifier; return the deleted count."""
        ...

    def find_all(self) -> ContextManager[Iterator[Document]]:
        """
        Open a cursor over every document.

        The returned context manager yields an iterator of raw documents and
        closes the underlying cursor on exit, however the block is left.
        """
        ...


class MongoBlogStore:
    """
    BlogStore backed by a pymongo Collection.
    """

    def __init__(self, collection: Collection[Document]) -> None:
        self._collection = collection

    def insert_one(self, document: Document) -> Any:
        # insert_one mutates its argument to add _id; keep the caller's mapping clean.
        result = self._collection.insert_one(dict(document))
        return result.inserted_id

    def find_by_id(self, blog_id: ObjectId) -> Optional[Document]:
        return self._collection.find_one({"_id": blog_id})

    def replace_by_id(self, blog_id: ObjectId, document: Document) -> int:
        result = self._collection.replace_one({"_id": blog_id}, dict(document))
        return result.matched_count

    def delete_by_id(self, blog_id: ObjectId) -> int:
        result = self._collection.delete_one({"_id": blog_id})
        return result.deleted_count

    @contextmanager
    def find_all(self) -> Iterator[Iterator[Document]]:
        cursor = self._collection.find({})
        try:
            yield cursor
        finally:
            cursor.close()


__all__ = ["BlogStore", "Document", "MongoBlogStore"]
