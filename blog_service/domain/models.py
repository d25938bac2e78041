"""
Domain models for the blog service.

``BlogRecord`` is the stored shape (BSON document with ``_id``,
``author_id``, ``title``, ``content``). ``BlogView`` is the shape exchanged
with RPC callers, where the identifier is always its 24-character hex
string. Both are frozen so a value handed to one layer cannot be mutated by
another.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BaseModel, Field, field_validator

from blog_service.domain.errors import InvalidBlogIdError


def parse_blog_id(value: str) -> ObjectId:
    """
    Parse a wire identifier into an ObjectId.

    Raises
    ------
    InvalidBlogIdError
        If ``value`` is not a 24-character hex string.
    """
    if not isinstance(value, str):
        raise InvalidBlogIdError(value, "expected a hex string")
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as exc:
        raise InvalidBlogIdError(value, str(exc)) from exc


class BlogRecord(BaseModel):
    """
    Representation of a single document in the blog collection.
    """

    id: Optional[ObjectId] = Field(None, alias="_id", description="Store-assigned identifier.")
    author_id: str = Field("", description="Opaque author reference.")
    title: str = Field("", description="Post title, may be empty.")
    content: str = Field("", description="Post body, may be empty.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "arbitrary_types_allowed": True,
        "strict": True,
    }

    @field_validator("author_id", "title", "content", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        # BSON null reads as "", the same as an absent field.
        return "" if value is None else value

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "BlogRecord":
        """
        Decode a raw BSON document.

        Absent or null text fields become "". A present value of the wrong
        type (or a non-ObjectId ``_id``) raises pydantic.ValidationError.
        """
        return cls.model_validate(dict(document))

    def to_document(self) -> dict[str, Any]:
        """
        Document payload for insert/replace. ``_id`` is never part of the
        payload: the store assigns it on insert and matches on it for replace.
        """
        return self.model_dump(by_alias=True, exclude={"id"})


class BlogView(BaseModel):
    """
    Wire-level representation of a blog post.
    """

    id: str = Field("", description="Hex ObjectId; empty only on create requests.")
    author_id: str = ""
    title: str = ""
    content: str = ""

    model_config = {"frozen": True}

    @classmethod
    def from_record(cls, record: BlogRecord) -> "BlogView":
        return cls(
            id=str(record.id) if record.id is not None else "",
            author_id=record.author_id,
            title=record.title,
            content=record.content,
        )

    def to_record(self, blog_id: Optional[ObjectId] = None) -> BlogRecord:
        """Build a record from the view's content fields; the view's own id is ignored."""
        return BlogRecord(
            id=blog_id,
            author_id=self.author_id,
            title=self.title,
            content=self.content,
        )


__all__ = ["BlogRecord", "BlogView", "parse_blog_id"]
