"""
Domain exceptions raised by the blog service.

Every failure of a service operation is one of these. Each carries the
status kind the RPC layer should report and a human-readable message that
embeds the underlying cause. The gRPC servicer translates them with
``context.abort``; nothing below the servicer knows about grpc.
"""

from __future__ import annotations

import enum


class StatusKind(str, enum.Enum):
    """Failure categories reported to callers."""

    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL = "INTERNAL"


class BlogServiceError(Exception):
    """Base class for all blog service failures."""

    status: StatusKind = StatusKind.INTERNAL

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidBlogIdError(BlogServiceError):
    """Raised when a client-supplied identifier is not a well-formed ObjectId."""

    status = StatusKind.INVALID_ARGUMENT

    def __init__(self, blog_id: object, reason: str) -> None:
        self.blog_id = blog_id
        super().__init__(f"Invalid blog ID {blog_id!r}: {reason}")


class BlogNotFoundError(BlogServiceError):
    """Raised when no stored blog matches a well-formed identifier."""

    status = StatusKind.NOT_FOUND

    def __init__(self, message: str, blog_id: str = "") -> None:
        self.blog_id = blog_id
        super().__init__(message)


class BlogStoreError(BlogServiceError):
    """Raised on store communication, decoding, or inconsistent-response failures."""

    status = StatusKind.INTERNAL


__all__ = [
    "StatusKind",
    "BlogServiceError",
    "InvalidBlogIdError",
    "BlogNotFoundError",
    "BlogStoreError",
]
