"""
Domain package for the blog service.

Exports the record/view models, identifier parsing, and the error taxonomy.
Keep this package focused on data definitions and validation concerns.
"""

from blog_service.domain.errors import (
    BlogNotFoundError,
    BlogServiceError,
    BlogStoreError,
    InvalidBlogIdError,
    StatusKind,
)
from blog_service.domain.models import BlogRecord, BlogView, parse_blog_id

__all__ = [
    "BlogRecord",
    "BlogView",
    "parse_blog_id",
    "StatusKind",
    "BlogServiceError",
    "InvalidBlogIdError",
    "BlogNotFoundError",
    "BlogStoreError",
]
