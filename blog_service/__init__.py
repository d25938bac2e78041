"""
Blog service - gRPC CRUD API for blog posts stored in MongoDB.

This package provides:

- A transport-independent ``BlogService`` (create, read, update, delete, list)
  that works against any ``BlogStore``
- A MongoDB-backed store and client lifecycle manager
- The gRPC servicer, its registration helper, and a blocking client
- Process bootstrap with ordered shutdown, and a command-line entry point
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from blog_service.config import Settings, get_settings
from blog_service.domain import (
    BlogNotFoundError,
    BlogRecord,
    BlogServiceError,
    BlogStoreError,
    BlogView,
    InvalidBlogIdError,
    StatusKind,
    parse_blog_id,
)
from blog_service.infrastructure import BlogStore, MongoBlogStore, MongoClientManager
from blog_service.service import BlogService
from blog_service.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "BlogRecord",
    "BlogView",
    "parse_blog_id",
    "StatusKind",
    "BlogServiceError",
    "InvalidBlogIdError",
    "BlogNotFoundError",
    "BlogStoreError",
    # Storage
    "BlogStore",
    "MongoBlogStore",
    "MongoClientManager",
    # Service
    "BlogService",
    # Logging
    "configure_logging",
    "get_logger",
]
