"""
Infrastructure package for the blog service.

Centralizes MongoDB connectivity (client lifecycle) and typed collection
access. Keep this layer focused on I/O and resource management, decoupled
from the service and RPC layers.
"""

from blog_service.infrastructure.mongo_factory import MongoClientManager
from blog_service.infrastructure.store import BlogStore, Document, MongoBlogStore

__all__ = [
    "BlogStore",
    "Document",
    "MongoBlogStore",
    "MongoClientManager",
]
