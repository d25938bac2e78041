"""
MongoDB connection factory for the blog service.

Provides centralized management of the process-wide ``MongoClient``. One
client is created at startup and shared by every concurrent request (the
driver pools connections internally and is thread-safe); it is closed exactly
once at orderly shutdown.

Includes retry logic for the startup connectivity check using tenacity.
Request-level operations never retry.
"""

from __future__ import annotations

import threading
from typing import Any, Mapping, Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import ConnectionFailure
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from blog_service.config import Settings, get_settings
from blog_service.utils.logging import get_logger

log = get_logger(__name__)


class MongoClientManager:
    """
    Thread-safe owner of a single MongoClient.

    The client is created lazily on first use; ``close`` is idempotent.
    """

    def __init__(self, settings: Optional[Settings] = None, client_factory: Any = MongoClient) -> None:
        self._settings = settings or get_settings()
        self._client_factory = client_factory
        self._client: Optional[MongoClient] = None
        self._closed = False
        self._lock = threading.Lock()

    @property
    def settings(self) -> Settings:
        return self._settings

    def get_client(self) -> MongoClient:
        """
        Get or create the managed client.

        Raises
        ------
        RuntimeError
            If the manager has already been closed.
        """
        with self._lock:
            if self._closed:
                raise RuntimeError("MongoClientManager is already closed")
            if self._client is None:
                timeout_ms = self._settings.mongo_connect_timeout_ms
                self._client = self._client_factory(
                    self._settings.mongo_uri,
                    connectTimeoutMS=timeout_ms,
                    serverSelectionTimeoutMS=timeout_ms,
                )
                log.debug("Created MongoDB client for %s", self._settings.mongo_uri)
            return self._client

    def get_collection(self) -> Collection[Mapping[str, Any]]:
        """Return the configured blog collection."""
        client = self.get_client()
        return client[self._settings.mongo_database][self._settings.mongo_collection]

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(ConnectionFailure),
        reraise=True,
    )
    def ping(self) -> None:
        """
        Verify connectivity with the ``ping`` admin command.

        Retries up to 3 times with exponential backoff for transient
        connection failures, then re-raises the last ConnectionFailure.
        """
        self.get_client().admin.command("ping")

    def connect(self) -> Collection[Mapping[str, Any]]:
        """Create the client, verify the server is reachable, and return the collection."""
        self.ping()
        log.info(
            "Connected to MongoDB",
            extra={
                "database": self._settings.mongo_database,
                "collection": self._settings.mongo_collection,
            },
        )
        return self.get_collection()

    def close(self) -> None:
        """
        Close the managed client and release its connection pool.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            client, self._client = self._client, None
        if client is not None:
            client.close()
            log.info("Disconnected from MongoDB")

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "MongoClientManager":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["MongoClientManager"]
