"""
Process bootstrap for the blog gRPC server.

Startup order: connect to MongoDB, build the service, bind and start the
listener. Shutdown order on SIGINT/SIGTERM: stop the listener (letting
in-flight calls finish within the grace period), then close the MongoDB
client. No call runs before startup completes or after teardown begins.

Usage:
    from blog_service.server import serve

    serve()  # blocks until interrupted
"""

from __future__ import annotations

import signal
import threading
from concurrent import futures
from pathlib import Path
from typing import Optional, Tuple

import grpc

from blog_service.config import Settings, get_settings
from blog_service.infrastructure.mongo_factory import MongoClientManager
from blog_service.infrastructure.store import BlogStore, MongoBlogStore
from blog_service.rpc.servicer import BlogServicer, add_blog_servicer_to_server
from blog_service.service import BlogService
from blog_service.utils.logging import get_logger

log = get_logger(__name__)


def _server_credentials(settings: Settings) -> grpc.ServerCredentials:
    private_key = Path(settings.tls_key_file).read_bytes()
    certificate_chain = Path(settings.tls_cert_file).read_bytes()
    return grpc.ssl_server_credentials(((private_key, certificate_chain),))


def build_server(
    store: BlogStore, settings: Optional[Settings] = None
) -> Tuple[grpc.Server, int]:
    """
    Create a grpc server with the blog service registered and its port bound.

    Returns the unstarted server and the bound port (useful when the
    configured port is 0 and the OS picks one).

    Raises
    ------
    RuntimeError
        If the configured address cannot be bound.
    """
    settings = settings or get_settings()
    server = grpc.server(futures.ThreadPoolExecutor(max_workers=settings.server_max_workers))
    add_blog_servicer_to_server(BlogServicer(BlogService(store)), server)

    address = settings.server_address
    if settings.tls_enabled:
        port = server.add_secure_port(address, _server_credentials(settings))
    else:
        port = server.add_insecure_port(address)
    # grpcio returns 0 (older releases) or raises (newer ones) on bind failure.
    if port == 0:
        log.error("Unable to bind %s", address)
        raise RuntimeError(f"error while listening on tcp {address}")
    log.debug("Bound %s on port %d (tls=%s)", address, port, settings.tls_enabled)
    return server, port


class BlogServer:
    """
    Owns the MongoDB client and the grpc server for one process lifetime.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        mongo: Optional[MongoClientManager] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._mongo = mongo or MongoClientManager(self.settings)
        self._server: Optional[grpc.Server] = None
        self._stopped = threading.Event()
        self.port: Optional[int] = None

    def start(self) -> None:
        collection = self._mongo.connect()
        try:
            self._server, self.port = build_server(MongoBlogStore(collection), self.settings)
            self._server.start()
        except Exception:
            self._mongo.close()
            raise
        log.info(
            "Blog service started",
            extra={
                "address": self.settings.server_address,
                "port": self.port,
                "env": self.settings.app_env,
            },
        )

    def wait(self) -> None:
        """Block until ``stop`` has completed."""
        self._stopped.wait()

    def stop(self) -> None:
        """
        Stop the listener, then disconnect from MongoDB. Safe to call more than once.
        """
        if self._stopped.is_set():
            return
        if self._server is not None:
            log.info("Stopping the server...")
            self._server.stop(self.settings.shutdown_grace_seconds).wait()
        log.info("Disconnecting from MongoDB...")
        self._mongo.close()
        log.info("Server shutdown reached")
        self._stopped.set()


def serve(settings: Optional[Settings] = None) -> None:
    """
    Run the server until SIGINT or SIGTERM.
    """
    server = BlogServer(settings)
    server.start()

    shutdown_requested = threading.Event()

    def _request_shutdown(signum, frame) -> None:
        log.info("Received %s", signal.Signals(signum).name)
        shutdown_requested.set()

    previous = {
        sig: signal.signal(sig, _request_shutdown) for sig in (signal.SIGINT, signal.SIGTERM)
    }
    try:
        while not shutdown_requested.wait(timeout=1.0):
            pass
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
        server.stop()


__all__ = ["BlogServer", "build_server", "serve"]
