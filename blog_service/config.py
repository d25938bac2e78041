"""
Configuration settings for the blog service.

Uses Pydantic Settings to load environment variables for the MongoDB
connection, the gRPC listener, and logging. Defaults match a local
development setup (MongoDB on localhost, server on port 50051).
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB
    mongo_uri: str = Field("mongodb://localhost:27017", alias="MONGO_URI")
    mongo_database: str = Field("mydb", alias="MONGO_DATABASE")
    mongo_collection: str = Field("blog", alias="MONGO_COLLECTION")
    mongo_connect_timeout_ms: int = Field(20_000, alias="MONGO_CONNECT_TIMEOUT_MS")

    # gRPC server
    server_host: str = Field("0.0.0.0", alias="SERVER_HOST")
    server_port: int = Field(50051, alias="SERVER_PORT")
    server_max_workers: int = Field(10, alias="SERVER_MAX_WORKERS")
    shutdown_grace_seconds: float = Field(5.0, alias="SHUTDOWN_GRACE_SECONDS")
    tls_cert_file: Optional[str] = Field(None, alias="TLS_CERT_FILE")
    tls_key_file: Optional[str] = Field(None, alias="TLS_KEY_FILE")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def server_address(self) -> str:
        return f"{self.server_host}:{self.server_port}"

    @property
    def tls_enabled(self) -> bool:
        """TLS is only switched on when both the certificate and key are configured."""
        return bool(self.tls_cert_file and self.tls_key_file)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
