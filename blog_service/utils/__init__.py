"""
Utilities package for the blog service.

Exports shared helpers for logging and other cross-cutting concerns.
Keep this package lightweight and free of domain-specific logic.
"""

from blog_service.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
