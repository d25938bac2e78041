"""
RPC package for the blog service.

Exports the gRPC servicer adapter, its registration helper, and a blocking
client. Message classes live in ``blog_service.rpc.messages``.
"""

from blog_service.rpc.client import BlogClient
from blog_service.rpc.servicer import BlogServicer, add_blog_servicer_to_server

__all__ = [
    "BlogClient",
    "BlogServicer",
    "add_blog_servicer_to_server",
]
