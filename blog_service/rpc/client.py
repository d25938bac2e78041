"""
Thin client for ``blog.BlogService``.

Wraps a ``grpc.Channel`` with one multi-callable per RPC and converts between
protobuf messages and BlogView. Failed calls raise ``grpc.RpcError`` exactly
as grpc reports them; callers inspect ``.code()`` and ``.details()``.
"""

from __future__ import annotations

from typing import Iterator, Optional

import grpc

from blog_service.domain.models import BlogView
from blog_service.rpc import messages
from blog_service.rpc.codec import blog_from_message, blog_to_message


def _method(name: str) -> str:
    return f"/{messages.SERVICE_NAME}/{name}"


class BlogClient:
    """
    Blocking client; every call accepts an optional per-call ``timeout`` in seconds.
    """

    def __init__(self, channel: grpc.Channel) -> None:
        self._create = channel.unary_unary(
            _method("CreateBlog"),
            request_serializer=messages.CreateBlogRequest.SerializeToString,
            response_deserializer=messages.CreateBlogResponse.FromString,
        )
        self._read = channel.unary_unary(
            _method("ReadBlog"),
            request_serializer=messages.ReadBlogRequest.SerializeToString,
            response_deserializer=messages.ReadBlogResponse.FromString,
        )
        self._update = channel.unary_unary(
            _method("UpdateBlog"),
            request_serializer=messages.UpdateBlogRequest.SerializeToString,
            response_deserializer=messages.UpdateBlogResponse.FromString,
        )
        self._delete = channel.unary_unary(
            _method("DeleteBlog"),
            request_serializer=messages.DeleteBlogRequest.SerializeToString,
            response_deserializer=messages.DeleteBlogResponse.FromString,
        )
        self._list = channel.unary_stream(
            _method("ListBlog"),
            request_serializer=messages.ListBlogRequest.SerializeToString,
            response_deserializer=messages.ListBlogResponse.FromString,
        )

    def create_blog(
        self, author_id: str, title: str, content: str, timeout: Optional[float] = None
    ) -> BlogView:
        view = BlogView(author_id=author_id, title=title, content=content)
        response = self._create(
            messages.CreateBlogRequest(blog=blog_to_message(view)), timeout=timeout
        )
        return blog_from_message(response.blog)

    def read_blog(self, blog_id: str, timeout: Optional[float] = None) -> BlogView:
        response = self._read(messages.ReadBlogRequest(blog_id=blog_id), timeout=timeout)
        return blog_from_message(response.blog)

    def update_blog(self, view: BlogView, timeout: Optional[float] = None) -> BlogView:
        response = self._update(
            messages.UpdateBlogRequest(blog=blog_to_message(view)), timeout=timeout
        )
        return blog_from_message(response.blog)

    def delete_blog(self, blog_id: str, timeout: Optional[float] = None) -> str:
        response = self._delete(messages.DeleteBlogRequest(blog_id=blog_id), timeout=timeout)
        return response.blog_id

    def list_blogs(self, timeout: Optional[float] = None) -> Iterator[BlogView]:
        for response in self._list(messages.ListBlogRequest(), timeout=timeout):
            yield blog_from_message(response.blog)


__all__ = ["BlogClient"]
