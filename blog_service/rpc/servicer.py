"""
gRPC adapter for BlogService.

``BlogServicer`` unpacks each typed request, calls the service, and packs the
typed response. A ``BlogServiceError`` is reported to the caller through
``context.abort`` with the matching status code; anything the service lets
escape is left to grpc, which reports it as UNKNOWN.
"""

from __future__ import annotations

from contextlib import closing
from typing import Iterator, NoReturn

import grpc

from blog_service.domain.errors import BlogServiceError, StatusKind
from blog_service.rpc import messages
from blog_service.rpc.codec import blog_from_message, blog_to_message
from blog_service.service import BlogService
from blog_service.utils.logging import get_logger

log = get_logger(__name__)

STATUS_CODES = {
    StatusKind.INVALID_ARGUMENT: grpc.StatusCode.INVALID_ARGUMENT,
    StatusKind.NOT_FOUND: grpc.StatusCode.NOT_FOUND,
    StatusKind.INTERNAL: grpc.StatusCode.INTERNAL,
}


def _abort(context: grpc.ServicerContext, method: str, exc: BlogServiceError) -> NoReturn:
    code = STATUS_CODES[exc.status]
    if exc.status is StatusKind.INTERNAL:
        log.error("%s failed: %s", method, exc.message, exc_info=exc.__cause__ is not None)
    else:
        log.warning("%s rejected: %s", method, exc.message, extra={"status": code.name})
    context.abort(code, exc.message)
    raise AssertionError("context.abort returned")  # pragma: no cover


class BlogServicer:
    """
    Implements the ``blog.BlogService`` RPC methods.
    """

    def __init__(self, service: BlogService) -> None:
        self._service = service

    def CreateBlog(self, request, context: grpc.ServicerContext):
        try:
            view = self._service.create(blog_from_message(request.blog))
        except BlogServiceError as exc:
            _abort(context, "CreateBlog", exc)
        return messages.CreateBlogResponse(blog=blog_to_message(view))

    def ReadBlog(self, request, context: grpc.ServicerContext):
        try:
            view = self._service.read(request.blog_id)
        except BlogServiceError as exc:
            _abort(context, "ReadBlog", exc)
        return messages.ReadBlogResponse(blog=blog_to_message(view))

    def UpdateBlog(self, request, context: grpc.ServicerContext):
        try:
            view = self._service.update(blog_from_message(request.blog))
        except BlogServiceError as exc:
            _abort(context, "UpdateBlog", exc)
        return messages.UpdateBlogResponse(blog=blog_to_message(view))

    def DeleteBlog(self, request, context: grpc.ServicerContext):
        try:
            blog_id = self._service.delete(request.blog_id)
        except BlogServiceError as exc:
            _abort(context, "DeleteBlog", exc)
        return messages.DeleteBlogResponse(blog_id=blog_id)

    def ListBlog(self, request, context: grpc.ServicerContext) -> Iterator:
        # closing() releases the store cursor when grpc closes this generator on cancellation.
        try:
            with closing(self._service.list_blogs()) as views:
                for view in views:
                    yield messages.ListBlogResponse(blog=blog_to_message(view))
        except BlogServiceError as exc:
            _abort(context, "ListBlog", exc)


def add_blog_servicer_to_server(servicer: BlogServicer, server: grpc.Server) -> None:
    """Register ``servicer`` on ``server`` under ``blog.BlogService``."""
    rpc_method_handlers = {
        "CreateBlog": grpc.unary_unary_rpc_method_handler(
            servicer.CreateBlog,
            request_deserializer=messages.CreateBlogRequest.FromString,
            response_serializer=messages.CreateBlogResponse.SerializeToString,
        ),
        "ReadBlog": grpc.unary_unary_rpc_method_handler(
            servicer.ReadBlog,
            request_deserializer=messages.ReadBlogRequest.FromString,
            response_serializer=messages.ReadBlogResponse.SerializeToString,
        ),
        "UpdateBlog": grpc.unary_unary_rpc_method_handler(
            servicer.UpdateBlog,
            request_deserializer=messages.UpdateBlogRequest.FromString,
            response_serializer=messages.UpdateBlogResponse.SerializeToString,
        ),
        "DeleteBlog": grpc.unary_unary_rpc_method_handler(
            servicer.DeleteBlog,
            request_deserializer=messages.DeleteBlogRequest.FromString,
            response_serializer=messages.DeleteBlogResponse.SerializeToString,
        ),
        "ListBlog": grpc.unary_stream_rpc_method_handler(
            servicer.ListBlog,
            request_deserializer=messages.ListBlogRequest.FromString,
            response_serializer=messages.ListBlogResponse.SerializeToString,
        ),
    }
    generic_handler = grpc.method_handlers_generic_handler(
        messages.SERVICE_NAME, rpc_method_handlers
    )
    server.add_generic_rpc_handlers((generic_handler,))


__all__ = ["BlogServicer", "STATUS_CODES", "add_blog_servicer_to_server"]
