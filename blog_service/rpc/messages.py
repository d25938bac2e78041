"""
Protobuf message classes for the ``blog.BlogService`` API.

The descriptor below mirrors ``proto/blog/v1/blog.proto`` field for field and
is registered in a private descriptor pool at import time, so the package
needs no generated ``*_pb2`` modules. Keep the two in sync when the contract
changes.
"""

from __future__ import annotations

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

PROTO_FILE = "blog/v1/blog.proto"
PACKAGE = "blog"
SERVICE_NAME = f"{PACKAGE}.BlogService"

_Field = descriptor_pb2.FieldDescriptorProto


def _string_field(message: descriptor_pb2.DescriptorProto, name: str, number: int) -> None:
    message.field.add(
        name=name,
        number=number,
        type=_Field.TYPE_STRING,
        label=_Field.LABEL_OPTIONAL,
    )


def _blog_field(message: descriptor_pb2.DescriptorProto) -> None:
    message.field.add(
        name="blog",
        number=1,
        type=_Field.TYPE_MESSAGE,
        label=_Field.LABEL_OPTIONAL,
        type_name=f".{PACKAGE}.Blog",
    )


def _build_file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name=PROTO_FILE,
        package=PACKAGE,
        syntax="proto3",
    )

    blog = file_proto.message_type.add(name="Blog")
    for number, name in enumerate(("id", "author_id", "title", "content"), start=1):
        _string_field(blog, name, number)

    for name in (
        "CreateBlogRequest",
        "CreateBlogResponse",
        "ReadBlogResponse",
        "UpdateBlogRequest",
        "UpdateBlogResponse",
        "ListBlogResponse",
    ):
        _blog_field(file_proto.message_type.add(name=name))

    for name in ("ReadBlogRequest", "DeleteBlogRequest", "DeleteBlogResponse"):
        _string_field(file_proto.message_type.add(name=name), "blog_id", 1)

    file_proto.message_type.add(name="ListBlogRequest")

    service = file_proto.service.add(name="BlogService")
    for method in ("CreateBlog", "ReadBlog", "UpdateBlog", "DeleteBlog", "ListBlog"):
        service.method.add(
            name=method,
            input_type=f".{PACKAGE}.{method}Request",
            output_type=f".{PACKAGE}.{method}Response",
            server_streaming=method == "ListBlog",
        )
    return file_proto


_POOL = descriptor_pool.DescriptorPool()
_POOL.AddSerializedFile(_build_file_descriptor().SerializeToString())
DESCRIPTOR = _POOL.FindFileByName(PROTO_FILE)


def _message(name: str):
    return message_factory.GetMessageClass(DESCRIPTOR.message_types_by_name[name])


Blog = _message("Blog")
CreateBlogRequest = _message("CreateBlogRequest")
CreateBlogResponse = _message("CreateBlogResponse")
ReadBlogRequest = _message("ReadBlogRequest")
ReadBlogResponse = _message("ReadBlogResponse")
UpdateBlogRequest = _message("UpdateBlogRequest")
UpdateBlogResponse = _message("UpdateBlogResponse")
DeleteBlogRequest = _message("DeleteBlogRequest")
DeleteBlogResponse = _message("DeleteBlogResponse")
ListBlogRequest = _message("ListBlogRequest")
ListBlogResponse = _message("ListBlogResponse")


__all__ = [
    "DESCRIPTOR",
    "SERVICE_NAME",
    "Blog",
    "CreateBlogRequest",
    "CreateBlogResponse",
    "ReadBlogRequest",
    "ReadBlogResponse",
    "UpdateBlogRequest",
    "UpdateBlogResponse",
    "DeleteBlogRequest",
    "DeleteBlogResponse",
    "ListBlogRequest",
    "ListBlogResponse",
]
