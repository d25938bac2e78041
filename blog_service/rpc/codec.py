"""Conversions between BlogView and the protobuf ``Blog`` message."""

from __future__ import annotations

from blog_service.domain.models import BlogView
from blog_service.rpc import messages


def blog_to_message(view: BlogView):
    return messages.Blog(
        id=view.id,
        author_id=view.author_id,
        title=view.title,
        content=view.content,
    )


def blog_from_message(message) -> BlogView:
    # Unset proto3 string fields read back as "".
    return BlogView(
        id=message.id,
        author_id=message.author_id,
        title=message.title,
        content=message.content,
    )


__all__ = ["blog_from_message", "blog_to_message"]
