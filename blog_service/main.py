from __future__ import annotations

import json
import sys
from typing import NoReturn, Optional

import grpc
import typer

from blog_service.config import get_settings
from blog_service.domain.models import BlogView
from blog_service.rpc.client import BlogClient
from blog_service.server import serve as run_server
from blog_service.utils.logging import configure_logging

app = typer.Typer(help="gRPC blog service backed by MongoDB.")

TARGET_OPTION = typer.Option(
    "localhost:50051",
    "--target",
    "-t",
    help="Address of a running blog server.",
)
TIMEOUT_OPTION = typer.Option(10.0, "--timeout", help="Per-call deadline in seconds.")


def _echo_view(view: BlogView) -> None:
    typer.echo(json.dumps(view.model_dump(), indent=2))


def _fail(exc: grpc.RpcError) -> NoReturn:
    typer.echo(f"{exc.code().name}: {exc.details()}", err=True)
    raise typer.Exit(code=1)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"MONGO={settings.mongo_uri}/{settings.mongo_database}.{settings.mongo_collection} | "
        f"listen={settings.server_address} workers={settings.server_max_workers} "
        f"tls={settings.tls_enabled} env={settings.app_env}"
    )


@app.command()
def serve() -> None:
    """
    Run the gRPC server until interrupted.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    run_server(settings)


@app.command()
def create(
    author_id: str = typer.Option(..., "--author-id", "-a", help="Author reference."),
    title: str = typer.Option("", "--title", help="Post title."),
    content: str = typer.Option("", "--content", help="Post body."),
    target: str = TARGET_OPTION,
    timeout: float = TIMEOUT_OPTION,
) -> None:
    """
    Create a blog post and print it with its assigned id.
    """
    with grpc.insecure_channel(target) as channel:
        try:
            view = BlogClient(channel).create_blog(author_id, title, content, timeout=timeout)
        except grpc.RpcError as exc:
            _fail(exc)
    _echo_view(view)


@app.command()
def read(
    blog_id: str = typer.Argument(..., help="Hex id of the post."),
    target: str = TARGET_OPTION,
    timeout: float = TIMEOUT_OPTION,
) -> None:
    """
    Print one blog post.
    """
    with grpc.insecure_channel(target) as channel:
        try:
            view = BlogClient(channel).read_blog(blog_id, timeout=timeout)
        except grpc.RpcError as exc:
            _fail(exc)
    _echo_view(view)


@app.command()
def update(
    blog_id: str = typer.Argument(..., help="Hex id of the post to replace."),
    author_id: str = typer.Option(..., "--author-id", "-a", help="Author reference."),
    title: str = typer.Option("", "--title", help="Post title."),
    content: str = typer.Option("", "--content", help="Post body."),
    target: str = TARGET_OPTION,
    timeout: float = TIMEOUT_OPTION,
) -> None:
    """
    Replace every field of a blog post except its id.
    """
    replacement = BlogView(id=blog_id, author_id=author_id, title=title, content=content)
    with grpc.insecure_channel(target) as channel:
        try:
            view = BlogClient(channel).update_blog(replacement, timeout=timeout)
        except grpc.RpcError as exc:
            _fail(exc)
    _echo_view(view)


@app.command()
def delete(
    blog_id: str = typer.Argument(..., help="Hex id of the post."),
    target: str = TARGET_OPTION,
    timeout: float = TIMEOUT_OPTION,
) -> None:
    """
    Delete a blog post.
    """
    with grpc.insecure_channel(target) as channel:
        try:
            deleted = BlogClient(channel).delete_blog(blog_id, timeout=timeout)
        except grpc.RpcError as exc:
            _fail(exc)
    typer.echo(json.dumps({"blog_id": deleted}))


@app.command(name="list")
def list_(
    target: str = TARGET_OPTION,
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Deadline for the whole stream in seconds."
    ),
) -> None:
    """
    Stream every blog post, one JSON object per line.
    """
    with grpc.insecure_channel(target) as channel:
        try:
            for view in BlogClient(channel).list_blogs(timeout=timeout):
                typer.echo(json.dumps(view.model_dump()))
        except grpc.RpcError as exc:
            _fail(exc)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
