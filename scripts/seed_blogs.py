"""
Demo data seeding script for the blog service.

Implements deterministic pseudo-random blog post generation, optional JSON
emission, and loading through ``BlogService.create`` so seeded documents have
exactly the shape the server writes.
"""

from __future__ import annotations

import json
import random
import sys
import time
from pathlib import Path

import typer

from blog_service.config import get_settings
from blog_service.domain.models import BlogView
from blog_service.infrastructure.mongo_factory import MongoClientManager
from blog_service.infrastructure.store import MongoBlogStore
from blog_service.service import BlogService

app = typer.Typer(help="Generate demo blog posts and load them into MongoDB.")

_AUTHORS = ["u1", "u2", "u3", "u4", "u5"]
_TOPICS = ["grpc", "mongodb", "python", "streaming", "testing", "deployment"]
_WORDS = [
    "service", "cursor", "request", "status", "record", "channel", "deadline",
    "handler", "document", "shutdown", "listener", "replica", "index", "schema",
]


def _generate_posts(count: int, seed: int) -> list[BlogView]:
    rng = random.Random(seed)
    posts: list[BlogView] = []
    for i in range(count):
        topic = rng.choice(_TOPICS)
        body = " ".join(rng.choice(_WORDS) for _ in range(rng.randint(8, 40)))
        posts.append(
            BlogView(
                author_id=rng.choice(_AUTHORS),
                title=f"Notes on {topic} #{i + 1}",
                content=body.capitalize() + ".",
            )
        )
    return posts


def _write_json(path: Path, posts: list[BlogView]) -> None:
    with path.open("w", encoding="utf-8") as f:
        json.dump([post.model_dump(exclude={"id"}) for post in posts], f, indent=2)


def _load_into_store(service: BlogService, posts: list[BlogView]) -> list[str]:
    return [service.create(post).id for post in posts]


@app.command()
def main(
    count: int = typer.Option(
        20,
        "--count",
        "-n",
        help="Number of posts to generate.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Optional JSON output path for the generated posts.",
    ),
    no_load: bool = typer.Option(
        False,
        "--no-load",
        help="Only generate posts; skip loading into MongoDB.",
    ),
) -> None:
    """
    Generate demo posts and optionally insert them into the configured collection.
    """
    start = time.perf_counter()
    posts = _generate_posts(count, seed)
    typer.echo(f"Generated {len(posts)} posts (seed={seed})")

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        _write_json(output, posts)
        typer.echo(f"Wrote {output}")

    if no_load:
        typer.echo("Skipping load (no-load flag set).")
        return

    settings = get_settings()
    with MongoClientManager(settings) as mongo:
        service = BlogService(MongoBlogStore(mongo.connect()))
        ids = _load_into_store(service, posts)

    duration = time.perf_counter() - start
    typer.echo(
        f"Inserted {len(ids)} posts into {settings.mongo_database}.{settings.mongo_collection} "
        f"in {duration:.2f}s."
    )


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
