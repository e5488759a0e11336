"""Curated registry of blog posts.

Entries are maintained by hand; there is no discovery of files in the
content store. Every ``filename`` must exist under ``posts/``.
"""

from __future__ import annotations

import datetime
from collections.abc import Iterable
from urllib.parse import unquote

from folio.models import PostMetadata, PostSummary


def build_registry(entries: Iterable[dict]) -> tuple[PostMetadata, ...]:
    """Validate raw entries and check that filenames and slugs are unique."""
    posts = tuple(PostMetadata(**entry) for entry in entries)
    seen_files: set[str] = set()
    seen_slugs: set[str] = set()
    for post in posts:
        if post.filename in seen_files:
            raise ValueError(f"Duplicate filename in registry: {post.filename}")
        if post.slug in seen_slugs:
            raise ValueError(f"Duplicate slug in registry: {post.slug}")
        seen_files.add(post.filename)
        seen_slugs.add(post.slug)
    return posts


BLOG_POSTS = build_registry(
    [
        {
            "title": "Building a Type-Safe Redis Client in OCaml",
            "filename": "building-redis-client-ocaml.md",
            "date": "2025-08-27",
            "description": (
                "Exploring OCaml's type system by building a native Redis client "
                "with compile-time protocol correctness."
            ),
        },
        {
            "title": "Welcome to My Blog",
            "filename": "welcome-to-my-blog.md",
            "date": "2025-08-27",
            "description": "My first blog post introducing what you can expect from this blog.",
        },
    ]
)


def sorted_posts(posts: Iterable[PostMetadata] = BLOG_POSTS) -> list[PostMetadata]:
    """Newest first. Posts sharing a date keep their registry order."""
    return sorted(posts, key=lambda p: p.date, reverse=True)


def find_by_slug(
    slug: str | None, posts: Iterable[PostMetadata] = BLOG_POSTS
) -> PostMetadata | None:
    if not slug:
        return None
    for post in posts:
        if post.slug == slug:
            return post
    return None


def slug_from_location(location: str | None) -> str:
    """Return the deep-link slug from a URL or a bare ``#fragment``."""
    if not location:
        return ""
    _, sep, fragment = location.partition("#")
    if not sep:
        return ""
    return unquote(fragment)


def format_date(value: datetime.date) -> str:
    """Format like 'August 27, 2025'."""
    return f"{value:%B} {value.day}, {value.year}"


def summarize(post: PostMetadata) -> PostSummary:
    return PostSummary(
        slug=post.slug,
        title=post.title,
        filename=post.filename,
        date=post.date,
        display_date=format_date(post.date),
        description=post.description,
    )
