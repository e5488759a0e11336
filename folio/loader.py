"""Fetch a post's markdown from the content store and render it."""

from __future__ import annotations

import logging

import httpx

from folio.config import settings
from folio.md_render import md_to_html
from folio.models import PostMetadata, RenderedPost

logger = logging.getLogger("folio.loader")

POSTS_PATH = "posts"


class LoadError(Exception):
    """The post's content could not be retrieved or read."""

    def __init__(self, message: str = "failed to load"):
        super().__init__(message)


def content_path(post: PostMetadata) -> str:
    return f"{POSTS_PATH}/{post.filename}"


async def load_post(post: PostMetadata, client: httpx.AsyncClient | None = None) -> RenderedPost:
    """Fetch ``posts/<filename>`` and render it.

    Every call hits the content store; nothing is cached and nothing is
    retried. Any failure is reported as :class:`LoadError`.
    """
    if client is None:
        async with httpx.AsyncClient(
            base_url=settings.site_url, timeout=settings.fetch_timeout_seconds
        ) as owned:
            markdown = await _fetch(owned, post)
    else:
        markdown = await _fetch(client, post)
    return RenderedPost(html=md_to_html(markdown))


async def _fetch(client: httpx.AsyncClient, post: PostMetadata) -> str:
    path = content_path(post)
    try:
        resp = await client.get(path)
        resp.raise_for_status()
        return resp.content.decode("utf-8")
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning("Error loading post %s: %s", path, e)
        raise LoadError() from e
    except UnicodeDecodeError as e:
        logger.warning("Post %s is not valid UTF-8: %s", path, e)
        raise LoadError() from e
