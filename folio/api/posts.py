"""Content store and read-only registry endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import PlainTextResponse

from folio.config import settings
from folio.content import render_response
from folio.registry import BLOG_POSTS, find_by_slug, sorted_posts, summarize

router = APIRouter()


@router.get("/posts/{filename}", response_class=PlainTextResponse)
async def serve_post_source(filename: str):
    """Raw markdown for one post, as the page's loader fetches it."""
    if "/" in filename or "\\" in filename or filename.startswith("."):
        raise HTTPException(status_code=404, detail="Post not found")
    path = settings.posts_dir / filename
    if not path.is_file():
        raise HTTPException(status_code=404, detail="Post not found")
    return PlainTextResponse(path.read_text(encoding="utf-8"), media_type="text/markdown")


@router.get("/v1/posts")
async def list_posts(request: Request):
    """Registry entries, newest first."""
    return render_response(
        request, [summarize(post).model_dump(mode="json") for post in sorted_posts(BLOG_POSTS)]
    )


@router.get("/v1/posts/{slug}", responses={404: {"description": "Unknown slug"}})
async def get_post(request: Request, slug: str):
    post = find_by_slug(slug, BLOG_POSTS)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return render_response(request, summarize(post))
