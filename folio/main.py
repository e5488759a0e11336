"""Folio: content store for the blog reader."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import HTTPException

from folio.api.router import api_router
from folio.config import settings
from folio.content import render_response
from folio.registry import BLOG_POSTS

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("folio")


@asynccontextmanager
async def lifespan(app: FastAPI):
    missing = [p.filename for p in BLOG_POSTS if not (settings.posts_dir / p.filename).is_file()]
    if missing:
        logger.warning("Registered posts missing from %s: %s", settings.posts_dir, ", ".join(missing))
    logger.info("Serving %d posts from %s", len(BLOG_POSTS), settings.posts_dir)
    yield


app = FastAPI(
    title="Folio",
    description="Blog content store and post registry",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(api_router)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return render_response(
        request,
        {"error": exc.detail},
        status_code=exc.status_code,
    )


@app.get("/health")
async def health():
    return {"status": "ok", "posts": len(BLOG_POSTS)}


def main():
    import uvicorn

    uvicorn.run(
        "folio.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
    )


if __name__ == "__main__":
    main()
