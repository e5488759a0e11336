"""Mount all API routes."""

from fastapi import APIRouter

from folio.api.posts import router as posts_router

api_router = APIRouter()
api_router.include_router(posts_router, tags=["posts"])
