"""Test fixtures: the content store app behind an in-process ASGI transport."""

from __future__ import annotations

import datetime

import pytest
from httpx import ASGITransport, AsyncClient

from folio.config import settings
from folio.main import app
from folio.models import PostMetadata


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def posts_dir(tmp_path, monkeypatch):
    """Point the content store at an empty temporary directory."""
    monkeypatch.setattr(settings, "posts_dir", tmp_path)
    return tmp_path


def make_post(filename: str, date: str = "2025-08-01", title: str | None = None) -> PostMetadata:
    return PostMetadata(
        title=title or filename.removesuffix(".md").replace("-", " ").title(),
        filename=filename,
        date=datetime.date.fromisoformat(date),
        description=f"About {filename}",
    )
