"""Content negotiation: respond with JSON or markdown with YAML frontmatter."""

from __future__ import annotations

import json

import frontmatter
from fastapi import Request, Response
from pydantic import BaseModel


def wants_json(request: Request) -> bool:
    accept = request.headers.get("accept", "")
    return "application/json" in accept


def render_response(
    request: Request,
    data: dict | list | BaseModel,
    status_code: int = 200,
    headers: dict | None = None,
) -> Response:
    """Return JSON or markdown based on Accept header."""
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")

    if wants_json(request):
        return Response(
            content=json.dumps(data, indent=2),
            status_code=status_code,
            media_type="application/json",
            headers=headers,
        )

    if isinstance(data, list):
        content = "\n".join(_list_entry(item) for item in data)
    else:
        # Copy before mutating so callers' dicts are not affected
        data = dict(data)
        body = data.pop("description", None) or data.pop("error", None) or ""
        content = frontmatter.dumps(frontmatter.Post(body, **data)) if data else body

    return Response(
        content=content,
        status_code=status_code,
        media_type="text/markdown",
        headers=headers,
    )


def _list_entry(item: dict) -> str:
    line = f"- [{item.get('title', '')}](#{item.get('slug', '')})"
    if item.get("display_date"):
        line += f" ({item['display_date']})"
    if item.get("description"):
        line += f": {item['description']}"
    return line
