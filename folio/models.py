"""Pydantic models for posts, rendered output and navigation state."""

from __future__ import annotations

import datetime

from pydantic import BaseModel, ConfigDict, Field

POST_SUFFIX = ".md"


class PostMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = Field(description="Display title")
    filename: str = Field(description="Content store key, e.g. 'welcome-to-my-blog.md'")
    date: datetime.date = Field(description="Publish date")
    description: str = Field(default="", description="Short summary shown in the list")

    @property
    def slug(self) -> str:
        """Deep-link identifier: the filename without its extension."""
        return self.filename.removesuffix(POST_SUFFIX)


class PostSummary(BaseModel):
    """Registry entry as exposed by the API."""

    slug: str
    title: str
    filename: str
    date: datetime.date
    display_date: str
    description: str


class RenderedPost(BaseModel):
    model_config = ConfigDict(frozen=True)

    html: str


class ListView(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = "list"


class PostView(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = "post"
    post: PostMetadata


NavigationState = ListView | PostView
