"""HTML for the blog page's root container."""

from __future__ import annotations

import html

from folio.models import PostMetadata, RenderedPost
from folio.registry import format_date

ERROR_MESSAGE = "Error loading post."
BACK_BUTTON = '<button class="back-button" data-action="back">← Back to all posts</button>'


class HtmlContainer:
    """Holds the markup currently shown in the page's ``#blog-posts`` element.

    The navigation controller calls one ``show_*`` method per transition;
    whatever surface hosts the page reads :attr:`html` afterwards.
    """

    def __init__(self) -> None:
        self.html = ""

    def show_list(self, posts: list[PostMetadata]) -> None:
        self.html = "\n".join(_post_item(post) for post in posts)

    def show_post(self, post: PostMetadata, rendered: RenderedPost) -> None:
        self.html = f"{BACK_BUTTON}\n<article>{rendered.html}</article>"

    def show_error(self, post: PostMetadata, message: str = ERROR_MESSAGE) -> None:
        self.html = f'{BACK_BUTTON}\n<p class="error">{html.escape(message)}</p>'


def _post_item(post: PostMetadata) -> str:
    return (
        f'<div class="blog-item" data-slug="{html.escape(post.slug)}">\n'
        f"  <h3>{html.escape(post.title)}</h3>\n"
        f'  <div class="date">{format_date(post.date)}</div>\n'
        f'  <p class="description">{html.escape(post.description)}</p>\n'
        f"</div>"
    )
