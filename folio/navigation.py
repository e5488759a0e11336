"""Navigation between the post list and a single post.

The controller owns the only piece of mutable state, the current
:data:`NavigationState`. A presentation layer drives it through four
entry points (``start``, ``on_select``, ``on_back``, ``on_popstate``) and
receives output through a view object exposing ``show_list``,
``show_post`` and ``show_error``.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence

from folio.ids import request_token
from folio.loader import LoadError, load_post
from folio.models import ListView, NavigationState, PostMetadata, PostView, RenderedPost
from folio.registry import BLOG_POSTS, find_by_slug, slug_from_location, sorted_posts
from folio.views import HtmlContainer

logger = logging.getLogger("folio.navigation")

Loader = Callable[[PostMetadata], Awaitable[RenderedPost]]


class NavigationController:
    def __init__(
        self,
        view: HtmlContainer,
        posts: Sequence[PostMetadata] = BLOG_POSTS,
        loader: Loader = load_post,
    ) -> None:
        self.view = view
        self.posts = tuple(posts)
        self.state: NavigationState = ListView()
        self._loader = loader
        self._in_flight: str | None = None

    @property
    def loading(self) -> bool:
        return self._in_flight is not None

    def visible_posts(self) -> list[PostMetadata]:
        return sorted_posts(self.posts)

    async def start(self, location: str | None = None) -> None:
        """Initial transition: open the deep-linked post or show the list."""
        post = find_by_slug(slug_from_location(location), self.posts)
        if post is None:
            self.on_back()
            return
        await self.on_select(post)

    async def on_popstate(self, location: str | None = None) -> None:
        # Browser back/forward behaves exactly like a fresh page load.
        await self.start(location)

    async def on_select(self, post: PostMetadata) -> None:
        """Load ``post`` and show it once the content has arrived.

        The current view stays on screen while the fetch is pending. If the
        user navigates elsewhere in the meantime the result is dropped.
        """
        token = request_token()
        self._in_flight = token
        try:
            rendered = await self._loader(post)
        except LoadError:
            if not self._is_current(token, post):
                return
            self._in_flight = None
            self.state = PostView(post=post)
            self.view.show_error(post)
            return

        if not self._is_current(token, post):
            return
        self._in_flight = None
        self.state = PostView(post=post)
        self.view.show_post(post, rendered)

    def on_back(self) -> None:
        """Rebuild the list from the registry. Any pending load goes stale."""
        self._in_flight = None
        self.state = ListView()
        self.view.show_list(self.visible_posts())

    def _is_current(self, token: str, post: PostMetadata) -> bool:
        if self._in_flight == token:
            return True
        logger.debug("Discarding stale load of %s (request %s)", post.filename, token)
        return False
