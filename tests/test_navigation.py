"""Tests for the navigation controller: deep links, selection, back, races."""

from __future__ import annotations

import asyncio
import functools

import pytest

from folio.loader import LoadError, load_post
from folio.models import ListView, PostView, RenderedPost
from folio.navigation import NavigationController
from folio.views import ERROR_MESSAGE, HtmlContainer
from tests.conftest import make_post

OLDER = make_post("older-post.md", "2025-08-01", title="Older Post")
NEWER = make_post("newer-post.md", "2025-08-27", title="Newer Post")
POSTS = (OLDER, NEWER)


class FakeLoader:
    """Renders a post as its filename; records every call."""

    def __init__(self, fail: set[str] | None = None):
        self.calls: list[str] = []
        self.fail = fail or set()

    async def __call__(self, post):
        self.calls.append(post.filename)
        if post.filename in self.fail:
            raise LoadError()
        return RenderedPost(html=f"<p>{post.filename}</p>")


class GatedLoader:
    """Holds each load until the test releases it."""

    def __init__(self):
        self.gates: dict[str, asyncio.Event] = {}

    async def __call__(self, post):
        gate = self.gates.setdefault(post.filename, asyncio.Event())
        await gate.wait()
        return RenderedPost(html=f"<p>{post.filename}</p>")

    def release(self, post):
        self.gates.setdefault(post.filename, asyncio.Event()).set()


def make_controller(loader=None):
    view = HtmlContainer()
    return NavigationController(view, posts=POSTS, loader=loader or FakeLoader()), view


async def settle():
    for _ in range(5):
        await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_start_without_fragment_shows_list():
    loader = FakeLoader()
    controller, view = make_controller(loader)
    await controller.start(None)
    assert controller.state == ListView()
    assert loader.calls == []
    assert "Newer Post" in view.html
    assert "Older Post" in view.html


@pytest.mark.asyncio
async def test_list_is_newest_first():
    controller, view = make_controller()
    await controller.start("")
    assert view.html.index("Newer Post") < view.html.index("Older Post")
    assert "August 27, 2025" in view.html


@pytest.mark.asyncio
async def test_deep_link_opens_post_directly():
    loader = FakeLoader()
    controller, view = make_controller(loader)
    await controller.start("https://example.com/blog/#older-post")
    assert controller.state == PostView(post=OLDER)
    assert loader.calls == ["older-post.md"]
    assert "<article><p>older-post.md</p></article>" in view.html
    assert "blog-item" not in view.html


@pytest.mark.asyncio
async def test_unknown_deep_link_falls_back_to_list():
    loader = FakeLoader()
    controller, view = make_controller(loader)
    await controller.start("#not-a-post")
    assert controller.state == ListView()
    assert loader.calls == []
    assert "blog-item" in view.html


@pytest.mark.asyncio
async def test_select_then_back():
    loader = FakeLoader()
    controller, view = make_controller(loader)
    await controller.start()
    await controller.on_select(NEWER)
    assert controller.state == PostView(post=NEWER)
    assert "back-button" in view.html

    controller.on_back()
    assert controller.state == ListView()
    assert "Newer Post" in view.html
    assert loader.calls == ["newer-post.md"]


@pytest.mark.asyncio
async def test_back_makes_no_request():
    loader = FakeLoader()
    controller, view = make_controller(loader)
    controller.on_back()
    controller.on_back()
    assert loader.calls == []


@pytest.mark.asyncio
async def test_reselect_fetches_again():
    loader = FakeLoader()
    controller, _ = make_controller(loader)
    await controller.on_select(OLDER)
    controller.on_back()
    await controller.on_select(OLDER)
    assert loader.calls == ["older-post.md", "older-post.md"]


@pytest.mark.asyncio
async def test_load_failure_shows_inline_error_and_back_restores_list():
    loader = FakeLoader(fail={"older-post.md"})
    controller, view = make_controller(loader)
    await controller.start()
    await controller.on_select(OLDER)
    assert ERROR_MESSAGE in view.html
    assert "back-button" in view.html
    assert "<article>" not in view.html

    controller.on_back()
    assert controller.state == ListView()
    assert "Older Post" in view.html
    assert "Newer Post" in view.html


@pytest.mark.asyncio
async def test_popstate_behaves_like_fresh_load():
    loader = FakeLoader()
    controller, view = make_controller(loader)
    await controller.start()
    await controller.on_popstate("#newer-post")
    assert controller.state == PostView(post=NEWER)
    await controller.on_popstate("")
    assert controller.state == ListView()
    assert "blog-item" in view.html


@pytest.mark.asyncio
async def test_previous_view_stays_while_loading():
    loader = GatedLoader()
    controller, view = make_controller(loader)
    await controller.start()
    list_html = view.html

    task = asyncio.create_task(controller.on_select(OLDER))
    await settle()
    assert controller.loading
    assert view.html == list_html
    assert controller.state == ListView()

    loader.release(OLDER)
    await task
    assert not controller.loading
    assert controller.state == PostView(post=OLDER)


@pytest.mark.asyncio
async def test_back_during_load_discards_result():
    loader = GatedLoader()
    controller, view = make_controller(loader)
    await controller.start()

    task = asyncio.create_task(controller.on_select(OLDER))
    await settle()
    controller.on_back()
    list_html = view.html

    loader.release(OLDER)
    await task
    assert controller.state == ListView()
    assert view.html == list_html


@pytest.mark.asyncio
async def test_slow_first_load_does_not_overwrite_newer_one():
    loader = GatedLoader()
    controller, view = make_controller(loader)
    await controller.start()

    first = asyncio.create_task(controller.on_select(OLDER))
    await settle()
    second = asyncio.create_task(controller.on_select(NEWER))
    await settle()

    loader.release(NEWER)
    await second
    loader.release(OLDER)
    await first

    assert controller.state == PostView(post=NEWER)
    assert "newer-post.md" in view.html
    assert "older-post.md" not in view.html


@pytest.mark.asyncio
async def test_stale_failure_is_discarded():
    gated = GatedLoader()

    async def failing_loader(post):
        await gated(post)
        raise LoadError()

    controller, view = make_controller(failing_loader)
    await controller.start()

    task = asyncio.create_task(controller.on_select(OLDER))
    await settle()
    controller.on_back()
    gated.release(OLDER)
    await task

    assert ERROR_MESSAGE not in view.html
    assert controller.state == ListView()


@pytest.mark.asyncio
async def test_deep_link_through_content_store(client):
    from folio.registry import BLOG_POSTS

    view = HtmlContainer()
    controller = NavigationController(view, loader=functools.partial(load_post, client=client))
    await controller.start("#welcome-to-my-blog")
    assert controller.state == PostView(post=BLOG_POSTS[1])
    assert "<h1>Welcome to My Blog</h1>" in view.html


@pytest.mark.asyncio
async def test_content_store_failure_then_back(posts_dir, client):
    view = HtmlContainer()
    controller = NavigationController(view, loader=functools.partial(load_post, client=client))
    await controller.start("#welcome-to-my-blog")
    assert ERROR_MESSAGE in view.html

    controller.on_back()
    assert "Welcome to My Blog" in view.html
    assert "Building a Type-Safe Redis Client in OCaml" in view.html

