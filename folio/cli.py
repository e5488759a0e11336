from __future__ import annotations

import asyncio
import functools
import sys
from argparse import ArgumentParser
from pathlib import Path

import httpx

from folio.config import settings
from folio.loader import load_post
from folio.md_render import md_to_html
from folio.models import ListView
from folio.navigation import NavigationController
from folio.views import HtmlContainer


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(description="Personal site blog reader.")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("serve", help="Run the content store")

    render = sub.add_parser("render", help="Print the HTML for a markdown file")
    render.add_argument("file", type=str, help="Markdown file, or - for stdin")

    read = sub.add_parser("read", help="Browse posts from the content store")
    read.add_argument(
        "location",
        nargs="?",
        default=None,
        help="Page URL or #slug to open directly (default: post list)",
    )
    read.add_argument(
        "--site-url",
        type=str,
        default=None,
        help=f"Content store base URL (default: {settings.site_url})",
    )
    read.add_argument(
        "--once",
        action="store_true",
        help="Print the first view and exit",
    )
    return parser


async def read_posts(
    location: str | None,
    client: httpx.AsyncClient,
    once: bool = False,
    prompt=input,
) -> HtmlContainer:
    view = HtmlContainer()
    controller = NavigationController(view, loader=functools.partial(load_post, client=client))
    await controller.start(location)
    print(view.html)
    if once:
        return view

    while True:
        if isinstance(controller.state, ListView):
            posts = controller.visible_posts()
            for i, post in enumerate(posts, 1):
                print(f"  [{i}] {post.title}")
            choice = (await asyncio.to_thread(prompt, "post number, or q: ")).strip()
        else:
            choice = (await asyncio.to_thread(prompt, "b for back, or q: ")).strip()

        if choice == "q":
            return view
        if choice == "b":
            controller.on_back()
        elif choice.isdigit() and isinstance(controller.state, ListView):
            index = int(choice) - 1
            if not 0 <= index < len(posts):
                print(f"[error] no post {choice}")
                continue
            await controller.on_select(posts[index])
        else:
            continue
        print(view.html)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "serve":
        from folio.main import main as serve

        serve()
        return

    if args.command == "render":
        source = sys.stdin.read() if args.file == "-" else Path(args.file).read_text(encoding="utf-8")
        print(md_to_html(source))
        return

    async def _read() -> None:
        async with httpx.AsyncClient(
            base_url=args.site_url or settings.site_url,
            timeout=settings.fetch_timeout_seconds,
        ) as client:
            await read_posts(args.location, client, once=args.once)

    try:
        asyncio.run(_read())
    except (KeyboardInterrupt, EOFError):
        pass


if __name__ == "__main__":
    main()
