"""Lightweight Markdown-to-HTML renderer for blog posts."""

from __future__ import annotations

import re

from folio.ids import gen_id

FENCE_RE = re.compile(r"```([\s\S]*?)```")
INLINE_CODE_RE = re.compile(r"`([^`\n]+)`")
BLOCK_START_RE = re.compile(r"^<(?:h[1-6]|hr|li|ul|ol)\b")
LIST_RUN_RE = re.compile(r"(?:<li>.*</li>\n?)+")

# Longest heading marker first.
BLOCK_RULES = [
    (re.compile(r"^### (.*)$", re.MULTILINE), r"<h3>\1</h3>"),
    (re.compile(r"^## (.*)$", re.MULTILINE), r"<h2>\1</h2>"),
    (re.compile(r"^# (.*)$", re.MULTILINE), r"<h1>\1</h1>"),
    (re.compile(r"^---$", re.MULTILINE), "<hr>"),
    (re.compile(r"^\* (.+)$", re.MULTILINE), r"<li>\1</li>"),
    (re.compile(r"^\d+\. (.+)$", re.MULTILINE), r"<li>\1</li>"),
]

# Bold must run before italic.
EMPHASIS_RULES = [
    (re.compile(r"\*\*(.*?)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"\*(.*?)\*"), r"<em>\1</em>"),
]

_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#039;",
    }
)


def escape_html(text: str) -> str:
    """Escape ``& < > " '`` in a single pass over the input."""
    return text.translate(_ESCAPES)


def md_to_html(md: str) -> str:
    """Convert markdown text to HTML.

    Handles fenced code blocks, headings, horizontal rules, bold, italic,
    inline code, simple lists and paragraphs. Anything else is kept as
    literal text, so this never fails on malformed input. Only code is
    escaped; prose goes through as-is.

    Numbered and bulleted lines both end up in a ``<ul>``.
    """
    text = md.replace("\r\n", "\n").replace("\r", "\n")

    marker = _placeholder_marker(text)
    code_blocks: list[str] = []

    def _stash(match: re.Match) -> str:
        code_blocks.append(f"<pre><code>{escape_html(match.group(1).strip())}</code></pre>")
        return f"{marker}{len(code_blocks) - 1}@@"

    text = FENCE_RE.sub(_stash, text)

    for pattern, replacement in BLOCK_RULES:
        text = pattern.sub(replacement, text)

    text = _inline(text)

    placeholder_re = re.compile(re.escape(marker) + r"(\d+)@@")
    html = _paragraphs(text, placeholder_re)
    html = LIST_RUN_RE.sub(lambda m: f"<ul>{m.group(0)}</ul>", html)

    return placeholder_re.sub(lambda m: code_blocks[int(m.group(1))], html)


def _placeholder_marker(text: str) -> str:
    """Return a placeholder prefix that does not occur anywhere in ``text``."""
    marker = f"@@{gen_id('CODE_BLOCK_')}_"
    while marker in text:
        marker = f"@@{gen_id('CODE_BLOCK_')}_"
    return marker


def _inline(text: str) -> str:
    """Inline markdown: code spans, bold, italic."""
    # Odd indexes are the contents of code spans.
    parts = INLINE_CODE_RE.split(text)
    out: list[str] = []
    for i, part in enumerate(parts):
        if i % 2:
            out.append(f"<code>{escape_html(part)}</code>")
            continue
        for pattern, replacement in EMPHASIS_RULES:
            part = pattern.sub(replacement, part)
        out.append(part)
    return "".join(out)


def _paragraphs(text: str, placeholder_re: re.Pattern) -> str:
    blocks: list[str] = []
    for block in text.split("\n\n"):
        block = block.strip("\n")
        if not block.strip():
            continue
        if BLOCK_START_RE.match(block) or placeholder_re.match(block):
            blocks.append(block)
        else:
            blocks.append(f"<p>{block}</p>")
    return "\n".join(blocks)
