"""Render a :class:`Document` to an HTML fragment.

Every piece of user text is escaped *before* it is wrapped in structural
tags, so literal angle brackets in a note can never become markup.  Link
targets using a harmful protocol (``javascript:``, ``vbscript:``,
``file:``, non-image ``data:``) are replaced by ``#harmful-link``, using
mistune's protocol lists.

The output is a fragment (no ``<html>``/``<body>``) and must still pass
through an allow-list sanitizer before it is inserted into a DOM.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from mistune import HTMLRenderer
from mistune.util import escape

from notemark.models import (
    Blockquote,
    BlockNode,
    Bold,
    BulletList,
    Code,
    CodeBlock,
    Document,
    HardBreak,
    Heading,
    InlineRun,
    Italic,
    Link,
    ListItem,
    OrderedList,
    Paragraph,
    TaskItem,
    TaskList,
    Text,
)

EMPTY_HTML = "<p></p>"

HARMFUL_LINK = "#harmful-link"


def _safe_href(url: str) -> str:
    lowered = url.strip().lower()
    if lowered.startswith(HTMLRenderer.HARMFUL_PROTOCOLS) and not lowered.startswith(
        HTMLRenderer.GOOD_DATA_PROTOCOLS
    ):
        return HARMFUL_LINK
    return escape(url)


def render_inline(run: InlineRun) -> str:
    """Render an inline run, escaping each node's text first."""
    parts: list[str] = []
    for node in run:
        if isinstance(node, Text):
            parts.append(escape(node.value))
        elif isinstance(node, Bold):
            parts.append(f"<strong>{escape(node.value)}</strong>")
        elif isinstance(node, Italic):
            parts.append(f"<em>{escape(node.value)}</em>")
        elif isinstance(node, Code):
            parts.append(f"<code>{escape(node.value)}</code>")
        elif isinstance(node, Link):
            parts.append(f'<a href="{_safe_href(node.href)}">{escape(node.text)}</a>')
        elif isinstance(node, HardBreak):
            parts.append("<br>")
    return "".join(parts)


# ---------------------------------------------------------------------------
# Block renderers
# ---------------------------------------------------------------------------

def _render_heading(block: Heading) -> str:
    return f"<h{block.level}>{render_inline(block.inline)}</h{block.level}>"


def _render_paragraph(block: Paragraph) -> str:
    return f"<p>{render_inline(block.inline)}</p>"


def _render_code_block(block: CodeBlock) -> str:
    class_attr = f' class="language-{escape(block.language)}"' if block.language else ""
    return f"<pre><code{class_attr}>{escape(block.text)}</code></pre>"


def _render_blockquote(block: Blockquote) -> str:
    inner = "\n".join(_render_block(child) for child in block.blocks)
    return f"<blockquote>{inner}</blockquote>"


def _render_item(item: ListItem | TaskItem) -> str:
    if isinstance(item, TaskItem):
        checked = " checked" if item.checked else ""
        opening = f'<li class="task-list-item"><input type="checkbox" disabled{checked}> '
    else:
        opening = "<li>"
    body = render_inline(item.inline)
    if item.nested is not None:
        body = f"{body}\n{_render_block(item.nested)}\n"
    return f"{opening}{body}</li>"


def _list_renderer(opening: str, closing: str) -> Callable[[Any], str]:
    def render(block: BulletList | OrderedList | TaskList) -> str:
        lines = [opening, *(_render_item(item) for item in block.items), closing]
        return "\n".join(lines)
    return render


_BLOCK_RENDERERS: dict[type, Callable[[Any], str]] = {
    Heading: _render_heading,
    Paragraph: _render_paragraph,
    CodeBlock: _render_code_block,
    Blockquote: _render_blockquote,
    BulletList: _list_renderer("<ul>", "</ul>"),
    OrderedList: _list_renderer("<ol>", "</ol>"),
    TaskList: _list_renderer('<ul class="task-list">', "</ul>"),
}


def _render_block(block: BlockNode) -> str:
    return _BLOCK_RENDERERS[type(block)](block)


def render_html(document: Document | None) -> str:
    """Render *document* to an HTML fragment, one block per line.

    Examples
    --------
    >>> from notemark.models import Document, Heading, Paragraph, Text
    >>> render_html(Document(blocks=(Heading(1, (Text("Hello"),)), Paragraph((Text("World"),)))))
    '<h1>Hello</h1>\\n<p>World</p>'
    """
    if document is None or not document.blocks:
        return EMPTY_HTML
    return "\n".join(_render_block(block) for block in document.blocks)
