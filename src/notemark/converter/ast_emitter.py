"""Assemble block nodes into a :class:`Document` and serialise it.

Two JSON-serialisable shapes are produced:

* :func:`document_to_dict` -- the native tagged tree::

      {"kind": "doc", "blocks": [
          {"kind": "heading", "level": 1,
           "inline": [{"kind": "text", "value": "Hello"}]},
          ...]}

* :func:`document_to_prosemirror` -- TipTap / ProseMirror editor JSON::

      {"type": "doc", "content": [
          {"type": "heading", "attrs": {"level": 1},
           "content": [{"type": "text", "text": "Hello"}]},
          ...]}

No text is transformed here; both serialisers are pure structural walks.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

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
    InlineNode,
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


def build_document(blocks: Iterable[BlockNode]) -> Document:
    """Wrap *blocks* in a :class:`Document`.

    An empty sequence yields a document holding one empty paragraph.
    """
    blocks = tuple(blocks)
    if not blocks:
        blocks = (Paragraph(),)
    return Document(blocks=blocks)


# ---------------------------------------------------------------------------
# Native tagged tree
# ---------------------------------------------------------------------------

def document_to_dict(document: Document) -> dict[str, Any]:
    """Serialise *document* to its native ``{"kind": "doc", ...}`` dict."""
    return {
        "kind": document.kind,
        "blocks": [_block_to_dict(block) for block in document.blocks],
    }


def _inline_to_dict(node: InlineNode) -> dict[str, Any]:
    if isinstance(node, Link):
        return {"kind": "link", "text": node.text, "href": node.href}
    if isinstance(node, HardBreak):
        return {"kind": "hard_break"}
    return {"kind": _INLINE_KINDS[type(node)], "value": node.value}


def _run_to_dict(run: InlineRun) -> list[dict[str, Any]]:
    return [_inline_to_dict(node) for node in run]


def _item_to_dict(item: ListItem | TaskItem) -> dict[str, Any]:
    result: dict[str, Any] = {"inline": _run_to_dict(item.inline)}
    if isinstance(item, TaskItem):
        result["checked"] = item.checked
    result["nested"] = _block_to_dict(item.nested) if item.nested is not None else None
    return result


def _heading_dict(block: Heading) -> dict[str, Any]:
    return {"kind": "heading", "level": block.level, "inline": _run_to_dict(block.inline)}


def _paragraph_dict(block: Paragraph) -> dict[str, Any]:
    return {"kind": "paragraph", "inline": _run_to_dict(block.inline)}


def _code_block_dict(block: CodeBlock) -> dict[str, Any]:
    return {"kind": "code_block", "language": block.language, "text": block.text}


def _blockquote_dict(block: Blockquote) -> dict[str, Any]:
    return {"kind": "blockquote", "blocks": [_block_to_dict(b) for b in block.blocks]}


def _list_dict(kind: str) -> Callable[[Any], dict[str, Any]]:
    def render(block: BulletList | OrderedList | TaskList) -> dict[str, Any]:
        return {"kind": kind, "items": [_item_to_dict(item) for item in block.items]}
    return render


_INLINE_KINDS: dict[type, str] = {
    Text: "text",
    Bold: "bold",
    Italic: "italic",
    Code: "code",
}

_BLOCK_SERIALIZERS: dict[type, Callable[[Any], dict[str, Any]]] = {
    Heading: _heading_dict,
    Paragraph: _paragraph_dict,
    CodeBlock: _code_block_dict,
    Blockquote: _blockquote_dict,
    BulletList: _list_dict("bullet_list"),
    OrderedList: _list_dict("ordered_list"),
    TaskList: _list_dict("task_list"),
}


def _block_to_dict(block: BlockNode) -> dict[str, Any]:
    return _BLOCK_SERIALIZERS[type(block)](block)


# ---------------------------------------------------------------------------
# ProseMirror / TipTap JSON
# ---------------------------------------------------------------------------

_PM_MARKS: dict[type, str] = {
    Bold: "bold",
    Italic: "italic",
    Code: "code",
}


def document_to_prosemirror(document: Document) -> dict[str, Any]:
    """Serialise *document* to the editor's ProseMirror JSON.

    Empty text nodes are omitted (ProseMirror rejects them), so an empty
    paragraph is ``{"type": "paragraph"}``.
    """
    return {
        "type": "doc",
        "content": [_pm_block(block) for block in document.blocks],
    }


def _pm_inline(run: InlineRun) -> list[dict[str, Any]]:
    content: list[dict[str, Any]] = []
    for node in run:
        if isinstance(node, HardBreak):
            content.append({"type": "hardBreak"})
        elif isinstance(node, Link):
            if node.text:
                content.append({
                    "type": "text",
                    "text": node.text,
                    "marks": [{"type": "link", "attrs": {"href": node.href}}],
                })
        elif node.value:
            text_node: dict[str, Any] = {"type": "text", "text": node.value}
            mark = _PM_MARKS.get(type(node))
            if mark is not None:
                text_node["marks"] = [{"type": mark}]
            content.append(text_node)
    return content


def _pm_node(node_type: str, content: list[dict[str, Any]], attrs: dict | None = None) -> dict[str, Any]:
    node: dict[str, Any] = {"type": node_type}
    if attrs is not None:
        node["attrs"] = attrs
    if content:
        node["content"] = content
    return node


def _pm_item(item: ListItem | TaskItem) -> dict[str, Any]:
    content = [_pm_node("paragraph", _pm_inline(item.inline))]
    if item.nested is not None:
        content.append(_pm_block(item.nested))
    if isinstance(item, TaskItem):
        return _pm_node("taskItem", content, {"checked": item.checked})
    return _pm_node("listItem", content)


def _pm_heading(block: Heading) -> dict[str, Any]:
    return _pm_node("heading", _pm_inline(block.inline), {"level": block.level})


def _pm_paragraph(block: Paragraph) -> dict[str, Any]:
    return _pm_node("paragraph", _pm_inline(block.inline))


def _pm_code_block(block: CodeBlock) -> dict[str, Any]:
    text = [{"type": "text", "text": block.text}] if block.text else []
    attrs = {"language": block.language} if block.language else {}
    return _pm_node("codeBlock", text, attrs)


def _pm_blockquote(block: Blockquote) -> dict[str, Any]:
    return _pm_node("blockquote", [_pm_block(b) for b in block.blocks])


def _pm_list(node_type: str) -> Callable[[Any], dict[str, Any]]:
    def render(block: BulletList | OrderedList | TaskList) -> dict[str, Any]:
        return _pm_node(node_type, [_pm_item(item) for item in block.items])
    return render


_PM_BUILDERS: dict[type, Callable[[Any], dict[str, Any]]] = {
    Heading: _pm_heading,
    Paragraph: _pm_paragraph,
    CodeBlock: _pm_code_block,
    Blockquote: _pm_blockquote,
    BulletList: _pm_list("bulletList"),
    OrderedList: _pm_list("orderedList"),
    TaskList: _pm_list("taskList"),
}


def _pm_block(block: BlockNode) -> dict[str, Any]:
    return _PM_BUILDERS[type(block)](block)
