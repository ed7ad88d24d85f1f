"""notemark: markdown compiler for shared notes.

Public re-exports
-----------------

* **Compiler:** :class:`MarkdownCompiler`, :func:`markdown_to_document`,
  :func:`markdown_to_html`
* **Pipeline stages:** :func:`normalize_markdown`, :func:`segment_blocks`,
  :func:`parse_inline`, :func:`build_document`, :func:`render_html`,
  :func:`has_media`
* **Configuration:** :class:`CompilerConfig`
* **Errors:** :class:`NotemarkError`, :class:`NotemarkConfigError`,
  :class:`ErrorCode`
* **Models:** the document tree node types and result dataclasses

Usage::

    from notemark import MarkdownCompiler

    result = MarkdownCompiler().compile("# Hello\\n\\nWorld")
    result.html       # '<h1>Hello</h1>\\n<p>World</p>'
    result.document   # Document(blocks=(Heading(...), Paragraph(...)))
"""

from __future__ import annotations

# ── Configuration ───────────────────────────────────────────────────────
from notemark.config import DEFAULT_ATTACHMENT_EXTENSIONS, CompilerConfig

# ── Compiler and stages ────────────────────────────────────────────────
from notemark.converter import (
    MarkdownCompiler,
    build_document,
    document_to_dict,
    document_to_prosemirror,
    extract_title,
    has_media,
    markdown_to_document,
    markdown_to_html,
    normalize_markdown,
    normalize_parts,
    parse_inline,
    render_html,
    segment_blocks,
    split_frontmatter,
)

# ── Errors ──────────────────────────────────────────────────────────────
from notemark.errors import ErrorCode, NotemarkConfigError, NotemarkError

# ── Models ──────────────────────────────────────────────────────────────
from notemark.models import (
    Blockquote,
    BlockNode,
    Bold,
    BulletList,
    Code,
    CodeBlock,
    CompileResult,
    ConversionWarning,
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

# ── Public surface ──────────────────────────────────────────────────────

__all__ = [
    # Compiler
    "MarkdownCompiler",
    "markdown_to_document",
    "markdown_to_html",
    # Stages
    "normalize_markdown",
    "normalize_parts",
    "split_frontmatter",
    "extract_title",
    "segment_blocks",
    "parse_inline",
    "build_document",
    "document_to_dict",
    "document_to_prosemirror",
    "render_html",
    "has_media",
    # Configuration
    "CompilerConfig",
    "DEFAULT_ATTACHMENT_EXTENSIONS",
    # Errors
    "NotemarkError",
    "NotemarkConfigError",
    "ErrorCode",
    # Models: document tree
    "Document",
    "BlockNode",
    "Heading",
    "Paragraph",
    "CodeBlock",
    "Blockquote",
    "BulletList",
    "OrderedList",
    "TaskList",
    "ListItem",
    "TaskItem",
    "InlineNode",
    "InlineRun",
    "Text",
    "Bold",
    "Italic",
    "Code",
    "Link",
    "HardBreak",
    # Models: results
    "CompileResult",
    "ConversionWarning",
]
