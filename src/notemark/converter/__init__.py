"""Markdown to document / HTML compile pipeline.

Public API:

- :class:`MarkdownCompiler` -- the full pipeline.
- :func:`normalize_markdown` -- strip title, media and excess blank lines.
- :func:`segment_blocks` -- body text to block nodes.
- :func:`parse_inline` -- block text to an inline run.
- :func:`build_document` / :func:`document_to_dict` /
  :func:`document_to_prosemirror` -- the document tree.
- :func:`render_html` -- document tree to an HTML fragment.
- :func:`has_media` -- cheap media/attachment syntax check.
"""

from notemark.converter.ast_emitter import (
    build_document,
    document_to_dict,
    document_to_prosemirror,
)
from notemark.converter.compiler import MarkdownCompiler, markdown_to_document, markdown_to_html
from notemark.converter.html_emitter import render_html
from notemark.converter.inline_parser import parse_inline
from notemark.converter.media import has_media
from notemark.converter.normalizer import (
    extract_title,
    normalize_markdown,
    normalize_parts,
    split_frontmatter,
)
from notemark.converter.segmenter import segment_blocks

__all__ = [
    "MarkdownCompiler",
    "build_document",
    "document_to_dict",
    "document_to_prosemirror",
    "extract_title",
    "has_media",
    "markdown_to_document",
    "markdown_to_html",
    "normalize_markdown",
    "normalize_parts",
    "parse_inline",
    "render_html",
    "segment_blocks",
    "split_frontmatter",
]
