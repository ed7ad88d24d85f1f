"""Deep nesting stress tests for the compile pipeline.

Lists nested beyond the configured depth must never crash or drop text:
deeper markers are flattened into the innermost kept item and reported
once per item as a NESTING_DEPTH_EXCEEDED warning.
"""

from __future__ import annotations

import pytest

from notemark.config import DEFAULT_MAX_NESTING_DEPTH, CompilerConfig
from notemark.converter.compiler import MarkdownCompiler
from notemark.converter.inline_parser import inline_plain_text
from notemark.models import BulletList, ListItem, OrderedList


def _compiler(**kwargs: object) -> MarkdownCompiler:
    return MarkdownCompiler(CompilerConfig(**kwargs))


def _nested_bullets(depth: int) -> str:
    return "\n".join(f"{'  ' * i}- Level {i + 1}" for i in range(depth))


def _list_depth(block) -> int:
    depth = 0
    while block is not None:
        depth += 1
        block = block.items[0].nested
    return depth


def _all_text(block) -> str:
    parts = []
    for item in block.items:
        parts.append(inline_plain_text(item.inline))
        if item.nested is not None:
            parts.append(_all_text(item.nested))
    return "\n".join(parts)


# =========================================================================
# Deeply nested lists
# =========================================================================


class TestDeepNestedLists:
    """Lists nested at and beyond the default limit."""

    @pytest.mark.parametrize("depth", [1, 3, 5, 8, 9])
    def test_within_limit_keeps_structure(self, depth: int):
        result = _compiler().compile(_nested_bullets(depth))
        (block,) = result.document.blocks
        assert _list_depth(block) == depth
        assert result.warnings == []

    @pytest.mark.parametrize("depth", [10, 15, 30])
    def test_beyond_limit_flattens(self, depth: int):
        result = _compiler().compile(_nested_bullets(depth))
        (block,) = result.document.blocks
        assert _list_depth(block) == DEFAULT_MAX_NESTING_DEPTH + 1
        assert [w.code for w in result.warnings] == ["NESTING_DEPTH_EXCEEDED"]
        assert result.warnings[0].context == {"depth": DEFAULT_MAX_NESTING_DEPTH + 1}

    @pytest.mark.parametrize("depth", [10, 30])
    def test_no_text_lost(self, depth: int):
        (block,) = _compiler().compile(_nested_bullets(depth)).document.blocks
        text = _all_text(block)
        for level in range(1, depth + 1):
            assert f"Level {level}" in text

    @pytest.mark.parametrize("depth", [3, 5, 10])
    def test_nested_ordered_list_at_depth(self, depth: int):
        md = "\n".join(f"{'   ' * i}1. Level {i + 1}" for i in range(depth))
        (block,) = _compiler().compile(md).document.blocks
        assert isinstance(block, OrderedList)
        assert _list_depth(block) == min(depth, DEFAULT_MAX_NESTING_DEPTH + 1)

    def test_mixed_list_types_deeply_nested(self):
        md = "\n".join([
            "- Bullet 1",
            "  1. Number 1",
            "    - Bullet 2",
            "      1. Number 2",
            "        - Bullet 3",
            "          1. Number 3",
        ])
        (block,) = _compiler().compile(md).document.blocks
        kinds = []
        while block is not None:
            kinds.append(type(block))
            block = block.items[0].nested
        assert kinds == [BulletList, OrderedList] * 3

    def test_warning_per_flattened_item(self):
        md = "- a\n  - a1\n    - a2\n- b\n  - b1\n    - b2"
        result = _compiler(max_nesting_depth=1).compile(md)
        assert len(result.warnings) == 2
        (block,) = result.document.blocks
        flattened = block.items[1].nested.items[0]
        assert isinstance(flattened, ListItem)
        assert flattened.nested is None
        assert inline_plain_text(flattened.inline) == "b1\n  - b2"

    def test_html_for_deep_list_is_balanced(self):
        html = _compiler().compile(_nested_bullets(20)).html
        assert html.count("<ul>") == html.count("</ul>") == DEFAULT_MAX_NESTING_DEPTH + 1
        assert html.count("<li>") == html.count("</li>")

    def test_deep_blockquote_is_flat(self):
        md = "\n".join(">" * i + " level" for i in range(1, 12))
        (block,) = _compiler().compile(md).document.blocks
        assert len(block.blocks) == 1
