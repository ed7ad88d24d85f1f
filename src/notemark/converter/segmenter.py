"""Segment a normalized note body into block nodes.

Each line is classified in priority order:

=========  =======================  ===========================
kind       pattern                  block
=========  =======================  ===========================
heading    ``^#{1,6}\\s+.+``         :class:`Heading`
fence      ``^```\\```              :class:`CodeBlock`
quote      ``^>\\s?``                :class:`Blockquote`
task       ``^[-*]\\s+\\[[ xX]\\]``    :class:`TaskList`
bullet     ``^[-*]\\s+``             :class:`BulletList`
ordered    ``^\\d+[.)]\\s+``          :class:`OrderedList`
text       anything else            :class:`Paragraph`
=========  =======================  ===========================

Contiguous lines are grouped into blocks.  Lists collect items of one
marker kind only; a different kind always starts a new list.  An indented
marker line below an item opens a nested sub-range that is dedented and
segmented again by the same rules, down to ``max_depth`` levels.  Deeper
markers are flattened into the item's text and reported as a
``NESTING_DEPTH_EXCEEDED`` warning.

Malformed input never raises: unrecognised markers are paragraph text and
an unterminated fence runs to the end of the input.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from enum import Enum

from notemark.config import DEFAULT_MAX_NESTING_DEPTH
from notemark.converter.inline_parser import parse_inline
from notemark.models import (
    Blockquote,
    BlockNode,
    BulletList,
    CodeBlock,
    ConversionWarning,
    Heading,
    ListItem,
    OrderedList,
    Paragraph,
    TaskItem,
    TaskList,
)

# ---------------------------------------------------------------------------
# Line classification
# ---------------------------------------------------------------------------

class LineKind(str, Enum):
    """Classification of a single source line."""

    HEADING = "heading"
    FENCE = "fence"
    QUOTE = "quote"
    TASK = "task"
    BULLET = "bullet"
    ORDERED = "ordered"
    TEXT = "text"
    BLANK = "blank"


_HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)$")
_FENCE = "```"
_QUOTE_RE = re.compile(r"^>\s?")
_TASK_RE = re.compile(r"^[-*]\s+\[([ xX])\](.*)$")
_BULLET_RE = re.compile(r"^[-*]\s+(.*)$")
_ORDERED_RE = re.compile(r"^\d+[.)]\s+(.*)$")

_LIST_KINDS: frozenset[LineKind] = frozenset({
    LineKind.TASK, LineKind.BULLET, LineKind.ORDERED,
})


def classify_line(line: str) -> LineKind:
    """Return the :class:`LineKind` of *line* (no leading indentation allowed)."""
    if not line.strip():
        return LineKind.BLANK
    if _HEADING_RE.match(line):
        return LineKind.HEADING
    if line.startswith(_FENCE):
        return LineKind.FENCE
    if _QUOTE_RE.match(line):
        return LineKind.QUOTE
    if _TASK_RE.match(line):
        return LineKind.TASK
    if _BULLET_RE.match(line):
        return LineKind.BULLET
    if _ORDERED_RE.match(line):
        return LineKind.ORDERED
    return LineKind.TEXT


def _is_indented(line: str) -> bool:
    return line[:1] in (" ", "\t")


def _indent_width(line: str) -> int:
    return len(line) - len(line.lstrip(" \t"))


def _next_non_blank(lines: list[str], pos: int) -> int | None:
    for index in range(pos, len(lines)):
        if lines[index].strip():
            return index
    return None


# ---------------------------------------------------------------------------
# Segmentation context
# ---------------------------------------------------------------------------

class _SegmentContext:
    """Per-call settings and warning accumulator."""

    __slots__ = ("max_depth", "warnings")

    def __init__(self, max_depth: int, warnings: list[ConversionWarning]) -> None:
        self.max_depth = max_depth
        self.warnings = warnings

    def add_warning(self, code: str, message: str, **context: object) -> None:
        self.warnings.append(ConversionWarning(
            code=code, message=message, context=dict(context),
        ))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def segment_blocks(
    text: str,
    *,
    max_depth: int = DEFAULT_MAX_NESTING_DEPTH,
    warnings: list[ConversionWarning] | None = None,
) -> list[BlockNode]:
    """Split a normalized note body into block nodes.

    Parameters
    ----------
    text:
        Normalized markdown body (no frontmatter).
    max_depth:
        Nested list levels kept below a top-level list.
    warnings:
        Optional mutable list that receives :class:`ConversionWarning`
        instances for flattened nesting.

    Returns
    -------
    list[BlockNode]
        Blocks in document order.  Blank or non-string input gives ``[]``.
    """
    if not isinstance(text, str) or not text.strip():
        return []
    ctx = _SegmentContext(max_depth, warnings if warnings is not None else [])
    return _segment(text.split("\n"), ctx, depth=0)


def _segment(lines: list[str], ctx: _SegmentContext, depth: int) -> list[BlockNode]:
    blocks: list[BlockNode] = []
    pos = 0
    while pos < len(lines):
        kind = classify_line(lines[pos])
        if kind is LineKind.BLANK:
            pos += 1
            continue
        produced, pos = _BLOCK_HANDLERS[kind](lines, pos, ctx, depth)
        blocks.extend(produced)
    return blocks


# ---------------------------------------------------------------------------
# Block handlers -- each returns (blocks, next_position)
# ---------------------------------------------------------------------------

def _segment_heading(
    lines: list[str], pos: int, ctx: _SegmentContext, depth: int,
) -> tuple[list[BlockNode], int]:
    match = _HEADING_RE.match(lines[pos])
    level = min(max(len(match.group(1)), 1), 6)
    heading = Heading(level=level, inline=parse_inline(match.group(2).strip()))
    return [heading], pos + 1


def _segment_fence(
    lines: list[str], pos: int, ctx: _SegmentContext, depth: int,
) -> tuple[list[BlockNode], int]:
    language = lines[pos][len(_FENCE):].strip() or None
    pos += 1
    body: list[str] = []
    while pos < len(lines) and not lines[pos].startswith(_FENCE):
        body.append(lines[pos])
        pos += 1
    # Skip the closing fence; an unterminated fence stops at EOF.
    return [CodeBlock(language=language, text="\n".join(body))], pos + 1


def _segment_quote(
    lines: list[str], pos: int, ctx: _SegmentContext, depth: int,
) -> tuple[list[BlockNode], int]:
    parts: list[str] = []
    while pos < len(lines) and _QUOTE_RE.match(lines[pos]):
        part = _QUOTE_RE.sub("", lines[pos], count=1).strip()
        if part:
            parts.append(part)
        pos += 1
    paragraph = Paragraph(inline=parse_inline(" ".join(parts)))
    return [Blockquote(blocks=(paragraph,))], pos


def _segment_paragraph(
    lines: list[str], pos: int, ctx: _SegmentContext, depth: int,
) -> tuple[list[BlockNode], int]:
    parts: list[str] = []
    while pos < len(lines) and classify_line(lines[pos]) is LineKind.TEXT:
        parts.append(lines[pos].strip())
        pos += 1
    return [Paragraph(inline=parse_inline(" ".join(parts)))], pos


def _segment_list(
    lines: list[str], pos: int, ctx: _SegmentContext, depth: int,
) -> tuple[list[BlockNode], int]:
    """Collect consecutive items of one marker kind into a list block.

    A blank line keeps the list open only when the next non-blank line
    carries the same marker kind.  If an item's nested sub-range yields
    more than one block, the list closes after that item and the extra
    blocks follow it.
    """
    kind = classify_line(lines[pos])
    items: list[ListItem | TaskItem] = []
    trailing: list[BlockNode] = []

    while pos < len(lines):
        line_kind = classify_line(lines[pos])
        if line_kind is LineKind.BLANK:
            upcoming = _next_non_blank(lines, pos)
            if upcoming is not None and classify_line(lines[upcoming]) is kind:
                pos = upcoming
                continue
            break
        if line_kind is not kind:
            break

        item, pos, overflow = _collect_item(lines, pos, kind, ctx, depth)
        items.append(item)
        if overflow:
            trailing = overflow
            break

    block: BlockNode
    if kind is LineKind.TASK:
        block = TaskList(items=tuple(items))
    elif kind is LineKind.ORDERED:
        block = OrderedList(items=tuple(items))
    else:
        block = BulletList(items=tuple(items))
    return [block, *trailing], pos


def _item_text(line: str, kind: LineKind) -> tuple[bool, str]:
    """Strip the marker from an item line; return ``(checked, text)``."""
    if kind is LineKind.TASK:
        match = _TASK_RE.match(line)
        return match.group(1) in "xX", match.group(2).lstrip()
    pattern = _ORDERED_RE if kind is LineKind.ORDERED else _BULLET_RE
    return False, pattern.match(line).group(1)


def _collect_item(
    lines: list[str],
    pos: int,
    kind: LineKind,
    ctx: _SegmentContext,
    depth: int,
) -> tuple[ListItem | TaskItem, int, list[BlockNode]]:
    """Consume one list item starting at *pos*.

    Returns ``(item, next_position, overflow_blocks)``.
    """
    checked, first = _item_text(lines[pos], kind)
    parts = [first]
    nested_lines: list[str] = []
    flattened = False
    pos += 1

    while pos < len(lines):
        line = lines[pos]

        if not line.strip():
            # Blank lines only stay inside the item when a nested
            # sub-range continues with more indented lines.
            if nested_lines:
                upcoming = _next_non_blank(lines, pos)
                if upcoming is not None and _is_indented(lines[upcoming]):
                    nested_lines.extend(lines[pos:upcoming])
                    pos = upcoming
                    continue
            break

        if not _is_indented(line):
            if classify_line(line) is not LineKind.TEXT:
                break
            # Lazy continuation of the item (or of its innermost nested item).
            (nested_lines if nested_lines else parts).append(line)
            pos += 1
            continue

        if nested_lines:
            nested_lines.append(line)
        elif classify_line(line.lstrip()) in _LIST_KINDS:
            if depth + 1 > ctx.max_depth:
                if not flattened:
                    ctx.add_warning(
                        "NESTING_DEPTH_EXCEEDED",
                        f"Nesting depth exceeds {ctx.max_depth} levels; "
                        "nested items flattened.",
                        depth=depth + 1,
                    )
                    flattened = True
                parts.append(line)
            else:
                nested_lines.append(line)
        else:
            parts.append(line)
        pos += 1

    inline = parse_inline("\n".join(parts).rstrip())

    nested: BlockNode | None = None
    overflow: list[BlockNode] = []
    if nested_lines:
        nested_blocks = _segment(_dedent(nested_lines), ctx, depth + 1)
        if nested_blocks:
            nested, overflow = nested_blocks[0], nested_blocks[1:]

    if kind is LineKind.TASK:
        return TaskItem(checked=checked, inline=inline, nested=nested), pos, overflow
    return ListItem(inline=inline, nested=nested), pos, overflow


def _dedent(lines: list[str]) -> list[str]:
    """Remove the first line's indentation from every line (as far as each allows)."""
    width = _indent_width(lines[0])
    return [line[min(width, _indent_width(line)):] for line in lines]


# ---------------------------------------------------------------------------
# Handler dispatch table
# ---------------------------------------------------------------------------

_BlockHandler = Callable[
    [list[str], int, _SegmentContext, int],
    tuple[list[BlockNode], int],
]

_BLOCK_HANDLERS: dict[LineKind, _BlockHandler] = {
    LineKind.HEADING: _segment_heading,
    LineKind.FENCE: _segment_fence,
    LineKind.QUOTE: _segment_quote,
    LineKind.TASK: _segment_list,
    LineKind.BULLET: _segment_list,
    LineKind.ORDERED: _segment_list,
    LineKind.TEXT: _segment_paragraph,
}
