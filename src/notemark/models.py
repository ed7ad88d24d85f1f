"""Public data models for the notemark compiler.

The document tree is a closed set of frozen dataclasses.  Block and inline
kinds are tagged unions (:data:`BlockNode`, :data:`InlineNode`); the
emitters dispatch on the concrete class and every member of each union
must have a handler.

Nodes are built once per compile call and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# ---------------------------------------------------------------------------
# Inline nodes
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Text:
    """Plain, unformatted text."""

    value: str


@dataclass(frozen=True, slots=True)
class Bold:
    """``**value**`` -- contents are opaque text, marks do not nest."""

    value: str


@dataclass(frozen=True, slots=True)
class Italic:
    """``*value*``."""

    value: str


@dataclass(frozen=True, slots=True)
class Code:
    """``\\`value\\```."""

    value: str


@dataclass(frozen=True, slots=True)
class Link:
    """``[text](href)``.  *href* is stored exactly as written."""

    text: str
    href: str


@dataclass(frozen=True, slots=True)
class HardBreak:
    """Explicit line break (two trailing spaces before a newline)."""


InlineNode = Text | Bold | Italic | Code | Link | HardBreak

InlineRun = tuple[InlineNode, ...]


# ---------------------------------------------------------------------------
# Block nodes
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Heading:
    level: int
    inline: InlineRun = ()


@dataclass(frozen=True, slots=True)
class Paragraph:
    inline: InlineRun = ()


@dataclass(frozen=True, slots=True)
class CodeBlock:
    """Fenced code.  *text* holds the raw, unescaped lines joined by ``\\n``."""

    language: str | None
    text: str


@dataclass(frozen=True, slots=True)
class Blockquote:
    blocks: tuple[BlockNode, ...]


@dataclass(frozen=True, slots=True)
class ListItem:
    """A bullet or ordered list entry.

    Attributes
    ----------
    inline:
        The item's own text.
    nested:
        A nested list block (any list kind), or ``None``.
    """

    inline: InlineRun = ()
    nested: BlockNode | None = None


@dataclass(frozen=True, slots=True)
class TaskItem:
    """A ``- [ ]`` / ``- [x]`` entry; otherwise identical to :class:`ListItem`."""

    checked: bool
    inline: InlineRun = ()
    nested: BlockNode | None = None


@dataclass(frozen=True, slots=True)
class BulletList:
    items: tuple[ListItem, ...]


@dataclass(frozen=True, slots=True)
class OrderedList:
    items: tuple[ListItem, ...]


@dataclass(frozen=True, slots=True)
class TaskList:
    items: tuple[TaskItem, ...]


BlockNode = Heading | Paragraph | CodeBlock | Blockquote | BulletList | OrderedList | TaskList

ListBlock = BulletList | OrderedList | TaskList


@dataclass(frozen=True, slots=True)
class Document:
    """Root of the tree.  ``blocks`` always holds at least one block."""

    blocks: tuple[BlockNode, ...]
    kind: str = field(default="doc", init=False)


# ---------------------------------------------------------------------------
# Conversion warnings and results
# ---------------------------------------------------------------------------

@dataclass
class ConversionWarning:
    """A non-fatal issue encountered while compiling.

    Warnings are accumulated in :class:`CompileResult` so callers can
    inspect them after the operation completes.

    Attributes
    ----------
    code:
        A machine-readable warning code (e.g. ``"NESTING_DEPTH_EXCEEDED"``).
    message:
        A human-readable description of the issue.
    context:
        Arbitrary structured data for diagnostics.
    """

    code: str
    message: str
    context: dict = field(default_factory=dict)


@dataclass
class CompileResult:
    """Output of :meth:`MarkdownCompiler.compile`.

    Attributes
    ----------
    document:
        The document tree.
    html:
        The HTML fragment rendered from *document*.  Still requires an
        allow-list sanitizer before DOM insertion.
    frontmatter:
        The leading ``---`` block passed through untouched, or ``None``.
    warnings:
        Non-fatal degradations (e.g. flattened deep nesting).
    """

    document: Document
    html: str
    frontmatter: str | None = None
    warnings: list[ConversionWarning] = field(default_factory=list)
