"""Parse a block's raw text into an inline run.

A single left-to-right pass recognises:

* ``**bold**``
* ``*italic*`` (a lone ``*`` that is not part of ``**``)
* ```code```
* ``[text](url)``
* a hard line break: two or more spaces before a newline

The closing delimiter of a span is always the *next* occurrence of the
matching delimiter.  When there is none -- or the span would be empty --
the opening delimiter is kept as literal text and scanning continues right
after it; there is no backtracking.  Marks do not nest: the contents of a
span are opaque text.
"""

from __future__ import annotations

import re

from notemark.models import Bold, Code, HardBreak, InlineNode, InlineRun, Italic, Link, Text

# Characters that may open a span.  Everything else is plain text.
_OPENER_RE = re.compile(r"[*`\[]|(?<! ) {2,}\n")


def _match_delimited(text: str, pos: int, delimiter: str) -> tuple[str, int] | None:
    """Match ``<delimiter>content<delimiter>`` at *pos*.

    Returns ``(content, end)`` or ``None`` if unterminated or empty.
    """
    start = pos + len(delimiter)
    close = text.find(delimiter, start)
    if close <= start:
        return None
    return text[start:close], close + len(delimiter)


def _match_link(text: str, pos: int) -> tuple[Link, int] | None:
    """Match ``[text](href)`` at *pos*."""
    close_bracket = text.find("]", pos + 1)
    if close_bracket <= pos + 1 or not text.startswith("(", close_bracket + 1):
        return None
    close_paren = text.find(")", close_bracket + 2)
    if close_paren <= close_bracket + 2:
        return None
    label = text[pos + 1:close_bracket]
    href = text[close_bracket + 2:close_paren].strip()
    if not href:
        return None
    return Link(text=label, href=href), close_paren + 1


def parse_inline(text: str) -> InlineRun:
    """Convert *text* into a tuple of inline nodes.

    Parameters
    ----------
    text:
        Raw text of one block (heading text, paragraph, list item ...).

    Returns
    -------
    InlineRun
        Ordered inline nodes.  Adjacent literal characters are merged into
        a single :class:`~notemark.models.Text`.  Empty input gives ``()``.

    Examples
    --------
    >>> parse_inline("a **b** c")
    (Text(value='a '), Bold(value='b'), Text(value=' c'))
    """
    nodes: list[InlineNode] = []
    pending: list[str] = []
    pos = 0
    length = len(text)

    def flush() -> None:
        if pending:
            nodes.append(Text("".join(pending)))
            pending.clear()

    while pos < length:
        opener = _OPENER_RE.search(text, pos)
        if opener is None:
            pending.append(text[pos:])
            break
        if opener.start() > pos:
            pending.append(text[pos:opener.start()])
            pos = opener.start()

        char = text[pos]
        matched: tuple[InlineNode, int] | None = None

        if char == " ":
            matched = HardBreak(), opener.end()
        elif text.startswith("**", pos):
            span = _match_delimited(text, pos, "**")
            if span is None:
                # Unmatched "**" is literal as a whole; no italic retry.
                pending.append("**")
                pos += 2
                continue
            matched = Bold(span[0]), span[1]
        elif char == "*":
            span = _match_delimited(text, pos, "*")
            if span is not None:
                matched = Italic(span[0]), span[1]
        elif char == "`":
            span = _match_delimited(text, pos, "`")
            if span is not None:
                matched = Code(span[0]), span[1]
        else:
            matched = _match_link(text, pos)

        if matched is None:
            pending.append(char)
            pos += 1
            continue

        flush()
        nodes.append(matched[0])
        pos = matched[1]

    flush()
    return tuple(nodes)


def inline_plain_text(run: InlineRun) -> str:
    """Concatenate the visible text of *run* (hard breaks become ``\\n``)."""
    parts: list[str] = []
    for node in run:
        if isinstance(node, Link):
            parts.append(node.text)
        elif isinstance(node, HardBreak):
            parts.append("\n")
        else:
            parts.append(node.value)
    return "".join(parts)
