"""Normalize raw author-supplied markdown before segmentation.

:func:`normalize_markdown` performs, in order:

1. Byte-order mark removal and line-ending normalization (CRLF / CR to LF).
2. Frontmatter split -- a leading ``---`` block passes through untouched.
3. Title removal -- a level-1 heading on the first non-blank line of the
   body is dropped (the caller tracks the title separately, see
   :func:`extract_title`).
4. Media removal -- image, attachment, embed and HTML media syntax.
5. Script removal -- ``<script>`` / ``<style>`` elements.
6. Blank-line collapse -- three or more newlines become exactly two.

Everything else in the body is left verbatim.

:func:`normalize_parts` runs the same passes but returns the frontmatter
and body separately; a ``---`` pair that only reaches the top of the body
after cleanup is never taken for frontmatter.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from notemark.config import DEFAULT_ATTACHMENT_EXTENSIONS
from notemark.converter.media import (
    EMBED_RE,
    IMAGE_RE,
    MEDIA_TAG_RE,
    PAIRED_MEDIA_RE,
    SCRIPT_RE,
    attachment_pattern,
)

_FRONTMATTER_FENCE = "---"

_TITLE_RE = re.compile(r"^[ \t]*#[ \t]+\S")

_FIRST_H1_RE = re.compile(r"^[ \t]*#[ \t]+(.+)$", re.MULTILINE)

# Three or more newlines, possibly with whitespace-only lines in between.
_EXCESS_BLANK_RE = re.compile(r"\n[ \t]*\n(?:[ \t]*\n)+")

_TITLE_MARKUP_RE = re.compile(r"[*_`~]")
_HTML_TAG_RE = re.compile(r"<[^>]*>")

UNTITLED = "Untitled Note"


def _normalize_text(text: str) -> str:
    return text.removeprefix("\ufeff").replace("\r\n", "\n").replace("\r", "\n")


def split_frontmatter(text: str) -> tuple[str | None, str]:
    """Split a leading ``---`` frontmatter block from the body.

    Returns ``(frontmatter, body)``.  *frontmatter* includes both fence
    lines and no trailing newline; it is ``None`` when the text does not
    start with a fence or the fence is never closed.
    """
    lines = text.split("\n")
    if lines[0].rstrip() != _FRONTMATTER_FENCE:
        return None, text
    for index in range(1, len(lines)):
        if lines[index].rstrip() == _FRONTMATTER_FENCE:
            return "\n".join(lines[:index + 1]), "\n".join(lines[index + 1:])
    return None, text


def _strip_leading_title(body: str) -> str:
    lines = body.split("\n")
    for index, line in enumerate(lines):
        if not line.strip():
            continue
        if _TITLE_RE.match(line):
            del lines[index]
        break
    return "\n".join(lines)


def _strip_media(body: str, attachment_extensions: Iterable[str]) -> str:
    body = IMAGE_RE.sub("", body)
    body = EMBED_RE.sub("", body)
    body = attachment_pattern(attachment_extensions).sub("", body)
    body = PAIRED_MEDIA_RE.sub("", body)
    return MEDIA_TAG_RE.sub("", body)


def normalize_parts(
    content: object,
    *,
    strip_title: bool = True,
    strip_media: bool = True,
    strip_scripts: bool = True,
    attachment_extensions: Iterable[str] = DEFAULT_ATTACHMENT_EXTENSIONS,
) -> tuple[str | None, str]:
    """Normalize raw markdown and return ``(frontmatter, body)``.

    The frontmatter is split once, from the raw text, before any other
    pass runs; the remaining passes only ever see the body.  Options are
    the same as for :func:`normalize_markdown`.
    """
    if not isinstance(content, str) or not content.strip():
        return None, ""

    frontmatter, body = split_frontmatter(_normalize_text(content))

    if strip_title:
        body = _strip_leading_title(body)
    if strip_media:
        body = _strip_media(body, attachment_extensions)
    if strip_scripts:
        body = SCRIPT_RE.sub("", body)

    return frontmatter, _EXCESS_BLANK_RE.sub("\n\n", body).strip()


def normalize_markdown(
    content: object,
    *,
    strip_title: bool = True,
    strip_media: bool = True,
    strip_scripts: bool = True,
    attachment_extensions: Iterable[str] = DEFAULT_ATTACHMENT_EXTENSIONS,
) -> str:
    """Normalize raw markdown into a clean note body.

    Parameters
    ----------
    content:
        Raw markdown.  Anything that is not a non-blank string normalizes
        to ``""``.
    strip_title:
        Drop a level-1 heading on the first non-blank line of the body.
    strip_media:
        Remove ``![alt](url)``, ``![[embed]]``, ``[[file.ext]]`` attachment
        links and HTML media tags.
    strip_scripts:
        Remove ``<script>`` and ``<style>`` elements with their content.
    attachment_extensions:
        Extensions treated as binary attachments.

    Returns
    -------
    str
        The normalized markdown.  A frontmatter block, when present, is
        kept verbatim and separated from the body by one blank line.

    Examples
    --------
    >>> normalize_markdown("# Title\\n\\n![img](x.png)\\n\\nBody text")
    'Body text'
    """
    frontmatter, body = normalize_parts(
        content,
        strip_title=strip_title,
        strip_media=strip_media,
        strip_scripts=strip_scripts,
        attachment_extensions=attachment_extensions,
    )
    if frontmatter is None:
        return body
    if not body:
        return frontmatter
    return f"{frontmatter}\n\n{body}"


def extract_title(content: object, fallback: str = "") -> str:
    """Derive a note title.

    Uses the first level-1 heading of the body with emphasis markers and
    HTML tags removed.  Falls back to *fallback* (typically the file's
    base name) with dashes and underscores turned into spaces, then to
    ``"Untitled Note"``.
    """
    if isinstance(content, str):
        _, body = split_frontmatter(_normalize_text(content))
        match = _FIRST_H1_RE.search(body)
        if match:
            title = _TITLE_MARKUP_RE.sub("", match.group(1))
            title = _HTML_TAG_RE.sub("", title).strip()
            if title:
                return title

    title = re.sub(r"[-_]", " ", fallback or "")
    title = re.sub(r"\s+", " ", title).strip()
    return title or UNTITLED
