"""Media and attachment syntax recognizers.

The same compiled patterns serve two callers:

* :func:`~notemark.converter.normalizer.normalize_markdown` removes every
  match before the body is segmented.
* :func:`has_media` lets upstream code decide whether attachment handling
  is needed without paying for a full compile.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from notemark.config import DEFAULT_ATTACHMENT_EXTENSIONS

MEDIA_TAGS: tuple[str, ...] = (
    "img", "video", "audio", "iframe", "embed",
    "object", "track", "source", "picture",
)

# Tags whose paired form swallows the enclosed fallback content.
_PAIRED_MEDIA_TAGS: tuple[str, ...] = (
    "video", "audio", "iframe", "embed", "object", "picture",
)

# ![alt](url) and ![alt](url "title")
IMAGE_RE = re.compile(r"!\[[^\]\n]*\]\([^)\n]+\)")

# ![[note]] / ![[file.png|300]]
EMBED_RE = re.compile(r"!\[\[[^\]\n]+\]\]")

# <video ...>...</video>; an opening tag ending in "/>" is self-closing.
PAIRED_MEDIA_RE = re.compile(
    rf"<({'|'.join(_PAIRED_MEDIA_TAGS)})\b[^>]*(?<!/)>.*?</\1\s*>",
    re.IGNORECASE | re.DOTALL,
)

# Any leftover opening, closing or void media tag.
MEDIA_TAG_RE = re.compile(
    rf"</?(?:{'|'.join(MEDIA_TAGS)})\b[^>]*>",
    re.IGNORECASE,
)

SCRIPT_RE = re.compile(
    r"<(script|style)\b[^>]*>.*?</\1\s*>",
    re.IGNORECASE | re.DOTALL,
)


def _compile_attachment_re(extensions: Iterable[str]) -> re.Pattern[str]:
    # Longest first so "docx" wins over "doc".
    alternation = "|".join(
        re.escape(ext) for ext in sorted(extensions, key=lambda e: (-len(e), e))
    )
    return re.compile(
        rf"\[\[[^\]\n|]+\.(?:{alternation})(?:\|[^\]\n]*)?\]\]",
        re.IGNORECASE,
    )


_DEFAULT_ATTACHMENT_RE = _compile_attachment_re(DEFAULT_ATTACHMENT_EXTENSIONS)


def attachment_pattern(extensions: Iterable[str] = DEFAULT_ATTACHMENT_EXTENSIONS) -> re.Pattern[str]:
    """Return the ``[[name.ext]]`` pattern for *extensions*.

    The default extension set uses a pattern compiled at import time;
    custom sets are compiled on demand.
    """
    extensions = frozenset(extensions)
    if extensions == DEFAULT_ATTACHMENT_EXTENSIONS:
        return _DEFAULT_ATTACHMENT_RE
    return _compile_attachment_re(extensions)


def has_media(
    content: object,
    attachment_extensions: Iterable[str] = DEFAULT_ATTACHMENT_EXTENSIONS,
) -> bool:
    """Return ``True`` if *content* contains image, attachment, embed or
    HTML media syntax.

    Works on raw (pre-normalization) markdown or HTML.  Non-string input
    is never media.

    Examples
    --------
    >>> has_media("See ![diagram](d.png)")
    True
    >>> has_media("[[meeting-notes]]")
    False
    """
    if not isinstance(content, str) or not content:
        return False
    return bool(
        IMAGE_RE.search(content)
        or EMBED_RE.search(content)
        or attachment_pattern(attachment_extensions).search(content)
        or MEDIA_TAG_RE.search(content)
    )
