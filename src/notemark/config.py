"""Compiler configuration for notemark.

:class:`CompilerConfig` is a dataclass that captures every tuneable knob of
the pipeline.  Instances are passed to :class:`~notemark.converter.compiler.MarkdownCompiler`.

The module-level constant :data:`DEFAULT_ATTACHMENT_EXTENSIONS` defines the
binary file extensions whose ``[[name.ext]]`` wiki links are stripped by the
normalizer and detected by :func:`~notemark.converter.media.has_media`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from notemark.errors import NotemarkConfigError

# ---------------------------------------------------------------------------
# Attachment extension constants
# ---------------------------------------------------------------------------

DEFAULT_ATTACHMENT_EXTENSIONS: frozenset[str] = frozenset({
    # documents
    "pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx",
    # images
    "jpg", "jpeg", "png", "gif", "bmp", "svg", "webp",
    # video
    "mp4", "avi", "mov", "wmv", "flv", "mkv", "webm",
    # audio
    "mp3", "wav", "flac", "aac", "ogg", "m4a",
    # archives and executables
    "zip", "rar", "7z", "tar", "gz", "exe",
})
"""Extensions treated as binary attachments in ``[[name.ext]]`` links."""

DEFAULT_MAX_NESTING_DEPTH = 8
"""Nested list levels kept before deeper markers are flattened into text."""

MAX_NESTING_DEPTH_LIMIT = 64
"""Upper bound accepted for ``max_nesting_depth`` (keeps recursion shallow)."""


# ---------------------------------------------------------------------------
# Configuration dataclass
# ---------------------------------------------------------------------------

@dataclass
class CompilerConfig:
    """Complete configuration for a :class:`MarkdownCompiler`.

    Every parameter has a sensible default.

    Parameters
    ----------
    strip_title:
        Remove a leading level-1 heading during normalization.  Off by
        default: the render path receives note bodies whose title the
        caller tracks separately.
    strip_media:
        Remove image, attachment, embed and HTML media syntax before
        segmenting.
    strip_scripts:
        Remove ``<script>`` and ``<style>`` elements before segmenting.
    attachment_extensions:
        Lower-case extensions (without the dot) treated as binary
        attachments.
    max_nesting_depth:
        Number of nested list levels below a top-level list that are kept.
        Deeper markers are flattened into the enclosing item's text and a
        ``NESTING_DEPTH_EXCEEDED`` warning is recorded.
    metrics:
        Optional :class:`~notemark.observability.MetricsHook`.  Defaults to
        a no-op hook.
    debug_dump_ast:
        Write the document tree as JSON to *stderr* on each compile.
    """

    # ── Normalizer ──────────────────────────────────────────────────────
    strip_title: bool = False

    strip_media: bool = True

    strip_scripts: bool = True

    attachment_extensions: frozenset[str] = field(
        default_factory=lambda: DEFAULT_ATTACHMENT_EXTENSIONS,
    )

    # ── Segmenter ───────────────────────────────────────────────────────
    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_ast: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not 1 <= self.max_nesting_depth <= MAX_NESTING_DEPTH_LIMIT:
            raise NotemarkConfigError(
                f"max_nesting_depth must be between 1 and {MAX_NESTING_DEPTH_LIMIT}, got {self.max_nesting_depth}",
                context={"field": "max_nesting_depth", "value": self.max_nesting_depth},
            )
        if isinstance(self.attachment_extensions, str):
            raise NotemarkConfigError(
                "attachment_extensions must be a collection of extensions, not a string",
                context={"field": "attachment_extensions", "value": self.attachment_extensions},
            )
        extensions = frozenset(
            ext.strip().lstrip(".").lower() for ext in self.attachment_extensions
        ) - {""}
        if not extensions:
            raise NotemarkConfigError(
                "attachment_extensions must not be empty",
                context={"field": "attachment_extensions", "value": sorted(self.attachment_extensions)},
            )
        self.attachment_extensions = extensions
