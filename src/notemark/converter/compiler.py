"""Full markdown compile pipeline.

:class:`MarkdownCompiler` runs the stages in order:

1. **Normalize** -- :func:`normalize_parts` with the configured options.
2. **Split** -- frontmatter comes off the raw input once, before any
   cleanup pass, and is returned untouched.
3. **Segment** -- :func:`segment_blocks` produces block nodes (inline runs
   are parsed per block).
4. **Emit** -- :func:`build_document` and :func:`render_html`.

The result is a :class:`CompileResult` containing the document tree, the
HTML fragment, the frontmatter and any non-fatal warnings.
"""

from __future__ import annotations

import json
import sys
import time

from notemark.config import CompilerConfig
from notemark.converter.ast_emitter import build_document, document_to_dict
from notemark.converter.html_emitter import render_html
from notemark.converter.normalizer import normalize_parts
from notemark.converter.segmenter import segment_blocks
from notemark.models import CompileResult, ConversionWarning, Document
from notemark.observability import NoopMetricsHook, get_logger

log = get_logger("notemark.compiler")


class MarkdownCompiler:
    """Compile note markdown into a document tree and an HTML fragment.

    Parameters
    ----------
    config:
        Compiler configuration.  Defaults to :class:`CompilerConfig()`.

    Examples
    --------
    >>> compiler = MarkdownCompiler()
    >>> result = compiler.compile("# Hello\\n\\nWorld")
    >>> result.html
    '<h1>Hello</h1>\\n<p>World</p>'
    """

    def __init__(self, config: CompilerConfig | None = None) -> None:
        self._config = config or CompilerConfig()
        self._metrics = self._config.metrics or NoopMetricsHook()

    def compile(self, markdown: object) -> CompileResult:
        """Run the full pipeline on *markdown*.

        Any input is accepted: ``None``, non-strings and blank strings
        compile to a single empty paragraph (``"<p></p>"``).
        """
        started = time.perf_counter()
        config = self._config

        frontmatter, body = normalize_parts(
            markdown,
            strip_title=config.strip_title,
            strip_media=config.strip_media,
            strip_scripts=config.strip_scripts,
            attachment_extensions=config.attachment_extensions,
        )

        warnings: list[ConversionWarning] = []
        blocks = segment_blocks(
            body, max_depth=config.max_nesting_depth, warnings=warnings,
        )
        document = build_document(blocks)

        if config.debug_dump_ast:
            print(
                "[notemark] Document tree:",
                json.dumps(document_to_dict(document), indent=2, ensure_ascii=False),
                file=sys.stderr,
            )

        html = render_html(document)
        duration_ms = (time.perf_counter() - started) * 1000
        self._report(document, warnings, duration_ms)

        return CompileResult(
            document=document,
            html=html,
            frontmatter=frontmatter,
            warnings=warnings,
        )

    def _report(
        self,
        document: Document,
        warnings: list[ConversionWarning],
        duration_ms: float,
    ) -> None:
        self._metrics.increment("notemark.compile_total")
        self._metrics.timing("notemark.compile_duration_ms", duration_ms)
        self._metrics.increment("notemark.blocks_emitted_total", len(document.blocks))
        for warning in warnings:
            self._metrics.increment(
                "notemark.conversion_warnings_total", tags={"code": warning.code},
            )
            log.warning(
                warning.message,
                extra={"extra_fields": {"op": "compile", "code": warning.code, **warning.context}},
            )
        log.debug(
            "compile complete",
            extra={
                "extra_fields": {
                    "op": "compile",
                    "blocks": len(document.blocks),
                    "warnings": len(warnings),
                    "duration_ms": round(duration_ms, 3),
                }
            },
        )


def markdown_to_document(markdown: object, config: CompilerConfig | None = None) -> Document:
    """Compile *markdown* and return only the document tree."""
    return MarkdownCompiler(config).compile(markdown).document


def markdown_to_html(markdown: object, config: CompilerConfig | None = None) -> str:
    """Compile *markdown* and return only the HTML fragment."""
    return MarkdownCompiler(config).compile(markdown).html
