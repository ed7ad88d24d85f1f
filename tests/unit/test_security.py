"""Security-focused tests for the HTML output.

Covers escaping of author text in every position it can reach, harmful
link protocols, script / style removal and media stripping ahead of
rendering.
"""

from __future__ import annotations

import pytest

from notemark.config import CompilerConfig
from notemark.converter.compiler import MarkdownCompiler, markdown_to_html

_PAYLOADS = [
    "<script>alert(1)</script>",
    '<img src=x onerror="alert(1)">',
    "<svg onload=alert(1)>",
    '"><b>injected</b>',
    "</p><p>",
]


# =========================================================================
# Escaping in every text position
# =========================================================================


class TestEscaping:
    @pytest.mark.parametrize("payload", _PAYLOADS)
    @pytest.mark.parametrize("template", [
        "{}",
        "# {}",
        "> {}",
        "- {}",
        "1. {}",
        "- [ ] {}",
        "**{}**",
        "*{}*",
        "```\n{}\n```",
    ])
    def test_no_raw_markup_from_author_text(self, template, payload):
        compiler = MarkdownCompiler(CompilerConfig(strip_scripts=False, strip_media=False))
        html = compiler.compile(template.format(payload)).html
        assert "<script" not in html
        assert "<img" not in html
        assert "<svg" not in html
        assert "<b>" not in html
        assert "</p><p>" not in html

    def test_backtick_code_span_escaped(self):
        assert markdown_to_html("`<b>`") == "<p><code>&lt;b&gt;</code></p>"

    def test_fence_language_escaped(self):
        html = markdown_to_html('```x"><script>\ny\n```')
        assert html == '<pre><code class="language-x&quot;&gt;&lt;script&gt;">y</code></pre>'

    def test_link_text_escaped(self):
        assert markdown_to_html("[<i>x</i>](https://a.b)") == (
            '<p><a href="https://a.b">&lt;i&gt;x&lt;/i&gt;</a></p>'
        )

    def test_link_href_cannot_break_attribute(self):
        html = markdown_to_html('[x](https://a.b/"onmouseover=alert)')
        assert 'href="https://a.b/&quot;onmouseover=alert"' in html


# =========================================================================
# Link protocols
# =========================================================================


class TestHarmfulLinks:
    @pytest.mark.parametrize("href", [
        "javascript:alert",
        "JAVASCRIPT:alert",
        "vbscript:x",
        "file:///etc/passwd",
        "data:text/html,x",
    ])
    def test_harmful_protocols_replaced(self, href):
        html = markdown_to_html(f"[click]({href})")
        assert html == '<p><a href="#harmful-link">click</a></p>'

    @pytest.mark.parametrize("href", [
        "https://example.com",
        "http://example.com/a?b=c",
        "mailto:someone@example.com",
        "/relative/path",
        "#anchor",
    ])
    def test_safe_protocols_kept(self, href):
        assert f'href="{href}"' in markdown_to_html(f"[x]({href})")


# =========================================================================
# Stripping before render
# =========================================================================


class TestStripping:
    def test_script_and_style_bodies_removed(self):
        html = markdown_to_html("a\n\n<script>steal()</script>\n\n<style>*{}</style>\n\nb")
        assert "steal" not in html
        assert "*{}" not in html
        assert html == "<p>a</p>\n<p>b</p>"

    def test_mixed_case_script_removed(self):
        assert "steal" not in markdown_to_html("<ScRiPt type='x'>steal()</sCrIpT>")

    def test_iframe_removed(self):
        assert markdown_to_html('x<iframe src="https://evil.example"></iframe>y') == "<p>xy</p>"
