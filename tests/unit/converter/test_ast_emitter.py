"""Tests for the document tree builder and its two JSON serialisations."""

import json
import typing

import pytest

from notemark.converter.ast_emitter import (
    _BLOCK_SERIALIZERS,
    _PM_BUILDERS,
    build_document,
    document_to_dict,
    document_to_prosemirror,
)
from notemark.converter.compiler import markdown_to_document
from notemark.models import (
    BlockNode,
    Bold,
    CodeBlock,
    Document,
    Heading,
    Paragraph,
    Text,
)

# =========================================================================
# build_document
# =========================================================================


class TestBuildDocument:
    def test_empty_blocks_give_empty_paragraph(self):
        assert build_document([]) == Document(blocks=(Paragraph(),))

    def test_blocks_kept_in_order(self):
        blocks = [Heading(1, (Text("a"),)), Paragraph((Text("b"),))]
        document = build_document(iter(blocks))
        assert document.blocks == tuple(blocks)
        assert document.kind == "doc"

    def test_every_block_kind_has_a_serializer(self):
        assert set(_BLOCK_SERIALIZERS) == set(typing.get_args(BlockNode))


# =========================================================================
# Native dict
# =========================================================================


class TestDocumentToDict:
    def test_empty_document(self):
        assert document_to_dict(markdown_to_document("")) == {
            "kind": "doc",
            "blocks": [{"kind": "paragraph", "inline": []}],
        }

    def test_heading_and_paragraph(self):
        document = markdown_to_document("# Hello\n\nWorld")
        assert document_to_dict(document) == {
            "kind": "doc",
            "blocks": [
                {"kind": "heading", "level": 1, "inline": [{"kind": "text", "value": "Hello"}]},
                {"kind": "paragraph", "inline": [{"kind": "text", "value": "World"}]},
            ],
        }

    def test_inline_kinds(self):
        document = markdown_to_document("- *i* **b** `c` [l](u)  \n  x")
        inline = document_to_dict(document)["blocks"][0]["items"][0]["inline"]
        assert [node["kind"] for node in inline] == [
            "italic", "text", "bold", "text", "code", "text", "link", "hard_break", "text",
        ]
        assert inline[6] == {"kind": "link", "text": "l", "href": "u"}

    def test_code_block(self):
        document = markdown_to_document("```\n<raw>\n```")
        assert document_to_dict(document)["blocks"] == [
            {"kind": "code_block", "language": None, "text": "<raw>"},
        ]

    def test_task_list_with_nested_bullets(self):
        document = markdown_to_document("- [x] done\n  - detail")
        assert document_to_dict(document)["blocks"] == [{
            "kind": "task_list",
            "items": [{
                "inline": [{"kind": "text", "value": "done"}],
                "checked": True,
                "nested": {
                    "kind": "bullet_list",
                    "items": [{"inline": [{"kind": "text", "value": "detail"}], "nested": None}],
                },
            }],
        }]

    def test_blockquote(self):
        document = markdown_to_document("> q")
        assert document_to_dict(document)["blocks"] == [{
            "kind": "blockquote",
            "blocks": [{"kind": "paragraph", "inline": [{"kind": "text", "value": "q"}]}],
        }]

    def test_json_serialisable(self):
        document = markdown_to_document("1. a\n   - b\n\n> c\n\n```py\nx\n```")
        assert json.loads(json.dumps(document_to_dict(document)))["kind"] == "doc"


# =========================================================================
# ProseMirror JSON
# =========================================================================


class TestDocumentToProsemirror:
    def test_empty_document(self):
        assert document_to_prosemirror(markdown_to_document("")) == {
            "type": "doc",
            "content": [{"type": "paragraph"}],
        }

    def test_heading_and_paragraph(self):
        document = markdown_to_document("# Title\n\nParagraph text.")
        assert document_to_prosemirror(document) == {
            "type": "doc",
            "content": [
                {"type": "heading", "attrs": {"level": 1},
                 "content": [{"type": "text", "text": "Title"}]},
                {"type": "paragraph", "content": [{"type": "text", "text": "Paragraph text."}]},
            ],
        }

    def test_marks(self):
        document = markdown_to_document("This is *italic* and **bold** [x](https://a.b)")
        content = document_to_prosemirror(document)["content"][0]["content"]
        assert content[1] == {"type": "text", "text": "italic", "marks": [{"type": "italic"}]}
        assert content[3] == {"type": "text", "text": "bold", "marks": [{"type": "bold"}]}
        assert content[5] == {
            "type": "text", "text": "x",
            "marks": [{"type": "link", "attrs": {"href": "https://a.b"}}],
        }

    def test_hard_break(self):
        document = markdown_to_document("- a  \n  b")
        item = document_to_prosemirror(document)["content"][0]["content"][0]
        assert item["content"][0]["content"] == [
            {"type": "text", "text": "a"},
            {"type": "hardBreak"},
            {"type": "text", "text": "  b"},
        ]

    @pytest.mark.parametrize("language, attrs", [("python", {"language": "python"}), (None, {})])
    def test_code_block(self, language, attrs):
        document = Document(blocks=(CodeBlock(language=language, text="x = 1"),))
        assert document_to_prosemirror(document)["content"] == [
            {"type": "codeBlock", "attrs": attrs, "content": [{"type": "text", "text": "x = 1"}]},
        ]

    def test_task_list(self):
        document = markdown_to_document("- [ ] a\n- [x] b")
        (task_list,) = document_to_prosemirror(document)["content"]
        assert task_list["type"] == "taskList"
        assert [item["attrs"] for item in task_list["content"]] == [
            {"checked": False}, {"checked": True},
        ]

    def test_nested_list_follows_item_paragraph(self):
        document = markdown_to_document("1. a\n   - b")
        (ordered,) = document_to_prosemirror(document)["content"]
        item = ordered["content"][0]
        assert item["type"] == "listItem"
        assert [child["type"] for child in item["content"]] == ["paragraph", "bulletList"]

    def test_empty_item_has_bare_paragraph(self):
        document = markdown_to_document("- \n- b")
        first = document_to_prosemirror(document)["content"][0]["content"][0]
        assert first == {"type": "listItem", "content": [{"type": "paragraph"}]}

    def test_empty_text_nodes_omitted(self):
        document = Document(blocks=(Paragraph((Text(""), Bold("b"))),))
        assert document_to_prosemirror(document)["content"][0]["content"] == [
            {"type": "text", "text": "b", "marks": [{"type": "bold"}]},
        ]

    def test_every_block_kind_has_an_editor_node(self):
        assert set(_PM_BUILDERS) == set(typing.get_args(BlockNode))
