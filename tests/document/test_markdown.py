"""Unit tests for Markdown rendering."""

# pylint: disable=missing-class-docstring,missing-function-docstring

from doc_recovery.document.markdown import render_block, render_document, render_list, render_page, render_table
from doc_recovery.document.schema import CodeBlock, HeadingBlock, ListBlock, Page, ParagraphBlock, Table, TableBlock
from doc_recovery.structure.schema import ListItem


class TestRenderTable:

    def test_header_separator_rows(self):
        table = Table(headers=["A", "B"], rows=[["1", "2"]])
        assert render_table(table) == "| A | B |\n|---|---|\n| 1 | 2 |"

    def test_headerless_gets_empty_header(self):
        table = Table(rows=[["1", "2"]])
        assert render_table(table) == "|  |  |\n|---|---|\n| 1 | 2 |"

    def test_title_as_bold_line(self):
        table = Table(headers=["A"], rows=[], title="Totals")
        assert render_table(table) == "**Totals**\n\n| A |\n|---|"

    def test_newlines_in_cells_flattened(self):
        table = Table(headers=["Note"], rows=[["line one\nline two"]])
        assert render_table(table).splitlines()[-1] == "| line one line two |"


class TestRenderList:

    def test_unordered(self):
        block = ListBlock(items=[ListItem(content="a"), ListItem(content="b", depth=1)])
        assert render_list(block) == "- a\n  - b"

    def test_ordered_keeps_markers(self):
        block = ListBlock(ordered=True, items=[ListItem(ordered=True, marker="1.", content="One"), ListItem(ordered=True, marker="2.", content="Two")])
        assert render_list(block) == "1. One\n2. Two"

    def test_unordered_glyphs_normalised(self):
        block = ListBlock(items=[ListItem(marker="•", content="dot")])
        assert render_list(block) == "- dot"


class TestRenderBlock:

    def test_heading(self):
        assert render_block(HeadingBlock(level=2, text="Scope")) == "## Scope"

    def test_paragraph(self):
        assert render_block(ParagraphBlock(text="Plain prose.")) == "Plain prose."

    def test_code_indented(self):
        assert render_block(CodeBlock(lines=["x = 1", "  y"])) == "    x = 1\n      y"


class TestRenderPage:

    def test_blocks_separated_by_blank_lines(self):
        blocks = [HeadingBlock(level=1, text="Title"), ParagraphBlock(text="Hello world.")]
        assert render_page(blocks, "ignored") == "# Title\n\nHello world."

    def test_table_title_shown_as_heading_not_repeated(self):
        blocks = [HeadingBlock(level=1, text="Costs"), TableBlock(table=Table(headers=["Item"], rows=[["Rent"]], title="Costs"))]
        assert render_page(blocks, "") == "# Costs\n\n| Item |\n|---|\n| Rent |"

    def test_table_title_kept_without_matching_heading(self):
        blocks = [HeadingBlock(level=1, text="Budget"), TableBlock(table=Table(headers=["Item"], rows=[], title="Costs"))]
        assert render_page(blocks, "") == "# Budget\n\n**Costs**\n\n| Item |\n|---|"

    def test_raw_text_fallback(self):
        assert render_page([], "just raw\ntext") == "just raw\ntext"


class TestRenderDocument:

    def test_single_page_has_no_separator(self):
        assert render_document([Page(number=1, markdown_content="# One")]) == "# One"

    def test_pages_separated_by_rule(self):
        pages = [Page(number=1, markdown_content="# One"), Page(number=2, markdown_content="# Two")]
        assert render_document(pages) == "# One\n\n---\n\n# Two"
