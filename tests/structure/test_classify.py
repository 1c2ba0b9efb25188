"""Unit tests for line and grid classification.

Tests cover:
  - classify: rule precedence for single lines
  - classify_lines / classify_text: block-level table claiming, look-ahead, page breaks
  - classify_grid: header row, empty-row skipping, table title
  - Markdown sources: explicit headings only, setext underlines
"""

# pylint: disable=missing-class-docstring,missing-function-docstring

from doc_recovery.structure.classify import LineContext, SourceKind, classify, classify_grid, classify_lines, classify_text
from doc_recovery.structure.schema import Blank, CodeLine, Heading, ListItem, PageBreak, ParagraphLine, TableRow


def kinds(lines) -> list[str]:
    """Extract the role name of each classified line."""
    return [line.kind for line in lines]


# ===========================================================================
# classify tests
# ===========================================================================


class TestClassifyPrecedence:

    def test_blank(self):
        assert isinstance(classify("   "), Blank)

    def test_atx_heading(self):
        line = classify("# Title")
        assert isinstance(line, Heading)
        assert (line.level, line.content) == (1, "Title")

    def test_uppercase_heading(self):
        line = classify("CHAPTER ONE", LineContext(next="Body"))
        assert isinstance(line, Heading)
        assert line.level == 2

    def test_blank_follow_heading(self):
        line = classify("Introduction", LineContext(next=""))
        assert isinstance(line, Heading)
        assert line.level == 3

    def test_cjk_heading_beats_list(self):
        line = classify("1. 项目介绍")
        assert isinstance(line, Heading)
        assert line.level == 3

    def test_latin_numbered_line_is_list(self):
        line = classify("1. Introduction to the topic", LineContext(next=""))
        assert isinstance(line, ListItem)
        assert line.ordered is True

    def test_uppercase_bullet_is_heading(self):
        line = classify("- NOTE THIS")
        assert isinstance(line, Heading)
        assert line.content == "- NOTE THIS"

    def test_bullet_before_blank_is_list(self):
        assert isinstance(classify("- short item", LineContext(next="")), ListItem)

    def test_indented_comment_is_code(self):
        line = classify("    # not a heading")
        assert isinstance(line, CodeLine)
        assert line.code == "# not a heading"

    def test_uppercase_code_is_heading(self):
        assert isinstance(classify("    SELECT NAME FROM USERS"), Heading)

    def test_code_before_blank_is_code(self):
        assert isinstance(classify("    x = compute()", LineContext(next="")), CodeLine)

    def test_paragraph(self):
        line = classify("  Some running text.  ")
        assert isinstance(line, ParagraphLine)
        assert line.content == "Some running text."
        assert line.text == "  Some running text.  "

    def test_grid_row(self):
        line = classify(["a", " b "], LineContext(source=SourceKind.GRID))
        assert isinstance(line, TableRow)
        assert line.cells == ("a", "b")

    def test_grid_empty_row(self):
        assert isinstance(classify(["", " "], LineContext(source=SourceKind.GRID)), Blank)


# ===========================================================================
# classify_lines / classify_text tests
# ===========================================================================


class TestClassifyText:

    def test_chapter_scenario(self):
        lines = classify_text("CHAPTER ONE\n\nBody text here.\n")
        assert kinds(lines) == ["heading", "blank", "paragraph_line"]
        assert lines[0].level == 2

    def test_trailing_newline_adds_no_line(self):
        assert len(classify_text("one line of text\n")) == 1

    def test_form_feed_page_break(self):
        lines = classify_text("Page one text.\fPage two text.")
        assert kinds(lines) == ["paragraph_line", "page_break", "paragraph_line"]
        assert isinstance(lines[1], PageBreak)

    def test_trailing_form_feed_adds_no_page(self):
        lines = classify_text("Some paragraph of text.\f")
        assert kinds(lines) == ["paragraph_line"]

    def test_form_feed_after_every_page(self):
        lines = classify_text("Page one text.\fPage two text.\f\n")
        assert kinds(lines) == ["paragraph_line", "page_break", "paragraph_line"]

    def test_blank_page_between_form_feeds_kept(self):
        lines = classify_text("Page one text.\f\fPage three text.")
        assert kinds(lines) == ["paragraph_line", "page_break", "page_break", "paragraph_line"]

    def test_pipe_table_claimed(self):
        lines = classify_lines(["Intro text here.", "| A | B |", "|---|---|", "| 1 | 2 |", "After the table."])
        assert kinds(lines) == ["paragraph_line", "table_row", "table_row", "table_row", "paragraph_line"]
        assert lines[1].header is True
        assert lines[2].separator is True
        assert lines[3].cells == ("1", "2")

    def test_malformed_pipe_block_falls_through(self):
        lines = classify_lines(["| a | b |", "| c | d |"])
        assert kinds(lines) == ["paragraph_line", "paragraph_line"]

    def test_pipe_line_before_blank_is_not_heading(self):
        lines = classify_lines(["| a | b |", "", "text"])
        assert isinstance(lines[0], ParagraphLine)

    def test_list_item_before_blank_stays_list(self):
        lines = classify_lines(["- first", "- second", "", "Closing paragraph text."])
        assert kinds(lines) == ["list_item", "list_item", "blank", "paragraph_line"]


# ===========================================================================
# classify_grid tests
# ===========================================================================


class TestClassifyGrid:

    def test_first_row_is_header(self):
        lines = classify_grid([["Name", "Age"], ["Ann", "30"]])
        assert [line.header for line in lines] == [True, False]

    def test_leading_empty_rows_skipped(self):
        lines = classify_grid([["", ""], ["Name", "Age"], ["Ann", "30"]])
        assert lines[0].cells == ("Name", "Age")
        assert lines[0].header is True

    def test_empty_row_inside_table_skipped(self):
        lines = classify_grid([["Name", "Age"], ["", ""], ["Ann", "30"]])
        assert len(lines) == 2
        assert all(isinstance(line, TableRow) for line in lines)

    def test_no_header(self):
        lines = classify_grid([["a", "b"], ["c", "d"]], has_header=False)
        assert [line.header for line in lines] == [False, False]

    def test_none_cells_treated_as_empty(self):
        lines = classify_grid([["x", None]])
        assert lines[0].cells == ("x", "")

    def test_title_on_first_row_only(self):
        lines = classify_grid([["", ""], ["Item", "Amount"], ["Rent", "3"]], title="Costs")
        assert [line.title for line in lines] == ["Costs", None]


# ===========================================================================
# Markdown source tests
# ===========================================================================


def classify_markdown(text: str):
    return classify_text(text, SourceKind.MARKDOWN)


class TestClassifyMarkdown:

    def test_atx_heading(self):
        lines = classify_markdown("## Scope\n")
        assert isinstance(lines[0], Heading)
        assert lines[0].level == 2

    def test_setext_headings(self):
        lines = classify_markdown("Overview\n========\n\nDetails\n-------\n")
        assert kinds(lines) == ["heading", "blank", "blank", "heading", "blank"]
        assert [lines[0].level, lines[3].level] == [1, 2]
        assert lines[3].content == "Details"

    def test_thematic_break_after_blank_is_not_underline(self):
        lines = classify_markdown("Closing remarks here.\n\n---\n\nNext page text.")
        assert isinstance(lines[0], ParagraphLine)
        assert isinstance(lines[2], ParagraphLine)

    def test_intro_line_before_blank_stays_paragraph(self):
        lines = classify_markdown("The following items are needed:\n\n- alpha\n- beta")
        assert kinds(lines) == ["paragraph_line", "blank", "list_item", "list_item"]

    def test_short_unpunctuated_paragraph_stays_paragraph(self):
        lines = classify_markdown("alpha beta gamma delta epsilon\n\n- item one")
        assert isinstance(lines[0], ParagraphLine)

    def test_all_caps_line_stays_paragraph(self):
        lines = classify_markdown("SCOPE AND GOALS\n\nBody text here.")
        assert isinstance(lines[0], ParagraphLine)

    def test_uppercase_bullet_is_list(self):
        assert isinstance(classify_markdown("- NOTE THIS")[0], ListItem)

    def test_cjk_heading_still_recognised(self):
        lines = classify_markdown("第一章 总则\n\n正文内容。")
        assert isinstance(lines[0], Heading)
        assert lines[0].level == 1

    def test_underline_uses_previous_line(self):
        context = LineContext(previous="Overview", next="", source=SourceKind.MARKDOWN)
        assert isinstance(classify("========", context), Blank)
        context = LineContext(previous="", next="", source=SourceKind.MARKDOWN)
        assert isinstance(classify("========", context), ParagraphLine)
