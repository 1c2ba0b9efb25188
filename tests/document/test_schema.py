"""Unit tests for the canonical document models."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import pytest
from pydantic import ValidationError

from doc_recovery.document.schema import DocumentMetadata, HeadingBlock, Page, ParsedDocument, Table


class TestTable:

    def test_column_count_from_headers(self):
        assert Table(headers=["a", "b", "c"], rows=[["1"]]).column_count == 3

    def test_column_count_without_headers(self):
        assert Table(rows=[["1"], ["1", "2"]]).column_count == 2

    def test_not_ragged(self):
        assert Table(headers=["a", "b"], rows=[["1", "2"]]).is_ragged is False

    def test_ragged(self):
        assert Table(headers=["a", "b"], rows=[["1", "2", "3"]]).is_ragged is True


class TestPage:

    def test_counts_derived(self):
        page = Page(number=1, raw_text="two  words\n")
        assert page.word_count == 2
        assert page.char_count == 11

    def test_counts_ignore_input(self):
        page = Page(number=1, raw_text="one", word_count=99)
        assert page.word_count == 1

    def test_number_starts_at_one(self):
        with pytest.raises(ValidationError):
            Page(number=0)

    def test_counts_serialised(self):
        dumped = Page(number=1, raw_text="a b").model_dump()
        assert dumped["word_count"] == 2
        assert dumped["char_count"] == 3


class TestDocumentMetadata:

    def make_pages(self) -> list[Page]:
        return [
            Page(number=1, raw_text="# Intro\nbody", headings=["# Intro"], blocks=[HeadingBlock(level=1, text="Intro")]),
            Page(number=2, raw_text="x y z", tables=[Table(headers=["a"])]),
        ]

    def test_totals(self):
        meta = DocumentMetadata.from_pages(self.make_pages())
        assert (meta.total_pages, meta.total_words, meta.total_characters) == (2, 6, 17)
        assert (meta.total_headings, meta.total_tables) == (1, 1)

    def test_title_from_heading(self):
        assert DocumentMetadata.from_pages(self.make_pages(), file_name="doc.pdf").title == "Intro"

    def test_file_type_lowercased(self):
        assert DocumentMetadata.from_pages([], file_name="Report.PDF").file_type == "pdf"

    def test_no_extension(self):
        meta = DocumentMetadata.from_pages([], file_name="README")
        assert meta.file_type is None
        assert meta.title == "README"


class TestParsedDocument:

    def test_tables_flattened_in_page_order(self):
        first, second = Table(headers=["a"]), Table(headers=["b"])
        doc = ParsedDocument(pages=[Page(number=1, tables=[first]), Page(number=2, tables=[second])])
        assert [table.headers for table in doc.tables] == [["a"], ["b"]]

    def test_page_numbers_must_be_sequential(self):
        with pytest.raises(ValidationError):
            ParsedDocument(pages=[Page(number=1), Page(number=3)])

    def test_page_numbers_start_at_one(self):
        with pytest.raises(ValidationError):
            ParsedDocument(pages=[Page(number=2)])
