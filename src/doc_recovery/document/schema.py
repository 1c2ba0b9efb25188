"""Pydantic models for the canonical document: tables, pages, metadata.

Every source format is normalised into these.  ``Page`` keeps its content both
as flat lists (``headings``, ``paragraphs``, ...) and as an ordered ``blocks``
sequence so Markdown can be written back in source order.  Word and character
counts are always derived from ``raw_text``, and ``DocumentMetadata`` is only
ever rebuilt from the page sequence.
"""

from pathlib import PurePath
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, computed_field, model_validator

from doc_recovery.structure.schema import ListItem


class Table(BaseModel):
    """A recovered table.

    ``headers`` is None when the source gave no header row.  Rows whose width
    differs from the header are kept as-is; ``is_ragged`` reports them.
    ``title`` is the sheet name for spreadsheet tables.
    """

    headers: list[str] | None = None
    rows: list[list[str]] = Field(default_factory=list)
    title: str | None = None

    @property
    def column_count(self) -> int:
        """Width of the header row, or of the widest body row without one."""
        if self.headers is not None:
            return len(self.headers)
        return max((len(row) for row in self.rows), default=0)

    @property
    def is_ragged(self) -> bool:
        """Return True if any body row differs in width from the header."""
        if self.headers is None:
            return False
        return any(len(row) != len(self.headers) for row in self.rows)


# ── Page blocks ──────────────────────────────────────────────────────────────


class HeadingBlock(BaseModel):
    kind: Literal["heading"] = "heading"
    level: int = Field(ge=1, le=6)
    text: str


class ParagraphBlock(BaseModel):
    kind: Literal["paragraph"] = "paragraph"
    text: str


class ListBlock(BaseModel):
    """Immediately adjacent list items of the same kind (ordered or not)."""

    kind: Literal["list"] = "list"
    ordered: bool = False
    items: list[ListItem] = Field(default_factory=list)


class TableBlock(BaseModel):
    kind: Literal["table"] = "table"
    table: Table


class CodeBlock(BaseModel):
    kind: Literal["code"] = "code"
    lines: list[str] = Field(default_factory=list)


Block = Annotated[
    Union[HeadingBlock, ParagraphBlock, ListBlock, TableBlock, CodeBlock],
    Field(discriminator="kind"),
]


# ── Page / document ──────────────────────────────────────────────────────────


class Page(BaseModel):  # pylint: disable=too-many-instance-attributes
    """One page of the canonical document, in source order."""

    number: int = Field(ge=1)
    raw_text: str = ""
    markdown_content: str = ""
    headings: list[str] = Field(default_factory=list)
    paragraphs: list[str] = Field(default_factory=list)
    lists: list[str] = Field(default_factory=list)
    tables: list[Table] = Field(default_factory=list)
    code_blocks: list[str] = Field(default_factory=list)
    blocks: list[Block] = Field(default_factory=list)

    @computed_field
    @property
    def word_count(self) -> int:
        """Whitespace-separated token count of ``raw_text``."""
        return len(self.raw_text.split())

    @computed_field
    @property
    def char_count(self) -> int:
        """Length of ``raw_text``."""
        return len(self.raw_text)


class DocumentMetadata(BaseModel):  # pylint: disable=too-many-instance-attributes
    """Descriptive fields and totals aggregated from the page sequence."""

    file_name: str | None = None
    file_type: str | None = None
    title: str | None = None
    author: str | None = None
    charset: str | None = None
    total_pages: int = 0
    total_words: int = 0
    total_characters: int = 0
    total_headings: int = 0
    total_paragraphs: int = 0
    total_lists: int = 0
    total_tables: int = 0

    @classmethod
    def from_pages(  # pylint: disable=too-many-arguments
        cls,
        pages: list[Page],
        *,
        file_name: str | None = None,
        title: str | None = None,
        author: str | None = None,
        charset: str | None = None,
    ) -> "DocumentMetadata":
        """Aggregate metadata from assembled pages.

        Title precedence: an explicit title from the container, then the first
        level-1 heading, then the filename without its extension.
        """
        return cls(
            file_name=file_name,
            file_type=_file_type(file_name),
            title=title or _first_title_heading(pages) or _title_from_filename(file_name),
            author=author,
            charset=charset,
            total_pages=len(pages),
            total_words=sum(page.word_count for page in pages),
            total_characters=sum(page.char_count for page in pages),
            total_headings=sum(len(page.headings) for page in pages),
            total_paragraphs=sum(len(page.paragraphs) for page in pages),
            total_lists=sum(len(page.lists) for page in pages),
            total_tables=sum(len(page.tables) for page in pages),
        )


def _first_title_heading(pages: list[Page]) -> str | None:
    """Text of the first level-1 heading in the document, if any."""
    for page in pages:
        for block in page.blocks:
            if isinstance(block, HeadingBlock) and block.level == 1:
                return block.text
    return None


def _file_type(file_name: str | None) -> str | None:
    """'report.PDF' -> 'pdf'; None when there is no extension."""
    if not file_name:
        return None
    return PurePath(file_name).suffix.lstrip(".").lower() or None


def _title_from_filename(file_name: str | None) -> str | None:
    """'reports/q3-summary.pdf' -> 'q3-summary'."""
    if not file_name:
        return None
    return PurePath(file_name).stem or None


class ParsedDocument(BaseModel):
    """Top-level result: pages, flattened tables, metadata and Markdown."""

    pages: list[Page] = Field(default_factory=list)
    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata)
    markdown_content: str = ""

    @computed_field
    @property
    def tables(self) -> list[Table]:
        """Every page's tables, in page order."""
        return [table for page in self.pages for table in page.tables]

    @model_validator(mode="after")
    def validate_page_numbers(self) -> "ParsedDocument":
        """Ensure pages are numbered 1, 2, 3, ... in order."""
        for expected, page in enumerate(self.pages, start=1):
            if page.number != expected:
                raise ValueError(f"Page at position {expected} is numbered {page.number}")
        return self
