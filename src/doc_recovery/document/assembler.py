"""Fold a ClassifiedLine stream into pages and a ParsedDocument.

The fold keeps one open element of each kind (paragraph accumulator, list,
table, code block) and closes them as the line roles change:

    ParagraphLine  -> append to the paragraph accumulator (space-joined)
    Blank          -> close everything
    Heading        -> close everything, emit '#' * level + ' ' + text
    ListItem       -> close paragraph/table/code; extend the open list if it
                      is the same kind (ordered vs unordered), else start one
    TableRow       -> close paragraph/list/code; extend the open table
    CodeLine       -> close paragraph/list/table; extend the open code block
    PageBreak      -> close everything and start a new page

Page boundaries come from PageBreak lines or, for naturally paginated
sources, are implied by the caller.  Unpaginated flat text is cut into
synthetic pages every ``synthetic_page_chunk_size`` structural elements.
"""

import logging
from collections.abc import Iterable

from doc_recovery.config import RecoveryConfig
from doc_recovery.document.markdown import render_document, render_heading, render_list, render_page
from doc_recovery.document.schema import (
    Block,
    CodeBlock,
    DocumentMetadata,
    HeadingBlock,
    ListBlock,
    Page,
    ParagraphBlock,
    ParsedDocument,
    Table,
    TableBlock,
)
from doc_recovery.structure.patterns import MIN_PARAGRAPH_LENGTH
from doc_recovery.structure.schema import Blank, ClassifiedLine, CodeLine, Heading, ListItem, PageBreak, ParagraphLine, TableRow

logger = logging.getLogger(__name__)


# ── Page builder ─────────────────────────────────────────────────────────────


class _PageBuilder:
    """Raw lines and finished blocks for the page currently being filled."""

    def __init__(self, number: int):
        self.number = number
        self.raw_lines: list[str] = []
        self.blocks: list[Block] = []

    def build(self) -> Page:
        """Freeze the collected lines and blocks into a Page."""
        raw_text = "\n".join(self.raw_lines)
        return Page(
            number=self.number,
            raw_text=raw_text,
            markdown_content=render_page(self.blocks, raw_text),
            headings=[render_heading(b.level, b.text) for b in self.blocks if isinstance(b, HeadingBlock)],
            paragraphs=[b.text for b in self.blocks if isinstance(b, ParagraphBlock)],
            lists=[render_list(b) for b in self.blocks if isinstance(b, ListBlock)],
            tables=[b.table for b in self.blocks if isinstance(b, TableBlock)],
            code_blocks=["\n".join(b.lines) for b in self.blocks if isinstance(b, CodeBlock)],
            blocks=self.blocks,
        )


# ── Assembler state ──────────────────────────────────────────────────────────


class _AssemblerState:  # pylint: disable=too-many-instance-attributes
    """Mutable state bag for the fold over classified lines."""

    def __init__(self, chunk_size: int | None):
        self.chunk_size = chunk_size
        self.pages: list[Page] = []
        self.page = _PageBuilder(1)

        # Raw lines seen since the last emitted block; they travel with it
        self.pending_raw: list[str] = []

        # Open elements
        self.paragraph: list[str] = []
        self.list_block: ListBlock | None = None
        self.table_rows: list[TableRow] = []
        self.code_lines: list[str] = []

    def emit(self, block: Block):
        """Attach a finished block to the current page, rolling over a synthetic page if full."""
        if self.chunk_size and len(self.page.blocks) >= self.chunk_size:
            self.close_page()
        self.page.raw_lines.extend(self.pending_raw)
        self.pending_raw = []
        self.page.blocks.append(block)

    def close_page(self):
        """Finish the current page and open the next one."""
        self.pages.append(self.page.build())
        self.page = _PageBuilder(self.page.number + 1)

    def flush_paragraph(self):
        """Emit the accumulated paragraph if it is long enough to count."""
        if not self.paragraph:
            return
        text = " ".join(self.paragraph)
        self.paragraph = []
        if len(text) > MIN_PARAGRAPH_LENGTH:
            self.emit(ParagraphBlock(text=text))

    def flush_list(self):
        if self.list_block is not None:
            self.emit(self.list_block)
            self.list_block = None

    def flush_table(self):
        """Build a Table from the open rows: header row, separator dropped, body rows."""
        if not self.table_rows:
            return
        rows = self.table_rows
        self.table_rows = []

        headers = list(rows[0].cells) if rows[0].header else None
        body = rows[1:] if rows[0].header else rows
        table = Table(headers=headers, rows=[list(row.cells) for row in body if not row.separator], title=rows[0].title)
        if table.is_ragged:
            logger.debug("Table with %d columns has rows of differing width", table.column_count)
        self.emit(TableBlock(table=table))

    def flush_code(self):
        if self.code_lines:
            self.emit(CodeBlock(lines=self.code_lines))
            self.code_lines = []

    def flush_all(self):
        self.flush_paragraph()
        self.flush_list()
        self.flush_table()
        self.flush_code()

    def finish(self) -> list[Page]:
        """Close every open element and the last page."""
        self.flush_all()
        self.page.raw_lines.extend(self.pending_raw)
        self.pending_raw = []
        self.pages.append(self.page.build())
        return self.pages


# ── Line handlers ────────────────────────────────────────────────────────────


def _handle_heading(state: _AssemblerState, line: Heading):
    state.flush_all()
    state.pending_raw.append(line.text)
    state.emit(HeadingBlock(level=line.level, text=line.content))


def _handle_list_item(state: _AssemblerState, line: ListItem):
    """Extend the open list, or start a new one if the kind changed."""
    state.flush_paragraph()
    state.flush_table()
    state.flush_code()
    if state.list_block is not None and state.list_block.ordered != line.ordered:
        state.flush_list()
    if state.list_block is None:
        state.list_block = ListBlock(ordered=line.ordered)
    state.list_block.items.append(line)
    state.pending_raw.append(line.text)


def _handle_table_row(state: _AssemblerState, line: TableRow):
    """Extend the open table; a fresh header row starts a new one."""
    state.flush_paragraph()
    state.flush_list()
    state.flush_code()
    if line.header:
        state.flush_table()
    state.table_rows.append(line)
    state.pending_raw.append(line.text)


def _handle_code_line(state: _AssemblerState, line: CodeLine):
    state.flush_paragraph()
    state.flush_list()
    state.flush_table()
    state.code_lines.append(line.code)
    state.pending_raw.append(line.text)


def _handle_page_break(state: _AssemblerState):
    state.flush_all()
    state.page.raw_lines.extend(state.pending_raw)
    state.pending_raw = []
    state.close_page()


def fold(lines: Iterable[ClassifiedLine], chunk_size: int | None = None) -> list[Page]:
    """Fold classified lines into pages.

    ``chunk_size`` enables synthetic pagination: a new page is started once
    the current one holds that many structural elements.
    """
    state = _AssemblerState(chunk_size)
    for line in lines:
        match line:
            case Blank():
                state.flush_all()
                state.pending_raw.append(line.text)
            case Heading():
                _handle_heading(state, line)
            case ListItem():
                _handle_list_item(state, line)
            case TableRow():
                _handle_table_row(state, line)
            case CodeLine():
                _handle_code_line(state, line)
            case ParagraphLine():
                state.flush_list()
                state.flush_table()
                state.flush_code()
                state.paragraph.append(line.content)
                state.pending_raw.append(line.text)
            case PageBreak():
                _handle_page_break(state)
            case _:
                raise TypeError(f"Unknown line type: {type(line).__name__}")
    return state.finish()


def assemble(  # pylint: disable=too-many-arguments
    lines: Iterable[ClassifiedLine],
    config: RecoveryConfig,
    *,
    paginated: bool = False,
    file_name: str | None = None,
    title: str | None = None,
    author: str | None = None,
    charset: str | None = None,
) -> ParsedDocument:
    """Assemble a ParsedDocument from classified lines.

    ``paginated`` tells the assembler the source already marks every real page
    boundary (PDF pages, slides, sheets), so no synthetic pages are cut.  The
    same holds whenever the stream contains a PageBreak.
    """
    lines = list(lines)
    has_breaks = paginated or any(isinstance(line, PageBreak) for line in lines)
    chunk_size = None if has_breaks else config.synthetic_page_chunk_size

    pages = fold(lines, chunk_size)
    metadata = DocumentMetadata.from_pages(pages, file_name=file_name, title=title, author=author, charset=charset)
    document = ParsedDocument(pages=pages, metadata=metadata, markdown_content=render_document(pages))

    logger.info(
        "Assembled %d pages: %d headings, %d paragraphs, %d lists, %d tables",
        metadata.total_pages,
        metadata.total_headings,
        metadata.total_paragraphs,
        metadata.total_lists,
        metadata.total_tables,
    )
    return document
