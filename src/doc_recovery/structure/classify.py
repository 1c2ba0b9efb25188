"""Assign a structural role to every line of decoded text or every grid row.

Flat text goes through ``classify_text``: pipe tables are located first by
block scanning, then each remaining line is classified on its own with the
previous/next line as context.  Rules are tried in this order, first match
wins:

    Blank -> Heading -> ListItem -> TableRow -> CodeLine -> ParagraphLine

Markdown text is classified the same way, except that its headings are
explicit: ATX ('#') and setext ('===' / '---' underline) markup plus the CJK
heading markers.  The uppercase and blank-follow heuristics are for plain
text only, so Markdown written by this package reads back with the same
structure.

Pre-gridded rows (CSV, spreadsheet sheets, word-processor and slide tables)
go through ``classify_grid``: every non-empty row is a TableRow, the first one
optionally flagged as the header, and all-empty rows are skipped without
closing the table.
"""

import logging
from collections.abc import Sequence
from enum import Enum
from typing import NamedTuple

from doc_recovery.structure.classifiers import (
    applies_cjk_rules,
    atx_heading,
    can_carry_setext,
    cjk_heading_level,
    flat_heading_level,
    has_block_marker,
    is_blank_follow_heading,
    is_code_line,
    is_setext_underline,
    is_uppercase_heading,
    match_list_item,
    setext_level,
    strip_code_indent,
)
from doc_recovery.structure.detection import find_table_blocks
from doc_recovery.structure.schema import Blank, ClassifiedLine, CodeLine, Heading, ListItem, PageBreak, ParagraphLine, TableRow

logger = logging.getLogger(__name__)

PAGE_BREAK = "\f"


class SourceKind(str, Enum):
    """How input arrives: free-running text, Markdown, or pre-delimited rows."""

    FLAT = "flat"
    MARKDOWN = "markdown"
    GRID = "grid"


class LineContext(NamedTuple):
    """Neighbouring raw lines and the source type, for look-around rules."""

    previous: str | None = None
    next: str | None = None
    source: SourceKind = SourceKind.FLAT


def _heading(line: str, stripped: str, context: LineContext) -> Heading | None:
    """Return a Heading if any heading rule matches the line."""
    # Explicit Markdown markup beats every heuristic
    if not is_code_line(line):
        atx = atx_heading(stripped)
        if atx:
            return Heading(text=line, level=atx[0], content=atx[1])

    if context.source is SourceKind.MARKDOWN and can_carry_setext(line):
        level = setext_level(context.next)
        if level is not None:
            return Heading(text=line, level=level, content=stripped)

    # A CJK marker forces a heading; the uppercase test means nothing for CJK
    if applies_cjk_rules(stripped):
        level = cjk_heading_level(stripped)
        if level is not None:
            return Heading(text=line, level=level, content=stripped)

    if context.source is not SourceKind.FLAT:
        return None
    if is_uppercase_heading(stripped):
        return Heading(text=line, level=flat_heading_level(stripped), content=stripped)
    # Lines that already carry list, table or code markup are never promoted
    # just for sitting above a blank line
    if not has_block_marker(line) and is_blank_follow_heading(stripped, context.next):
        return Heading(text=line, level=flat_heading_level(stripped), content=stripped)
    return None


def classify_row(cells: Sequence[str], header: bool = False, title: str | None = None) -> TableRow | Blank:
    """Classify one pre-gridded row; a row of only empty cells is Blank."""
    cleaned = tuple((cell or "").strip() for cell in cells)
    text = "\t".join(cleaned)
    if not any(cleaned):
        return Blank(text=text)
    return TableRow(text=text, cells=cleaned, header=header, title=title)


def classify(line: str | Sequence[str], context: LineContext = LineContext()) -> ClassifiedLine:
    """Classify one line (flat and Markdown sources) or one row of cells (grid sources)."""
    if context.source is SourceKind.GRID:
        cells = [line] if isinstance(line, str) else line
        return classify_row(cells)

    stripped = line.strip()
    if not stripped:
        return Blank(text=line)

    # The underline belongs to the heading above it
    if context.source is SourceKind.MARKDOWN and is_setext_underline(line, context.previous):
        return Blank(text=line)

    heading = _heading(line, stripped, context)
    if heading is not None:
        return heading

    item = match_list_item(line)
    if item is not None:
        return ListItem(text=line, ordered=item.ordered, depth=item.depth, marker=item.marker, content=item.content)

    # Table rows in flat text are claimed by block scanning before we get here
    if is_code_line(line):
        return CodeLine(text=line, code=strip_code_indent(line))

    return ParagraphLine(text=line, content=stripped)


def classify_lines(lines: list[str], source: SourceKind = SourceKind.FLAT) -> list[ClassifiedLine]:
    """Classify a run of flat-text or Markdown lines, pipe tables first."""
    claimed: dict[int, TableRow] = {}
    for block in find_table_blocks(lines):
        for offset, row in enumerate(block.rows):
            claimed[block.start + offset] = row

    classified: list[ClassifiedLine] = []
    for idx, line in enumerate(lines):
        if idx in claimed:
            classified.append(claimed[idx])
            continue
        context = LineContext(
            previous=lines[idx - 1] if idx > 0 else None,
            next=lines[idx + 1] if idx + 1 < len(lines) else None,
            source=source,
        )
        classified.append(classify(line, context))
    return classified


def classify_text(text: str, source: SourceKind = SourceKind.FLAT) -> list[ClassifiedLine]:
    """Classify decoded text; form feeds become explicit page breaks.

    Extractors commonly end every page with a form feed, the last one
    included, so a trailing form feed followed by nothing but whitespace does
    not open another page.
    """
    chunks = text.split(PAGE_BREAK)
    while len(chunks) > 1 and not chunks[-1].strip():
        chunks.pop()

    classified: list[ClassifiedLine] = []
    for idx, chunk in enumerate(chunks):
        if idx > 0:
            classified.append(PageBreak(text=PAGE_BREAK))
        classified.extend(classify_lines(chunk.splitlines(), source))

    logger.debug("Classified %d lines of %s text", len(classified), source.value)
    return classified


def classify_grid(rows: Sequence[Sequence[str]], has_header: bool = True, title: str | None = None) -> list[ClassifiedLine]:
    """Classify pre-gridded rows into TableRows.

    The first non-empty row is the header when ``has_header`` is set, and
    carries ``title`` (a sheet name) for the table.  Rows whose cells are all
    empty are skipped entirely, so they do not split the table in two.
    """
    classified: list[ClassifiedLine] = []
    header_pending = has_header
    skipped = 0
    for cells in rows:
        row = classify_row(cells, header=header_pending, title=title if not classified else None)
        if isinstance(row, Blank):
            skipped += 1
            continue
        header_pending = False
        classified.append(row)

    if skipped:
        logger.debug("Skipped %d empty grid rows", skipped)
    return classified
