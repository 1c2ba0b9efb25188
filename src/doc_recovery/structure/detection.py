"""Block-level scanning for Markdown pipe tables in flat text.

Tables are located before any per-line classification runs: a pipe-framed
line followed by a separator line (``|---|---|``) opens a table, and every
following pipe-framed line belongs to it until the run of pipe lines ends or
another header/separator pair starts a new table.

A run of pipe lines with no separator is a malformed block.  It is dropped as
a table (its lines fall through to the ordinary line rules) rather than being
emitted as a degenerate table.
"""

import logging
from typing import NamedTuple

from doc_recovery.document.schema import Table
from doc_recovery.errors import MalformedTableBlock
from doc_recovery.structure.patterns import PIPE_ROW_RE, SEPARATOR_RE
from doc_recovery.structure.schema import TableRow

logger = logging.getLogger(__name__)


class TableBlock(NamedTuple):
    """A located table: line span [start, end) and one TableRow per line."""

    start: int
    end: int
    rows: list[TableRow]


def parse_pipe_row(line: str) -> list[str]:
    """Split a pipe-delimited row into trimmed cell strings."""
    return [cell.strip() for cell in line.strip().strip("|").split("|")]


def is_separator(line: str) -> bool:
    """Return True for a header separator line such as '|---|:--:|'."""
    return bool(SEPARATOR_RE.match(line))


def table_block_rows(lines: list[str]) -> list[TableRow]:
    """Classify the lines of one candidate block as header, separator and body rows.

    Raises MalformedTableBlock if the second line is not a separator.
    """
    if len(lines) < 2 or not is_separator(lines[1]):
        raise MalformedTableBlock(f"Pipe block starting {lines[0].strip()!r} has no separator line")

    rows = [
        TableRow(text=lines[0], cells=tuple(parse_pipe_row(lines[0])), header=True),
        TableRow(text=lines[1], cells=tuple(parse_pipe_row(lines[1])), separator=True),
    ]
    rows.extend(TableRow(text=line, cells=tuple(parse_pipe_row(line))) for line in lines[2:])
    return rows


def parse_table_block(lines: list[str]) -> Table:
    """Parse one pipe-table block into a Table (header row, separator, body rows)."""
    rows = table_block_rows(lines)
    return Table(headers=list(rows[0].cells), rows=[list(row.cells) for row in rows[2:]])


def _pipe_runs(lines: list[str]) -> list[tuple[int, int]]:
    """Return [start, end) spans of consecutive pipe-framed lines."""
    runs = []
    start = None
    for idx, line in enumerate(lines):
        if PIPE_ROW_RE.match(line):
            if start is None:
                start = idx
        elif start is not None:
            runs.append((start, idx))
            start = None
    if start is not None:
        runs.append((start, len(lines)))
    return runs


def _split_run(lines: list[str], start: int, end: int) -> list[tuple[int, int]]:
    """Split a pipe run into candidate blocks, one per header/separator pair.

    Lines before the first header form a leading candidate of their own, which
    will fail to parse and be dropped.
    """
    headers = [idx for idx in range(start, end - 1) if is_separator(lines[idx + 1]) and not is_separator(lines[idx])]
    bounds = sorted({start, *headers, end})
    return list(zip(bounds, bounds[1:]))


def find_table_blocks(lines: list[str]) -> list[TableBlock]:
    """Locate every well-formed pipe table in a list of lines."""
    blocks = []
    dropped = 0
    for run_start, run_end in _pipe_runs(lines):
        for start, end in _split_run(lines, run_start, run_end):
            try:
                rows = table_block_rows(lines[start:end])
            except MalformedTableBlock as exc:
                dropped += 1
                logger.debug("Dropping malformed table block at line %d: %s", start, exc)
                continue
            blocks.append(TableBlock(start=start, end=end, rows=rows))

    if blocks or dropped:
        logger.debug("Found %d table blocks, dropped %d malformed", len(blocks), dropped)
    return blocks
