"""Ordered registry of source strategies.

The caller builds the registry and hands it to the pipeline; strategies are
consulted in order and the first one that supports the filename and the input
kind wins.  There is no process-wide registry to mutate.
"""

import logging
from collections.abc import Iterable, Iterator

from doc_recovery.errors import UnsupportedSource
from doc_recovery.sources.base import SourceStrategy
from doc_recovery.sources.segments import PaginatedSegmentSource, StructuredSegmentSource
from doc_recovery.sources.text import DelimitedTextSource, FlatTextSource
from doc_recovery.structure.classify import SourceKind

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = (".md", ".markdown", ".mdown", ".mkd")
TEXT_SUFFIXES = (".txt", ".text", ".log")
PDF_SUFFIXES = (".pdf",)
SLIDE_SUFFIXES = (".pptx", ".ppt", ".odp")
WORD_SUFFIXES = (".docx", ".doc", ".odt", ".rtf")
SHEET_SUFFIXES = (".xlsx", ".xls", ".ods")


class SourceRegistry:
    """An immutable, ordered list of source strategies."""

    def __init__(self, sources: Iterable[SourceStrategy]):
        self._sources = tuple(sources)

    def __iter__(self) -> Iterator[SourceStrategy]:
        return iter(self._sources)

    def __len__(self) -> int:
        return len(self._sources)

    def select(self, file_name: str | None, *, segments: bool = False) -> SourceStrategy:
        """Return the first strategy that supports this filename and input kind.

        Raises UnsupportedSource if none does.
        """
        for source in self._sources:
            accepts = source.accepts_segments if segments else source.accepts_bytes
            if accepts and source.supports(file_name):
                logger.debug("Selected %s source for %r", source.name, file_name)
                return source
        kind = "segments" if segments else "bytes"
        raise UnsupportedSource(f"No source accepts {kind} for {file_name!r}")


def default_registry() -> SourceRegistry:
    """Build the standard registry: Markdown, plain text, delimited, PDF, slides, word, sheets."""
    return SourceRegistry(
        [
            FlatTextSource("markdown", MARKDOWN_SUFFIXES, kind=SourceKind.MARKDOWN),
            FlatTextSource("text", TEXT_SUFFIXES, handles_unnamed=True),
            DelimitedTextSource(),
            PaginatedSegmentSource("pdf", PDF_SUFFIXES, handles_unnamed=True),
            PaginatedSegmentSource("slides", SLIDE_SUFFIXES),
            StructuredSegmentSource("word", WORD_SUFFIXES),
            StructuredSegmentSource("spreadsheet", SHEET_SUFFIXES, paginated=True),
        ]
    )
