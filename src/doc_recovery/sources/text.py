"""Sources that start from a raw byte buffer with no declared encoding.

Plain text and Markdown are decoded and classified line by line.  Delimited
text (CSV/TSV) is decoded, split into rows with the ``csv`` module and
classified as a grid.
"""

import csv
import io
import logging
from collections.abc import Iterable

from doc_recovery.config import RecoveryConfig
from doc_recovery.encoding.detect import detect
from doc_recovery.errors import SourceMismatch
from doc_recovery.sources.base import SourceResult, SourceStrategy
from doc_recovery.structure.classify import SourceKind, classify_grid, classify_text

logger = logging.getLogger(__name__)

# Leading bytes of container formats that sometimes arrive with a .csv name
CONTAINER_SIGNATURES = (
    (b"PK\x03\x04", "ZIP container (XLSX/DOCX/PPTX)"),
    (b"\xd0\xcf\x11\xe0", "OLE2 container (XLS/DOC/PPT)"),
    (b"%PDF", "PDF document"),
)


class FlatTextSource(SourceStrategy):
    """Plain text or Markdown: detect the charset, then classify every line.

    ``kind`` is SourceKind.MARKDOWN for Markdown files, whose headings are
    taken only from explicit markup.
    """

    accepts_bytes = True

    def __init__(self, name: str, suffixes: Iterable[str], handles_unnamed: bool = False, kind: SourceKind = SourceKind.FLAT):
        super().__init__(suffixes, handles_unnamed)
        self.name = name
        self.kind = kind

    def classify_bytes(self, data: bytes, config: RecoveryConfig) -> SourceResult:
        charset, text = detect(data)
        return SourceResult(lines=classify_text(text, self.kind), charset=charset.value)


class DelimitedTextSource(SourceStrategy):
    """CSV / TSV: one table whose first non-empty row is the header."""

    name = "delimited"
    accepts_bytes = True

    def __init__(self, suffixes: Iterable[str] = (".csv", ".tsv"), has_header: bool = True):
        super().__init__(suffixes)
        self.has_header = has_header

    @staticmethod
    def check_signature(data: bytes):
        """Raise SourceMismatch if the buffer is really a binary container."""
        for signature, description in CONTAINER_SIGNATURES:
            if data.startswith(signature):
                raise SourceMismatch(f"Delimited-text input looks like a {description}")

    @staticmethod
    def sniff_delimiter(text: str) -> str:
        """Pick tab when the first line has more tabs than commas, else comma."""
        first_line = text.split("\n", 1)[0]
        return "\t" if first_line.count("\t") > first_line.count(",") else ","

    def classify_bytes(self, data: bytes, config: RecoveryConfig) -> SourceResult:
        self.check_signature(data)
        charset, text = detect(data)
        delimiter = self.sniff_delimiter(text)
        rows = list(csv.reader(io.StringIO(text, newline=""), delimiter=delimiter))
        logger.info("Read %d delimited rows (delimiter %r)", len(rows), delimiter)
        return SourceResult(lines=classify_grid(rows, has_header=self.has_header), charset=charset.value)
