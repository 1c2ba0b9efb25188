"""Sources fed by RawSegments from an external container reader.

Paginated sources (PDF pages, slides) arrive as text fragments carrying
rendering state.  Fragments are grouped by ``RawSegment.index`` first, so a
page whose every fragment is hidden still yields an empty page and later pages
keep their numbers.  Each group then goes through the visibility filter, its
fragments are joined back into text, and the text is classified like flat
text.

Structured sources (word-processor paragraphs, spreadsheet rows) arrive one
segment per paragraph or row.  Style names, emphasis, list levels and cell
rows are richer than anything flat text offers, so they are mapped directly;
only plain paragraphs fall back to the flat-text rules.

A ``section`` name on the segments (sheet name, slide title) opens its page
with a heading and titles the tables on that page.
"""

import logging
from collections.abc import Iterable

from doc_recovery.config import RecoveryConfig
from doc_recovery.sources.base import SourceResult, SourceStrategy, group_by_index
from doc_recovery.structure.classifiers import emphasis_heading_level, is_numbered_section, style_heading_level
from doc_recovery.structure.classify import LineContext, classify, classify_grid, classify_text
from doc_recovery.structure.schema import ClassifiedLine, Heading, ListItem, PageBreak
from doc_recovery.visibility import remove_hidden
from doc_recovery.visibility.schema import RawSegment

logger = logging.getLogger(__name__)

# Level of the "Chapter 3" / "Section 2" headings in word-processor text
NUMBERED_SECTION_LEVEL = 2


def _section_of(segments: list[RawSegment]) -> str | None:
    """The sheet name or slide title a group of segments belongs to, if any."""
    for segment in segments:
        if segment.section and segment.section.strip():
            return segment.section.strip()
    return None


def _classify_runs(segments: list[RawSegment], classify_text_run, section: str | None = None) -> list[ClassifiedLine]:
    """Classify a page's segments, sending each run of cell rows through the grid rules."""
    lines: list[ClassifiedLine] = []
    text_run: list[RawSegment] = []
    grid_run: list[RawSegment] = []

    def flush_text():
        if text_run:
            lines.extend(classify_text_run(text_run))
            text_run.clear()

    def flush_grid():
        if grid_run:
            lines.extend(classify_grid([segment.cells for segment in grid_run], title=section))
            grid_run.clear()

    for segment in segments:
        if segment.cells is not None:
            flush_text()
            grid_run.append(segment)
        else:
            flush_grid()
            text_run.append(segment)
    flush_text()
    flush_grid()
    return lines


def _with_section_heading(lines: list[ClassifiedLine], section: str | None, level: int) -> list[ClassifiedLine]:
    """Open a page's lines with its section heading, when there is one."""
    if section is None:
        return lines
    return [Heading(text=section, level=level, content=section), *lines]


def _with_page_breaks(pages: list[list[ClassifiedLine]]) -> list[ClassifiedLine]:
    """Concatenate per-page line lists with a PageBreak between pages."""
    lines: list[ClassifiedLine] = []
    for idx, page_lines in enumerate(pages):
        if idx > 0:
            lines.append(PageBreak())
        lines.extend(page_lines)
    return lines


class PaginatedSegmentSource(SourceStrategy):
    """PDF pages or slides: filter hidden fragments, rejoin, classify as flat text.

    Slide titles arrive as ``section`` and become level-2 headings.
    """

    accepts_segments = True
    paginated = True

    def __init__(self, name: str, suffixes: Iterable[str], handles_unnamed: bool = False, section_level: int = 2):
        super().__init__(suffixes, handles_unnamed)
        self.name = name
        self.section_level = section_level

    @staticmethod
    def _classify_fragments(segments: list[RawSegment]) -> list[ClassifiedLine]:
        # Fragments carry their own line breaks; joining restores the page text
        return classify_text("".join(segment.text for segment in segments))

    def classify_segments(self, segments: list[RawSegment], config: RecoveryConfig) -> SourceResult:
        pages = []
        visible_count = 0
        for group in group_by_index(segments):
            section = _section_of(group)
            visible = remove_hidden.run(group, config)
            visible_count += len(visible)
            lines = _classify_runs(visible, self._classify_fragments, section)
            pages.append(_with_section_heading(lines, section, self.section_level))

        logger.info("Classified %d %s pages (%d of %d fragments visible)", len(pages), self.name, visible_count, len(segments))
        return SourceResult(lines=_with_page_breaks(pages))


class StructuredSegmentSource(SourceStrategy):
    """Word-processor paragraphs or spreadsheet rows with style and list hints.

    With ``paginated`` set (spreadsheets) every index change starts a new page,
    one per sheet, and sheet names arrive as ``section``; otherwise the index
    is a paragraph number and the assembler cuts synthetic pages.
    """

    accepts_segments = True

    def __init__(self, name: str, suffixes: Iterable[str], paginated: bool = False, section_level: int = 1):
        super().__init__(suffixes)
        self.name = name
        self.paginated = paginated
        self.section_level = section_level

    @staticmethod
    def classify_paragraph(segment: RawSegment, next_text: str | None) -> ClassifiedLine:
        """Classify one paragraph.

        Rules, first match wins: paragraph style, all-bold emphasis, list
        level, a 'Chapter N' / 'Section N' title, then the flat-text rules.
        """
        text = " ".join(segment.text.split())
        if text:
            level = style_heading_level(segment.style)
            if level is None:
                level = emphasis_heading_level(text, segment.bold, segment.font_size)
            if level is not None:
                return Heading(text=segment.text, level=level, content=text)
            if segment.list_level is not None:
                return ListItem(text=segment.text, depth=max(segment.list_level, 0), content=text)
            if is_numbered_section(text):
                return Heading(text=segment.text, level=NUMBERED_SECTION_LEVEL, content=text)
        return classify(text, LineContext(next=next_text))

    def _classify_paragraphs(self, segments: list[RawSegment]) -> list[ClassifiedLine]:
        lines = []
        for idx, segment in enumerate(segments):
            next_text = segments[idx + 1].text.strip() if idx + 1 < len(segments) else None
            lines.append(self.classify_paragraph(segment, next_text))
        return lines

    def classify_segments(self, segments: list[RawSegment], config: RecoveryConfig) -> SourceResult:
        groups = group_by_index(segments) if self.paginated else [list(segments)]
        pages = []
        for group in groups:
            section = _section_of(group)
            lines = _classify_runs(group, self._classify_paragraphs, section)
            pages.append(_with_section_heading(lines, section, self.section_level))

        logger.info("Classified %d %s segments into %d groups", len(segments), self.name, len(pages))
        return SourceResult(lines=_with_page_breaks(pages))
