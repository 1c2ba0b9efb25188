"""Per-line predicates and level helpers for structural classification.

Each function looks at a single line (plus, for the blank-follow and setext
heading rules, the line before or after it) and answers one question: is this
a heading, which level, is it a bullet, is it indented code.  classify.py
combines them in precedence order.
"""

from typing import NamedTuple

from doc_recovery.encoding.detect import is_cjk
from doc_recovery.structure.patterns import (
    ATX_HEADING_RE,
    BULLET_RE,
    CJK_CHAPTER_RE,
    CJK_CIRCLED_RE,
    CJK_ENUM_RE,
    CJK_KEYWORD_RE,
    CJK_NUMBER_RE,
    CJK_PAREN_RE,
    CODE_INDENT_RE,
    CURRENCY_RE,
    FONT_SIZE_LEVELS,
    MAX_BOLD_HEADING_LENGTH,
    MAX_NUMBERED_SECTION_LENGTH,
    NUMBERED_SECTION_RE,
    ORDERED_RE,
    PIPE_ROW_RE,
    SENTENCE_END_RE,
    SETEXT_UNDERLINE_RE,
    STYLE_HEADING_LEVELS,
    STYLE_HEADING_RE,
    YEAR_RE,
)


class ListMarker(NamedTuple):
    """A recognised list marker split out of its line."""

    ordered: bool
    depth: int
    marker: str
    content: str


def is_blank(line: str | None) -> bool:
    """Return True for an empty or whitespace-only line."""
    return line is not None and not line.strip()


def contains_cjk(text: str) -> bool:
    """Return True if any character is a CJK ideograph."""
    return any(is_cjk(char) for char in text)


def has_block_marker(line: str) -> bool:
    """Return True if the line carries explicit list, table or code markup."""
    return bool(BULLET_RE.match(line) or ORDERED_RE.match(line) or PIPE_ROW_RE.match(line) or CODE_INDENT_RE.match(line))


# ── Headings ─────────────────────────────────────────────────────────────────


def atx_heading(line: str) -> tuple[int, str] | None:
    """Return (level, text) for a Markdown '#'-prefixed heading, else None."""
    match = ATX_HEADING_RE.match(line.strip())
    if not match:
        return None
    return len(match.group(1)), match.group(2)


def setext_level(underline: str | None) -> int | None:
    """Level implied by a setext underline: 1 for '===', 2 for '---', else None."""
    if underline is None:
        return None
    match = SETEXT_UNDERLINE_RE.match(underline)
    if not match:
        return None
    return 1 if match.group(1).startswith("=") else 2


def can_carry_setext(line: str | None) -> bool:
    """Return True if the line could be the text of a setext heading."""
    if line is None or is_blank(line) or has_block_marker(line):
        return False
    return atx_heading(line) is None and setext_level(line) is None


def is_setext_underline(line: str, previous: str | None) -> bool:
    """Return True for a '===' / '---' line sitting directly under heading text."""
    return setext_level(line) is not None and can_carry_setext(previous)


def is_uppercase_heading(stripped: str) -> bool:
    """Return True for a short all-caps line that is not a year or price caption."""
    if not 3 < len(stripped) < 80:
        return False
    # isupper() also demands at least one cased letter, so digits-only lines fail
    if not stripped.isupper():
        return False
    return not YEAR_RE.search(stripped) and not CURRENCY_RE.search(stripped)


def is_blank_follow_heading(stripped: str, next_line: str | None) -> bool:
    """Return True for a short unpunctuated line sitting directly above a blank line."""
    return len(stripped) < 60 and is_blank(next_line) and not SENTENCE_END_RE.search(stripped)


def flat_heading_level(stripped: str) -> int:
    """Level for a heading found in flat text: 2 for short all-caps, otherwise 3."""
    return 2 if len(stripped) < 30 and stripped.isupper() else 3


def applies_cjk_rules(stripped: str) -> bool:
    """Return True if the CJK heading rule set should be consulted for this line."""
    return contains_cjk(stripped) or bool(CJK_CIRCLED_RE.match(stripped))


def cjk_heading_level(stripped: str) -> int | None:
    """Return the heading level implied by a CJK heading marker, or None."""
    if CJK_CHAPTER_RE.match(stripped):
        return 1
    if CJK_ENUM_RE.match(stripped):
        return 2
    if CJK_NUMBER_RE.match(stripped):
        return 3
    if CJK_PAREN_RE.match(stripped) or CJK_CIRCLED_RE.match(stripped):
        return 3
    if len(stripped) < 30 and CJK_KEYWORD_RE.search(stripped):
        return 3
    return None


def style_heading_level(style: str | None) -> int | None:
    """Map a word-processor paragraph style name to a heading level (1-6)."""
    if not style:
        return None
    name = style.strip()
    match = STYLE_HEADING_RE.match(name)
    if match:
        return int(match.group(1))
    return STYLE_HEADING_LEVELS.get(name.lower())


def emphasis_heading_level(text: str, bold: bool, font_size: float | None) -> int | None:
    """Heading level of an unstyled paragraph whose every run is bold, or None.

    Large bold text is a heading at any length: 20pt and up is level 1, 16pt
    level 2, 14pt level 3.  Smaller bold text is a level-3 heading only when
    it is short.
    """
    if not bold or not text:
        return None
    size = font_size or 0
    for min_size, level in FONT_SIZE_LEVELS:
        if size >= min_size:
            return level
    return 3 if len(text) < MAX_BOLD_HEADING_LENGTH else None


def is_numbered_section(stripped: str) -> bool:
    """Return True for 'Chapter 3 ...' / 'Section 12 ...' titles."""
    return len(stripped) < MAX_NUMBERED_SECTION_LENGTH and bool(NUMBERED_SECTION_RE.match(stripped))


# ── Lists / code ─────────────────────────────────────────────────────────────


def _depth(indent: str) -> int:
    """Nesting depth from a leading whitespace run (two columns per level)."""
    return len(indent) // 2


def match_list_item(line: str) -> ListMarker | None:
    """Return the bullet or ordered marker at the start of the line, or None."""
    match = BULLET_RE.match(line)
    if match:
        return ListMarker(ordered=False, depth=_depth(match.group(1)), marker=match.group(2), content=match.group(3).strip())
    match = ORDERED_RE.match(line)
    if match:
        return ListMarker(ordered=True, depth=_depth(match.group(1)), marker=match.group(2), content=match.group(3).strip())
    return None


def is_code_line(line: str) -> bool:
    """Return True if the line starts with four spaces or a tab."""
    return bool(CODE_INDENT_RE.match(line))


def strip_code_indent(line: str) -> str:
    """Remove one level (four spaces or a tab) of code indentation."""
    if line.startswith("\t"):
        return line[1:]
    return line[4:] if line.startswith("    ") else line.lstrip()
