"""Compiled regex patterns and constant tuples for structural classification.

These patterns recognise headings (Latin, Markdown and CJK conventions), list
markers, code indentation and pipe-table lines in decoded text.  Used by
classifiers.py, detection.py and classify.py.
"""

import re

# ─── Latin Heading Patterns ───────────────────────────────────────────────────

# Markdown ATX heading such as "## Scope" (1-6 hashes, then whitespace)
ATX_HEADING_RE = re.compile(r"^(#{1,6})\s+(.+?)\s*$")

# Four-digit run, usually a year: "ANNUAL REPORT 2023" reads as a caption
YEAR_RE = re.compile(r"\d{4}")

# Currency amount such as "$100" inside an all-caps line
CURRENCY_RE = re.compile(r"\$\d+")

# Sentence-final punctuation; such a line is prose even when a blank follows
SENTENCE_END_RE = re.compile(r"[.!?;,。！？；，]$")

# Setext underline below a Markdown heading: "=====" (level 1) or "-----" (level 2)
SETEXT_UNDERLINE_RE = re.compile(r"^ {0,3}(=+|-+)\s*$")

# Numbered chapter or section title in word-processor text: "Chapter 3", "Section 12 Scope"
NUMBERED_SECTION_RE = re.compile(r"^(?:Chapter|Section)\s+\d+")


# ─── CJK Heading Patterns ─────────────────────────────────────────────────────

# "第一章", "第二节", "第三部分", "第四篇"
CJK_CHAPTER_RE = re.compile(r"^第[一二三四五六七八九十]+[章节部分篇]")

# "一、引言", "二.内容"
CJK_ENUM_RE = re.compile(r"^[一二三四五六七八九十]+[、.。]")

# "1、内容", "2. 标题"
CJK_NUMBER_RE = re.compile(r"^\d+[、.。]")

# "(一)", "（1）"
CJK_PAREN_RE = re.compile(r"^[(（][一二三四五六七八九十0-9]+[)）]")

# "①标题" through "⑩"
CJK_CIRCLED_RE = re.compile(r"^[①-⑩]")

# Short line ending in a heading keyword: overview, introduction, summary, ...
CJK_KEYWORD_RE = re.compile(r"(概述|简介|介绍|总结|结论|背景|目的|方法|结果)$")


# ─── List / Code Patterns ─────────────────────────────────────────────────────

# Bullet glyph with optional leading indent: "- item", "  • item", "→ item"
BULLET_RE = re.compile(r"^(\s*)([•*\-+→►▪▫◦‣⁃])\s+(.*)$")

# Ordered marker: "1. item", "2) item", "a. item", "B) item"
ORDERED_RE = re.compile(r"^(\s*)(\d+[.)]|[a-zA-Z][.)])\s+(.*)$")

# Four or more spaces, or a tab, at the start of the line
CODE_INDENT_RE = re.compile(r"^(?: {4}|\t)")


# ─── Table Patterns ───────────────────────────────────────────────────────────

# Any line framed by pipes: "| a | b |"
PIPE_ROW_RE = re.compile(r"^\s*\|.*\|\s*$")

# Header separator: "|---|:--:|" (spaces around the dashes tolerated)
SEPARATOR_RE = re.compile(r"^\s*\|\s*:?-[-:]*\s*\|.*$")


# ─── String-Match Constants ───────────────────────────────────────────────────

# Word-processor style names that map straight to a heading level
STYLE_HEADING_LEVELS = {
    "title": 1,
    "subtitle": 2,
}

# Style names like "Heading1" / "Heading 2" / "heading3"
STYLE_HEADING_RE = re.compile(r"^heading\s*([1-6])$", re.IGNORECASE)

# Lines shorter than this never form a paragraph entry on their own
MIN_PARAGRAPH_LENGTH = 10

# Numbered chapter/section titles longer than this are body text
MAX_NUMBERED_SECTION_LENGTH = 100


# ─── Emphasis Thresholds ──────────────────────────────────────────────────────

# (minimum font size in points, heading level) for all-bold paragraphs, largest first
FONT_SIZE_LEVELS = ((20, 1), (16, 2), (14, 3))

# An all-bold paragraph below the smallest heading size still counts when shorter than this
MAX_BOLD_HEADING_LENGTH = 50
