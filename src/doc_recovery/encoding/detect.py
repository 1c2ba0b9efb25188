"""Pick the best-fit charset for a byte buffer with no declared encoding.

Order of evaluation:
  1. A byte-order mark short-circuits everything.
  2. UTF-8 is only scored when the buffer is structurally valid UTF-8.
  3. Every remaining candidate is decoded (with replacement characters, so a
     bad guess shows up as U+FFFD rather than an exception) and scored.
  4. The highest score wins; ties go to the earliest candidate.
"""

import logging
import unicodedata

from doc_recovery.encoding.candidates import BOMS, CANDIDATES, Charset, CharsetCandidate
from doc_recovery.errors import InputUnreadable

logger = logging.getLogger(__name__)

# ── Scoring constants ────────────────────────────────────────────────────────

BASE_SCORE = 100
REPLACEMENT_PENALTY = 50
CONTROL_PENALTY = 10
CJK_BONUS = 50
DELIMITER_BONUS = 20

REPLACEMENT_CHAR = "\ufffd"

# Characters that suggest tabular text (CSV, TSV, pipe tables)
DELIMITERS = frozenset(",\t|")

# Punctuation counted as readable in addition to letters, digits and CJK
READABLE_PUNCTUATION = frozenset(" ,.;:!?()[]{}\"'-_/\\@#$%^&*+=<>\n\r\t")

# Control characters tolerated without penalty
ALLOWED_CONTROLS = frozenset("\t\r\n")

CJK_FIRST = "\u4e00"
CJK_LAST = "\u9fa5"


def is_cjk(char: str) -> bool:
    """Return True for a CJK unified ideograph in the common U+4E00-U+9FA5 block."""
    return CJK_FIRST <= char <= CJK_LAST


def is_valid_utf8(data: bytes) -> bool:
    """Return True if every multi-byte sequence has the right continuation bytes.

    Only the lead/continuation bit patterns are checked; overlong forms and
    surrogate code points are left to the scorer, which sees them as U+FFFD.
    """
    i = 0
    length = len(data)
    while i < length:
        lead = data[i]
        if lead < 0x80:
            i += 1
            continue
        if lead >> 5 == 0b110:
            width = 2
        elif lead >> 4 == 0b1110:
            width = 3
        elif lead >> 3 == 0b11110:
            width = 4
        else:
            return False
        if i + width > length:
            return False
        if any(byte >> 6 != 0b10 for byte in data[i + 1 : i + width]):
            return False
        i += width
    return True


def _readable_ratio(text: str) -> float:
    """Fraction of characters that are alphanumeric, common punctuation, or CJK."""
    readable = sum(1 for char in text if char.isalnum() or char in READABLE_PUNCTUATION or is_cjk(char))
    return readable / len(text)


def score_text(text: str) -> int:
    """Score decoded text for how plausible it is as real document content."""
    if not text:
        return 0

    score = BASE_SCORE
    score -= REPLACEMENT_PENALTY * text.count(REPLACEMENT_CHAR)

    # Stray control characters only count once they exceed 1% of the text
    controls = sum(1 for char in text if unicodedata.category(char) == "Cc" and char not in ALLOWED_CONTROLS)
    if controls > len(text) // 100:
        score -= CONTROL_PENALTY * controls

    if any(is_cjk(char) for char in text):
        score += CJK_BONUS
    if any(char in DELIMITERS for char in text):
        score += DELIMITER_BONUS

    ratio = _readable_ratio(text)
    if ratio > 0.95:
        score += 30
    elif ratio > 0.90:
        score += 20
    elif ratio < 0.70:
        score -= 30

    return max(score, 0)


def _detect_bom(data: bytes) -> tuple[Charset, str] | None:
    """Decode past a byte-order mark if the buffer starts with one."""
    for mark, charset in BOMS:
        if data.startswith(mark):
            return charset, data[len(mark) :].decode(charset.codec, errors="replace")
    return None


def score_candidates(data: bytes) -> list[CharsetCandidate]:
    """Decode and score the buffer under every applicable candidate, in evaluation order."""
    utf8_valid = is_valid_utf8(data)
    scored = []
    for charset in CANDIDATES:
        if charset is Charset.UTF_8 and not utf8_valid:
            logger.debug("Skipping UTF-8: buffer is not structurally valid")
            continue
        try:
            text = data.decode(charset.codec, errors="replace")
        except (LookupError, UnicodeDecodeError) as exc:
            logger.debug("Skipping %s: %s", charset.value, exc)
            continue
        candidate = CharsetCandidate(charset=charset, score=score_text(text), text=text)
        logger.debug("Candidate %s scored %d", charset.value, candidate.score)
        scored.append(candidate)
    return scored


def detect(data: bytes) -> tuple[Charset, str]:
    """Return the best-fit charset for ``data`` and the text decoded with it."""
    if not data:
        return Charset.UTF_8, ""

    bom = _detect_bom(data)
    if bom is not None:
        logger.info("Detected %s from byte-order mark", bom[0].value)
        return bom

    best: CharsetCandidate | None = None
    for candidate in score_candidates(data):
        # Strictly greater: the earliest candidate keeps a tie
        if best is None or candidate.score > best.score:
            best = candidate

    if best is None:
        raise InputUnreadable(f"No candidate charset could decode {len(data)} bytes")

    logger.info("Detected charset %s (score %d)", best.charset.value, best.score)
    return best.charset, best.text
