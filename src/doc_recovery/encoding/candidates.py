"""Charset names, byte-order marks, and the fixed candidate evaluation order.

The order of ``CANDIDATES`` matters: ties are won by the earliest candidate,
so UTF-8 beats every legacy encoding on plain ASCII and GBK beats GB18030,
GB2312 and Big5 on simplified-Chinese input.
"""

from enum import Enum

from pydantic import BaseModel


class Charset(str, Enum):
    """Encodings the detector can report, valued by their display names."""

    UTF_8 = "UTF-8"
    UTF_16BE = "UTF-16BE"
    UTF_16LE = "UTF-16LE"
    GBK = "GBK"
    GB18030 = "GB18030"
    GB2312 = "GB2312"
    BIG5 = "Big5"
    WINDOWS_1252 = "Windows-1252"

    @property
    def codec(self) -> str:
        """Python codec name used to decode bytes in this charset."""
        return CODEC_NAMES[self]


CODEC_NAMES = {
    Charset.UTF_8: "utf-8",
    Charset.UTF_16BE: "utf-16-be",
    Charset.UTF_16LE: "utf-16-le",
    Charset.GBK: "gbk",
    Charset.GB18030: "gb18030",
    Charset.GB2312: "gb2312",
    Charset.BIG5: "big5",
    Charset.WINDOWS_1252: "cp1252",
}

# ─── Byte-order marks ─────────────────────────────────────────────────────────

# Checked longest first so the 3-byte UTF-8 mark is never mistaken for anything else
BOMS = (
    (b"\xef\xbb\xbf", Charset.UTF_8),
    (b"\xfe\xff", Charset.UTF_16BE),
    (b"\xff\xfe", Charset.UTF_16LE),
)

# ─── Candidate order ──────────────────────────────────────────────────────────

CANDIDATES = (
    Charset.UTF_8,
    Charset.GBK,
    Charset.GB18030,
    Charset.GB2312,
    Charset.BIG5,
    Charset.WINDOWS_1252,
)


class CharsetCandidate(BaseModel):
    """One encoding hypothesis and the score its decoded text earned."""

    charset: Charset
    score: int
    text: str
