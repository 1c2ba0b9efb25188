"""Shared pieces for source strategies.

A strategy turns one kind of input (a raw byte buffer, or RawSegments from a
container reader) into a ClassifiedLine stream for the assembler.  Which
strategy handles a given file is decided by the registry, from the filename.
"""

from collections.abc import Iterable
from pathlib import PurePath
from typing import NamedTuple

from doc_recovery.config import RecoveryConfig
from doc_recovery.structure.schema import ClassifiedLine
from doc_recovery.visibility.schema import RawSegment


class SourceResult(NamedTuple):
    """Classified lines plus what the source learned along the way."""

    lines: list[ClassifiedLine]
    charset: str | None = None


class SourceStrategy:
    """Base class for every source.

    Subclasses set ``accepts_bytes`` or ``accepts_segments`` and override the
    matching ``classify_*`` method.  ``handles_unnamed`` lets a source claim
    input that arrives without a filename.
    """

    name = "source"
    accepts_bytes = False
    accepts_segments = False
    paginated = False

    def __init__(self, suffixes: Iterable[str], handles_unnamed: bool = False):
        self.suffixes = frozenset(suffix.lower() for suffix in suffixes)
        self.handles_unnamed = handles_unnamed

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, suffixes={sorted(self.suffixes)})"

    def supports(self, file_name: str | None) -> bool:
        """Return True if this source handles files with this name."""
        if not file_name:
            return self.handles_unnamed
        suffix = PurePath(file_name).suffix.lower()
        if not suffix:
            return self.handles_unnamed
        return suffix in self.suffixes

    def classify_bytes(self, data: bytes, config: RecoveryConfig) -> SourceResult:
        raise NotImplementedError(f"{self.name} source does not read byte buffers")

    def classify_segments(self, segments: list[RawSegment], config: RecoveryConfig) -> SourceResult:
        raise NotImplementedError(f"{self.name} source does not read segments")


def group_by_index(segments: Iterable[RawSegment]) -> list[list[RawSegment]]:
    """Split segments into runs that share the same positional index."""
    groups: list[list[RawSegment]] = []
    current_index = None
    for segment in segments:
        if not groups or segment.index != current_index:
            groups.append([])
            current_index = segment.index
        groups[-1].append(segment)
    return groups
