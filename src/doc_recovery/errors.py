"""Exception types raised by the recovery pipeline.

The set is deliberately small.  Heuristic misjudgements (a wrong heading level,
a poor charset pick) are never errors; only unusable input and collaborator
mismatches are.
"""


class RecoveryError(Exception):
    """Base class for every error raised by doc_recovery."""


class InputUnreadable(RecoveryError):
    """No candidate charset could decode the byte buffer."""


class MalformedTableBlock(RecoveryError):
    """A pipe-delimited region has no valid separator line.

    Raised by the block parser and caught by the scanner, which drops the
    region instead of emitting a degenerate table.
    """


class UnsupportedSource(RecoveryError):
    """No registered source strategy accepts the given filename."""


class SourceMismatch(RecoveryError):
    """The input bytes carry the signature of a different container format."""
