"""Recover a canonical document from a byte buffer or from raw segments.

Stages, in order:
  1. Encoding detection        (byte sources only)
  2. Visibility filtering      (segment sources with rendering state)
  3. Structural classification
  4. Assembly into pages + Markdown

The pipeline holds no mutable state between calls: one instance can serve any
number of documents, sequentially or from several threads.

Usage:
    pipeline = RecoveryPipeline(default_registry(), RecoveryConfig.from_env())
    document = pipeline.recover_bytes(data, file_name="notes.txt")
    print(document.markdown_content)
"""

import logging
from collections.abc import Iterable

from doc_recovery.config import RecoveryConfig
from doc_recovery.document.assembler import assemble
from doc_recovery.document.schema import ParsedDocument
from doc_recovery.sources.base import SourceResult, SourceStrategy
from doc_recovery.sources.registry import SourceRegistry, default_registry
from doc_recovery.visibility.schema import RawSegment

logger = logging.getLogger(__name__)


class RecoveryPipeline:
    """Wires a source registry and a config to the classifier and assembler."""

    def __init__(self, registry: SourceRegistry | None = None, config: RecoveryConfig | None = None):
        self.registry = registry if registry is not None else default_registry()
        self.config = config if config is not None else RecoveryConfig()

    def _assemble(  # pylint: disable=too-many-arguments
        self,
        source: SourceStrategy,
        result: SourceResult,
        file_name: str | None,
        title: str | None,
        author: str | None,
    ) -> ParsedDocument:
        return assemble(
            result.lines,
            self.config,
            paginated=source.paginated,
            file_name=file_name,
            title=title,
            author=author,
            charset=result.charset,
        )

    def recover_bytes(self, data: bytes, file_name: str | None = None) -> ParsedDocument:
        """Decode an undeclared-encoding byte buffer and recover its structure.

        ``file_name`` picks the source and is the title fallback when the
        content has no level-1 heading.
        """
        source = self.registry.select(file_name)
        logger.info("Recovering %d bytes from %s with the %s source", len(data), file_name or "<unnamed>", source.name)
        result = source.classify_bytes(data, self.config)
        return self._assemble(source, result, file_name, None, None)

    def recover_segments(
        self,
        segments: Iterable[RawSegment],
        file_name: str | None = None,
        *,
        title: str | None = None,
        author: str | None = None,
    ) -> ParsedDocument:
        """Recover structure from segments produced by a container reader.

        ``title`` and ``author`` are descriptive fields the reader found in the
        container's own metadata, if any.
        """
        segments = list(segments)
        source = self.registry.select(file_name, segments=True)
        logger.info("Recovering %d segments from %s with the %s source", len(segments), file_name or "<unnamed>", source.name)
        result = source.classify_segments(segments, self.config)
        return self._assemble(source, result, file_name, title, author)


def recover_bytes(data: bytes, file_name: str | None = None, config: RecoveryConfig | None = None) -> ParsedDocument:
    """One-shot recovery of a byte buffer with the default registry."""
    return RecoveryPipeline(default_registry(), config).recover_bytes(data, file_name)
