"""Canonical document model, assembly and Markdown serialisation.

Submodules:
  schema     -- Table, page blocks, Page, DocumentMetadata, ParsedDocument
  markdown   -- Markdown rendering of blocks, pages and whole documents
  assembler  -- fold of a ClassifiedLine stream into pages, assemble() entry point
"""
