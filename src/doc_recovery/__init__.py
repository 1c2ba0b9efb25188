"""Recover structured documents (pages, headings, lists, tables) from lossy text.

Subpackages:
  encoding    -- charset inference for byte buffers
  visibility  -- hidden / watermark fragment removal
  structure   -- line-level structural classification
  document    -- canonical model, assembly and Markdown output
  sources     -- per-format source strategies and the registry
"""
