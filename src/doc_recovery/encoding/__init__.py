"""Byte-to-text charset inference.

Submodules:
  candidates  -- Charset enum, BOM table, fixed candidate evaluation order
  detect      -- UTF-8 structural check, text scoring, detect() entry point
"""
