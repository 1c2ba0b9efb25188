"""Suppression of invisible and watermark text before classification.

Submodules:
  schema         -- RawSegment and the rendering metadata attached to it
  remove_hidden  -- fragment-level and container-level visibility rules, run() entry point
"""
