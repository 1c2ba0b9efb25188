"""Line-level structural classification of decoded text.

Submodules:
  patterns    -- compiled regex patterns and constant tuples
  classifiers -- per-line heading / list / code predicates and level helpers
  schema      -- ClassifiedLine tagged variants
  detection   -- block-level pipe-table scanning
  classify    -- classify() entry point for flat text and pre-gridded rows
"""
