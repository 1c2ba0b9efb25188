"""Source strategies: how each input format reaches the classifier.

Submodules:
  base      -- SourceStrategy base class, SourceResult, segment grouping helpers
  text      -- byte-buffer sources (plain text, Markdown, delimited text)
  segments  -- RawSegment sources (paginated PDF/slides, structured word-processor/spreadsheet)
  registry  -- ordered, caller-constructed SourceRegistry and default_registry()
"""
