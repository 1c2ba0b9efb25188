"""Pydantic models for raw text segments handed over by a container reader.

A container reader (PDF, DOCX, XLSX, PPTX library) turns a file into a stream
of ``RawSegment``s.  Segments are immutable once built.  Rendering state is
only present for sources that expose it (glyph-level PDF extraction); the
visibility filter leaves segments without it untouched.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class RenderState(BaseModel):
    """Graphics state in effect when a text fragment was painted.

    ``render_mode`` follows the PDF text rendering modes (0 fill, 1 stroke,
    2 fill+stroke, 3 invisible, 4-6 the same with clipping, 7 clip only).
    Colours are RGB components in the 0..1 range.
    """

    model_config = ConfigDict(frozen=True)

    render_mode: int = Field(default=0, ge=0, le=7)
    stroke_alpha: float = 1.0
    fill_alpha: float = 1.0
    fill_color: tuple[float, ...] | None = None


class ContainerObject(BaseModel):
    """The annotation or embedded form object a fragment was drawn inside."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["annotation", "form"]
    name: str = ""
    hidden: bool = False
    no_view: bool = False
    # Alpha constants (CA/ca) reported by the object's extended graphics states
    alpha_constants: tuple[float, ...] = ()


class RawSegment(BaseModel):
    """A unit of extracted text plus its positional hint.

    ``index`` is the page, slide, sheet or paragraph number the reader found
    the text on (0-based).  ``section`` is the sheet name or slide title of
    that index, repeated on each of its segments.

    Word-processor paragraphs also carry ``style`` (the paragraph style name),
    ``list_level`` (nesting level of a numbered/bulleted paragraph), ``bold``
    (every non-empty run is bold) and ``font_size`` (the largest run size in
    points).  ``cells`` holds a pre-delimited grid row.
    """

    model_config = ConfigDict(frozen=True)

    text: str = ""
    index: int = Field(default=0, ge=0)
    section: str | None = None
    render: RenderState | None = None
    container: ContainerObject | None = None
    style: str | None = None
    cells: tuple[str, ...] | None = None
    list_level: int | None = None
    bold: bool = False
    font_size: float | None = Field(default=None, gt=0)
