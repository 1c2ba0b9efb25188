"""ClassifiedLine: the structural role assigned to one line or grid row.

A closed set of pydantic variants discriminated on ``kind``.  Every variant
keeps the raw ``text`` it was classified from so the assembler can rebuild
``raw_text`` for the page.  ``PageBreak`` is a control variant emitted only
when a source supplies an explicit page marker.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class Heading(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["heading"] = "heading"
    text: str = ""
    level: int = Field(ge=1, le=6)
    content: str


class ListItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["list_item"] = "list_item"
    text: str = ""
    ordered: bool = False
    depth: int = Field(default=0, ge=0)
    marker: str = "-"
    content: str


class TableRow(BaseModel):
    """One row of a table.

    ``header`` marks the row that becomes ``Table.headers``; ``separator``
    marks a Markdown ``|---|`` line, which the assembler discards.  A
    ``title`` on the first row of a table (a sheet name) becomes
    ``Table.title``.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["table_row"] = "table_row"
    text: str = ""
    cells: tuple[str, ...] = ()
    header: bool = False
    separator: bool = False
    title: str | None = None


class CodeLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["code_line"] = "code_line"
    text: str = ""
    code: str


class ParagraphLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["paragraph_line"] = "paragraph_line"
    text: str = ""
    content: str


class Blank(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["blank"] = "blank"
    text: str = ""


class PageBreak(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["page_break"] = "page_break"
    text: str = ""


# Discriminated on ``kind``; the assembler dispatches over it with ``match``
ClassifiedLine = Annotated[
    Union[Heading, ListItem, TableRow, CodeLine, ParagraphLine, Blank, PageBreak],
    Field(discriminator="kind"),
]
