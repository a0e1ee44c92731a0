"""
Document models - Structured blocks and styled runs for itinerary display.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Annotated, Literal, Optional, Union


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Heading(_Frozen):
    """A section heading (## to ####)."""
    type: Literal["heading"] = "heading"
    level: int = Field(..., ge=2, le=4, description="Number of leading hashes")
    text: str = Field(..., description="Raw heading text")


class Paragraph(_Frozen):
    """Any other non-empty line."""
    type: Literal["paragraph"] = "paragraph"
    text: str


class ListItem(_Frozen):
    """A bulleted or numbered list entry."""
    type: Literal["list_item"] = "list_item"
    text: str
    ordered: bool = False
    number: Optional[int] = Field(
        None,
        description="Source ordinal for ordered items"
    )


class CheckboxItem(_Frozen):
    """A '- [ ]' or '- [x]' task entry."""
    type: Literal["checkbox"] = "checkbox"
    text: str
    checked: bool = False


class Blockquote(_Frozen):
    """A '> ' quoted line."""
    type: Literal["blockquote"] = "blockquote"
    text: str


class Table(_Frozen):
    """
    A pipe table.

    Rows may be ragged: a row's cell count need not match the header.
    """
    type: Literal["table"] = "table"
    header: list[str] = Field(default_factory=list)
    rows: list[list[str]] = Field(default_factory=list)
    alignments: list[str] = Field(
        default_factory=list,
        description="Cells of the '---' alignment row, decorative only"
    )


Block = Annotated[
    Union[Heading, Paragraph, ListItem, CheckboxItem, Blockquote, Table],
    Field(discriminator="type"),
]


class StyledRun(_Frozen):
    """A fragment of a line with its formatting flags."""
    text: str
    bold: bool = False
    italic: bool = False
    code: bool = False
    annotated: bool = False
    line_break: bool = False
