"""Diff-related data models"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

DiffLineType = Literal["context", "add", "remove"]
DiffRowType = Literal["context", "add", "remove", "modify", "fold"]
DiffViewMode = Literal["unified", "split"]


class DiffLine(BaseModel):
    """A single classified line of an edit script"""

    model_config = ConfigDict(frozen=True)

    type: DiffLineType
    content: str
    old_line: int | None = None  # 1-indexed, absent for "add"
    new_line: int | None = None  # 1-indexed, absent for "remove"


class DiffLineItem(BaseModel):
    """Display item wrapping one visible line"""

    model_config = ConfigDict(frozen=True)

    type: Literal["line"] = "line"
    line: DiffLine


class DiffFoldItem(BaseModel):
    """Display item standing in for a collapsed run of context lines"""

    model_config = ConfigDict(frozen=True)

    type: Literal["fold"] = "fold"
    id: str
    count: int
    lines: list[DiffLine] = []


DiffDisplayItem = Annotated[Union[DiffLineItem, DiffFoldItem], Field(discriminator="type")]


class DiffRow(BaseModel):
    """One row of the side-by-side view"""

    model_config = ConfigDict(frozen=True)

    type: DiffRowType
    id: str
    left: DiffLine | None = None
    right: DiffLine | None = None


class DiffChunk(BaseModel):
    """Multi-line chunk as produced by a chunk-based diffing capability"""

    added: bool = False
    removed: bool = False
    value: str


class DiffRequest(BaseModel):
    """Request to compare two versions of a file"""

    original_content: str
    modified_content: str
    file_path: str = ""
    view_mode: DiffViewMode = "unified"


class DiffResult(BaseModel):
    """Complete diff result for a file"""

    file_path: str
    language: str
    view_mode: DiffViewMode
    lines: list[DiffLine]
    items: list[DiffDisplayItem]
    rows: list[DiffRow]
    added: int
    removed: int
    unified_diff: str  # Standard unified diff format


class HighlightRequest(BaseModel):
    """Request to highlight a single line"""

    content: str
    language: str | None = None
    file_path: str | None = None


class HighlightResponse(BaseModel):
    """Highlighted markup for a single line"""

    language: str
    html: str
