"""File diff configuration model"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FileDiffConfig(BaseModel):
    """Immutable settings read once per diff computation"""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    context_lines: int = Field(default=3, ge=0)
    fold_context: int = Field(default=2, ge=0)
    fold_threshold: int = Field(default=6, ge=0)
    line_number_start: int = Field(default=1, ge=1)
    max_matrix_cells: int = Field(default=40000, ge=0)
    trim_trailing_newline: bool = True
    fallback_language: str = "plaintext"
    highlight_max_length: int = Field(default=2000, ge=0)
    action_timestamp: bool = True
    pair_window: int = Field(default=1, ge=1)
    diff_backend: Literal["lcs", "difflib"] = "lcs"
    highlighter: Literal["pygments", "none"] = "pygments"
