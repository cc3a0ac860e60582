"""Models module - Pydantic data models"""

from .action import DiffAction, DiffActionData, DiffActionPayload, DiffActionRecord
from .config import FileDiffConfig
from .diff import (
    DiffChunk,
    DiffDisplayItem,
    DiffFoldItem,
    DiffLine,
    DiffLineItem,
    DiffLineType,
    DiffRequest,
    DiffResult,
    DiffRow,
    DiffRowType,
    DiffViewMode,
    HighlightRequest,
    HighlightResponse,
)

__all__ = [
    # Diff models
    "DiffChunk",
    "DiffDisplayItem",
    "DiffFoldItem",
    "DiffLine",
    "DiffLineItem",
    "DiffLineType",
    "DiffRequest",
    "DiffResult",
    "DiffRow",
    "DiffRowType",
    "DiffViewMode",
    "HighlightRequest",
    "HighlightResponse",
    # Action models
    "DiffAction",
    "DiffActionData",
    "DiffActionPayload",
    "DiffActionRecord",
    # Config
    "FileDiffConfig",
]
