"""Services module - Business logic layer"""

from .config_manager import ConfigManager, get_file_diff_config
from .diff_actions import DiffActionClient, DiffActionError, build_diff_action_payload
from .diff_engine import (
    LcsDiffer,
    build_side_by_side_rows,
    compute_diff_lines,
    create_folded_diff,
    split_lines,
)
from .diff_generator import DiffGenerator, build_diff_generator
from .diff_sources import ChunkDiffer, SequenceMatcherChunkSource
from .highlighter import PygmentsHighlighter, highlight_line, resolve_language_from_path

__all__ = [
    "ConfigManager",
    "get_file_diff_config",
    "DiffActionClient",
    "DiffActionError",
    "build_diff_action_payload",
    "LcsDiffer",
    "build_side_by_side_rows",
    "compute_diff_lines",
    "create_folded_diff",
    "split_lines",
    "DiffGenerator",
    "build_diff_generator",
    "ChunkDiffer",
    "SequenceMatcherChunkSource",
    "PygmentsHighlighter",
    "highlight_line",
    "resolve_language_from_path",
]
