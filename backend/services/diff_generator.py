"""
Diff Generator Service - Full diff results for the file diff view
"""

from __future__ import annotations

from difflib import unified_diff
from typing import Sequence

from models.config import FileDiffConfig
from models.diff import DiffDisplayItem, DiffFoldItem, DiffLine, DiffResult, DiffViewMode
from services.config_manager import get_file_diff_config
from services.diff_engine import (
    LcsDiffer,
    LineDiffer,
    build_side_by_side_rows,
    create_folded_diff,
)
from services.diff_sources import ChunkDiffer, SequenceMatcherChunkSource
from services.highlighter import (
    Highlighter,
    PygmentsHighlighter,
    highlight_line,
    resolve_language_from_path,
)


class DiffGenerator:
    """Run the diff pipeline with a fixed config and injected capabilities"""

    def __init__(
        self,
        config: FileDiffConfig | None = None,
        differ: LineDiffer | None = None,
        highlighter: Highlighter | None = None,
    ):
        self.config = config or get_file_diff_config()
        self.differ = differ or LcsDiffer()
        self.highlighter = highlighter

    def compute_lines(self, original_content: str, new_content: str) -> list[DiffLine]:
        return self.differ.diff_lines(original_content, new_content, self.config)

    def generate_diff(
        self,
        original_content: str,
        new_content: str,
        file_path: str,
        view_mode: DiffViewMode = "unified",
    ) -> DiffResult:
        """Generate structured diff from original and new content"""
        lines = self.compute_lines(original_content, new_content)
        items = create_folded_diff(lines, self.config)
        rows = build_side_by_side_rows(items, self.config)

        return DiffResult(
            file_path=file_path,
            language=resolve_language_from_path(file_path, self.config),
            view_mode=view_mode,
            lines=lines,
            items=items,
            rows=rows,
            added=sum(1 for line in lines if line.type == "add"),
            removed=sum(1 for line in lines if line.type == "remove"),
            unified_diff=self._unified_diff(original_content, new_content, file_path),
        )

    def highlight(self, line: DiffLine | str, language: str | None) -> str:
        return highlight_line(line, language, self.config, self.highlighter)

    def _unified_diff(self, original_content: str, new_content: str, file_path: str) -> str:
        original_lines = original_content.splitlines(keepends=True)
        new_lines = new_content.splitlines(keepends=True)

        # Ensure last lines have newlines for proper diff
        if original_lines and not original_lines[-1].endswith("\n"):
            original_lines[-1] += "\n"
        if new_lines and not new_lines[-1].endswith("\n"):
            new_lines[-1] += "\n"

        path = file_path or "file"
        return "".join(
            unified_diff(
                original_lines,
                new_lines,
                fromfile=f"a/{path}",
                tofile=f"b/{path}",
                n=self.config.context_lines,
            )
        )

    @staticmethod
    def render_inline_preview(items: Sequence[DiffDisplayItem]) -> str:
        """Plain-text unified view of folded display items"""
        result_lines = []

        for item in items:
            if isinstance(item, DiffFoldItem):
                result_lines.append(f"... {item.count} lines hidden")
                continue
            line = item.line
            if line.type == "add":
                result_lines.append(f"+ {line.content}")
            elif line.type == "remove":
                result_lines.append(f"- {line.content}")
            else:
                result_lines.append(f"  {line.content}")

        return "\n".join(result_lines)


def build_diff_generator(config: FileDiffConfig | None = None) -> DiffGenerator:
    """Pick the differ and highlighter named by the config"""
    config = config or get_file_diff_config()
    if config.diff_backend == "difflib":
        differ: LineDiffer = ChunkDiffer(SequenceMatcherChunkSource())
    else:
        differ = LcsDiffer()
    highlighter = PygmentsHighlighter() if config.highlighter == "pygments" else None
    return DiffGenerator(config=config, differ=differ, highlighter=highlighter)
