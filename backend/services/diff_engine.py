"""
Diff Engine - Line-level diffing, context folding and side-by-side rows

Everything here is a pure function of its arguments. Pass a FileDiffConfig to
pin the settings; otherwise they are read from the environment on each call.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Protocol, Sequence

from models.config import FileDiffConfig
from models.diff import (
    DiffDisplayItem,
    DiffFoldItem,
    DiffLine,
    DiffLineItem,
    DiffLineType,
    DiffRow,
)
from services.config_manager import get_file_diff_config

logger = logging.getLogger(__name__)

LINE_BREAK = re.compile(r"\r?\n")

EditScript = list[tuple[DiffLineType, str]]


class LineDiffer(Protocol):
    """Anything that turns two blobs into classified lines"""

    def diff_lines(
        self, original: str, modified: str, config: FileDiffConfig
    ) -> list[DiffLine]: ...


def split_lines(text: str, config: FileDiffConfig | None = None) -> list[str]:
    """Split on \\r\\n or \\n, optionally dropping the empty line after a final newline"""
    config = config or get_file_diff_config()
    lines = LINE_BREAK.split(text)
    if config.trim_trailing_newline and len(lines) > 1 and lines[-1] == "":
        lines.pop()
    return lines


def number_lines(script: Iterable[tuple[DiffLineType, str]], config: FileDiffConfig) -> list[DiffLine]:
    """Attach old/new line numbers to an ordered edit script"""
    lines: list[DiffLine] = []
    old_line = config.line_number_start
    new_line = config.line_number_start

    for line_type, content in script:
        if line_type == "context":
            lines.append(DiffLine(type="context", content=content, old_line=old_line, new_line=new_line))
            old_line += 1
            new_line += 1
        elif line_type == "remove":
            lines.append(DiffLine(type="remove", content=content, old_line=old_line))
            old_line += 1
        else:
            lines.append(DiffLine(type="add", content=content, new_line=new_line))
            new_line += 1

    return lines


def build_fallback_diff(
    original_lines: Sequence[str],
    modified_lines: Sequence[str],
    config: FileDiffConfig,
) -> list[DiffLine]:
    """
    Position-by-position comparison.

    Linear in time and memory, but the script is not minimal: a single
    inserted line near the top turns every following line into a
    remove/add pair.
    """
    script: EditScript = []

    for i in range(max(len(original_lines), len(modified_lines))):
        original = original_lines[i] if i < len(original_lines) else None
        updated = modified_lines[i] if i < len(modified_lines) else None
        if original == updated:
            script.append(("context", original))
            continue
        if original is not None:
            script.append(("remove", original))
        if updated is not None:
            script.append(("add", updated))

    return number_lines(script, config)


def build_lcs_diff(
    original_lines: Sequence[str],
    modified_lines: Sequence[str],
    config: FileDiffConfig,
) -> list[DiffLine]:
    """Minimal line diff from an LCS table, bounded by config.max_matrix_cells"""
    rows = len(original_lines)
    cols = len(modified_lines)
    if rows * cols > config.max_matrix_cells:
        logger.debug(
            "LCS table of %d cells exceeds %d, using positional diff",
            rows * cols,
            config.max_matrix_cells,
        )
        return build_fallback_diff(original_lines, modified_lines, config)

    lcs = [[0] * (cols + 1) for _ in range(rows + 1)]
    for i in range(1, rows + 1):
        for j in range(1, cols + 1):
            if original_lines[i - 1] == modified_lines[j - 1]:
                lcs[i][j] = lcs[i - 1][j - 1] + 1
            else:
                lcs[i][j] = max(lcs[i - 1][j], lcs[i][j - 1])

    # Backtrack from the bottom-right corner; ties go to "remove"
    script: EditScript = []
    i, j = rows, cols
    while i > 0 and j > 0:
        if original_lines[i - 1] == modified_lines[j - 1]:
            script.append(("context", original_lines[i - 1]))
            i -= 1
            j -= 1
        elif lcs[i - 1][j] >= lcs[i][j - 1]:
            script.append(("remove", original_lines[i - 1]))
            i -= 1
        else:
            script.append(("add", modified_lines[j - 1]))
            j -= 1

    while i > 0:
        script.append(("remove", original_lines[i - 1]))
        i -= 1

    while j > 0:
        script.append(("add", modified_lines[j - 1]))
        j -= 1

    script.reverse()
    return number_lines(script, config)


def compute_diff_lines(
    original: str,
    modified: str,
    config: FileDiffConfig | None = None,
) -> list[DiffLine]:
    """Classify every line of original/modified as context, add or remove"""
    config = config or get_file_diff_config()
    return build_lcs_diff(split_lines(original, config), split_lines(modified, config), config)


class LcsDiffer:
    """Built-in LineDiffer backed by compute_diff_lines"""

    def diff_lines(self, original: str, modified: str, config: FileDiffConfig) -> list[DiffLine]:
        return compute_diff_lines(original, modified, config)


def _flush_context(
    buffer: list[DiffLine],
    fold_id: str,
    config: FileDiffConfig,
) -> tuple[list[DiffDisplayItem], bool]:
    """Turn one run of context lines into display items; report whether it folded"""
    if len(buffer) <= config.fold_threshold:
        return [DiffLineItem(line=line) for line in buffer], False

    head = buffer[: config.fold_context]
    # Head and tail never overlap, so head + hidden + tail is always the full run
    tail_start = max(len(buffer) - config.fold_context, len(head))
    tail = buffer[tail_start:]
    hidden = buffer[len(head) : tail_start]

    items: list[DiffDisplayItem] = [DiffLineItem(line=line) for line in head]
    items.append(DiffFoldItem(id=fold_id, count=len(hidden), lines=hidden))
    items.extend(DiffLineItem(line=line) for line in tail)
    return items, True


def create_folded_diff(
    lines: Sequence[DiffLine],
    config: FileDiffConfig | None = None,
) -> list[DiffDisplayItem]:
    """Collapse long runs of context lines into fold items"""
    config = config or get_file_diff_config()
    items: list[DiffDisplayItem] = []
    buffer: list[DiffLine] = []
    fold_index = 0

    def flush():
        nonlocal buffer, fold_index
        if not buffer:
            return
        flushed, folded = _flush_context(buffer, f"fold-{fold_index}", config)
        items.extend(flushed)
        if folded:
            fold_index += 1
        buffer = []

    for line in lines:
        if line.type == "context":
            buffer.append(line)
        else:
            flush()
            items.append(DiffLineItem(line=line))
    flush()

    return items


def build_side_by_side_rows(
    items: Sequence[DiffDisplayItem],
    config: FileDiffConfig | None = None,
) -> list[DiffRow]:
    """
    Pair display items into rows for the split view.

    A removed line is merged with an added line into a "modify" row only when
    the add sits exactly pair_window items ahead. There is no forward scan, so
    remove, remove, add yields two "remove" rows and one "add" row under the
    default window.
    """
    config = config or get_file_diff_config()
    rows: list[DiffRow] = []
    i = 0

    while i < len(items):
        item = items[i]
        if isinstance(item, DiffFoldItem):
            rows.append(DiffRow(type="fold", id=item.id))
            i += 1
            continue

        line = item.line
        ahead = i + config.pair_window
        next_item = items[ahead] if ahead < len(items) else None
        if (
            line.type == "remove"
            and isinstance(next_item, DiffLineItem)
            and next_item.line.type == "add"
        ):
            rows.append(DiffRow(type="modify", left=line, right=next_item.line, id=f"row-{i}"))
            i += config.pair_window + 1
            continue

        if line.type == "add":
            rows.append(DiffRow(type="add", right=line, id=f"row-{i}"))
        elif line.type == "remove":
            rows.append(DiffRow(type="remove", left=line, id=f"row-{i}"))
        else:
            rows.append(DiffRow(type="context", left=line, right=line, id=f"row-{i}"))
        i += 1

    return rows
