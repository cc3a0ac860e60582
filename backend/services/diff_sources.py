"""
Chunk-based diff sources

A chunk source produces multi-line added/removed/unchanged chunks. ChunkDiffer
normalizes them into the same classified lines the LCS engine produces, so the
rest of the pipeline does not care which one ran.
"""

from __future__ import annotations

import logging
from difflib import SequenceMatcher
from typing import Protocol, Sequence

from models.config import FileDiffConfig
from models.diff import DiffChunk, DiffLine
from services.diff_engine import LINE_BREAK, EditScript, compute_diff_lines, number_lines, split_lines

logger = logging.getLogger(__name__)


class DiffChunkSource(Protocol):
    def diff_chunks(self, original: str, modified: str) -> list[DiffChunk]: ...


class SequenceMatcherChunkSource:
    """Chunk source backed by difflib.SequenceMatcher"""

    def diff_chunks(self, original: str, modified: str) -> list[DiffChunk]:
        original_lines = self._terminated_lines(original)
        new_lines = self._terminated_lines(modified)

        matcher = SequenceMatcher(None, original_lines, new_lines, autojunk=False)
        chunks = []

        for tag, i1, i2, j1, j2 in matcher.get_opcodes():
            if tag == "equal":
                chunks.append(DiffChunk(value="".join(original_lines[i1:i2])))
                continue
            if tag in ("delete", "replace"):
                chunks.append(DiffChunk(removed=True, value="".join(original_lines[i1:i2])))
            if tag in ("insert", "replace"):
                chunks.append(DiffChunk(added=True, value="".join(new_lines[j1:j2])))

        return chunks

    @staticmethod
    def _terminated_lines(text: str) -> list[str]:
        # Same breaks as split_lines; every line, even an empty blob's, ends in "\n"
        lines = LINE_BREAK.split(text)
        if len(lines) > 1 and lines[-1] == "":
            lines.pop()
        return [line + "\n" for line in lines]


def chunk_lines(value: str) -> list[str]:
    """Lines of one chunk; the final "\\n" terminates the last line rather than opening a new one"""
    lines = value.split("\n")
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()
    return lines


def covers(script: EditScript, original_lines: Sequence[str], modified_lines: Sequence[str]) -> bool:
    """True when the script reproduces both sides line for line"""
    old_side = [content for line_type, content in script if line_type != "add"]
    new_side = [content for line_type, content in script if line_type != "remove"]
    return old_side == list(original_lines) and new_side == list(modified_lines)


class ChunkDiffer:
    """
    LineDiffer that adapts a chunk source, falling back to the LCS engine.

    The fallback also runs when the chunks do not rebuild exactly the lines
    split_lines produces, e.g. a source that breaks lines on other characters
    or keeps the empty line after a final newline under trimming.
    """

    def __init__(self, source: DiffChunkSource):
        self.source = source

    def diff_lines(self, original: str, modified: str, config: FileDiffConfig) -> list[DiffLine]:
        try:
            chunks = self.source.diff_chunks(original, modified)
        except Exception as e:
            logger.warning("Chunk diff source failed, using built-in diff: %s", e)
            chunks = None

        if not chunks:
            return compute_diff_lines(original, modified, config)

        script: EditScript = []
        for chunk in chunks:
            if chunk.added:
                line_type = "add"
            elif chunk.removed:
                line_type = "remove"
            else:
                line_type = "context"
            script.extend((line_type, line) for line in chunk_lines(chunk.value))

        if not covers(script, split_lines(original, config), split_lines(modified, config)):
            logger.warning("Chunk diff source disagrees with the line split, using built-in diff")
            return compute_diff_lines(original, modified, config)

        return number_lines(script, config)
