from __future__ import annotations

from models.config import FileDiffConfig
from services.diff_engine import split_lines


def test_split_lines_handles_lf_and_crlf(config: FileDiffConfig) -> None:
    assert split_lines("a\nb\r\nc", config) == ["a", "b", "c"]


def test_split_lines_drops_single_trailing_empty_line(config: FileDiffConfig) -> None:
    assert split_lines("a\nb\n", config) == split_lines("a\nb", config) == ["a", "b"]


def test_split_lines_only_drops_one_trailing_empty_line(config: FileDiffConfig) -> None:
    assert split_lines("a\n\n", config) == ["a", ""]


def test_split_lines_keeps_trailing_empty_line_when_disabled() -> None:
    config = FileDiffConfig(trim_trailing_newline=False)
    assert split_lines("a\nb\n", config) == ["a", "b", ""]


def test_split_lines_empty_input_is_one_empty_line(config: FileDiffConfig) -> None:
    assert split_lines("", config) == [""]


def test_split_lines_lone_newline_is_not_trimmed_to_nothing(config: FileDiffConfig) -> None:
    assert split_lines("\n", config) == [""]


def test_split_lines_reads_env_when_no_config(monkeypatch) -> None:
    monkeypatch.setenv("FILE_DIFF_TRIM_TRAILING_NEWLINE", "false")
    assert split_lines("a\n") == ["a", ""]
