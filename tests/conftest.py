from __future__ import annotations

from pathlib import Path

import pytest

from models.config import FileDiffConfig
from models.diff import DiffLine
from services.config_manager import ConfigManager

_ENV_VARS = [
    "FILE_DIFF_CONTEXT_LINES",
    "FILE_DIFF_FOLD_CONTEXT",
    "FILE_DIFF_FOLD_THRESHOLD",
    "FILE_DIFF_LINE_NUMBER_START",
    "FILE_DIFF_MATRIX_CELLS",
    "FILE_DIFF_TRIM_TRAILING_NEWLINE",
    "FILE_DIFF_FALLBACK_LANGUAGE",
    "FILE_DIFF_HIGHLIGHT_MAX_LENGTH",
    "FILE_DIFF_ACTION_TIMESTAMP",
    "FILE_DIFF_PAIR_WINDOW",
    "FILE_DIFF_BACKEND",
    "FILE_DIFF_HIGHLIGHTER",
]


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path: Path) -> Path:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    config_dir = tmp_path / "config"
    monkeypatch.setenv("FILE_DIFF_CONFIG_DIR", str(config_dir))
    monkeypatch.setattr(ConfigManager, "_instance", None)
    return config_dir


@pytest.fixture
def config() -> FileDiffConfig:
    return FileDiffConfig()


def context(content: str, old: int, new: int) -> DiffLine:
    return DiffLine(type="context", content=content, old_line=old, new_line=new)


def add(content: str, new: int) -> DiffLine:
    return DiffLine(type="add", content=content, new_line=new)


def remove(content: str, old: int) -> DiffLine:
    return DiffLine(type="remove", content=content, old_line=old)


PAIRS = [
    ("", ""),
    ("", "a"),
    ("a", ""),
    ("a\nb\nc", "a\nc"),
    ("a\nb\nc", "c\nb\na"),
    ("x\na\ny", "x\nb\ny"),
    ("one\ntwo\nthree\nfour\n", "zero\none\nthree\nfour\nfive\n"),
    ("same\nsame\nsame", "same\nsame"),
    ("a\r\nb\r\n", "a\nb\nc\n"),
    ("a\x0cb\nz", "a\x0cc\nz"),
    ("x\ry", "x\rq"),
]


def side(lines: list[DiffLine], kinds: set[str]) -> list[str]:
    return [line.content for line in lines if line.type in kinds]
