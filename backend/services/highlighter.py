"""
Syntax highlighting for single diff lines
"""

from __future__ import annotations

import html
import logging
from typing import Protocol

from pygments import highlight as pygments_highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from models.config import FileDiffConfig
from models.diff import DiffLine
from services.config_manager import get_file_diff_config

logger = logging.getLogger(__name__)

FILE_EXTENSION_MAP: dict[str, str] = {
    "ts": "typescript",
    "tsx": "tsx",
    "js": "javascript",
    "jsx": "jsx",
    "json": "json",
    "md": "markdown",
    "py": "python",
    "rs": "rust",
    "go": "go",
    "css": "css",
    "html": "html",
}


class Highlighter(Protocol):
    """Returns HTML markup for code, or None to decline the language"""

    def highlight(self, code: str, language: str) -> str | None: ...


class PygmentsHighlighter:
    """Highlighter backed by Pygments lexers and the HTML formatter"""

    def __init__(self):
        self._formatter = HtmlFormatter(nowrap=True)

    def highlight(self, code: str, language: str) -> str | None:
        try:
            lexer = get_lexer_by_name(language, stripnl=False, ensurenl=False)
        except ClassNotFound:
            return None
        return pygments_highlight(code, lexer, self._formatter).rstrip("\n")


def escape_html(value: str) -> str:
    """Escape &, <, >, " and '"""
    return html.escape(value, quote=True).replace("&#x27;", "&#39;")


def resolve_language_from_path(file_path: str | None, config: FileDiffConfig | None = None) -> str:
    """Map a file extension to a language name"""
    config = config or get_file_diff_config()
    if not file_path:
        return config.fallback_language

    segments = file_path.split(".")
    if len(segments) <= 1:
        return config.fallback_language

    ext = segments[-1].lower()
    return FILE_EXTENSION_MAP.get(ext, config.fallback_language)


def highlight_line(
    line: DiffLine | str,
    language: str | None = None,
    config: FileDiffConfig | None = None,
    highlighter: Highlighter | None = None,
) -> str:
    """Highlighted (or at least escaped) markup for one line"""
    config = config or get_file_diff_config()
    content = line.content if isinstance(line, DiffLine) else line
    truncated = content[: config.highlight_max_length]

    if highlighter is not None and language:
        try:
            highlighted = highlighter.highlight(truncated, language)
        except Exception as e:
            logger.warning("Highlighter failed for %s, escaping instead: %s", language, e)
            highlighted = None
        if highlighted is not None:
            return highlighted

    return escape_html(truncated)
