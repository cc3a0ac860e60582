"""File diff API endpoints"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterator

from fastapi import APIRouter
from sse_starlette.sse import EventSourceResponse

from models.action import DiffActionPayload, DiffActionRecord
from models.diff import DiffRequest, DiffResult, HighlightRequest, HighlightResponse
from services.config_manager import ConfigManager, get_file_diff_config
from services.diff_actions import ACTION_EVENTS
from services.diff_generator import DiffGenerator, build_diff_generator
from services.highlighter import resolve_language_from_path

logger = logging.getLogger(__name__)

router = APIRouter()

# In-memory log of confirm/cancel decisions, newest last
action_log: list[dict[str, Any]] = []


def get_generator() -> DiffGenerator:
    """Diff generator for the current effective config"""
    config = get_file_diff_config(ConfigManager.get_instance())
    return build_diff_generator(config)


def iter_stream_events(result: DiffResult) -> Iterator[dict[str, Any]]:
    """SSE events for a diff result: one per row (split) or display item (unified)"""
    entries = result.rows if result.view_mode == "split" else result.items
    for entry in entries:
        yield {"event": "item", "data": entry.model_dump_json()}

    summary = result.model_dump(include={"file_path", "language", "view_mode", "added", "removed"})
    yield {"event": "done", "data": json.dumps(summary)}


@router.post("/compute", response_model=DiffResult)
async def compute_diff(request: DiffRequest) -> DiffResult:
    """Compare two versions of a file"""
    generator = get_generator()
    return generator.generate_diff(
        request.original_content,
        request.modified_content,
        request.file_path,
        request.view_mode,
    )


@router.post("/stream")
async def stream_diff(request: DiffRequest):
    """Compare two versions of a file and stream the result (SSE)"""
    generator = get_generator()

    async def event_generator():
        try:
            result = generator.generate_diff(
                request.original_content,
                request.modified_content,
                request.file_path,
                request.view_mode,
            )
            for event in iter_stream_events(result):
                yield event
        except Exception as e:
            logger.exception("Diff stream failed for %s", request.file_path)
            yield {"event": "error", "data": str(e)}

    return EventSourceResponse(event_generator())


@router.post("/highlight", response_model=HighlightResponse)
async def highlight(request: HighlightRequest) -> HighlightResponse:
    """Highlight a single line"""
    generator = get_generator()
    language = request.language or resolve_language_from_path(request.file_path, generator.config)
    return HighlightResponse(language=language, html=generator.highlight(request.content, language))


@router.post("/action", response_model=DiffActionRecord)
async def record_action(payload: DiffActionPayload) -> DiffActionRecord:
    """Record a confirm/cancel decision"""
    event = ACTION_EVENTS[payload.action]
    action_log.append({"event": event, **payload.model_dump(exclude_none=True)})
    logger.info("%s: %s (%s view)", event, payload.file_path, payload.view_mode)
    return DiffActionRecord(status="accepted", event=event, file_path=payload.file_path)


@router.get("/actions")
async def list_actions(file_path: str | None = None) -> dict[str, Any]:
    """List recorded decisions, optionally for a single file"""
    actions = [a for a in action_log if file_path is None or a["file_path"] == file_path]
    return {"actions": actions, "total": len(actions)}
