from __future__ import annotations

import asyncio
from datetime import datetime

import pytest
from aiohttp import test_utils, web

from models.action import DiffActionData
from models.config import FileDiffConfig
from services.diff_actions import (
    DiffActionClient,
    DiffActionError,
    build_diff_action_payload,
)

ORIGINAL_CONTENT = "alpha\nbeta\ncharlie"
MODIFIED_CONTENT = ORIGINAL_CONTENT + "\ndelta"
FILE_PATH = "/tmp/example.ts"


@pytest.fixture
def data() -> DiffActionData:
    return DiffActionData(
        file_path=FILE_PATH,
        original_content=ORIGINAL_CONTENT,
        modified_content=MODIFIED_CONTENT,
        view_mode="unified",
    )


def test_build_confirm_payload(data: DiffActionData, config: FileDiffConfig) -> None:
    payload = build_diff_action_payload("confirm", data, config)

    assert payload.action == "confirm"
    assert payload.file_path == FILE_PATH
    assert payload.original_content == ORIGINAL_CONTENT
    assert payload.modified_content == MODIFIED_CONTENT
    assert payload.view_mode == "unified"


def test_payload_timestamp_is_iso_8601(data: DiffActionData, config: FileDiffConfig) -> None:
    payload = build_diff_action_payload("cancel", data, config)

    assert payload.timestamp is not None
    assert payload.timestamp.endswith("Z")
    stamped = datetime.fromisoformat(payload.timestamp.replace("Z", "+00:00"))
    assert stamped.tzinfo is not None


def test_payload_without_timestamp(data: DiffActionData) -> None:
    payload = build_diff_action_payload("confirm", data, FileDiffConfig(action_timestamp=False))

    assert payload.timestamp is None
    assert "timestamp" not in payload.model_dump(exclude_none=True)


def test_payload_does_not_validate_paths(config: FileDiffConfig) -> None:
    data = DiffActionData(file_path="", original_content="", modified_content="x" * 100_000)
    payload = build_diff_action_payload("confirm", data, config)
    assert payload.file_path == ""
    assert len(payload.modified_content) == 100_000


def _serve(handler, scenario):
    async def run():
        app = web.Application()
        app.router.add_post("/api/diff/action", handler)
        async with test_utils.TestServer(app) as server:
            return await scenario(str(server.make_url("/")))

    return asyncio.run(run())


def test_client_posts_payload(data: DiffActionData) -> None:
    received = []

    async def handler(request: web.Request) -> web.Response:
        received.append(await request.json())
        return web.json_response({"status": "accepted", "event": "file_diff_confirm"})

    async def scenario(base_url: str):
        client = DiffActionClient(base_url=base_url, config=FileDiffConfig(action_timestamp=False))
        return await client.confirm(data)

    result = _serve(handler, scenario)

    assert result == {"status": "accepted", "event": "file_diff_confirm"}
    assert received == [
        {
            "action": "confirm",
            "file_path": FILE_PATH,
            "original_content": ORIGINAL_CONTENT,
            "modified_content": MODIFIED_CONTENT,
            "view_mode": "unified",
        }
    ]


def test_client_cancel_sends_timestamp(data: DiffActionData) -> None:
    received = []

    async def handler(request: web.Request) -> web.Response:
        received.append(await request.json())
        return web.json_response({"status": "accepted"})

    async def scenario(base_url: str):
        return await DiffActionClient(base_url=base_url, config=FileDiffConfig()).cancel(data)

    _serve(handler, scenario)

    assert received[0]["action"] == "cancel"
    assert "timestamp" in received[0]


def test_client_raises_on_rejection(data: DiffActionData) -> None:
    async def handler(request: web.Request) -> web.Response:
        return web.Response(status=500, text="nope")

    async def scenario(base_url: str):
        with pytest.raises(DiffActionError, match="HTTP 500"):
            await DiffActionClient(base_url=base_url).confirm(data)

    _serve(handler, scenario)


def test_client_strips_trailing_slash() -> None:
    client = DiffActionClient(base_url="http://localhost:9000/")
    assert client.action_url == "http://localhost:9000/api/diff/action"
