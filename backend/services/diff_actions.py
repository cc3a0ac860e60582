"""
Diff Actions - Build and deliver confirm/cancel decisions
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import aiohttp

from models.action import DiffAction, DiffActionData, DiffActionPayload
from models.config import FileDiffConfig
from services.config_manager import get_file_diff_config

logger = logging.getLogger(__name__)

ACTION_EVENTS: dict[str, str] = {
    "confirm": "file_diff_confirm",
    "cancel": "file_diff_cancel",
}


class DiffActionError(RuntimeError):
    """Raised when the backend refuses or cannot receive a diff action"""


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_diff_action_payload(
    action: DiffAction,
    data: DiffActionData,
    config: FileDiffConfig | None = None,
) -> DiffActionPayload:
    """Package a decision with the content it applies to"""
    config = config or get_file_diff_config()
    return DiffActionPayload(
        action=action,
        file_path=data.file_path,
        original_content=data.original_content,
        modified_content=data.modified_content,
        view_mode=data.view_mode,
        timestamp=_iso_now() if config.action_timestamp else None,
    )


class DiffActionClient:
    """Deliver diff decisions to the backend over HTTP"""

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8000",
        config: FileDiffConfig | None = None,
        timeout_seconds: int = 10,
    ):
        self.base_url = base_url.rstrip("/")
        self.config = config
        self.timeout_seconds = timeout_seconds

    @property
    def action_url(self) -> str:
        return f"{self.base_url}/api/diff/action"

    async def emit(self, payload: DiffActionPayload) -> dict[str, Any]:
        """POST a payload and return the backend acknowledgement"""
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(
                    self.action_url, json=payload.model_dump(exclude_none=True)
                ) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        logger.error("Diff action rejected (HTTP %d): %s", response.status, error_text)
                        raise DiffActionError(
                            f"Diff action rejected (HTTP {response.status}): {error_text}"
                        )
                    return await response.json()
        except aiohttp.ClientError as e:
            raise DiffActionError(f"Network error: {e}") from e

    async def confirm(self, data: DiffActionData) -> dict[str, Any]:
        return await self.emit(build_diff_action_payload("confirm", data, self.config))

    async def cancel(self, data: DiffActionData) -> dict[str, Any]:
        return await self.emit(build_diff_action_payload("cancel", data, self.config))
