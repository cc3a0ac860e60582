"""Diff action (confirm/cancel) data models"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

from .diff import DiffViewMode

DiffAction = Literal["confirm", "cancel"]


class DiffActionData(BaseModel):
    """What the user was looking at when they made a decision"""

    model_config = ConfigDict(frozen=True)

    file_path: str
    original_content: str
    modified_content: str
    view_mode: DiffViewMode = "unified"


class DiffActionPayload(DiffActionData):
    """Transport-ready confirm/cancel decision"""

    action: DiffAction
    timestamp: str | None = None  # ISO-8601, omitted when stamping is disabled


class DiffActionRecord(BaseModel):
    """Backend acknowledgement of a recorded decision"""

    status: str
    event: str
    file_path: str
