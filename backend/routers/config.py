"""Configuration API endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from models.config import FileDiffConfig
from services.config_manager import ConfigManager, get_file_diff_config

router = APIRouter()

CONFIG_KEYS = frozenset(to_camel(name) for name in FileDiffConfig.model_fields)


@router.get("", response_model=FileDiffConfig)
async def get_config() -> FileDiffConfig:
    """Get effective file diff configuration"""
    return get_file_diff_config(ConfigManager.get_instance())


@router.put("")
async def update_config(request: dict[str, Any]) -> dict[str, Any]:
    """Update file diff configuration (partial, camelCase or snake_case keys)"""
    # Accept either spelling, persist camelCase
    sent = {}
    for key, value in request.items():
        alias = to_camel(key) if key in FileDiffConfig.model_fields else key
        if alias not in CONFIG_KEYS:
            raise HTTPException(status_code=400, detail=f"Unknown setting: {key}")
        sent[alias] = value

    config_manager = ConfigManager.get_instance()
    current = get_file_diff_config(config_manager)

    try:
        updated = FileDiffConfig.model_validate({**current.model_dump(by_alias=True), **sent})
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid configuration: {e}")

    validated = updated.model_dump(by_alias=True)
    config_manager.update_diff_overrides({key: validated[key] for key in sent})

    return {
        "status": "success",
        "message": "Configuration updated",
        "config": get_file_diff_config(config_manager).model_dump(by_alias=True),
    }


@router.post("/reset")
async def reset_config() -> dict[str, Any]:
    """Drop persisted overrides and fall back to env/defaults"""
    config_manager = ConfigManager.get_instance()
    config_manager.reset_diff_overrides()
    return {
        "status": "success",
        "message": "Configuration reset",
        "config": get_file_diff_config(config_manager).model_dump(by_alias=True),
    }
