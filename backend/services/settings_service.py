from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from backend.config import (
    APP_TITLE,
    LOG_LEVEL,
    RECENT_ROUNDS_LIMIT,
    SESSION_FILE_PATH,
    SETTINGS_FILE_PATH,
)


LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class AppSettings(BaseModel):
    title: str = APP_TITLE
    log_level: str = LOG_LEVEL
    session_file: Path = SESSION_FILE_PATH
    history_rounds: int = Field(default=RECENT_ROUNDS_LIMIT, ge=RECENT_ROUNDS_LIMIT, le=50)

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        v = (v or "").strip().upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(LOG_LEVELS)}")
        return v


DEFAULT_SETTINGS = AppSettings()


def load_settings(path: Path = SETTINGS_FILE_PATH) -> tuple[AppSettings, dict[str, Any]]:
    """
    Returns parsed settings + metadata.
    Metadata contains source and optional error string.
    """
    if not path.exists():
        return DEFAULT_SETTINGS, {"source": "defaults", "path": str(path), "error": None}

    try:
        with path.open("r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, ValueError) as exc:
        logging.getLogger(__name__).warning("Could not read settings %s: %s", path, exc)
        return DEFAULT_SETTINGS, {"source": "defaults", "path": str(path), "error": f"read_error: {exc}"}

    try:
        parsed = AppSettings.model_validate(payload)
        return parsed, {"source": "file", "path": str(path), "error": None}
    except ValidationError as exc:
        logging.getLogger(__name__).warning("Invalid settings in %s, using defaults", path)
        return DEFAULT_SETTINGS, {"source": "defaults", "path": str(path), "error": f"validation_error: {exc}"}


def settings_as_dict(settings: AppSettings) -> dict[str, Any]:
    return settings.model_dump(mode="json")
