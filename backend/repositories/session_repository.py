import json
import logging
from pathlib import Path

from pydantic import ValidationError

from backend.repositories.json_store import atomic_write_json
from backend.schemas import SessionState


logger = logging.getLogger(__name__)


def load_session(path: Path) -> SessionState:
    if not path.exists():
        return SessionState()
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError, ValueError) as exc:
        logger.warning("Could not read session file %s: %s", path, exc)
        return SessionState()
    if not isinstance(data, dict):
        logger.warning("Session file %s does not hold an object, starting empty", path)
        return SessionState()
    try:
        return SessionState.model_validate(data)
    except ValidationError as exc:
        logger.warning("Session file %s failed validation: %s", path, exc)
        return SessionState()


def write_session(path: Path, state: SessionState) -> None:
    atomic_write_json(path, state.model_dump())
