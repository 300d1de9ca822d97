"""Loading and saving the planner state."""
import json
import logging
import secrets
import sqlite3
import string
from datetime import datetime

from week_planner.db import DEFAULT_DB_PATH, read_value, write_value
from week_planner.models import AppState

logger = logging.getLogger(__name__)

STORAGE_KEY = "12wy_pvs_data_v1"
ID_LENGTH = 13
_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_id() -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(ID_LENGTH))


def initial_state() -> AppState:
    return AppState(
        vision="",
        goals=(),
        current_week=1,
        weeks=(),
        is_calendar_connected=False,
        connected_email=None,
        start_date=datetime.now().isoformat(),
    )


def load_state(db_path: str = DEFAULT_DB_PATH) -> AppState:
    """Return the stored state, or a fresh one if nothing usable is stored."""
    try:
        raw = read_value(db_path, STORAGE_KEY)
    except sqlite3.Error:
        logger.exception("Failed to read state from %s", db_path)
        return initial_state()
    if not raw:
        return initial_state()
    try:
        return AppState.from_dict(json.loads(raw))
    except (ValueError, KeyError, TypeError, AttributeError):
        logger.exception("Failed to parse stored state, starting fresh")
        return initial_state()


def save_state(db_path: str, state: AppState) -> bool:
    """Persist the state. Failures are logged and reported as False."""
    try:
        write_value(
            db_path,
            STORAGE_KEY,
            json.dumps(state.to_dict(), ensure_ascii=False),
            datetime.now().isoformat(),
        )
    except sqlite3.Error:
        logger.exception("Failed to save state to %s", db_path)
        return False
    return True
