"""Runtime settings read from the environment."""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_HOME = Path.home() / ".week_planner"
DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4o-mini"


@dataclass
class Settings:
    home: Path
    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    log_level: str = "INFO"

    @property
    def db_path(self) -> str:
        return str(self.home / "planner.db")

    @property
    def log_dir(self) -> Path:
        return self.home / "logs"


def load_settings(environ=None) -> Settings:
    env = os.environ if environ is None else environ
    home = env.get("WEEK_PLANNER_HOME")
    return Settings(
        home=Path(home).expanduser() if home else DEFAULT_HOME,
        api_key=env.get("WEEK_PLANNER_API_KEY") or env.get("OPENAI_API_KEY"),
        base_url=env.get("WEEK_PLANNER_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
        model=env.get("WEEK_PLANNER_MODEL", DEFAULT_MODEL),
        log_level=env.get("WEEK_PLANNER_LOG_LEVEL", "INFO").upper(),
    )
