"""Environment-variable-based configuration for the dashboard."""

from __future__ import annotations

import os
from pathlib import Path

_APP_DIR = Path(__file__).parent

PROFILES_DIR: Path = Path(os.environ.get("PROFILES_DIR", _APP_DIR / "profiles")).expanduser()
PLANS_DIR: Path = Path(os.environ.get("PLANS_DIR", _APP_DIR / "plans")).expanduser()
STRENGTH_SESSIONS_PER_WEEK: int = int(os.environ.get("STRENGTH_SESSIONS_PER_WEEK", "1"))
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
