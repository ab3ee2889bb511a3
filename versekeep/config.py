import os
from pathlib import Path

DB_PATH = os.environ.get("VERSEKEEP_DB_PATH", str(Path.cwd() / "versekeep.db"))
DATABASE_URL = f"sqlite+aiosqlite:///{DB_PATH}"

# Reading progress settings
PROGRESS_TRACKING_ENABLED = os.environ.get("VERSEKEEP_PROGRESS_TRACKING", "1").strip().lower() not in (
    "0",
    "false",
    "no",
    "off",
)
RECENT_ACTIVITY_LIMIT = int(os.environ.get("VERSEKEEP_RECENT_ACTIVITY_LIMIT", "10"))
