# coachrpg/routes/helpers.py
from datetime import datetime
from typing import Any, Optional


def safe_int(v: Any, default: int = 0) -> int:
    try:
        return int(v)
    except (TypeError, ValueError):
        return default


def parse_datetime(v: Any) -> Optional[datetime]:
    """ISO-8601 string -> naive datetime (UTC offsets are converted to local time)."""
    if not v or not isinstance(v, str):
        return None
    try:
        dt = datetime.fromisoformat(v.replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt
