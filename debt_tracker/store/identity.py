"""Id and timestamp generation for new debt records."""

from datetime import datetime, timezone
from typing import Container
from uuid import uuid4


def new_debt_id(taken: Container[str] = ()) -> str:
    """Fresh UUID4 text not present in `taken`."""
    while True:
        candidate = str(uuid4())
        if candidate not in taken:
            return candidate


def utc_now_iso() -> str:
    """
    Current UTC time as an ISO timestamp with milliseconds and a Z suffix,
    e.g. "2025-01-05T10:30:00.000Z". Timestamps in this format sort
    chronologically as plain strings.
    """
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"
