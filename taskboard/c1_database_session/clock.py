"""Server-side timestamps for Taskboard records."""

import threading
from datetime import datetime, timedelta, timezone

_lock = threading.Lock()
_last = datetime.min


def utcnow() -> datetime:
    """Naive UTC timestamp, strictly increasing within the process.

    Records created back to back never share a timestamp, so ordering by
    creation time is total.
    """
    global _last
    with _lock:
        now = datetime.now(timezone.utc).replace(tzinfo=None)
        if now <= _last:
            now = _last + timedelta(microseconds=1)
        _last = now
        return now
