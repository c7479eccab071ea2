from datetime import datetime, timezone
from typing import Optional


def isoformat(timestamp: Optional[float]) -> Optional[str]:
    """Epoch seconds → ISO-8601 UTC string (None passes through)."""
    if timestamp is None:
        return None
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
