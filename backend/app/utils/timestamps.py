from datetime import datetime, timezone


def now_iso() -> str:
    # Microsecond precision keeps "newest first" stable for rows created in the same second.
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")
