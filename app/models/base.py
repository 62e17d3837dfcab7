from datetime import datetime, timezone

from sqlalchemy import DateTime


def utcnow() -> datetime:
    """Timezone-aware UTC timestamp."""
    return datetime.now(timezone.utc)


# Column type for every datetime field; stored values are UTC
UTCDateTime = DateTime(timezone=True)
