"""System clock adapter."""

from datetime import UTC, datetime


class SystemClock:
    """Wall clock in UTC."""

    def now_utc(self) -> datetime:
        return datetime.now(UTC)
