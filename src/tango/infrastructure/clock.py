from datetime import UTC, datetime

from tango.domain.learning.ports import Clock


class SystemClock(Clock):
    """Wall clock, always in UTC."""

    def now(self) -> datetime:
        return datetime.now(UTC)
