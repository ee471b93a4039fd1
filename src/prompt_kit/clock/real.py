"""Real clock implementation using the system time."""

from datetime import UTC, datetime

from prompt_kit.clock.abc import Clock


class RealClock(Clock):
    """Production implementation reading the system clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(UTC)
