"""Fake Clock implementation for testing."""

from datetime import UTC, datetime

from prompt_kit.clock.abc import Clock


class FakeClock(Clock):
    """Clock frozen at a fixed instant.

    This class has NO public setup methods. All state is provided via constructor.
    """

    def __init__(self, fixed: datetime | None = None) -> None:
        self._fixed = fixed if fixed is not None else datetime(2024, 1, 1, tzinfo=UTC)

    def now(self) -> datetime:
        return self._fixed
