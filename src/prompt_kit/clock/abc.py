"""Clock abstraction for testing.

Registry timestamps come from an injected Clock so tests can pin them.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class Clock(ABC):
    """Abstract clock for dependency injection."""

    @abstractmethod
    def now(self) -> datetime:
        """Current time as a timezone-aware datetime."""
        ...

    def now_iso(self) -> str:
        """Current time as an ISO 8601 string, the format stored in the registry."""
        return self.now().isoformat()
