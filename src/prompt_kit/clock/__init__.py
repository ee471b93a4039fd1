from prompt_kit.clock.abc import Clock
from prompt_kit.clock.fake import FakeClock
from prompt_kit.clock.real import RealClock

__all__ = ["Clock", "FakeClock", "RealClock"]
