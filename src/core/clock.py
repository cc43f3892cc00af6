from typing import Protocol

import pendulum


class Clock(Protocol):
    def now(self) -> pendulum.DateTime: ...

    def timestamp(self) -> int: ...


class SystemClock:
    """Wall clock in UTC, read fresh on every call."""

    def now(self) -> pendulum.DateTime:
        return pendulum.now(tz=pendulum.UTC)

    def timestamp(self) -> int:
        return int(self.now().timestamp())


class ManualClock:
    """Clock that only moves when told to. Used to simulate elapsed cooldowns."""

    def __init__(self, start: pendulum.DateTime | None = None):
        self._now = start or pendulum.datetime(2024, 1, 1, tz=pendulum.UTC)

    def now(self) -> pendulum.DateTime:
        return self._now

    def timestamp(self) -> int:
        return int(self._now.timestamp())

    def advance(self, **kwargs) -> pendulum.DateTime:
        self._now = self._now.add(**kwargs)
        return self._now

    def set(self, value: pendulum.DateTime) -> None:
        if value < self._now:
            raise ValueError("ManualClock cannot move backwards")
        self._now = value


system_clock = SystemClock()
