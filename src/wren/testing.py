"""Test helpers for wren applications.

Uses the same registry, store and server types as production; only the
clock is simulated.
"""

from datetime import UTC, datetime, timedelta


class ManualClock:
    """A clock that only moves when told to.

    Pass it wherever a ``clock`` is accepted::

        clock = ManualClock()
        server = PageServer(registry, store, clock=clock)
        clock.advance(seconds=10)
    """

    __slots__ = ("_now",)

    def __init__(self, start: datetime | None = None) -> None:
        self._now = start or datetime(2024, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self._now

    def advance(self, delta: timedelta | None = None, *, seconds: float = 0) -> datetime:
        """Move the clock forward and return the new time."""
        self._now += (delta or timedelta()) + timedelta(seconds=seconds)
        return self._now

    def set(self, when: datetime) -> None:
        self._now = when
