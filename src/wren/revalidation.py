"""Revalidation policy — decides whether a cached page is stale.

Two independent mechanisms, either or both per route:

- **Time**: the page is stale once ``revalidate_after`` has elapsed since
  it was generated.
- **Logic**: the route's ``should_revalidate`` predicate says so. It gets
  no request context and may do its own I/O.

With both, time throttles the predicate: it runs at most once per
interval and still has the final say. When it declines, the interval
restarts from that check (``restart_interval``).
"""

from dataclasses import replace
from datetime import UTC, datetime

from wren._internal.types import Clock
from wren.store.base import CachedPage
from wren.strategy.template import RouteStrategy


def utc_now() -> datetime:
    return datetime.now(UTC)


class RevalidationPolicy:
    """Staleness checks for cached pages against a clock."""

    __slots__ = ("_clock",)

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or utc_now

    def now(self) -> datetime:
        return self._clock()

    def next_revalidation(self, strategy: RouteStrategy, page: CachedPage) -> datetime | None:
        """When *page* becomes eligible for time-based revalidation.

        Counts from the last declined check if there was one, otherwise
        from generation.
        """
        if strategy.revalidate_interval is None:
            return None
        return (page.checked_at or page.generated_at) + strategy.revalidate_interval

    def interval_elapsed(self, strategy: RouteStrategy, page: CachedPage) -> bool:
        deadline = self.next_revalidation(strategy, page)
        return deadline is not None and self._clock() >= deadline

    def throttles_logic(self, strategy: RouteStrategy) -> bool:
        """True if the route's predicate only runs once per interval."""
        return strategy.revalidates_with_time() and strategy.revalidates_with_logic()

    def restart_interval(self, page: CachedPage) -> CachedPage:
        """A copy of *page* whose next interval starts now."""
        return replace(page, checked_at=self._clock())

    async def is_stale(self, strategy: RouteStrategy, page: CachedPage) -> bool:
        """True if *page* must be regenerated before it is served.

        Raises:
            RenderFnFailed: If the custom predicate fails.
        """
        if not strategy.revalidates():
            return False
        if strategy.revalidates_with_time() and not self.interval_elapsed(strategy, page):
            return False
        if strategy.revalidates_with_logic():
            return await strategy.should_revalidate()
        return True
