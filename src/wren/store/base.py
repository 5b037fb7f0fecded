"""Cached page records and the store protocol.

The store owns generated state between cycles. A ``CachedPage`` is never
mutated: revalidation produces a new record that replaces the old one.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, TypeAlias, runtime_checkable


@dataclass(frozen=True, slots=True)
class CachedPage:
    """Generated output for one page path.

    Attributes:
        path: Full page path (cache key).
        route: Root of the route that produced it.
        state: Build state payload, or ``None`` for stateless pages.
        html: Prerendered markup, or ``None`` when the page is rendered per
            request (routes with request state).
        generated_at: When the state was generated; revalidation intervals
            count from here.
        checked_at: When a revalidation predicate last declined to
            regenerate the page. Takes over from ``generated_at`` as the
            start of the next interval.
    """

    path: str
    route: str
    state: str | None
    html: str | None
    generated_at: datetime
    checked_at: datetime | None = None


PageProducer: TypeAlias = Callable[[], Awaitable[CachedPage]]


@runtime_checkable
class StateStore(Protocol):
    """Storage backing the serving layer.

    Implementations must guarantee:

    - Readers never see a partially written page (replace whole records).
    - ``coalesce`` runs at most one producer per path at a time; concurrent
      callers for the same path share its result.
    """

    async def get(self, path: str) -> CachedPage | None: ...

    async def put(self, page: CachedPage) -> None: ...

    async def paths(self) -> frozenset[str]: ...

    async def coalesce(self, path: str, producer: PageProducer) -> CachedPage: ...
