"""Per-route rendering strategy descriptor.

A ``RouteStrategy`` says, for one route root, when and how its pages get
their state: at build time, on demand, per request, or on a schedule.
Strategies are built once with the fluent ``with_*`` methods, each of
which returns a new frozen instance, and are then shared read-only across
every build and request cycle::

    blog = (
        RouteStrategy("blog")
        .with_render(render_post)
        .with_build_paths(list_slugs)
        .with_build_state(load_post)
        .with_incremental(True)
        .with_revalidate_after("1d")
    )

If no strategy is configured at all the route is *basic*: it is
prerendered once at build time with no state.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import timedelta
from typing import Any

from wren._internal.invoke import invoke
from wren._internal.types import (
    AmalgamateStatesFn,
    BuildPathsFn,
    BuildStateFn,
    RenderFn,
    RequestStateFn,
    ShouldRevalidateFn,
)
from wren.errors import ErrorCause, GenerationError, RenderFnFailed, TemplateFeatureNotEnabled
from wren.paths import normalize_path
from wren.strategy.interval import parse_interval
from wren.strategy.states import States


@dataclass(frozen=True, slots=True)
class RouteStrategy:
    """Immutable strategy configuration for one route root.

    Attributes:
        path: Root of the route. Pages from build paths live beneath it.
        render_fn: Turns a state payload (or ``None``) into markup.
        build_paths_fn: Enumerates the paths prerendered at build time.
        incremental_path_rendering: Generate and cache paths beyond the
            enumerated ones on first request. The route root is never
            generated this way; enumerate ``""`` if a rendered root is wanted.
        build_state_fn: State computed at build time, passed the page path.
        request_state_fn: State computed on every request, passed the page
            path and the request object.
        should_revalidate_fn: Custom staleness predicate. Receives nothing
            request-specific; only runs after ``revalidate_after`` has
            elapsed when both are set.
        revalidate_after: Interval string (``"10s"``, ``"1w"``) after which
            cached build state is regenerated. The clock starts at each
            page's own generation, so incrementally generated pages drift
            apart.
        amalgamate_states_fn: Merges build and request state when a route
            produces both.
    """

    path: str
    render_fn: RenderFn | None = None
    build_paths_fn: BuildPathsFn | None = None
    incremental_path_rendering: bool = False
    build_state_fn: BuildStateFn | None = None
    request_state_fn: RequestStateFn | None = None
    should_revalidate_fn: ShouldRevalidateFn | None = None
    revalidate_after: str | None = None
    amalgamate_states_fn: AmalgamateStatesFn | None = None

    # Derived from revalidate_after
    revalidate_interval: timedelta | None = field(init=False, default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", normalize_path(self.path))
        if self.revalidate_after is not None:
            object.__setattr__(self, "revalidate_interval", parse_interval(self.revalidate_after))

    # -- Fluent configuration --

    def with_render(self, fn: RenderFn) -> RouteStrategy:
        """Return a copy that renders with *fn*."""
        return replace(self, render_fn=fn)

    def with_build_paths(self, fn: BuildPathsFn) -> RouteStrategy:
        """Return a copy with the *build paths* strategy enabled."""
        return replace(self, build_paths_fn=fn)

    def with_incremental(self, enabled: bool = True) -> RouteStrategy:
        """Return a copy with *incremental generation* toggled."""
        return replace(self, incremental_path_rendering=enabled)

    def with_build_state(self, fn: BuildStateFn) -> RouteStrategy:
        """Return a copy with the *build state* strategy enabled."""
        return replace(self, build_state_fn=fn)

    def with_request_state(self, fn: RequestStateFn) -> RouteStrategy:
        """Return a copy with the *request state* strategy enabled."""
        return replace(self, request_state_fn=fn)

    def with_should_revalidate(self, fn: ShouldRevalidateFn) -> RouteStrategy:
        """Return a copy with logic-based *revalidation* enabled."""
        return replace(self, should_revalidate_fn=fn)

    def with_revalidate_after(self, interval: str) -> RouteStrategy:
        """Return a copy with time-based *revalidation* enabled.

        Raises:
            ConfigurationError: If *interval* cannot be parsed.
        """
        return replace(self, revalidate_after=interval)

    def with_amalgamate_states(self, fn: AmalgamateStatesFn) -> RouteStrategy:
        """Return a copy with state amalgamation enabled."""
        return replace(self, amalgamate_states_fn=fn)

    # -- Strategy execution --

    async def _call(
        self,
        stage: str,
        func: Callable[..., Any],
        *args: Any,
        server_only: bool = False,
    ) -> Any:
        """Invoke a strategy function, wrapping failures in ``RenderFnFailed``."""
        try:
            return await invoke(func, *args)
        except GenerationError as exc:
            cause = ErrorCause.server() if server_only else exc.cause
            raise RenderFnFailed(stage, self.path, cause, exc.message) from exc
        except Exception as exc:
            raise RenderFnFailed(stage, self.path, ErrorCause.server(), str(exc)) from exc

    async def get_build_paths(self) -> list[str]:
        """Enumerate the paths to prerender at build time.

        There is no request to blame during enumeration, so every failure
        is attributed to the server.
        """
        if self.build_paths_fn is None:
            raise TemplateFeatureNotEnabled(self.path, "build_paths")
        paths = await self._call("get_build_paths", self.build_paths_fn, server_only=True)
        if isinstance(paths, (str, bytes)):
            msg = f"expected a list of paths, got {type(paths).__name__} {paths!r}"
            raise RenderFnFailed("get_build_paths", self.path, ErrorCause.server(), msg)
        return list(paths)

    async def get_build_state(self, path: str) -> str:
        """Generate build-time state for *path*."""
        if self.build_state_fn is None:
            raise TemplateFeatureNotEnabled(self.path, "build_state")
        return await self._call("get_build_state", self.build_state_fn, path)

    async def get_request_state(self, path: str, request: Any) -> str:
        """Generate request-time state for *path*.

        Errors here may be the client's or the server's fault; the cause
        comes from the strategy function.
        """
        if self.request_state_fn is None:
            raise TemplateFeatureNotEnabled(self.path, "request_state")
        return await self._call("get_request_state", self.request_state_fn, path, request)

    async def should_revalidate(self) -> bool:
        """Run the custom revalidation predicate."""
        if self.should_revalidate_fn is None:
            raise TemplateFeatureNotEnabled(self.path, "should_revalidate")
        return bool(await self._call("should_revalidate", self.should_revalidate_fn))

    async def amalgamate_states(self, states: States) -> str | None:
        """Merge build and request state with the registered amalgamator.

        The result is returned as-is. There is no fallback: without an
        amalgamator this fails rather than silently picking one state.
        Amalgamation belongs to the request-state feature, so that is the
        feature reported.
        """
        if self.amalgamate_states_fn is None:
            raise TemplateFeatureNotEnabled(self.path, "request_state")
        return await self._call("amalgamate_states", self.amalgamate_states_fn, states)

    async def render(self, state: str | None) -> str:
        """Render *state* to markup with the route's render function."""
        if self.render_fn is None:
            return ""
        return await self._call("render", self.render_fn, state, server_only=True)

    # -- Characteristics --

    def revalidates(self) -> bool:
        """True if cached pages can be regenerated after creation."""
        return self.should_revalidate_fn is not None or self.revalidate_after is not None

    def revalidates_with_time(self) -> bool:
        return self.revalidate_after is not None

    def revalidates_with_logic(self) -> bool:
        return self.should_revalidate_fn is not None

    def uses_incremental(self) -> bool:
        return self.incremental_path_rendering

    def uses_build_paths(self) -> bool:
        return self.build_paths_fn is not None

    def uses_build_state(self) -> bool:
        return self.build_state_fn is not None

    def uses_request_state(self) -> bool:
        return self.request_state_fn is not None

    def can_amalgamate(self) -> bool:
        return self.amalgamate_states_fn is not None

    def is_basic(self) -> bool:
        """True if no strategy is configured; the route is pure static."""
        return not (
            self.uses_build_paths()
            or self.uses_build_state()
            or self.uses_request_state()
            or self.revalidates()
            or self.uses_incremental()
        )

    def describe(self) -> tuple[str, ...]:
        """Names of the enabled strategies, in a stable order."""
        if self.is_basic():
            return ("static",)
        flags = (
            ("build_paths", self.uses_build_paths()),
            ("incremental", self.uses_incremental()),
            ("build_state", self.uses_build_state()),
            ("request_state", self.uses_request_state()),
            ("amalgamate", self.can_amalgamate()),
            (f"revalidate_after={self.revalidate_after}", self.revalidates_with_time()),
            ("should_revalidate", self.revalidates_with_logic()),
        )
        return tuple(name for name, enabled in flags if enabled)
