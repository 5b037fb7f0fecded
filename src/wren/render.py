"""Render executor seam.

Turning a state payload into markup is not the engine's job; it hands the
resolved state and the route to a ``RenderExecutor``. The default one
calls the route's own render function.
"""

from typing import Protocol

from wren.errors import ErrorCause, RenderFnFailed, WrenError
from wren.strategy.template import RouteStrategy


class RenderExecutor(Protocol):
    """Produces markup for a route from its resolved state.

    Accepts both functions and callable objects::

        async def render(strategy: RouteStrategy, state: str | None) -> str:
            return await my_engine.render(strategy.path, state)
    """

    async def __call__(self, strategy: RouteStrategy, state: str | None) -> str: ...


async def render_with_strategy(strategy: RouteStrategy, state: str | None) -> str:
    """Default executor: the strategy's own ``render_fn``."""
    return await strategy.render(state)


async def run_renderer(
    renderer: RenderExecutor, strategy: RouteStrategy, state: str | None
) -> str:
    """Call *renderer*, reporting any untyped failure as a server-caused render failure."""
    try:
        return await renderer(strategy, state)
    except WrenError:
        raise
    except Exception as exc:
        raise RenderFnFailed("render", strategy.path, ErrorCause.server(), str(exc)) from exc
