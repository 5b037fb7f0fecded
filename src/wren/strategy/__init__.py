"""Route strategies — when and how each route's pages get their state.

A route combines up to four strategies: static build, incremental
on-demand build, per-request state, and time- or logic-based
revalidation. They compose orthogonally and are chosen purely by which
functions a ``RouteStrategy`` configures.
"""

from wren.strategy.interval import parse_interval
from wren.strategy.states import States
from wren.strategy.template import RouteStrategy

__all__ = [
    "RouteStrategy",
    "States",
    "parse_interval",
]
