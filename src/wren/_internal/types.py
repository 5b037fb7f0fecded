"""Shared type aliases for strategy functions.

Each strategy kind may be a plain function or a coroutine function;
``wren._internal.invoke`` normalises the call.
"""

from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from wren.strategy.states import States

# Renders a (possibly absent) state payload to markup
RenderFn: TypeAlias = Callable[[str | None], str | Awaitable[str]]

# Enumerates the paths to prerender under a route
BuildPathsFn: TypeAlias = Callable[[], list[str] | Awaitable[list[str]]]

# Produces build-time state for one path
BuildStateFn: TypeAlias = Callable[[str], str | Awaitable[str]]

# Produces request-time state for one path and an opaque request object
RequestStateFn: TypeAlias = Callable[[str, Any], str | Awaitable[str]]

# Custom revalidation predicate, no request context
ShouldRevalidateFn: TypeAlias = Callable[[], bool | Awaitable[bool]]

# Merges build and request state into one payload
AmalgamateStatesFn: TypeAlias = Callable[["States"], str | None | Awaitable[str | None]]

# Current time, injectable for simulated clocks
Clock: TypeAlias = Callable[[], datetime]
