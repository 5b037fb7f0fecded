"""Invoke helpers — call sync or async strategy functions uniformly.

Strategy functions can be ``def`` or ``async def``. Any code that calls
a user-provided function must handle both cases. This module provides
a single helper so the sync/async check lives in exactly one place.

Usage::

    from wren._internal.invoke import invoke

    result = await invoke(func, *args, **kwargs)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a function and await the result if it's awaitable.

    Works with both sync and async callables::

        # sync: returns immediately, no await needed
        def build_state(path):
            return json.dumps({"slug": path})

        # async: returns coroutine, awaited automatically
        async def build_state(path):
            post = await fetch_post(path)
            return json.dumps(post)
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
