"""State storage backing the serving layer.

``StateStore`` is the protocol the build orchestrator and page server
write through; ``MemoryStateStore`` is the in-process implementation.
"""

from wren.store.base import CachedPage, StateStore
from wren.store.memory import MemoryStateStore
from wren.store.singleflight import Singleflight

__all__ = [
    "CachedPage",
    "MemoryStateStore",
    "Singleflight",
    "StateStore",
]
