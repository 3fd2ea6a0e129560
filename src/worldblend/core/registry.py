from __future__ import annotations

import threading
import weakref
from typing import Callable, Iterator

from loguru import logger

from .entities import BlendEntity


def make_ref(obj: object) -> Callable[[], object | None]:
    """Non-owning reference. Types that cannot be weakly referenced (eg. `__slots__` without
    `__weakref__`) are rejected instead of silently being kept alive."""
    try:
        return weakref.ref(obj)
    except TypeError:
        raise TypeError(
            f"{type(obj).__name__} does not support weak references; add '__weakref__' to its __slots__"
        ) from None


class BlendRegistry:
    """Insertion-ordered membership set of blend entities.

    Notes:
    - Entities are held weakly and compared by identity.
    - Entities are expected to unregister themselves before going away. The registry never
      polls liveness; a collected entity is only noticed (and dropped) when `entities()` runs.
    - Mutating the registry while an evaluation is iterating it is the caller's problem.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._refs: list[Callable[[], object | None]] = []

    def _index_locked(self, entity: object) -> int:
        for i, ref in enumerate(self._refs):
            if ref() is entity:
                return i
        return -1

    def register(self, entity: BlendEntity) -> None:
        if entity is None:
            raise ValueError("Cannot register None as a blend entity")
        with self._lock:
            if self._index_locked(entity) >= 0:
                return
            self._refs.append(make_ref(entity))
            logger.debug(f"Registered blend entity {entity!r} ({len(self._refs)} total)")

    def unregister(self, entity: BlendEntity) -> None:
        with self._lock:
            idx = self._index_locked(entity)
            if idx < 0:
                return
            del self._refs[idx]
            logger.debug(f"Unregistered blend entity {entity!r} ({len(self._refs)} left)")

    def entities(self) -> list[BlendEntity]:
        with self._lock:
            alive: list[BlendEntity] = []
            live_refs: list[Callable[[], object | None]] = []
            for ref in self._refs:
                obj = ref()
                if obj is None:
                    continue
                alive.append(obj)  # type: ignore[arg-type]
                live_refs.append(ref)
            dropped = len(self._refs) - len(live_refs)
            if dropped:
                logger.warning(f"Dropped {dropped} blend entities that were collected without unregistering")
                self._refs = live_refs
            return alive

    def clear(self) -> None:
        with self._lock:
            self._refs.clear()

    def __len__(self) -> int:
        with self._lock:
            return sum(1 for ref in self._refs if ref() is not None)

    def __contains__(self, entity: object) -> bool:
        with self._lock:
            return self._index_locked(entity) >= 0

    def __iter__(self) -> Iterator[BlendEntity]:
        return iter(self.entities())
