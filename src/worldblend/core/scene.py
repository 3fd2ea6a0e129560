from __future__ import annotations

from typing import TypeVar

from loguru import logger

from .entities import ReferenceTarget
from .evaluator import DistanceBlendEvaluator
from .frame_clock import FrameCounter
from .registry import make_ref
from .settings import BlendSettingsStore


E = TypeVar("E", bound=DistanceBlendEvaluator)


class Scene:
    """One level/world worth of blend evaluators.

    Create it when the level starts, `teardown()` it when the level goes away. Each
    evaluator class gets exactly one instance per scene, all sharing the scene's frame
    counter and settings.
    """

    def __init__(
        self,
        name: str = "scene",
        *,
        settings: BlendSettingsStore | None = None,
        clock: FrameCounter | None = None,
    ) -> None:
        self.name = str(name)
        self.settings = settings or BlendSettingsStore()
        self.clock = clock or FrameCounter()
        self._subsystems: dict[type[DistanceBlendEvaluator], DistanceBlendEvaluator] = {}
        self._target_ref = None
        self._torn_down = False

    def _require_alive(self) -> None:
        if self._torn_down:
            raise RuntimeError(f"Scene '{self.name}' has been torn down")

    @property
    def frame(self) -> int:
        return self.clock.current()

    def tick(self, frames: int = 1) -> int:
        self._require_alive()
        return self.clock.advance(frames)

    def get_subsystem(self, cls: type[E] = DistanceBlendEvaluator) -> E:  # type: ignore[assignment]
        self._require_alive()
        existing = self._subsystems.get(cls)
        if existing is None:
            existing = cls(self.clock, settings=self.settings)
            target = self.reference_target
            if target is not None:
                existing.set_reference_target(target)
            self._subsystems[cls] = existing
            logger.debug(f"Scene '{self.name}': created {cls.__name__}")
        return existing  # type: ignore[return-value]

    def subsystems(self) -> dict[str, DistanceBlendEvaluator]:
        return {cls.__name__: sub for cls, sub in self._subsystems.items()}

    @property
    def reference_target(self) -> ReferenceTarget | None:
        if self._target_ref is None:
            return None
        return self._target_ref()  # type: ignore[return-value]

    def set_reference_target(self, target: ReferenceTarget | None) -> None:
        """Target for every subsystem of the scene, including ones created later. Held weakly."""
        self._require_alive()
        self._target_ref = make_ref(target) if target is not None else None
        for sub in self._subsystems.values():
            sub.set_reference_target(target)

    def teardown(self) -> None:
        if self._torn_down:
            return
        for sub in self._subsystems.values():
            sub.set_reference_target(None)
            sub.registry.clear()
        self._subsystems.clear()
        self._target_ref = None
        self._torn_down = True
        logger.debug(f"Scene '{self.name}' torn down")
