from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

from .geometry import Vec3Like, as_vec3
from .weights import BlendWeight

if TYPE_CHECKING:
    from .evaluator import DistanceBlendEvaluator


@runtime_checkable
class ReferenceTarget(Protocol):
    def get_world_position(self) -> Vec3Like: ...


@runtime_checkable
class CameraLike(ReferenceTarget, Protocol):
    def get_viewpoint_position(self) -> Vec3Like: ...


@runtime_checkable
class BlendEntity(Protocol):
    def get_world_position(self) -> Vec3Like: ...
    def get_scalar_multiplier(self) -> float: ...
    def set_blend_weight(self, record: BlendWeight) -> None: ...


def is_camera_like(target: object) -> bool:
    return callable(getattr(target, "get_viewpoint_position", None))


def reference_point(target: object) -> np.ndarray:
    """Location distances are measured against: the viewpoint for cameras, the position otherwise."""
    if is_camera_like(target):
        return as_vec3(target.get_viewpoint_position(), name="viewpoint")  # type: ignore[attr-defined]
    return as_vec3(target.get_world_position(), name="reference")  # type: ignore[attr-defined]


@dataclass(eq=False)
class SceneActor:
    """Anything with a world position that can act as a reference target."""

    name: str
    position: tuple[float, float, float] = (0.0, 0.0, 0.0)

    def get_world_position(self) -> tuple[float, float, float]:
        return self.position

    def set_position(self, position: Vec3Like) -> None:
        p = as_vec3(position)
        self.position = (float(p[0]), float(p[1]), float(p[2]))


@dataclass(eq=False)
class CameraRig(SceneActor):
    """Camera-manager style actor: the actor sits in one place, the view in another.

    When no explicit viewpoint is set the actor position is used.
    """

    viewpoint: tuple[float, float, float] | None = None

    def get_viewpoint_position(self) -> tuple[float, float, float]:
        return self.viewpoint if self.viewpoint is not None else self.position

    def set_viewpoint(self, viewpoint: Vec3Like | None) -> None:
        if viewpoint is None:
            self.viewpoint = None
            return
        p = as_vec3(viewpoint, name="viewpoint")
        self.viewpoint = (float(p[0]), float(p[1]), float(p[2]))


@dataclass(eq=False)
class DistanceBlendComponent:
    """Base class for things that compete for a share of blend weight.

    Subclasses override `get_scalar_multiplier` to scale their influence at runtime
    (eg. light intensity, audio volume). The evaluator pushes every fresh result into
    `blend_weight`.

    Components must `detach()` before they go away; the evaluator does not own them.
    """

    owner: SceneActor
    blend_weight: BlendWeight = field(default_factory=BlendWeight)
    _evaluator: "DistanceBlendEvaluator | None" = field(default=None, init=False, repr=False)

    def get_world_position(self) -> tuple[float, float, float]:
        return self.owner.get_world_position()

    def get_scalar_multiplier(self) -> float:
        return 1.0

    def set_blend_weight(self, record: BlendWeight) -> None:
        self.blend_weight = record

    @property
    def evaluator(self) -> "DistanceBlendEvaluator | None":
        return self._evaluator

    def attach(self, evaluator: "DistanceBlendEvaluator") -> None:
        if self._evaluator is evaluator:
            return
        if self._evaluator is not None:
            self.detach()
        evaluator.register(self)
        self._evaluator = evaluator

    def detach(self) -> None:
        if self._evaluator is None:
            return
        self._evaluator.unregister(self)
        self._evaluator = None
        self.blend_weight = BlendWeight()
