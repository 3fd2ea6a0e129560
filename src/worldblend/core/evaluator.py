from __future__ import annotations

from enum import Enum

from loguru import logger

from .entities import BlendEntity, ReferenceTarget, is_camera_like, reference_point
from .frame_clock import FrameSource
from .geometry import distances_to, stack_vec3
from .registry import BlendRegistry, make_ref
from .settings import BlendSettingsStore
from .weights import BlendWeights, compute_blend_weights


class EvaluationState(str, Enum):
    NO_TARGET = "no-target"
    STALE = "stale"
    FRESH = "fresh"


class DistanceBlendEvaluator:
    """Frame-gated distance blending over a registry of blend entities.

    Weights are computed at most once per frame: the first `get_weights` call of a frame
    recomputes, every later call in the same frame gets the cached tuple back. Assigning a
    different reference target forces a recompute even within the same frame.

    Derive one subclass per effect domain (lighting zones, audio zones, ...) and get it
    from `Scene.get_subsystem` so each domain has its own registry and cache.

    Notes:
    - Not thread safe. Call from the single frame-update context.
    - Do not register/unregister while a `get_weights` call is running.
    """

    def __init__(
        self,
        frame_source: FrameSource,
        *,
        settings: BlendSettingsStore | None = None,
        registry: BlendRegistry | None = None,
    ) -> None:
        self._frame_source = frame_source
        self._settings = settings or BlendSettingsStore()
        self._registry = registry if registry is not None else BlendRegistry()
        self._target_ref = None
        self._last_update_frame: int | None = None
        self._weights: BlendWeights = ()
        self._last_valid_weights: BlendWeights = ()

    @property
    def registry(self) -> BlendRegistry:
        return self._registry

    @property
    def settings(self) -> BlendSettingsStore:
        return self._settings

    @property
    def reference_target(self) -> ReferenceTarget | None:
        if self._target_ref is None:
            return None
        return self._target_ref()  # type: ignore[return-value]

    @property
    def last_evaluated_frame(self) -> int | None:
        return self._last_update_frame

    @property
    def state(self) -> EvaluationState:
        if self.reference_target is None:
            return EvaluationState.NO_TARGET
        if self._should_update():
            return EvaluationState.STALE
        return EvaluationState.FRESH

    def _should_update(self) -> bool:
        return self._last_update_frame is None or self._frame_source() != self._last_update_frame

    def register(self, entity: BlendEntity) -> None:
        self._registry.register(entity)

    def unregister(self, entity: BlendEntity) -> None:
        self._registry.unregister(entity)

    def set_reference_target(self, target: ReferenceTarget | None) -> None:
        """Assign what distances are measured against.

        Passing a camera-like target (one with `get_viewpoint_position`) uses its viewpoint
        instead of its position. The target is held weakly; once it is collected the
        evaluator behaves as if no target was assigned.
        """
        new_ref = make_ref(target) if target is not None else None
        if target is not self.reference_target:
            self._weights = ()
            self._last_update_frame = None
            logger.debug(f"{type(self).__name__}: blend target changed to {target!r}")
        self._target_ref = new_ref

    def current_weights(self) -> tuple[BlendWeights, bool]:
        """Whatever `get_weights` last produced. Never recomputes and never pushes records."""
        return self._weights, len(self._weights) > 0

    def get_last_valid_weights(self) -> tuple[BlendWeights, bool]:
        """Most recent non-empty weights. Never recomputes; meant for frames where `get_weights` is invalid."""
        return self._last_valid_weights, len(self._last_valid_weights) > 0

    def get_weights(self, use_horizontal_distance_only: bool | None = None) -> tuple[BlendWeights, bool]:
        """
        Args:
            use_horizontal_distance_only: Ignore the vertical axis when measuring distance.
                Defaults to the scene settings (horizontal only unless configured otherwise).

        Returns:
            (weights, valid). Cached weights if already updated this frame, otherwise freshly computed ones.
        """
        target = self.reference_target
        if target is None:
            return self._weights, len(self._weights) > 0

        if not self._should_update():
            return self._weights, len(self._weights) > 0

        # Stamp first so anything called from inside this evaluation gets the cached result.
        self._last_update_frame = self._frame_source()
        self._weights = ()

        settings = self._settings.get()
        horizontal = settings.horizontal_distance_only if use_horizontal_distance_only is None else bool(use_horizontal_distance_only)

        entities = self._registry.entities()
        if not entities:
            return self._weights, False

        reference = reference_point(target)
        positions = stack_vec3([e.get_world_position() for e in entities])
        scalars = [float(e.get_scalar_multiplier()) for e in entities]
        distances = distances_to(
            positions,
            reference,
            horizontal_only=horizontal,
            convention=settings.convention,
        )

        weights = compute_blend_weights(entities, distances, scalars, min_distance=settings.min_distance)

        for record in weights:
            setter = getattr(record.entity, "set_blend_weight", None)
            if setter is not None:
                setter(record)

        self._weights = weights
        if self._weights:
            self._last_valid_weights = self._weights

        logger.debug(
            f"{type(self).__name__}: frame {self._last_update_frame} blended {len(weights)} entities "
            f"against {'camera' if is_camera_like(target) else 'actor'} target (horizontal={horizontal})"
        )
        return self._weights, len(self._weights) > 0
