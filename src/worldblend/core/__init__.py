from __future__ import annotations

from .conventions import CoordinateConvention
from .entities import (
    BlendEntity,
    CameraLike,
    CameraRig,
    DistanceBlendComponent,
    ReferenceTarget,
    SceneActor,
    is_camera_like,
    reference_point,
)
from .evaluator import DistanceBlendEvaluator, EvaluationState
from .frame_clock import FrameCounter, FrameSource
from .geometry import as_vec3, distances_to, stack_vec3
from .registry import BlendRegistry
from .scene import Scene
from .settings import BlendSettings, BlendSettingsStore
from .weights import BlendWeight, BlendWeights, compute_blend_weights, total_weight, weight_for

__all__ = [
    "CoordinateConvention",
    "BlendEntity",
    "CameraLike",
    "CameraRig",
    "DistanceBlendComponent",
    "ReferenceTarget",
    "SceneActor",
    "is_camera_like",
    "reference_point",
    "DistanceBlendEvaluator",
    "EvaluationState",
    "FrameCounter",
    "FrameSource",
    "as_vec3",
    "distances_to",
    "stack_vec3",
    "BlendRegistry",
    "Scene",
    "BlendSettings",
    "BlendSettingsStore",
    "BlendWeight",
    "BlendWeights",
    "compute_blend_weights",
    "total_weight",
    "weight_for",
]
