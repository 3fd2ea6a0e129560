from __future__ import annotations

from .core.conventions import CoordinateConvention
from .core.entities import CameraRig, DistanceBlendComponent, SceneActor
from .core.evaluator import DistanceBlendEvaluator, EvaluationState
from .core.frame_clock import FrameCounter
from .core.registry import BlendRegistry
from .core.scene import Scene
from .core.settings import BlendSettings, BlendSettingsStore
from .core.weights import BlendWeight, weight_for

__all__ = [
    "CoordinateConvention",
    "CameraRig",
    "DistanceBlendComponent",
    "SceneActor",
    "DistanceBlendEvaluator",
    "EvaluationState",
    "FrameCounter",
    "BlendRegistry",
    "Scene",
    "BlendSettings",
    "BlendSettingsStore",
    "BlendWeight",
    "weight_for",
]
