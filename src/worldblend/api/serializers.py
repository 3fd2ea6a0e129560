from __future__ import annotations

from typing import Any, Sequence

from ..core.evaluator import DistanceBlendEvaluator
from ..core.scene import Scene
from ..core.settings import BlendSettings
from ..core.weights import BlendWeight


def entity_label(entity: object) -> str:
    owner = getattr(entity, "owner", None)
    name = getattr(owner, "name", None) or getattr(entity, "name", None)
    if name:
        return str(name)
    return f"{type(entity).__name__}@{id(entity):x}"


def blend_weight_to_dict(w: BlendWeight) -> dict[str, Any]:
    return {
        "entity": entity_label(w.entity),
        "weight": float(w.weight),
        "distanceBias": float(w.distance_bias),
        "scalar": float(w.scalar),
        "distance": float(w.distance),
    }


def weights_to_dict(weights: Sequence[BlendWeight], valid: bool) -> dict[str, Any]:
    return {
        "valid": bool(valid),
        "count": len(weights),
        "weights": [blend_weight_to_dict(w) for w in weights],
    }


def settings_to_dict(s: BlendSettings) -> dict[str, Any]:
    return {
        "coordinateConvention": s.coordinate_convention,
        "horizontalDistanceOnly": bool(s.horizontal_distance_only),
        "minDistance": float(s.min_distance),
    }


def subsystem_to_dict(name: str, sub: DistanceBlendEvaluator) -> dict[str, Any]:
    target = sub.reference_target
    return {
        "name": name,
        "state": sub.state.value,
        "entityCount": len(sub.registry),
        "lastEvaluatedFrame": sub.last_evaluated_frame,
        "target": entity_label(target) if target is not None else None,
    }


def scene_to_dict(scene: Scene) -> dict[str, Any]:
    return {
        "name": scene.name,
        "frame": int(scene.frame),
        "subsystems": [subsystem_to_dict(name, sub) for name, sub in scene.subsystems().items()],
    }
