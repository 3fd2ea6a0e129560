from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np
from loguru import logger


@dataclass(frozen=True)
class BlendWeight:
    """Result of one evaluation for a single blend entity.

    Notes:
    - `weight` is the final share; across one evaluation all weights sum to 1.0.
    - `distance_bias` is above 1.0 when the entity is closer than the average entity.
    - `scalar` is the effective (non-negative) multiplier that went into the weight.
    - `distance` is the raw distance to the reference point, before any clamping.
    """

    entity: Any = None
    weight: float = 0.0
    distance_bias: float = 1.0
    scalar: float = 1.0
    distance: float = 0.0


BlendWeights = tuple[BlendWeight, ...]


def weight_for(weights: Sequence[BlendWeight], entity: object) -> BlendWeight | None:
    for w in weights:
        if w.entity is entity:
            return w
    return None


def total_weight(weights: Sequence[BlendWeight]) -> float:
    return float(sum(w.weight for w in weights))


def compute_blend_weights(
    entities: Sequence[object],
    distances: Sequence[float] | np.ndarray,
    scalars: Sequence[float] | np.ndarray,
    *,
    min_distance: float = 1e-4,
) -> BlendWeights:
    """Turn per-entity distances and scalars into normalized blend weights.

    Each entity gets `distance_bias = average_distance / distance` and a raw weight of
    `distance_bias * scalar`. Raw weights are first divided by the smallest positive raw
    weight (so that entry becomes exactly 1.0) and only then normalized to sum to 1.0.

    Distances below `min_distance` are clamped for the bias only, so an entity sitting on
    the reference point takes (almost) the entire share instead of producing inf/nan.
    """
    n = len(entities)
    if n == 0:
        return ()

    dist = np.asarray(distances, dtype=np.float64).reshape(n)
    scal = np.asarray(scalars, dtype=np.float64).reshape(n)
    if not np.all(np.isfinite(scal)):
        raise ValueError("blend scalars must contain finite numeric values")
    if np.any(scal < 0.0):
        logger.warning("Negative blend scalars clamped to 0.0")
        scal = np.clip(scal, 0.0, None)

    average = float(dist.sum()) / n
    if np.any(dist < min_distance):
        logger.debug(f"{int(np.count_nonzero(dist < min_distance))} blend entities within {min_distance} of the reference")
    bias = average / np.maximum(dist, min_distance)
    raw = bias * scal

    positive = raw[raw > 0.0]
    if positive.size == 0:
        # Every raw weight is zero (all scalars zero, or every entity on the reference point).
        logger.warning(f"No positive blend contribution among {n} entities; splitting weight evenly")
        final = np.full(n, 1.0 / n, dtype=np.float64)
    else:
        rescaled = raw / float(positive.min())
        final = rescaled / float(rescaled.sum())

    return tuple(
        BlendWeight(
            entity=entities[i],
            weight=float(final[i]),
            distance_bias=float(bias[i]),
            scalar=float(scal[i]),
            distance=float(dist[i]),
        )
        for i in range(n)
    )
