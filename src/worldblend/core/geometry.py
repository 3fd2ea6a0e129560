from __future__ import annotations

import numpy as np

from .conventions import CoordinateConvention


Vec3Like = tuple[float, float, float] | list[float] | np.ndarray


def as_vec3(value: Vec3Like, *, name: str = "position") -> np.ndarray:
    arr = np.asarray(value, dtype=np.float64).reshape(3)
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} must contain finite numeric values")
    return arr


def stack_vec3(values: list[Vec3Like], *, name: str = "position") -> np.ndarray:
    if not values:
        return np.zeros((0, 3), dtype=np.float64)
    return np.stack([as_vec3(v, name=name) for v in values], axis=0)


def distances_to(
    points: np.ndarray,
    reference: Vec3Like,
    *,
    horizontal_only: bool,
    convention: CoordinateConvention = CoordinateConvention.Z_UP,
) -> np.ndarray:
    """Distance from every row of `points` (n,3) to `reference`.

    With `horizontal_only` the vertical axis of `convention` is ignored.
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    ref = as_vec3(reference, name="reference")
    diff = ref[np.newaxis, :] - pts
    if horizontal_only:
        diff = diff[:, list(convention.horizontal_axes)]
    return np.linalg.norm(diff, axis=1)
