from __future__ import annotations

import math
import os
import threading
from dataclasses import dataclass, replace
from typing import Any, Mapping

from .conventions import CoordinateConvention


_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class BlendSettings:
    """Evaluation preferences shared by every evaluator of a scene.

    Notes:
    - `horizontal_distance_only` is the default for `get_weights` when the caller does not pass one.
    - `min_distance` only clamps the distance used for the bias; reported distances stay raw.
    """

    coordinate_convention: str = CoordinateConvention.Z_UP.value
    horizontal_distance_only: bool = True
    min_distance: float = 1e-4

    @property
    def convention(self) -> CoordinateConvention:
        return CoordinateConvention.from_any(self.coordinate_convention)


def _parse_bool(value: Any, *, name: str) -> bool:
    if isinstance(value, bool):
        return value
    v = str(value).strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


def _parse_min_distance(value: Any) -> float:
    try:
        d = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"min_distance must be a number, got {value!r}")
    if not math.isfinite(d) or d <= 0.0:
        raise ValueError("min_distance must be finite and > 0")
    return d


class BlendSettingsStore:
    def __init__(self, settings: BlendSettings | None = None) -> None:
        self._lock = threading.RLock()
        self._settings = settings or BlendSettings()

    def get(self) -> BlendSettings:
        with self._lock:
            return self._settings

    def update(
        self,
        *,
        coordinate_convention: str | CoordinateConvention | None = None,
        horizontal_distance_only: bool | str | None = None,
        min_distance: float | str | None = None,
    ) -> BlendSettings:
        changes: dict[str, Any] = {}
        if coordinate_convention is not None:
            changes["coordinate_convention"] = CoordinateConvention.from_any(coordinate_convention).value
        if horizontal_distance_only is not None:
            changes["horizontal_distance_only"] = _parse_bool(horizontal_distance_only, name="horizontal_distance_only")
        if min_distance is not None:
            changes["min_distance"] = _parse_min_distance(min_distance)

        with self._lock:
            self._settings = replace(self._settings, **changes)
            return self._settings

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "BlendSettingsStore":
        env = os.environ if environ is None else environ
        store = cls()
        store.update(
            coordinate_convention=env.get("WORLDBLEND_CONVENTION") or None,
            horizontal_distance_only=env.get("WORLDBLEND_HORIZONTAL_ONLY") or None,
            min_distance=env.get("WORLDBLEND_MIN_DISTANCE") or None,
        )
        return store
