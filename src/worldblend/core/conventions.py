from __future__ import annotations

from enum import Enum
from typing import Any


class CoordinateConvention(str, Enum):
    """World coordinate convention.

    These values describe *which axis points up* in the host world.

    Notes:
    - This does not modify any positions.
    - It only decides which axis is dropped when distances are measured in the horizontal plane.

    Currently only right-handed conventions are supported, so the enum uses short names.
    """

    Y_UP = "rh-y-up"
    Z_UP = "rh-z-up"

    @property
    def vertical_axis(self) -> int:
        return 1 if self is CoordinateConvention.Y_UP else 2

    @property
    def horizontal_axes(self) -> tuple[int, int]:
        return (0, 2) if self is CoordinateConvention.Y_UP else (0, 1)

    @classmethod
    def from_any(cls, value: Any) -> "CoordinateConvention":
        if isinstance(value, cls):
            return value

        v = str(value).strip().lower().replace("_", "-")
        aliases: dict[str, CoordinateConvention] = {
            # canonical
            "rh-y-up": cls.Y_UP,
            "rh-z-up": cls.Z_UP,
            # short aliases
            "y-up": cls.Y_UP,
            "z-up": cls.Z_UP,
            "y": cls.Y_UP,
            "z": cls.Z_UP,
            # accepted enum-like strings
            "yup": cls.Y_UP,
            "zup": cls.Z_UP,
            # engine names
            "unreal": cls.Z_UP,
            "unity": cls.Y_UP,
        }
        if v in aliases:
            return aliases[v]

        raise ValueError(
            "Unsupported coordinate convention. Use CoordinateConvention.Z_UP / Y_UP (or 'z-up' / 'y-up')."
        )
