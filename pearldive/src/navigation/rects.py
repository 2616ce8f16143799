"""World-space wall rectangles handed from level assembly to navigation."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping


# //1.- Axis-aligned wall footprint expressed in world units.
@dataclass(frozen=True)
class WallRect:
    x: float
    y: float
    width: float
    height: float

    # //2.- Accept the plain ``{x, y, width, height}`` mappings produced by scene code.
    @classmethod
    def from_mapping(cls, payload: Mapping[str, float]) -> "WallRect":
        try:
            values = [float(payload[key]) for key in ("x", "y", "width", "height")]
        except KeyError as missing:
            raise ValueError(f"Wall rectangle is missing '{missing.args[0]}'") from None
        if not all(math.isfinite(value) for value in values):
            raise ValueError(f"Wall rectangle has non-finite values: {dict(payload)!r}")
        return cls(*values)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height
