"""Geographic positions for graph nodes.

Nodes carry a 3D coordinate because the consuming simulation reports
positions as ``x,y,z`` triples, but movement happens on a plane so the
distance metric ignores ``z``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class GeoLocation:
    """Mutable 3D coordinate with a planar distance."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def distance(self, other: GeoLocation) -> float:
        """Return the Euclidean distance to ``other`` on the (x, y) plane."""

        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2)

    def copy(self) -> GeoLocation:
        return GeoLocation(self.x, self.y, self.z)

    def move_to(self, other: GeoLocation) -> None:
        """Overwrite coordinates in place with those of ``other``."""

        self.x = other.x
        self.y = other.y
        self.z = other.z

    @classmethod
    def parse(cls, text: str) -> GeoLocation:
        """Build a location from ``"x,y,z"`` text (the ``str()`` format).

        Raises:
            ValueError: If the text does not hold exactly three numbers
        """

        parts = [part.strip() for part in text.split(",")]
        if len(parts) != 3:
            raise ValueError(f"Expected 'x,y,z' but got {text!r}")
        try:
            x, y, z = (float(part) for part in parts)
        except ValueError:
            raise ValueError(f"Non-numeric coordinate in {text!r}") from None
        return cls(x, y, z)

    def __str__(self) -> str:
        return f"{self.x},{self.y},{self.z}"
