"""Planar geometry for cardinal-rotated modules.

The layout lives on the horizontal (x, z) plane with +z as north. Rotations are
clockwise yaw angles seen from above, restricted to the four cardinal angles,
so every rotation is computed from an exact integer cos/sin table.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

CARDINAL_ROTATIONS: Tuple[int, ...] = (0, 90, 180, 270)

# rotation -> (cos, sin)
_TRIG: Dict[int, Tuple[int, int]] = {
    0: (1, 0),
    90: (0, 1),
    180: (-1, 0),
    270: (0, -1),
}


def normalize_rotation(degrees: int) -> int:
    rot = int(degrees) % 360
    if rot not in _TRIG:
        raise ValueError(f"Rotation must be a multiple of 90 degrees, got {degrees}")
    return rot


@dataclass(frozen=True)
class Vec2:
    x: float
    z: float

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.z + other.z)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.z - other.z)

    def __neg__(self) -> "Vec2":
        return Vec2(-self.x, -self.z)

    def scaled(self, k: float) -> "Vec2":
        return Vec2(self.x * k, self.z * k)

    def dot(self, other: "Vec2") -> float:
        return self.x * other.x + self.z * other.z

    def rotated(self, degrees: int) -> "Vec2":
        """Rotate clockwise (seen from above) by a cardinal angle."""
        c, s = _TRIG[normalize_rotation(degrees)]
        return Vec2(self.x * c + self.z * s, -self.x * s + self.z * c)

    def distance_to(self, other: "Vec2") -> float:
        d = self - other
        return (d.x * d.x + d.z * d.z) ** 0.5

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.z)


ORIGIN = Vec2(0.0, 0.0)
RIGHT = Vec2(1.0, 0.0)
FORWARD = Vec2(0.0, 1.0)


class Facing(Enum):
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    @property
    def vector(self) -> Vec2:
        return _FACING_VECTORS[self]


_FACING_VECTORS: Dict[Facing, Vec2] = {
    Facing.NORTH: Vec2(0.0, 1.0),
    Facing.EAST: Vec2(1.0, 0.0),
    Facing.SOUTH: Vec2(0.0, -1.0),
    Facing.WEST: Vec2(-1.0, 0.0),
}


@dataclass(frozen=True)
class Pose:
    """Position plus cardinal rotation, relative to some parent frame."""

    position: Vec2 = ORIGIN
    rotation: int = 0
    height: float = 0.0

    def compose(self, child: "Pose") -> "Pose":
        """Return the child pose expressed in this pose's parent frame."""
        return Pose(
            position=self.position + child.position.rotated(self.rotation),
            rotation=(self.rotation + child.rotation) % 360,
            height=self.height + child.height,
        )
