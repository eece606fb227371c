"""
Hexagonal coordinate mathematics for the space map.

The map is a set of sectors made of flat hexes. Every rule that talks about
"range", "isolation" or "adjacent" boils down to the helpers in this module:
- Distance calculations between hexes
- Finding adjacent hexes (federation connectivity)
- Finding all hexes within a range (placement range, isolation checks)

Coordinate Systems:
-------------------
1. Axial Coordinates (q, r) - for storage and representation
   - Serialized as ``"{q}x{r}"`` so that lists of coordinates can be joined
     with commas without ambiguity (federation identities rely on this).

2. Cube Coordinates (x, y, z) - for distance calculations
   - x + y + z = 0
   - distance = max(|dx|, |dy|, |dz|)
   - Conversion: x = q, z = r, y = -x - z

References:
-----------
Based on the guide at: https://www.redblobgames.com/grids/hexagons/
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_COORD_PATTERN = re.compile(r"^(-?\d+)x(-?\d+)$")


@dataclass(frozen=True, order=True)
class HexCoord:
    """
    A hexagonal coordinate using the axial coordinate system.

    Attributes:
        q: Column coordinate (horizontal axis)
        r: Row coordinate (diagonal axis)

    Example:
        >>> HexCoord(q=2, r=-1).to_string()
        '2x-1'
        >>> HexCoord.from_string("2x-1")
        HexCoord(q=2, r=-1)
    """

    q: int
    r: int

    def __hash__(self) -> int:
        """Make HexCoord hashable for use in sets and dicts."""
        return hash((self.q, self.r))

    def to_string(self) -> str:
        return f"{self.q}x{self.r}"

    @classmethod
    def from_string(cls, value: str) -> HexCoord:
        """Parse the ``"{q}x{r}"`` form produced by :meth:`to_string`."""
        match = _COORD_PATTERN.match(value.strip())
        if not match:
            msg = f"Invalid hex coordinate: {value!r}"
            raise ValueError(msg)
        return cls(q=int(match.group(1)), r=int(match.group(2)))


def axial_to_cube(coord: HexCoord) -> tuple[int, int, int]:
    """
    Convert axial coordinates (q, r) to cube coordinates (x, y, z).

    Example:
        >>> axial_to_cube(HexCoord(q=1, r=2))
        (1, -3, 2)
    """
    x = coord.q
    z = coord.r
    y = -x - z
    return x, y, z


def cube_to_axial(x: int, y: int, z: int) -> HexCoord:  # noqa: ARG001
    """Convert cube coordinates back to axial; ``y`` is redundant and ignored."""
    return HexCoord(q=x, r=z)


def hex_distance(a: HexCoord, b: HexCoord) -> int:
    """
    Calculate the distance between two hexes.

    The distance is the minimum number of hex steps to move from hex a to hex b:
        distance = max(|dx|, |dy|, |dz|)

    Example:
        >>> hex_distance(HexCoord(q=0, r=0), HexCoord(q=2, r=1))
        3
    """
    ax, ay, az = axial_to_cube(a)
    bx, by, bz = axial_to_cube(b)
    return max(abs(ax - bx), abs(ay - by), abs(az - bz))


# Direction vectors for the 6 neighbors in axial coordinates.
# The order is fixed: federation search relies on it for deterministic output.
_NEIGHBOR_DIRECTIONS: list[tuple[int, int]] = [
    (1, 0),  # East
    (1, -1),  # Northeast
    (0, -1),  # Northwest
    (-1, 0),  # West
    (-1, 1),  # Southwest
    (0, 1),  # Southeast
]


def hex_neighbors(coord: HexCoord) -> list[HexCoord]:
    """
    Find all 6 adjacent hexes to the given hex, in a fixed direction order.

    Example:
        >>> len(hex_neighbors(HexCoord(q=0, r=0)))
        6
    """
    return [HexCoord(q=coord.q + dq, r=coord.r + dr) for dq, dr in _NEIGHBOR_DIRECTIONS]


def hexes_in_range(center: HexCoord, n: int) -> list[HexCoord]:
    """
    Find all hexes within range n of the center hex (inclusive).

    The number of hexes follows the formula: 3n^2 + 3n + 1

    Raises:
        ValueError: If n is negative

    Example:
        >>> len(hexes_in_range(HexCoord(q=0, r=0), n=1))
        7
    """
    if n < 0:
        msg = f"Range n must be non-negative, got {n}"
        raise ValueError(msg)

    cx, cy, cz = axial_to_cube(center)

    hexes = []
    for dx in range(-n, n + 1):
        for dy in range(max(-n, -dx - n), min(n, -dx + n) + 1):
            dz = -dx - dy
            hexes.append(cube_to_axial(cx + dx, cy + dy, cz + dz))

    return hexes
