"""
Test suite for hex coordinate math on the space map.

Range, isolation and federation adjacency all reduce to these helpers:
- Axial coordinates (q, r) and their ``"{q}x{r}"`` string form
- Cube coordinates (x, y, z) for calculations
- Distance, neighbours and range queries
"""

import pytest

from gaia_rules.utils.hex_math import (
    HexCoord,
    axial_to_cube,
    cube_to_axial,
    hex_distance,
    hex_neighbors,
    hexes_in_range,
)


class TestHexCoord:
    """Test the HexCoord dataclass."""

    def test_equality_and_hash(self) -> None:
        """Equal coordinates collapse in a set."""
        assert HexCoord(q=1, r=2) == HexCoord(q=1, r=2)
        assert HexCoord(q=1, r=2) != HexCoord(q=2, r=1)
        assert len({HexCoord(q=1, r=2), HexCoord(q=1, r=2)}) == 1

    def test_to_string(self) -> None:
        """Coordinates serialize as q, an ``x`` and r."""
        assert HexCoord(q=2, r=-1).to_string() == "2x-1"
        assert HexCoord(q=-3, r=0).to_string() == "-3x0"

    def test_from_string_roundtrip(self) -> None:
        """Parsing the string form restores the coordinate."""
        for coord in (HexCoord(q=0, r=0), HexCoord(q=-4, r=7), HexCoord(q=12, r=-12)):
            assert HexCoord.from_string(coord.to_string()) == coord

    def test_from_string_rejects_garbage(self) -> None:
        """Anything but ``{q}x{r}`` is refused."""
        with pytest.raises(ValueError, match="Invalid hex coordinate"):
            HexCoord.from_string("1,2")

    def test_ordering(self) -> None:
        """Coordinates sort by q then r."""
        coords = [HexCoord(q=1, r=0), HexCoord(q=0, r=2), HexCoord(q=0, r=-1)]
        assert sorted(coords) == [HexCoord(q=0, r=-1), HexCoord(q=0, r=2), HexCoord(q=1, r=0)]


class TestCoordinateConversion:
    """Test conversion between axial and cube coordinates."""

    def test_axial_to_cube(self) -> None:
        """Cube coordinates always sum to zero."""
        x, y, z = axial_to_cube(HexCoord(q=3, r=-1))
        assert (x, y, z) == (3, -2, -1)
        assert x + y + z == 0

    def test_roundtrip_conversion(self) -> None:
        """axial -> cube -> axial is the identity."""
        for original in (HexCoord(q=0, r=0), HexCoord(q=10, r=-5), HexCoord(q=-7, r=3)):
            assert cube_to_axial(*axial_to_cube(original)) == original


class TestHexDistance:
    """Test distance calculations between hexes."""

    def test_distance_to_self(self) -> None:
        assert hex_distance(HexCoord(q=5, r=3), HexCoord(q=5, r=3)) == 0

    def test_distance_symmetric(self) -> None:
        hex_a = HexCoord(q=1, r=2)
        hex_b = HexCoord(q=4, r=-1)
        assert hex_distance(hex_a, hex_b) == hex_distance(hex_b, hex_a)

    def test_distance_known_values(self) -> None:
        """Distances checked by hand against cube coordinates."""
        test_cases = [
            (HexCoord(q=0, r=0), HexCoord(q=3, r=0), 3),
            (HexCoord(q=0, r=0), HexCoord(q=2, r=2), 4),
            (HexCoord(q=2, r=0), HexCoord(q=-1, r=3), 3),
            (HexCoord(q=-2, r=-3), HexCoord(q=1, r=2), 8),
        ]
        for hex_a, hex_b, expected in test_cases:
            assert hex_distance(hex_a, hex_b) == expected


class TestHexNeighbors:
    """Test finding adjacent hexes."""

    def test_neighbors_of_origin(self) -> None:
        neighbors = hex_neighbors(HexCoord(q=0, r=0))
        assert neighbors == [
            HexCoord(q=1, r=0),
            HexCoord(q=1, r=-1),
            HexCoord(q=0, r=-1),
            HexCoord(q=-1, r=0),
            HexCoord(q=-1, r=1),
            HexCoord(q=0, r=1),
        ]

    def test_neighbor_reciprocity(self) -> None:
        """If B neighbours A then A neighbours B."""
        hex_a = HexCoord(q=3, r=-2)
        for hex_b in hex_neighbors(hex_a):
            assert hex_distance(hex_a, hex_b) == 1
            assert hex_a in hex_neighbors(hex_b)


class TestHexesInRange:
    """Test finding all hexes within a given range."""

    def test_range_formula(self) -> None:
        """The hex count follows 3n^2 + 3n + 1."""
        center = HexCoord(q=0, r=0)
        for n in range(6):
            assert len(hexes_in_range(center, n=n)) == 3 * n * n + 3 * n + 1

    def test_range_all_within_distance(self) -> None:
        center = HexCoord(q=2, r=-1)
        hexes = hexes_in_range(center, n=3)
        assert len(hexes) == len(set(hexes))
        assert all(hex_distance(center, coord) <= 3 for coord in hexes)

    def test_negative_range_raises_error(self) -> None:
        with pytest.raises(ValueError, match="Range n must be non-negative"):
            hexes_in_range(HexCoord(q=0, r=0), n=-1)
