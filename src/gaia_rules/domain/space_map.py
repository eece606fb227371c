"""Map hexes and the spatial queries the rules need."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from gaia_rules.utils.hex_math import HexCoord, hex_distance, hexes_in_range

from .enums import Building, Planet


@dataclass(slots=True)
class GaiaHex:
    """One map hex. Occupancy changes over the game; the planet may turn to Gaia."""

    coord: HexCoord
    planet: Planet = Planet.EMPTY
    sector: str | None = None
    building: Building | None = None
    player: int | None = None
    additional_mine: int | None = None  # Lantids mine sharing the planet
    federations: list[int] = field(default_factory=list)

    def to_string(self) -> str:
        return self.coord.to_string()

    def has_planet(self) -> bool:
        return self.planet != Planet.EMPTY

    def occupied(self) -> bool:
        return self.building is not None and self.player is not None

    def has_structure(self) -> bool:
        """Gaia formers are markers, not structures."""
        return self.occupied() and self.building != Building.GAIA_FORMER

    def building_of(self, player: int) -> Building | None:
        if self.player == player:
            return self.building
        if self.additional_mine == player:
            return Building.MINE
        return None

    def is_main_occupant(self, player: int) -> bool:
        return self.player == player

    def belongs_to_federation_of(self, player: int) -> bool:
        return player in self.federations

    def is_range_starting_point(self, player: int) -> bool:
        return self.building_of(player) is not None


@dataclass(slots=True)
class SpaceMap:
    """Hexes keyed by their ``"{q}x{r}"`` string, in map order."""

    hexes: dict[str, GaiaHex] = field(default_factory=dict)

    @classmethod
    def from_hexes(cls, hexes: Iterable[GaiaHex]) -> SpaceMap:
        return cls(hexes={hex_.to_string(): hex_ for hex_ in hexes})

    def __iter__(self) -> Iterator[GaiaHex]:
        return iter(self.hexes.values())

    def __len__(self) -> int:
        return len(self.hexes)

    def add(self, hex_: GaiaHex) -> None:
        self.hexes[hex_.to_string()] = hex_

    def get(self, coord: HexCoord) -> GaiaHex | None:
        return self.hexes.get(coord.to_string())

    def distance(self, a: HexCoord | GaiaHex, b: HexCoord | GaiaHex) -> int:
        return hex_distance(_coord(a), _coord(b))

    def is_occupied(self, coord: HexCoord) -> bool:
        hex_ = self.get(coord)
        return hex_ is not None and hex_.occupied()

    def structure_at(self, coord: HexCoord) -> Building | None:
        hex_ = self.get(coord)
        return hex_.building if hex_ is not None else None

    def neighbors_within_range(self, origin: HexCoord, distance: int) -> list[GaiaHex]:
        """Map hexes at distance 1..``distance`` from ``origin``; each appears once."""

        found = []
        for coord in hexes_in_range(origin, distance):
            if coord == origin:
                continue
            hex_ = self.get(coord)
            if hex_ is not None:
                found.append(hex_)
        return found


def _coord(value: HexCoord | GaiaHex) -> HexCoord:
    return value.coord if isinstance(value, GaiaHex) else value
