"""Immutable lookup tables read by the rules engine.

Nothing in this module is mutated at runtime. Board actions, boosters and
tiles listed here describe what each item *does*; which ones are still
available in a given match is tracked on :class:`~gaia_rules.domain.models.GameState`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType

from . import reward as rw
from .enums import (
    AdvTechTilePos,
    BoardAction,
    Booster,
    Building,
    Faction,
    FederationTile,
    Planet,
    TechTilePos,
)
from .errors import CandidateRejected

# ---------------------------------------------------------------------------
# Planets


PLANET_WHEEL: tuple[Planet, ...] = (
    Planet.TERRA,
    Planet.OXIDE,
    Planet.VOLCANIC,
    Planet.DESERT,
    Planet.SWAMP,
    Planet.TITANIUM,
    Planet.ICE,
)


def terraforming_steps(home: Planet, target: Planet) -> int:
    """Steps around the planet wheel between ``home`` and ``target``.

    Raises:
        CandidateRejected: when either planet is not on the wheel.
    """

    if home not in PLANET_WHEEL or target not in PLANET_WHEEL:
        raise CandidateRejected(f"cannot terraform {target} for {home} natives")
    gap = abs(PLANET_WHEEL.index(home) - PLANET_WHEEL.index(target))
    return min(gap, len(PLANET_WHEEL) - gap)


# ---------------------------------------------------------------------------
# Factions


FACTION_PLANETS: MappingProxyType[Faction, Planet] = MappingProxyType(
    {
        Faction.TERRANS: Planet.TERRA,
        Faction.LANTIDS: Planet.TERRA,
        Faction.XENOS: Planet.DESERT,
        Faction.GLEENS: Planet.DESERT,
        Faction.TAKLONS: Planet.SWAMP,
        Faction.AMBAS: Planet.SWAMP,
        Faction.HADSCH_HALLAS: Planet.OXIDE,
        Faction.IVITS: Planet.OXIDE,
        Faction.GEODENS: Planet.VOLCANIC,
        Faction.BALTAKS: Planet.VOLCANIC,
        Faction.FIRAKS: Planet.TITANIUM,
        Faction.BESCODS: Planet.TITANIUM,
        Faction.NEVLAS: Planet.ICE,
        Faction.ITARS: Planet.ICE,
    }
)


def opposite_faction(faction: Faction) -> Faction:
    """The other faction sharing ``faction``'s home planet."""

    planet = FACTION_PLANETS[faction]
    return next(
        other for other, home in FACTION_PLANETS.items() if home == planet and other != faction
    )


@dataclass(frozen=True, slots=True)
class BuildingSpec:
    """Cost and stock of one building kind on a faction board."""

    cost: str
    max_count: int
    crowded_cost: str | None = None  # price when a neighbour is within range


@dataclass(frozen=True, slots=True)
class FactionBoard:
    """Per-faction building table and starting power."""

    faction: Faction
    buildings: MappingProxyType[Building, BuildingSpec]
    power: tuple[int, int, int] = (2, 4, 0)
    pi_events: tuple[str, ...] = ()
    income: tuple[str, ...] = ("+1o", "+1k")

    @property
    def planet(self) -> Planet:
        return FACTION_PLANETS[self.faction]

    def cost(self, building: Building, *, isolated: bool = True) -> list[rw.Reward]:
        spec = self.buildings[building]
        if not isolated and spec.crowded_cost is not None:
            return rw.parse(spec.crowded_cost)
        return rw.parse(spec.cost)

    def max_buildings(self, building: Building) -> int:
        return self.buildings[building].max_count


_STANDARD_BUILDINGS: dict[Building, BuildingSpec] = {
    Building.MINE: BuildingSpec(cost="1o,2c", max_count=8),
    Building.TRADING_STATION: BuildingSpec(cost="2o,6c", max_count=4, crowded_cost="2o,3c"),
    Building.RESEARCH_LAB: BuildingSpec(cost="3o,5c", max_count=3),
    Building.PLANETARY_INSTITUTE: BuildingSpec(cost="4o,6c", max_count=1),
    Building.ACADEMY1: BuildingSpec(cost="6o,6c", max_count=1),
    Building.ACADEMY2: BuildingSpec(cost="6o,6c", max_count=1),
    # gaia formers are limited by the player's stock, see PlayerData.gaia_formers
    Building.GAIA_FORMER: BuildingSpec(cost="~", max_count=3),
    Building.SPACE_STATION: BuildingSpec(cost="1q", max_count=25),
}


def _board(faction: Faction, **overrides) -> FactionBoard:
    buildings = dict(_STANDARD_BUILDINGS)
    buildings.update(overrides.pop("buildings", {}))
    return FactionBoard(faction=faction, buildings=MappingProxyType(buildings), **overrides)


FACTION_BOARDS: MappingProxyType[Faction, FactionBoard] = MappingProxyType(
    {
        Faction.TERRANS: _board(Faction.TERRANS, power=(4, 4, 0)),
        Faction.LANTIDS: _board(Faction.LANTIDS, power=(4, 0, 0)),
        Faction.XENOS: _board(Faction.XENOS),
        Faction.GLEENS: _board(Faction.GLEENS),
        Faction.TAKLONS: _board(Faction.TAKLONS),
        Faction.AMBAS: _board(Faction.AMBAS, pi_events=("=>swap-PI",)),
        Faction.HADSCH_HALLAS: _board(Faction.HADSCH_HALLAS, income=("+1o", "+1k", "+3c")),
        Faction.IVITS: _board(Faction.IVITS, pi_events=("=>space-station",)),
        Faction.GEODENS: _board(Faction.GEODENS),
        Faction.BALTAKS: _board(Faction.BALTAKS),
        Faction.FIRAKS: _board(Faction.FIRAKS, income=("+1o", "+2k"), pi_events=("=>down-lab",)),
        Faction.BESCODS: _board(Faction.BESCODS, income=("+1o",), pi_events=("=>up-lowest",)),
        Faction.NEVLAS: _board(Faction.NEVLAS, income=("+1o", "+1k", "+1tg")),
        Faction.ITARS: _board(Faction.ITARS, power=(4, 4, 0), income=("+1o", "+1k", "+1t")),
    }
)


def faction_board(faction: Faction) -> FactionBoard:
    return FACTION_BOARDS[faction]


# ---------------------------------------------------------------------------
# Buildings


_STANDARD_UPGRADES: dict[Building, tuple[Building, ...]] = {
    Building.GAIA_FORMER: (Building.MINE,),
    Building.MINE: (Building.TRADING_STATION,),
    Building.TRADING_STATION: (Building.RESEARCH_LAB, Building.PLANETARY_INSTITUTE),
    Building.RESEARCH_LAB: (Building.ACADEMY1, Building.ACADEMY2),
}

UPGRADE_PATHS: MappingProxyType[Faction, MappingProxyType[Building, tuple[Building, ...]]] = (
    MappingProxyType({faction: MappingProxyType(dict(_STANDARD_UPGRADES)) for faction in Faction})
)


def upgraded_buildings(building: Building, faction: Faction) -> tuple[Building, ...]:
    """Buildings ``building`` may be upgraded into for ``faction``."""

    return UPGRADE_PATHS[faction].get(building, ())


BUILDING_VALUES: MappingProxyType[Building, int] = MappingProxyType(
    {
        Building.MINE: 1,
        Building.TRADING_STATION: 2,
        Building.RESEARCH_LAB: 2,
        Building.PLANETARY_INSTITUTE: 3,
        Building.ACADEMY1: 3,
        Building.ACADEMY2: 3,
        Building.SPACE_STATION: 1,
        Building.GAIA_FORMER: 0,
    }
)

BIG_BUILDINGS = frozenset(
    {Building.PLANETARY_INSTITUTE, Building.ACADEMY1, Building.ACADEMY2}
)
BIG_BUILDING_BOOSTED_VALUE = 4


# ---------------------------------------------------------------------------
# Actions


@dataclass(frozen=True, slots=True)
class ActionSpec:
    """Cost plus one or more alternative incomes."""

    cost: str
    income: tuple[str, ...] = field(default_factory=tuple)


BOARD_ACTIONS: MappingProxyType[BoardAction, ActionSpec] = MappingProxyType(
    {
        BoardAction.POWER1: ActionSpec(cost="7pw", income=("3k",)),
        BoardAction.POWER2: ActionSpec(cost="5pw", income=("2d",)),
        BoardAction.POWER3: ActionSpec(cost="4pw", income=("2o",)),
        BoardAction.POWER4: ActionSpec(cost="4pw", income=("7c",)),
        BoardAction.POWER5: ActionSpec(cost="4pw", income=("2k",)),
        BoardAction.POWER6: ActionSpec(cost="3pw", income=("1d",)),
        BoardAction.POWER7: ActionSpec(cost="3pw", income=("2t",)),
        BoardAction.QIC1: ActionSpec(cost="4q", income=("tech",)),
        BoardAction.QIC2: ActionSpec(cost="3q", income=("rescore-fed",)),
        BoardAction.QIC3: ActionSpec(cost="2q", income=("3vp",)),
    }
)

FREE_ACTIONS: tuple[ActionSpec, ...] = (
    ActionSpec(cost="4pw", income=("1q",)),
    ActionSpec(cost="3pw", income=("1o",)),
    ActionSpec(cost="4pw", income=("1k",)),
    ActionSpec(cost="1pw", income=("1c",)),
    ActionSpec(cost="1k", income=("1c",)),
    ActionSpec(cost="1q", income=("1o",)),
    ActionSpec(cost="1o", income=("1c",)),
    ActionSpec(cost="1o", income=("1t",)),
)

FREE_ACTIONS_HADSCH_HALLAS: tuple[ActionSpec, ...] = (
    ActionSpec(cost="4c", income=("1q",)),
    ActionSpec(cost="3c", income=("1o",)),
    ActionSpec(cost="4c", income=("1k",)),
)

FREE_ACTIONS_BALTAKS: tuple[ActionSpec, ...] = (ActionSpec(cost="1gf", income=("1q",)),)

FREE_ACTIONS_TERRANS: tuple[ActionSpec, ...] = (
    ActionSpec(cost="4gpw", income=("1q",)),
    ActionSpec(cost="3gpw", income=("1o",)),
    ActionSpec(cost="4gpw", income=("1k",)),
    ActionSpec(cost="1gpw", income=("1c",)),
)

FREE_ACTIONS_ITARS: tuple[ActionSpec, ...] = (ActionSpec(cost="4gpw", income=("tech",)),)


# ---------------------------------------------------------------------------
# Tiles


BOOSTERS: MappingProxyType[Booster, tuple[str, ...]] = MappingProxyType(
    {
        Booster.BOOSTER1: ("+1k", "+1o"),
        Booster.BOOSTER2: ("+1o", "+1t"),
        Booster.BOOSTER3: ("+2c", "+1q"),
        Booster.BOOSTER4: ("=>1d", "+2c"),
        Booster.BOOSTER5: ("=>3r", "+2pw"),
        Booster.BOOSTER6: ("+1o", "m | 1vp"),
        Booster.BOOSTER7: ("+1o", "ts | 2vp"),
        Booster.BOOSTER8: ("+1k", "lab | 3vp"),
        Booster.BOOSTER9: ("+4pw", "PA | 4vp"),
        Booster.BOOSTER10: ("+4c", "g | 1vp"),
    }
)

TECH_TILES: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "tech1": (">1q", ">1o"),
        "tech2": ("pt > 1k",),
        "tech3": ("S",),
        "tech4": (">7vp",),
        "tech5": ("+1o", "+1pw"),
        "tech6": ("+1k", "+1c"),
        "tech7": ("mg >> 3vp",),
        "tech8": ("+4c",),
        "tech9": ("=>4pw",),
    }
)

ADV_TECH_TILES: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "advtech1": ("fed | 3vp",),
        "advtech2": ("lab | 2vp",),
        "advtech3": ("=>1q,5c",),
        "advtech4": ("g > 2vp",),
        "advtech5": ("ts >> 3vp",),
        "advtech6": ("s > 2vp",),
        "advtech7": ("=>3o",),
        "advtech8": ("m > 2vp",),
        "advtech9": ("ts | 4vp",),
        "advtech10": ("s > 5o",),
        "advtech11": ("a >> 2vp",),
        "advtech12": ("=>3k",),
        "advtech13": ("fed > 5vp",),
        "advtech14": ("m >> 3vp",),
        "advtech15": ("ts > 4vp",),
    }
)

STANDARD_TECH_POSITIONS: tuple[TechTilePos, ...] = tuple(TechTilePos)
ADVANCED_TECH_POSITIONS: tuple[AdvTechTilePos, ...] = tuple(AdvTechTilePos)

FEDERATION_TILES: MappingProxyType[FederationTile, str] = MappingProxyType(
    {
        FederationTile.FED1: "12vp",
        FederationTile.FED2: "1q,5vp",
        FederationTile.FED3: "2o,7vp",
        FederationTile.FED4: "2k,6vp",
        FederationTile.FED5: "6c,7vp",
        FederationTile.FED6: "2t,8vp",
        FederationTile.GLEENS: "1o,1k,2c",
    }
)

# the Gleens token is printed without the green side
NON_GREEN_FEDERATION_TILES = frozenset({FederationTile.GLEENS})
