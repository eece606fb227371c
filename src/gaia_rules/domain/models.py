"""Game state read by the rules engine.

These dataclasses are a snapshot: the enumerator never mutates them. They
round-trip through pydantic so that the repository can store a whole match
as one JSON document.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from . import catalog
from .enums import (
    AdvTechTilePos,
    AuctionVariant,
    BoardAction,
    Booster,
    Faction,
    FederationTile,
    Operator,
    Phase,
    Planet,
    SubPhase,
    TechTilePos,
)
from .errors import InconsistentState
from .events import Event, events_with
from .ledger import PlayerData
from .rules_config import DEFAULT_RULES, RulesConfig
from .space_map import SpaceMap


@dataclass(slots=True)
class Player:
    """A seat at the table."""

    index: int
    faction: Faction | None = None
    data: PlayerData = field(default_factory=PlayerData)
    events: list[Event] = field(default_factory=list)
    custom_federation: bool = False  # player picks federation hexes by hand

    @property
    def board(self) -> catalog.FactionBoard:
        if self.faction is None:
            raise InconsistentState(f"player {self.index} has no faction yet")
        return catalog.faction_board(self.faction)

    @property
    def planet(self) -> Planet:
        return self.board.planet

    def events_with(self, operator: Operator) -> list[Event]:
        return events_with(self.events, operator)

    def is_new_planet_type(self, space_map: SpaceMap, planet: Planet) -> bool:
        """True if none of the player's structures stands on a ``planet`` hex."""

        for coord in self.data.occupied:
            hex_ = space_map.get(coord)
            if hex_ is not None and hex_.planet == planet and hex_.building_of(self.index) is not None:
                return False
        return True


@dataclass(slots=True)
class TechTileSlot:
    """A stack of identical tech tiles on the research board."""

    tile: str
    count: int = 1


@dataclass(slots=True)
class GameTiles:
    """Shared tile supply."""

    techs: dict[str, TechTileSlot] = field(default_factory=dict)
    boosters: dict[Booster, bool] = field(default_factory=dict)
    federations: dict[FederationTile, int] = field(default_factory=dict)


def default_tiles(player_count: int = 4) -> GameTiles:
    """Tiles laid out in catalog order, every booster in play."""

    standard = list(catalog.TECH_TILES)
    advanced = list(catalog.ADV_TECH_TILES)
    techs = {
        pos.value: TechTileSlot(tile=tile, count=player_count)
        for pos, tile in zip(TechTilePos, standard)
    }
    techs.update(
        {pos.value: TechTileSlot(tile=tile) for pos, tile in zip(AdvTechTilePos, advanced)}
    )
    return GameTiles(
        techs=techs,
        boosters={booster: True for booster in Booster},
        federations={
            tile: 0 if tile in catalog.NON_GREEN_FEDERATION_TILES else 3 for tile in FederationTile
        },
    )


@dataclass(slots=True)
class GameOptions:
    """Variant switches chosen when the match is created."""

    flexible_federations: bool = False
    no_fed_check: bool = False
    auction: AuctionVariant | None = None
    random_factions: bool = False


def _open_board_actions() -> dict[BoardAction, int | None]:
    return {action: None for action in BoardAction}


@dataclass(slots=True)
class GameState:
    """Everything the enumerator reads about a match."""

    id: str
    phase: Phase = Phase.INIT
    sub_phase: SubPhase | None = None
    round: int = 0
    current_player: int | None = None
    players: list[Player] = field(default_factory=list)
    # action -> index of the player who took it this round
    board_actions: dict[BoardAction, int | None] = field(default_factory=_open_board_actions)
    tiles: GameTiles = field(default_factory=GameTiles)
    map: SpaceMap = field(default_factory=SpaceMap)
    options: GameOptions = field(default_factory=GameOptions)
    setup: list[Faction] = field(default_factory=list)
    random_factions: list[Faction] = field(default_factory=list)

    def player(self, index: int) -> Player:
        if not 0 <= index < len(self.players):
            raise InconsistentState(f"no player with index {index}")
        return self.players[index]

    @property
    def player_to_move(self) -> Player | None:
        if self.current_player is None:
            return None
        return self.player(self.current_player)

    def is_last_round(self, *, rules: RulesConfig = DEFAULT_RULES) -> bool:
        return self.round >= rules.rounds.last_round

    def faction_owner(self, faction: Faction) -> Player | None:
        return next((player for player in self.players if player.faction == faction), None)
