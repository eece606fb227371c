"""Unit tests for the federation search."""

from __future__ import annotations

from gaia_rules.domain.enums import Building, Faction, Phase, Planet
from gaia_rules.domain.events import parse_event
from gaia_rules.domain.federation import (
    available_federations,
    building_value,
    federation_threshold,
    satellite_budget,
)
from gaia_rules.domain.ledger import PlayerData, PowerAreas
from gaia_rules.domain.models import GameState, Player, default_tiles
from gaia_rules.domain.space_map import GaiaHex, SpaceMap
from gaia_rules.utils.hex_math import HexCoord


def _mk_row(faction: Faction = Faction.TERRANS, *, tokens: int = 4) -> GameState:
    """A single row of hexes from q=-1 to q=6, all empty space."""

    hexes = [GaiaHex(coord=HexCoord(q=q, r=0)) for q in range(-1, 7)]
    player = Player(
        index=0,
        faction=faction,
        data=PlayerData(power=PowerAreas(area1=tokens)),
    )
    return GameState(
        id="fed",
        phase=Phase.ROUND_MOVE,
        round=2,
        current_player=0,
        players=[player],
        tiles=default_tiles(1),
        map=SpaceMap.from_hexes(hexes),
    )


def _build(game: GameState, q: int, building: Building) -> None:
    hex_ = game.map.get(HexCoord(q=q, r=0))
    hex_.planet = Planet.TERRA
    hex_.building = building
    hex_.player = 0
    data = game.players[0].data
    data.occupied.append(hex_.coord)
    data.buildings[building] += 1


def _identities(game: GameState, **kwargs) -> list[str]:
    return [c.identity for c in available_federations(game, game.players[0], **kwargs)]


def _base(faction: Faction = Faction.TERRANS, *, tokens: int = 4) -> GameState:
    game = _mk_row(faction, tokens=tokens)
    _build(game, 0, Building.PLANETARY_INSTITUTE)
    _build(game, 1, Building.TRADING_STATION)
    _build(game, 3, Building.RESEARCH_LAB)
    return game


class TestValuesAndBudget:
    """Structure values, thresholds and the satellite budget."""

    def test_building_values(self) -> None:
        player = Player(index=0, faction=Faction.TERRANS)
        assert building_value(player, Building.MINE) == 1
        assert building_value(player, Building.TRADING_STATION) == 2
        assert building_value(player, Building.PLANETARY_INSTITUTE) == 3
        assert building_value(player, Building.GAIA_FORMER) == 0

    def test_special_tile_boosts_big_buildings(self) -> None:
        player = Player(index=0, faction=Faction.TERRANS)
        player.events.append(parse_event("S", source="tech3"))
        assert building_value(player, Building.ACADEMY1) == 4
        assert building_value(player, Building.RESEARCH_LAB) == 2

    def test_xenos_threshold_drops_with_pi(self) -> None:
        player = Player(index=0, faction=Faction.XENOS)
        assert federation_threshold(player) == 7
        player.data.buildings[Building.PLANETARY_INSTITUTE] = 1
        assert federation_threshold(player) == 6

    def test_budget_is_capped(self) -> None:
        player = Player(index=0, faction=Faction.TERRANS, data=PlayerData(power=PowerAreas(area1=20)))
        assert satellite_budget(player) == 12

    def test_ivits_pay_in_qics(self) -> None:
        player = Player(index=0, faction=Faction.IVITS, data=PlayerData(qics=2, power=PowerAreas(area1=5)))
        assert satellite_budget(player) == 2


class TestAvailableFederations:
    """Candidate enumeration on a single row of hexes."""

    def test_bridged_federation(self) -> None:
        game = _base()
        (candidate,) = available_federations(game, game.players[0])
        assert candidate.identity == "0x0,1x0,2x0,3x0"
        assert candidate.satellites == [HexCoord(q=2, r=0)]
        assert candidate.new_satellites == 1
        assert candidate.value == 7

    def test_no_tokens_no_satellites(self) -> None:
        assert _identities(_base(tokens=0)) == []

    def test_below_threshold(self) -> None:
        game = _mk_row()
        _build(game, 0, Building.PLANETARY_INSTITUTE)
        _build(game, 1, Building.TRADING_STATION)
        assert _identities(game) == []

    def test_strict_mode_keeps_minimal_sets(self) -> None:
        game = _base()
        _build(game, 5, Building.RESEARCH_LAB)
        assert _identities(game) == ["0x0,1x0,2x0,3x0"]

    def test_low_value_bridge_group_is_kept(self) -> None:
        game = _mk_row()
        _build(game, 0, Building.PLANETARY_INSTITUTE)
        _build(game, 1, Building.TRADING_STATION)
        _build(game, 3, Building.MINE)
        _build(game, 5, Building.RESEARCH_LAB)
        _build(game, 6, Building.RESEARCH_LAB)
        # the mine is worth least but is the only link between the other two
        expected = ["0x0,1x0,2x0,3x0,4x0,5x0,6x0"]
        assert _identities(game) == expected
        assert _identities(game, flexible=True) == expected

    def test_flexible_mode_keeps_larger_sets(self) -> None:
        game = _base()
        _build(game, 5, Building.RESEARCH_LAB)
        assert _identities(game, flexible=True) == [
            "0x0,1x0,2x0,3x0",
            "0x0,1x0,2x0,3x0,4x0,5x0",
        ]

    def test_existing_federation_blocks(self) -> None:
        game = _base()
        game.map.get(HexCoord(q=0, r=0)).federations.append(0)
        assert _identities(game) == []

    def test_gaia_formers_are_ignored(self) -> None:
        game = _mk_row()
        _build(game, 0, Building.PLANETARY_INSTITUTE)
        _build(game, 1, Building.TRADING_STATION)
        _build(game, 2, Building.GAIA_FORMER)
        _build(game, 3, Building.RESEARCH_LAB)
        # the former's hex is occupied and cannot host a satellite
        assert _identities(game) == []

    def test_xenos_form_smaller_federations(self) -> None:
        game = _mk_row(Faction.XENOS)
        _build(game, 0, Building.PLANETARY_INSTITUTE)
        _build(game, 1, Building.TRADING_STATION)
        _build(game, 3, Building.MINE)
        assert _identities(game) == ["0x0,1x0,2x0,3x0"]

        terrans = _mk_row()
        _build(terrans, 0, Building.PLANETARY_INSTITUTE)
        _build(terrans, 1, Building.TRADING_STATION)
        _build(terrans, 3, Building.MINE)
        assert _identities(terrans) == []

    def test_special_tile_reaches_threshold(self) -> None:
        game = _mk_row()
        _build(game, 0, Building.PLANETARY_INSTITUTE)
        _build(game, 1, Building.TRADING_STATION)
        _build(game, 3, Building.MINE)
        assert _identities(game) == []
        game.players[0].events.append(parse_event("S", source="tech3"))
        assert _identities(game) == ["0x0,1x0,2x0,3x0"]

    def test_ivits_satellites_cost_qics(self) -> None:
        game = _base(Faction.IVITS)
        assert _identities(game) == []
        game.players[0].data.qics = 1
        assert _identities(game) == ["0x0,1x0,2x0,3x0"]

    def test_results_are_deterministic(self) -> None:
        game = _base()
        _build(game, 5, Building.RESEARCH_LAB)
        first = available_federations(game, game.players[0], flexible=True)
        second = available_federations(game, game.players[0], flexible=True)
        assert first == second
