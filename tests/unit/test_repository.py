"""Tests for the JSON game repository."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from gaia_rules.domain import models as dm
from gaia_rules.domain.enums import Building, Faction, Phase, Planet
from gaia_rules.domain.events import parse_event
from gaia_rules.domain.ledger import OwnedTechTile, PlayerData, PowerAreas
from gaia_rules.domain.space_map import GaiaHex, SpaceMap
from gaia_rules.repository import JsonGameRepository
from gaia_rules.utils.hex_math import HexCoord


def _game(game_id: str = "g1") -> dm.GameState:
    data = PlayerData(ores=4, credits=15, power=PowerAreas(area1=2, area2=4))
    data.occupied.append(HexCoord(q=0, r=0))
    data.buildings[Building.MINE] = 1
    data.tiles.techs.append(OwnedTechTile(tile="tech5", pos="gaia"))
    player = dm.Player(index=0, faction=Faction.TERRANS, data=data)
    player.events.append(parse_event("+1o", source="board"))
    hexes = [
        GaiaHex(coord=HexCoord(q=0, r=0), planet=Planet.TERRA, building=Building.MINE, player=0),
        GaiaHex(coord=HexCoord(q=1, r=-1), planet=Planet.GAIA, sector="s1"),
    ]
    return dm.GameState(
        id=game_id,
        phase=Phase.ROUND_MOVE,
        round=2,
        current_player=0,
        players=[player],
        tiles=dm.default_tiles(2),
        map=SpaceMap.from_hexes(hexes),
    )


def test_save_and_load_game(tmp_path):
    repo = JsonGameRepository(tmp_path)
    game = _game()

    path = repo.save(game)
    assert path.exists()

    loaded = repo.load("g1")
    assert loaded == game
    assert loaded.map.get(HexCoord(q=0, r=0)).building == Building.MINE


def test_list_and_delete(tmp_path):
    repo = JsonGameRepository(tmp_path)
    repo.save(_game("g2"))
    repo.save(_game("g1"))

    assert repo.list_games() == ["g1", "g2"]

    repo.delete("g1")
    assert repo.list_games() == ["g2"]


def test_load_missing_game(tmp_path):
    repo = JsonGameRepository(tmp_path)
    with pytest.raises(FileNotFoundError):
        repo.load("nope")


def test_rejects_path_like_ids(tmp_path):
    repo = JsonGameRepository(tmp_path)
    with pytest.raises(ValueError):
        repo.load("../escape")


def test_validate_decoded_payload(tmp_path):
    repo = JsonGameRepository(tmp_path)
    payload = repo.dump(_game())
    assert repo.validate(payload) == _game()

    payload["phase"] = "not-a-phase"
    with pytest.raises(ValidationError):
        repo.validate(payload)
