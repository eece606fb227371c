"""Tests for API runtime helpers."""

from __future__ import annotations

import pytest

from gaia_rules.api.runtime import ApiState, GameService
from gaia_rules.config import Settings
from gaia_rules.domain import models as dm
from gaia_rules.domain.enums import Command, Faction, Phase
from gaia_rules.repository import JsonGameRepository


def _setup_game(game_id: str = "g1") -> dm.GameState:
    return dm.GameState(
        id=game_id,
        phase=Phase.SETUP_FACTION,
        current_player=0,
        players=[dm.Player(index=0), dm.Player(index=1)],
        setup=[],
    )


def test_store_and_enumerate(tmp_path):
    repo = JsonGameRepository(tmp_path)
    service = GameService(repo)

    stored = service.store_game("g1", repo.dump(_setup_game()))
    assert stored.phase == Phase.SETUP_FACTION

    (command,) = service.available_commands("g1")
    assert command.name == Command.CHOOSE_FACTION
    assert command.data == list(Faction)


def test_store_rejects_mismatched_id(tmp_path):
    repo = JsonGameRepository(tmp_path)
    service = GameService(repo)

    with pytest.raises(ValueError):
        service.store_game("other", repo.dump(_setup_game()))
    assert repo.list_games() == []


def test_summary_dict(tmp_path):
    game = _setup_game()
    game.players[0].faction = Faction.NEVLAS
    summary = GameService.to_summary_dict(game)
    assert summary == {
        "id": "g1",
        "phase": "setupFaction",
        "sub_phase": None,
        "round": 0,
        "current_player": 0,
        "factions": ["nevlas", None],
    }


def test_api_state_uses_settings(tmp_path):
    state = ApiState(settings=Settings(data_dir=tmp_path / "data"))
    assert (tmp_path / "data").is_dir()
    assert state.games.list_games() == []
