"""Integration tests for the FastAPI application."""

import pytest
from fastapi.testclient import TestClient

from gaia_rules.api.app import create_app
from gaia_rules.api.runtime import ApiState
from gaia_rules.config import Settings
from gaia_rules.domain import models as dm
from gaia_rules.domain.enums import AuctionVariant, Faction, Phase
from gaia_rules.domain.setup import draw_random_factions
from gaia_rules.repository import JsonGameRepository


@pytest.fixture
def client(tmp_path):
    """Create a test client backed by a temporary game directory."""
    app = create_app(state_factory=lambda: ApiState(settings=Settings(data_dir=tmp_path)))
    with TestClient(app) as test_client:
        yield test_client


def _put(client, tmp_path, game: dm.GameState):
    payload = JsonGameRepository(tmp_path).dump(game)
    response = client.put(f"/games/{game.id}", json=payload)
    assert response.status_code == 200
    return response.json()


def test_api_docs_available(client):
    """OpenAPI documentation is served."""
    assert client.get("/docs").status_code == 200
    schema = client.get("/openapi.json").json()
    assert "/games/{game_id}/commands" in schema["paths"]


def test_setup_flow(client, tmp_path):
    """Faction choices shrink as players pick, twins included."""
    game = dm.GameState(
        id="setup",
        phase=Phase.SETUP_FACTION,
        current_player=0,
        players=[dm.Player(index=0), dm.Player(index=1)],
    )
    _put(client, tmp_path, game)
    commands = client.get("/games/setup/commands").json()
    assert commands == [
        {"name": "faction", "player": 0, "data": [faction.value for faction in Faction]}
    ]

    game.players[0].faction = Faction.XENOS
    game.setup.append(Faction.XENOS)
    game.current_player = 1
    _put(client, tmp_path, game)
    (command,) = client.get("/games/setup/commands").json()
    assert command["player"] == 1
    assert "xenos" not in command["data"]
    assert "gleens" not in command["data"]
    assert len(command["data"]) == 12


def test_random_auction_flow(client, tmp_path):
    """Random draws are offered together with bids on chosen factions."""
    drawn = draw_random_factions("auction", 2)
    game = dm.GameState(
        id="auction",
        phase=Phase.SETUP_FACTION,
        current_player=1,
        players=[dm.Player(index=0, faction=drawn[0]), dm.Player(index=1)],
        setup=[drawn[0]],
        random_factions=drawn,
        options=dm.GameOptions(auction=AuctionVariant.BID_WHILE_CHOOSING, random_factions=True),
    )
    _put(client, tmp_path, game)
    bid, choose = client.get("/games/auction/commands").json()
    assert bid["name"] == "bid"
    assert bid["data"]["bids"] == [{"faction": drawn[0].value, "bid": list(range(9))}]
    assert choose["data"] == [drawn[1].value]


def test_commands_for_another_seat(client, tmp_path):
    """The player query parameter overrides the player to move."""
    game = dm.GameState(
        id="leech",
        phase=Phase.ROUND_LEECH,
        current_player=0,
        players=[
            dm.Player(index=0, faction=Faction.TERRANS),
            dm.Player(index=1, faction=Faction.NEVLAS),
        ],
    )
    game.players[1].data.leech_possible = 2
    game.players[1].data.power.area1 = 2
    _put(client, tmp_path, game)

    assert client.get("/games/leech/commands").json() == []
    charge, decline = client.get("/games/leech/commands", params={"player": 1}).json()
    assert charge["name"] == "charge"
    assert decline["name"] == "decline"
    assert charge["data"]["offer"] == "2pw"
    assert charge["data"]["cost"] == "1vp"

    assert client.get("/games/leech/commands", params={"player": 5}).status_code == 409
    assert client.get("/games/leech/commands", params={"player": -1}).status_code == 422
