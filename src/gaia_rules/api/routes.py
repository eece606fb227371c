"""HTTP routes for the Gaia rules API."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, status
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, ValidationError

from gaia_rules.api.runtime import ApiState
from gaia_rules.domain import models as dm
from gaia_rules.domain.errors import InconsistentState

router = APIRouter()


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]


class GameSummary(BaseModel):
    id: str
    phase: str
    sub_phase: str | None
    round: int
    current_player: int | None
    factions: list[str | None]


class CommandOut(BaseModel):
    name: str
    player: int | None
    data: Any = None


def _load(state: ApiState, game_id: str) -> dm.GameState:
    try:
        return state.games.get_game(game_id)
    except FileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="game not found") from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("/health")
async def health(state: ApiStateDep) -> dict[str, object]:
    return {"status": "ok", "rules_version": state.settings.rules_version}


@router.get("/games", response_model=list[GameSummary])
async def list_games(state: ApiStateDep) -> list[GameSummary]:
    games = state.games.list_games()
    return [GameSummary.model_validate(state.games.to_summary_dict(game)) for game in games]


@router.put("/games/{game_id}", response_model=GameSummary)
async def put_game(
    game_id: str,
    state: ApiStateDep,
    payload: Annotated[dict[str, Any], Body()],
) -> GameSummary:
    try:
        game = state.games.store_game(game_id, payload)
    except ValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail=jsonable_encoder(exc.errors(include_url=False)),
        ) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return GameSummary.model_validate(state.games.to_summary_dict(game))


@router.get("/games/{game_id}")
async def get_game(game_id: str, state: ApiStateDep) -> dict[str, Any]:
    game = _load(state, game_id)
    return state.games.dump(game)


@router.get("/games/{game_id}/commands", response_model=list[CommandOut])
async def list_commands(
    game_id: str,
    state: ApiStateDep,
    player: Annotated[int | None, Query(ge=0)] = None,
) -> list[CommandOut]:
    _load(state, game_id)
    try:
        commands = state.games.available_commands(game_id, player=player)
    except InconsistentState as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return [
        CommandOut(name=str(command.name), player=command.player, data=jsonable_encoder(command.data))
        for command in commands
    ]
