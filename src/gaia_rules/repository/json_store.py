"""JSON-based repository for game snapshots."""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import TypeAdapter

from gaia_rules.domain import models as dm

_GAME_ID = re.compile(r"^[A-Za-z0-9_-]+$")


class JsonGameRepository:
    """Persist games as JSON snapshots on disk, one file per game."""

    def __init__(self, base_path: Path) -> None:
        self.base_path = base_path
        self.base_path.mkdir(parents=True, exist_ok=True)
        self._adapter: TypeAdapter[dm.GameState] = TypeAdapter(dm.GameState)

    def _path_for(self, game_id: str) -> Path:
        if not _GAME_ID.match(game_id):
            raise ValueError(f"invalid game id: {game_id!r}")
        return self.base_path / f"game_{game_id}.json"

    def save(self, game: dm.GameState) -> Path:
        """Serialize a game to disk and return the snapshot path."""

        path = self._path_for(game.id)
        payload = self._adapter.dump_json(game, indent=2)
        path.write_bytes(payload)
        return path

    def load(self, game_id: str) -> dm.GameState:
        """Load a previously saved game; ``FileNotFoundError`` if there is none."""

        path = self._path_for(game_id)
        data = path.read_bytes()
        return self._adapter.validate_json(data)

    def validate(self, payload: object) -> dm.GameState:
        """Build a game from decoded JSON, raising ``pydantic.ValidationError`` if malformed."""

        return self._adapter.validate_python(payload)

    def dump(self, game: dm.GameState) -> object:
        return self._adapter.dump_python(game, mode="json")

    def list_games(self) -> list[str]:
        """Return all game ids currently persisted in the repository."""

        prefix = "game_"
        suffix = ".json"
        ids = [
            path.name[len(prefix) : -len(suffix)]
            for path in self.base_path.glob("game_*.json")
        ]
        return sorted(ids)

    def delete(self, game_id: str) -> None:
        """Remove a game snapshot if it exists."""

        path = self._path_for(game_id)
        if path.exists():
            path.unlink()
