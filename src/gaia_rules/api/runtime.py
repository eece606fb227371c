"""Runtime primitives backing the Gaia rules HTTP API."""

from __future__ import annotations

import logging
from contextlib import suppress

from gaia_rules.config import Settings, get_settings
from gaia_rules.domain import available_command as ac
from gaia_rules.domain import models as dm
from gaia_rules.domain.rules_config import DEFAULT_RULES, RulesConfig
from gaia_rules.repository import JsonGameRepository

logger = logging.getLogger(__name__)


class GameService:
    """Load, store and query game snapshots."""

    def __init__(self, repository: JsonGameRepository, *, rules: RulesConfig = DEFAULT_RULES) -> None:
        self._repository = repository
        self._rules = rules

    def list_games(self) -> list[dm.GameState]:
        """Return every persisted game ordered by identifier."""

        games: list[dm.GameState] = []
        for game_id in self._repository.list_games():
            with suppress(FileNotFoundError):
                games.append(self.get_game(game_id))
        return games

    def get_game(self, game_id: str) -> dm.GameState:
        """Load a single game or raise ``FileNotFoundError``."""

        try:
            return self._repository.load(game_id)
        except FileNotFoundError:
            logger.warning("no snapshot for game %s", game_id)
            raise

    def store_game(self, game_id: str, payload: object) -> dm.GameState:
        """Validate ``payload`` as a snapshot for ``game_id`` and persist it."""

        game = self._repository.validate(payload)
        if game.id != game_id:
            raise ValueError(f"snapshot id {game.id!r} does not match {game_id!r}")
        self._repository.save(game)
        logger.info("stored game %s (phase %s, round %s)", game.id, game.phase, game.round)
        return game

    def available_commands(
        self, game_id: str, *, player: int | None = None
    ) -> list[ac.AvailableCommand]:
        """Enumerate legal commands for the player to move (or ``player``)."""

        game = self.get_game(game_id)
        return ac.generate(game, player=player, rules=self._rules)

    def dump(self, game: dm.GameState) -> object:
        return self._repository.dump(game)

    @staticmethod
    def to_summary_dict(game: dm.GameState) -> dict[str, object]:
        """Return a JSON-friendly overview of a game."""

        return {
            "id": game.id,
            "phase": str(game.phase),
            "sub_phase": str(game.sub_phase) if game.sub_phase is not None else None,
            "round": game.round,
            "current_player": game.current_player,
            "factions": [str(p.faction) if p.faction is not None else None for p in game.players],
        }


class ApiState:
    """Aggregated services shared by the FastAPI layer."""

    def __init__(
        self, *, settings: Settings | None = None, rules: RulesConfig = DEFAULT_RULES
    ) -> None:
        self.settings = settings or get_settings()
        self.repository = JsonGameRepository(self.settings.data_dir)
        self.rules = rules
        self.games = GameService(self.repository, rules=rules)

    async def shutdown(self) -> None:
        logger.debug("api state shut down")


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()
