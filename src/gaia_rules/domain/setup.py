"""Faction selection and the setup auction."""

from __future__ import annotations

import logging

from gaia_rules.utils.rng import generate_seed, shuffled

from . import catalog
from .enums import AuctionVariant, Faction
from .models import GameState
from .rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)


def remaining_factions(state: GameState) -> list[Faction]:
    """Factions still open to the next player.

    With random factions the pool is the drawn list: in auction games every
    undrawn-but-unclaimed faction is open, otherwise players take the drawn
    factions strictly in order. In a standard game a faction is open while
    neither it nor its home-planet twin has been taken.
    """

    if state.random_factions:
        if state.options.auction is not None and state.options.auction != AuctionVariant.CHOOSE_BID:
            return [faction for faction in state.random_factions if faction not in state.setup]
        if len(state.setup) < len(state.random_factions):
            return [state.random_factions[len(state.setup)]]
        return []

    taken = set(state.setup)
    taken.update(catalog.opposite_faction(faction) for faction in state.setup)
    return [faction for faction in Faction if faction not in taken]


def possible_bids(
    state: GameState, *, rules: RulesConfig = DEFAULT_RULES
) -> list[dict[str, object]]:
    """Bids the next player may place on each faction already chosen."""

    window = rules.auction.bid_window
    bids = []
    for faction in state.setup:
        owner = state.faction_owner(faction)
        current = -1
        if owner is not None and owner.data.bid is not None:
            current = owner.data.bid
        bids.append({"faction": faction, "bid": list(range(current + 1, current + 1 + window))})
    return bids


def draw_random_factions(game_id: str, player_count: int) -> list[Faction]:
    """Deterministically draw ``player_count`` factions with distinct home planets."""

    order = shuffled(generate_seed(game_id, "factions"), list(Faction))
    drawn: list[Faction] = []
    for faction in order:
        if catalog.opposite_faction(faction) in drawn:
            continue
        drawn.append(faction)
        if len(drawn) == player_count:
            break
    logger.debug("drew factions %s for game %s", drawn, game_id)
    return drawn
