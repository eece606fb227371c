"""Build and upgrade legality.

Every function here is pure: it reads a :class:`GameState` and answers
whether a structure may go on a hex and at what cost. Faction hooks from
:mod:`gaia_rules.domain.faction_rules` run after the generic check.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from . import catalog
from . import reward as rw
from .enums import Building, BuildWarning, Planet, ResearchField, Resource
from .errors import CandidateRejected
from .faction_rules import BuildContext, rules_for
from .ledger import PlayerData
from .models import GameState, Player
from .rules_config import DEFAULT_RULES, RulesConfig
from .space_map import GaiaHex

logger = logging.getLogger(__name__)

NEVER_UPGRADED = frozenset({Planet.TRANSDIM, Planet.LOST})


@dataclass(slots=True)
class BuildCheck:
    """A legal build: what it costs and any advisory warnings."""

    cost: list[rw.Reward]
    warnings: list[BuildWarning] = field(default_factory=list)
    steps: int = 0


def base_range(data: PlayerData, *, rules: RulesConfig = DEFAULT_RULES) -> int:
    level = data.research_level(ResearchField.NAVIGATION)
    return rules.build.navigation_range[level]


def qic_for_distance(
    distance: int, data: PlayerData, *, rules: RulesConfig = DEFAULT_RULES
) -> int | None:
    """Qics needed to reach ``distance``; ``None`` when the player cannot afford them."""

    shortfall = distance - base_range(data, rules=rules) - data.temporary_range
    needed = max(0, math.ceil(shortfall / rules.build.distance_per_qic))
    if needed > data.qics:
        return None
    return needed


def distance_from_structures(
    state: GameState, player: Player, hex_: GaiaHex, *, starting_points_only: bool = True
) -> int | None:
    """Shortest distance from ``hex_`` to one of the player's hexes."""

    distances = []
    for coord in player.data.occupied:
        own = state.map.get(coord)
        if own is None:
            continue
        if starting_points_only and not own.is_range_starting_point(player.index):
            continue
        distances.append(state.map.distance(own, hex_))
    return min(distances, default=None)


def is_isolated(
    state: GameState, player: Player, hex_: GaiaHex, *, rules: RulesConfig = DEFAULT_RULES
) -> bool:
    """No opponent structure strictly closer than the isolation distance."""

    nearby = state.map.neighbors_within_range(hex_.coord, rules.build.isolated_distance - 1)
    for other in [hex_, *nearby]:
        if not other.has_structure():
            continue
        if {other.player, other.additional_mine} - {None, player.index}:
            return False
    return True


def can_occupy(state: GameState, player: Player, hex_: GaiaHex) -> bool:
    """Whether a new structure of ``player`` may go on the planet at ``hex_``."""

    if not hex_.has_planet():
        return False
    if hex_.planet == Planet.LOST:
        return False
    if hex_.occupied():
        if hex_.player == player.index:
            return False
        return rules_for(player.faction).may_share_planets
    return True


def can_build(
    state: GameState,
    player: Player,
    hex_: GaiaHex,
    building: Building,
    *,
    planet: Planet,
    isolated: bool = True,
    existing_building: Building | None = None,
    added_cost: Iterable[rw.Reward] = (),
    rules: RulesConfig = DEFAULT_RULES,
) -> BuildCheck | None:
    """Check one (hex, building) candidate and price it.

    ``planet`` is the planet type the structure ends up on; upgrades and
    shared planets pass the player's own planet so no terraforming applies.

    Raises:
        CandidateRejected: when the planet cannot be terraformed at all.
    """

    data = player.data
    board = player.board
    limit = data.gaia_formers if building == Building.GAIA_FORMER else board.max_buildings(building)
    if data.building_count(building) >= limit:
        return None

    cost = board.cost(building, isolated=isolated)
    steps = 0
    warnings: list[BuildWarning] = []

    if building == Building.GAIA_FORMER:
        tokens = rules.build.gaia_former_tokens[data.research_level(ResearchField.GAIA_PROJECT)]
        cost = rw.merge(cost, [rw.Reward(tokens, Resource.GAIN_TOKEN_GAIA_AREA)])
    elif building == Building.MINE and existing_building is None:
        if planet == Planet.GAIA:
            cost = rw.merge(cost, [rw.Reward(1, Resource.QIC)])
        else:
            steps = catalog.terraforming_steps(player.planet, planet)
            paid_steps = max(0, steps - data.temporary_step)
            ore_per_step = rules.build.terraform_ore_per_step[
                data.research_level(ResearchField.TERRAFORMING)
            ]
            cost = rw.merge(cost, [rw.Reward(paid_steps * ore_per_step, Resource.ORE)])
            if paid_steps >= rules.build.expensive_terraforming_steps:
                warnings.append(BuildWarning.EXPENSIVE_TERRAFORMING)

    cost = rw.merge(cost, added_cost)

    ctx = BuildContext(state=state, player=player, hex=hex_, building=building, rules=rules)
    capabilities = rules_for(player.faction)
    if capabilities.adjust_cost is not None:
        cost = capabilities.adjust_cost(ctx, cost)
    if capabilities.extra_check is not None and not capabilities.extra_check(ctx):
        return None
    if not data.can_pay(cost):
        return None
    if capabilities.extra_warnings is not None:
        warnings.extend(capabilities.extra_warnings(ctx))
    return BuildCheck(cost=cost, warnings=warnings, steps=steps)


def check_new_structure(
    state: GameState,
    player: Player,
    hex_: GaiaHex,
    building: Building,
    *,
    planet: Planet,
    rules: RulesConfig = DEFAULT_RULES,
) -> BuildCheck | None:
    """Price a new structure including the qics needed to reach it."""

    distance = distance_from_structures(state, player, hex_)
    if distance is None:
        return None
    qics = qic_for_distance(distance, player.data, rules=rules)
    if qics is None:
        return None
    return can_build(
        state,
        player,
        hex_,
        building,
        planet=planet,
        added_cost=[rw.Reward(qics, Resource.QIC)],
        rules=rules,
    )


def upgrade_options(
    state: GameState, player: Player, hex_: GaiaHex, *, rules: RulesConfig = DEFAULT_RULES
) -> list[tuple[Building, BuildCheck]]:
    """Legal upgrades of the player's own structure on ``hex_``."""

    if not hex_.is_main_occupant(player.index) or hex_.building is None:
        return []
    if hex_.planet in NEVER_UPGRADED:
        return []

    current = hex_.building
    isolated = True
    if current == Building.MINE:
        isolated = is_isolated(state, player, hex_, rules=rules)

    options = []
    for upgrade in catalog.upgraded_buildings(current, player.faction):
        check = can_build(
            state,
            player,
            hex_,
            upgrade,
            planet=hex_.planet,
            isolated=isolated,
            existing_building=current,
            rules=rules,
        )
        if check is not None:
            options.append((upgrade, check))
    return options


def new_structure_options(
    state: GameState, player: Player, hex_: GaiaHex, *, rules: RulesConfig = DEFAULT_RULES
) -> list[tuple[Building, BuildCheck]]:
    """Mines (or gaia formers on Transdim planets) that could go on ``hex_``."""

    if not can_occupy(state, player, hex_):
        return []

    if hex_.planet == Planet.TRANSDIM:
        if hex_.occupied() or player.data.available_gaia_formers() <= 0:
            return []
        check = check_new_structure(
            state, player, hex_, Building.GAIA_FORMER, planet=hex_.planet, rules=rules
        )
        return [(Building.GAIA_FORMER, check)] if check is not None else []

    planet = player.planet if hex_.occupied() else hex_.planet
    try:
        check = check_new_structure(state, player, hex_, Building.MINE, planet=planet, rules=rules)
    except CandidateRejected as exc:
        logger.debug("skipping %s for player %s: %s", hex_.to_string(), player.index, exc)
        return []
    return [(Building.MINE, check)] if check is not None else []
