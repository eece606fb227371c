"""Legal move enumeration.

:func:`generate` is the single entry point: given a game snapshot it returns
every command the player to move may issue, each with the structured payload
a client needs to present the choice. The (phase, sub-phase) pair selects one
enumeration routine from a dispatch table; inside the main action step the
routines run in a fixed order (build, federation, research, board action,
special action, free action, booster/pass) so the output is stable.

The enumerator never mutates the snapshot. A candidate that trips a rule
mid-check is skipped and logged, not reported as an error.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from . import catalog
from . import reward as rw
from .eligibility import (
    BuildCheck,
    check_new_structure,
    distance_from_structures,
    new_structure_options,
    qic_for_distance,
    upgrade_options,
)
from .enums import (
    AdvTechTilePos,
    AuctionVariant,
    BoardAction,
    Booster,
    Building,
    BuildWarning,
    Command,
    FederationTile,
    Operator,
    Phase,
    Planet,
    ResearchField,
    Resource,
    SubPhase,
    TechTilePos,
)
from .errors import CandidateRejected, InconsistentState
from .faction_rules import rules_for
from .federation import available_federations
from .models import GameState, Player
from .rules_config import DEFAULT_RULES, RulesConfig
from .setup import possible_bids, remaining_factions
from .space_map import GaiaHex

logger = logging.getLogger(__name__)

_STANDARD_POSITIONS = frozenset(pos.value for pos in TechTilePos)


@dataclass(slots=True)
class AvailableCommand:
    """One command the player may issue, with its choices."""

    name: Command
    player: int | None = None
    data: Any = None


@dataclass(slots=True)
class AvailableBuilding:
    coordinates: str
    building: Building
    cost: str = "~"
    warnings: list[BuildWarning] = field(default_factory=list)
    upgrade: bool = False
    downgrade: bool = False
    steps: int | None = None


@dataclass(slots=True)
class AvailableHex:
    coordinates: str
    cost: str = "~"


@dataclass(slots=True)
class Offer:
    offer: str
    cost: str | None = None


@dataclass(slots=True)
class TrackOffer:
    field: ResearchField
    to: int
    cost: str


@dataclass(slots=True)
class PowerActionOffer:
    name: BoardAction
    cost: str
    income: list[str]


@dataclass(slots=True)
class SpecialActionOffer:
    income: str
    spec: str


@dataclass(slots=True)
class ConversionOffer:
    cost: str
    income: list[str]
    range: list[int] | None = None  # repeat counts, when more than one is affordable


@dataclass(slots=True)
class TechTileOffer:
    tile: str
    pos: str


@dataclass(slots=True)
class FederationOffer:
    hexes: str
    satellites: list[str]
    new_satellites: int


@dataclass(slots=True)
class EnumerationContext:
    """What one enumeration routine is asked about."""

    state: GameState
    player: Player | None
    data: Any
    rules: RulesConfig

    @property
    def index(self) -> int | None:
        return self.player.index if self.player is not None else None

    def require_player(self) -> Player:
        if self.player is None:
            raise InconsistentState(f"no player to move in phase {self.state.phase}")
        return self.player


Routine = Callable[[EnumerationContext], list[AvailableCommand]]


def _building_entry(
    hex_: GaiaHex, building: Building, check: BuildCheck, *, upgrade: bool
) -> AvailableBuilding:
    return AvailableBuilding(
        coordinates=hex_.to_string(),
        building=building,
        cost=rw.to_string(check.cost),
        warnings=list(check.warnings),
        upgrade=upgrade,
        steps=check.steps,
    )


# ---------------------------------------------------------------------------
# Buildings


def possible_buildings(ctx: EnumerationContext) -> list[AvailableCommand]:
    """Upgrades of owned structures plus new mines / gaia formers in range."""

    state = ctx.state
    player = ctx.require_player()
    buildings: list[AvailableBuilding] = []

    for hex_ in state.map:
        try:
            if hex_.building_of(player.index) is not None:
                for building, check in upgrade_options(state, player, hex_, rules=ctx.rules):
                    buildings.append(_building_entry(hex_, building, check, upgrade=True))
            else:
                for building, check in new_structure_options(state, player, hex_, rules=ctx.rules):
                    buildings.append(_building_entry(hex_, building, check, upgrade=False))
        except CandidateRejected as exc:
            logger.debug("player %s: %s rejected: %s", player.index, hex_.to_string(), exc)

    if not buildings:
        return []
    return [AvailableCommand(Command.BUILD, player.index, {"buildings": buildings})]


def possible_space_stations(ctx: EnumerationContext) -> list[AvailableCommand]:
    state = ctx.state
    player = ctx.require_player()
    buildings = []

    for hex_ in state.map:
        if hex_.occupied() or hex_.has_planet() or hex_.belongs_to_federation_of(player.index):
            continue
        check = check_new_structure(
            state, player, hex_, Building.SPACE_STATION, planet=player.planet, rules=ctx.rules
        )
        if check is not None:
            buildings.append(_building_entry(hex_, Building.SPACE_STATION, check, upgrade=False))

    if not buildings:
        return []
    return [AvailableCommand(Command.BUILD, player.index, {"buildings": buildings})]


def possible_mine_buildings(
    ctx: EnumerationContext, *, accept_gaia_former: bool
) -> list[AvailableCommand]:
    """New mines only (and gaia formers when accepted), e.g. after a special action."""

    if isinstance(ctx.data, dict) and ctx.data.get("buildings"):
        return [AvailableCommand(Command.BUILD, ctx.index, ctx.data)]

    commands = possible_buildings(ctx)
    if not commands:
        return []

    def keep(entry: AvailableBuilding) -> bool:
        if entry.upgrade:
            return False
        if entry.building == Building.MINE:
            return True
        return accept_gaia_former and entry.building == Building.GAIA_FORMER

    buildings = [entry for entry in commands[0].data["buildings"] if keep(entry)]
    if not buildings:
        return []
    return [AvailableCommand(Command.BUILD, ctx.index, {"buildings": buildings})]


def possible_setup_buildings(ctx: EnumerationContext) -> list[AvailableCommand]:
    player = ctx.require_player()
    building = rules_for(player.faction).setup_building
    buildings = [
        AvailableBuilding(coordinates=hex_.to_string(), building=building)
        for hex_ in ctx.state.map
        if hex_.planet == player.planet and ctx.state.map.structure_at(hex_.coord) is None
    ]
    return [AvailableCommand(Command.BUILD, player.index, {"buildings": buildings})]


def possible_pi_swaps(ctx: EnumerationContext) -> list[AvailableCommand]:
    player = ctx.require_player()
    buildings = []
    for coord in player.data.occupied:
        hex_ = ctx.state.map.get(coord)
        if hex_ is None or hex_.planet == Planet.LOST:
            continue
        if hex_.building_of(player.index) == Building.MINE:
            buildings.append(AvailableBuilding(coordinates=hex_.to_string(), building=Building.MINE))

    if not buildings:
        return []
    return [AvailableCommand(Command.PI_SWAP, player.index, {"buildings": buildings})]


def possible_lab_downgrades(ctx: EnumerationContext) -> list[AvailableCommand]:
    player = ctx.require_player()
    buildings = []
    for coord in player.data.occupied:
        hex_ = ctx.state.map.get(coord)
        if hex_ is not None and hex_.building_of(player.index) == Building.RESEARCH_LAB:
            buildings.append(
                AvailableBuilding(
                    coordinates=hex_.to_string(),
                    building=Building.TRADING_STATION,
                    downgrade=True,
                )
            )

    if not buildings:
        return []
    return [AvailableCommand(Command.BUILD, player.index, {"buildings": buildings})]


def possible_lost_planet_spaces(ctx: EnumerationContext) -> list[AvailableCommand]:
    state = ctx.state
    player = ctx.require_player()
    spaces = []

    for hex_ in state.map:
        if hex_.has_planet() or hex_.federations or hex_.building is not None:
            continue
        distance = distance_from_structures(state, player, hex_, starting_points_only=False)
        if distance is None:
            continue
        qics = qic_for_distance(distance, player.data, rules=ctx.rules)
        if qics is None:
            continue
        cost = rw.to_string([rw.Reward(qics, Resource.QIC)]) if qics > 0 else "~"
        spaces.append(AvailableHex(coordinates=hex_.to_string(), cost=cost))

    if not spaces:
        return []
    return [AvailableCommand(Command.PLACE_LOST_PLANET, player.index, {"spaces": spaces})]


# ---------------------------------------------------------------------------
# Federations


def possible_federations(ctx: EnumerationContext) -> list[AvailableCommand]:
    state = ctx.state
    player = ctx.require_player()
    tiles = [tile for tile in FederationTile if state.tiles.federations.get(tile, 0) > 0]
    if not tiles:
        return []

    if state.options.no_fed_check:
        return [
            AvailableCommand(
                Command.FORM_FEDERATION, player.index, {"tiles": tiles, "federations": []}
            )
        ]

    candidates = available_federations(
        state, player, flexible=state.options.flexible_federations, rules=ctx.rules
    )
    if not candidates and not player.custom_federation:
        return []

    federations = [
        FederationOffer(
            hexes=candidate.identity,
            satellites=[coord.to_string() for coord in candidate.satellites],
            new_satellites=candidate.new_satellites,
        )
        for candidate in candidates
    ]
    return [
        AvailableCommand(
            Command.FORM_FEDERATION, player.index, {"tiles": tiles, "federations": federations}
        )
    ]


def possible_federation_tiles(ctx: EnumerationContext, *, rescore: bool) -> list[AvailableCommand]:
    player = ctx.require_player()
    if rescore:
        tiles = [owned.tile for owned in player.data.tiles.federations]
    else:
        tiles = [
            tile for tile in FederationTile if ctx.state.tiles.federations.get(tile, 0) > 0
        ]
    return [
        AvailableCommand(
            Command.CHOOSE_FEDERATION_TILE, player.index, {"tiles": tiles, "rescore": rescore}
        )
    ]


# ---------------------------------------------------------------------------
# Research and tech tiles


def can_research_field(
    state: GameState, player: Player, research_field: ResearchField, *, rules: RulesConfig
) -> bool:
    destination = player.data.research_level(research_field) + 1
    if destination == rules.research.max_level and any(
        other.data.research_level(research_field) == destination for other in state.players
    ):
        return False
    return player.data.can_upgrade_research(research_field, rules=rules.research)


def possible_research_areas(ctx: EnumerationContext, cost: str) -> list[AvailableCommand]:
    """Tracks the player may advance on, paying ``cost`` ("" when free).

    Outside the main action a ``decline`` is always offered.
    """

    player = ctx.require_player()
    data = player.data
    tracks = []

    if data.can_pay(rw.parse(cost)):
        fields = list(ResearchField)
        extra = ctx.data if isinstance(ctx.data, dict) else {}
        if extra.get("bescods"):
            lowest = min(data.research_level(track) for track in fields)
            fields = [track for track in fields if data.research_level(track) == lowest]
        elif extra.get("pos"):
            fields = [ResearchField(extra["pos"])]

        for track in fields:
            if can_research_field(ctx.state, player, track, rules=ctx.rules):
                tracks.append(
                    TrackOffer(field=track, to=data.research_level(track) + 1, cost=cost or "~")
                )

    commands = []
    if tracks:
        commands.append(AvailableCommand(Command.UPGRADE_RESEARCH, player.index, {"tracks": tracks}))
    if cost != ctx.rules.research.upgrade_cost:
        commands.append(
            AvailableCommand(
                Command.DECLINE, player.index, {"offers": [Offer(Command.UPGRADE_RESEARCH)]}
            )
        )
    return commands


def can_take_advanced_tech_tile(state: GameState, player: Player, pos: AdvTechTilePos) -> bool:
    slot = state.tiles.techs.get(pos.value)
    data = player.data
    if slot is None or slot.count <= 0:
        return False
    if not data.has_green_federation():
        return False
    if data.research_level(pos.field) < 4:
        return False
    return any(_is_standard(owned.pos) and owned.enabled for owned in data.tiles.techs)


def _is_standard(pos: str) -> bool:
    return pos in _STANDARD_POSITIONS


def possible_tech_tiles(ctx: EnumerationContext) -> list[AvailableCommand]:
    state = ctx.state
    player = ctx.require_player()
    owned = {tech.tile for tech in player.data.tiles.techs}
    tiles = []

    for pos in catalog.STANDARD_TECH_POSITIONS:
        slot = state.tiles.techs.get(pos.value)
        if slot is not None and slot.tile not in owned:
            tiles.append(TechTileOffer(tile=slot.tile, pos=pos.value))

    for pos in catalog.ADVANCED_TECH_POSITIONS:
        if can_take_advanced_tech_tile(state, player, pos):
            tiles.append(TechTileOffer(tile=state.tiles.techs[pos.value].tile, pos=pos.value))

    if not tiles:
        return []
    return [AvailableCommand(Command.CHOOSE_TECH_TILE, player.index, {"tiles": tiles})]


def possible_cover_tech_tiles(ctx: EnumerationContext) -> list[AvailableCommand]:
    player = ctx.require_player()
    tiles = [
        TechTileOffer(tile=owned.tile, pos=owned.pos)
        for owned in player.data.tiles.techs
        if owned.enabled and _is_standard(owned.pos)
    ]
    return [AvailableCommand(Command.CHOOSE_COVER_TECH_TILE, player.index, {"tiles": tiles})]


# ---------------------------------------------------------------------------
# Actions


def _can_gain(player: Player, reward: rw.Reward, limits: dict[Resource, int]) -> bool:
    limit = limits.get(reward.type)
    return limit is None or player.data.get_resources(reward.type) < limit


def possible_board_actions(ctx: EnumerationContext) -> list[AvailableCommand]:
    """Open board actions the player can pay for and still gain something from."""

    player = ctx.require_player()
    limits = ctx.rules.limits.as_table()
    offers = []

    for action, spec in catalog.BOARD_ACTIONS.items():
        if ctx.state.board_actions.get(action) is not None:
            continue
        if not player.data.can_pay(rw.parse(spec.cost)):
            continue
        if not any(
            _can_gain(player, reward, limits) for income in spec.income for reward in rw.parse(income)
        ):
            continue
        if action == BoardAction.QIC2 and not player.data.tiles.federations:
            continue
        offers.append(PowerActionOffer(name=action, cost=spec.cost, income=list(spec.income)))

    if not offers:
        return []
    return [AvailableCommand(Command.ACTION, player.index, {"poweracts": offers})]


def possible_special_actions(ctx: EnumerationContext) -> list[AvailableCommand]:
    player = ctx.require_player()
    data = player.data
    offers = []

    for event in player.events_with(Operator.ACTIVATE):
        if event.activated:
            continue
        first = event.rewards[0].type if event.rewards else None
        if first == Resource.DOWNGRADE_LAB and (
            data.building_count(Building.RESEARCH_LAB) == 0
            or data.building_count(Building.TRADING_STATION)
            >= player.board.max_buildings(Building.TRADING_STATION)
        ):
            continue
        if first == Resource.PI_SWAP and data.building_count(Building.MINE) == 0:
            continue
        # actions that take something away need it to be there
        if not data.can_pay(rw.negate(r for r in event.rewards if r.count < 0)):
            continue
        offers.append(SpecialActionOffer(income=event.income, spec=event.spec))

    if not offers:
        return []
    return [AvailableCommand(Command.SPECIAL, player.index, {"specialacts": offers})]


def _spend_command(
    player: Player, actions: Iterable[catalog.ActionSpec]
) -> AvailableCommand | None:
    acts = []
    for action in actions:
        times = player.data.max_pay_range(rw.parse(action.cost))
        if times > 0:
            acts.append(
                ConversionOffer(
                    cost=action.cost,
                    income=list(action.income),
                    range=list(range(1, times + 1)) if times > 1 else None,
                )
            )
    if not acts:
        return None
    return AvailableCommand(Command.SPEND, player.index, {"acts": acts})


def possible_free_actions(ctx: EnumerationContext) -> list[AvailableCommand]:
    player = ctx.require_player()
    pool = list(catalog.FREE_ACTIONS)
    extra = rules_for(player.faction).extra_free_actions
    if extra is not None:
        pool.extend(extra(player))

    commands = []
    spend = _spend_command(player, pool)
    if spend is not None:
        commands.append(spend)

    burnable = player.data.burnable_power()
    if burnable > 0:
        commands.append(
            AvailableCommand(Command.BURN_POWER, player.index, list(range(1, burnable + 1)))
        )
    return commands


def possible_round_boosters(ctx: EnumerationContext) -> list[AvailableCommand]:
    state = ctx.state
    if state.is_last_round(rules=ctx.rules):
        boosters: list[Booster] = []
    else:
        boosters = [booster for booster in Booster if state.tiles.boosters.get(booster)]
    name = Command.CHOOSE_ROUND_BOOSTER if state.phase == Phase.SETUP_BOOSTER else Command.PASS
    return [AvailableCommand(name, ctx.index, {"boosters": boosters})]


# ---------------------------------------------------------------------------
# Round phases


def possible_incomes(ctx: EnumerationContext) -> list[AvailableCommand]:
    """Ask for the income order when charging and token gains interact."""

    player = ctx.require_player()
    incomes = player.events_with(Operator.INCOME)
    charge = sum(r.count for e in incomes for r in e.rewards if r.type == Resource.CHARGE_POWER)
    tokens = sum(r.count for e in incomes for r in e.rewards if r.type == Resource.GAIN_TOKEN)

    if charge > 0 and tokens > 0 and player.data.charge_capacity() < charge:
        descriptions = [
            event.income
            for event in incomes
            if any(r.type in (Resource.CHARGE_POWER, Resource.GAIN_TOKEN) for r in event.rewards)
        ]
        return [AvailableCommand(Command.CHOOSE_INCOME, player.index, descriptions)]
    return []


def possible_gaia_free_actions(ctx: EnumerationContext) -> list[AvailableCommand]:
    player = ctx.require_player()
    capabilities = rules_for(player.faction)
    data = player.data

    if capabilities.gaia_conversions and data.has_planetary_institute() and data.power.gaia > 0:
        spend = _spend_command(player, catalog.FREE_ACTIONS_TERRANS)
        return [spend] if spend is not None else []

    if capabilities.gaia_tech_trade and data.has_planetary_institute() and data.power.gaia >= 4:
        commands = []
        if possible_tech_tiles(ctx):
            acts = [
                ConversionOffer(cost=action.cost, income=list(action.income))
                for action in catalog.FREE_ACTIONS_ITARS
            ]
            commands.append(AvailableCommand(Command.SPEND, player.index, {"acts": acts}))
        decline_cost = rw.to_string([rw.Reward(4, Resource.GAIN_TOKEN_GAIA_AREA)])
        commands.append(
            AvailableCommand(
                Command.DECLINE,
                player.index,
                {"offers": [Offer(Resource.TECH_TILE.value, decline_cost)]},
            )
        )
        return commands
    return []


def max_leech(player: Player, *, with_extra_token: bool = False) -> int:
    data = player.data
    capacity = data.charge_capacity() + (2 if with_extra_token else 0)
    return min(data.leech_possible, capacity, data.victory_points + 1)


def _leech_offer(amount: int, template: str) -> Offer:
    return Offer(
        offer=template.format(amount=amount),
        cost=str(rw.Reward(max(amount - 1, 0), Resource.VICTORY_POINT)),
    )


def possible_leech(ctx: EnumerationContext) -> list[AvailableCommand]:
    """Charge or decline after a neighbour builds; accepting costs vp."""

    player = ctx.require_player()
    if player.data.leech_possible <= 0:
        return []

    amount = max_leech(player)
    if rules_for(player.faction).brain_stone and player.data.has_planetary_institute():
        offers = [
            _leech_offer(amount, "{amount}pw,1t"),
            _leech_offer(max_leech(player, with_extra_token=True), "1t,{amount}pw"),
        ]
    else:
        offers = [_leech_offer(amount, "{amount}pw")]

    payload = {"offer": offers[0].offer, "cost": offers[0].cost, "offers": offers}
    return [
        AvailableCommand(Command.CHARGE_POWER, player.index, dict(payload)),
        AvailableCommand(Command.DECLINE, player.index, dict(payload)),
    ]


# ---------------------------------------------------------------------------
# Setup phases


def choose_faction_or_bid(ctx: EnumerationContext) -> list[AvailableCommand]:
    choose = AvailableCommand(Command.CHOOSE_FACTION, ctx.index, remaining_factions(ctx.state))
    if ctx.state.options.auction == AuctionVariant.BID_WHILE_CHOOSING:
        return [*possible_bid_commands(ctx), choose]
    return [choose]


def possible_bid_commands(ctx: EnumerationContext) -> list[AvailableCommand]:
    bids = possible_bids(ctx.state, rules=ctx.rules)
    if not bids:
        return []
    return [AvailableCommand(Command.BID, ctx.index, {"bids": bids})]


# ---------------------------------------------------------------------------
# Dispatch


def before_move(ctx: EnumerationContext) -> list[AvailableCommand]:
    return [
        *possible_buildings(ctx),
        *possible_federations(ctx),
        *possible_research_areas(ctx, ctx.rules.research.upgrade_cost),
        *possible_board_actions(ctx),
        *possible_special_actions(ctx),
        *possible_free_actions(ctx),
        *possible_round_boosters(ctx),
    ]


def after_move(ctx: EnumerationContext) -> list[AvailableCommand]:
    return [*possible_free_actions(ctx), AvailableCommand(Command.END_TURN, ctx.index)]


SUB_PHASE_ROUTINES: dict[SubPhase, Routine] = {
    SubPhase.CHOOSE_TECH_TILE: possible_tech_tiles,
    SubPhase.COVER_TECH_TILE: possible_cover_tech_tiles,
    SubPhase.UPGRADE_RESEARCH: lambda ctx: possible_research_areas(ctx, ""),
    SubPhase.PLACE_LOST_PLANET: possible_lost_planet_spaces,
    SubPhase.CHOOSE_FEDERATION_TILE: lambda ctx: possible_federation_tiles(ctx, rescore=False),
    SubPhase.RESCORE_FEDERATION_TILE: lambda ctx: possible_federation_tiles(ctx, rescore=True),
    SubPhase.BUILD_MINE: lambda ctx: possible_mine_buildings(ctx, accept_gaia_former=False),
    SubPhase.BUILD_MINE_OR_GAIA_FORMER: lambda ctx: possible_mine_buildings(
        ctx, accept_gaia_former=True
    ),
    SubPhase.SPACE_STATION: possible_space_stations,
    SubPhase.PI_SWAP: possible_pi_swaps,
    SubPhase.DOWNGRADE_LAB: possible_lab_downgrades,
    SubPhase.BRAIN_STONE: lambda ctx: [AvailableCommand(Command.BRAIN_STONE, ctx.index, ctx.data)],
    SubPhase.BEFORE_MOVE: before_move,
    SubPhase.AFTER_MOVE: after_move,
}

PHASE_ROUTINES: dict[Phase, Routine] = {
    Phase.INIT: lambda ctx: [AvailableCommand(Command.INIT)],
    Phase.SETUP_FACTION: choose_faction_or_bid,
    Phase.SETUP_AUCTION: possible_bid_commands,
    Phase.SETUP_BUILDING: possible_setup_buildings,
    Phase.SETUP_BOOSTER: possible_round_boosters,
    Phase.ROUND_INCOME: possible_incomes,
    Phase.ROUND_GAIA: possible_gaia_free_actions,
    Phase.ROUND_LEECH: possible_leech,
}

# phases whose routines do not need a player to move
_PLAYERLESS_PHASES = frozenset({Phase.INIT, Phase.END})


def generate(
    state: GameState,
    sub_phase: SubPhase | None = None,
    data: Any = None,
    *,
    player: int | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> list[AvailableCommand]:
    """Enumerate the commands available to the player to move.

    Args:
        state: snapshot to read; not modified.
        sub_phase: pending decision, defaults to ``state.sub_phase``. In the
            move phase a missing sub-phase means the main action step.
        data: routine-specific hints (research restrictions, pre-computed
            buildings, brain stone choices).
        player: enumerate for this seat instead of ``state.current_player``.

    Raises:
        InconsistentState: when a player is needed but none can be resolved.
    """

    index = player if player is not None else state.current_player
    if index is None and state.phase not in _PLAYERLESS_PHASES:
        raise InconsistentState(f"no player to move in phase {state.phase}")
    seat = state.player(index) if index is not None else None
    if seat is not None and seat.faction is None and state.phase not in (
        Phase.INIT,
        Phase.SETUP_FACTION,
        Phase.SETUP_AUCTION,
    ):
        raise InconsistentState(f"player {index} has no faction in phase {state.phase}")

    sub_phase = sub_phase if sub_phase is not None else state.sub_phase
    if state.phase == Phase.ROUND_MOVE and sub_phase is None:
        sub_phase = SubPhase.BEFORE_MOVE

    ctx = EnumerationContext(state=state, player=seat, data=data, rules=rules)
    routine = SUB_PHASE_ROUTINES.get(sub_phase) if sub_phase is not None else None
    if routine is None:
        routine = PHASE_ROUTINES.get(state.phase)
    if routine is None:
        logger.debug("nothing to enumerate in phase %s", state.phase)
        return []

    commands = routine(ctx)
    logger.debug(
        "phase %s/%s player %s: %d commands",
        state.phase,
        sub_phase,
        index,
        len(commands),
    )
    return commands
