"""Faction capabilities layered on top of the generic rules.

Each faction maps to a :class:`FactionRules` record of optional hooks. The
eligibility and enumeration code runs the generic check first and then asks
the record for anything extra: a looser occupancy rule, a blocking check,
advisory warnings or a cost adjustment. Factions without special rules get
the empty record.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from . import catalog
from . import reward as rw
from .enums import Building, BuildWarning, Faction, Planet, Resource

if TYPE_CHECKING:
    from .models import GameState, Player
    from .rules_config import RulesConfig
    from .space_map import GaiaHex


@dataclass(frozen=True, slots=True)
class BuildContext:
    """The candidate a hook is asked about."""

    state: GameState
    player: Player
    hex: GaiaHex
    building: Building
    rules: RulesConfig

    @property
    def shares_planet(self) -> bool:
        return self.hex.occupied() and self.hex.player != self.player.index


BuildCheckHook = Callable[[BuildContext], bool]
WarningHook = Callable[[BuildContext], list[BuildWarning]]
CostHook = Callable[[BuildContext, list[rw.Reward]], list[rw.Reward]]
PlayerActionsHook = Callable[["Player"], tuple[catalog.ActionSpec, ...]]


@dataclass(frozen=True, slots=True)
class FactionRules:
    """Optional hooks; ``None`` means "no special rule"."""

    may_share_planets: bool = False
    extra_check: BuildCheckHook | None = None
    extra_warnings: WarningHook | None = None
    adjust_cost: CostHook | None = None
    setup_building: Building = Building.MINE
    satellite_resource: Resource = Resource.GAIN_TOKEN
    threshold_with_pi: int | None = None
    extra_free_actions: PlayerActionsHook | None = None
    gaia_conversions: bool = False
    gaia_tech_trade: bool = False
    brain_stone: bool = False


NO_SPECIAL_RULES = FactionRules()


def _geodens_warnings(ctx: BuildContext) -> list[BuildWarning]:
    if ctx.building != Building.MINE or ctx.player.data.has_planetary_institute():
        return []
    if not ctx.player.is_new_planet_type(ctx.state.map, ctx.hex.planet):
        return []
    return [BuildWarning.GEODENS_BUILD_WITHOUT_PI]


def _lantids_check(ctx: BuildContext) -> bool:
    if not ctx.shares_planet:
        return True
    return (
        ctx.building == Building.MINE
        and ctx.hex.additional_mine is None
        and ctx.hex.building != Building.GAIA_FORMER
    )


def _lantids_warnings(ctx: BuildContext) -> list[BuildWarning]:
    if not ctx.shares_planet or ctx.building != Building.MINE:
        return []
    warnings = []
    data = ctx.player.data
    shared = 0
    for coord in data.occupied:
        hex_ = ctx.state.map.get(coord)
        if hex_ is not None and hex_.additional_mine == ctx.player.index:
            shared += 1
    if shared == ctx.player.board.max_buildings(Building.MINE) - 1:
        warnings.append(BuildWarning.LANTIDS_DEADLOCK)
    if not data.has_planetary_institute():
        warnings.append(BuildWarning.LANTIDS_BUILD_WITHOUT_PI)
    return warnings


def _gleens_cost(ctx: BuildContext, cost: list[rw.Reward]) -> list[rw.Reward]:
    if ctx.building != Building.MINE or ctx.hex.planet != Planet.GAIA or ctx.hex.occupied():
        return cost
    adjusted = []
    for reward in cost:
        if reward.type == Resource.QIC and reward.count > 0:
            adjusted.append(rw.Reward(reward.count - 1, Resource.QIC))
            adjusted.append(rw.Reward(1, Resource.ORE))
        else:
            adjusted.append(reward)
    return rw.merge(adjusted)


def _hadsch_hallas_actions(player: Player) -> tuple[catalog.ActionSpec, ...]:
    if player.data.has_planetary_institute():
        return catalog.FREE_ACTIONS_HADSCH_HALLAS
    return ()


def _baltaks_actions(player: Player) -> tuple[catalog.ActionSpec, ...]:
    return catalog.FREE_ACTIONS_BALTAKS


FACTION_RULES: MappingProxyType[Faction, FactionRules] = MappingProxyType(
    {
        Faction.GEODENS: FactionRules(extra_warnings=_geodens_warnings),
        Faction.LANTIDS: FactionRules(
            may_share_planets=True,
            extra_check=_lantids_check,
            extra_warnings=_lantids_warnings,
        ),
        Faction.GLEENS: FactionRules(adjust_cost=_gleens_cost),
        Faction.IVITS: FactionRules(
            setup_building=Building.PLANETARY_INSTITUTE,
            satellite_resource=Resource.QIC,
        ),
        Faction.XENOS: FactionRules(threshold_with_pi=6),
        Faction.HADSCH_HALLAS: FactionRules(extra_free_actions=_hadsch_hallas_actions),
        Faction.BALTAKS: FactionRules(extra_free_actions=_baltaks_actions),
        Faction.TERRANS: FactionRules(gaia_conversions=True),
        Faction.ITARS: FactionRules(gaia_tech_trade=True),
        Faction.TAKLONS: FactionRules(brain_stone=True),
    }
)


def rules_for(faction: Faction | None) -> FactionRules:
    if faction is None:
        return NO_SPECIAL_RULES
    return FACTION_RULES.get(faction, NO_SPECIAL_RULES)
