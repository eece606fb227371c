"""Per-player resource ledger.

The ledger holds every countable thing a player owns: raw resources, the
four power areas, building counts, research levels and owned tiles. It can
answer "can this cost be paid" and apply costs and incomes, including the
power cycle rules:

* charging power moves tokens area 1 -> area 2 first, then area 2 -> area 3;
* spending power moves tokens from area 3 back to area 1;
* discarding tokens (to the gaia area or out of the game) drains the lowest
  area first;
* burning removes one token from area 2 and moves another to area 3.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from gaia_rules.utils.hex_math import HexCoord

from . import reward as rw
from .enums import Booster, Building, FederationTile, PowerArea, ResearchField, Resource
from .rules_config import DEFAULT_RULES, ResearchRules, ResourceLimits

# Cost kinds that draw on the same stock; they are summed before comparing
# against what the player holds.
COST_POOLS: dict[Resource, Resource] = {
    Resource.GAIN_TOKEN: Resource.GAIN_TOKEN,
    Resource.GAIN_TOKEN_GAIA_AREA: Resource.GAIN_TOKEN,
}

BRAIN_STONE_POWER = 3


@dataclass(slots=True)
class PowerAreas:
    """Token counts in each power area."""

    area1: int = 0
    area2: int = 0
    area3: int = 0
    gaia: int = 0

    def total(self) -> int:
        return self.area1 + self.area2 + self.area3 + self.gaia


@dataclass(slots=True)
class OwnedTechTile:
    """A tech tile in front of a player; covered tiles are disabled."""

    tile: str
    pos: str
    enabled: bool = True
    first_round: int = 0


@dataclass(slots=True)
class OwnedFederationTile:
    """A federation token; ``green`` until spent on research or an advanced tile."""

    tile: FederationTile
    green: bool = True


@dataclass(slots=True)
class PlayerTiles:
    """Tiles held by a player."""

    booster: Booster | None = None
    techs: list[OwnedTechTile] = field(default_factory=list)
    federations: list[OwnedFederationTile] = field(default_factory=list)


def _zero_research() -> dict[ResearchField, int]:
    return {research_field: 0 for research_field in ResearchField}


def _zero_buildings() -> dict[Building, int]:
    return {building: 0 for building in Building}


@dataclass(slots=True)
class PlayerData:
    """Everything a player owns that can be counted."""

    victory_points: int = 10
    credits: int = 0
    ores: int = 0
    qics: int = 0
    knowledge: int = 0
    power: PowerAreas = field(default_factory=PowerAreas)
    brain_stone: PowerArea | None = None
    area3_power_value: int = 1
    gaia_formers: int = 0
    temporary_range: int = 0
    temporary_step: int = 0
    research: dict[ResearchField, int] = field(default_factory=_zero_research)
    buildings: dict[Building, int] = field(default_factory=_zero_buildings)
    occupied: list[HexCoord] = field(default_factory=list)
    tiles: PlayerTiles = field(default_factory=PlayerTiles)
    leech_possible: int = 0
    bid: int | None = None

    # -- queries -----------------------------------------------------------

    def building_count(self, building: Building) -> int:
        return self.buildings.get(building, 0)

    def research_level(self, research_field: ResearchField) -> int:
        return self.research.get(research_field, 0)

    def has_planetary_institute(self) -> bool:
        return self.building_count(Building.PLANETARY_INSTITUTE) > 0

    def has_green_federation(self) -> bool:
        return any(fed.green for fed in self.tiles.federations)

    def available_gaia_formers(self) -> int:
        return self.gaia_formers - self.building_count(Building.GAIA_FORMER)

    def spendable_power(self) -> int:
        stone = BRAIN_STONE_POWER if self.brain_stone == PowerArea.AREA3 else 0
        return self.power.area3 * self.area3_power_value + stone

    def discardable_tokens(self) -> int:
        return self.power.area1 + self.power.area2 + self.power.area3

    def burnable_power(self) -> int:
        stone = 1 if self.brain_stone == PowerArea.AREA2 else 0
        return (self.power.area2 + stone) // 2

    def charge_capacity(self) -> int:
        """Maximum power that could be charged right now."""

        stone = {PowerArea.AREA1: 2, PowerArea.AREA2: 1}.get(self.brain_stone, 0)
        return 2 * self.power.area1 + self.power.area2 + stone

    def get_resources(self, kind: Resource) -> int:
        """Amount of ``kind`` the player could spend right now."""

        match kind:
            case Resource.ORE:
                return self.ores
            case Resource.CREDIT:
                return self.credits
            case Resource.KNOWLEDGE:
                return self.knowledge
            case Resource.QIC:
                return self.qics
            case Resource.VICTORY_POINT:
                return self.victory_points
            case Resource.CHARGE_POWER:
                return self.spendable_power()
            case Resource.GAIN_TOKEN | Resource.GAIN_TOKEN_GAIA_AREA:
                return self.discardable_tokens()
            case Resource.BURN_TOKEN:
                return self.burnable_power()
            case Resource.GAIA_POWER:
                return self.power.gaia
            case Resource.GAIA_FORMER:
                return self.available_gaia_formers()
        return 0

    def can_pay(self, cost: Iterable[rw.Reward]) -> bool:
        """True iff every positive entry of ``cost`` is covered by the ledger."""

        required: dict[Resource, int] = {}
        for reward in rw.merge(cost):
            if reward.count <= 0:
                continue
            pool = COST_POOLS.get(reward.type, reward.type)
            required[pool] = required.get(pool, 0) + reward.count
        return all(self.get_resources(pool) >= amount for pool, amount in required.items())

    def max_pay_range(self, cost: Iterable[rw.Reward]) -> int:
        """How many times in a row ``cost`` could be paid."""

        unit = rw.merge(cost)
        if not any(reward.count > 0 for reward in unit):
            return 0
        times = 0
        while self.can_pay(rw.scale(unit, times + 1)):
            times += 1
        return times

    def can_upgrade_research(
        self, research_field: ResearchField, *, rules: ResearchRules = DEFAULT_RULES.research
    ) -> bool:
        level = self.research_level(research_field)
        if level >= rules.max_level:
            return False
        if level + 1 >= rules.green_federation_level:
            return self.has_green_federation()
        return True

    # -- mutations ---------------------------------------------------------

    def pay_costs(self, cost: Iterable[rw.Reward]) -> None:
        for reward in cost:
            if reward.count > 0:
                self._pay(reward.type, reward.count)
            elif reward.count < 0:
                self._gain(reward.type, -reward.count, DEFAULT_RULES.limits)

    def gain_rewards(
        self, rewards: Iterable[rw.Reward], *, limits: ResourceLimits = DEFAULT_RULES.limits
    ) -> None:
        for reward in rewards:
            if reward.count > 0:
                self._gain(reward.type, reward.count, limits)
            elif reward.count < 0:
                self._pay(reward.type, -reward.count)

    def charge_power(self, amount: int) -> int:
        """Charge up to ``amount`` power; returns how much was actually charged."""

        remaining = amount
        charged = 0

        if remaining > 0 and self.brain_stone == PowerArea.AREA1:
            self.brain_stone = PowerArea.AREA2
            remaining -= 1
            charged += 1
        to_area2 = min(remaining, self.power.area1)
        self.power.area1 -= to_area2
        self.power.area2 += to_area2
        remaining -= to_area2
        charged += to_area2

        if remaining > 0 and self.brain_stone == PowerArea.AREA2:
            self.brain_stone = PowerArea.AREA3
            remaining -= 1
            charged += 1
        to_area3 = min(remaining, self.power.area2)
        self.power.area2 -= to_area3
        self.power.area3 += to_area3
        charged += to_area3

        return charged

    def spend_power(self, amount: int) -> None:
        """Spend ``amount`` power from area 3.

        The brain stone goes first when it is fully used or when the tokens
        alone cannot cover the amount; any power it gives beyond the amount
        is lost.
        """

        remaining = amount
        token_power = self.power.area3 * self.area3_power_value
        if self.brain_stone == PowerArea.AREA3 and (
            remaining >= BRAIN_STONE_POWER or token_power < remaining
        ):
            self.brain_stone = PowerArea.AREA1
            remaining = max(0, remaining - BRAIN_STONE_POWER)
        tokens = math.ceil(remaining / self.area3_power_value)
        self.power.area3 -= tokens
        self.power.area1 += tokens

    def discard_power(self, amount: int, *, to_gaia: bool = False) -> None:
        """Remove ``amount`` tokens, lowest area first."""

        remaining = amount
        for area in ("area1", "area2", "area3"):
            taken = min(remaining, getattr(self.power, area))
            setattr(self.power, area, getattr(self.power, area) - taken)
            remaining -= taken
        moved = amount - remaining
        if to_gaia:
            self.power.gaia += moved

    def burn_power(self, amount: int) -> None:
        remaining = amount
        if remaining > 0 and self.brain_stone == PowerArea.AREA2:
            self.brain_stone = PowerArea.AREA3
            self.power.area2 -= 1
            remaining -= 1
        self.power.area2 -= 2 * remaining
        self.power.area3 += remaining

    def _pay(self, kind: Resource, count: int) -> None:
        match kind:
            case Resource.ORE:
                self.ores -= count
            case Resource.CREDIT:
                self.credits -= count
            case Resource.KNOWLEDGE:
                self.knowledge -= count
            case Resource.QIC:
                self.qics -= count
            case Resource.VICTORY_POINT:
                self.victory_points -= count
            case Resource.CHARGE_POWER:
                self.spend_power(count)
            case Resource.GAIN_TOKEN:
                self.discard_power(count)
            case Resource.GAIN_TOKEN_GAIA_AREA:
                self.discard_power(count, to_gaia=True)
            case Resource.BURN_TOKEN:
                self.burn_power(count)
            case Resource.GAIA_POWER:
                self.power.gaia -= count
                self.power.area1 += count
            case Resource.GAIA_FORMER:
                self.gaia_formers -= count

    def _gain(self, kind: Resource, count: int, limits: ResourceLimits) -> None:
        caps = limits.as_table()
        match kind:
            case Resource.ORE:
                self.ores = _clamp(self.ores, count, caps[Resource.ORE])
            case Resource.CREDIT:
                self.credits = _clamp(self.credits, count, caps[Resource.CREDIT])
            case Resource.KNOWLEDGE:
                self.knowledge = _clamp(self.knowledge, count, caps[Resource.KNOWLEDGE])
            case Resource.QIC:
                self.qics += count
            case Resource.VICTORY_POINT:
                self.victory_points += count
            case Resource.CHARGE_POWER:
                self.charge_power(count)
            case Resource.GAIN_TOKEN:
                self.power.area1 += count
            case Resource.GAIN_TOKEN_GAIA_AREA:
                self.power.gaia += count
            case Resource.GAIA_FORMER:
                self.gaia_formers += count
            case Resource.RANGE_EXTENSION:
                self.temporary_range += count
            case Resource.TERRAFORM_STEP:
                self.temporary_step += count


def _clamp(current: int, gain: int, cap: int) -> int:
    if current >= cap:
        return current
    return min(cap, current + gain)
