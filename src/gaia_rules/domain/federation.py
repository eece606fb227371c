"""Search for federations a player could form.

A federation is a connected set of the player's structures worth at least
the federation threshold, joined by satellites placed on empty space hexes.
The search works on *groups* (structures already touching each other) rather
than on single hexes:

1. structures outside existing federations are merged into groups;
2. shortest satellite bridges between pairs of groups are measured once;
3. connected subsets of groups are enumerated, each visited once;
4. every subset reaching the threshold is joined greedily and priced in
   satellites.

By default only minimal subsets are returned: no smaller connected subset of
the same groups can form a federation on its own. A low-value group that is
the only bridge between two others therefore stays in. With flexible
federations every subset that reaches the threshold is a candidate.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field

from gaia_rules.utils.hex_math import HexCoord, hex_neighbors

from . import catalog
from .enums import Building, Operator
from .faction_rules import rules_for
from .models import GameState, Player
from .rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FederationCandidate:
    """One way to form a federation."""

    hexes: list[HexCoord]
    satellites: list[HexCoord] = field(default_factory=list)
    value: int = 0

    @property
    def identity(self) -> str:
        """Sorted comma-joined coordinates; two candidates with the same identity are the same."""

        return ",".join(sorted(coord.to_string() for coord in self.hexes))

    @property
    def new_satellites(self) -> int:
        return len(self.satellites)


@dataclass(frozen=True, slots=True)
class _Group:
    index: int
    hexes: frozenset[HexCoord]
    value: int


def building_value(player: Player, building: Building) -> int:
    """Federation value of one structure."""

    if building in catalog.BIG_BUILDINGS and player.events_with(Operator.SPECIAL):
        return catalog.BIG_BUILDING_BOOSTED_VALUE
    return catalog.BUILDING_VALUES.get(building, 0)


def federation_threshold(player: Player, *, rules: RulesConfig = DEFAULT_RULES) -> int:
    reduced = rules_for(player.faction).threshold_with_pi
    if reduced is not None and player.data.has_planetary_institute():
        return reduced
    return rules.federation.threshold


def satellite_budget(player: Player, *, rules: RulesConfig = DEFAULT_RULES) -> int:
    resource = rules_for(player.faction).satellite_resource
    return min(player.data.get_resources(resource), rules.federation.max_satellites)


class _Search:
    """State of one federation search; discarded afterwards."""

    def __init__(self, state: GameState, player: Player, rules: RulesConfig) -> None:
        self.state = state
        self.player = player
        self.rules = rules
        self.budget = satellite_budget(player, rules=rules)

        federated = {
            hex_.coord for hex_ in state.map if hex_.belongs_to_federation_of(player.index)
        }
        near_federation = set(federated)
        for coord in federated:
            near_federation.update(hex_neighbors(coord))
        self.blocked = near_federation

        self.values: dict[HexCoord, int] = {}
        for coord in sorted(player.data.occupied):
            hex_ = state.map.get(coord)
            if hex_ is None or coord in self.blocked:
                continue
            building = hex_.building_of(player.index)
            if building is None or building == Building.GAIA_FORMER:
                continue
            self.values[coord] = building_value(player, building)

        self.groups = self._build_groups()
        self.group_of = {coord: group.index for group in self.groups for coord in group.hexes}

    def passable(self, coord: HexCoord) -> bool:
        hex_ = self.state.map.get(coord)
        if hex_ is None or coord in self.blocked or coord in self.group_of:
            return False
        if self.state.map.is_occupied(coord):
            return False
        if hex_.has_planet():
            return self.rules.federation.bridge_through_planets
        return True

    def _build_groups(self) -> list[_Group]:
        groups: list[_Group] = []
        seen: set[HexCoord] = set()
        for start in self.values:
            if start in seen:
                continue
            members = {start}
            queue = deque([start])
            seen.add(start)
            while queue:
                current = queue.popleft()
                for neighbor in hex_neighbors(current):
                    if neighbor in self.values and neighbor not in seen:
                        seen.add(neighbor)
                        members.add(neighbor)
                        queue.append(neighbor)
            value = sum(self.values[coord] for coord in members)
            groups.append(_Group(index=len(groups), hexes=frozenset(members), value=value))
        return groups

    def bridge_costs(self) -> dict[int, dict[int, int]]:
        """Fewest satellites linking each pair of groups, within budget."""

        costs: dict[int, dict[int, int]] = {group.index: {} for group in self.groups}
        for group in self.groups:
            distances = self._bfs(group.hexes)
            for coord, distance in distances.items():
                for neighbor in hex_neighbors(coord):
                    other = self.group_of.get(neighbor)
                    if other is None or other == group.index:
                        continue
                    best = costs[group.index].get(other)
                    if best is None or distance < best:
                        costs[group.index][other] = distance
        return costs

    def _bfs(self, sources: Iterable[HexCoord]) -> dict[HexCoord, int]:
        distances: dict[HexCoord, int] = {}
        queue = deque()
        for source in sorted(sources):
            for neighbor in hex_neighbors(source):
                if neighbor not in distances and self.passable(neighbor):
                    distances[neighbor] = 1
                    queue.append(neighbor)
        while queue:
            current = queue.popleft()
            if distances[current] >= self.budget:
                continue
            for neighbor in hex_neighbors(current):
                if neighbor not in distances and self.passable(neighbor):
                    distances[neighbor] = distances[current] + 1
                    queue.append(neighbor)
        return distances

    def connect(self, members: frozenset[int]) -> list[HexCoord] | None:
        """Greedy join of ``members``; returns the satellites or ``None``."""

        ordered = sorted(members)
        connected: set[HexCoord] = set(self.groups[ordered[0]].hexes)
        remaining = set(ordered[1:])
        satellites: list[HexCoord] = []

        while remaining:
            parents: dict[HexCoord, HexCoord | None] = {}
            queue = deque()
            for source in sorted(connected):
                for neighbor in hex_neighbors(source):
                    if neighbor in connected or neighbor in parents:
                        continue
                    if self.passable(neighbor):
                        parents[neighbor] = None
                        queue.append(neighbor)
            reached = self._touching(connected, remaining)
            path: list[HexCoord] = []
            while reached is None and queue:
                current = queue.popleft()
                targets = self._touching([current], remaining)
                if targets is not None:
                    reached = targets
                    step: HexCoord | None = current
                    while step is not None:
                        path.append(step)
                        step = parents[step]
                    break
                for neighbor in hex_neighbors(current):
                    if neighbor in connected or neighbor in parents:
                        continue
                    if self.passable(neighbor):
                        parents[neighbor] = current
                        queue.append(neighbor)
            if reached is None:
                return None
            satellites.extend(sorted(path))
            connected.update(path)
            connected.update(self.groups[reached].hexes)
            remaining.discard(reached)
            if len(satellites) > self.budget:
                return None

        # a satellite touching an outside group would pull it into the federation
        for satellite in satellites:
            for neighbor in hex_neighbors(satellite):
                other = self.group_of.get(neighbor)
                if other is not None and other not in members:
                    return None
        return satellites

    def _touching(self, coords: Iterable[HexCoord], targets: set[int]) -> int | None:
        found = set()
        for coord in coords:
            for neighbor in hex_neighbors(coord):
                group = self.group_of.get(neighbor)
                if group is not None and group in targets:
                    found.add(group)
        return min(found) if found else None


def available_federations(
    state: GameState,
    player: Player,
    *,
    flexible: bool = False,
    rules: RulesConfig = DEFAULT_RULES,
) -> list[FederationCandidate]:
    """All federations ``player`` could form, deduplicated and sorted.

    The order is by satellites needed, then identity, so identical states
    always produce identical lists.
    """

    search = _Search(state, player, rules)
    threshold = federation_threshold(player, rules=rules)
    if not search.groups:
        return []

    costs = search.bridge_costs()
    values = {group.index: group.value for group in search.groups}

    # subsets come off the queue smallest first, so every smaller federation
    # is already in ``formed`` when a larger subset is checked
    formed: dict[frozenset[int], list[HexCoord]] = {}
    visited: set[frozenset[int]] = set()
    queue: deque[frozenset[int]] = deque()
    for group in search.groups:
        start = frozenset({group.index})
        visited.add(start)
        queue.append(start)

    while queue:
        subset = queue.popleft()
        value = sum(values[index] for index in subset)
        if value >= threshold:
            if not flexible and any(smaller < subset for smaller in formed):
                continue
            satellites = search.connect(subset)
            if satellites is not None:
                formed[subset] = satellites
                if not flexible:
                    continue
        for index in sorted(subset):
            for neighbor in sorted(costs[index]):
                if neighbor in subset:
                    continue
                grown = subset | {neighbor}
                if grown in visited:
                    continue
                visited.add(grown)
                queue.append(grown)

    logger.debug(
        "player %s: %d groups, %d formable subsets",
        player.index,
        len(search.groups),
        len(formed),
    )

    candidates: dict[str, FederationCandidate] = {}
    for subset, satellites in formed.items():
        structures = [coord for index in subset for coord in search.groups[index].hexes]
        candidate = FederationCandidate(
            hexes=sorted(structures + satellites),
            satellites=sorted(satellites),
            value=sum(values[index] for index in subset),
        )
        known = candidates.get(candidate.identity)
        if known is None or candidate.new_satellites < known.new_satellites:
            candidates[candidate.identity] = candidate

    return sorted(candidates.values(), key=lambda c: (c.new_satellites, c.identity))
