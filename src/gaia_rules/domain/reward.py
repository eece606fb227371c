"""Resource notation: parsing, arithmetic and formatting of reward lists.

Costs and incomes are written in a compact comma-separated notation where
each token is an optional signed count followed by a resource code, e.g.
``"2o,6c"`` (two ore, six credits) or ``"-1q,3vp"``. A bare code means a
count of one, and ``"~"`` stands for "nothing".

A reward list keeps its tokens in the order they were written. ``merge``
produces the canonical form: one entry per kind in first-seen order, zero
entries dropped. ``parse(to_string(merge(x)))`` is equal to ``merge(x)``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from .enums import Resource
from .errors import MalformedCostSpec

_TOKEN_PATTERN = re.compile(r"^(-?\d+)?(.+)$")
_RESOURCE_CODES = {resource.value: resource for resource in Resource}


@dataclass(frozen=True, slots=True)
class Reward:
    """A signed quantity of one resource kind."""

    count: int
    type: Resource

    def __str__(self) -> str:
        if self.type == Resource.NONE:
            return Resource.NONE.value
        return f"{self.count}{self.type.value}"


RewardList = list[Reward]


def parse_token(token: str, *, spec: str | None = None) -> Reward:
    """Parse a single ``"<count><code>"`` token."""

    text = token.strip()
    if text == Resource.NONE.value:
        return Reward(0, Resource.NONE)
    match = _TOKEN_PATTERN.match(text)
    if not match:
        raise MalformedCostSpec(spec or token, token)
    count_text, code = match.groups()
    resource = _RESOURCE_CODES.get(code)
    if resource is None or resource == Resource.NONE:
        raise MalformedCostSpec(spec or token, token)
    count = int(count_text) if count_text is not None else 1
    return Reward(count, resource)


def parse(spec: str | None) -> RewardList:
    """Parse a reward specification into a list of rewards.

    ``None``, ``""`` and ``"~"`` parse to an empty list. "No-op" tokens are
    dropped from the result.

    Raises:
        MalformedCostSpec: if any token has an unknown resource code.
    """

    if spec is None:
        return []
    text = spec.strip()
    if not text or text == Resource.NONE.value:
        return []

    rewards: RewardList = []
    for token in text.split(","):
        if not token.strip():
            raise MalformedCostSpec(spec, token)
        reward = parse_token(token, spec=spec)
        if reward.type != Resource.NONE:
            rewards.append(reward)
    return rewards


def to_string(rewards: Iterable[Reward]) -> str:
    """Format rewards back into the compact notation (``"~"`` when empty)."""

    tokens = [str(reward) for reward in rewards if reward.type != Resource.NONE]
    return ",".join(tokens) if tokens else Resource.NONE.value


def merge(*lists: Iterable[Reward]) -> RewardList:
    """Sum counts per kind across ``lists``, dropping zero and no-op entries."""

    totals: dict[Resource, int] = {}
    for rewards in lists:
        for reward in rewards:
            if reward.type == Resource.NONE:
                continue
            totals[reward.type] = totals.get(reward.type, 0) + reward.count
    return [Reward(count, kind) for kind, count in totals.items() if count != 0]


def negate(rewards: Iterable[Reward]) -> RewardList:
    return [Reward(-reward.count, reward.type) for reward in rewards]


def scale(rewards: Iterable[Reward], factor: int) -> RewardList:
    return [Reward(reward.count * factor, reward.type) for reward in rewards]


def as_counts(rewards: Iterable[Reward]) -> dict[Resource, int]:
    """Kind -> count mapping of the merged list, used for semantic equality."""

    return {reward.type: reward.count for reward in merge(rewards)}
