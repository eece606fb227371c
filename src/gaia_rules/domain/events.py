"""Income/trigger events attached to boards, boosters and tiles.

An event spec reads ``"[condition] operator rewards"``::

    "+1o"        income of one ore each round
    "=>1d"       activatable once per round: one terraforming step
    "m | 1vp"    on pass, one victory point per mine
    "a >> 2vp"   each time the player advances research, two victory points

The player owns a plain list of events; callers filter it by operator.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from . import reward as rw
from .enums import Condition, Operator
from .errors import MalformedCostSpec

# Longest operators first so that ">>" is not read as ">".
_EVENT_PATTERN = re.compile(r"^\s*(?:(?P<cond>[A-Za-z~]+)\s*)?(?P<op>=>|>>|>|\+|\||S)\s*(?P<rewards>.*)$")
_CONDITIONS = {condition.value: condition for condition in Condition}


@dataclass(slots=True)
class Event:
    """A single parsed event."""

    spec: str
    operator: Operator
    rewards: list[rw.Reward] = field(default_factory=list)
    condition: Condition = Condition.NONE
    activated: bool = False
    source: str | None = None

    @property
    def income(self) -> str:
        return rw.to_string(self.rewards)


def parse_event(spec: str, *, source: str | None = None) -> Event:
    """Parse one event spec.

    Raises:
        MalformedCostSpec: for an unknown operator, condition or reward token.
    """

    match = _EVENT_PATTERN.match(spec)
    if not match:
        raise MalformedCostSpec(spec)
    cond_text = match.group("cond")
    condition = Condition.NONE
    if cond_text:
        condition = _CONDITIONS.get(cond_text)
        if condition is None:
            raise MalformedCostSpec(spec, cond_text)
    return Event(
        spec=spec,
        operator=Operator(match.group("op")),
        rewards=rw.parse(match.group("rewards")),
        condition=condition,
        source=source,
    )


def parse_events(specs: Iterable[str], *, source: str | None = None) -> list[Event]:
    return [parse_event(spec, source=source) for spec in specs]


def events_with(events: Iterable[Event], operator: Operator) -> list[Event]:
    """Filter ``events`` down to one operator, preserving order."""

    return [event for event in events if event.operator == operator]
