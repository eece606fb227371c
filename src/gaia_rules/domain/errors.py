"""Exceptions raised by the rules engine.

Illegal moves are not errors: a command that may not be issued is simply
absent from the enumerated list. The classes below cover data errors and
broken game states only.
"""

from __future__ import annotations


class GaiaRulesError(Exception):
    """Base exception for the rules engine."""


class MalformedCostSpec(GaiaRulesError, ValueError):
    """A resource or event specification could not be parsed."""

    def __init__(self, spec: str, token: str | None = None) -> None:
        detail = f"unrecognized token {token!r} in {spec!r}" if token else f"malformed {spec!r}"
        super().__init__(detail)
        self.spec = spec
        self.token = token


class InconsistentState(GaiaRulesError, RuntimeError):
    """The game state cannot be enumerated (e.g. no active player)."""


class CandidateRejected(GaiaRulesError):
    """A single candidate hex or action failed a rule check.

    Raised by per-candidate helpers and caught by the enumerator, which drops
    the candidate and carries on with the rest of the batch.
    """
