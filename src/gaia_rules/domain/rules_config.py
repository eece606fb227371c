"""Declarative rule configuration for the rules engine."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import Resource


@dataclass(frozen=True, slots=True)
class BuildRules:
    """Placement, range and terraforming constants."""

    isolated_distance: int = 3  # opponents strictly closer than this make a spot crowded
    distance_per_qic: int = 2
    # indexed by research level 0..5
    navigation_range: tuple[int, ...] = (1, 1, 2, 2, 3, 4)
    terraform_ore_per_step: tuple[int, ...] = (3, 3, 2, 1, 1, 1)
    gaia_former_tokens: tuple[int, ...] = (6, 6, 6, 4, 3, 3)
    expensive_terraforming_steps: int = 3


@dataclass(frozen=True, slots=True)
class ResearchRules:
    """Research track constants."""

    upgrade_cost: str = "4k"
    max_level: int = 5
    green_federation_level: int = 5  # moving onto this level spends a green token


@dataclass(frozen=True, slots=True)
class FederationRules:
    """Federation formation constants."""

    threshold: int = 7
    max_satellites: int = 12
    bridge_through_planets: bool = False


@dataclass(frozen=True, slots=True)
class ResourceLimits:
    """Caps on stored resources; gains beyond the cap are discarded."""

    ore: int = 15
    credit: int = 30
    knowledge: int = 15

    def as_table(self) -> dict[Resource, int]:
        return {
            Resource.ORE: self.ore,
            Resource.CREDIT: self.credit,
            Resource.KNOWLEDGE: self.knowledge,
        }


@dataclass(frozen=True, slots=True)
class AuctionRules:
    """Setup auction constants."""

    bid_window: int = 9


@dataclass(frozen=True, slots=True)
class RoundRules:
    """Round structure constants."""

    last_round: int = 6


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    build: BuildRules = BuildRules()
    research: ResearchRules = ResearchRules()
    federation: FederationRules = FederationRules()
    limits: ResourceLimits = ResourceLimits()
    auction: AuctionRules = AuctionRules()
    rounds: RoundRules = RoundRules()


DEFAULT_RULES = RulesConfig()
