"""Tests for the static rules tables."""

from __future__ import annotations

import pytest

from gaia_rules.domain import catalog
from gaia_rules.domain import reward as rw
from gaia_rules.domain.enums import Booster, Building, Condition, Faction, Operator, Planet, Resource
from gaia_rules.domain.events import events_with, parse_events
from gaia_rules.domain.errors import CandidateRejected


class TestPlanetWheel:
    """Terraforming distances around the planet wheel."""

    def test_same_planet_needs_no_steps(self) -> None:
        assert catalog.terraforming_steps(Planet.TERRA, Planet.TERRA) == 0

    def test_steps_wrap_around(self) -> None:
        assert catalog.terraforming_steps(Planet.TERRA, Planet.OXIDE) == 1
        assert catalog.terraforming_steps(Planet.TERRA, Planet.ICE) == 1
        assert catalog.terraforming_steps(Planet.TERRA, Planet.DESERT) == 3
        assert catalog.terraforming_steps(Planet.VOLCANIC, Planet.ICE) == 3

    def test_off_wheel_planets_are_rejected(self) -> None:
        with pytest.raises(CandidateRejected):
            catalog.terraforming_steps(Planet.TERRA, Planet.GAIA)


class TestFactions:
    """Faction pairing and boards."""

    def test_every_faction_has_an_opposite(self) -> None:
        for faction in Faction:
            other = catalog.opposite_faction(faction)
            assert other != faction
            assert catalog.opposite_faction(other) == faction
            assert catalog.FACTION_PLANETS[other] == catalog.FACTION_PLANETS[faction]

    def test_trading_station_is_cheaper_when_crowded(self) -> None:
        board = catalog.faction_board(Faction.TERRANS)
        assert rw.to_string(board.cost(Building.TRADING_STATION)) == "2o,6c"
        assert rw.to_string(board.cost(Building.TRADING_STATION, isolated=False)) == "2o,3c"
        assert rw.to_string(board.cost(Building.MINE, isolated=False)) == "1o,2c"

    def test_board_limits(self) -> None:
        board = catalog.faction_board(Faction.GEODENS)
        assert board.max_buildings(Building.MINE) == 8
        assert board.max_buildings(Building.PLANETARY_INSTITUTE) == 1
        assert board.planet == Planet.VOLCANIC


def test_upgrade_paths() -> None:
    assert catalog.upgraded_buildings(Building.MINE, Faction.XENOS) == (Building.TRADING_STATION,)
    assert catalog.upgraded_buildings(Building.TRADING_STATION, Faction.XENOS) == (
        Building.RESEARCH_LAB,
        Building.PLANETARY_INSTITUTE,
    )
    assert catalog.upgraded_buildings(Building.ACADEMY1, Faction.XENOS) == ()


def test_catalog_specs_parse() -> None:
    """Every cost and income in the tables is valid notation."""
    for spec in catalog.BOARD_ACTIONS.values():
        rw.parse(spec.cost)
        for income in spec.income:
            rw.parse(income)
    for spec in catalog.FREE_ACTIONS:
        rw.parse(spec.cost)
    for reward in catalog.FEDERATION_TILES.values():
        rw.parse(reward)


class TestEventSpecs:
    """Every event string in the tables parses with the event notation."""

    def test_faction_incomes(self) -> None:
        for faction, board in catalog.FACTION_BOARDS.items():
            incomes = parse_events(board.income, source=faction.value)
            assert incomes
            assert events_with(incomes, Operator.INCOME) == incomes

    def test_planetary_institute_actions(self) -> None:
        ambas = parse_events(catalog.faction_board(Faction.AMBAS).pi_events)
        assert [(e.operator, e.rewards) for e in ambas] == [
            (Operator.ACTIVATE, [rw.Reward(1, Resource.PI_SWAP)])
        ]
        for board in catalog.FACTION_BOARDS.values():
            for event in parse_events(board.pi_events):
                assert event.operator == Operator.ACTIVATE

    def test_boosters(self) -> None:
        assert set(catalog.BOOSTERS) == set(Booster)
        for booster, specs in catalog.BOOSTERS.items():
            assert len(parse_events(specs, source=booster.value)) == 2

        (on_pass,) = events_with(parse_events(catalog.BOOSTERS[Booster.BOOSTER9]), Operator.PASS)
        assert on_pass.condition == Condition.PLANETARY_INSTITUTE_OR_ACADEMY
        assert rw.to_string(on_pass.rewards) == "4vp"

    def test_tech_tiles(self) -> None:
        for tile, specs in {**catalog.TECH_TILES, **catalog.ADV_TECH_TILES}.items():
            assert parse_events(specs, source=tile)

        (special,) = parse_events(catalog.TECH_TILES["tech3"])
        assert (special.operator, special.rewards) == (Operator.SPECIAL, [])
        (trigger,) = parse_events(catalog.TECH_TILES["tech7"])
        assert (trigger.condition, trigger.operator) == (Condition.MINE_ON_GAIA, Operator.TRIGGER)
        (research,) = parse_events(catalog.ADV_TECH_TILES["advtech11"])
        assert (research.condition, research.operator) == (Condition.ADVANCE_TECH, Operator.TRIGGER)
