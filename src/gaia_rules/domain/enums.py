"""Enumerations shared by the rules engine."""

from __future__ import annotations

from enum import StrEnum


class Phase(StrEnum):
    """Top-level game phases."""

    INIT = "init"
    SETUP_FACTION = "setupFaction"
    SETUP_AUCTION = "setupAuction"
    SETUP_BUILDING = "setupBuilding"
    SETUP_BOOSTER = "setupBooster"
    ROUND_INCOME = "roundIncome"
    ROUND_GAIA = "roundGaia"
    ROUND_MOVE = "roundMove"
    ROUND_LEECH = "roundLeech"
    END = "end"


class SubPhase(StrEnum):
    """Pending decisions nested inside a phase."""

    BEFORE_MOVE = "beforeMove"
    AFTER_MOVE = "afterMove"
    CHOOSE_TECH_TILE = "chooseTechTile"
    COVER_TECH_TILE = "coverTechTile"
    UPGRADE_RESEARCH = "upgradeResearch"
    PLACE_LOST_PLANET = "placeLostPlanet"
    CHOOSE_FEDERATION_TILE = "chooseFederationTile"
    RESCORE_FEDERATION_TILE = "rescoreFederationTile"
    BUILD_MINE = "buildMine"
    BUILD_MINE_OR_GAIA_FORMER = "buildMineOrGaiaFormer"
    SPACE_STATION = "spaceStation"
    PI_SWAP = "piSwap"
    DOWNGRADE_LAB = "downgradeLab"
    BRAIN_STONE = "brainStone"


class Planet(StrEnum):
    """Planet types printed on map hexes."""

    EMPTY = "e"
    TERRA = "r"
    DESERT = "d"
    SWAMP = "s"
    OXIDE = "o"
    VOLCANIC = "v"
    TITANIUM = "t"
    ICE = "i"
    GAIA = "g"
    TRANSDIM = "m"
    LOST = "l"


class ResearchField(StrEnum):
    """The six research tracks, in board order."""

    TERRAFORMING = "terra"
    NAVIGATION = "nav"
    INTELLIGENCE = "int"
    GAIA_PROJECT = "gaia"
    ECONOMY = "eco"
    SCIENCE = "sci"


class Resource(StrEnum):
    """Every reward/cost kind understood by the resource notation."""

    NONE = "~"
    ORE = "o"
    CREDIT = "c"
    KNOWLEDGE = "k"
    QIC = "q"
    CHARGE_POWER = "pw"
    GAIN_TOKEN = "t"
    GAIN_TOKEN_GAIA_AREA = "tg"
    BURN_TOKEN = "brn"
    GAIA_POWER = "gpw"
    VICTORY_POINT = "vp"
    TERRAFORM_STEP = "d"
    RANGE_EXTENSION = "r"
    GAIA_FORMER = "gf"
    SPACE_STATION = "space-station"
    DOWNGRADE_LAB = "down-lab"
    PI_SWAP = "swap-PI"
    TECH_TILE = "tech"
    RESCORE_FEDERATION = "rescore-fed"
    UPGRADE_LOWEST = "up-lowest"
    UPGRADE_TERRAFORMING = "up-terra"
    UPGRADE_NAVIGATION = "up-nav"
    UPGRADE_INTELLIGENCE = "up-int"
    UPGRADE_GAIA_PROJECT = "up-gaia"
    UPGRADE_ECONOMY = "up-eco"
    UPGRADE_SCIENCE = "up-sci"


class Operator(StrEnum):
    """How an event's rewards are delivered."""

    ONCE = ">"
    INCOME = "+"
    TRIGGER = ">>"
    ACTIVATE = "=>"
    PASS = "|"
    SPECIAL = "S"


class Condition(StrEnum):
    """Optional condition prefix of an event."""

    NONE = "~"
    MINE = "m"
    TRADING_STATION = "ts"
    RESEARCH_LAB = "lab"
    PLANETARY_INSTITUTE_OR_ACADEMY = "PA"
    FEDERATION = "fed"
    GAIA = "g"
    PLANET_TYPE = "pt"
    SECTOR = "s"
    MINE_ON_GAIA = "mg"
    ADVANCE_TECH = "a"
    TERRAFORM_STEP = "d"


class Building(StrEnum):
    """Structures a player can own on the map."""

    MINE = "m"
    TRADING_STATION = "ts"
    RESEARCH_LAB = "lab"
    PLANETARY_INSTITUTE = "PI"
    ACADEMY1 = "ac1"
    ACADEMY2 = "ac2"
    GAIA_FORMER = "gf"
    SPACE_STATION = "sp"


class Faction(StrEnum):
    """The fourteen playable factions, paired two per home planet."""

    TERRANS = "terrans"
    LANTIDS = "lantids"
    XENOS = "xenos"
    GLEENS = "gleens"
    TAKLONS = "taklons"
    AMBAS = "ambas"
    HADSCH_HALLAS = "hadsch-hallas"
    IVITS = "ivits"
    GEODENS = "geodens"
    BALTAKS = "baltaks"
    FIRAKS = "firaks"
    BESCODS = "bescods"
    NEVLAS = "nevlas"
    ITARS = "itars"


class Command(StrEnum):
    """Names of the commands a player can issue."""

    INIT = "init"
    CHOOSE_FACTION = "faction"
    BID = "bid"
    CHOOSE_ROUND_BOOSTER = "booster"
    BUILD = "build"
    PASS = "pass"
    UPGRADE_RESEARCH = "up"
    CHARGE_POWER = "charge"
    DECLINE = "decline"
    BURN_POWER = "burn"
    SPEND = "spend"
    ACTION = "action"
    SPECIAL = "special"
    FORM_FEDERATION = "federation"
    CHOOSE_TECH_TILE = "tech"
    CHOOSE_COVER_TECH_TILE = "cover"
    CHOOSE_FEDERATION_TILE = "fedtile"
    CHOOSE_INCOME = "income"
    PLACE_LOST_PLANET = "lostplanet"
    PI_SWAP = "swap"
    BRAIN_STONE = "brainstone"
    END_TURN = "endturn"


class BoardAction(StrEnum):
    """Shared once-per-round action spaces."""

    POWER1 = "power1"
    POWER2 = "power2"
    POWER3 = "power3"
    POWER4 = "power4"
    POWER5 = "power5"
    POWER6 = "power6"
    POWER7 = "power7"
    QIC1 = "qic1"
    QIC2 = "qic2"
    QIC3 = "qic3"


class Booster(StrEnum):
    """Round boosters."""

    BOOSTER1 = "booster1"
    BOOSTER2 = "booster2"
    BOOSTER3 = "booster3"
    BOOSTER4 = "booster4"
    BOOSTER5 = "booster5"
    BOOSTER6 = "booster6"
    BOOSTER7 = "booster7"
    BOOSTER8 = "booster8"
    BOOSTER9 = "booster9"
    BOOSTER10 = "booster10"


class TechTilePos(StrEnum):
    """Positions of the standard tech tiles on the research board."""

    TERRAFORMING = "terra"
    NAVIGATION = "nav"
    INTELLIGENCE = "int"
    GAIA_PROJECT = "gaia"
    ECONOMY = "eco"
    SCIENCE = "sci"
    FREE1 = "free1"
    FREE2 = "free2"
    FREE3 = "free3"


class AdvTechTilePos(StrEnum):
    """Positions of the advanced tech tiles, one above each track."""

    TERRAFORMING = "adv-terra"
    NAVIGATION = "adv-nav"
    INTELLIGENCE = "adv-int"
    GAIA_PROJECT = "adv-gaia"
    ECONOMY = "adv-eco"
    SCIENCE = "adv-sci"

    @property
    def field(self) -> ResearchField:
        return ResearchField(self.value.removeprefix("adv-"))


class FederationTile(StrEnum):
    """Federation tokens; ``gleens`` is the grey Gleens-only token."""

    FED1 = "fed1"
    FED2 = "fed2"
    FED3 = "fed3"
    FED4 = "fed4"
    FED5 = "fed5"
    FED6 = "fed6"
    GLEENS = "gleens"


class PowerArea(StrEnum):
    """Power bowls; used to locate the Taklons brain stone."""

    AREA1 = "area1"
    AREA2 = "area2"
    AREA3 = "area3"
    GAIA = "gaia"
    TRANSDIM = "transdim"


class AuctionVariant(StrEnum):
    """Auction rule variants for the setup phase."""

    CHOOSE_BID = "choose-bid"
    BID_WHILE_CHOOSING = "bid-while-choosing"


class BuildWarning(StrEnum):
    """Advisory tags attached to a legal build; never change legality."""

    GEODENS_BUILD_WITHOUT_PI = "geodens-build-without-PI"
    LANTIDS_DEADLOCK = "lantids-deadlock"
    LANTIDS_BUILD_WITHOUT_PI = "lantids-build-without-PI"
    EXPENSIVE_TERRAFORMING = "expensive-terraforming"
