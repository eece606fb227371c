"""Domain layer of the Gaia rules engine.

Everything here operates purely in memory on dataclass snapshots:

* Enumerations and the resource/event notation (see :mod:`enums`,
  :mod:`reward`, :mod:`events`).
* Immutable catalog tables and the rules configuration (see :mod:`catalog`,
  :mod:`rules_config`).
* The player ledger and the game snapshot (see :mod:`ledger`, :mod:`models`,
  :mod:`space_map`).
* Pure rule functions: eligibility, federation search, setup and the
  legal-move enumerator (see :mod:`available_command`).
"""

from . import (
    available_command,
    catalog,
    eligibility,
    enums,
    errors,
    events,
    faction_rules,
    federation,
    ledger,
    models,
    reward,
    rules_config,
    setup,
    space_map,
)

__all__ = [
    "available_command",
    "catalog",
    "eligibility",
    "enums",
    "errors",
    "events",
    "faction_rules",
    "federation",
    "ledger",
    "models",
    "reward",
    "rules_config",
    "setup",
    "space_map",
]
