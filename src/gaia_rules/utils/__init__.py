"""Utility functions shared by the rules engine."""

from gaia_rules.utils.hex_math import HexCoord, hex_distance, hex_neighbors, hexes_in_range
from gaia_rules.utils.rng import generate_seed, shuffled

__all__ = [
    "HexCoord",
    "generate_seed",
    "hex_distance",
    "hex_neighbors",
    "hexes_in_range",
    "shuffled",
]
