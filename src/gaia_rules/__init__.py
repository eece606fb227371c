"""Rules engine for Gaia Project matches: legal moves, costs and resources."""

__version__ = "0.1.0"
