"""HTTP surface for the Gaia rules engine."""
