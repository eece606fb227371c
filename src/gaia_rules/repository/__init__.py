"""Persistence adapters for game snapshots."""

from gaia_rules.repository.json_store import JsonGameRepository

__all__ = ["JsonGameRepository"]
