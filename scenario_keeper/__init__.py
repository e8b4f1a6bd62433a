"""Scenario Keeper - campaign scenario progression for cooperative dungeon crawlers."""

from .manager import GameManager

__all__ = ["GameManager"]

__version__ = "0.1.0"
