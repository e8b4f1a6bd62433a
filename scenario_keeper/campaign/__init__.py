"""Campaign progression: party unlock state and scenario availability."""

from .party import GameScenarioModel, Party
from .graph import ScenarioGraph

__all__ = ["GameScenarioModel", "Party", "ScenarioGraph"]
