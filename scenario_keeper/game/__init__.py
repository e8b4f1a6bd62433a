"""Game session mechanics: figures, rooms, rules and rounds."""

from .state import ActiveRule, Game, GameState, Scenario
from .figures import Character, Monster, MonsterEntity, ObjectiveContainer
from .expressions import ExpressionError, evaluate, evaluate_condition
from .rules import ScenarioRuleEngine
from .rooms import RoomManager
from .rounds import RoundManager

__all__ = [
    "ActiveRule", "Game", "GameState", "Scenario",
    "Character", "Monster", "MonsterEntity", "ObjectiveContainer",
    "ExpressionError", "evaluate", "evaluate_condition",
    "ScenarioRuleEngine", "RoomManager", "RoundManager",
]
