"""Figure registry: characters, objectives and scenario rewards."""

import logging
import re

from ..config import AppConfig
from ..content.models import CharacterData, ObjectiveData
from .expressions import ExpressionError, evaluate
from .figures import Character, Figure, ObjectiveContainer
from .state import Game

logger = logging.getLogger(__name__)


class LevelManager:
    """Scenario level derived values."""

    def __init__(self, config: AppConfig):
        self.config = config

    @property
    def level(self) -> int:
        return self.config.levels.level

    def experience(self) -> int:
        """Bonus experience for completing a scenario at the current level."""
        levels = self.config.levels
        return levels.experience_base + levels.experience_per_level * levels.level

    def loot(self) -> int:
        """Gold per loot token at the current level."""
        values = self.config.levels.loot_values
        return values[min(self.level, len(values) - 1)]


class CharacterManager:
    """Enumerates and mutates figures of one game session."""

    def __init__(self, game: Game, levels: LevelManager):
        self.game = game
        self.levels = levels

    def characters(self, include_absent: bool = False) -> list[Character]:
        """Characters in figure order."""
        return [
            figure for figure in self.game.figures
            if isinstance(figure, Character) and (include_absent or not figure.absent)
        ]

    def character_count(self) -> int:
        """Number of characters that are not absent."""
        return len(self.characters())

    @staticmethod
    def is_character(figure: Figure) -> bool:
        return isinstance(figure, Character)

    @staticmethod
    def gameplay_figure(figure: Figure) -> bool:
        """Check if a figure is a valid participant of the current play."""
        return figure.is_gameplay_figure

    def figures_by_string(self, selector: str) -> list[Figure]:
        """Resolve a figure selector to figures.

        A selector is ``name`` or ``edition:name``; the name part is a regular
        expression matched against the whole figure name.
        """
        edition, _, name = selector.rpartition(":")
        try:
            pattern = re.compile(name)
        except re.error:
            pattern = re.compile(re.escape(name))

        return [
            figure for figure in self.game.figures
            if (not edition or figure.edition == edition) and pattern.fullmatch(figure.name)
        ]

    def add_character(self, character_data: CharacterData, level: int = 1) -> Character:
        """Add a character to the party at the given level."""
        max_health = character_data.max_health(level)
        character = Character(
            name=character_data.name,
            edition=character_data.edition,
            level=level,
            health=max_health,
            max_health=max_health,
        )
        self.game.figures.append(character)
        logger.info(f"Added character {character.name} ({character.edition}) at level {level}")
        return character

    def add_objective(self, objective_data: ObjectiveData) -> ObjectiveContainer:
        """Instantiate an objective figure."""
        health = self._objective_health(objective_data)
        objective = ObjectiveContainer(
            name=objective_data.name,
            objective_id=objective_data.id,
            escort=objective_data.escort,
            health=health,
            max_health=health,
            marker=objective_data.marker,
        )
        self.game.figures.append(objective)
        return objective

    def add_xp(self, character: Character, amount: int) -> None:
        """Grant campaign experience."""
        character.progress.experience += amount

    def _objective_health(self, objective_data: ObjectiveData) -> int:
        try:
            value = evaluate(objective_data.health, {"C": self.character_count(), "L": self.levels.level})
        except ExpressionError as e:
            logger.warning(f"Invalid health for objective '{objective_data.name}': {e}")
            return 1
        return max(1, int(value))
