"""Monster spawning."""

import logging

from ..content.catalog import ContentCatalog, MissingContentError
from ..content.models import MonsterType, ScenarioData
from .figures import Monster, MonsterEntity
from .state import Game

logger = logging.getLogger(__name__)


class MonsterManager:
    """Creates monsters and their standees for a game session."""

    def __init__(self, game: Game, catalog: ContentCatalog):
        self.game = game
        self.catalog = catalog

    def get_monster(self, name: str, edition: str) -> Monster | None:
        """Find a monster already in play."""
        editions = [edition, *self.catalog.edition_extensions(edition)]
        for figure in self.game.figures:
            if isinstance(figure, Monster) and figure.name == name and figure.edition in editions:
                return figure
        return None

    def add_monster_by_name(self, name: str, edition: str) -> Monster | None:
        """Add a monster type to play, or return it if already in play.

        Returns:
            The monster, or None if the catalog does not know it
        """
        monster = self.get_monster(name, edition)
        if monster:
            return monster

        try:
            monster_data = self.catalog.get_monster(name, edition)
        except MissingContentError as e:
            logger.error(str(e))
            return None

        monster = Monster(name=monster_data.name, edition=monster_data.edition)
        self.game.figures.append(monster)
        return monster

    def spawn_monster_entity(
        self,
        name: str,
        monster_type: MonsterType,
        scenario_data: ScenarioData,
        summon: bool = False,
    ) -> MonsterEntity | None:
        """Place a new standee of a monster.

        Returns:
            The new standee, or None if the monster is unknown or all its
            standees are already in play
        """
        monster = self.add_monster_by_name(name, scenario_data.edition)
        if monster is None:
            return None

        limit = self.catalog.get_monster(monster.name, monster.edition).count
        used = {entity.number for entity in monster.entities if entity.is_alive}
        number = next((n for n in range(1, limit + 1) if n not in used), None)
        if number is None:
            logger.warning(f"No standee left for {monster.name}")
            return None

        # Dead standees with that number leave the board
        monster.entities = [e for e in monster.entities if e.number != number]
        entity = MonsterEntity(number=number, type=monster_type, summon=summon)
        monster.entities.append(entity)
        return entity
