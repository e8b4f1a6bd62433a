"""Room reveal and the monsters and objectives a revealed room brings in."""

import logging

from ..content.catalog import ContentCatalog
from ..content.models import RoomData, ScenarioData
from .characters import CharacterManager
from .figures import Monster, MonsterEntity
from .monsters import MonsterManager
from .rules import ScenarioRuleEngine
from .state import Game, GameState

logger = logging.getLogger(__name__)


class RoomManager:
    """Reveals rooms of the active scenario."""

    def __init__(
        self,
        game: Game,
        catalog: ContentCatalog,
        characters: CharacterManager,
        monsters: MonsterManager,
        rules: ScenarioRuleEngine,
    ):
        self.game = game
        self.catalog = catalog
        self.characters = characters
        self.monsters = monsters
        self.rules = rules

    def open_initial_rooms(self, scenario_data: ScenarioData) -> None:
        """Reveal the rooms a scenario starts with."""
        for room in scenario_data.rooms:
            if room.initial:
                self.open_room(room, scenario_data)

    def open_room(self, room: RoomData, scenario_data: ScenarioData) -> list[MonsterEntity]:
        """Reveal a room.

        Spawns the room's standees at the tier matching the party size,
        activates them if turns are in progress, adds the room's objectives
        and re-evaluates room-dependent rules. Opening an already revealed
        room is logged and ignored.

        Args:
            room: Room to reveal
            scenario_data: Scenario or section the room belongs to

        Returns:
            Standees spawned by the room
        """
        if self.game.scenario:
            if room.room_number in self.game.scenario.revealed_rooms:
                logger.warning(f"Room {room.room_number} is already revealed")
                return []
            self.game.scenario.revealed_rooms.append(room.room_number)

        entities = self._spawn_standees(room, scenario_data)
        if entities and self.game.state == GameState.NEXT:
            self._activate_spawned(entities, scenario_data)

        for objective_index in room.objectives:
            if 0 < objective_index <= len(scenario_data.objectives):
                self.characters.add_objective(scenario_data.objectives[objective_index - 1])

        self.rules.add_scenario_rules_rooms()
        return entities

    def open_rooms(self, initial: bool = False) -> list[RoomData]:
        """Revealed rooms of the scenario, initial rooms only if requested."""
        scenario = self.game.scenario
        if not scenario:
            return []
        return [
            room for room in scenario.rooms
            if room.room_number in scenario.revealed_rooms and (initial or not room.initial)
        ]

    def closed_rooms(self) -> list[RoomData]:
        """Unrevealed rooms adjacent to a revealed room."""
        scenario = self.game.scenario
        if not scenario:
            return []
        frontier = {number for room in self.open_rooms(initial=True) for number in room.rooms}
        return [
            room for room in scenario.rooms
            if room.room_number not in scenario.revealed_rooms and room.room_number in frontier
        ]

    def _spawn_standees(self, room: RoomData, scenario_data: ScenarioData) -> list[MonsterEntity]:
        entities: list[MonsterEntity] = []
        character_count = self.characters.character_count()
        for standee in room.monster:
            tier = standee.tier_for(character_count)
            if not tier:
                continue
            entity = self.monsters.spawn_monster_entity(standee.name, tier, scenario_data)
            if entity:
                entity.marker = standee.marker
                entities.append(entity)
        return entities

    def _activate_spawned(self, entities: list[MonsterEntity], scenario_data: ScenarioData) -> None:
        editions = [scenario_data.edition, *self.catalog.edition_extensions(scenario_data.edition)]
        figures = self.game.figures
        for position, figure in enumerate(figures):
            if not isinstance(figure, Monster) or figure.edition not in editions:
                continue
            spawned = [entity for entity in figure.entities if any(entity is e for e in entities)]
            if not spawned:
                continue

            figure.active = figure.active or not any(other.active for other in figures if other is not figure)
            later_active = any(other.active for other in figures[position + 1:])
            for entity in spawned:
                entity.active = figure.active or later_active
