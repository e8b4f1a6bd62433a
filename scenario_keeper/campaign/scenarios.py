"""Scenario lifecycle: starting, extending and finishing scenarios."""

import copy
import logging
from typing import Any

from ..config import AppConfig
from ..content.catalog import ContentCatalog, MissingContentError
from ..content.models import RuleIdentifier, ScenarioData
from ..game.characters import CharacterManager, LevelManager
from ..game.expressions import ExpressionError, evaluate
from ..game.loot import LootManager
from ..game.monsters import MonsterManager
from ..game.rooms import RoomManager
from ..game.rounds import RoundManager
from ..game.rules import ScenarioRuleEngine
from ..game.state import ActiveRule, Game, GameState, Scenario
from .graph import ScenarioGraph
from .party import GameScenarioModel, Party

logger = logging.getLogger(__name__)


class ScenarioManager:
    """Controls the active scenario and its attached sections."""

    def __init__(
        self,
        game: Game,
        catalog: ContentCatalog,
        config: AppConfig,
        graph: ScenarioGraph,
        characters: CharacterManager,
        levels: LevelManager,
        monsters: MonsterManager,
        rooms: RoomManager,
        rules: ScenarioRuleEngine,
        rounds: RoundManager,
        loot: LootManager,
    ):
        self.game = game
        self.catalog = catalog
        self.config = config
        self.graph = graph
        self.characters = characters
        self.levels = levels
        self.monsters = monsters
        self.rooms = rooms
        self.rules = rules
        self.rounds = rounds
        self.loot = loot

    def set_scenario(self, scenario: Scenario | ScenarioData | None) -> bool:
        """Replace the active scenario.

        Any running scenario ends first: its sections, rules, round
        bookkeeping and monsters are dropped. A catalog scenario is re-read
        from the catalog and applied fresh (rooms revealed by an earlier
        play are not carried over): monsters and objectives, initial rooms,
        solo setup, loot deck and round reset. Custom scenarios carry no
        content.

        Args:
            scenario: Scenario to start, or None to clear

        Returns:
            False if the scenario is not in the catalog (nothing changes)
        """
        if scenario is None:
            self.game.scenario = None
            self.rounds.reset_scenario()
            return True

        if isinstance(scenario, ScenarioData):
            scenario = Scenario(scenario)

        if scenario.custom:
            self.game.scenario = Scenario(scenario.data, list(scenario.revealed_rooms), True, scenario.custom_name)
            self.rounds.reset_scenario()
            return True

        try:
            scenario_data = self.catalog.get_scenario(scenario.edition, scenario.group, scenario.index)
        except MissingContentError as e:
            logger.error(f"Could not find scenario data: {e}")
            return False

        self.game.scenario = Scenario(scenario_data)
        self.rounds.reset_scenario()
        self.apply_scenario_data(scenario_data.edition, scenario_data)
        self.rules.add_scenario_rules()
        logger.info(f"Scenario started: {scenario_data.edition} #{scenario_data.index} {scenario_data.name}")
        return True

    def start_scenario(self, edition: str, index: str, group: str | None = None) -> bool:
        """Start a catalog scenario by identity."""
        scenario_data = self.catalog.find_scenario(edition, group, index)
        if scenario_data is None:
            logger.error(f"Could not find scenario data: {edition}/{group or '-'}/{index}")
            return False
        return self.set_scenario(scenario_data)

    def apply_scenario_data(self, edition: str, scenario_data: ScenarioData) -> None:
        """Bring a scenario's or section's content into play."""
        settings = self.config.game
        if not settings.room_reveal or not scenario_data.rooms:
            self._spawn_flat(edition, scenario_data)
        else:
            self.rooms.open_initial_rooms(scenario_data)

        if scenario_data.solo:
            self._apply_solo(scenario_data)

        if scenario_data.loot_deck_config:
            self.loot.apply(self.game.loot_deck, scenario_data.loot_deck_config)

        if scenario_data.reset_round:
            self.game.round_resets.append(self.game.round)
            self.game.round = 0 if self.game.state == GameState.DRAW else 1

    def add_section(self, section_data: ScenarioData) -> bool:
        """Attach a section to the running scenario.

        Returns:
            False if the section was already attached
        """
        if any(section.matches(*section_data.identity) for section in self.game.sections):
            return False

        section = Scenario(section_data)
        self.game.sections.append(section)
        self.apply_scenario_data(section_data.edition, section_data)
        if section.rules:
            self.rules.add_section_rules(section)
        logger.info(f"Section added: {section_data.edition} {section_data.index} {section_data.name}")
        return True

    def add_section_by_index(self, edition: str, index: str, group: str | None = None) -> bool:
        """Attach a catalog section by identity."""
        try:
            section_data = self.catalog.get_section(edition, group, index)
        except MissingContentError as e:
            logger.error(f"Could not find section data: {e}")
            return False
        return self.add_section(section_data)

    def finish_scenario(self, success: bool = True) -> None:
        """End the active scenario and hand out rewards.

        Every character present earns its scenario experience (plus the
        scenario bonus on success) and gold for its loot. A successful
        scenario is recorded in the party's history.
        """
        for character in self.characters.characters():
            bonus = self.levels.experience() if success else 0
            self.characters.add_xp(character, bonus + character.experience)
            character.progress.gold += character.loot * self.levels.loot()

        scenario = self.game.scenario
        if success and scenario:
            party = self.game.party
            party.scenarios.append(scenario.to_model())
            party.manual_scenarios = [
                model for model in party.manual_scenarios
                if not model.matches(scenario.edition, scenario.group, scenario.index)
            ]
            logger.info(f"Scenario completed: {scenario.edition} #{scenario.index}")

        self.game.scenario = None
        self.rounds.reset_scenario()

        for character in self.characters.characters(include_absent=True):
            character.absent = False

    def scenario_data(self, edition: str | None = None) -> list[ScenarioData]:
        """Scenarios the party may select."""
        return self.graph.scenario_data(self.game.party, edition)

    def is_blocked(self, scenario_data: ScenarioData) -> bool:
        """Check if the party's history blocks a scenario."""
        return self.graph.is_blocked(self.game.party, scenario_data)

    def available_sections(self) -> list[ScenarioData]:
        """Sections that can be attached to the running scenario."""
        scenario = self.game.scenario
        if not scenario:
            return []

        attached = self.game.sections
        available = []
        for section in self.graph.section_data(scenario.edition):
            if any(active.edition == section.edition and active.index == section.index for active in attached):
                continue
            direct = section.parent == scenario.index and not section.parent_sections
            via_section = any(
                active.edition == section.edition and active.index in section.parent_sections
                for active in attached
            )
            if direct or via_section:
                available.append(section)
        return available

    def get_scenario_for_rule(self, identifier: RuleIdentifier) -> Scenario | None:
        """Scenario or section owning a rule."""
        return self.rules.get_scenario_for_rule(identifier)

    def scenario_undo_args(self, scenario: Scenario | None = None) -> list[str]:
        """Arguments describing a scenario in an undo log entry."""
        scenario = scenario or self.game.scenario
        if not scenario:
            return ["", "", ""]
        source = "scenario.custom" if scenario.custom else f"data.edition.{scenario.edition}"
        return [scenario.index, f"data.scenario.{scenario.name}", source]

    def to_model(
        self,
        scenario_data: ScenarioData,
        revealed_rooms: list[int],
        custom: bool = False,
        custom_name: str = "",
    ) -> GameScenarioModel:
        """Persisted reference to a scenario."""
        return GameScenarioModel(
            index=scenario_data.index,
            edition=scenario_data.edition,
            group=scenario_data.group,
            is_custom=custom,
            custom=custom_name,
            revealed_rooms=list(revealed_rooms),
        )

    def scenario_data_for_model(self, model: GameScenarioModel) -> ScenarioData | None:
        """Content for a persisted scenario reference (a copy)."""
        if model.is_custom:
            return ScenarioData(index=model.index, name=model.custom, edition=model.edition)

        scenario_data = self.catalog.find_scenario(model.edition, model.group, model.index)
        if scenario_data is None:
            logger.warning(f"Invalid scenario data: {model.to_dict()}")
            return None
        return copy.deepcopy(scenario_data)

    def section_data_for_model(self, model: GameScenarioModel) -> ScenarioData | None:
        """Content for a persisted section reference (a copy)."""
        section_data = self.catalog.find_section(model.edition, model.group, model.index)
        if section_data is None:
            logger.warning(f"Invalid section data: {model.to_dict()}")
            return None
        return copy.deepcopy(section_data)

    def restore(self, data: dict[str, Any]) -> None:
        """Restore session state from a snapshot made by Game.to_dict().

        Content is not re-applied; figures are restored by their owner.
        """
        game = self.game
        game.round = int(data.get("round", 0))
        game.state = GameState(data.get("state", GameState.DRAW.value))
        game.round_resets = [int(r) for r in data.get("roundResets", [])]
        game.party = Party.from_dict(data.get("party", {}))

        game.scenario = None
        if data.get("scenario"):
            model = GameScenarioModel.from_dict(data["scenario"])
            scenario_data = self.scenario_data_for_model(model)
            if scenario_data:
                game.scenario = Scenario(scenario_data, list(model.revealed_rooms), model.is_custom, model.custom)

        game.sections = []
        for raw in data.get("sections", []):
            model = GameScenarioModel.from_dict(raw)
            section_data = self.section_data_for_model(model)
            if section_data:
                game.sections.append(Scenario(section_data, list(model.revealed_rooms)))

        game.discarded_scenario_rules = [RuleIdentifier.from_dict(r) for r in data.get("discardedScenarioRules", [])]
        game.scenario_rules = []
        for raw in data.get("scenarioRules", []):
            identifier = RuleIdentifier.from_dict(raw["identifier"])
            owner = self.rules.get_scenario_for_rule(identifier)
            if owner is None:
                logger.warning(f"Dropping rule of unknown scenario: {identifier}")
                continue
            game.scenario_rules.append(ActiveRule(identifier=identifier, rule=owner.rules[identifier.index]))

    def _spawn_flat(self, edition: str, scenario_data: ScenarioData) -> None:
        for name in scenario_data.monsters:
            monster = self.monsters.add_monster_by_name(name, edition)
            if monster and name in scenario_data.allies:
                monster.is_ally = True
            if monster and name in scenario_data.draw_extra:
                monster.draw_extra = True

        for objective_data in scenario_data.objectives:
            for _ in range(self._objective_count(objective_data.count)):
                self.characters.add_objective(objective_data)

    def _objective_count(self, count: int | str | None) -> int:
        if count is None or count == "":
            return 1
        if isinstance(count, int):
            return count
        try:
            value = evaluate(count, {"C": self.characters.character_count(), "L": self.levels.level})
        except ExpressionError:
            return 1
        return int(value) if isinstance(value, (int, float)) and not isinstance(value, bool) else 1

    def _apply_solo(self, scenario_data: ScenarioData) -> None:
        solo_present = False
        for character in self.characters.characters(include_absent=True):
            if character.name == scenario_data.solo and character.edition == scenario_data.edition:
                solo_present = True
            else:
                character.absent = True

        if solo_present:
            return

        try:
            character_data = self.catalog.get_character(scenario_data.solo, scenario_data.edition)
        except MissingContentError:
            logger.error(f"Solo Scenario Character not found: '{scenario_data.solo}' ({scenario_data.name})")
            return
        self.characters.add_character(character_data, 1)
