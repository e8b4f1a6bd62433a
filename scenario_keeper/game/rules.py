"""Scenario rule activation.

Each scenario and attached section embeds a list of conditional rules. A rule
is put in force when its round expression holds for the current round and
party size, its figure and room preconditions hold, and it has neither been
applied nor discarded before.
"""

import logging
from typing import Callable

from ..content.models import RuleIdentifier, ScenarioRule
from .characters import CharacterManager
from .expressions import ExpressionError, evaluate_condition
from .state import ActiveRule, Game, GameState, Scenario

logger = logging.getLogger(__name__)

ROUND_PLACEHOLDER = "R"
CHARACTER_PLACEHOLDER = "C"
UNCONDITIONAL_ROUNDS = ("always", "once")

RuleFilter = Callable[[ScenarioRule], bool]


class ScenarioRuleEngine:
    """Maintains the rules in force for the active scenario and its sections."""

    def __init__(self, game: Game, characters: CharacterManager):
        self.game = game
        self.characters = characters

    def add_scenario_rules(self) -> None:
        """Re-evaluate every rule of the scenario and its sections from scratch."""
        self.game.scenario_rules = []
        self._scan(lambda rule: True)

    def add_scenario_rules_figures(self) -> None:
        """Re-evaluate rules that depend on figure presence."""
        self._scan(lambda rule: bool(rule.figures))

    def add_scenario_rules_rooms(self) -> None:
        """Re-evaluate rules that depend on revealed rooms."""
        self._scan(lambda rule: bool(rule.required_rooms))

    def add_section_rules(self, section: Scenario) -> None:
        """Evaluate the rules of a newly attached section."""
        for index, rule in enumerate(section.rules):
            self.add_scenario_rule(section, rule, index, True)
        self.filter_disabled_scenario_rules()

    def add_scenario_rule(self, scenario: Scenario, rule: ScenarioRule, index: int, section: bool) -> bool:
        """Evaluate one rule and put it in force if eligible.

        Args:
            scenario: Scenario or section owning the rule
            rule: The owner's runtime copy of the rule
            index: Position of the rule in the owner's rule list
            section: Whether the owner is an attached section

        Returns:
            True if the rule was added to the active rules
        """
        identifier = RuleIdentifier(
            edition=scenario.edition,
            group=scenario.group,
            scenario=scenario.index,
            index=index,
            section=section,
        )

        if not self._round_matches(rule, index):
            return False
        if not self._figures_match(rule):
            return False
        if not self._rooms_match(rule):
            return False
        if self.is_discarded(identifier) or self.is_active(identifier):
            return False

        for spawn in rule.spawns:
            if spawn.manual and not spawn.count:
                spawn.count = "1"

        self.game.scenario_rules.append(ActiveRule(identifier=identifier, rule=rule))
        logger.debug(f"Scenario rule in force: {identifier}")
        return True

    def filter_disabled_scenario_rules(self) -> None:
        """Drop active rules disabled by another active rule."""
        disabled = {
            identifier
            for active in self.game.scenario_rules
            for identifier in active.rule.disable_rules
        }
        self.game.scenario_rules = [
            active for active in self.game.scenario_rules if active.identifier not in disabled
        ]

    def discard_rule(self, identifier: RuleIdentifier) -> None:
        """Consume a rule for the rest of the scenario."""
        self.game.scenario_rules = [r for r in self.game.scenario_rules if r.identifier != identifier]
        if not self.is_discarded(identifier):
            self.game.discarded_scenario_rules.append(identifier)

    def is_active(self, identifier: RuleIdentifier) -> bool:
        return any(active.identifier == identifier for active in self.game.scenario_rules)

    def is_discarded(self, identifier: RuleIdentifier) -> bool:
        return identifier in self.game.discarded_scenario_rules

    def get_scenario_for_rule(self, identifier: RuleIdentifier) -> Scenario | None:
        """Find the scenario or section a rule identifier points into."""
        if identifier.section:
            owners = self.game.sections
        else:
            owners = [self.game.scenario] if self.game.scenario else []

        for owner in owners:
            if (
                owner.matches(identifier.edition, identifier.group, identifier.scenario)
                and 0 <= identifier.index < len(owner.rules)
            ):
                return owner
        return None

    def _scan(self, rule_filter: RuleFilter) -> None:
        scenario = self.game.scenario
        if scenario:
            for index, rule in enumerate(scenario.rules):
                if rule_filter(rule):
                    self.add_scenario_rule(scenario, rule, index, False)

        for section in self.game.sections:
            for index, rule in enumerate(section.rules):
                if rule_filter(rule):
                    self.add_scenario_rule(section, rule, index, True)

        self.filter_disabled_scenario_rules()

    def _round_matches(self, rule: ScenarioRule, index: int) -> bool:
        expression = rule.round.strip()
        if expression in UNCONDITIONAL_ROUNDS:
            return True

        values = {
            ROUND_PLACEHOLDER: self.game.round,
            CHARACTER_PLACEHOLDER: self.characters.character_count(),
        }
        try:
            matches = evaluate_condition(expression, values)
        except ExpressionError as e:
            logger.warning(f"Cannot apply scenario rule: '{rule.round}' index: {index} ({e})")
            return False

        if not matches:
            return False
        if rule.start:
            return self.game.state == GameState.DRAW
        return self.game.state == GameState.NEXT

    def _figures_match(self, rule: ScenarioRule) -> bool:
        for figure_rule in rule.figures:
            if figure_rule.type not in ("present", "dead"):
                continue
            figures = self.characters.figures_by_string(figure_rule.identifier)
            if figure_rule.type == "present":
                holds = bool(figures) and all(self.characters.gameplay_figure(f) for f in figures)
            else:
                holds = not any(self.characters.gameplay_figure(f) for f in figures)
            if not holds:
                return False
        return True

    def _rooms_match(self, rule: ScenarioRule) -> bool:
        if not rule.required_rooms:
            return True
        scenario = self.game.scenario
        if scenario is None:
            return False
        return all(room in scenario.revealed_rooms for room in rule.required_rooms)
