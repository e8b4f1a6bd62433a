"""Round and phase bookkeeping."""

import logging

from .figures import Character
from .rules import ScenarioRuleEngine
from .state import Game, GameState

logger = logging.getLogger(__name__)


class RoundManager:
    """Advances rounds and keeps scenario rules in step with them."""

    def __init__(self, game: Game, rules: ScenarioRuleEngine):
        self.game = game
        self.rules = rules

    def reset_scenario(self) -> None:
        """Reset round state for a new (or no) scenario.

        Attached sections, monsters and objectives leave play; characters
        stay.
        """
        self.game.sections = []
        self.game.figures = [f for f in self.game.figures if isinstance(f, Character)]
        self.game.round = 0
        self.game.state = GameState.DRAW
        self.game.round_resets = []
        self.game.scenario_rules = []
        self.game.discarded_scenario_rules = []
        for figure in self.game.figures:
            figure.active = False

    def next_game_state(self) -> GameState:
        """Move between the draw phase and the turn phase.

        A new round starts when turns begin. One-shot rules that were in
        force during the phase that just ended are consumed, then all
        rules are re-evaluated.

        Returns:
            The new phase
        """
        for active in list(self.game.scenario_rules):
            if active.rule.once:
                self.rules.discard_rule(active.identifier)

        if self.game.state == GameState.DRAW:
            self.game.state = GameState.NEXT
            self.game.round += 1
        else:
            self.game.state = GameState.DRAW
            for figure in self.game.figures:
                figure.active = False

        logger.debug(f"Round {self.game.round}, phase {self.game.state.value}")
        self.rules.add_scenario_rules()
        return self.game.state
