"""Game session state: the active scenario, attached sections and rule sets."""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..campaign.party import GameScenarioModel, Party
from ..content.models import RoomData, RuleIdentifier, ScenarioData, ScenarioRule
from .figures import Figure


class GameState(Enum):
    """Phase of the current round."""

    DRAW = "draw"  # round boundary, cards being drawn
    NEXT = "next"  # turns in progress


@dataclass
class Scenario:
    """Runtime projection of a scenario or an attached section.

    Holds its own copy of the content record, so rules can be mutated
    without touching the catalog.
    """

    data: ScenarioData
    revealed_rooms: list[int] = field(default_factory=list)
    custom: bool = False
    custom_name: str = ""

    def __post_init__(self) -> None:
        self.data = copy.deepcopy(self.data)
        self.rules: list[ScenarioRule] = list(self.data.rules)

    @property
    def index(self) -> str:
        return self.data.index

    @property
    def edition(self) -> str:
        return self.data.edition

    @property
    def group(self) -> str | None:
        return self.data.group

    @property
    def name(self) -> str:
        return self.custom_name if self.custom else self.data.name

    @property
    def rooms(self) -> tuple[RoomData, ...]:
        return self.data.rooms

    @property
    def identity(self) -> tuple[str, str | None, str]:
        return self.data.identity

    def matches(self, edition: str, group: str | None, index: str) -> bool:
        """Check identity against the given fields."""
        return self.data.matches(edition, group, index)

    def to_model(self) -> GameScenarioModel:
        """Persisted reference to this scenario."""
        return GameScenarioModel(
            index=self.index,
            edition=self.edition,
            group=self.group,
            is_custom=self.custom,
            custom=self.custom_name if self.custom else "",
            revealed_rooms=list(self.revealed_rooms),
        )


@dataclass
class ActiveRule:
    """A rule declaration currently in force."""

    identifier: RuleIdentifier
    rule: ScenarioRule

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (the rule itself is restored from content)."""
        return {"identifier": self.identifier.to_dict()}


@dataclass
class LootDeck:
    """The loot deck of the current scenario."""

    cards: list[str] = field(default_factory=list)
    drawn: int = 0


@dataclass
class Game:
    """The in-progress game session aggregate."""

    figures: list[Figure] = field(default_factory=list)
    round: int = 0
    state: GameState = GameState.DRAW
    scenario: Scenario | None = None
    sections: list[Scenario] = field(default_factory=list)
    scenario_rules: list[ActiveRule] = field(default_factory=list)
    discarded_scenario_rules: list[RuleIdentifier] = field(default_factory=list)
    round_resets: list[int] = field(default_factory=list)
    party: Party = field(default_factory=Party)
    loot_deck: LootDeck = field(default_factory=LootDeck)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for an external snapshot."""
        return {
            "round": self.round,
            "state": self.state.value,
            "scenario": self.scenario.to_model().to_dict() if self.scenario else None,
            "sections": [s.to_model().to_dict() for s in self.sections],
            "scenarioRules": [r.to_dict() for r in self.scenario_rules],
            "discardedScenarioRules": [i.to_dict() for i in self.discarded_scenario_rules],
            "roundResets": list(self.round_resets),
            "party": self.party.to_dict(),
        }
