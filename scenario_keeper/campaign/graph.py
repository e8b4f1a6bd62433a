"""Scenario availability for a party.

Outside of campaign mode every scenario of an edition can be played. In
campaign mode a scenario becomes available once a completed scenario of the
same group unlocks it and one of its requirement sets is met.
"""

from ..config import GameConfig
from ..content.catalog import ContentCatalog
from ..content.models import ScenarioData
from .party import Party


class ScenarioGraph:
    """Computes which scenarios and sections a party may select."""

    def __init__(self, catalog: ContentCatalog, settings: GameConfig):
        self.catalog = catalog
        self.settings = settings

    def all_scenarios(self) -> list[ScenarioData]:
        """Scenarios of all active editions."""
        return self.catalog.scenarios(self.settings.editions)

    def section_data(self, edition: str | None = None) -> list[ScenarioData]:
        """Sections of the active editions, optionally of one edition only."""
        sections = self.catalog.sections(self.settings.editions)
        if edition is None:
            return sections
        return [section for section in sections if section.edition == edition]

    def scenario_data(self, party: Party, edition: str | None = None) -> list[ScenarioData]:
        """Scenarios the party may select.

        Args:
            party: Party whose unlock state applies
            edition: Restrict to one edition; None returns every active scenario

        Returns:
            Available scenarios in catalog order
        """
        scenarios = self.all_scenarios()
        if edition is None:
            return scenarios

        if not party.campaign_mode or not any(s.initial for s in scenarios):
            return [s for s in scenarios if s.edition == edition]

        return [s for s in scenarios if s.edition == edition and self.is_available(party, s, scenarios)]

    def is_available(self, party: Party, scenario: ScenarioData, scenarios: list[ScenarioData] | None = None) -> bool:
        """Check campaign availability of one scenario."""
        if scenario.initial:
            return True
        if party.has_completed(*scenario.identity):
            return True
        if party.is_manually_unlocked(*scenario.identity):
            return True
        return self.is_unlocked(party, scenario, scenarios) and self.requirements_met(party, scenario)

    def is_unlocked(self, party: Party, scenario: ScenarioData, scenarios: list[ScenarioData] | None = None) -> bool:
        """Check if a completed scenario of the same group unlocks this one."""
        scenarios = scenarios if scenarios is not None else self.all_scenarios()
        for completed in self._completed(party, scenarios):
            if (
                completed.edition == scenario.edition
                and completed.group == scenario.group
                and scenario.index in completed.unlocks
            ):
                return True
        return False

    @staticmethod
    def requirements_met(party: Party, scenario: ScenarioData) -> bool:
        """Check that at least one requirement set is fully completed."""
        if not scenario.requires:
            return True
        return any(
            all(party.has_completed(scenario.edition, scenario.group, index) for index in requirement)
            for requirement in scenario.requires
        )

    def is_blocked(self, party: Party, scenario: ScenarioData) -> bool:
        """Check if a completed scenario of the same edition blocks this one."""
        edition_data = self.catalog.edition_data(scenario.edition)
        if edition_data is None:
            return False
        return any(scenario.index in completed.blocks for completed in self._completed(party, edition_data.scenarios))

    @staticmethod
    def _completed(party: Party, scenarios) -> list[ScenarioData]:
        return [s for s in scenarios if party.has_completed(*s.identity)]
