"""Party campaign progress: completed and manually unlocked scenarios."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class GameScenarioModel:
    """Persisted reference to a scenario."""

    index: str
    edition: str
    group: str | None = None
    is_custom: bool = False
    custom: str = ""  # name of a custom scenario
    revealed_rooms: list[int] = field(default_factory=list)

    def matches(self, edition: str, group: str | None, index: str) -> bool:
        """Check identity against the given fields."""
        return (self.edition, self.group or None, self.index) == (edition, group or None, index)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "index": self.index,
            "edition": self.edition,
            "group": self.group,
            "isCustom": self.is_custom,
            "custom": self.custom,
            "revealedRooms": list(self.revealed_rooms),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameScenarioModel":
        """Create from dictionary."""
        return cls(
            index=str(data.get("index", "")),
            edition=data.get("edition", ""),
            group=data.get("group") or None,
            is_custom=bool(data.get("isCustom", False)),
            custom=data.get("custom", ""),
            revealed_rooms=[int(r) for r in data.get("revealedRooms", [])],
        )


@dataclass
class Party:
    """A campaign party and its unlock state."""

    name: str = ""
    campaign_mode: bool = False
    scenarios: list[GameScenarioModel] = field(default_factory=list)  # completed
    manual_scenarios: list[GameScenarioModel] = field(default_factory=list)

    def has_completed(self, edition: str, group: str | None, index: str) -> bool:
        """Check if a scenario is in the completed history."""
        return any(model.matches(edition, group, index) for model in self.scenarios)

    def is_manually_unlocked(self, edition: str, group: str | None, index: str) -> bool:
        """Check if a scenario was unlocked by hand."""
        return any(model.matches(edition, group, index) for model in self.manual_scenarios)

    def unlock_manually(self, edition: str, group: str | None, index: str) -> None:
        """Grant a scenario regardless of its requirements."""
        if not self.is_manually_unlocked(edition, group, index):
            self.manual_scenarios.append(GameScenarioModel(index=index, edition=edition, group=group))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "campaignMode": self.campaign_mode,
            "scenarios": [s.to_dict() for s in self.scenarios],
            "manualScenarios": [s.to_dict() for s in self.manual_scenarios],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Party":
        """Create from dictionary."""
        return cls(
            name=data.get("name", ""),
            campaign_mode=bool(data.get("campaignMode", False)),
            scenarios=[GameScenarioModel.from_dict(s) for s in data.get("scenarios", [])],
            manual_scenarios=[GameScenarioModel.from_dict(s) for s in data.get("manualScenarios", [])],
        )
