"""Figures on the initiative track: characters, monsters and objectives."""

from dataclasses import dataclass, field
from typing import Any

from ..content.models import MonsterType


@dataclass
class CharacterProgress:
    """Campaign progress that outlives a scenario."""

    experience: int = 0
    gold: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"experience": self.experience, "gold": self.gold}


@dataclass
class Character:
    """A player character."""

    name: str
    edition: str
    level: int = 1
    health: int = 1
    max_health: int = 1

    # Scenario-scoped counters
    experience: int = 0
    loot: int = 0

    absent: bool = False
    exhausted: bool = False
    active: bool = False
    off: bool = False

    progress: CharacterProgress = field(default_factory=CharacterProgress)

    @property
    def is_gameplay_figure(self) -> bool:
        """Check if the character takes part in play right now."""
        return not self.absent and not self.exhausted and self.health > 0


@dataclass
class MonsterEntity:
    """A single monster standee."""

    number: int
    type: MonsterType
    health: int = 1
    max_health: int = 1
    dead: bool = False
    active: bool = False
    marker: str = ""
    summon: bool = False

    @property
    def is_alive(self) -> bool:
        """Check if the standee is still on the board."""
        return not self.dead and self.health > 0


@dataclass
class Monster:
    """A monster type in play, owning its standees."""

    name: str
    edition: str
    entities: list[MonsterEntity] = field(default_factory=list)
    active: bool = False
    off: bool = False
    is_ally: bool = False
    draw_extra: bool = False

    @property
    def is_gameplay_figure(self) -> bool:
        """Check if any standee is still on the board."""
        return any(entity.is_alive for entity in self.entities)


@dataclass
class ObjectiveContainer:
    """An objective figure (escort or target)."""

    name: str
    objective_id: int = 0
    escort: bool = False
    health: int = 1
    max_health: int = 1
    marker: str = ""
    dead: bool = False
    active: bool = False
    off: bool = False

    @property
    def edition(self) -> str:
        return "objective"

    @property
    def is_gameplay_figure(self) -> bool:
        """Check if the objective is still standing."""
        return not self.dead and self.health > 0


Figure = Character | Monster | ObjectiveContainer
