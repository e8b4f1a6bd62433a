"""Read-only content records for scenarios, sections, monsters and characters.

Records are built from the content catalog's edition files. Keys follow the
content file format (camelCase), e.g. ``roomNumber`` or ``disableRules``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class MonsterType(Enum):
    """Standee statistics tier."""

    NORMAL = "normal"
    ELITE = "elite"
    BOSS = "boss"


def _monster_type(value: Any) -> MonsterType | None:
    if not value:
        return None
    try:
        return MonsterType(str(value).lower())
    except ValueError:
        return None


def _require(data: dict[str, Any], key: str, kind: str) -> Any:
    if key not in data or data[key] in (None, ""):
        raise ValueError(f"{kind} is missing '{key}'")
    return data[key]


@dataclass(frozen=True)
class RuleIdentifier:
    """Names one rule declaration within one scenario or section."""

    edition: str
    group: str | None
    scenario: str
    index: int
    section: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "edition": self.edition,
            "group": self.group,
            "scenario": self.scenario,
            "index": self.index,
            "section": self.section,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuleIdentifier":
        """Create from dictionary."""
        return cls(
            edition=_require(data, "edition", "Rule identifier"),
            group=data.get("group") or None,
            scenario=str(_require(data, "scenario", "Rule identifier")),
            index=int(data.get("index", 0)),
            section=bool(data.get("section", False)),
        )


@dataclass(frozen=True)
class MonsterStandeeData:
    """A monster standee placed in a room or spawned by a rule."""

    name: str
    type: MonsterType | None = None
    player2: MonsterType | None = None
    player3: MonsterType | None = None
    player4: MonsterType | None = None
    marker: str = ""

    def tier_for(self, character_count: int) -> MonsterType | None:
        """Resolve the standee tier for the given number of characters."""
        if self.type:
            return self.type
        if character_count < 3:
            return self.player2
        if character_count == 3:
            return self.player3
        return self.player4

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MonsterStandeeData":
        """Create from dictionary."""
        return cls(
            name=_require(data, "name", "Monster standee"),
            type=_monster_type(data.get("type")),
            player2=_monster_type(data.get("player2")),
            player3=_monster_type(data.get("player3")),
            player4=_monster_type(data.get("player4")),
            marker=data.get("marker", ""),
        )


@dataclass(frozen=True)
class ObjectiveData:
    """An objective figure declared by a scenario."""

    name: str
    health: str = "1"
    escort: bool = False
    count: int | str | None = None
    id: int = 0
    marker: str = ""
    tags: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ObjectiveData":
        """Create from dictionary."""
        return cls(
            name=data.get("name", ""),
            health=str(data.get("health", "1")),
            escort=bool(data.get("escort", False)),
            count=data.get("count"),
            id=int(data.get("id", 0)),
            marker=data.get("marker", ""),
            tags=tuple(data.get("tags", [])),
        )


@dataclass(frozen=True)
class RoomData:
    """A room of a scenario map and what it reveals."""

    room_number: int
    ref: str = ""
    initial: bool = False
    rooms: tuple[int, ...] = ()  # neighbours
    marker: str = ""
    monster: tuple[MonsterStandeeData, ...] = ()
    objectives: tuple[int, ...] = ()  # 1-based into ScenarioData.objectives

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RoomData":
        """Create from dictionary."""
        return cls(
            room_number=int(_require(data, "roomNumber", "Room")),
            ref=str(data.get("ref", "")),
            initial=bool(data.get("initial", False)),
            rooms=tuple(int(r) for r in data.get("rooms", [])),
            marker=data.get("marker", ""),
            monster=tuple(MonsterStandeeData.from_dict(m) for m in data.get("monster", [])),
            objectives=tuple(int(o) for o in data.get("objectives", [])),
        )


@dataclass
class FigureRule:
    """Figure-presence predicate of a scenario rule."""

    type: str  # present, dead, ...
    identifier: str
    value: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FigureRule":
        """Create from dictionary."""
        return cls(
            type=data.get("type", ""),
            identifier=data.get("identifier", ""),
            value=str(data.get("value", "")),
        )


@dataclass
class SpawnData:
    """A monster spawn triggered by a scenario rule."""

    monster: MonsterStandeeData
    count: str | None = None
    manual: bool = False
    marker: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SpawnData":
        """Create from dictionary."""
        count = data.get("count")
        return cls(
            monster=MonsterStandeeData.from_dict(_require(data, "monster", "Spawn")),
            count=str(count) if count not in (None, "") else None,
            manual=bool(data.get("manual", False)),
            marker=data.get("marker", ""),
        )


@dataclass
class ScenarioRule:
    """A conditional rule embedded in a scenario or section.

    Mutable: the lifecycle works on per-instance copies, never on the
    catalog's record.
    """

    round: str = "false"
    start: bool = False
    note: str = ""
    figures: list[FigureRule] = field(default_factory=list)
    required_rooms: list[int] = field(default_factory=list)
    spawns: list[SpawnData] = field(default_factory=list)
    disable_rules: list[RuleIdentifier] = field(default_factory=list)

    @property
    def once(self) -> bool:
        """Whether the rule must never fire again after it was consumed."""
        return self.round.strip() == "once"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScenarioRule":
        """Create from dictionary."""
        return cls(
            round=str(data.get("round") or "false"),
            start=bool(data.get("start", False)),
            note=data.get("note", ""),
            figures=[FigureRule.from_dict(f) for f in data.get("figures", [])],
            required_rooms=[int(r) for r in data.get("requiredRooms", [])],
            spawns=[SpawnData.from_dict(s) for s in data.get("spawns", [])],
            disable_rules=[RuleIdentifier.from_dict(d) for d in data.get("disableRules", [])],
        )


@dataclass(frozen=True)
class ScenarioData:
    """A scenario or section as defined by the content catalog."""

    index: str
    name: str
    edition: str
    group: str | None = None
    monsters: tuple[str, ...] = ()
    allies: tuple[str, ...] = ()
    draw_extra: tuple[str, ...] = ()
    objectives: tuple[ObjectiveData, ...] = ()
    rooms: tuple[RoomData, ...] = ()
    rules: tuple[ScenarioRule, ...] = ()
    solo: str = ""
    loot_deck_config: dict[str, int] = field(default_factory=dict)
    reset_round: bool = False
    initial: bool = False
    unlocks: tuple[str, ...] = ()
    blocks: tuple[str, ...] = ()
    requires: tuple[tuple[str, ...], ...] = ()
    parent: str = ""
    parent_sections: tuple[str, ...] = ()

    @property
    def identity(self) -> tuple[str, str | None, str]:
        """Identity tuple (edition, group, index)."""
        return (self.edition, self.group, self.index)

    def matches(self, edition: str, group: str | None, index: str) -> bool:
        """Check identity against the given fields."""
        return self.identity == (edition, group or None, index)

    @classmethod
    def from_dict(cls, data: dict[str, Any], edition: str | None = None) -> "ScenarioData":
        """Create from dictionary.

        Args:
            data: Raw scenario or section record
            edition: Edition to assume when the record omits it
        """
        edition = data.get("edition") or edition
        if not edition:
            raise ValueError("Scenario is missing 'edition'")
        return cls(
            index=str(_require(data, "index", "Scenario")),
            name=data.get("name", ""),
            edition=edition,
            group=data.get("group") or None,
            monsters=tuple(data.get("monsters", [])),
            allies=tuple(data.get("allies", [])),
            draw_extra=tuple(data.get("drawExtra", [])),
            objectives=tuple(ObjectiveData.from_dict(o) for o in data.get("objectives", [])),
            rooms=tuple(RoomData.from_dict(r) for r in data.get("rooms", [])),
            rules=tuple(ScenarioRule.from_dict(r) for r in data.get("rules", [])),
            solo=data.get("solo", ""),
            loot_deck_config={k: int(v) for k, v in (data.get("lootDeckConfig") or {}).items()},
            reset_round=bool(data.get("resetRound", False)),
            initial=bool(data.get("initial", False)),
            unlocks=tuple(str(i) for i in data.get("unlocks", [])),
            blocks=tuple(str(i) for i in data.get("blocks", [])),
            requires=tuple(tuple(str(i) for i in req) for req in data.get("requires", [])),
            parent=str(data.get("parent", "")),
            parent_sections=tuple(str(i) for i in data.get("parentSections", [])),
        )


@dataclass(frozen=True)
class MonsterData:
    """A monster type available to spawn."""

    name: str
    edition: str
    count: int = 10  # standees in the box
    boss: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any], edition: str | None = None) -> "MonsterData":
        """Create from dictionary."""
        return cls(
            name=_require(data, "name", "Monster"),
            edition=data.get("edition") or edition or "",
            count=int(data.get("count", 10)),
            boss=bool(data.get("boss", False)),
        )


@dataclass(frozen=True)
class CharacterData:
    """A playable character class."""

    name: str
    edition: str
    health: tuple[int, ...] = ()  # max health per level, level 1 first

    def max_health(self, level: int) -> int:
        """Max health at the given level."""
        if not self.health:
            return 1
        return self.health[max(0, min(level, len(self.health)) - 1)]

    @classmethod
    def from_dict(cls, data: dict[str, Any], edition: str | None = None) -> "CharacterData":
        """Create from dictionary."""
        return cls(
            name=_require(data, "name", "Character"),
            edition=data.get("edition") or edition or "",
            health=tuple(int(h) for h in data.get("health", [])),
        )


@dataclass(frozen=True)
class EditionData:
    """All content of one edition."""

    edition: str
    extensions: tuple[str, ...] = ()
    scenarios: tuple[ScenarioData, ...] = ()
    sections: tuple[ScenarioData, ...] = ()
    monsters: tuple[MonsterData, ...] = ()
    characters: tuple[CharacterData, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EditionData":
        """Create from dictionary."""
        edition = _require(data, "edition", "Edition")
        return cls(
            edition=edition,
            extensions=tuple(data.get("extensions", [])),
            scenarios=tuple(ScenarioData.from_dict(s, edition) for s in data.get("scenarios", [])),
            sections=tuple(ScenarioData.from_dict(s, edition) for s in data.get("sections", [])),
            monsters=tuple(MonsterData.from_dict(m, edition) for m in data.get("monsters", [])),
            characters=tuple(CharacterData.from_dict(c, edition) for c in data.get("characters", [])),
        )
