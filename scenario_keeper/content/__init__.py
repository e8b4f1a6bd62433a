"""Content catalog and read-only content records."""

from .catalog import ContentCatalog, MissingContentError
from .models import (
    CharacterData,
    EditionData,
    MonsterData,
    MonsterType,
    RoomData,
    RuleIdentifier,
    ScenarioData,
    ScenarioRule,
)

__all__ = [
    "ContentCatalog", "MissingContentError",
    "CharacterData", "EditionData", "MonsterData", "MonsterType",
    "RoomData", "RuleIdentifier", "ScenarioData", "ScenarioRule",
]
