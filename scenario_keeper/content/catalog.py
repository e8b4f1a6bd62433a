"""Content catalog: read-only lookup of edition content."""

import json
import logging
from pathlib import Path
from typing import Any, Iterable

import yaml

from .models import CharacterData, EditionData, MonsterData, ScenarioData

logger = logging.getLogger(__name__)


class MissingContentError(LookupError):
    """A requested scenario, section, monster or character is not in the catalog."""


class ContentCatalog:
    """Holds the content of every loaded edition for the process lifetime."""

    def __init__(self, editions: Iterable[EditionData] = ()):
        self._editions: dict[str, EditionData] = {}
        for edition_data in editions:
            self.add_edition(edition_data)

    def add_edition(self, edition_data: EditionData) -> None:
        """Register an edition, replacing one with the same name."""
        self._editions[edition_data.edition] = edition_data

    @property
    def editions(self) -> list[str]:
        """Names of all loaded editions."""
        return list(self._editions)

    def edition_data(self, edition: str) -> EditionData | None:
        """Get the content of one edition."""
        return self._editions.get(edition)

    def edition_extensions(self, edition: str) -> list[str]:
        """Editions the given edition extends, transitively."""
        result: list[str] = []
        pending = list(self._editions[edition].extensions) if edition in self._editions else []
        while pending:
            name = pending.pop(0)
            if name in result or name == edition:
                continue
            result.append(name)
            if name in self._editions:
                pending.extend(self._editions[name].extensions)
        return result

    def scenarios(self, editions: Iterable[str] | None = None) -> list[ScenarioData]:
        """Scenarios of the given editions (all editions if None), in catalog order."""
        return [s for e in self._select(editions) for s in e.scenarios]

    def sections(self, editions: Iterable[str] | None = None) -> list[ScenarioData]:
        """Sections of the given editions (all editions if None), in catalog order."""
        return [s for e in self._select(editions) for s in e.sections]

    def characters(self, editions: Iterable[str] | None = None) -> list[CharacterData]:
        """Characters of the given editions."""
        return [c for e in self._select(editions) for c in e.characters]

    def find_scenario(self, edition: str, group: str | None, index: str) -> ScenarioData | None:
        """Look up a scenario by identity."""
        return next((s for s in self.scenarios([edition]) if s.matches(edition, group, index)), None)

    def find_section(self, edition: str, group: str | None, index: str) -> ScenarioData | None:
        """Look up a section by identity."""
        return next((s for s in self.sections([edition]) if s.matches(edition, group, index)), None)

    def get_scenario(self, edition: str, group: str | None, index: str) -> ScenarioData:
        """Look up a scenario by identity.

        Raises:
            MissingContentError: If no such scenario exists
        """
        scenario = self.find_scenario(edition, group, index)
        if scenario is None:
            raise MissingContentError(f"Scenario not found: {edition}/{group or '-'}/{index}")
        return scenario

    def get_section(self, edition: str, group: str | None, index: str) -> ScenarioData:
        """Look up a section by identity.

        Raises:
            MissingContentError: If no such section exists
        """
        section = self.find_section(edition, group, index)
        if section is None:
            raise MissingContentError(f"Section not found: {edition}/{group or '-'}/{index}")
        return section

    def get_character(self, name: str, edition: str) -> CharacterData:
        """Look up a character by name and edition.

        Raises:
            MissingContentError: If no such character exists
        """
        for character in self.characters([edition]):
            if character.name == name:
                return character
        raise MissingContentError(f"Character not found: '{name}' ({edition})")

    def get_monster(self, name: str, edition: str) -> MonsterData:
        """Look up a monster by name, falling back to the edition's extensions.

        Raises:
            MissingContentError: If no such monster exists
        """
        for candidate in [edition, *self.edition_extensions(edition)]:
            edition_data = self._editions.get(candidate)
            if edition_data is None:
                continue
            for monster in edition_data.monsters:
                if monster.name == name:
                    return monster
        raise MissingContentError(f"Monster not found: '{name}' ({edition})")

    def _select(self, editions: Iterable[str] | None) -> list[EditionData]:
        if editions is None:
            return list(self._editions.values())
        wanted = set(editions)
        return [e for name, e in self._editions.items() if name in wanted]

    @classmethod
    def load_directory(cls, path: Path | str) -> "ContentCatalog":
        """Load every edition file (YAML or JSON) in a directory.

        Unreadable files are logged and skipped.
        """
        catalog = cls()
        directory = Path(path)
        if not directory.is_dir():
            logger.warning(f"Content directory not found: {directory}")
            return catalog

        for file_path in sorted(directory.iterdir()):
            if file_path.suffix.lower() not in (".yaml", ".yml", ".json"):
                continue
            try:
                raw = _read_file(file_path)
                edition_data = EditionData.from_dict(raw)
            except (OSError, ValueError, yaml.YAMLError) as e:
                logger.error(f"Failed to load content file {file_path.name}: {e}")
                continue
            catalog.add_edition(edition_data)
            logger.info(
                f"Loaded edition '{edition_data.edition}': {len(edition_data.scenarios)} scenarios, "
                f"{len(edition_data.sections)} sections"
            )
        return catalog


def _read_file(file_path: Path) -> dict[str, Any]:
    text = file_path.read_text(encoding="utf-8")
    if file_path.suffix.lower() == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text)
    if not isinstance(data, dict):
        raise ValueError("edition file must contain a mapping")
    return data
