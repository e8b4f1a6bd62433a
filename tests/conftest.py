"""Shared fixtures: a small two-edition catalog and a game manager."""

import random

import pytest

from scenario_keeper.config import AppConfig, GameConfig
from scenario_keeper.content.catalog import ContentCatalog
from scenario_keeper.content.models import EditionData
from scenario_keeper.manager import GameManager

BASE_EDITION = {
    "edition": "gh",
    "monsters": [
        {"name": "bandit-guard", "count": 6},
        {"name": "bandit-archer", "count": 6},
        {"name": "living-bones", "count": 10},
    ],
    "characters": [
        {"name": "brute", "health": [10, 12, 14]},
        {"name": "spellweaver", "health": [6, 7, 8]},
        {"name": "tinkerer", "health": [8, 9, 11]},
        {"name": "scoundrel", "health": [8, 9, 11]},
    ],
    "scenarios": [
        {
            "index": "1",
            "name": "Black Barrow",
            "initial": True,
            "unlocks": ["2"],
            "monsters": ["bandit-guard", "bandit-archer", "living-bones"],
            "objectives": [{"name": "Altar", "health": "5"}],
            "rooms": [
                {
                    "roomNumber": 1,
                    "ref": "L1a",
                    "initial": True,
                    "rooms": [2],
                    "monster": [
                        {"name": "bandit-guard", "player2": "normal", "player3": "normal", "player4": "elite"},
                        {"name": "bandit-archer", "player3": "normal", "player4": "normal"},
                    ],
                },
                {
                    "roomNumber": 2,
                    "ref": "G1b",
                    "rooms": [1, 3],
                    "objectives": [1, 7],
                    "monster": [
                        {"name": "living-bones", "player2": "normal", "player3": "elite", "player4": "elite"},
                        {"name": "living-bones", "player2": "normal", "player3": "elite", "player4": "elite"},
                        {"name": "living-bones", "player2": "normal", "player3": "normal", "player4": "elite"},
                    ],
                },
                {"roomNumber": 3, "ref": "I1b", "rooms": [2]},
            ],
            "rules": [
                {"round": "R>=2", "note": "Reinforcements"},
                {"round": "once", "note": "Read section 1.1"},
                {
                    "round": "always",
                    "requiredRooms": [2],
                    "spawns": [{"monster": {"name": "living-bones", "type": "normal"}, "manual": True}],
                },
                {"round": "R==1", "start": True, "note": "Round start"},
            ],
        },
        {"index": "2", "name": "Barrow Lair", "requires": [["1"]], "unlocks": ["3", "4"], "blocks": ["5"]},
        {"index": "3", "name": "Inox Encampment", "requires": [["1", "2"]]},
        {"index": "4", "name": "Crypt of the Damned", "requires": [["9"]]},
        {"index": "5", "name": "Ruinous Crypt"},
        {
            "index": "6",
            "name": "Decaying Crypt",
            "monsters": ["bandit-guard", "living-bones"],
            "allies": ["living-bones"],
            "drawExtra": ["bandit-guard"],
            "objectives": [
                {"name": "Totem", "count": 2},
                {"name": "Pillar", "count": "C"},
                {"name": "Door"},
            ],
            "lootDeckConfig": {"money": 3, "lumber": 2},
            "resetRound": True,
        },
        {"index": "9", "name": "Diamond Mine"},
        {
            "index": "s1",
            "name": "Return to the Black Barrow",
            "group": "solo",
            "solo": "brute",
            "monsters": ["bandit-guard"],
        },
        {
            "index": "s2",
            "name": "Armory Heist",
            "group": "solo",
            "solo": "tinkerer",
        },
    ],
    "sections": [
        {
            "index": "1.1",
            "name": "Hidden Passage",
            "parent": "1",
            "rules": [{"round": "always", "note": "Passage open"}],
        },
        {"index": "1.2", "name": "Deeper Passage", "parentSections": ["1.1"]},
        {"index": "2.1", "name": "Lair Entrance", "parent": "2"},
    ],
}

EXTENSION_EDITION = {
    "edition": "fc",
    "extensions": ["gh"],
    "scenarios": [{"index": "1", "name": "Unreliable Medicine", "initial": True}],
}


@pytest.fixture
def catalog() -> ContentCatalog:
    """Catalog with a base edition and an extension."""
    return ContentCatalog([EditionData.from_dict(BASE_EDITION), EditionData.from_dict(EXTENSION_EDITION)])


@pytest.fixture
def config() -> AppConfig:
    """Default config with both editions active."""
    return AppConfig(game=GameConfig(editions=["gh", "fc"]))


@pytest.fixture
def manager(catalog, config) -> GameManager:
    """Game manager with two characters in the party."""
    gm = GameManager(catalog, config, rng=random.Random(7))
    for name in ("brute", "spellweaver"):
        gm.characters.add_character(catalog.get_character(name, "gh"))
    return gm


@pytest.fixture
def add_characters(manager):
    """Add more characters from the base edition to the manager's party."""

    def _add(*names: str) -> None:
        for name in names:
            manager.characters.add_character(manager.catalog.get_character(name, "gh"))

    return _add
