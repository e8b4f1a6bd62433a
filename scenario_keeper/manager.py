"""Game manager: wires the collaborators of one game session together."""

import random

from .campaign.graph import ScenarioGraph
from .campaign.party import Party
from .campaign.scenarios import ScenarioManager
from .config import AppConfig, get_config
from .content.catalog import ContentCatalog
from .game.characters import CharacterManager, LevelManager
from .game.loot import LootManager
from .game.monsters import MonsterManager
from .game.rooms import RoomManager
from .game.rounds import RoundManager
from .game.rules import ScenarioRuleEngine
from .game.state import Game


class GameManager:
    """Owns one game session and the managers operating on it."""

    def __init__(
        self,
        catalog: ContentCatalog,
        config: AppConfig | None = None,
        game: Game | None = None,
        rng: random.Random | None = None,
    ):
        self.catalog = catalog
        self.config = config or get_config()
        if game is None:
            game = Game(party=Party(campaign_mode=self.config.game.campaign_mode_default))
        self.game = game

        self.levels = LevelManager(self.config)
        self.characters = CharacterManager(self.game, self.levels)
        self.monsters = MonsterManager(self.game, catalog)
        self.loot = LootManager(rng)
        self.rules = ScenarioRuleEngine(self.game, self.characters)
        self.rounds = RoundManager(self.game, self.rules)
        self.rooms = RoomManager(self.game, catalog, self.characters, self.monsters, self.rules)
        self.graph = ScenarioGraph(catalog, self.config.game)
        self.scenarios = ScenarioManager(
            game=self.game,
            catalog=catalog,
            config=self.config,
            graph=self.graph,
            characters=self.characters,
            levels=self.levels,
            monsters=self.monsters,
            rooms=self.rooms,
            rules=self.rules,
            rounds=self.rounds,
            loot=self.loot,
        )

    @classmethod
    def from_config(cls, config: AppConfig | None = None, rng: random.Random | None = None) -> "GameManager":
        """Create a session with content loaded from the configured content directory."""
        config = config or get_config()
        catalog = ContentCatalog.load_directory(config.paths.content)
        return cls(catalog, config, rng=rng)

    def figures_changed(self) -> None:
        """Re-evaluate figure-dependent rules after figure state changed."""
        self.rules.add_scenario_rules_figures()
