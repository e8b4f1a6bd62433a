"""Configuration management for Scenario Keeper."""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field


class GameConfig(BaseModel):
    """Content and reveal settings."""

    editions: list[str] = Field(default_factory=lambda: ["gh"])
    scenario_rooms: bool = True
    disable_standees: bool = False
    campaign_mode_default: bool = True

    @property
    def room_reveal(self) -> bool:
        """Whether room-based (standee) reveal is in effect."""
        return self.scenario_rooms and not self.disable_standees


class LevelConfig(BaseModel):
    """Scenario level settings used for rewards."""

    level: int = Field(default=1, ge=0, le=7)
    experience_base: int = 4
    experience_per_level: int = 2
    loot_values: list[int] = Field(default_factory=lambda: [2, 2, 3, 3, 4, 4, 5, 6])


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class PathsConfig(BaseModel):
    """File paths configuration."""

    content: Path = Path("./data/content")


class AppConfig(BaseModel):
    """Main application configuration."""

    game: GameConfig = Field(default_factory=GameConfig)
    levels: LevelConfig = Field(default_factory=LevelConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)


def load_config(config_path: Path | str | None = None) -> AppConfig:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config file. Defaults to ./config.yaml

    Returns:
        AppConfig instance with loaded or default values
    """
    if config_path is None:
        config_path = Path("config.yaml")
    else:
        config_path = Path(config_path)

    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return AppConfig(**data)

    return AppConfig()


def save_config(config: AppConfig, config_path: Path | str | None = None) -> None:
    """Save configuration to YAML file.

    Args:
        config: AppConfig instance to save
        config_path: Path to save to. Defaults to ./config.yaml
    """
    if config_path is None:
        config_path = Path("config.yaml")
    else:
        config_path = Path(config_path)

    data = config.model_dump()
    # Path objects are not YAML-safe
    data["paths"] = {k: str(v) for k, v in data["paths"].items()}

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


# Global config instance
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(config_path: Path | str | None = None) -> AppConfig:
    """Reload configuration from disk.

    Args:
        config_path: Path to config file

    Returns:
        Newly loaded AppConfig instance
    """
    global _config
    _config = load_config(config_path)
    return _config
