"""Configuration management for Soundshelf."""

from typing import Optional, Dict, Any
from pathlib import Path
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
import yaml
import logging

from soundshelf.providers.deezer import DEEZER_API_BASE
from soundshelf.providers.rapidapi import RAPIDAPI_BASE, RAPIDAPI_HOST

logger = logging.getLogger(__name__)


class StorageConfig(BaseModel):
    """Local library storage configuration."""

    db_path: str = "soundshelf.db"


class MetadataServiceConfig(BaseModel):
    """Artist/album metadata service configuration."""

    base_url: str = DEEZER_API_BASE
    timeout: int = 10

    def client_options(self) -> Dict[str, Any]:
        return {"base_url": self.base_url, "timeout": self.timeout}


class PlaybackServiceConfig(BaseModel):
    """Track/preview service configuration."""

    base_url: str = RAPIDAPI_BASE
    host: str = RAPIDAPI_HOST
    api_key: Optional[str] = None
    timeout: int = 10

    def client_options(self) -> Dict[str, Any]:
        return {
            "base_url": self.base_url,
            "host": self.host,
            "api_key": self.api_key,
            "timeout": self.timeout,
        }


class BrowseConfig(BaseModel):
    """Limits for browse and search views."""

    home_artists: int = 8
    home_albums: int = 8
    home_tracks: int = 10
    search_limit: int = 20
    detail_limit: int = 20
    min_query_length: int = 3
    debounce_seconds: float = 0.5
    max_workers: int = 3


class SoundshelfConfig(BaseSettings):
    """Main Soundshelf configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SOUNDSHELF_",
        env_nested_delimiter="__",
        env_ignore_empty=True,
    )

    storage: StorageConfig = Field(default_factory=StorageConfig)
    metadata: MetadataServiceConfig = Field(default_factory=MetadataServiceConfig)
    playback: PlaybackServiceConfig = Field(default_factory=PlaybackServiceConfig)
    browse: BrowseConfig = Field(default_factory=BrowseConfig)

    @classmethod
    def from_file(cls, config_path: str | Path = "soundshelf.yaml") -> "SoundshelfConfig":
        """Load configuration from YAML file."""
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "r") as f:
            config_dict = yaml.safe_load(f) or {}

        # Sections stay plain dicts so env overrides merge into them key by key
        sections = ("storage", "metadata", "playback", "browse")
        kwargs = {
            name: config_dict[name]
            for name in sections
            if isinstance(config_dict.get(name), dict)
        }
        return cls(**kwargs)

    @classmethod
    def load(cls, config_path: str | Path = "soundshelf.yaml") -> "SoundshelfConfig":
        """Load from ``config_path`` when it exists, otherwise use defaults."""
        if Path(config_path).exists():
            return cls.from_file(config_path)
        logger.debug(f"No config file at {config_path}, using defaults")
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "storage": self.storage.model_dump(),
            "metadata": self.metadata.model_dump(),
            "playback": self.playback.model_dump(),
            "browse": self.browse.model_dump(),
        }

    def to_yaml(self) -> str:
        """Convert configuration to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False)

    def save(self, path: str | Path = "soundshelf.yaml") -> None:
        """Save configuration to YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            f.write(self.to_yaml())

        logger.info(f"Configuration saved to {path}")


def get_config_value(config: SoundshelfConfig, path: str, default: Any = None) -> Any:
    """Get a nested config value using dot notation."""
    keys = path.split(".")
    current = config.model_dump()

    for key in keys:
        if isinstance(current, dict) and key in current:
            current = current[key]
        else:
            return default

    return current
