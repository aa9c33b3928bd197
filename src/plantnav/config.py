"""Configuration loading from ~/.config/plantnav/config.toml."""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "plantnav" / "config.toml"


@dataclass
class RepositoryConfig:
    """Settings for the in-memory plant repository."""

    latency: float = 0.5  # seconds per simulated network call
    failing_zones: list[int] = field(default_factory=list)
    fail_refresh: bool = False
    plants_file: str | None = None  # JSON plant list, bundled samples if unset


@dataclass
class BehaviorConfig:
    """Controller behavior."""

    refresh_on_repeat: bool = True  # refresh cache when the same zone is re-selected


@dataclass
class AppearanceConfig:
    """Appearance settings."""

    theme: str = "textual-dark"
    fullscreen: bool = False


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "WARNING"
    file: str | None = None


@dataclass
class Config:
    """Application configuration."""

    repository: RepositoryConfig = field(default_factory=RepositoryConfig)
    behavior: BehaviorConfig = field(default_factory=BehaviorConfig)
    appearance: AppearanceConfig = field(default_factory=AppearanceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: Path | None = None) -> Config:
    """Load configuration from ``path`` or ~/.config/plantnav/config.toml.

    Returns defaults if file doesn't exist.
    """
    path = path or DEFAULT_CONFIG_PATH
    if not path.exists():
        return Config()

    with path.open("rb") as f:
        data = tomllib.load(f)

    repo_data = data.get("repository", {})
    repository = RepositoryConfig(
        latency=float(repo_data.get("latency", 0.5)),
        failing_zones=[int(z) for z in repo_data.get("failing_zones", [])],
        fail_refresh=repo_data.get("fail_refresh", False),
        plants_file=repo_data.get("plants_file"),
    )

    behavior_data = data.get("behavior", {})
    behavior = BehaviorConfig(
        refresh_on_repeat=behavior_data.get("refresh_on_repeat", True),
    )

    appearance_data = data.get("appearance", {})
    appearance = AppearanceConfig(
        theme=appearance_data.get("theme", "textual-dark"),
        fullscreen=appearance_data.get("fullscreen", False),
    )

    logging_data = data.get("logging", {})
    logging_config = LoggingConfig(
        level=str(logging_data.get("level", "WARNING")).upper(),
        file=logging_data.get("file"),
    )

    return Config(
        repository=repository,
        behavior=behavior,
        appearance=appearance,
        logging=logging_config,
    )
