"""Simulator configuration loader.

Settings are kept in a YAML file so limits and data locations can change
without touching code. A built-in fallback is used when no file exists.
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from .data import MAX_ROUNDS


@dataclass(frozen=True)
class SimulatorConfig:
    """Container for simulator settings."""

    data_dir: str = "assets/data"
    venues_file: str = "venues.yaml"
    max_rounds: int = MAX_ROUNDS
    default_rounds: int = 10
    max_log_messages: int = 1000
    debug_logging: bool = False

    @classmethod
    def from_dict(cls, config_data: dict[str, Any]) -> "SimulatorConfig":
        """Build a config from YAML data, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in config_data.items() if key in known}
        config = cls(**values)
        if config.max_rounds > MAX_ROUNDS:
            raise ValueError(f"max_rounds cannot exceed {MAX_ROUNDS}, got {config.max_rounds}")
        return config

    @property
    def venues_path(self) -> str:
        return os.path.join(self.data_dir, self.venues_file)


class ConfigLoader:
    """Loader for the simulator configuration file with caching and fallbacks."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or self._find_default_config_path()
        self._cached_config: Optional[SimulatorConfig] = None

    def _find_default_config_path(self) -> str:
        """Find assets/config/simulator.yaml by walking up from this file."""
        current_dir = Path(__file__).parent
        for _ in range(5):  # Limit search depth
            config_path = current_dir / "assets" / "config" / "simulator.yaml"
            if config_path.exists():
                return str(config_path)
            current_dir = current_dir.parent

        # Fallback: assume it's in the project root
        return "assets/config/simulator.yaml"

    def load_config(self, force_reload: bool = False) -> SimulatorConfig:
        """Load configuration, using cache if available.

        Relative data directories are resolved against the project root
        (the directory holding ``assets``).

        Raises:
            ValueError: If the file exists but cannot be parsed
        """
        if self._cached_config is not None and not force_reload:
            return self._cached_config

        if not os.path.exists(self.config_path):
            self._cached_config = SimulatorConfig()
            return self._cached_config

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse simulator config {self.config_path}: {e}")

        if not isinstance(config_data, dict):
            raise ValueError(f"Simulator config must be a mapping: {self.config_path}")

        settings = config_data.get("simulator") or config_data
        if not isinstance(settings, dict):
            raise ValueError(f"Simulator settings must be a mapping: {self.config_path}")

        data_dir = settings.get("data_dir")
        if data_dir and not os.path.isabs(data_dir):
            project_root = Path(self.config_path).resolve().parent.parent.parent
            settings = {**settings, "data_dir": str(project_root / data_dir)}

        self._cached_config = SimulatorConfig.from_dict(settings)
        return self._cached_config


# Global config loader instance
_config_loader: Optional[ConfigLoader] = None


def get_config(config_path: Optional[str] = None) -> SimulatorConfig:
    """Get the simulator configuration, loading it on first use."""
    global _config_loader
    if _config_loader is None or (config_path and config_path != _config_loader.config_path):
        _config_loader = ConfigLoader(config_path)
    return _config_loader.load_config()
