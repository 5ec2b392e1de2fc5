"""Reading and writing arpo's YAML configuration."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import ArpoConfig

USER_CONFIG_PATH = Path.home() / ".config" / "arpo" / "config.yaml"


class ConfigManager:
    """
    Finds, validates and writes the configuration file.

    An explicit ``config_path`` is the only file consulted; otherwise the
    first existing entry of ``DEFAULT_CONFIG_LOCATIONS`` wins.
    """

    DEFAULT_CONFIG_LOCATIONS = [
        Path("arpo.yaml"),
        USER_CONFIG_PATH,
        Path.home() / ".arpo" / "config.yaml",
    ]

    def __init__(self, config_path: Path | None = None):
        self.config_path = config_path

    def _locate(self) -> Path | None:
        if self.config_path is not None:
            return self.config_path if Path(self.config_path).exists() else None
        return next((p for p in self.DEFAULT_CONFIG_LOCATIONS if p.exists()), None)

    def load(self, create_if_missing: bool = False) -> ArpoConfig:
        """
        Read and validate the configuration.

        Args:
            create_if_missing: Return built-in defaults when no file exists

        Raises:
            FileNotFoundError: No file found and ``create_if_missing`` is False
            ValueError: The file is not valid YAML or fails validation
        """
        source = self._locate()
        if source is None:
            if create_if_missing:
                return ArpoConfig()
            raise FileNotFoundError(
                f"No configuration file found. Searched: {self.DEFAULT_CONFIG_LOCATIONS}"
            )

        try:
            raw = yaml.safe_load(Path(source).read_text(encoding="utf-8")) or {}
            config = ArpoConfig(**raw)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file {source}: {e}") from e
        except ValidationError as e:
            raise ValueError(f"Invalid configuration in {source}: {e}") from e

        self.config_path = source
        return config

    def save(self, config: ArpoConfig, path: Path | None = None) -> Path:
        """Write ``config`` as YAML and return the path written."""
        target = Path(path or self.config_path or USER_CONFIG_PATH)
        target.parent.mkdir(parents=True, exist_ok=True)

        # json mode turns paths into plain strings YAML can hold
        data = config.model_dump(mode="json")
        target.write_text(
            yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False),
            encoding="utf-8",
        )
        self.config_path = target
        return target


_config_manager: ConfigManager | None = None


def get_config_manager(config_path: Path | None = None) -> ConfigManager:
    """
    Return the process-wide config manager.

    A different explicit ``config_path`` replaces the current manager.
    """
    global _config_manager
    if _config_manager is None or (
        config_path is not None and _config_manager.config_path != config_path
    ):
        _config_manager = ConfigManager(config_path)
    return _config_manager
