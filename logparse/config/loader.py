"""
Configuration loader for LogParse.

Reads the groups and run defaults from a YAML configuration file.
"""

import yaml
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from logparse.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "logparse.yaml"


class ConfigLoader:
    """Finds and loads the YAML configuration file."""

    @staticmethod
    def search_paths(config_path: Optional[str] = None) -> List[Path]:
        """
        Candidate configuration files in priority order.

        Args:
            config_path: Explicit path, tried first when given
        """
        search_paths = [
            Path(CONFIG_FILE_NAME),
            Path("config") / CONFIG_FILE_NAME,
            Path.home() / ".logparse" / CONFIG_FILE_NAME,
        ]

        if config_path:
            search_paths.insert(0, Path(config_path).expanduser())

        return search_paths

    @staticmethod
    def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to a config file. If None, looks for:
                        1. logparse.yaml in current directory
                        2. config/logparse.yaml
                        3. ~/.logparse/logparse.yaml

        Returns:
            Configuration dictionary (empty when no file is found)

        Raises:
            ConfigurationError: if an explicit path is missing, or a file
                exists but is not a valid YAML mapping
        """
        if config_path and not Path(config_path).expanduser().exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        for path in ConfigLoader.search_paths(config_path):
            if not path.is_file():
                continue

            try:
                with open(path, "r", encoding="utf-8") as f:
                    config = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                raise ConfigurationError(f"Failed to load config from {path}: {e}") from e

            if config is None:
                config = {}
            if not isinstance(config, dict):
                raise ConfigurationError(f"Config file {path} must contain a mapping")

            logger.info(f"Loaded configuration from {path}")
            return config

        logger.debug("No configuration file found, using defaults")
        return {}
