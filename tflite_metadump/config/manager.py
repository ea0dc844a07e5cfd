"""
Configuration manager for tflite-metadump.

This module provides a singleton `ConfigManager` class to load, access,
and validate tool-wide settings from a JSON file.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, List, Optional, Type, Union

# Default configuration file name
DEFAULT_CONFIG_FILENAME = "tflite_metadump_config.json"

# Environment variable naming an explicit config file
CONFIG_ENV_VAR = "TFLITE_METADUMP_CONFIG"

DEFAULT_CONFIG_PATHS = [
    Path(".") / DEFAULT_CONFIG_FILENAME,
    Path.home() / ".tflite_metadump" / DEFAULT_CONFIG_FILENAME,
]


@dataclass
class DumpConfig:
    """Dataclass for storing tool-wide configuration settings.

    Attributes:
        log_level: Logging level for the console handler (e.g. 'WARNING', 'DEBUG').
        log_dir: Directory for timestamped debug log files. If None, no log
                 file is written.
        anchor_display_budget: Number of detector anchors listed in full before
                               the listing is truncated. Must be a positive even
                               integer.
    """
    log_level: str = 'WARNING'
    log_dir: Optional[str] = None
    anchor_display_budget: int = 24


class ConfigManager:
    """Singleton configuration manager.

    Settings are read from the file named by `$TFLITE_METADUMP_CONFIG` if set,
    otherwise from `tflite_metadump_config.json` in the current directory and
    then in `~/.tflite_metadump/`. If no file is found, the defaults from
    `DumpConfig` are used.
    """

    _instance: Optional['ConfigManager'] = None
    _config_data: Optional[DumpConfig] = None
    _config_file_path: Optional[Path] = None

    _valid_log_levels: List[str] = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

    def __new__(cls: Type['ConfigManager']) -> 'ConfigManager':
        """Ensures only one instance of ConfigManager is created (Singleton pattern)."""
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._config_data = DumpConfig()
            cls.load_config()
        return cls._instance

    @classmethod
    def load_config(cls: Type['ConfigManager'], file_path: Optional[Union[str, Path]] = None) -> None:
        """Loads configuration from a JSON file.

        Args:
            file_path: Optional path to the configuration file. When omitted,
                       `$TFLITE_METADUMP_CONFIG` and then the default locations
                       are searched.

        Raises:
            FileNotFoundError: If an explicitly named file does not exist.
            ValueError: If the file holds invalid JSON or invalid settings.
        """
        path_to_load: Optional[Path] = None
        if file_path is None and os.environ.get(CONFIG_ENV_VAR):
            file_path = os.environ[CONFIG_ENV_VAR]
        if file_path:
            path_to_load = Path(file_path)
            if not path_to_load.exists():
                raise FileNotFoundError(f"Specified config file not found: {path_to_load}")
        else:
            for p in DEFAULT_CONFIG_PATHS:
                if p.exists():
                    path_to_load = p
                    break

        current_config = DumpConfig()

        if path_to_load:
            try:
                with open(path_to_load, 'r') as f:
                    config_dict = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in config file '{path_to_load}': {str(e)}")
            if not isinstance(config_dict, dict):
                raise ValueError(f"Config file '{path_to_load}' must hold a JSON object")

            loaded_keys = set()
            for field_info in fields(DumpConfig):
                if field_info.name in config_dict:
                    setattr(current_config, field_info.name, config_dict[field_info.name])
                    loaded_keys.add(field_info.name)

            unknown_keys = set(config_dict.keys()) - loaded_keys
            if unknown_keys:
                logger = logging.getLogger(__name__)
                logger.warning(f"Unknown keys in config file '{path_to_load}' ignored: {', '.join(sorted(unknown_keys))}")

        try:
            cls.validate_config_static(current_config)
        except ValueError as e:
            cls._config_data = DumpConfig()
            cls._config_file_path = None
            raise ValueError(f"Invalid configuration data (from file or defaults): {e}")
        cls._config_data = current_config
        cls._config_file_path = path_to_load

    @property
    def config(self) -> DumpConfig:
        """Provides access to the current DumpConfig object."""
        if ConfigManager._config_data is None:
            ConfigManager.load_config()
        return ConfigManager._config_data  # type: ignore

    @property
    def config_file_path(self) -> Optional[Path]:
        """Path of the file the active configuration was loaded from, if any."""
        return ConfigManager._config_file_path

    def update_config(self, **kwargs: Any) -> None:
        """Updates the current configuration with new values.

        Changes are validated before being applied. If validation fails,
        the configuration remains unchanged and a ValueError is raised.
        """
        temp_config_instance = DumpConfig(**asdict(self.config))

        unknown_keys = []
        for key, value in kwargs.items():
            if hasattr(temp_config_instance, key):
                setattr(temp_config_instance, key, value)
            else:
                unknown_keys.append(key)

        if unknown_keys:
            raise ValueError(f"Unknown configuration keys provided for update: {', '.join(unknown_keys)}")

        ConfigManager.validate_config_static(temp_config_instance)
        ConfigManager._config_data = temp_config_instance

    def reset_config(self) -> None:
        """Resets the configuration to default DumpConfig values."""
        ConfigManager._config_data = DumpConfig()
        ConfigManager._config_file_path = None

    def get_setting(self, key: str, default: Any = None) -> Any:
        """Retrieves a configuration setting by its key."""
        return getattr(self.config, key, default)

    def set_setting(self, key: str, value: Any) -> None:
        """Sets a single configuration value after validation.

        Raises:
            ValueError: If the key is unknown or the value fails validation.
        """
        if not hasattr(self.config, key):
            raise ValueError(f"Unknown configuration key: {key}")
        self.update_config(**{key: value})

    @staticmethod
    def validate_config_static(config_to_validate: DumpConfig) -> None:
        """Validates a DumpConfig object. Raises ValueError on failure."""
        cfg = config_to_validate
        if not isinstance(cfg.log_level, str) or cfg.log_level.upper() not in ConfigManager._valid_log_levels:
            raise ValueError(f"log_level must be one of {ConfigManager._valid_log_levels}")

        if cfg.log_dir is not None and not isinstance(cfg.log_dir, str):
            raise ValueError("log_dir must be a string path or None")

        budget = cfg.anchor_display_budget
        if isinstance(budget, bool) or not isinstance(budget, int) or budget <= 0 or budget % 2:
            raise ValueError("anchor_display_budget must be a positive even integer")
