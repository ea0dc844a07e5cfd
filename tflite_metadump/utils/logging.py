"""
Logging manager for tflite-metadump.
"""

import logging
import os
import sys
from datetime import datetime
from typing import Dict, Optional

from ..config.manager import ConfigManager

LOGGER_NAME = 'tflite_metadump'


class LogManager:
    """Singleton logging manager.

    Diagnostics go to stderr so that stdout carries only the report.
    """

    _instance: Optional['LogManager'] = None
    _logger: Optional[logging.Logger] = None
    _file_handlers: Dict[str, logging.FileHandler] = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(LogManager, cls).__new__(cls)
        return cls._instance

    def __init__(self):
        if self._logger is None:
            self._setup_logger()

    def _setup_logger(self) -> None:
        """Set up the logger with configuration."""
        config = ConfigManager().config
        level = getattr(logging, config.log_level.upper())

        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(logging.DEBUG if config.log_dir else level)
        logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        console_handler.setLevel(level)
        logger.addHandler(console_handler)

        LogManager._logger = logger

        if config.log_dir:
            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            self.add_file_handler(os.path.join(config.log_dir, f'tflite_metadump_{timestamp}.log'))

    @property
    def logger(self) -> logging.Logger:
        """Get the logger instance."""
        if self._logger is None:
            self._setup_logger()
        return self._logger

    def set_level(self, level: str) -> None:
        """Set the console logging level."""
        if not hasattr(logging, level.upper()):
            raise ValueError(f"Invalid logging level: {level}")

        self.logger.setLevel(min(getattr(logging, level.upper()), self.logger.level))
        for handler in self.logger.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                handler.setLevel(getattr(logging, level.upper()))

    def add_file_handler(self, filepath: str, level: str = 'DEBUG') -> None:
        """Add a new file handler to the logger."""
        if not hasattr(logging, level.upper()):
            raise ValueError(f"Invalid logging level: {level}")

        directory = os.path.dirname(filepath)
        if directory:
            os.makedirs(directory, exist_ok=True)

        file_handler = logging.FileHandler(filepath)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        file_handler.setLevel(getattr(logging, level.upper()))
        self.logger.addHandler(file_handler)
        self._file_handlers[filepath] = file_handler

    def close_all_handlers(self) -> None:
        """Close all file handlers."""
        for handler in self._file_handlers.values():
            self.logger.removeHandler(handler)
            handler.close()
        self._file_handlers.clear()

    def get_log_file(self) -> str:
        """Get the path of the current log file."""
        if not self._file_handlers:
            return ""
        return next(iter(self._file_handlers.keys()))
