"""
Utility Functions Module

Provides essential utilities:
- Configuration file I/O (YAML, JSON)
- Logging configuration
- Filename cleanup and duration formatting
"""

import re
import sys
import json
import yaml
import logging
from pathlib import Path
from typing import Dict, Optional, Any, Union
from logging.handlers import RotatingFileHandler


class FileHandler:
    """
    Handles configuration file input/output

    Supports: YAML, JSON
    """

    @staticmethod
    def read_config(filepath: Union[str, Path]) -> Dict[str, Any]:
        """
        Read configuration file (YAML or JSON)

        Args:
            filepath: Path to config file

        Returns:
            Configuration dictionary (empty for an empty file)
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"Config file not found: {filepath}")

        extension = filepath.suffix.lower()

        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                if extension in ['.yaml', '.yml']:
                    return yaml.safe_load(f) or {}
                elif extension == '.json':
                    return json.load(f)
                else:
                    raise ValueError(f"Unsupported config format: {extension}")

        except (OSError, ValueError, yaml.YAMLError) as e:
            logging.getLogger(__name__).error(f"Failed to read config {filepath}: {e}")
            raise

    @staticmethod
    def write_config(
        config: Dict[str, Any],
        filepath: Union[str, Path]
    ):
        """
        Write configuration file (YAML or JSON)

        Args:
            config: Configuration dictionary
            filepath: Output path
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        extension = filepath.suffix.lower()

        if extension not in ['.yaml', '.yml', '.json']:
            raise ValueError(f"Unsupported config format: {extension}")

        with open(filepath, 'w', encoding='utf-8') as f:
            if extension == '.json':
                json.dump(config, f, indent=2)
            else:
                yaml.safe_dump(config, f, default_flow_style=False, sort_keys=False)

        logging.getLogger(__name__).info(f"Config written successfully: {filepath}")


class LoggerConfig:
    """
    Logging configuration manager

    Sets up consistent logging across the application
    """

    @staticmethod
    def setup_logger(
        name: str = "dummyforge",
        level: int = logging.INFO,
        log_file: Optional[Union[str, Path]] = None,
        log_to_console: bool = True,
        log_format: Optional[str] = None
    ) -> logging.Logger:
        """
        Setup and configure logger

        Args:
            name: Logger name
            level: Logging level
            log_file: Optional file path for file logging
            log_to_console: Whether to log to console
            log_format: Custom log format

        Returns:
            Configured logger
        """
        logger = logging.getLogger(name)
        logger.setLevel(level)

        # Remove existing handlers
        logger.handlers.clear()

        if log_format is None:
            log_format = (
                '%(asctime)s - %(name)s - %(levelname)s - '
                '%(filename)s:%(lineno)d - %(message)s'
            )

        formatter = logging.Formatter(log_format)

        if log_to_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(level)
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        if log_file:
            log_file = Path(log_file)
            log_file.parent.mkdir(parents=True, exist_ok=True)

            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

        return logger


class PathManager:
    """
    Filename handling for export output
    """

    @staticmethod
    def clean_filename(filename: str) -> str:
        """
        Reduce a filename to letters, digits, underscores and hyphens

        Args:
            filename: Original filename

        Returns:
            Cleaned filename ("data" if nothing survives)
        """
        filename = re.sub(r'[^A-Za-z0-9_-]', '_', filename.strip())
        filename = filename.strip('_')
        return filename or 'data'


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Quick logging setup

    Args:
        level: Logging level (number or name such as "DEBUG")
        log_file: Optional log file path
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    return LoggerConfig.setup_logger(level=level, log_file=log_file)


def format_duration(seconds: float) -> str:
    """Human readable elapsed time"""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes, secs = divmod(seconds, 60)
    return f"{int(minutes)}m {secs:.0f}s"
