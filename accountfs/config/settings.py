"""
ACCOUNTFS - Configuration Management

Handles application configuration from environment variables and files.
Configuration is read once at startup; the mount options that enforce
host-side permission checks and auto-unmount are not configurable.
"""

import json
import logging
import os
from dataclasses import dataclass, fields
from typing import Optional

import yaml

from accountfs.core.errors import ConfigurationError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class AppConfig:
    """Main application configuration."""

    # Mount settings
    mount_point: str = "/opt/users"
    fsname: str = "kubsh"
    unmount_command: str = "fusermount"
    stop_timeout: float = 5.0  # Seconds to wait for the worker on stop

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "AppConfig":
        """
        Load configuration from environment variables.

        Environment variables:
        - ACCOUNTFS_MOUNT_POINT: Directory the filesystem is mounted on
        - ACCOUNTFS_FSNAME: Filesystem name shown in the mount table
        - ACCOUNTFS_UNMOUNT_COMMAND: Helper used to unmount on stop
        - ACCOUNTFS_STOP_TIMEOUT: Seconds to wait for the worker on stop
        - ACCOUNTFS_LOG_LEVEL: Logging level name
        - ACCOUNTFS_LOG_FILE: Write logs to this file instead of stdout
        """
        return cls(
            mount_point=os.environ.get("ACCOUNTFS_MOUNT_POINT", cls.mount_point),
            fsname=os.environ.get("ACCOUNTFS_FSNAME", cls.fsname),
            unmount_command=os.environ.get("ACCOUNTFS_UNMOUNT_COMMAND", cls.unmount_command),
            stop_timeout=float(os.environ.get("ACCOUNTFS_STOP_TIMEOUT", cls.stop_timeout)),
            log_level=os.environ.get("ACCOUNTFS_LOG_LEVEL", cls.log_level),
            log_file=os.environ.get("ACCOUNTFS_LOG_FILE", cls.log_file),
        )

    @classmethod
    def from_file(cls, path: str) -> "AppConfig":
        """
        Load configuration from YAML or JSON file.

        Args:
            path: Path to configuration file (.yaml, .yml, or .json)

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file format is invalid
        """
        return cls(**cls._read_mapping(path))

    @classmethod
    def _read_mapping(cls, path: str) -> dict:
        if not os.path.exists(path):
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, "r") as f:
            if path.endswith((".yaml", ".yml")):
                data = yaml.safe_load(f)
            elif path.endswith(".json"):
                data = json.load(f)
            else:
                raise ValueError(f"Unsupported config file format: {path}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file must contain a mapping: {path}")

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        return data

    @classmethod
    def load(cls, config_file: Optional[str] = None) -> "AppConfig":
        """
        Load configuration with priority: file > env > defaults.

        Args:
            config_file: Optional path to configuration file

        Returns:
            AppConfig instance
        """
        config = cls.from_env()

        if config_file:
            try:
                data = cls._read_mapping(config_file)
            except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
                raise ConfigurationError(config_file, str(e)) from e
            # Merge: file config takes precedence
            for key, value in data.items():
                setattr(config, key, value)

        return config

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ValueError: If configuration is invalid
        """
        if not os.path.isabs(self.mount_point):
            raise ValueError("mount_point must be an absolute path")

        if not self.fsname:
            raise ValueError("fsname is required")

        if self.stop_timeout <= 0:
            raise ValueError("stop_timeout must be positive")

        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")

    @property
    def numeric_log_level(self) -> int:
        """Log level as understood by the logging module."""
        return getattr(logging, self.log_level.upper())
