"""
Configuration management for family-agenda.
"""

import os
from pathlib import Path
from typing import Optional

from .models import AgendaConfig
from .paths import get_path_manager


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return get_path_manager().config_path


def load_config(config_path: Optional[str] = None) -> AgendaConfig:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        AgendaConfig object
    """
    if config_path is None:
        config_path = str(get_default_config_path())

    return AgendaConfig.load_from_file(config_path)


def save_config(config: AgendaConfig, config_path: Optional[str] = None):
    """
    Save configuration to file.

    Args:
        config: AgendaConfig object to save
        config_path: Optional path to save to. Uses default if not provided.
    """
    if config_path is None:
        manager = get_path_manager()
        manager.ensure_directories()
        config_path = str(manager.config_path)

    config_dir = os.path.dirname(os.path.abspath(os.path.expanduser(config_path)))
    os.makedirs(config_dir, exist_ok=True)

    config.save_to_file(config_path)
