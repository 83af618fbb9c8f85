"""Configuration module for memosync."""

from memosync.config.loader import get_config_path, get_data_dir, load_config, save_config
from memosync.config.schema import AIConfig, Config, SyncConfig, VaultConfig

__all__ = [
    "AIConfig",
    "Config",
    "SyncConfig",
    "VaultConfig",
    "get_config_path",
    "get_data_dir",
    "load_config",
    "save_config",
]
