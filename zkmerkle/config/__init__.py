"""
Configuration management for zkmerkle.

Handles loading and validation of configuration files.
"""

from zkmerkle.config.settings import (
    LoggingConfig,
    MerkleConfig,
    ZkMerkleConfig,
    get_default_config,
    get_default_config_path,
    load_config,
)

__all__ = [
    "LoggingConfig",
    "MerkleConfig",
    "ZkMerkleConfig",
    "get_default_config",
    "get_default_config_path",
    "load_config",
]
