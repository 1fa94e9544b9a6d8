"""
Configuration management for zkmerkle.

Loads YAML configuration from file with sensible defaults and validation.
Supports environment variable substitution using ${ENV_VAR} syntax.
"""

import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

from zkmerkle.exceptions import InvalidConfigurationError
from zkmerkle.logging_config import get_logger

logger = get_logger(__name__)


VALID_HASH_BACKENDS = ("hashlib", "cryptography")
VALID_HASH_ALGORITHMS = ("sha256", "sha3_256", "blake2s")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
VALID_LOG_FORMATS = ("console", "json")


def _expand_env_vars(value: Any) -> Any:
    """
    Recursively expand environment variables in configuration values.

    Supports ${ENV_VAR} syntax with optional default values: ${ENV_VAR:default}

    Args:
        value: Configuration value (string, dict, list, or other)

    Returns:
        Value with environment variables expanded

    Examples:
        "${ZKMERKLE_HASH}" -> value of ZKMERKLE_HASH env var
        "${ZKMERKLE_HASH:sha256}" -> value of ZKMERKLE_HASH or "sha256" if not set
    """
    if isinstance(value, str):
        # Pattern matches ${VAR} or ${VAR:default}
        pattern = r'\$\{([^}:]+)(?::([^}]*))?\}'

        def replace_env_var(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return re.sub(pattern, replace_env_var, value)
    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    else:
        return value


@dataclass
class MerkleConfig:
    """Merkle tree configuration."""

    hash_backend: str = "hashlib"  # "hashlib" or "cryptography"
    hash_algorithm: str = "sha256"  # "sha256", "sha3_256" or "blake2s"
    parallel_threshold: int = 100  # Hash levels of at least this many nodes in a thread pool
    max_workers: int = 4


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "WARNING"
    file: str = ""  # Empty logs to stderr
    format: str = "console"  # "console" or "json"


@dataclass
class ZkMerkleConfig:
    """Main zkmerkle configuration."""

    merkle: MerkleConfig = field(default_factory=MerkleConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_default_config_path() -> str:
    """Get the default configuration file path."""
    return os.path.expanduser("~/.zkmerkle/config.yaml")


def get_default_config() -> ZkMerkleConfig:
    """
    Get default configuration with sensible defaults.

    Returns:
        ZkMerkleConfig: Default configuration object
    """
    return ZkMerkleConfig(
        merkle=MerkleConfig(),
        logging=LoggingConfig(),
    )


def load_config(config_path: Optional[str] = None) -> ZkMerkleConfig:
    """
    Load configuration from YAML file with validation.

    If config file is not found, returns default configuration.
    If config file is malformed or invalid, raises InvalidConfigurationError.

    Args:
        config_path: Path to configuration file. If None, uses default path.

    Returns:
        ZkMerkleConfig: Loaded and validated configuration

    Raises:
        InvalidConfigurationError: If configuration is invalid or malformed
    """
    if config_path is None:
        config_path = get_default_config_path()

    config_path = os.path.expanduser(str(config_path))

    if not os.path.exists(config_path):
        logger.debug(f"Configuration file not found at {config_path}, using defaults")
        return get_default_config()

    try:
        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f)
        logger.debug(f"Loaded configuration from {config_path}")
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML configuration file '{config_path}': {e}")
        raise InvalidConfigurationError(
            f"Failed to parse YAML configuration file '{config_path}': {e}"
        ) from e
    except OSError as e:
        logger.error(f"Failed to read configuration file '{config_path}': {e}")
        raise InvalidConfigurationError(
            f"Failed to read configuration file '{config_path}': {e}"
        ) from e

    if config_data is None:
        logger.debug(f"Configuration file {config_path} is empty, using defaults")
        return get_default_config()

    if not isinstance(config_data, dict):
        raise InvalidConfigurationError(
            f"Invalid configuration in '{config_path}': top level must be a mapping"
        )

    config_data = _expand_env_vars(config_data)

    try:
        config = _build_config_from_dict(config_data)
        _validate_config(config)
    except InvalidConfigurationError as e:
        logger.error(f"Invalid configuration in '{config_path}': {e}")
        raise InvalidConfigurationError(
            f"Invalid configuration in '{config_path}': {e}"
        ) from e

    logger.debug(f"Successfully loaded and validated configuration from {config_path}")
    return config


def _section(config_data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config_data.get(name) or {}
    if not isinstance(section, dict):
        raise InvalidConfigurationError(f"'{name}' section must be a mapping")
    return section


def _as_int(value: Any, name: str) -> int:
    # ${VAR} expansion always yields strings
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}") from e


def _build_config_from_dict(config_data: Dict[str, Any]) -> ZkMerkleConfig:
    """
    Build ZkMerkleConfig from dictionary loaded from YAML.

    Merges user configuration with defaults.
    """
    default_config = get_default_config()

    merkle_data = _section(config_data, 'merkle')
    merkle = MerkleConfig(
        hash_backend=str(merkle_data.get('hash_backend', default_config.merkle.hash_backend)),
        hash_algorithm=str(merkle_data.get('hash_algorithm', default_config.merkle.hash_algorithm)),
        parallel_threshold=_as_int(
            merkle_data.get('parallel_threshold', default_config.merkle.parallel_threshold),
            'merkle.parallel_threshold',
        ),
        max_workers=_as_int(
            merkle_data.get('max_workers', default_config.merkle.max_workers),
            'merkle.max_workers',
        ),
    )

    logging_data = _section(config_data, 'logging')
    logging = LoggingConfig(
        level=str(logging_data.get('level', default_config.logging.level)).upper(),
        file=os.path.expanduser(str(logging_data.get('file', default_config.logging.file) or "")),
        format=str(logging_data.get('format', default_config.logging.format)),
    )

    return ZkMerkleConfig(merkle=merkle, logging=logging)


def _validate_config(config: ZkMerkleConfig) -> None:
    """
    Validate configuration values.

    Raises:
        InvalidConfigurationError: If configuration is invalid
    """
    if config.merkle.hash_backend not in VALID_HASH_BACKENDS:
        raise InvalidConfigurationError(
            f"hash_backend must be one of {VALID_HASH_BACKENDS}, "
            f"got '{config.merkle.hash_backend}'"
        )
    if config.merkle.hash_algorithm not in VALID_HASH_ALGORITHMS:
        raise InvalidConfigurationError(
            f"hash_algorithm must be one of {VALID_HASH_ALGORITHMS}, "
            f"got '{config.merkle.hash_algorithm}'"
        )
    if config.merkle.hash_backend == "hashlib" and config.merkle.hash_algorithm != "sha256":
        raise InvalidConfigurationError(
            "hashlib backend only supports sha256; "
            f"use hash_backend: cryptography for '{config.merkle.hash_algorithm}'"
        )
    if config.merkle.parallel_threshold < 2:
        raise InvalidConfigurationError(
            f"parallel_threshold must be at least 2, got {config.merkle.parallel_threshold}"
        )
    if config.merkle.max_workers < 1:
        raise InvalidConfigurationError(
            f"max_workers must be at least 1, got {config.merkle.max_workers}"
        )

    if config.logging.level not in VALID_LOG_LEVELS:
        raise InvalidConfigurationError(
            f"Invalid log level '{config.logging.level}', must be one of {VALID_LOG_LEVELS}"
        )
    if config.logging.format not in VALID_LOG_FORMATS:
        raise InvalidConfigurationError(
            f"Invalid log format '{config.logging.format}', must be one of {VALID_LOG_FORMATS}"
        )
