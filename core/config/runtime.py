"""
Runtime Configuration

Central configuration for commitment construction, hashing and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from core.crypto.hashing import DEFAULT_HASH_FUNCTION, HASHERS, Hasher, get_hasher
from core.schemas.errors import ConfigurationException

load_dotenv()


ENV_PREFIX = "ALLOWLIST_"

_SUPPORTED_LEAF_WIDTH = 32


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class MerkleConfig:
    """Configuration for tree construction."""
    hash_function: str = DEFAULT_HASH_FUNCTION
    leaf_width: int = _SUPPORTED_LEAF_WIDTH

    def __post_init__(self):
        self.hash_function = self.hash_function.lower()
        if self.hash_function not in HASHERS:
            raise ConfigurationException(
                message=f"Unknown hash function: {self.hash_function!r}",
                details={"supported": sorted(HASHERS)},
            )
        if self.leaf_width != _SUPPORTED_LEAF_WIDTH:
            raise ConfigurationException(
                message=f"Leaf width must be {_SUPPORTED_LEAF_WIDTH} bytes",
                details={"leaf_width": self.leaf_width},
            )

    @property
    def hasher(self) -> Hasher:
        return get_hasher(self.hash_function)


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    file: Optional[str] = None
    trace: bool = False  # log every pipeline stage at DEBUG


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (and a .env file)
    - YAML file
    - Programmatic construction
    """
    merkle: MerkleConfig = field(default_factory=MerkleConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - ALLOWLIST_HASH_FUNCTION: keccak256 or sha256
        - ALLOWLIST_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR
        - ALLOWLIST_LOG_FILE: Path of an additional log file
        - ALLOWLIST_TRACE: Log every pipeline stage (true/false)
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}HASH_FUNCTION"):
            overrides.setdefault("merkle", {})["hash_function"] = os.getenv(
                f"{ENV_PREFIX}HASH_FUNCTION"
            )

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(
                f"{ENV_PREFIX}LOG_LEVEL", "INFO"
            ).upper()
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")
        if os.getenv(f"{ENV_PREFIX}TRACE"):
            overrides.setdefault("logging", {})["trace"] = _env_flag(f"{ENV_PREFIX}TRACE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationException(
                message=f"Config file must contain a mapping: {path}",
            )

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        merkle_data = data.get("merkle", {}) or {}
        logging_data = data.get("logging", {}) or {}

        try:
            merkle = MerkleConfig(**merkle_data) if merkle_data else MerkleConfig()
            log_conf = LoggingConfig(**logging_data) if logging_data else LoggingConfig()
        except TypeError as e:
            raise ConfigurationException(message=f"Invalid configuration: {e}") from e

        return cls(
            merkle=merkle,
            logging=log_conf,
            extra=data.get("extra", {}) or {},
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "merkle" in overrides:
            merged = {
                "hash_function": new_config.merkle.hash_function,
                "leaf_width": new_config.merkle.leaf_width,
                **overrides["merkle"],
            }
            new_config.merkle = MerkleConfig(**merged)

        if "logging" in overrides:
            for key, value in overrides["logging"].items():
                setattr(new_config.logging, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "merkle": {
                "hash_function": self.merkle.hash_function,
                "leaf_width": self.merkle.leaf_width,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
                "trace": self.logging.trace,
            },
            "extra": self.extra,
        }


def get_default_config_template() -> str:
    """Get a template YAML configuration file."""
    return """\
merkle:
  # keccak256 matches Solidity/OpenZeppelin verifiers; sha256 is also supported
  hash_function: keccak256
  leaf_width: 32

logging:
  level: INFO
  file: null
  trace: false
"""


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
