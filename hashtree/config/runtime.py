"""
Runtime Configuration

Settings for digest selection, logging and CLI output. Values come from
a YAML/JSON file, then HASHTREE_* environment variables (a .env file in
the working directory is honoured).
"""

from __future__ import annotations

import copy
import json
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from hashtree.crypto.hashing import DEFAULT_HASH_ALGORITHM, HashFunction, get_hash_function

load_dotenv()


ENV_PREFIX = "HASHTREE_"

# Environment variable suffix -> (section, key)
ENV_VARIABLES: dict[str, tuple[str, str]] = {
    "HASH_ALGORITHM": ("hash", "algorithm"),
    "LOG_LEVEL": ("logging", "level"),
    "LOG_FILE": ("logging", "log_file"),
    "OUTPUT_FORMAT": ("output", "format"),
    "PROOF_FORMAT": ("output", "proof_format"),
}

OUTPUT_FORMATS = ("human", "json")
PROOF_FORMATS = ("json", "binary")


@dataclass
class HashConfig:
    """Digest used for leaves and internal nodes."""
    algorithm: str = DEFAULT_HASH_ALGORITHM

    def hash_function(self) -> HashFunction:
        """
        Resolve the configured algorithm.

        Raises:
            UnsupportedHashException: If the algorithm is unknown
        """
        return get_hash_function(self.algorithm)


@dataclass
class LoggingConfig:
    level: str = "INFO"
    log_file: Optional[str] = None


@dataclass
class OutputConfig:
    """CLI output settings."""
    format: str = "human"
    proof_format: str = "json"

    def __post_init__(self):
        if self.format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Output format must be one of {OUTPUT_FORMATS}, got {self.format!r}"
            )
        if self.proof_format not in PROOF_FORMATS:
            raise ValueError(
                f"Proof format must be one of {PROOF_FORMATS}, got {self.proof_format!r}"
            )


def _read_config_file(path: Path, loader) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path) as f:
        return loader(f) or {}


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Sections missing from a file or dict keep their defaults; unknown
    top-level data can be carried in ``extra``.
    """
    hash: HashConfig = field(default_factory=HashConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, dict[str, str]]:
        """Collect HASHTREE_* variables into per-section override dicts."""
        overrides: dict[str, dict[str, str]] = {}
        for suffix, (section, key) in ENV_VARIABLES.items():
            value = os.getenv(ENV_PREFIX + suffix)
            if value:
                overrides.setdefault(section, {})[key] = value
        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Defaults overlaid with environment variables only."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        import yaml
        return cls.from_dict(_read_config_file(Path(path), yaml.safe_load))

    @classmethod
    def from_json(cls, path: str | Path) -> "RuntimeConfig":
        return cls.from_dict(_read_config_file(Path(path), json.load))

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load a .yaml/.yml file as YAML and anything else as JSON."""
        path = Path(path)
        if path.suffix.lower() in (".yaml", ".yml"):
            return cls.from_yaml(path)
        return cls.from_json(path)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """
        Build a config from nested section dicts.

        Raises:
            TypeError: On unknown keys inside a section
            ValueError: On invalid output settings
        """
        return cls(
            hash=HashConfig(**(data.get("hash") or {})),
            logging=LoggingConfig(**(data.get("logging") or {})),
            output=OutputConfig(**(data.get("output") or {})),
            extra=data.get("extra") or {},
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a copy with HASHTREE_* variables applied on top.

        Returns self unchanged when no variables are set.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        merged = copy.deepcopy(self)
        for section, values in overrides.items():
            for key, value in values.items():
                setattr(getattr(merged, section), key, value)

        # setattr bypasses __post_init__
        merged.output = OutputConfig(**asdict(merged.output))
        return merged

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def default_config_paths() -> list[Path]:
    """Config files tried, in order, when no path is given."""
    return [
        Path.cwd() / "hashtree.yaml",
        Path.cwd() / "hashtree.json",
        Path.home() / ".config" / "hashtree" / "config.yaml",
    ]


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Without an explicit path the first existing entry of
    default_config_paths() is used. Environment variables always win.

    Args:
        config_path: Optional path to a YAML or JSON config file

    Returns:
        Merged configuration
    """
    if config_path is None:
        config_path = next((p for p in default_config_paths() if p.exists()), None)

    config = RuntimeConfig.from_file(config_path) if config_path else RuntimeConfig()
    return config.with_env_overrides()


_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Process-wide config, built from the environment on first use."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: RuntimeConfig) -> None:
    global _default_config
    _default_config = config
