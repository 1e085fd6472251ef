"""Configuration management for het SNP sensitivity runs."""

from __future__ import annotations

import hashlib
import json
import yaml
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict

from .exceptions import ConfigurationError

DEFAULT_SEED = 51
DEFAULT_SAMPLE_SIZE = 10_000
DEFAULT_LOG_ODDS_THRESHOLD = 3.0
MAX_CONSIDERED_DEPTH = 1000
DEFAULT_WORKER_COUNT = 8
DEFAULT_CHUNK_SIZE = 1000
SAMPLING_MAX = 600
# one day, effectively unbounded for a single run
DEFAULT_JOIN_TIMEOUT = 86_400.0


@dataclass
class SensitivityConfig:
    """Parameters for a theoretical het SNP sensitivity computation."""
    seed: int = DEFAULT_SEED
    sample_size: int = DEFAULT_SAMPLE_SIZE
    log_odds_threshold: float = DEFAULT_LOG_ODDS_THRESHOLD
    max_considered_depth: int = MAX_CONSIDERED_DEPTH
    worker_count: int = DEFAULT_WORKER_COUNT
    chunk_size: int = DEFAULT_CHUNK_SIZE
    sampling_max: int = SAMPLING_MAX
    join_timeout: float = DEFAULT_JOIN_TIMEOUT
    with_logging: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    def config_hash(self) -> str:
        """Compute deterministic hash of configuration."""
        config_str = json.dumps(self.to_dict(), sort_keys=True)
        return hashlib.sha256(config_str.encode()).hexdigest()[:16]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SensitivityConfig":
        """Build a config from a plain mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(unknown)}",
                details={"unknown_keys": unknown},
            )
        return cls(**data)


def load_config(path: str | Path) -> SensitivityConfig:
    """Load configuration from YAML file."""
    with open(path, 'r') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file {path}: {e}") from e

    if data is None:
        return SensitivityConfig()
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration in {path} must be a mapping")

    return SensitivityConfig.from_dict(data)


def dump_config(config: SensitivityConfig, path: str | Path) -> None:
    """Save configuration to YAML file."""
    with open(path, 'w') as f:
        yaml.safe_dump(config.to_dict(), f, default_flow_style=False)
