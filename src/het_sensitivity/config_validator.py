"""
Configuration validation for het SNP sensitivity runs.

Provides validation of configuration parameters with detailed
error reporting and advisory warnings.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Tuple

from .config import SensitivityConfig
from .exceptions import ConfigurationError


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """Validate configuration parameters for a sensitivity run."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.errors = []
        self.warnings = []

    def validate_config(self, config: Dict[str, Any]) -> Tuple[bool, List[str], List[str]]:
        """Validate complete configuration.

        Args:
            config: Configuration dictionary to validate

        Returns:
            Tuple of (is_valid, errors, warnings)
        """
        self.errors = []
        self.warnings = []

        known_keys = set(SensitivityConfig().to_dict())
        for key in sorted(set(config) - known_keys):
            self.errors.append(f"Unknown configuration key: {key}")

        self._validate_sampling_config(config)
        self._validate_parallel_config(config)
        self._validate_general_config(config)

        for warning in self.warnings:
            self.logger.debug("Configuration warning: %s", warning)

        is_valid = len(self.errors) == 0
        return is_valid, self.errors, self.warnings

    def _validate_sampling_config(self, config: Dict[str, Any]) -> None:
        """Validate Monte-Carlo sampling parameters."""
        if 'sample_size' in config:
            sample_size = config['sample_size']
            if not _is_int(sample_size):
                self.errors.append("sample_size must be an integer")
            elif sample_size < 1:
                self.errors.append("sample_size must be positive")
            elif sample_size < 1000:
                self.warnings.append(
                    f"sample_size is low ({sample_size}), consider >= 1000 for stable estimates"
                )

        if 'log_odds_threshold' in config:
            if not _is_number(config['log_odds_threshold']):
                self.errors.append("log_odds_threshold must be numeric")

        if 'max_considered_depth' in config:
            depth = config['max_considered_depth']
            if not _is_int(depth):
                self.errors.append("max_considered_depth must be an integer")
            elif depth < 0:
                self.errors.append("max_considered_depth cannot be negative")
            elif depth > 5000:
                self.warnings.append(
                    f"max_considered_depth is very high ({depth}), memory grows with depth x sample_size"
                )

        if 'sampling_max' in config:
            sampling_max = config['sampling_max']
            if not _is_int(sampling_max):
                self.errors.append("sampling_max must be an integer")
            elif sampling_max < 1:
                self.errors.append("sampling_max must be at least 1")

    def _validate_parallel_config(self, config: Dict[str, Any]) -> None:
        """Validate worker pool parameters."""
        if 'worker_count' in config:
            workers = config['worker_count']
            if not _is_int(workers):
                self.errors.append("worker_count must be an integer")
            elif workers < 1:
                self.errors.append("worker_count must be at least 1")
            elif os.cpu_count() and workers > os.cpu_count():
                self.warnings.append(
                    f"worker_count ({workers}) exceeds available CPUs ({os.cpu_count()})"
                )

        if 'chunk_size' in config:
            chunk_size = config['chunk_size']
            if not _is_int(chunk_size):
                self.errors.append("chunk_size must be an integer")
            elif chunk_size < 1:
                self.errors.append("chunk_size must be positive")

        if 'join_timeout' in config:
            timeout = config['join_timeout']
            if not _is_number(timeout):
                self.errors.append("join_timeout must be numeric")
            elif timeout <= 0:
                self.errors.append("join_timeout must be positive")

    def _validate_general_config(self, config: Dict[str, Any]) -> None:
        """Validate general configuration parameters."""
        if 'seed' in config:
            seed = config['seed']
            if not _is_int(seed):
                self.errors.append("seed must be an integer")
            elif seed < 0:
                self.errors.append("seed must be non-negative")

        if 'with_logging' in config and not isinstance(config['with_logging'], bool):
            self.errors.append("with_logging must be a boolean")


def validate_config_file(config_path: Path) -> Tuple[bool, List[str], List[str]]:
    """Validate a configuration file.

    Args:
        config_path: Path to configuration YAML file

    Returns:
        Tuple of (is_valid, errors, warnings)

    Raises:
        ConfigurationError: If file cannot be read or parsed
    """
    import yaml

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file: {e}") from e
    except (IOError, OSError) as e:
        raise ConfigurationError(f"Cannot read configuration file: {e}") from e

    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise ConfigurationError("Configuration file must contain a dictionary")

    validator = ConfigValidator()
    return validator.validate_config(config)
