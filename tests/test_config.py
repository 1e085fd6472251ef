"""
Tests for configuration loading and hashing.
"""

import pytest

from het_sensitivity.config import (
    MAX_CONSIDERED_DEPTH,
    SAMPLING_MAX,
    SensitivityConfig,
    dump_config,
    load_config,
)
from het_sensitivity.exceptions import ConfigurationError


class TestSensitivityConfig:
    """Test the configuration dataclass."""

    def test_defaults(self):
        config = SensitivityConfig()
        assert config.worker_count == 8
        assert config.chunk_size == 1000
        assert config.max_considered_depth == MAX_CONSIDERED_DEPTH == 1000
        assert config.sampling_max == SAMPLING_MAX == 600
        assert config.seed == 51

    def test_round_trip(self, temp_dir):
        config = SensitivityConfig(seed=7, sample_size=2500, log_odds_threshold=5.0, worker_count=2)
        path = temp_dir / "config.yaml"
        dump_config(config, path)
        assert load_config(path) == config

    def test_partial_file_uses_defaults(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("sample_size: 2000\nworker_count: 4\n", encoding="utf-8")
        config = load_config(path)
        assert config.sample_size == 2000
        assert config.worker_count == 4
        assert config.chunk_size == 1000

    def test_empty_file(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == SensitivityConfig()

    def test_unknown_key(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("sample_size: 10\nthreads: 4\n", encoding="utf-8")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)
        assert exc_info.value.details["unknown_keys"] == ["threads"]

    def test_non_mapping(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_invalid_yaml(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("sample_size: [1, 2\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_config(path)

    def test_hash_is_stable(self):
        assert SensitivityConfig().config_hash() == SensitivityConfig().config_hash()
        assert len(SensitivityConfig().config_hash()) == 16

    def test_hash_changes_with_parameters(self):
        assert SensitivityConfig(seed=1).config_hash() != SensitivityConfig(seed=2).config_hash()
