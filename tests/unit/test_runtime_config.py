"""
Runtime Configuration Unit Tests
Tests for auditpath/config/runtime.py
"""
import logging

import pytest

from auditpath.config.runtime import (
    HashingConfig,
    LoggingConfig,
    RuntimeConfig,
    get_default_config,
    set_default_config,
)
from auditpath.merkle.merkle_tree import build_merkle_tree

from fixtures.common import VECTOR_ROOT_3_HEX


class TestDefaults:

    def test_defaults(self):
        config = RuntimeConfig()

        assert config.hashing.max_workers == 1
        assert config.hashing.parallel_threshold == 1024
        assert config.logging.level == "INFO"
        assert config.logging.file is None

    def test_invalid_hashing_values(self):
        with pytest.raises(ValueError):
            HashingConfig(max_workers=0)
        with pytest.raises(ValueError):
            HashingConfig(parallel_threshold=1)


class TestFromDict:

    def test_partial_dict(self):
        config = RuntimeConfig.from_dict({"hashing": {"max_workers": 4}})

        assert config.hashing.max_workers == 4
        assert config.hashing.parallel_threshold == 1024
        assert config.logging == LoggingConfig()

    def test_to_dict_round_trip(self):
        config = RuntimeConfig.from_dict({
            "hashing": {"max_workers": 2, "parallel_threshold": 64},
            "logging": {"level": "DEBUG", "file": "run.log"},
        })

        assert RuntimeConfig.from_dict(config.to_dict()) == config


class TestEnvOverrides:

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("AUDITPATH_MAX_WORKERS", "8")
        monkeypatch.setenv("AUDITPATH_LOG_LEVEL", "DEBUG")

        config = RuntimeConfig.from_env()

        assert config.hashing.max_workers == 8
        assert config.logging.level == "DEBUG"

    def test_env_overrides_file_values(self, monkeypatch):
        base = RuntimeConfig.from_dict({"hashing": {"max_workers": 2, "parallel_threshold": 16}})
        monkeypatch.setenv("AUDITPATH_PARALLEL_THRESHOLD", "32")

        merged = base.with_env_overrides()

        assert merged.hashing.max_workers == 2
        assert merged.hashing.parallel_threshold == 32
        assert base.hashing.parallel_threshold == 16

    @pytest.mark.parametrize("name,value", [
        ("AUDITPATH_MAX_WORKERS", "many"),
        ("AUDITPATH_MAX_WORKERS", "0"),
        ("AUDITPATH_PARALLEL_THRESHOLD", "1"),
        ("AUDITPATH_PARALLEL_THRESHOLD", "1.5"),
    ])
    def test_malformed_env_value_is_ignored(self, monkeypatch, caplog, name, value):
        monkeypatch.setenv(name, value)

        with caplog.at_level(logging.WARNING, logger="auditpath.config.runtime"):
            config = RuntimeConfig.from_env()

        assert config.hashing == HashingConfig()
        assert name in caplog.text

    def test_malformed_env_value_does_not_break_build(self, monkeypatch, three_leaves):
        monkeypatch.setenv("AUDITPATH_MAX_WORKERS", "lots")
        monkeypatch.setenv("AUDITPATH_PARALLEL_THRESHOLD", "-4")

        tree = build_merkle_tree(three_leaves)

        assert tree.root == bytes.fromhex(VECTOR_ROOT_3_HEX)

    def test_no_env_returns_same_config(self):
        config = RuntimeConfig()
        assert config.with_env_overrides() is config


class TestYaml:

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "auditpath.yaml"
        path.write_text("hashing:\n  max_workers: 3\nlogging:\n  level: WARNING\n")

        config = RuntimeConfig.from_yaml(path)

        assert config.hashing.max_workers == 3
        assert config.logging.level == "WARNING"

    def test_missing_yaml(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_yaml(tmp_path / "nope.yaml")


class TestDefaultConfig:

    def test_set_and_reset(self):
        custom = RuntimeConfig(hashing=HashingConfig(max_workers=5))
        set_default_config(custom)
        assert get_default_config() is custom

        set_default_config(None)
        assert get_default_config().hashing.max_workers == 1
