"""Tests for configuration loading."""

import os
from pathlib import Path

import pytest

from funcsift.config import DEFAULT_WORKERS, ExtractionConfig, load_config
from funcsift.exceptions import ConfigurationError, InvalidConfigError


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Keep real home/project configs and FUNCSIFT_* vars out of the way."""
    home = tmp_path / "home"
    project = tmp_path / "project"
    home.mkdir()
    project.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(project)
    for key in list(os.environ):
        if key.startswith("FUNCSIFT_"):
            monkeypatch.delenv(key)
    return home, project


class TestDefaults:
    def test_defaults(self):
        config = load_config()
        assert config == ExtractionConfig()
        assert config.min_prefix_tokens == 3
        assert config.comment_marker == "//"
        assert config.parallel is True
        assert config.types == {}

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"header_workers": 0},
            {"type_workers": -1},
            {"min_prefix_tokens": -1},
            {"comment_marker": ""},
            {"ctags_timeout_seconds": 0},
            {"verbosity": "loud"},
            {"types": {"int": "yes"}},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(InvalidConfigError):
            ExtractionConfig(**kwargs)


class TestFiles:
    def test_project_overrides_global(self, isolated):
        home, project = isolated
        (home / ".funcsift.toml").write_text('ctags_binary = "uctags"\nheader_workers = 2\n')
        (project / "funcsift.toml").write_text("header_workers = 6\n")

        config = load_config()
        assert config.ctags_binary == "uctags"
        assert config.header_workers == 6

    def test_types_tables_merge(self, isolated, tmp_path):
        home, project = isolated
        (home / ".funcsift.toml").write_text("[types]\nint = true\nfloat = true\n")
        explicit = tmp_path / "extra.toml"
        explicit.write_text("[types]\nfloat = false\nString = true\n")

        config = load_config(config_file=explicit)
        assert config.types == {"int": True, "float": False, "String": True}

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(config_file=tmp_path / "nope.toml")

    def test_invalid_toml(self, isolated):
        _, project = isolated
        (project / "funcsift.toml").write_text("header_workers = = 2")
        with pytest.raises(ConfigurationError, match="Invalid project config"):
            load_config()

    def test_unknown_key(self, isolated):
        _, project = isolated
        (project / "funcsift.toml").write_text("colour = true\n")
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            load_config()


class TestEnvironment:
    def test_env_values_parsed(self, monkeypatch):
        monkeypatch.setenv("FUNCSIFT_HEADER_WORKERS", "3")
        monkeypatch.setenv("FUNCSIFT_PARALLEL", "off")
        monkeypatch.setenv("FUNCSIFT_LANGUAGE", "c")
        monkeypatch.setenv("FUNCSIFT_VERBOSITY", "quiet")

        config = load_config()
        assert config.header_workers == 3
        assert config.parallel is False
        assert config.language == "c"
        assert config.verbosity == "quiet"

    def test_env_beats_files(self, isolated, monkeypatch):
        _, project = isolated
        (project / "funcsift.toml").write_text("min_prefix_tokens = 4\n")
        monkeypatch.setenv("FUNCSIFT_MIN_PREFIX_TOKENS", "2")
        assert load_config().min_prefix_tokens == 2

    def test_bad_env_value(self, monkeypatch):
        monkeypatch.setenv("FUNCSIFT_TYPE_WORKERS", "many")
        with pytest.raises(InvalidConfigError) as exc_info:
            load_config()
        assert exc_info.value.key == "FUNCSIFT_TYPE_WORKERS"

    def test_bad_env_bool(self, monkeypatch):
        monkeypatch.setenv("FUNCSIFT_PARALLEL", "maybe")
        with pytest.raises(InvalidConfigError):
            load_config()

    def test_types_not_read_from_env(self, monkeypatch):
        monkeypatch.setenv("FUNCSIFT_TYPES", "int")
        assert load_config().types == {}


class TestOverrides:
    def test_overrides_beat_env(self, monkeypatch):
        monkeypatch.setenv("FUNCSIFT_HEADER_WORKERS", "3")
        assert load_config(header_workers=9).header_workers == 9

    def test_none_overrides_ignored(self, monkeypatch):
        monkeypatch.setenv("FUNCSIFT_LANGUAGE", "lua")
        assert load_config(language=None).language == "lua"

    def test_verbose_and_quiet_flags(self):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"
        assert load_config(verbose=False, quiet=False).verbosity == "normal"

    def test_config_file_path_type(self, tmp_path):
        explicit = tmp_path / "cfg.toml"
        explicit.write_text("parallel = false\n")
        assert load_config(config_file=Path(explicit)).parallel is False


class TestDefaultWorkers:
    def test_bounds(self):
        assert 1 <= DEFAULT_WORKERS <= 8

    def test_used_when_unset(self):
        from funcsift.extraction.aggregator import FileAggregator
        from funcsift.extraction.validator import TypeValidator

        assert FileAggregator()._max_workers == DEFAULT_WORKERS
        assert TypeValidator()._max_workers == DEFAULT_WORKERS
        assert FileAggregator(ExtractionConfig(header_workers=3))._max_workers == 3
