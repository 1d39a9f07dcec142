"""Tests for configuration loading."""

import os

import pytest

from depscope.config import DepscopeConfig, load_config
from depscope.exceptions import DepscopeError, InvalidConfigError


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """No user or project config files, no DEPSCOPE_* variables."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("DEPSCOPE_"):
            monkeypatch.delenv(key)


class TestDepscopeConfig:
    def test_defaults(self):
        config = DepscopeConfig()
        assert config.merge_policy == "sum"
        assert config.verbosity == "normal"
        assert "venv/*" in config.exclude_patterns

    @pytest.mark.parametrize(
        "field, value",
        [
            ("merge_policy", "average"),
            ("max_files", 0),
            ("tool_timeout_seconds", 0),
            ("verbosity", "loud"),
        ],
    )
    def test_validation(self, field, value):
        with pytest.raises(InvalidConfigError) as exc_info:
            DepscopeConfig(**{field: value})
        assert exc_info.value.key == field


class TestLoadConfig:
    def test_overrides(self):
        assert load_config(merge_policy="deduplicate").merge_policy == "deduplicate"

    def test_verbose_and_quiet_flags(self):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"
        assert load_config(verbose=False, quiet=False).verbosity == "normal"

    def test_project_file(self, tmp_path):
        (tmp_path / "depscope.toml").write_text('merge_policy = "deduplicate"\nmax_files = 5\n')
        config = load_config()
        assert config.merge_policy == "deduplicate"
        assert config.max_files == 5

    def test_explicit_file_with_section(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text('[depscope]\ndot_binary = "/opt/graphviz/dot"\n')
        assert load_config(config_file=path).dot_binary == "/opt/graphviz/dot"

    def test_explicit_file_as_string(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text('merge_policy = "deduplicate"\n')
        assert load_config(config_file=str(path)).merge_policy == "deduplicate"

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(DepscopeError, match="Config file not found"):
            load_config(config_file=tmp_path / "nope.toml")

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "broken.toml"
        path.write_text("merge_policy = \n")
        with pytest.raises(DepscopeError, match="Invalid config file"):
            load_config(config_file=path)

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "extra.toml"
        path.write_text("colour = true\n")
        with pytest.raises(DepscopeError, match="Invalid configuration"):
            load_config(config_file=path)

    def test_env_vars(self, monkeypatch):
        monkeypatch.setenv("DEPSCOPE_MAX_FILES", "42")
        monkeypatch.setenv("DEPSCOPE_FOLLOW_SYMLINKS", "yes")
        monkeypatch.setenv("DEPSCOPE_PLANTUML_BINARY", "/usr/bin/plantuml")
        config = load_config()
        assert config.max_files == 42
        assert config.follow_symlinks is True
        assert config.plantuml_binary == "/usr/bin/plantuml"

    def test_env_overrides_file_and_cli_overrides_env(self, tmp_path, monkeypatch):
        (tmp_path / "depscope.toml").write_text("max_files = 5\n")
        monkeypatch.setenv("DEPSCOPE_MAX_FILES", "7")
        assert load_config().max_files == 7
        assert load_config(max_files=9).max_files == 9

    def test_bad_env_value(self, monkeypatch):
        monkeypatch.setenv("DEPSCOPE_FOLLOW_SYMLINKS", "maybe")
        with pytest.raises(DepscopeError, match="DEPSCOPE_FOLLOW_SYMLINKS"):
            load_config()

    def test_env_list_is_comma_separated(self, monkeypatch):
        monkeypatch.setenv("DEPSCOPE_EXCLUDE_PATTERNS", "build/*, docs/*,")
        assert load_config().exclude_patterns == ["build/*", "docs/*"]
