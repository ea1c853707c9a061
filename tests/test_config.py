"""Tests for the scaffolding configuration loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from ofcourse.config import ScaffoldConfig, expand_env_vars, find_config_file, load_config
from ofcourse.exceptions import ConfigError


class TestExpandEnvVars:
    """Tests for environment variable expansion."""

    def test_braced_and_bare(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REGISTRY", "reg.example.com")

        assert expand_env_vars("${REGISTRY}/ci") == "reg.example.com/ci"
        assert expand_env_vars("$REGISTRY/ci") == "reg.example.com/ci"

    def test_injected_environ(self) -> None:
        assert expand_env_vars("${A}-$B", {"A": "1", "B": "2"}) == "1-2"

    def test_no_references(self) -> None:
        assert expand_env_vars("registry.example.com", {}) == "registry.example.com"

    def test_unset_variable(self) -> None:
        """An unset variable is an error, naming every missing variable."""
        with pytest.raises(ConfigError) as exc_info:
            expand_env_vars("${REGISTRY}/$TEAM", {})

        assert exc_info.value.details == {"variables": ["REGISTRY", "TEAM"]}


class TestLoadConfig:
    """Tests for load_config."""

    def test_load(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REGISTRY", "reg.example.com")
        config_file = tmp_path / ".ofcourse.yaml"
        config_file.write_text(
            "resource: s3-sync\ndocker_registry: ${REGISTRY}/concourse\nimport_path: s3_sync\n"
        )

        config = load_config(config_file)

        assert config == ScaffoldConfig(
            resource="s3-sync",
            docker_registry="reg.example.com/concourse",
            import_path="s3_sync",
        )

    def test_missing_file(self, tmp_path: Path) -> None:
        assert load_config(tmp_path / "absent.yaml") == ScaffoldConfig()

    def test_empty_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / ".ofcourse.yaml"
        config_file.write_text("")

        assert load_config(config_file) == ScaffoldConfig()

    def test_partial(self, tmp_path: Path) -> None:
        config_file = tmp_path / ".ofcourse.yaml"
        config_file.write_text("resource: s3-sync\n")

        config = load_config(config_file)

        assert config.resource == "s3-sync"
        assert config.docker_registry is None

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / ".ofcourse.yaml"
        config_file.write_text("resource: [unclosed\n")

        with pytest.raises(ConfigError, match="Failed to read"):
            load_config(config_file)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        config_file = tmp_path / ".ofcourse.yaml"
        config_file.write_text("- resource\n- s3-sync\n")

        with pytest.raises(ConfigError, match="Expected a mapping"):
            load_config(config_file)

    def test_unset_variable(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("OFCOURSE_UNSET", raising=False)
        config_file = tmp_path / ".ofcourse.yaml"
        config_file.write_text("docker_registry: ${OFCOURSE_UNSET}/ci\n")

        with pytest.raises(ConfigError, match="Undefined environment variable"):
            load_config(config_file)

    def test_unknown_key(self, tmp_path: Path) -> None:
        config_file = tmp_path / ".ofcourse.yaml"
        config_file.write_text("resource: s3-sync\nregistry: reg\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(config_file)

        assert exc_info.value.details == {"fields": ["registry"]}

    def test_searches_working_directory(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / ".ofcourse.yaml").write_text("import_path: found\n")
        monkeypatch.chdir(tmp_path)

        assert load_config().import_path == "found"


class TestFindConfigFile:
    """Tests for find_config_file."""

    def test_found_in_parent(self, tmp_path: Path) -> None:
        config_file = tmp_path / ".ofcourse.yaml"
        config_file.write_text("{}")
        child = tmp_path / "a" / "b"
        child.mkdir(parents=True)

        assert find_config_file(child) == config_file

    def test_stops_at_repository_root(self, tmp_path: Path) -> None:
        """A config file above the enclosing repository is not used."""
        (tmp_path / ".ofcourse.yaml").write_text("{}")
        repo = tmp_path / "repo"
        (repo / ".git").mkdir(parents=True)
        child = repo / "src"
        child.mkdir()

        assert find_config_file(child) is None

    def test_found_at_repository_root(self, tmp_path: Path) -> None:
        repo = tmp_path / "repo"
        (repo / ".git").mkdir(parents=True)
        config_file = repo / ".ofcourse.yaml"
        config_file.write_text("{}")

        assert find_config_file(repo) == config_file


class TestMerged:
    """Tests for ScaffoldConfig.merged."""

    def test_overrides_win(self) -> None:
        config = ScaffoldConfig(resource="from-file", import_path="pkg")

        merged = config.merged(resource="from-option", import_path=None)

        assert merged.resource == "from-option"
        assert merged.import_path == "pkg"
        assert config.resource == "from-file"
