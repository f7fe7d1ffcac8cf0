"""Tests for shipwright configuration."""

from pathlib import Path

import pytest

from shipwright.config import (
    ProjectConfig,
    ShipwrightConfig,
    get_shipwright_dir,
    load_config,
    write_config_template,
)
from shipwright.errors import ConfigError


def test_defaults():
    """Defaults describe a Maven plugin project deployed next to the server."""
    config = ShipwrightConfig()
    assert config.project.descriptor == "pom.xml"
    assert config.tracking.roots == ["src", "pom.xml"]
    assert config.tracking.extensions == [".java", ".yml", ".xml"]
    assert config.build.exec == "mvn"
    assert config.git.remote == "origin"
    assert config.release.requirements == []


def test_artifact_id_defaults_to_name():
    assert ProjectConfig(name="WeatherVoting").get_artifact_id() == "WeatherVoting"
    assert ProjectConfig(name="Weather", artifact_id="weather-core").get_artifact_id() == (
        "weather-core"
    )


def test_tag_for_uses_prefix():
    config = ShipwrightConfig()
    assert config.tag_for("1.3.0") == "v1.3.0"
    config.git.tag_prefix = "release-"
    assert config.tag_for("1.3.0") == "release-1.3.0"


def test_deploy_dir_is_relative_to_project(tmp_path: Path):
    config = ShipwrightConfig()
    project = tmp_path / "plugin"
    assert config.deploy_dir(project) == (tmp_path / "server" / "plugins").resolve()


def test_deploy_pattern_uses_artifact_id():
    config = ShipwrightConfig(project=ProjectConfig(name="WeatherVoting"))
    assert config.deploy_pattern() == "WeatherVoting-*.jar"


def test_load_missing_returns_defaults(tmp_path: Path):
    """No config file is not an error."""
    assert load_config(tmp_path / ".shipwright") == ShipwrightConfig()


def test_template_roundtrip(tmp_path: Path):
    """The written template loads back with the prefilled project name."""
    shipwright_dir = get_shipwright_dir(tmp_path)
    path = write_config_template(shipwright_dir, "WeatherVoting")

    assert path == tmp_path / ".shipwright" / "config.toml"
    config = load_config(shipwright_dir)
    assert config.project.name == "WeatherVoting"
    assert config.release.requirements == ["Spigot/Paper 1.21.6+", "Java 21+"]
    assert config.deploy.directory == "../server/plugins"


def test_partial_config_keeps_defaults(tmp_path: Path):
    shipwright_dir = tmp_path / ".shipwright"
    shipwright_dir.mkdir()
    (shipwright_dir / "config.toml").write_text('[build]\nexec = "./mvnw"\n')

    config = load_config(shipwright_dir)

    assert config.build.exec == "./mvnw"
    assert config.build.package_args == ["clean", "package", "-q"]
    assert config.project.descriptor == "pom.xml"


def test_invalid_toml(tmp_path: Path):
    shipwright_dir = tmp_path / ".shipwright"
    shipwright_dir.mkdir()
    (shipwright_dir / "config.toml").write_text("[project\nname = ")
    with pytest.raises(ConfigError, match="Invalid config"):
        load_config(shipwright_dir)


def test_invalid_field_type(tmp_path: Path):
    shipwright_dir = tmp_path / ".shipwright"
    shipwright_dir.mkdir()
    (shipwright_dir / "config.toml").write_text('[tracking]\nroots = "src"\n')
    with pytest.raises(ConfigError):
        load_config(shipwright_dir)
