"""Unit tests for project configuration."""

import json
import tempfile
from pathlib import Path

import pytest

from refdoc.config import CONFIG_ENV, load_config
from refdoc.core.exceptions import ConfigError

COMPOSER = {
    "name": "acme/shop",
    "description": "A shop.\nWith details.",
    "authors": [
        {"name": "Jane Doe", "email": "jane@example.com"},
        {"name": "No Mail"},
    ],
    "autoload": {"psr-4": {"Acme\\Shop\\Tests\\": "tests/", "Acme\\Shop\\": "src/"}},
}


@pytest.fixture
def temp_dir(monkeypatch: pytest.MonkeyPatch):
    """Create a temporary directory for tests."""
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    with tempfile.TemporaryDirectory() as td:
        yield Path(td)


class TestDefaults:
    """Tests for an unconfigured project."""

    def test_defaults(self, temp_dir: Path) -> None:
        config = load_config(temp_dir)
        assert config.name == "PHPDOC"
        assert config.namespace == ""
        assert config.output_dir == temp_dir / "docs"
        assert config.page_front_matter() == {}


class TestComposer:
    """Tests for composer.json metadata."""

    def test_metadata(self, temp_dir: Path) -> None:
        (temp_dir / "composer.json").write_text(json.dumps(COMPOSER))
        config = load_config(temp_dir)

        assert config.name == "acme/shop"
        assert config.description.startswith("A shop.")
        assert config.authors == ["Jane Doe <jane@example.com>", "No Mail"]

    def test_shortest_psr4_namespace(self, temp_dir: Path) -> None:
        (temp_dir / "composer.json").write_text(json.dumps(COMPOSER))
        assert load_config(temp_dir).namespace == "\\Acme\\Shop"

    def test_invalid_json(self, temp_dir: Path) -> None:
        (temp_dir / "composer.json").write_text("{")
        with pytest.raises(ConfigError):
            load_config(temp_dir)


class TestYamlConfig:
    """Tests for refdoc.yaml."""

    def test_overrides_composer(self, temp_dir: Path) -> None:
        (temp_dir / "composer.json").write_text(json.dumps(COMPOSER))
        (temp_dir / "refdoc.yaml").write_text(
            "name: Shop docs\n"
            "namespace: Acme\\Shop\\Model\n"
            "output: site/api\n"
            "ignore: ['Acme\\Shop\\Model\\Internal*']\n"
            "image: https://example.com/logo.png\n"
            "front_matter:\n"
            "  layout: page\n"
        )
        config = load_config(temp_dir)

        assert config.name == "Shop docs"
        assert config.namespace == "\\Acme\\Shop\\Model"
        assert config.output_dir == temp_dir / "site" / "api"
        assert config.ignore == ["Acme\\Shop\\Model\\Internal*"]
        assert config.page_front_matter() == {
            "image": "https://example.com/logo.png",
            "layout": "page",
        }
        assert config.index_page_front_matter() == {"image": "https://example.com/logo.png"}

    def test_env_variable(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        other = temp_dir / "other.yaml"
        other.write_text("name: From env\n")
        monkeypatch.setenv(CONFIG_ENV, str(other))

        assert load_config(temp_dir).name == "From env"

    def test_explicit_path_must_exist(self, temp_dir: Path) -> None:
        with pytest.raises(ConfigError):
            load_config(temp_dir, temp_dir / "missing.yaml")

    def test_invalid_yaml(self, temp_dir: Path) -> None:
        (temp_dir / "refdoc.yaml").write_text("name: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config(temp_dir)

    def test_wrong_types(self, temp_dir: Path) -> None:
        (temp_dir / "refdoc.yaml").write_text("exclude: tests\n")
        with pytest.raises(ConfigError):
            load_config(temp_dir)

    def test_not_a_mapping(self, temp_dir: Path) -> None:
        (temp_dir / "refdoc.yaml").write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_config(temp_dir)

    def test_empty_file(self, temp_dir: Path) -> None:
        (temp_dir / "refdoc.yaml").write_text("")
        assert load_config(temp_dir).name == "PHPDOC"


class TestOverride:
    """Tests for command line overrides."""

    def test_override(self, temp_dir: Path) -> None:
        (temp_dir / "refdoc.yaml").write_text("exclude: ['tests']\n")
        config = load_config(temp_dir)
        config.override(namespace="App\\", exclude=["build2"], output=None, manifest=None)

        assert config.namespace == "\\App"
        assert config.exclude == ["tests", "build2"]
        assert config.output is None

    def test_unknown_option(self, temp_dir: Path) -> None:
        with pytest.raises(ConfigError):
            load_config(temp_dir).override(colour="blue")
