"""Project configuration.

Settings are layered, later sources winning:

1. Built-in defaults
2. ``composer.json`` in the project root (name, description, authors and the
   shortest PSR-4 namespace)
3. ``refdoc.yaml`` in the project root, or the file named by ``REFDOC_CONFIG``
4. Command line options

Example ``refdoc.yaml``::

    name: acme/shop
    namespace: Acme\\Shop
    output: docs/reference
    exclude: ["tests/*"]
    ignore: ["Acme\\Shop\\Internal\\*"]
    image: https://example.com/logo.png
    front_matter:
      layout: page
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from refdoc.core import names
from refdoc.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE = "refdoc.yaml"
CONFIG_ENV = "REFDOC_CONFIG"
COMPOSER_FILE = "composer.json"

_LIST_KEYS = ("authors", "exclude", "ignore")
_MAPPING_KEYS = ("front_matter", "index_front_matter")
_STRING_KEYS = ("name", "description", "namespace", "output", "image", "manifest")


@dataclass
class ProjectConfig:
    """Everything a build needs to know about a project."""

    root: Path
    name: str = "PHPDOC"
    description: str = "PHPDOC documentation"
    namespace: str = ""
    authors: list[str] = field(default_factory=list)
    output: Path | None = None
    exclude: list[str] = field(default_factory=list)
    ignore: list[str] = field(default_factory=list)
    front_matter: dict[str, Any] = field(default_factory=dict)
    index_front_matter: dict[str, Any] = field(default_factory=dict)
    image: str | None = None
    manifest: Path | None = None

    @property
    def output_dir(self) -> Path:
        return self.output if self.output is not None else self.root / "docs"

    def page_front_matter(self) -> dict[str, Any]:
        extra = {"image": self.image} if self.image else {}
        return {**extra, **self.front_matter}

    def index_page_front_matter(self) -> dict[str, Any]:
        extra = {"image": self.image} if self.image else {}
        return {**extra, **self.index_front_matter}

    def override(self, **options: Any) -> None:
        """Apply command line options; ``None`` and empty values are skipped."""
        for key, value in options.items():
            if value is None or value == []:
                continue
            if not hasattr(self, key):
                raise ConfigError(f"Unknown option: {key}")
            if key == "exclude":
                value = self.exclude + list(value)
            elif key == "namespace":
                value = _clean_namespace(value)
            setattr(self, key, value)


def load_config(root: Path, config_path: Path | None = None) -> ProjectConfig:
    """Load the configuration of the project rooted at ``root``.

    Raises:
        ConfigError: If composer.json or the YAML file is malformed, or an
            explicitly named config file does not exist
    """
    config = ProjectConfig(root=root)
    _apply_composer(config, root / COMPOSER_FILE)

    if config_path is None and os.environ.get(CONFIG_ENV):
        config_path = Path(os.environ[CONFIG_ENV])
        logger.debug("Using config file from %s: %s", CONFIG_ENV, config_path)

    if config_path is not None:
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        _apply_yaml(config, config_path)
    elif (root / CONFIG_FILE).exists():
        _apply_yaml(config, root / CONFIG_FILE)

    return config


def _apply_composer(config: ProjectConfig, path: Path) -> None:
    if not path.exists():
        return
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {path}: expected an object")

    config.name = data.get("name") or config.name
    config.description = data.get("description") or config.description

    for author in data.get("authors") or []:
        if not isinstance(author, dict) or not author.get("name"):
            continue
        email = author.get("email")
        config.authors.append(f"{author['name']} <{email}>" if email else author["name"])

    psr4 = (data.get("autoload") or {}).get("psr-4") or {}
    prefixes = [prefix for prefix in psr4 if prefix]
    if prefixes:
        config.namespace = _clean_namespace(min(prefixes, key=len))
    logger.debug("Loaded project metadata from %s", path)


def _apply_yaml(config: ProjectConfig, path: Path) -> None:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {path}: expected a mapping")

    for key, value in data.items():
        if key in _STRING_KEYS:
            if not isinstance(value, str):
                raise ConfigError(f"Invalid {path}: '{key}' must be a string")
            if key in ("output", "manifest"):
                value = _relative_to(config.root, Path(value))
            elif key == "namespace":
                value = _clean_namespace(value)
        elif key in _LIST_KEYS:
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigError(f"Invalid {path}: '{key}' must be a list of strings")
        elif key in _MAPPING_KEYS:
            if not isinstance(value, dict):
                raise ConfigError(f"Invalid {path}: '{key}' must be a mapping")
        else:
            logger.warning("Ignoring unknown key '%s' in %s", key, path)
            continue
        setattr(config, key, value)
    logger.debug("Loaded configuration from %s", path)


def _relative_to(root: Path, path: Path) -> Path:
    return path if path.is_absolute() else root / path


def _clean_namespace(namespace: str) -> str:
    namespace = namespace.strip().strip(names.SEPARATOR)
    return names.normalize(namespace) if namespace else ""
