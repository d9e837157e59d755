"""Preferences loading with defaults and CLI override merging."""

from __future__ import annotations

import copy
from pathlib import Path

import yaml

from family_meals.categories import FALLBACK_CATEGORY, RECIPE_CATEGORIES
from family_meals.checklist import MANUAL_SOURCE

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "family-meals" / "config.yaml"

DEFAULTS = {
    "display": {
        "title": "Lista zakupów",
        "category_order": list(RECIPE_CATEGORIES),
        "fallback_last": True,
        "show_sources": True,
    },
    "manual_items": {
        "source_label": MANUAL_SOURCE,
        "default_category": FALLBACK_CATEGORY,
    },
}


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base, returning a new dict."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(config_path: Path | None = None) -> dict:
    """Load preferences from a YAML file, falling back to defaults."""
    path = config_path or DEFAULT_CONFIG_PATH

    if path.exists():
        with open(path, encoding="utf-8") as f:
            try:
                user_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Cannot parse {path}: {e}") from e
        if not isinstance(user_config, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        return deep_merge(copy.deepcopy(DEFAULTS), user_config)

    if config_path is not None:
        raise ValueError(f"Config file not found: {config_path}")
    return copy.deepcopy(DEFAULTS)


def apply_cli_overrides(config: dict, **overrides: object) -> dict:
    """Apply CLI argument overrides to config.

    Supports flat keys that map into nested config:
      show_sources -> display.show_sources
      title -> display.title
    """
    if overrides.get("show_sources") is not None:
        config["display"]["show_sources"] = bool(overrides["show_sources"])
    if overrides.get("title") is not None:
        config["display"]["title"] = overrides["title"]

    return config
