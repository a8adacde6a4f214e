"""
evalo UI configuration.

Handles persistence of UI preferences: theme and palette host settings.
Config is stored in ~/.config/evalo/ui_config.json

Palette session state (query, cursor) is never written here.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, TypedDict

from ..exceptions import ConfigurationError
from .constants import DEFAULT_OPEN_KEY, EVALO_CONFIG_DIR


class PaletteConfig(TypedDict):
    """Host settings for the command palette."""

    open_key: str
    registry_path: str | None


DEFAULT_PALETTE: PaletteConfig = {
    "open_key": DEFAULT_OPEN_KEY,
    "registry_path": None,
}

DEFAULT_CONFIG: dict[str, Any] = {
    "theme": "textual-dark",
    "palette": {**DEFAULT_PALETTE},
}


def get_ui_config_path() -> Path:
    """
    Get path to UI config file.

    Returns:
        Path to ~/.config/evalo/ui_config.json
    """
    EVALO_CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    return EVALO_CONFIG_DIR / "ui_config.json"


def load_ui_config() -> dict[str, Any]:
    """
    Load UI configuration from file.

    Returns:
        Config dict, or defaults if file doesn't exist or is invalid
    """
    path = get_ui_config_path()
    if path.exists():
        try:
            config = json.loads(path.read_text())
            # Merge with defaults to handle missing keys
            return {**DEFAULT_CONFIG, **config}
        except (json.JSONDecodeError, OSError):
            return DEFAULT_CONFIG.copy()
    return DEFAULT_CONFIG.copy()


def save_ui_config(config: dict[str, Any]) -> None:
    """
    Save UI configuration to file.

    Args:
        config: Configuration dict to save
    """
    path = get_ui_config_path()
    try:
        path.write_text(json.dumps(config, indent=2) + "\n")
    except OSError:
        # Silently fail - config is non-critical
        pass


def get_theme() -> str:
    """Get current theme name from config."""
    return str(load_ui_config().get("theme", DEFAULT_CONFIG["theme"]))


def get_palette_config() -> PaletteConfig:
    """
    Get palette host settings, merged with defaults.

    Raises:
        ConfigurationError: if a palette setting has the wrong type
    """
    raw = load_ui_config().get("palette", {})
    if not isinstance(raw, dict):
        return {**DEFAULT_PALETTE}
    merged: PaletteConfig = {**DEFAULT_PALETTE, **raw}  # type: ignore[typeddict-item]

    if not isinstance(merged["open_key"], str) or not merged["open_key"]:
        raise ConfigurationError(
            "open_key must be a non-empty key name", setting="palette.open_key"
        )
    registry_path = merged["registry_path"]
    if registry_path is not None and not isinstance(registry_path, str):
        raise ConfigurationError(
            "registry_path must be a string path", setting="palette.registry_path"
        )
    return merged


def set_palette_config(palette: PaletteConfig) -> None:
    """Persist palette host settings."""
    config = load_ui_config()
    config["palette"] = dict(palette)
    save_ui_config(config)
