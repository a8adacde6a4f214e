"""Configuration for evalo."""

from .constants import ADMIN_ROLE, EVALO_CONFIG_DIR, KNOWN_ROLES
from .ui_config import get_palette_config, load_ui_config, save_ui_config

__all__ = [
    "ADMIN_ROLE",
    "EVALO_CONFIG_DIR",
    "KNOWN_ROLES",
    "get_palette_config",
    "load_ui_config",
    "save_ui_config",
]
