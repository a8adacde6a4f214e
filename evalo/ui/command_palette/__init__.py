"""
Command Palette - keyboard-driven launcher overlay.

Provides:
- CommandPaletteScreen: Modal overlay rendering the palette
- PalettePresenter: Session state, navigation and dispatch
- CommandRegistry: Read-only table of available commands
"""

from .palette_commands import (
    DEFAULT_COMMANDS,
    Capability,
    CapabilityContext,
    CommandAction,
    CommandRegistry,
    PaletteCommand,
    UserInfo,
    filter_commands,
    get_command_registry,
    load_registry,
)
from .palette_input import InputController, KeyEventHub
from .palette_presenter import NavigationCursor, PalettePresenter, PaletteState
from .palette_screen import CommandPaletteScreen

__all__ = [
    "Capability",
    "CapabilityContext",
    "CommandAction",
    "CommandPaletteScreen",
    "CommandRegistry",
    "DEFAULT_COMMANDS",
    "InputController",
    "KeyEventHub",
    "NavigationCursor",
    "PaletteCommand",
    "PalettePresenter",
    "PaletteState",
    "UserInfo",
    "filter_commands",
    "get_command_registry",
    "load_registry",
]
