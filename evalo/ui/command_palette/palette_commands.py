"""
Command registry for the command palette.

Commands are plain data: display metadata, an optional role gate and a
reference to one capability of the host context. The registry is built once
and is read-only afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Protocol

import yaml

from evalo.config.constants import ADMIN_ROLE
from evalo.exceptions import RegistryError

logger = logging.getLogger(__name__)


class Capability(Enum):
    """Operations of the host context that a command may invoke."""

    NAVIGATE_TO = "navigate_to"
    LOGOUT = "logout"
    TOGGLE_COPY_PASTE = "toggle_copy_paste"


# Inclusive (min, max) positional argument counts per capability
CAPABILITY_ARITY: dict[Capability, tuple[int, int]] = {
    Capability.NAVIGATE_TO: (1, 2),
    Capability.LOGOUT: (0, 0),
    Capability.TOGGLE_COPY_PASTE: (0, 0),
}


@dataclass(frozen=True)
class UserInfo:
    """The signed-in user as seen by the palette."""

    role: str


class CapabilityContext(Protocol):
    """Host-owned operations the palette can invoke but never mutates."""

    user: UserInfo | None

    def navigate_to(self, page: str, section: str | None = None) -> None: ...

    def logout(self) -> None: ...

    def toggle_copy_paste(self) -> None: ...


@dataclass(frozen=True)
class CommandAction:
    """A reference to one capability plus its positional arguments."""

    capability: Capability
    args: tuple[str, ...] = ()

    def __call__(self, context: CapabilityContext) -> None:
        getattr(context, self.capability.value)(*self.args)

    def describe(self) -> str:
        return f"{self.capability.value}({', '.join(self.args)})"


def navigate(page: str, section: str | None = None) -> CommandAction:
    """Build a navigate_to action."""
    args = (page,) if section is None else (page, section)
    return CommandAction(Capability.NAVIGATE_TO, args)


@dataclass(frozen=True)
class PaletteCommand:
    """A command that can be executed from the palette."""

    id: str  # Unique identifier, e.g., "home"
    title: str  # Display name, matched against the query
    icon: str  # Emoji shown next to the title
    section: str  # Grouping label: "Navigation", "Account", ...
    action: CommandAction
    role: str | None = None  # None = visible to everyone


class CommandRegistry:
    """Immutable, ordered table of palette commands.

    Entries are validated here, once. The palette never re-checks them.
    """

    def __init__(self, commands: Iterable[PaletteCommand]):
        self._commands: tuple[PaletteCommand, ...] = tuple(commands)
        self._by_id: dict[str, PaletteCommand] = {}
        for command in self._commands:
            self._validate(command)
            self._by_id[command.id] = command
        logger.debug(f"Loaded {len(self._commands)} palette commands")

    def _validate(self, command: PaletteCommand) -> None:
        if not command.id:
            raise RegistryError("Command id must be a non-empty string")
        if command.id in self._by_id:
            raise RegistryError("Duplicate command id", command_id=command.id)
        if not command.title:
            raise RegistryError("Command title must be non-empty", command_id=command.id)
        if not isinstance(command.action, CommandAction):
            raise RegistryError("Command has no capability action", command_id=command.id)
        low, high = CAPABILITY_ARITY[command.action.capability]
        if not low <= len(command.action.args) <= high:
            raise RegistryError(
                "Wrong number of action args",
                command_id=command.id,
                capability=command.action.capability.value,
                expected=f"{low}-{high}" if low != high else str(low),
                got=len(command.action.args),
            )

    def __iter__(self) -> Iterator[PaletteCommand]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    @property
    def commands(self) -> tuple[PaletteCommand, ...]:
        return self._commands

    def get(self, command_id: str) -> PaletteCommand | None:
        """Get a command by ID."""
        return self._by_id.get(command_id)

    def ids(self) -> list[str]:
        return [c.id for c in self._commands]


def is_visible_to(command: PaletteCommand, user: UserInfo | None) -> bool:
    """Role gate: unrestricted, same role, or admin."""
    if command.role is None:
        return True
    if user is None:
        return False
    return user.role == command.role or user.role == ADMIN_ROLE


def filter_commands(
    registry: Iterable[PaletteCommand],
    query: str,
    user: UserInfo | None,
) -> list[PaletteCommand]:
    """
    Commands whose title contains the query (case-insensitive) and that pass
    the role gate, in registry order.

    Literal substring matching only; an empty query keeps every title.
    """
    needle = query.lower()
    return [
        cmd
        for cmd in registry
        if needle in cmd.title.lower() and is_visible_to(cmd, user)
    ]


# =============================================================================
# Default commands
# =============================================================================

DEFAULT_COMMANDS: tuple[PaletteCommand, ...] = (
    PaletteCommand("home", "Go to Home", "🏠", "Navigation", navigate("home")),
    PaletteCommand(
        "dashboard", "My Dashboard", "📊", "Navigation", navigate("home", "status-section")
    ),
    PaletteCommand(
        "create-test", "Create New Test", "📝", "Teacher Actions", navigate("home"),
        role="teacher",
    ),
    PaletteCommand(
        "manage-users", "Manage Users", "👥", "Admin Actions", navigate("home"),
        role=ADMIN_ROLE,
    ),
    PaletteCommand(
        "upload-books", "Upload/Index Books", "📚", "Teacher Actions", navigate("home"),
        role="teacher",
    ),
    PaletteCommand("logout", "Logout", "🚪", "Account", CommandAction(Capability.LOGOUT)),
    PaletteCommand(
        "toggle-copy", "Toggle Global Copy-Paste", "🔒", "Admin Actions",
        CommandAction(Capability.TOGGLE_COPY_PASTE),
        role=ADMIN_ROLE,
    ),
    PaletteCommand("profile", "My Profile", "👤", "Account", navigate("profile")),
)


# =============================================================================
# Registry files
# =============================================================================


def _command_from_dict(data: Mapping[str, Any]) -> PaletteCommand:
    if not isinstance(data, Mapping):
        raise RegistryError("Command entry must be a mapping", entry=data)
    command_id = data.get("id")
    action_data = data.get("action")
    if not isinstance(action_data, Mapping):
        raise RegistryError("Command has no action mapping", command_id=command_id)

    try:
        capability = Capability(action_data.get("capability"))
    except ValueError as e:
        raise RegistryError(
            "Unknown capability",
            command_id=command_id,
            capability=action_data.get("capability"),
        ) from e

    args = action_data.get("args") or []
    if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
        raise RegistryError("Action args must be a list of strings", command_id=command_id)

    return PaletteCommand(
        id=str(command_id or ""),
        title=str(data.get("title") or ""),
        icon=str(data.get("icon") or ""),
        section=str(data.get("section") or ""),
        action=CommandAction(capability, tuple(args)),
        role=data.get("role"),
    )


def registry_from_dicts(entries: Iterable[Mapping[str, Any]]) -> CommandRegistry:
    """Build a validated registry from plain mappings."""
    return CommandRegistry(_command_from_dict(entry) for entry in entries)


def registry_to_dicts(registry: Iterable[PaletteCommand]) -> list[dict[str, Any]]:
    """Serialize commands to the mapping shape read by `registry_from_dicts`."""
    entries: list[dict[str, Any]] = []
    for cmd in registry:
        entry: dict[str, Any] = {
            "id": cmd.id,
            "title": cmd.title,
            "icon": cmd.icon,
            "section": cmd.section,
            "action": {
                "capability": cmd.action.capability.value,
                "args": list(cmd.action.args),
            },
        }
        if cmd.role is not None:
            entry["role"] = cmd.role
        entries.append(entry)
    return entries


def load_registry(path: Path) -> CommandRegistry:
    """
    Load a command registry from a YAML file.

    The file holds a top-level ``commands`` list; each entry has ``id``,
    ``title``, ``icon``, ``section``, optional ``role`` and an ``action``
    mapping with ``capability`` and ``args``.

    Raises:
        RegistryError: if the file is unreadable, empty, or an entry is malformed
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise RegistryError("Cannot read registry file", path=str(path)) from e
    except yaml.YAMLError as e:
        raise RegistryError("Registry file is not valid YAML", path=str(path)) from e

    if not isinstance(data, dict) or not isinstance(data.get("commands"), list):
        raise RegistryError("Registry file has no commands list", path=str(path))

    registry = registry_from_dicts(data["commands"])
    logger.info(f"Loaded palette registry from {path} ({len(registry)} commands)")
    return registry


# Global registry instance
_registry: CommandRegistry | None = None


def get_command_registry() -> CommandRegistry:
    """Get the default command registry instance."""
    global _registry
    if _registry is None:
        _registry = CommandRegistry(DEFAULT_COMMANDS)
    return _registry
