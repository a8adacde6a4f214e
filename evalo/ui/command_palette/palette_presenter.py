"""
Presenter for the command palette.

Owns the open/closed lifecycle, the session state (query + cursor), the
filtered result list and action dispatch. Nothing here touches Textual, so
the whole palette can be driven from tests.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from .palette_commands import (
    CapabilityContext,
    CommandRegistry,
    PaletteCommand,
    filter_commands,
    get_command_registry,
)
from .palette_input import InputController, KeyEventHub

logger = logging.getLogger(__name__)


@dataclass
class NavigationCursor:
    """Selection index into the current filtered list. Wraps at both ends."""

    index: int = 0

    def move_next(self, count: int) -> None:
        if count <= 0:
            return
        self.index = (self.index + 1) % count

    def move_prev(self, count: int) -> None:
        if count <= 0:
            return
        self.index = (self.index - 1 + count) % count

    def set(self, index: int, count: int) -> bool:
        """Absolute set (mouse hover). Returns True if the index changed."""
        if not 0 <= index < count or index == self.index:
            return False
        self.index = index
        return True

    def reset(self) -> None:
        self.index = 0


@dataclass
class PaletteState:
    """Current state of the palette. Rebuilt on every open."""

    query: str = ""
    results: list[PaletteCommand] = field(default_factory=list)
    cursor: NavigationCursor = field(default_factory=NavigationCursor)
    is_open: bool = False

    @property
    def active_index(self) -> int:
        return self.cursor.index


class PalettePresenter:
    """
    Handles command palette business logic.

    Lifecycle:
    - open(): fresh session, attach the key controller, schedule focus
    - close(): detach the key controller, discard the session, call on_dismiss

    Both are idempotent, so at most one controller is attached per session and
    on_dismiss fires once per close.
    """

    def __init__(
        self,
        context: CapabilityContext,
        registry: CommandRegistry | None = None,
        on_dismiss: Callable[[], None] | None = None,
        on_state_update: Callable[[PaletteState], None] | None = None,
        key_hub: KeyEventHub | None = None,
    ):
        self.context = context
        self.registry = registry if registry is not None else get_command_registry()
        self.on_dismiss = on_dismiss
        self.on_state_update = on_state_update
        self.key_hub = key_hub if key_hub is not None else KeyEventHub()
        self.controller = InputController(self)
        self._state = PaletteState()
        self._filter_key: tuple[str, str | None] | None = None
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def state(self) -> PaletteState:
        """Get current state."""
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state.is_open

    @property
    def results(self) -> list[PaletteCommand]:
        """The visible commands for the current query and user."""
        self._refresh_results()
        return self._state.results

    def _notify_update(self) -> None:
        """Notify listeners of state change."""
        if self.on_state_update:
            self.on_state_update(self._state)

    def _current_role(self) -> str | None:
        user = self.context.user
        return user.role if user is not None else None

    def _refresh_results(self) -> bool:
        """
        Recompute the filtered list if the query or the user's role changed.

        A new list always puts the cursor back on its first entry.
        """
        if not self._state.is_open:
            return False
        key = (self._state.query, self._current_role())
        if key == self._filter_key:
            return False
        self._filter_key = key
        self._state.results = filter_commands(
            self.registry, self._state.query, self.context.user
        )
        self._state.cursor.reset()
        return True

    # -------------------------------------------------------------------------
    # Overlay lifecycle
    # -------------------------------------------------------------------------

    def open(self, schedule_focus: Callable[[], None] | None = None) -> None:
        """
        Closed -> Open.

        Args:
            schedule_focus: Called once the listener is attached; expected to
                defer moving focus to the text input until after the next
                render pass.
        """
        if self._state.is_open:
            logger.debug("Palette already open, ignoring open request")
            return

        self._state = PaletteState(is_open=True)
        self._filter_key = None
        self._refresh_results()
        self._unsubscribe = self.key_hub.subscribe(self.controller.handle_key)
        logger.debug(f"Palette opened with {len(self._state.results)} visible commands")

        if schedule_focus is not None:
            schedule_focus()
        self._notify_update()

    def close(self) -> None:
        """Open -> Closed. Safe to call at any point; no-op when closed."""
        if not self._state.is_open:
            return

        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._state = PaletteState()
        self._filter_key = None
        logger.debug("Palette closed")

        self._notify_update()
        if self.on_dismiss:
            self.on_dismiss()

    def dismiss(self) -> None:
        """External dismiss request (e.g. a click outside the palette)."""
        self.close()

    # -------------------------------------------------------------------------
    # Query + cursor
    # -------------------------------------------------------------------------

    def set_query(self, query: str) -> None:
        if not self._state.is_open or query == self._state.query:
            return
        self._state.query = query
        self._refresh_results()
        self._notify_update()

    def move_next(self) -> None:
        if not self._state.is_open:
            return
        self._refresh_results()
        self._state.cursor.move_next(len(self._state.results))
        self._notify_update()

    def move_prev(self) -> None:
        if not self._state.is_open:
            return
        self._refresh_results()
        self._state.cursor.move_prev(len(self._state.results))
        self._notify_update()

    def hover(self, index: int) -> None:
        """Mouse over a visible row: select it directly."""
        if not self._state.is_open:
            return
        refreshed = self._refresh_results()
        changed = self._state.cursor.set(index, len(self._state.results))
        if changed or refreshed:
            self._notify_update()

    @property
    def selected(self) -> PaletteCommand | None:
        """Get the currently selected command, or None with no results."""
        results = self.results
        if not results:
            return None
        index = self._state.cursor.index
        if 0 <= index < len(results):
            return results[index]
        return None

    # -------------------------------------------------------------------------
    # Action dispatch
    # -------------------------------------------------------------------------

    def confirm(self) -> bool:
        """
        Run the selected command against the context, then close.

        Returns:
            True if a command was dispatched, False if there was nothing to run
        """
        if not self._state.is_open:
            return False

        command = self.selected
        if command is None:
            return False

        logger.info(f"Dispatching palette command {command.id}: {command.action.describe()}")
        try:
            command.action(self.context)
        finally:
            self.close()
        return True

    def click(self, index: int) -> bool:
        """Select a visible row and confirm it in one gesture."""
        if not self._state.is_open:
            return False
        self._refresh_results()
        if not 0 <= index < len(self._state.results):
            return False
        self._state.cursor.set(index, len(self._state.results))
        return self.confirm()
