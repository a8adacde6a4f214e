"""
Keyboard plumbing for the command palette.

KeyEventHub is the window-level key source: handlers subscribe and get back an
unsubscribe callable. InputController is the palette's one handler; the
presenter subscribes it on open and releases it on close.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from evalo.config.constants import KEY_CLOSE, KEY_CONFIRM, KEY_NEXT, KEY_PREV

if TYPE_CHECKING:
    from .palette_presenter import PalettePresenter

logger = logging.getLogger(__name__)

KeyHandler = Callable[[str], bool]


class KeyEventHub:
    """Fan-out of key names to subscribed handlers."""

    def __init__(self) -> None:
        self._handlers: list[KeyHandler] = []

    @property
    def listener_count(self) -> int:
        return len(self._handlers)

    def subscribe(self, handler: KeyHandler) -> Callable[[], None]:
        """Attach a handler. The returned callable detaches it (idempotent)."""
        self._handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    def dispatch(self, key: str) -> bool:
        """
        Deliver a key to every handler.

        Returns:
            True if any handler intercepted the key (default action suppressed)
        """
        handled = False
        for handler in list(self._handlers):
            if handler(key):
                handled = True
        return handled


class InputController:
    """Maps palette keys to presenter transitions while the palette is open.

    | key    | effect          |
    |--------|-----------------|
    | down   | move_next()     |
    | up     | move_prev()     |
    | enter  | confirm()       |
    | escape | close()         |

    Every other key is left alone so the text input keeps receiving it.
    """

    def __init__(self, presenter: PalettePresenter) -> None:
        self.presenter = presenter

    def handle_key(self, key: str) -> bool:
        if not self.presenter.is_open:
            return False

        if key == KEY_NEXT:
            self.presenter.move_next()
        elif key == KEY_PREV:
            self.presenter.move_prev()
        elif key == KEY_CONFIRM:
            self.presenter.confirm()
        elif key == KEY_CLOSE:
            self.presenter.close()
        else:
            return False

        logger.debug(f"Palette key handled: {key}")
        return True
