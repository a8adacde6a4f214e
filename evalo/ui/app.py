"""
Host application for the command palette.

EvaloApp owns the single PalettePresenter and the capability context the
palette dispatches against. The rest of the Evalo front-end (3D scenes,
profile views, chat) lives elsewhere; here pages are just names shown in a
status view.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from textual import events
from textual.app import App, ComposeResult
from textual.widgets import Footer, Header, Static

from evalo.config.constants import DEFAULT_OPEN_KEY

from .command_palette import (
    CommandPaletteScreen,
    CommandRegistry,
    PalettePresenter,
    UserInfo,
)

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Capability context backed by the running app."""

    user: UserInfo | None = None
    page: str = "home"
    section: str | None = None
    copy_paste_enabled: bool = True
    on_change: Callable[[], None] | None = None

    def _changed(self) -> None:
        if self.on_change:
            self.on_change()

    def navigate_to(self, page: str, section: str | None = None) -> None:
        logger.info(f"Navigating to {page}" + (f"#{section}" if section else ""))
        self.page = page
        self.section = section
        self._changed()

    def logout(self) -> None:
        logger.info("User logged out")
        self.user = None
        self._changed()

    def toggle_copy_paste(self) -> None:
        self.copy_paste_enabled = not self.copy_paste_enabled
        logger.info(f"Global copy-paste {'enabled' if self.copy_paste_enabled else 'disabled'}")
        self._changed()

    def describe(self) -> str:
        location = self.page + (f" › {self.section}" if self.section else "")
        who = self.user.role if self.user else "guest"
        copy = "on" if self.copy_paste_enabled else "off"
        return f"Page: {location}\nUser: {who}\nCopy-paste: {copy}"


class EvaloApp(App[None]):
    """Minimal Evalo shell with a keyboard command palette."""

    CSS = """
    #page-view {
        padding: 1 2;
    }
    """

    TITLE = "Evalo"
    ENABLE_COMMAND_PALETTE = False

    def __init__(
        self,
        registry: CommandRegistry | None = None,
        user: UserInfo | None = None,
        open_key: str = DEFAULT_OPEN_KEY,
        theme_name: str | None = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.open_key = open_key
        self.theme_name = theme_name
        self.context = AppContext(user=user, on_change=self._refresh_page)
        self.palette = PalettePresenter(
            self.context,
            registry=registry,
            on_dismiss=self._on_palette_dismissed,
        )
        # Updated while the palette screen is on top, so keep a direct reference
        self.page_view: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        self.page_view = Static(self.context.describe(), id="page-view")
        yield self.page_view
        yield Static(f"Press {self.open_key} for commands", id="page-hint")
        yield Footer()

    def on_mount(self) -> None:
        if self.theme_name in self.available_themes:
            self.theme = self.theme_name
        elif self.theme_name:
            logger.warning(f"Unknown theme {self.theme_name!r}, keeping default")

    def _refresh_page(self) -> None:
        if self.page_view is not None:
            self.page_view.update(self.context.describe())

    def _on_palette_dismissed(self) -> None:
        logger.debug("Palette dismissed")

    def on_key(self, event: events.Key) -> None:
        if event.key == self.open_key:
            event.stop()
            self.action_open_palette()

    def action_open_palette(self) -> None:
        """Push the palette unless it is already showing."""
        if self.palette.is_open:
            return
        self.push_screen(CommandPaletteScreen(self.palette))
