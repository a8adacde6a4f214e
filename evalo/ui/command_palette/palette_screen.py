"""
Command Palette Screen - modal overlay.

Renders the presenter's state and forwards input to it: text changes become
queries, keys go through the presenter's KeyEventHub, mouse hover and click
select and confirm rows.
"""

import logging

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.containers import Vertical, VerticalScroll
from textual.message import Message
from textual.screen import ModalScreen
from textual.widgets import Input, Static

from .palette_commands import PaletteCommand
from .palette_presenter import PalettePresenter, PaletteState

logger = logging.getLogger(__name__)


class PaletteResultWidget(Static):
    """Widget for a single palette row."""

    DEFAULT_CSS = """
    PaletteResultWidget {
        height: 1;
        padding: 0 1;
    }

    PaletteResultWidget.-active {
        background: $accent;
    }
    """

    class Hovered(Message):
        """Mouse entered a row."""

        def __init__(self, index: int):
            super().__init__()
            self.index = index

    class Clicked(Message):
        """A row was clicked."""

        def __init__(self, index: int):
            super().__init__()
            self.index = index

    def __init__(self, command: PaletteCommand, index: int, **kwargs):
        self.command = command
        self.index = index
        super().__init__(self._label(active=False), **kwargs)

    def _label(self, active: bool) -> Text:
        text = Text.assemble(
            f"{self.command.icon} ",
            (self.command.title, "bold"),
            (f"  {self.command.section}", "dim"),
        )
        if active:
            text.append("  ↵")
        return text

    def set_active(self, active: bool) -> None:
        self.set_class(active, "-active")
        self.update(self._label(active))

    def on_enter(self, event: events.Enter) -> None:
        self.post_message(self.Hovered(self.index))

    def on_click(self, event: events.Click) -> None:
        event.stop()
        self.post_message(self.Clicked(self.index))


class CommandPaletteScreen(ModalScreen[None]):
    """
    Command palette modal overlay.

    The screen is a view; PalettePresenter owns the session. Opening the
    screen opens the presenter, and the screen pops itself as soon as the
    presenter reports it has closed.
    """

    CSS = """
    CommandPaletteScreen {
        align: center top;
        padding-top: 5;
    }

    #palette-container {
        width: 70;
        height: auto;
        max-height: 30;
        background: $surface;
        border: solid $primary;
    }

    #palette-input {
        width: 100%;
        border: none;
        background: $surface-darken-1;
        padding: 0 1;
    }

    #palette-results {
        height: auto;
        max-height: 20;
        min-height: 3;
    }

    #palette-empty {
        color: $text-muted;
        padding: 0 1;
    }

    #palette-hints {
        height: 1;
        background: $surface-darken-1;
        color: $text-muted;
        padding: 0 1;
    }
    """

    def __init__(self, presenter: PalettePresenter, **kwargs):
        super().__init__(**kwargs)
        self.presenter = presenter
        self._rendered_ids: list[str] | None = None
        self._render_id = 0
        self._dismissing = False

    def compose(self) -> ComposeResult:
        with Vertical(id="palette-container"):
            yield Input(placeholder="Type a command or search...", id="palette-input")
            yield VerticalScroll(id="palette-results")
            yield Static("", id="palette-empty")
            yield Static("↑↓ Navigate │ ↵ Select │ Esc Close", id="palette-hints")

    def on_mount(self) -> None:
        """Open the presenter and render its first state."""
        self.presenter.on_state_update = self._on_state_update
        self.presenter.open(schedule_focus=lambda: self.call_after_refresh(self._focus_input))
        self._on_state_update(self.presenter.state)

    def on_unmount(self) -> None:
        # Leaving the screen any other way still releases the key listener
        if self.presenter.on_state_update == self._on_state_update:
            self.presenter.on_state_update = None
        self.presenter.close()

    def _focus_input(self) -> None:
        self.query_one("#palette-input", Input).focus()

    def _on_state_update(self, state: PaletteState) -> None:
        """Handle state updates from presenter."""
        if not state.is_open:
            if not self._dismissing:
                self._dismissing = True
                self.dismiss()
            return

        self._render_id += 1
        self.call_later(self._render_results, self._render_id)

    async def _render_results(self, render_id: int) -> None:
        """Render results from the presenter's current state."""
        # Skip if a newer render was requested
        if render_id != self._render_id or not self.presenter.is_open:
            return

        state = self.presenter.state
        results = self.presenter.results
        results_view = self.query_one("#palette-results", VerticalScroll)
        empty = self.query_one("#palette-empty", Static)

        ids = [cmd.id for cmd in results]
        if ids != self._rendered_ids:
            await results_view.remove_children()
            if results:
                await results_view.mount_all(
                    PaletteResultWidget(cmd, i, id=f"row-{i}")
                    for i, cmd in enumerate(results)
                )
            self._rendered_ids = ids

        if results:
            empty.display = False
        else:
            empty.update(Text(f'No results found for "{state.query}"'))
            empty.display = True

        for row in results_view.query(PaletteResultWidget):
            row.set_active(row.index == state.active_index)

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "palette-input":
            return
        self.presenter.set_query(event.value)

    def on_key(self, event: events.Key) -> None:
        """Forward keys to the palette's key listener."""
        if self.presenter.key_hub.dispatch(event.key):
            event.prevent_default()
            event.stop()

    def on_palette_result_widget_hovered(self, event: PaletteResultWidget.Hovered) -> None:
        self.presenter.hover(event.index)

    def on_palette_result_widget_clicked(self, event: PaletteResultWidget.Clicked) -> None:
        self.presenter.click(event.index)

    def on_click(self, event: events.Click) -> None:
        """A click on the backdrop, outside the container, dismisses."""
        widget, _ = self.get_widget_at(event.screen_x, event.screen_y)
        if widget is self:
            self.presenter.dismiss()
