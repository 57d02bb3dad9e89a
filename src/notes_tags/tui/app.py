"""Main TUI application using Textual.

// [LAW:locality-or-seam] Thin coordinator — HoverPopup and NotesEditorScreen
//   own their interaction logic; the app wires persistence and filtering.
"""

import logging
from collections.abc import Callable

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Static

import notes_tags.io.settings
from notes_tags.tui.hover_popup import HoverPopup
from notes_tags.tui.notes_editor import NotesEditorScreen
from notes_tags.tui.tag_colors import TagPalette

logger = logging.getLogger(__name__)


class NotesTagsApp(App):
    """TUI application for notes-tags."""

    TITLE = "notes-tags"
    AUTO_FOCUS = None

    CSS = """
    #notes-status {
        color: $text-muted;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("e", "edit_notes", "Edit"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        notes: str,
        on_save: Callable[[str], None] | None = None,
        on_tag_filter: Callable[[str], None] | None = None,
        hide_delay: float | None = None,
        preview_limit: int | None = None,
        seed_hue: float | None = None,
    ):
        super().__init__()
        self.notes = notes or ""
        self._on_save = on_save
        self._on_tag_filter = on_tag_filter
        self._hide_delay = (
            hide_delay if hide_delay is not None else notes_tags.io.settings.load_hide_delay()
        )
        self._preview_limit = (
            preview_limit if preview_limit is not None else notes_tags.io.settings.load_preview_limit()
        )
        self.palette = TagPalette(
            seed_hue if seed_hue is not None else notes_tags.io.settings.load_seed_hue()
        )
        self.active_filter: str | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield HoverPopup(
            self.notes,
            on_tag_filter=self._filter_by_tag,
            on_edit_notes=self._edit_from_popup,
            hide_delay=self._hide_delay,
            preview_limit=self._preview_limit,
            palette=self.palette,
            id="notes-popup",
        )
        yield Static("", id="notes-status")
        yield Footer()

    # ─── Callbacks ────────────────────────────────────────────────────

    def _filter_by_tag(self, tag: str) -> None:
        self.active_filter = tag
        self.query_one("#notes-status", Static).update(f"Filtering by #{tag}")
        if self._on_tag_filter is not None:
            self._on_tag_filter(tag)

    def _edit_from_popup(self, index: int | None) -> None:
        self.open_editor(index)

    def _persist(self, composed: str) -> None:
        # Failures propagate; the caller's callback owns error reporting.
        if self._on_save is not None:
            self._on_save(composed)

    async def _editor_closed(self, result: str | None) -> None:
        if result is None:
            return
        self.notes = result
        await self.query_one("#notes-popup", HoverPopup).set_notes(result)
        self.query_one("#notes-status", Static).update("Saved")
        logger.info("notes updated chars=%d", len(result))

    # ─── Actions ──────────────────────────────────────────────────────

    def open_editor(self, index: int | None = None) -> None:
        screen = NotesEditorScreen(
            self.notes,
            preferred_index=index,
            on_save=self._persist,
            palette=self.palette,
        )
        self.push_screen(screen, self._editor_closed)

    def action_edit_notes(self) -> None:
        self.open_editor()
