"""Hover popup — read-only tag list for one notes string.

Rendering adapter for notes_tags.app.hover_state.HoverState. Focus/blur
on the popup and mouse enter/leave on rows become state machine events;
the hide debounce runs on Textual's set_timer.

// [LAW:one-source-of-truth] HoverState owns visibility; this widget only mirrors it.
// [LAW:locality-or-seam] Stacking intent is applied here via the -elevated class.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Static

from notes_tags.app.hover_state import (
    DEFAULT_HIDE_DELAY,
    DEFAULT_PREVIEW_LIMIT,
    AncestorNode,
    HoverState,
)
from notes_tags.core.tagged_notes import GENERAL_NOTES_LABEL, TagEntry
from notes_tags.tui.chip import Chip
from notes_tags.tui.tag_colors import TagPalette

logger = logging.getLogger(__name__)

ELEVATED_CLASS = "-elevated"
POSITIONED_CLASS = "-positioned"
ROW_CLASS = "-row"


class TagRow(Vertical):
    """One entry row: colored label, hover actions, content preview."""

    DEFAULT_CSS = """
    TagRow {
        height: auto;
        padding: 0 1;
    }

    TagRow > Horizontal {
        height: 1;
    }

    TagRow .tag-label {
        width: 1fr;
    }

    TagRow .tag-actions {
        width: auto;
        display: none;
    }

    TagRow.-hovered .tag-actions {
        display: block;
    }

    TagRow .tag-preview {
        display: none;
        padding: 0 0 0 2;
        color: $text-muted;
    }
    """

    class Hovered(Message):
        def __init__(self, index: int) -> None:
            self.index = index
            super().__init__()

    class Unhovered(Message):
        pass

    def __init__(self, index: int, entry: TagEntry, color: str, **kwargs):
        super().__init__(**kwargs)
        self.index = index
        self.entry = entry
        self.color = color

    def compose(self) -> ComposeResult:
        with Horizontal():
            yield Static(
                Text.assemble(("▎ ", self.color), (self.entry.tag or GENERAL_NOTES_LABEL, f"bold {self.color}")),
                classes="tag-label",
            )
            with Horizontal(classes="tag-actions"):
                yield Chip("edit", action="edit", value=self.index)
                if self.entry.tag:
                    yield Chip("filter", action="filter", value=self.entry.tag)
        yield Static("", classes="tag-preview")

    def show_hover(self, hovered: bool, preview: str | None) -> None:
        self.set_class(hovered, "-hovered")
        preview_widget = self.query_one(".tag-preview", Static)
        preview_widget.update(preview or "")
        preview_widget.display = preview is not None

    def on_enter(self, event: events.Enter) -> None:
        self.post_message(self.Hovered(self.index))

    def on_leave(self, event: events.Leave) -> None:
        self.post_message(self.Unhovered())


class HoverPopup(Widget, can_focus=True):
    """Notes cell with a tags popup that opens while focused."""

    DEFAULT_CSS = """
    HoverPopup {
        height: auto;
    }

    HoverPopup > .notes-cell {
        height: auto;
        padding: 0 1;
    }

    HoverPopup:focus > .notes-cell {
        background: $boost;
    }

    HoverPopup > #tags-popup {
        height: auto;
        max-width: 60;
        border: round $panel-lighten-2;
        background: $surface;
        display: none;
    }

    HoverPopup > #tags-popup > .popup-header {
        color: $text-muted;
        text-style: bold;
        padding: 0 1;
    }
    """

    def __init__(
        self,
        notes: str,
        *,
        on_tag_filter: Callable[[str], None] | None = None,
        on_edit_notes: Callable[[int | None], None] | None = None,
        hide_delay: float = DEFAULT_HIDE_DELAY,
        preview_limit: int = DEFAULT_PREVIEW_LIMIT,
        palette: TagPalette | None = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.palette = palette or TagPalette()
        self.hover = HoverState(
            notes,
            scheduler=self._schedule,
            on_tag_filter=on_tag_filter,
            on_edit_notes=on_edit_notes,
            hide_delay=hide_delay,
            preview_limit=preview_limit,
        )
        self._elevated: tuple = ()

    def compose(self) -> ComposeResult:
        yield Static(self._cell_text(), classes="notes-cell")
        with Vertical(id="tags-popup"):
            yield Static("TAGS", classes="popup-header")

    # ─── Adapter plumbing ─────────────────────────────────────────────

    def _schedule(self, delay: float, callback: Callable[[], None]):
        def fire() -> None:
            callback()
            self._sync()

        return self.set_timer(delay, fire)

    def _cell_text(self) -> Text:
        notes = self.hover.notes
        return Text(notes) if notes.strip() else Text("(no notes)", style="dim")

    def _rows(self) -> list[TagRow]:
        return list(self.query(TagRow))

    async def _rebuild_rows(self) -> None:
        popup = self.query_one("#tags-popup", Vertical)
        await popup.query(TagRow).remove()
        rows = [
            TagRow(index, entry, self.palette.color_for(index, bool(entry.tag)).fg, classes=ROW_CLASS)
            for index, entry in self.hover.visible_rows()
        ]
        if rows:
            await popup.mount(*rows)
        self._sync()

    def _sync(self) -> None:
        """Mirror HoverState onto widgets and apply the stacking intent."""
        state = self.hover
        self.query_one("#tags-popup", Vertical).display = state.visible
        for row in self._rows():
            row.show_hover(state.hovered_index == row.index, state.preview_text(row.index))

        chain = [
            AncestorNode(node, positioned=node.has_class(POSITIONED_CLASS), is_row=node.has_class(ROW_CLASS))
            for node in self.ancestors
        ]
        intent = state.intent(chain)
        for node in self._elevated:
            node.remove_class(ELEVATED_CLASS)
        for node in intent.elevated_ancestors:
            node.add_class(ELEVATED_CLASS)
        self._elevated = intent.elevated_ancestors

    # ─── Public API ───────────────────────────────────────────────────

    async def set_notes(self, notes: str) -> None:
        self.hover.set_notes(notes)
        self.query_one(".notes-cell", Static).update(self._cell_text())
        await self._rebuild_rows()

    # ─── Events ───────────────────────────────────────────────────────

    async def on_mount(self) -> None:
        await self._rebuild_rows()

    def on_focus(self, event: events.Focus) -> None:
        self.hover.focus_enter()
        self._sync()

    def on_blur(self, event: events.Blur) -> None:
        focused = self.screen.focused
        within = focused is not None and self in focused.ancestors
        self.hover.focus_leave(within=within)

    def on_unmount(self) -> None:
        self.hover.teardown()

    def on_tag_row_hovered(self, message: TagRow.Hovered) -> None:
        message.stop()
        self.hover.row_enter(message.index)
        self._sync()

    def on_tag_row_unhovered(self, message: TagRow.Unhovered) -> None:
        message.stop()
        self.hover.row_leave()
        self._sync()

    def on_chip_pressed(self, message: Chip.Pressed) -> None:
        message.stop()
        if message.action == "filter":
            logger.debug("hover filter tag=%r", message.value)
            self.hover.select_tag(message.value)
        elif message.action == "edit":
            self.hover.edit_entry(message.value)
        self._sync()
