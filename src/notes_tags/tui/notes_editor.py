"""Notes editor — modal screen over an EditorSession.

Tabs (one chip per entry), a TextArea for the active entry, an add-tag
row, a delete confirmation overlay and a save button. Every widget event
is forwarded to the session; the screen then re-renders from it.

// [LAW:one-source-of-truth] EditorSession owns entries and flags.
// [LAW:one-way-deps] Screen → session → core. Never the reverse.

Dismisses with the composed notes on save, or None on close.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static, TextArea

from notes_tags.app.editor_session import EditorSession
from notes_tags.tui.chip import Chip
from notes_tags.tui.tag_colors import TagPalette

logger = logging.getLogger(__name__)


class NotesEditorScreen(ModalScreen[str | None]):
    DEFAULT_CSS = """
    NotesEditorScreen {
        align: center middle;
    }

    #editor-dialog {
        width: 70;
        max-width: 95%;
        height: auto;
        max-height: 90%;
        border: thick $panel-lighten-2;
        background: $surface;
        padding: 0 1;
    }

    #editor-title {
        text-style: bold;
        padding: 0 0 1 0;
    }

    #editor-tabs {
        height: auto;
        padding: 0 0 1 0;
    }

    #editor-tabs > Chip {
        margin: 0 1 0 0;
    }

    #add-tag-row {
        height: auto;
        display: none;
    }

    #add-tag-row.-drafting {
        display: block;
    }

    #add-tag-row > Input {
        width: 1fr;
    }

    #entry-label {
        color: $text-muted;
        text-style: bold;
    }

    #entry-content {
        height: 10;
    }

    #delete-confirm {
        height: auto;
        border: round $error;
        padding: 0 1;
        display: none;
    }

    #delete-confirm.-pending {
        display: block;
    }

    #delete-confirm > Horizontal, #editor-footer {
        height: auto;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Close"),
        Binding("ctrl+s", "save", "Save"),
    ]

    def __init__(
        self,
        notes: str,
        *,
        preferred_index: int | None = None,
        on_save: Callable[[str], None] | None = None,
        palette: TagPalette | None = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.session = EditorSession(notes, preferred_index=preferred_index, on_save=on_save)
        self.palette = palette or TagPalette()

    def compose(self) -> ComposeResult:
        with Vertical(id="editor-dialog"):
            yield Static("Edit Notes", id="editor-title")
            yield Horizontal(id="editor-tabs")
            with Horizontal(id="add-tag-row"):
                yield Static("#")
                yield Input(placeholder="tag-name", id="new-tag")
                yield Button("Add", id="add-tag-confirm")
                yield Button("Cancel", id="add-tag-cancel")
            with Vertical(id="delete-confirm"):
                yield Static("", id="delete-prompt")
                with Horizontal():
                    yield Button("Cancel", id="delete-cancel")
                    yield Button("Delete", id="delete-confirm-button", variant="error")
            yield Static("", id="entry-label")
            yield TextArea("", id="entry-content")
            with Horizontal(id="editor-footer"):
                yield Button("Save Notes", id="save", variant="primary")

    async def on_mount(self) -> None:
        await self._refresh_tabs()
        self._load_active_entry()

    # ─── Rendering ────────────────────────────────────────────────────

    async def _refresh_tabs(self) -> None:
        session = self.session
        tabs = self.query_one("#editor-tabs", Horizontal)
        await tabs.remove_children()
        chips: list[Chip] = []
        for index, entry in enumerate(session.entries):
            active = index == session.active_index
            chip = Chip(
                f"#{entry.tag}" if entry.tag else "Notes",
                action="select",
                value=index,
                classes="-active" if active else "-dim",
            )
            chips.append(chip)
            if active and session.can_delete:
                chips.append(Chip("✕", action="delete", value=index, classes="-danger"))
        if not session.is_drafting_tag:
            chips.append(Chip("+ Add", action="add"))
        if chips:
            await tabs.mount(*chips)
        self._refresh_flags()

    def _refresh_flags(self) -> None:
        session = self.session
        self.query_one("#add-tag-row").set_class(session.is_drafting_tag, "-drafting")
        prompt = session.pending_delete_prompt
        self.query_one("#delete-confirm").set_class(prompt is not None, "-pending")
        self.query_one("#delete-prompt", Static).update(prompt or "")

    def _load_active_entry(self) -> None:
        session = self.session
        entry = session.active_entry
        label = self.query_one("#entry-label", Static)
        area = self.query_one("#entry-content", TextArea)
        if entry is None:
            label.update("")
            area.load_text("")
            area.disabled = True
            return
        colors = self.palette.color_for(session.active_index, bool(entry.tag))
        label.update(entry.label.upper())
        label.styles.color = colors.fg
        area.styles.border = ("round", colors.border)
        area.disabled = False
        area.load_text(entry.content)

    async def _render_all(self) -> None:
        await self._refresh_tabs()
        self._load_active_entry()

    # ─── Events ───────────────────────────────────────────────────────

    async def on_chip_pressed(self, message: Chip.Pressed) -> None:
        message.stop()
        session = self.session
        if message.action == "select":
            session.select(message.value)
            await self._render_all()
        elif message.action == "delete":
            session.request_delete(message.value)
            self._refresh_flags()
        elif message.action == "add":
            session.begin_add_tag()
            await self._refresh_tabs()
            self.query_one("#new-tag", Input).focus()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        session = self.session
        if session.active_entry is None:
            return
        session.edit_content(session.active_index, event.text_area.text)

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "new-tag":
            self.session.set_draft_tag_name(event.value)

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "new-tag":
            await self._add_tag()

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == "save":
            self.action_save()
        elif button_id == "add-tag-confirm":
            await self._add_tag()
        elif button_id == "add-tag-cancel":
            await self._cancel_add_tag()
        elif button_id == "delete-cancel":
            self.session.cancel_delete()
            self._refresh_flags()
        elif button_id == "delete-confirm-button":
            index = self.session.pending_delete_index
            if index is not None:
                self.session.confirm_delete(index)
            await self._render_all()

    async def _add_tag(self) -> None:
        before = len(self.session.entries)
        self.session.add_tag()
        if len(self.session.entries) == before:
            return
        self.query_one("#new-tag", Input).value = ""
        await self._render_all()
        self.query_one("#entry-content", TextArea).focus()

    async def _cancel_add_tag(self) -> None:
        self.session.cancel_add_tag()
        self.query_one("#new-tag", Input).value = ""
        await self._refresh_tabs()

    # ─── Actions ──────────────────────────────────────────────────────

    async def action_cancel(self) -> None:
        if self.session.is_drafting_tag:
            await self._cancel_add_tag()
            return
        if self.session.pending_delete_index is not None:
            self.session.cancel_delete()
            self._refresh_flags()
            return
        logger.debug("editor closed without saving")
        self.dismiss(None)

    def action_save(self) -> None:
        composed = self.session.save()
        self.dismiss(composed)
