"""Editor session — mutable model behind the notes editor.

Holds a private, ordered copy of the parsed entries plus the transient UI
flags of one editing interaction (active tab, pending delete, tag draft).

// [LAW:one-source-of-truth] entries/active_index live here; widgets only render them.
// [LAW:one-way-deps] No widget imports. No rendering imports.

Index-based operations on an out-of-range index are no-ops: the session is
a best-effort UI model, not a validated data store.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace

from notes_tags.core.tagged_notes import (
    TagEntry,
    compose_tagged_notes,
    parse_tagged_notes,
    strip_marker,
)

logger = logging.getLogger(__name__)


class EditorSession:
    """Tabbed editing state for one notes string.

    on_save receives the composed notes on save(). Its failures are not
    caught here; reporting them belongs to the caller.
    """

    def __init__(
        self,
        notes: str | None,
        preferred_index: int | None = None,
        on_save: Callable[[str], None] | None = None,
    ):
        parsed = parse_tagged_notes(notes or "")
        # The editor always has at least one editable surface on open.
        self.entries: list[TagEntry] = parsed or [TagEntry(tag="", content=notes or "")]
        index = preferred_index if preferred_index is not None else 0
        self.active_index: int = index if 0 <= index < len(self.entries) else 0
        self.pending_delete_index: int | None = None
        self.draft_tag_name: str = ""
        self.is_drafting_tag: bool = False
        self.on_save = on_save

    # ─── Derived ──────────────────────────────────────────────────────

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self.entries)

    @property
    def active_entry(self) -> TagEntry | None:
        return self.entries[self.active_index] if self._in_range(self.active_index) else None

    @property
    def can_delete(self) -> bool:
        """Delete is only offered while more than one entry exists."""
        return len(self.entries) > 1

    @property
    def pending_delete_prompt(self) -> str | None:
        """Confirmation wording for the pending delete, or None."""
        index = self.pending_delete_index
        if index is None or not self._in_range(index):
            return None
        tag = self.entries[index].tag
        if tag:
            return f'Are you sure you want to delete "#{tag}" and its content?'
        return "Are you sure you want to delete this note?"

    # ─── Tabs and content ─────────────────────────────────────────────

    def select(self, index: int) -> None:
        if self._in_range(index):
            self.active_index = index

    def edit_content(self, index: int, content: str) -> None:
        """Replace content at index. Trimming is left to composition."""
        if not self._in_range(index):
            return
        self.entries[index] = replace(self.entries[index], content=content)

    # ─── Two-phase delete ─────────────────────────────────────────────

    def request_delete(self, index: int) -> None:
        if self._in_range(index):
            self.pending_delete_index = index

    def cancel_delete(self) -> None:
        self.pending_delete_index = None

    def confirm_delete(self, index: int) -> None:
        """Remove the entry at index and keep the active tab on a neighbor.

        Removing the last remaining entry is allowed and leaves entries empty.
        """
        self.pending_delete_index = None
        if not self._in_range(index):
            return
        removed = self.entries.pop(index)
        if self.active_index >= index and self.active_index > 0:
            self.active_index -= 1
        logger.debug(
            "deleted entry index=%d tag=%r remaining=%d active=%d",
            index, removed.tag, len(self.entries), self.active_index,
        )

    # ─── Adding tags ──────────────────────────────────────────────────

    def begin_add_tag(self) -> None:
        self.is_drafting_tag = True

    def set_draft_tag_name(self, text: str) -> None:
        self.draft_tag_name = text

    def cancel_add_tag(self) -> None:
        self.is_drafting_tag = False
        self.draft_tag_name = ""

    def add_tag(self, name: str | None = None) -> None:
        """Append a new empty entry for name (default: the draft) and activate it.

        Blank names are ignored and leave the draft untouched.
        """
        raw = self.draft_tag_name if name is None else name
        if not raw.strip():
            return
        tag = strip_marker(raw)
        new_index = len(self.entries)
        self.entries.append(TagEntry(tag=tag, content=""))
        self.active_index = new_index
        self.cancel_add_tag()
        logger.debug("added tag %r at index=%d", tag, new_index)

    # ─── Output ───────────────────────────────────────────────────────

    def commit(self) -> str:
        """Compose the current entries. Does not mutate the session."""
        return compose_tagged_notes(self.entries)

    def save(self) -> str:
        """Compose and hand the result to on_save. Returns the composed notes."""
        composed = self.commit()
        if self.on_save is not None:
            self.on_save(composed)
        logger.info("saved notes entries=%d chars=%d", len(self.entries), len(composed))
        return composed
