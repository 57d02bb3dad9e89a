"""Hover presentation state — debounced show/hide for the tags popup.

State machine over (visible, hovered_index, preview_index) driven by focus,
blur and row hover events. A blur schedules a hide after hide_delay; any
focus arriving first cancels it.

The hide timer is an owned resource: at most one is pending, it is released
on focus and on teardown, and a released timer never mutates state.

// [LAW:one-way-deps] No widget imports. Scheduling is injected.
// [LAW:dataflow-not-control-flow] Styling intent is returned as a value (HoverIntent).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from notes_tags.core.tagged_notes import TagEntry, parse_tagged_notes

logger = logging.getLogger(__name__)

DEFAULT_HIDE_DELAY = 0.15  # seconds
DEFAULT_PREVIEW_LIMIT = 100  # characters


class TimerHandle(Protocol):
    def stop(self) -> None: ...


# scheduler(delay_seconds, callback) -> handle; Textual's set_timer fits.
Scheduler = Callable[[float, Callable[[], None]], TimerHandle]


@dataclass(frozen=True)
class AncestorNode:
    """What the rendering adapter reports about one ancestor.

    positioned: the node participates in stacking (non-static placement).
    is_row: the node is the row wrapper of a virtualized list.
    """

    node: Any
    positioned: bool = False
    is_row: bool = False


@dataclass(frozen=True)
class HoverIntent:
    visible: bool
    elevated_ancestors: tuple[Any, ...] = ()


def elevated_ancestors(chain: Sequence[AncestorNode]) -> tuple[Any, ...]:
    """Nodes to raise above their siblings, walking nearest-first.

    Every positioned or row node is raised; the walk stops at the first row.
    """
    out = []
    for anc in chain:
        if anc.positioned or anc.is_row:
            out.append(anc.node)
        if anc.is_row:
            break
    return tuple(out)


class HoverState:
    """Read-only presentation of a notes string's tag entries."""

    def __init__(
        self,
        notes: str | None,
        scheduler: Scheduler,
        on_tag_filter: Callable[[str], None] | None = None,
        on_edit_notes: Callable[[int | None], None] | None = None,
        hide_delay: float = DEFAULT_HIDE_DELAY,
        preview_limit: int = DEFAULT_PREVIEW_LIMIT,
    ):
        self.notes = notes or ""
        self._scheduler = scheduler
        self.on_tag_filter = on_tag_filter
        self.on_edit_notes = on_edit_notes
        self.hide_delay = hide_delay
        self.preview_limit = preview_limit

        self.visible = False
        self.hovered_index: int | None = None
        self.preview_index: int | None = None
        self._hide_timer: TimerHandle | None = None
        self._timer_generation = 0

    # ─── Derived ──────────────────────────────────────────────────────

    @property
    def entries(self) -> list[TagEntry]:
        # Re-derived on every access; no identity across renders.
        return parse_tagged_notes(self.notes)

    @property
    def has_content(self) -> bool:
        return bool(self.notes.strip())

    @property
    def hide_pending(self) -> bool:
        return self._hide_timer is not None

    def visible_rows(self) -> list[tuple[int, TagEntry]]:
        """(index, entry) pairs to display, without dead untagged rows."""
        entries = self.entries
        return [
            (i, e)
            for i, e in enumerate(entries)
            if not (e.tag == "" and not e.content.strip() and len(entries) > 1)
        ]

    def preview_text(self, index: int) -> str | None:
        """Truncated content for the row being previewed, or None."""
        if self.preview_index != index:
            return None
        entries = self.entries
        if not 0 <= index < len(entries) or not entries[index].content:
            return None
        content = entries[index].content
        if len(content) > self.preview_limit:
            return content[: self.preview_limit] + "..."
        return content

    def intent(self, chain: Sequence[AncestorNode] = ()) -> HoverIntent:
        if not self.visible:
            return HoverIntent(visible=False)
        return HoverIntent(visible=True, elevated_ancestors=elevated_ancestors(chain))

    # ─── Events ───────────────────────────────────────────────────────

    def set_notes(self, notes: str | None) -> None:
        self.notes = notes or ""

    def focus_enter(self) -> None:
        self._cancel_hide()
        if self.has_content:
            self.visible = True

    def focus_leave(self, within: bool = False) -> None:
        """Schedule a hide unless focus moved within the same container."""
        if within:
            return
        self._cancel_hide()
        generation = self._timer_generation
        self._hide_timer = self._scheduler(self.hide_delay, lambda: self._hide(generation))
        logger.debug("hover hide scheduled delay=%.3fs", self.hide_delay)

    def row_enter(self, index: int) -> None:
        self.hovered_index = index
        self.preview_index = index

    def row_leave(self) -> None:
        self.hovered_index = None
        self.preview_index = None

    def select_tag(self, tag: str) -> None:
        """Forward a filter request and close the popup immediately."""
        if self.on_tag_filter is not None:
            self.on_tag_filter(tag)
        self.visible = False

    def edit_entry(self, index: int | None = None) -> None:
        if self.on_edit_notes is not None:
            self.on_edit_notes(index)

    def teardown(self) -> None:
        self._cancel_hide()

    # ─── Timer ────────────────────────────────────────────────────────

    def _cancel_hide(self) -> None:
        # Bumping the generation disarms a callback that is already queued.
        self._timer_generation += 1
        if self._hide_timer is not None:
            self._hide_timer.stop()
            self._hide_timer = None

    def _hide(self, generation: int) -> None:
        if generation != self._timer_generation:
            return
        self._hide_timer = None
        self.visible = False
        self.hovered_index = None
        self.preview_index = None
