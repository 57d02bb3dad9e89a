"""Reusable chip widget — lightweight clickable text control.

Used for editor tabs and hover-row actions.
"""

from __future__ import annotations

from typing import Any

from textual.message import Message
from textual.widgets import Static


class Chip(Static):
    """Clickable chip that posts Chip.Pressed on click.

    Like Button but renders as plain text — no borders, no half-block
    chrome. The owning widget reads action/value from the message.
    """

    ALLOW_SELECT = False
    DEFAULT_CSS = """
    Chip {
        width: auto;
        height: 1;
        padding: 0 1;
        text-style: bold;
        background: $panel-lighten-2;
        color: $text;
    }

    Chip:hover {
        background: $panel-lighten-1;
        color: $text;
    }

    Chip.-active {
        background: $accent;
        color: $text;
    }

    Chip.-dim {
        text-style: none;
        background: $surface-lighten-1;
        color: $text-muted;
    }

    Chip.-danger {
        background: $error;
        color: $text;
    }
    """

    class Pressed(Message):
        """Posted when the chip is clicked.

        Attributes:
            chip: The Chip that was clicked.
            action: Action name given at construction.
            value: Optional payload (e.g. an entry index).
        """

        def __init__(self, chip: Chip, action: str, value: Any = None) -> None:
            self.chip = chip
            self.action = action
            self.value = value
            super().__init__()

        @property
        def control(self) -> Chip:
            return self.chip

    def __init__(self, label: str, *, action: str, value: Any = None, **kwargs):
        super().__init__(label, **kwargs)
        self.action = action
        self.value = value

    def on_click(self, event) -> None:
        event.stop()
        self.post_message(self.Pressed(self, self.action, self.value))
