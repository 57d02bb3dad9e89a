"""In-process Textual tests for the hover popup and the notes editor."""

import pytest
from textual.widgets import TextArea

from notes_tags.tui.app import NotesTagsApp
from notes_tags.tui.hover_popup import HoverPopup, TagRow
from notes_tags.tui.notes_editor import NotesEditorScreen


pytestmark = pytest.mark.textual

NOTES = "hello #work finish report"


def make_app(notes=NOTES, **kwargs) -> NotesTagsApp:
    kwargs.setdefault("hide_delay", 0.05)
    kwargs.setdefault("preview_limit", 100)
    kwargs.setdefault("seed_hue", 200.0)
    return NotesTagsApp(notes, **kwargs)


async def test_blur_keeps_popup_visible_while_hide_pending():
    app = make_app(hide_delay=5.0)
    async with app.run_test(size=(100, 40)) as pilot:
        popup = app.query_one("#notes-popup", HoverPopup)
        await pilot.pause()
        assert len(popup.query(TagRow)) == 2
        assert popup.query_one("#tags-popup").display is False

        popup.focus()
        await pilot.pause()
        assert popup.hover.visible is True
        assert popup.query_one("#tags-popup").display is True

        app.set_focus(None)
        await pilot.pause()
        assert popup.hover.hide_pending is True
        assert popup.hover.visible is True

        popup.focus()
        await pilot.pause()
        assert popup.hover.hide_pending is False
        assert popup.hover.visible is True


async def test_blur_hides_popup_after_delay():
    app = make_app(hide_delay=0.05)
    async with app.run_test(size=(100, 40)) as pilot:
        popup = app.query_one("#notes-popup", HoverPopup)
        popup.focus()
        await pilot.pause()
        assert popup.hover.visible is True

        app.set_focus(None)
        await pilot.pause(0.3)
        assert popup.hover.visible is False
        assert popup.query_one("#tags-popup").display is False


async def test_filter_chip_forwards_tag_and_hides():
    filtered = []
    app = make_app(on_tag_filter=filtered.append)
    async with app.run_test(size=(100, 40)) as pilot:
        popup = app.query_one("#notes-popup", HoverPopup)
        popup.focus()
        await pilot.pause()
        popup.hover.select_tag("work")
        await pilot.pause()
        assert filtered == ["work"]
        assert popup.hover.visible is False
        assert app.active_filter == "work"


async def test_editor_opens_on_key_and_saves_composed_notes():
    saved = []
    app = make_app(on_save=saved.append)
    async with app.run_test(size=(100, 40)) as pilot:
        await pilot.press("e")
        await pilot.pause()
        screen = app.screen
        assert isinstance(screen, NotesEditorScreen)
        assert [e.tag for e in screen.session.entries] == ["", "work"]

        screen.session.edit_content(1, "  ship it ")
        screen.action_save()
        await pilot.pause()

        assert saved == ["hello #work ship it"]
        assert app.notes == "hello #work ship it"
        assert not isinstance(app.screen, NotesEditorScreen)


async def test_editor_tab_click_loads_entry():
    app = make_app()
    async with app.run_test(size=(100, 40)) as pilot:
        app.open_editor()
        await pilot.pause()
        screen = app.screen
        await pilot.click("#editor-tabs Chip.-dim")
        await pilot.pause()
        assert screen.session.active_index == 1
        assert screen.query_one("#entry-content", TextArea).text == "finish report"


async def test_editor_preferred_index_and_cancel_keeps_notes():
    saved = []
    app = make_app(on_save=saved.append)
    async with app.run_test(size=(100, 40)) as pilot:
        app.open_editor(1)
        await pilot.pause()
        screen = app.screen
        assert screen.session.active_index == 1
        await pilot.press("escape")
        await pilot.pause()
        assert saved == []
        assert app.notes == NOTES
