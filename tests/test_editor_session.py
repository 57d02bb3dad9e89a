"""Tests for notes_tags.app.editor_session — editor state machine."""

import pytest

from notes_tags.app.editor_session import EditorSession
from notes_tags.core.tagged_notes import TagEntry


NOTES = "hello #work finish report #home buy milk"


class TestInit:
    def test_parses_entries(self):
        session = EditorSession(NOTES)
        assert [e.tag for e in session.entries] == ["", "work", "home"]
        assert session.active_index == 0
        assert session.pending_delete_index is None
        assert session.draft_tag_name == ""
        assert session.is_drafting_tag is False

    @pytest.mark.parametrize("notes", ["", None])
    def test_empty_notes_seed_one_placeholder(self, notes):
        session = EditorSession(notes)
        assert session.entries == [TagEntry("", "")]

    def test_whitespace_notes_kept_in_placeholder(self):
        session = EditorSession("   ")
        assert session.entries == [TagEntry("", "   ")]

    def test_preferred_index_in_bounds(self):
        assert EditorSession(NOTES, preferred_index=2).active_index == 2

    @pytest.mark.parametrize("index", [3, -1, 99])
    def test_preferred_index_out_of_bounds_falls_back(self, index):
        assert EditorSession(NOTES, preferred_index=index).active_index == 0

    def test_private_copy(self):
        a = EditorSession(NOTES)
        b = EditorSession(NOTES)
        a.edit_content(1, "changed")
        assert b.entries[1].content == "finish report"


class TestEditing:
    def test_edit_content_replaces_only_content(self):
        session = EditorSession(NOTES)
        session.edit_content(1, "  new text  ")
        assert session.entries[1] == TagEntry("work", "  new text  ")
        assert session.entries[0] == TagEntry("", "hello")

    @pytest.mark.parametrize("index", [-1, 3])
    def test_edit_out_of_range_is_noop(self, index):
        session = EditorSession(NOTES)
        before = list(session.entries)
        session.edit_content(index, "x")
        assert session.entries == before

    def test_select(self):
        session = EditorSession(NOTES)
        session.select(2)
        assert session.active_entry == TagEntry("home", "buy milk")
        session.select(7)
        assert session.active_index == 2


class TestDelete:
    def test_request_does_not_mutate(self):
        session = EditorSession(NOTES)
        session.request_delete(1)
        assert session.pending_delete_index == 1
        assert len(session.entries) == 3
        assert session.pending_delete_prompt == 'Are you sure you want to delete "#work" and its content?'

    def test_untagged_prompt(self):
        session = EditorSession(NOTES)
        session.request_delete(0)
        assert session.pending_delete_prompt == "Are you sure you want to delete this note?"

    def test_request_out_of_range_is_noop(self):
        session = EditorSession(NOTES)
        session.request_delete(5)
        assert session.pending_delete_index is None
        assert session.pending_delete_prompt is None

    def test_cancel(self):
        session = EditorSession(NOTES)
        session.request_delete(1)
        session.cancel_delete()
        assert session.pending_delete_index is None
        assert len(session.entries) == 3

    def test_confirm_renumbers_active_index(self):
        session = EditorSession(NOTES, preferred_index=2)
        session.request_delete(1)
        session.confirm_delete(1)
        assert [e.tag for e in session.entries] == ["", "home"]
        assert session.active_index == 1
        assert session.pending_delete_index is None

    def test_confirm_before_active_keeps_zero(self):
        session = EditorSession(NOTES, preferred_index=0)
        session.confirm_delete(0)
        assert session.active_index == 0
        assert session.active_entry == TagEntry("work", "finish report")

    def test_confirm_after_active_leaves_index(self):
        session = EditorSession(NOTES, preferred_index=0)
        session.confirm_delete(2)
        assert session.active_index == 0

    def test_deleting_active_moves_to_previous(self):
        session = EditorSession(NOTES, preferred_index=1)
        session.confirm_delete(1)
        assert session.active_index == 0

    def test_delete_last_remaining_entry_allowed(self):
        session = EditorSession("#only")
        assert session.can_delete is False
        session.confirm_delete(0)
        assert session.entries == []
        assert session.active_entry is None
        assert session.commit() == ""

    def test_confirm_out_of_range_is_noop(self):
        session = EditorSession(NOTES, preferred_index=2)
        session.request_delete(2)
        session.confirm_delete(9)
        assert len(session.entries) == 3
        assert session.active_index == 2
        assert session.pending_delete_index is None


class TestAddTag:
    def test_add_moves_active_to_new_entry(self):
        session = EditorSession(NOTES)
        session.add_tag("errands")
        assert session.entries[-1] == TagEntry("errands", "")
        assert session.active_index == 3

    def test_leading_marker_stripped_once(self):
        session = EditorSession(NOTES)
        session.add_tag("  #errands ")
        assert session.entries[-1].tag == "errands"

    @pytest.mark.parametrize("name", ["", "   ", "\t"])
    def test_blank_name_is_noop(self, name):
        session = EditorSession(NOTES, preferred_index=1)
        session.add_tag(name)
        assert len(session.entries) == 3
        assert session.active_index == 1

    def test_draft_flow(self):
        session = EditorSession(NOTES)
        session.begin_add_tag()
        session.set_draft_tag_name("#later")
        assert session.is_drafting_tag is True
        session.add_tag()
        assert session.entries[-1].tag == "later"
        assert session.is_drafting_tag is False
        assert session.draft_tag_name == ""

    def test_cancel_draft(self):
        session = EditorSession(NOTES)
        session.begin_add_tag()
        session.set_draft_tag_name("abc")
        session.cancel_add_tag()
        assert session.is_drafting_tag is False
        assert session.draft_tag_name == ""
        assert len(session.entries) == 3

    def test_blank_draft_keeps_drafting(self):
        session = EditorSession(NOTES)
        session.begin_add_tag()
        session.set_draft_tag_name("  ")
        session.add_tag()
        assert session.is_drafting_tag is True
        assert len(session.entries) == 3


class TestCommitAndSave:
    def test_commit_composes_without_mutation(self):
        session = EditorSession(NOTES)
        session.edit_content(1, "  wrap up  ")
        first = session.commit()
        second = session.commit()
        assert first == second == "hello #work wrap up #home buy milk"
        assert session.entries[1].content == "  wrap up  "

    def test_added_empty_tag_serialized_bare(self):
        session = EditorSession("hello")
        session.add_tag("work")
        assert session.commit() == "hello #work"

    def test_save_calls_persistence_callback(self):
        saved = []
        session = EditorSession(NOTES, on_save=saved.append)
        assert session.save() == NOTES
        assert saved == [NOTES]

    def test_save_without_callback(self):
        assert EditorSession(NOTES).save() == NOTES

    def test_save_callback_failure_propagates(self):
        def boom(_):
            raise OSError("disk full")

        session = EditorSession(NOTES, on_save=boom)
        with pytest.raises(OSError, match="disk full"):
            session.save()
