"""Tests for the in-memory vault."""

from datetime import datetime

import pytest
from conftest import FIXED_NOW

from wren.services import (
    CommandServices,
    InMemoryVault,
    NotebookStore,
    NoteStore,
    ReminderService,
    SearchService,
    TagStore,
)
from wren.services.memory import extract_tags
from wren.services.protocols import local_now


class TestExtractTags:
    def test_lower_cased_in_order_without_duplicates(self):
        assert extract_tags("#Work and #home, again #work") == ["work", "home"]

    def test_ignores_embedded_hashes(self):
        assert extract_tags("issue#12 and ##double and #real-tag") == ["real-tag"]


class TestInMemoryVault:
    def test_implements_every_protocol(self, vault):
        for protocol in (NoteStore, NotebookStore, TagStore, SearchService, ReminderService):
            assert isinstance(vault, protocol)

    def test_create_note(self, vault):
        note = vault.create_note("/vault", "Work", "Plan #garden")

        assert note.id == "note-1"
        assert note.notebook_id == "Work"
        assert note.created_at == FIXED_NOW
        assert note.tags == ["garden"]
        assert vault.notes == [note]

    def test_ids_are_unique_across_kinds(self, vault):
        note = vault.create_note(None, None, "x")
        reminder = vault.create_reminder("y", 0, None)
        assert note.id != reminder.id

    def test_notebooks(self, vault):
        assert [nb.name for nb in vault.list_notebooks()] == ["Inbox", "Work", "Personal"]

        vault.set_active_notebook("Work")
        assert vault.active_notebook == "Work"

    def test_unknown_notebook(self, vault):
        with pytest.raises(KeyError):
            vault.set_active_notebook("Nope")

    def test_list_all_tags(self, vault):
        vault.create_note(None, None, "#b #a")
        vault.create_note(None, None, "#a #c")
        assert vault.list_all_tags() == ["#a", "#b", "#c"]

    def test_search(self, vault):
        match = vault.create_note(None, None, "Call the Plumber")
        vault.create_note(None, None, "unrelated")

        assert vault.search_notes(None, "plumber") == [match]

    def test_search_by_tag_accepts_hash(self, vault):
        match = vault.create_note(None, None, "fix #Bug")
        assert vault.search_by_tag(None, "#bug") == [match]
        assert vault.search_by_tag(None, "BUG") == [match]

    def test_create_reminder(self, vault):
        reminder = vault.create_reminder("stretch", 1714574400000, "Inbox")

        assert reminder.due_at == 1714574400000
        assert not reminder.completed
        assert vault.reminders == [reminder]


def test_services_from_backend(vault, clock):
    services = CommandServices.from_backend(vault, clock=clock)

    assert services.notes is vault and services.reminders is vault
    assert services.clock() == FIXED_NOW


def test_default_clock_is_local_and_aware(vault):
    services = CommandServices.from_backend(vault)
    now = services.clock()

    assert services.clock is local_now
    assert now.tzinfo is not None
    assert now.utcoffset() == datetime.now().astimezone().utcoffset()
