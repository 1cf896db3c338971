"""In-memory vault implementing every collaborator protocol.

Backs the interactive composer when no real storage is attached, and gives
tests a deterministic stand-in for the note store.
"""

import itertools
import re
from collections.abc import Callable
from datetime import datetime

from wren.utils.logger import get_logger

from .protocols import Note, Notebook, Reminder, local_now

logger = get_logger("composer")

_HASHTAG = re.compile(r"(?<![\w#])#([\w-]+)")


def extract_tags(content: str) -> list[str]:
    """Hashtags in ``content``, lower-cased, in first-seen order."""
    seen: dict[str, None] = {}
    for match in _HASHTAG.finditer(content):
        seen.setdefault(match.group(1).lower(), None)
    return list(seen)


class InMemoryVault:
    """Notes, notebooks, tags and reminders held in process memory."""

    def __init__(
        self,
        notebooks: list[str] | None = None,
        clock: Callable[[], datetime] = local_now,
    ):
        self._clock = clock
        self._ids = itertools.count(1)
        self.notebooks: list[Notebook] = []
        self.notes: list[Note] = []
        self.reminders: list[Reminder] = []
        self.active_notebook: str | None = None

        for name in notebooks or []:
            self.add_notebook(name)

    def _next_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._ids)}"

    def add_notebook(self, name: str) -> Notebook:
        notebook = Notebook(id=name, name=name)
        self.notebooks.append(notebook)
        return notebook

    # NoteStore
    def create_note(self, path: str | None, notebook_id: str | None, content: str) -> Note:
        note = Note(
            id=self._next_id("note"),
            notebook_id=notebook_id,
            content=content,
            created_at=self._clock(),
            tags=extract_tags(content),
        )
        self.notes.append(note)
        logger.debug(f"Created {note.id} in {notebook_id or 'no notebook'}")
        return note

    # NotebookStore
    def list_notebooks(self) -> list[Notebook]:
        return list(self.notebooks)

    def set_active_notebook(self, notebook_id: str) -> None:
        if not any(nb.id == notebook_id for nb in self.notebooks):
            raise KeyError(f"No notebook with id {notebook_id!r}")
        self.active_notebook = notebook_id

    # TagStore
    def list_all_tags(self) -> list[str]:
        tags: dict[str, None] = {}
        for note in self.notes:
            for tag in note.tags:
                tags.setdefault(f"#{tag}", None)
        return sorted(tags)

    # SearchService
    def search_notes(self, path: str | None, query: str) -> list[Note]:
        needle = query.lower()
        return [note for note in self.notes if needle in note.content.lower()]

    def search_by_tag(self, path: str | None, tag: str) -> list[Note]:
        wanted = tag.lstrip("#").lower()
        return [note for note in self.notes if wanted in note.tags]

    # ReminderService
    def create_reminder(self, message: str, due_at: int, notebook_id: str | None) -> Reminder:
        reminder = Reminder(
            id=self._next_id("reminder"), message=message, due_at=due_at, notebook_id=notebook_id
        )
        self.reminders.append(reminder)
        return reminder
