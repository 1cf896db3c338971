"""Collaborator interfaces used by the built-in commands.

Storage, notebook selection, tag indexing, search and reminder delivery live
outside the interpreter. Built-in commands receive typed references to these
collaborators at construction time instead of importing them at call time.
Every operation may be implemented as a plain or async method.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol, Union, runtime_checkable


@dataclass
class Note:
    """A persisted note as returned by search collaborators."""

    id: str
    notebook_id: str | None
    content: str
    created_at: datetime
    tags: list[str] = field(default_factory=list)


@dataclass
class Notebook:
    id: str
    name: str


@dataclass
class Reminder:
    id: str
    message: str
    due_at: int  # epoch milliseconds
    notebook_id: str | None = None
    completed: bool = False


@runtime_checkable
class NoteStore(Protocol):
    def create_note(
        self, path: str | None, notebook_id: str | None, content: str
    ) -> Union[Note, Awaitable[Note]]: ...


@runtime_checkable
class NotebookStore(Protocol):
    def list_notebooks(self) -> Union[list[Notebook], Awaitable[list[Notebook]]]: ...

    def set_active_notebook(self, notebook_id: str) -> Union[None, Awaitable[None]]: ...


@runtime_checkable
class TagStore(Protocol):
    def list_all_tags(self) -> Union[list[str], Awaitable[list[str]]]: ...


@runtime_checkable
class SearchService(Protocol):
    def search_notes(
        self, path: str | None, query: str
    ) -> Union[list[Note], Awaitable[list[Note]]]: ...

    def search_by_tag(
        self, path: str | None, tag: str
    ) -> Union[list[Note], Awaitable[list[Note]]]: ...


@runtime_checkable
class ReminderService(Protocol):
    def create_reminder(
        self, message: str, due_at: int, notebook_id: str | None
    ) -> Union[Reminder, Awaitable[Reminder]]: ...


def local_now() -> datetime:
    """Current wall-clock time in the system timezone, as an aware datetime."""
    return datetime.now().astimezone()


@dataclass
class CommandServices:
    """Collaborators injected into the built-in command set.

    ``clock`` returns the current local time as an aware datetime; wall-clock
    reminder times and non-ISO timestamps are read in its timezone. Tests pass a
    fixed clock to make timestamp and reminder output deterministic.
    """

    notes: NoteStore
    notebooks: NotebookStore
    tags: TagStore
    search: SearchService
    reminders: ReminderService
    clock: Callable[[], datetime] = local_now

    @classmethod
    def from_backend(cls, backend: Any, clock: Callable[[], datetime] = local_now) -> "CommandServices":
        """Use one object implementing every collaborator protocol."""
        return cls(
            notes=backend,
            notebooks=backend,
            tags=backend,
            search=backend,
            reminders=backend,
            clock=clock,
        )
