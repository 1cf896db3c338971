"""Collaborator interfaces for the built-in commands and an in-memory backend."""

from .memory import InMemoryVault, extract_tags
from .protocols import (
    CommandServices,
    Note,
    Notebook,
    NotebookStore,
    NoteStore,
    Reminder,
    ReminderService,
    SearchService,
    TagStore,
)

__all__ = [
    "CommandServices",
    "InMemoryVault",
    "Note",
    "Notebook",
    "NoteStore",
    "NotebookStore",
    "Reminder",
    "ReminderService",
    "SearchService",
    "TagStore",
    "extract_tags",
]
