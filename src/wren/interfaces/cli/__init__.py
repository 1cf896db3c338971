"""Terminal interface for the Wren note composer.

This module provides the interactive composer loop used by ``wren compose``.
"""

from .composer import NoteComposer, create_composer, create_composer_from_config, run_composer

__all__ = ["NoteComposer", "create_composer", "create_composer_from_config", "run_composer"]
