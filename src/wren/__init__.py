"""Wren note composer.

Slash-command interpreter for the note composition input:
- Quote-aware tokenizer and command registry
- Validate/execute contract with structured results
- Bounded command history
- Keystroke-reactive autocomplete engine
"""

# Version information
__version__ = "0.4.0"

__all__ = ["__version__"]
