"""Quote-aware tokenizer for slash command input.

Turns ``/tag "work stuff" urgent`` into ``Invocation("tag", ["work stuff", "urgent"])``.
Double and single quotes group whitespace into a single argument; the quote
characters themselves are dropped. An unterminated quote swallows the rest of
the line as one literal token rather than raising.
"""

import re

from .types import Invocation

COMMAND_MARKER = "/"
QUOTE_CHARS = ('"', "'")

_WHITESPACE = re.compile(r"\s+")


def tokenize(raw: str, marker: str = COMMAND_MARKER) -> Invocation:
    """Split a raw input string into a command name and argument list.

    The name keeps its original case; callers lower-case it for lookup.

    Examples:
        >>> tokenize('/tag "work stuff" urgent')
        Invocation(name='tag', args=['work stuff', 'urgent'])
        >>> tokenize("/")
        Invocation(name='', args=[])
    """
    text = raw.strip()
    if text.startswith(marker):
        text = text[len(marker) :]

    tokens: list[str] = []
    current: list[str] = []
    quote_char: str | None = None

    for char in text:
        if quote_char is None and char in QUOTE_CHARS:
            quote_char = char
        elif quote_char is not None and char == quote_char:
            quote_char = None
        elif quote_char is None and char.isspace():
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(char)

    if current:
        tokens.append("".join(current))

    if not tokens:
        return Invocation(name="", args=[])
    return Invocation(name=tokens[0], args=tokens[1:])


def is_command_input(text: str, marker: str = COMMAND_MARKER) -> bool:
    """Whether ``text`` should be treated as a command rather than note content.

    A doubled marker (``//like this``) escapes command mode so notes can start
    with the marker character.
    """
    stripped = text.lstrip()
    return stripped.startswith(marker) and not stripped.startswith(marker * 2)


def split_partial(text: str, marker: str = COMMAND_MARKER) -> list[str] | None:
    """Split command input that is still being typed.

    Unlike :func:`tokenize`, quotes are not interpreted and whitespace at the
    edges is kept as an empty token, so callers can tell whether the last
    token is still being typed. Returns None for non-command input.

    Examples:
        >>> split_partial("/tag wo")
        ['tag', 'wo']
        >>> split_partial("/tag work ")
        ['tag', 'work', '']
        >>> split_partial("/")
        ['']
    """
    if not is_command_input(text, marker):
        return None
    body = text.lstrip()[len(marker) :]
    return _WHITESPACE.split(body)
