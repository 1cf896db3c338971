"""Note templates inserted by ``/template``.

Each template may contain ``{date}`` (``YYYY-MM-DD``) and ``{title}``
placeholders, filled in by :func:`render_template`.
"""

from datetime import datetime

NOTE_TEMPLATES: dict[str, str] = {
    "meeting": """# Meeting Notes - {date}

## Attendees
-

## Agenda
-

## Discussion
-

## Action Items
- [ ]

## Next Steps
- """,
    "journal": """# Journal Entry - {date}

## Morning Reflection


## Goals for Today
- [ ]
- [ ]
- [ ]

## Evening Review


## Gratitude
- """,
    "project-plan": """# Project: {title}

## Overview


## Goals
- [ ]
- [ ]

## Timeline


## Resources
-

## Tasks
- [ ]
- [ ]

## Notes
- """,
    "weekly-review": """# Weekly Review - Week of {date}

## Accomplishments
-

## Challenges
-

## Learnings
-

## Goals for Next Week
- [ ]
- [ ]

## Notes
- """,
    "bug": """# Bug Report - {date}

## Description


## Steps to Reproduce
1.
2.
3.

## Expected Behavior


## Actual Behavior


## Environment
-

## Additional Notes
- """,
}

DEFAULT_TITLE = "Untitled"


def template_names() -> list[str]:
    return list(NOTE_TEMPLATES)


def render_template(name: str, now: datetime, title: str | None = None) -> str:
    """Fill a template's placeholders.

    :raises KeyError: If ``name`` is not a known template
    """
    content = NOTE_TEMPLATES[name.lower()]
    content = content.replace("{date}", now.strftime("%Y-%m-%d"))
    return content.replace("{title}", title or DEFAULT_TITLE)
